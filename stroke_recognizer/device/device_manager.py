"""
Input device discovery for stroke capture.
"""

import logging
from typing import Optional

import evdev
from evdev import ecodes

logger = logging.getLogger(__name__)


class DeviceManager:
    """Finds a touch device that reports absolute pointer positions."""

    def __init__(self, device_path: Optional[str] = None):
        self.device_path = device_path
        self.device = None
        self.multitouch = False
        self.width = 1920
        self.height = 1080

    def find_device(self):
        """Open the configured device, or the first touch-capable one found."""
        paths = [self.device_path] if self.device_path else evdev.list_devices()

        for path in paths:
            device = evdev.InputDevice(path)
            abs_info = dict(device.capabilities().get(ecodes.EV_ABS, []))

            if ecodes.ABS_MT_POSITION_X in abs_info and ecodes.ABS_MT_POSITION_Y in abs_info:
                self.multitouch = True
                x_code, y_code = ecodes.ABS_MT_POSITION_X, ecodes.ABS_MT_POSITION_Y
            elif ecodes.ABS_X in abs_info and ecodes.ABS_Y in abs_info:
                self.multitouch = False
                x_code, y_code = ecodes.ABS_X, ecodes.ABS_Y
            else:
                device.close()
                continue

            self.width = abs_info[x_code].max + 1
            self.height = abs_info[y_code].max + 1
            self.device = device
            logger.info(f"Found touch device: {device.name} ({'multitouch' if self.multitouch else 'single touch'})")
            logger.info(f"Surface resolution: {self.width}x{self.height}")
            return device

        logger.error("No touch device found")
        return None

    def close(self):
        if self.device:
            self.device.close()
            self.device = None
