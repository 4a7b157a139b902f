"""
Touch listener that records single-finger strokes and recognizes them on lift.
"""

import logging
import threading
from typing import Callable, Dict, List, Optional

from evdev import ecodes

from ..config.settings import RecognizerConfig
from ..device.device_manager import DeviceManager
from ..gestures.point_cloud_recognizer import Result
from ..gestures.recognizer import GestureRecognizer
from ..utils.gesture_utils import InvalidGestureError
from ..utils.logger import GestureLogger
from .recorder import StrokeRecorder

logger = logging.getLogger(__name__)

ResultCallback = Callable[[List[Result], Optional[Result]], None]


class TouchListener:
    """
    Feeds touch events into a StrokeRecorder and hands completed strokes to a recognizer.

    Only the first finger down is tracked. While training_label is set, completed
    strokes are stored as training examples instead of being recognized.
    """

    def __init__(self, recognizer: GestureRecognizer,
                 on_result: Optional[ResultCallback] = None,
                 device_manager: Optional[DeviceManager] = None,
                 gesture_logger: Optional[GestureLogger] = None,
                 window_ms: Optional[float] = RecognizerConfig.CAPTURE_WINDOW_MS):
        self.recognizer = recognizer
        self.on_result = on_result
        self.device_manager = device_manager or DeviceManager()
        self.logger = gesture_logger or GestureLogger()
        self.recorder = StrokeRecorder(window_ms)
        self.training_label: Optional[str] = None

        self.running = False
        self.thread = None

        self.current_slot = 0
        self.active_slot: Optional[int] = None
        self.slot_positions: Dict[int, List[int]] = {}
        self.position_dirty = False

    def start(self) -> bool:
        """Start the listener thread. Returns False if no device is available."""
        device = self.device_manager.find_device()
        if not device:
            print("❌ No touch device found")
            return False

        print(f"✅ Found: {device.name}")
        print(f"📺 Surface: {self.device_manager.width}x{self.device_manager.height}")
        print(f"🧠 Training gestures: {len(self.recognizer.training_set)} "
              f"({', '.join(self.recognizer.training_set.labels()) or 'none'})")

        self.running = True
        self.thread = threading.Thread(target=self._event_loop)
        self.thread.daemon = True
        self.thread.start()
        return True

    def stop(self):
        """Stop the listener."""
        self.running = False
        if self.thread:
            self.thread.join(timeout=1)
        self.device_manager.close()
        self.logger.close()

    def _event_loop(self):
        """Main event processing loop."""
        try:
            batch = []
            for event in self.device_manager.device.read_loop():
                if not self.running:
                    break
                batch.append(event)
                if event.type == ecodes.EV_SYN and event.code == ecodes.SYN_REPORT:
                    self.process_event_batch(batch)
                    batch = []
        except OSError as e:
            logger.error(f"Error in event loop: {e}")
            self.running = False

    def process_event_batch(self, batch):
        """Apply one SYN_REPORT-terminated batch of events."""
        for ev in batch:
            if ev.type == ecodes.EV_ABS:
                self._handle_abs_event(ev)
            elif ev.type == ecodes.EV_KEY and ev.code == ecodes.BTN_TOUCH and not self.device_manager.multitouch:
                if ev.value:
                    self._begin_stroke(0)
                else:
                    self._end_stroke()

        if self.position_dirty and self.recorder.recording:
            self.recorder.add_sample(*self.slot_positions[self.active_slot])
        self.position_dirty = False

    def _handle_abs_event(self, ev):
        if ev.code == ecodes.ABS_MT_SLOT:
            self.current_slot = ev.value
        elif ev.code == ecodes.ABS_MT_TRACKING_ID:
            if ev.value == -1:
                if self.current_slot == self.active_slot:
                    self._end_stroke()
            elif self.active_slot is None:
                self._begin_stroke(self.current_slot)
        elif ev.code in (ecodes.ABS_MT_POSITION_X, ecodes.ABS_X):
            self._update_position(0, ev)
        elif ev.code in (ecodes.ABS_MT_POSITION_Y, ecodes.ABS_Y):
            self._update_position(1, ev)

    def _update_position(self, axis: int, ev):
        multitouch_code = ev.code in (ecodes.ABS_MT_POSITION_X, ecodes.ABS_MT_POSITION_Y)
        if multitouch_code != self.device_manager.multitouch:
            return
        # kernel resends an MT axis only when it changes, so positions are per slot
        slot = self.current_slot if multitouch_code else 0
        self.slot_positions.setdefault(slot, [0, 0])[axis] = ev.value
        if slot == self.active_slot:
            self.position_dirty = True

    def _begin_stroke(self, slot: int):
        self.active_slot = slot
        self.recorder.start()
        self.position_dirty = slot in self.slot_positions

    def _end_stroke(self):
        self.active_slot = None
        points = self.recorder.stop()
        self.position_dirty = False
        self.handle_stroke(points)

    def handle_stroke(self, points):
        """Recognize a completed stroke, or store it while training."""
        try:
            if self.training_label:
                count = self.recognizer.add_training(self.training_label, points)
                self.logger.log_training_added(self.training_label, count)
                return

            gesture = self.recognizer.prepare(points)
            self.logger.log_stroke(len(points), len(gesture))
            results = self.recognizer.classifier.classify(gesture, self.recognizer.training_set.snapshot())
        except InvalidGestureError as e:
            self.logger.log_rejected(str(e))
            return

        accepted = None
        if results and results[0].score < self.recognizer.threshold.get_threshold():
            accepted = results[0]
        self.logger.log_results(results, accepted)

        if self.on_result:
            self.on_result(results, accepted)
