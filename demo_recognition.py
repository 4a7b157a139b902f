#!/usr/bin/env python3
"""Stroke Recognition Demo with Visual Feedback.

Draw with the left mouse button to recognize a stroke, or with the right
button to store it as a training example under the label typed at the
bottom of the window. The training set is loaded from and saved back to
the configured gestures file.
"""

import logging
from typing import List, Optional, Tuple

import pygame

from stroke_recognizer.config.settings import RecognizerConfig
from stroke_recognizer.core.recorder import StrokeRecorder
from stroke_recognizer.gestures.point_cloud_recognizer import Result
from stroke_recognizer.gestures.recognizer import GestureRecognizer
from stroke_recognizer.storage.gesture_store import load_training_set, save_training_set
from stroke_recognizer.utils.gesture_utils import InvalidGestureError

# Capture windows cycled with F2, in milliseconds (None keeps the whole stroke)
CAPTURE_WINDOWS = [None, 500, 1000, 2000]


class RecognitionDemo:
    """Interactive demo for stroke recognition and training."""

    def __init__(self) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((1200, 800))
        pygame.display.set_caption("Stroke Recognition Demo")

        self.recognizer = GestureRecognizer(load_training_set(RecognizerConfig.GESTURES_FILE))
        self.recorder = StrokeRecorder(RecognizerConfig.CAPTURE_WINDOW_MS)
        self.button: Optional[int] = None
        self.label = ""
        self.live = False
        self.results: List[Result] = []
        self.message: Optional[str] = None

        # Colors
        self.BLACK = (0, 0, 0)
        self.WHITE = (255, 255, 255)
        self.RED = (255, 0, 0)
        self.GREEN = (0, 160, 0)
        self.BLUE = (0, 0, 255)
        self.GRAY = (128, 128, 128)

        # Fonts
        self.font = pygame.font.Font(None, 40)
        self.small_font = pygame.font.Font(None, 28)

    def run(self) -> None:
        """Run the demo loop."""
        clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button in (1, 3):
                    self.start_stroke(event.button, event.pos)
                elif event.type == pygame.MOUSEMOTION and self.recorder.recording:
                    self.add_point(event.pos)
                elif event.type == pygame.MOUSEBUTTONUP and event.button == self.button:
                    self.finish_stroke()
                elif event.type == pygame.KEYDOWN:
                    self.handle_key(event)

            self.draw()
            clock.tick(60)

    def handle_key(self, event) -> None:
        threshold = self.recognizer.threshold
        if event.key == pygame.K_UP:
            threshold.set_threshold(threshold.get_threshold() + 0.01)
        elif event.key == pygame.K_DOWN:
            threshold.set_threshold(threshold.get_threshold() - 0.01)
        elif event.key == pygame.K_F1:
            self.live = not self.live
        elif event.key == pygame.K_F2:
            index = CAPTURE_WINDOWS.index(self.recorder.window_ms) if self.recorder.window_ms in CAPTURE_WINDOWS else 0
            self.recorder.window_ms = CAPTURE_WINDOWS[(index + 1) % len(CAPTURE_WINDOWS)]
        elif event.key == pygame.K_ESCAPE:
            self.results = []
            self.message = None
        elif event.key == pygame.K_BACKSPACE:
            self.label = self.label[:-1]
        elif event.unicode and event.unicode.isprintable():
            self.label += event.unicode

    def start_stroke(self, button: int, pos: Tuple[int, int]) -> None:
        self.button = button
        self.recorder.start()
        self.add_point(pos)

    def add_point(self, pos: Tuple[int, int]) -> None:
        x, y = pos
        self.recorder.add_sample(float(x), float(y), pygame.time.get_ticks() / 1000.0)
        if self.live and self.button == 1:
            self.recognize(self.recorder.snapshot())

    def finish_stroke(self) -> None:
        points = self.recorder.stop()
        if self.button == 1:
            self.recognize(points)
        elif self.button == 3:
            self.train(points)
        self.button = None

    def recognize(self, points) -> None:
        try:
            self.results = self.recognizer.recognize(points)
            self.message = None if self.results else "No training gestures yet"
        except InvalidGestureError:
            # nothing drawn yet
            self.results = []

    def train(self, points) -> None:
        if not self.label.strip():
            self.message = "Type a label before training"
            return
        try:
            count = self.recognizer.add_training(self.label.strip(), points)
            self.message = f"Stored '{self.label.strip()}' ({count} example(s))"
        except InvalidGestureError as e:
            self.message = str(e)

    def draw(self) -> None:
        """Render the UI and current stroke."""
        self.screen.fill(self.WHITE)

        threshold = self.recognizer.threshold.get_threshold()
        window = self.recorder.window_ms
        instructions = [
            "Left drag: recognize   Right drag: train under label",
            "UP/DOWN: threshold   F1: live recognition   F2: capture window   ESC: clear",
            f"Threshold: {threshold:.2f}   Live: {'on' if self.live else 'off'}   "
            f"Window: {'whole stroke' if window is None else f'{window} ms'}",
            f"Training gestures: {len(self.recognizer.training_set)}",
        ]
        y = 10
        for line in instructions:
            self.screen.blit(self.small_font.render(line, True, self.BLACK), (10, y))
            y += 28

        raw = self.recorder.snapshot()
        if len(raw) > 1:
            pts = [(p.x, p.y) for p in self.recognizer.smoother.smooth(raw)]
            if len(pts) > 1:
                pygame.draw.lines(self.screen, self.BLACK, False, pts, 3)

        y = 150
        for rank, result in enumerate(self.results[:5]):
            color = self.GREEN if rank == 0 and result.score < threshold else self.GRAY
            text = f"{result.name}: {result.score:.4f}"
            self.screen.blit(self.font.render(text, True, color), (850, y))
            y += 40

        if self.message:
            self.screen.blit(self.small_font.render(self.message, True, self.RED), (10, 730))

        self.screen.blit(self.font.render(f"Label: {self.label}", True, self.BLUE), (10, 760))
        pygame.display.flip()

    def save(self) -> None:
        save_training_set(RecognizerConfig.GESTURES_FILE, self.recognizer.training_set)


def main() -> None:
    """Entry point for the demo."""
    logging.basicConfig(level=logging.INFO)
    demo = RecognitionDemo()
    try:
        demo.run()
    except KeyboardInterrupt:
        pass
    finally:
        demo.save()
        pygame.quit()


if __name__ == "__main__":
    main()
