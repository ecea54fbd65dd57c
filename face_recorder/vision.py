"""
Haar-cascade face detection, pinhole distance estimation and the frame
annotations drawn on top of each processed frame.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

import cv2
import numpy as np

from .errors import ModelLoadFailed

SCALE_FACTOR = 1.1
MIN_NEIGHBORS = 3
MIN_FACE_SIZE = (30, 30)

BOX_COLOR = (50, 50, 255)
BOX_THICKNESS = 3
TEXT_COLOR = (255, 255, 255)
FONT = cv2.FONT_HERSHEY_DUPLEX
SUMMARY_ORIGIN = (10, 40)


@dataclass(frozen=True)
class FaceBox:
    x: int
    y: int
    w: int
    h: int

    @property
    def top_left(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def bottom_right(self) -> Tuple[int, int]:
        return (self.x + self.w, self.y + self.h)

    def crop(self, frame: np.ndarray) -> np.ndarray:
        return frame[self.y:self.y + self.h, self.x:self.x + self.w]


class FaceDetector:
    """Haar-cascade face detector with fixed scan parameters."""

    def __init__(self, cascade_path: Path):
        self.cascade_path = Path(cascade_path)
        if not self.cascade_path.is_file():
            raise ModelLoadFailed(f"Could not load face cascade from {self.cascade_path}")
        self.cascade = cv2.CascadeClassifier()
        try:
            loaded = self.cascade.load(str(self.cascade_path))
        except (cv2.error, SystemError) as exc:
            raise ModelLoadFailed(f"Could not load face cascade from {self.cascade_path}: {exc}") from exc
        if not loaded or self.cascade.empty():
            raise ModelLoadFailed(f"Could not load face cascade from {self.cascade_path}")

    def detect(self, gray: np.ndarray) -> List[FaceBox]:
        faces = self.cascade.detectMultiScale(
            gray,
            scaleFactor=SCALE_FACTOR,
            minNeighbors=MIN_NEIGHBORS,
            minSize=MIN_FACE_SIZE,
        )
        return [FaceBox(int(x), int(y), int(w), int(h)) for (x, y, w, h) in faces]


def estimate_distance(pixel_width: float, real_width: float, focal_length: float) -> float:
    """Distance = (real face width * focal length) / face width in pixels."""
    return (real_width * focal_length) / pixel_width


def summary_text(count: int) -> str:
    return f"{count} face{'' if count == 1 else 's'} found"


def face_label(index: int, distance_cm: float) -> str:
    return f"Face {index + 1} Dist: {distance_cm:.2f} cm"


def draw_face_box(frame: np.ndarray, face: FaceBox) -> None:
    cv2.rectangle(frame, face.top_left, face.bottom_right, BOX_COLOR, BOX_THICKNESS)


def draw_text(frame: np.ndarray, text: str, origin: Tuple[int, int]) -> None:
    cv2.putText(
        frame,
        text,
        origin,
        fontFace=FONT,
        fontScale=1,
        color=TEXT_COLOR,
        thickness=1,
    )
