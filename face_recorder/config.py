"""Session configuration for the face recorder."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import cv2

# Calibration defaults (change based on your camera)
FOCAL_LENGTH = 800.0
REAL_FACE_WIDTH_CM = 14.0  # average width of a human face
SPEED_UP_FACTOR = 2

OUTPUT_DIR = Path("faces")
VIDEO_PATH = OUTPUT_DIR / "output_video.avi"
CASCADE_FILE = "haarcascade_frontalface_default.xml"
CODEC = "MJPG"
FPS = 30.0
FRAME_SIZE = (640, 480)
WINDOW_NAME = "Face Detection"
KEY_WAIT_MS = 20
QUIT_KEY = "q"


def default_cascade_path() -> Path:
    return Path(cv2.data.haarcascades) / CASCADE_FILE


@dataclass(frozen=True)
class SessionConfig:
    """Calibration, sampling and output settings for one recording session."""

    focal_length: float = FOCAL_LENGTH
    real_face_width_cm: float = REAL_FACE_WIDTH_CM
    speed_up_factor: int = SPEED_UP_FACTOR
    output_dir: Path = OUTPUT_DIR
    video_path: Path = VIDEO_PATH
    cascade_path: Optional[Path] = None
    camera_index: int = 0
    codec: str = CODEC
    fps: float = FPS
    frame_size: tuple[int, int] = FRAME_SIZE
    window_name: str = WINDOW_NAME
    key_wait_ms: int = KEY_WAIT_MS
    quit_key: str = QUIT_KEY

    def __post_init__(self) -> None:
        if self.focal_length <= 0:
            raise ValueError(f"focal_length must be positive, got {self.focal_length}")
        if self.real_face_width_cm <= 0:
            raise ValueError(f"real_face_width_cm must be positive, got {self.real_face_width_cm}")
        if int(self.speed_up_factor) != self.speed_up_factor or self.speed_up_factor < 1:
            raise ValueError(f"speed_up_factor must be an integer >= 1, got {self.speed_up_factor}")
        if len(self.codec) != 4:
            raise ValueError(f"codec must be a four character code, got {self.codec!r}")
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        width, height = self.frame_size
        if width <= 0 or height <= 0:
            raise ValueError(f"frame_size must be positive, got {self.frame_size}")
        if len(self.quit_key) != 1:
            raise ValueError(f"quit_key must be a single character, got {self.quit_key!r}")

    @property
    def skip_count(self) -> int:
        """Frames dropped between two fully processed frames."""
        return int(self.speed_up_factor) - 1

    @property
    def resolved_cascade_path(self) -> Path:
        return self.cascade_path or default_cascade_path()
