"""Video source and sink wrappers around OpenCV capture and writer handles."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol

import cv2
import numpy as np

from .errors import CaptureFailed, SinkUnavailable, SourceUnavailable


class FrameSource(Protocol):
    def read(self) -> np.ndarray:
        ...

    def release(self) -> None:
        ...


class FrameSink(Protocol):
    def write(self, frame: np.ndarray) -> None:
        ...

    def release(self) -> None:
        ...


class CameraSource:
    """Camera opened by device index; every read must yield a frame."""

    def __init__(self, index: int = 0):
        self.index = index
        self.capture: Optional[cv2.VideoCapture] = cv2.VideoCapture(index)
        if not self.capture.isOpened():
            self.capture.release()
            self.capture = None
            raise SourceUnavailable(f"Could not open camera {index}")
        logging.info("Opened camera %s", index)

    def read(self) -> np.ndarray:
        if self.capture is None:
            raise CaptureFailed(f"Camera {self.index} is released")
        ok, frame = self.capture.read()
        if not ok or frame is None or frame.size == 0:
            raise CaptureFailed(f"Could not read a frame from camera {self.index}")
        return frame

    def release(self) -> None:
        if self.capture is None:
            return
        self.capture.release()
        self.capture = None
        logging.info("Released camera %s", self.index)


class VideoSink:
    """Fixed-size color video file encoder."""

    def __init__(self, path: Path, codec: str, fps: float, frame_size: tuple[int, int]):
        self.path = Path(path)
        self.frame_size = frame_size
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.writer: Optional[cv2.VideoWriter] = cv2.VideoWriter(
            str(self.path),
            cv2.VideoWriter_fourcc(*codec),
            fps,
            frame_size,
            True,
        )
        if not self.writer.isOpened():
            self.writer.release()
            self.writer = None
            raise SinkUnavailable(f"Could not open video writer for {self.path}")
        logging.info("Writing %s video to %s (%sx%s @ %s fps)", codec, self.path, *frame_size, fps)

    def write(self, frame: np.ndarray) -> None:
        if self.writer is None:
            return
        height, width = frame.shape[:2]
        if (width, height) != self.frame_size:
            frame = cv2.resize(frame, self.frame_size)
        self.writer.write(frame)

    def release(self) -> None:
        if self.writer is None:
            return
        self.writer.release()
        self.writer = None
        logging.info("Closed video file %s", self.path)
