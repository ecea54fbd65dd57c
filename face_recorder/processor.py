"""Per-frame face detection, distance labeling, crop saving and recording."""

from __future__ import annotations

import logging
from typing import List, Optional

import cv2
import numpy as np

from .capture import CameraSource, FrameSink, FrameSource, VideoSink
from .config import SessionConfig
from .storage import FaceArchive
from .vision import (
    SUMMARY_ORIGIN,
    FaceBox,
    FaceDetector,
    draw_face_box,
    draw_text,
    estimate_distance,
    face_label,
    summary_text,
)


class FrameProcessor:
    """Owns the camera, detector and writer for one recording session.

    Collaborators that are not passed in are built from ``config``. The
    detector is loaded before any device is opened, and anything already
    opened is released again if a later step fails.
    """

    def __init__(
        self,
        config: SessionConfig,
        source: Optional[FrameSource] = None,
        detector: Optional[FaceDetector] = None,
        sink: Optional[FrameSink] = None,
        archive: Optional[FaceArchive] = None,
    ):
        self.config = config
        self.detector = detector or FaceDetector(config.resolved_cascade_path)
        self.source = source or CameraSource(config.camera_index)
        try:
            self.sink = sink or VideoSink(config.video_path, config.codec, config.fps, config.frame_size)
        except Exception:
            self.source.release()
            raise
        self.archive = archive or FaceArchive(config.output_dir)

        self._frame: Optional[np.ndarray] = None
        self._faces: List[FaceBox] = []
        self._saved: List[bool] = []
        self.frame_counter = 0
        self.frames_captured = 0
        self.frames_processed = 0
        self.faces_saved = 0
        self._closed = False

    def __enter__(self) -> "FrameProcessor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def frame(self) -> Optional[np.ndarray]:
        return self._frame

    @property
    def faces(self) -> List[FaceBox]:
        return list(self._faces)

    @property
    def saved_flags(self) -> List[bool]:
        return list(self._saved)

    def distance_to(self, pixel_width: float) -> float:
        return estimate_distance(pixel_width, self.config.real_face_width_cm, self.config.focal_length)

    def process_frame(self) -> bool:
        """Capture one frame; return True if it was annotated and recorded."""
        self._frame = self.source.read()
        self.frames_captured += 1

        self.frame_counter += 1
        if self.frame_counter % (self.config.skip_count + 1) != 0:
            logging.debug("Dropped frame %s", self.frames_captured)
            return False
        self.frame_counter = 0

        gray = cv2.cvtColor(self._frame, cv2.COLOR_BGR2GRAY)
        self._faces = self.detector.detect(gray)
        logging.debug("Frame %s: %s face(s)", self.frames_captured, len(self._faces))

        # Any change in count resets every slot, even for faces that stayed.
        if len(self._saved) != len(self._faces):
            self._saved = [False] * len(self._faces)

        self._annotate()
        self.sink.write(self._frame)
        self.frames_processed += 1
        return True

    def _annotate(self) -> None:
        frame = self._frame
        for index, face in enumerate(self._faces):
            draw_face_box(frame, face)
            if not self._saved[index]:
                if self.archive.save(face.crop(frame)) is not None:
                    self._saved[index] = True
                    self.faces_saved += 1
            draw_text(frame, face_label(index, self.distance_to(face.w)), face.top_left)
        draw_text(frame, summary_text(len(self._faces)), SUMMARY_ORIGIN)

    def display_frame(self, window_name: Optional[str] = None) -> None:
        if self._frame is None:
            return
        cv2.imshow(window_name or self.config.window_name, self._frame)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self.source.release()
        finally:
            try:
                self.sink.release()
            finally:
                self._destroy_windows()
                logging.info(
                    "Session closed: %s frames captured, %s processed, %s face crops saved",
                    self.frames_captured,
                    self.frames_processed,
                    self.faces_saved,
                )

    @staticmethod
    def _destroy_windows() -> None:
        try:
            cv2.destroyAllWindows()
        except cv2.error as exc:
            # headless OpenCV builds have no window support
            logging.debug("Window teardown skipped: %s", exc)
