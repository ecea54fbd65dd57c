"""Persistence of cropped face images."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional, Set

import cv2
import numpy as np

FILE_PREFIX = "face_"
FILE_SUFFIX = ".jpg"


class FaceArchive:
    """Writes face crops as JPEG files named after the capture second.

    Names are checked against the disk and against the names this archive has
    already handed out, so repeated calls within one second never collide
    inside a single run. There is no atomic create, so two processes sharing
    the directory can still race.
    """

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)
        self._issued: Set[Path] = set()

    def _taken(self, path: Path) -> bool:
        return path in self._issued or path.exists()

    def unique_path(self) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        stamp = int(time.time())
        path = self.output_dir / f"{FILE_PREFIX}{stamp}{FILE_SUFFIX}"
        count = 1
        while self._taken(path):
            path = self.output_dir / f"{FILE_PREFIX}{stamp}_{count}{FILE_SUFFIX}"
            count += 1
        self._issued.add(path)
        return path

    def save(self, image: np.ndarray) -> Optional[Path]:
        """Write ``image`` under a fresh name; None when encoding fails."""
        path = self.unique_path()
        if cv2.imwrite(str(path), image):
            logging.info("Saved face crop to %s", path)
            return path
        logging.warning("Face crop save failed: %s", path)
        return None
