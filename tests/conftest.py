from __future__ import annotations

from typing import Iterable, List

import numpy as np
import pytest

from face_recorder.config import SessionConfig
from face_recorder.storage import FaceArchive
from face_recorder.vision import FaceBox


def blank_frame(width: int = 640, height: int = 480) -> np.ndarray:
    return np.full((height, width, 3), 80, dtype=np.uint8)


class FakeSource:
    def __init__(self, frames: Iterable[np.ndarray] = ()):
        self.frames = list(frames)
        self.reads = 0
        self.released = False

    def read(self) -> np.ndarray:
        self.reads += 1
        if self.frames:
            return self.frames.pop(0)
        return blank_frame()

    def release(self) -> None:
        self.released = True


class FakeSink:
    def __init__(self):
        self.frames: List[np.ndarray] = []
        self.released = False

    def write(self, frame: np.ndarray) -> None:
        self.frames.append(frame)

    def release(self) -> None:
        self.released = True


class ScriptedDetector:
    """Returns one scripted detection list per call, repeating the last."""

    def __init__(self, *results: List[FaceBox]):
        self.results = list(results) or [[]]
        self.calls = 0
        self.last_input = None

    def detect(self, gray: np.ndarray) -> List[FaceBox]:
        self.last_input = gray
        index = min(self.calls, len(self.results) - 1)
        self.calls += 1
        return list(self.results[index])


THREE_FACES = [FaceBox(20, 60, 100, 100), FaceBox(200, 60, 120, 120), FaceBox(400, 100, 140, 140)]


@pytest.fixture(autouse=True)
def no_windows(mocker):
    mocker.patch("face_recorder.processor.cv2.destroyAllWindows")
    mocker.patch("face_recorder.processor.cv2.imshow")


@pytest.fixture
def config(tmp_path) -> SessionConfig:
    return SessionConfig(
        speed_up_factor=1,
        output_dir=tmp_path / "faces",
        video_path=tmp_path / "faces" / "output_video.avi",
    )


@pytest.fixture
def source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def sink() -> FakeSink:
    return FakeSink()


@pytest.fixture
def archive(config) -> FaceArchive:
    return FaceArchive(config.output_dir)
