"""Webcam face detection, distance estimation and recording package."""

from .config import SessionConfig
from .errors import CaptureFailed, FaceRecorderError, ModelLoadFailed, SinkUnavailable, SourceUnavailable
from .processor import FrameProcessor
from .vision import FaceBox, FaceDetector, estimate_distance

__all__ = [
    "CaptureFailed",
    "FaceBox",
    "FaceDetector",
    "FaceRecorderError",
    "FrameProcessor",
    "ModelLoadFailed",
    "SessionConfig",
    "SinkUnavailable",
    "SourceUnavailable",
    "estimate_distance",
]
