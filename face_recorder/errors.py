"""Fatal error types raised by the recorder."""

from __future__ import annotations


class FaceRecorderError(RuntimeError):
    """Base class for unrecoverable session errors."""


class SourceUnavailable(FaceRecorderError):
    """The capture device could not be opened."""


class ModelLoadFailed(FaceRecorderError):
    """The cascade file is missing or invalid."""


class SinkUnavailable(FaceRecorderError):
    """The output video writer could not be opened."""


class CaptureFailed(FaceRecorderError):
    """A read from an open source returned no frame."""
