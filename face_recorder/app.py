"""Command line entry point: record, annotate and preview a webcam feed."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import cv2

from .config import (
    FOCAL_LENGTH,
    OUTPUT_DIR,
    REAL_FACE_WIDTH_CM,
    SPEED_UP_FACTOR,
    VIDEO_PATH,
    SessionConfig,
)
from .processor import FrameProcessor


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """CLI entry point arguments."""
    parser = argparse.ArgumentParser(description="Webcam face detection with distance estimation and recording")
    parser.add_argument("--camera", type=int, default=0, help="Capture device index")
    parser.add_argument(
        "--cascade",
        default=None,
        help="Haar cascade XML (defaults to OpenCV's frontal face cascade)",
    )
    parser.add_argument("--output-dir", default=str(OUTPUT_DIR), help="Directory for saved face crops")
    parser.add_argument("--video", default=str(VIDEO_PATH), help="Annotated video output path")
    parser.add_argument(
        "--focal-length",
        type=float,
        default=FOCAL_LENGTH,
        help="Camera focal length in pixels (from calibration)",
    )
    parser.add_argument(
        "--face-width",
        type=float,
        default=REAL_FACE_WIDTH_CM,
        help="Reference face width in cm",
    )
    parser.add_argument(
        "--speed-up",
        type=int,
        default=SPEED_UP_FACTOR,
        help="Process one of every N captured frames",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity for diagnostics",
    )
    return parser.parse_args(argv)


def setup_logging(level: str) -> None:
    """Configure root logger output."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def build_config(args: argparse.Namespace) -> SessionConfig:
    return SessionConfig(
        focal_length=args.focal_length,
        real_face_width_cm=args.face_width,
        speed_up_factor=args.speed_up,
        output_dir=Path(args.output_dir),
        video_path=Path(args.video),
        cascade_path=Path(args.cascade) if args.cascade else None,
        camera_index=args.camera,
    )


def window_closed(window_name: str) -> bool:
    try:
        return cv2.getWindowProperty(window_name, cv2.WND_PROP_VISIBLE) < 1
    except cv2.error:
        return False


def run(config: SessionConfig) -> None:
    """Process, display and poll for the quit key until the user stops."""
    quit_code = ord(config.quit_key)
    with FrameProcessor(config) as processor:
        logging.info("Recording; press '%s' in the preview window to stop.", config.quit_key)
        while True:
            processor.process_frame()
            processor.display_frame()
            if cv2.waitKey(config.key_wait_ms) & 0xFF == quit_code:
                break
            if window_closed(config.window_name):
                logging.info("Preview window closed.")
                break


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)
    try:
        run(build_config(args))
    except KeyboardInterrupt:
        logging.info("Interrupted.")
    except Exception as exc:  # noqa: BLE001
        logging.exception("Fatal error: %s", exc)
        return -1
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
