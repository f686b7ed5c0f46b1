"""Local video helpers — MIME detection, path validation, metadata extraction."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import cv2

from .models.common import VideoAnalysisMetadata

logger = logging.getLogger(__name__)

SUPPORTED_VIDEO_EXTENSIONS: dict[str, str] = {
    ".mp4": "video/mp4",
    ".mov": "video/quicktime",
    ".m4v": "video/x-m4v",
    ".webm": "video/webm",
    ".avi": "video/x-msvideo",
    ".mkv": "video/x-matroska",
    ".3gpp": "video/3gpp",
}

DEFAULT_FRAME_RATE = 30.0


def video_mime_type(path: Path) -> str:
    """Return MIME type for a video file, or raise ValueError if unsupported."""
    ext = path.suffix.lower()
    mime = SUPPORTED_VIDEO_EXTENSIONS.get(ext)
    if not mime:
        allowed = ", ".join(sorted(SUPPORTED_VIDEO_EXTENSIONS))
        raise ValueError(f"Unsupported video extension '{ext}'. Supported: {allowed}")
    return mime


def validate_video_path(file_path: str) -> tuple[Path, str]:
    """Validate path exists and has a supported extension. Returns (path, mime)."""
    p = Path(file_path).expanduser().resolve()
    if not p.exists():
        raise FileNotFoundError(f"Video file not found: {file_path}")
    if not p.is_file():
        raise ValueError(f"Not a file: {file_path}")
    return p, video_mime_type(p)


def _read_metadata(path: Path) -> VideoAnalysisMetadata:
    capture = cv2.VideoCapture(str(path))
    try:
        if not capture.isOpened():
            raise ValueError(f"Could not open video: {path}")
        fps = capture.get(cv2.CAP_PROP_FPS) or DEFAULT_FRAME_RATE
        frame_count = capture.get(cv2.CAP_PROP_FRAME_COUNT) or 0
        width = int(capture.get(cv2.CAP_PROP_FRAME_WIDTH))
        height = int(capture.get(cv2.CAP_PROP_FRAME_HEIGHT))
    finally:
        capture.release()

    return VideoAnalysisMetadata(
        video_duration=frame_count / fps if fps > 0 else 0.0,
        video_resolution=(width, height),
        video_file_size=path.stat().st_size,
        frame_rate=fps,
        is_landscape=width > height,
    )


async def extract_video_metadata(file_path: str) -> VideoAnalysisMetadata:
    """Read duration, resolution, size and fps without blocking the loop.

    Never raises: any failure yields the defaults (duration 0, 30 fps,
    portrait) so analysis can proceed.
    """
    try:
        return await asyncio.to_thread(_read_metadata, Path(file_path))
    except Exception as exc:
        logger.warning("Metadata extraction failed for %s: %s", file_path, exc)
        return VideoAnalysisMetadata()
