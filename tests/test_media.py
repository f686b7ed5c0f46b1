"""Tests for local video helpers."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import cv2
import pytest

from snaphockey_ai.media import extract_video_metadata, validate_video_path, video_mime_type


def _capture(props: dict[int, float], opened: bool = True) -> MagicMock:
    capture = MagicMock()
    capture.isOpened.return_value = opened
    capture.get.side_effect = lambda prop: props.get(prop, 0)
    return capture


class TestPaths:
    @pytest.mark.parametrize(
        "name, mime",
        [("a.mp4", "video/mp4"), ("a.MOV", "video/quicktime"), ("a.3gpp", "video/3gpp")],
    )
    def test_mime_types(self, name, mime):
        assert video_mime_type(Path(name)) == mime

    def test_unsupported_extension(self):
        with pytest.raises(ValueError, match="Unsupported"):
            video_mime_type(Path("a.gif"))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            validate_video_path(str(tmp_path / "gone.mp4"))

    def test_directory_rejected(self, tmp_path):
        folder = tmp_path / "clips.mp4"
        folder.mkdir()
        with pytest.raises(ValueError, match="Not a file"):
            validate_video_path(str(folder))


class TestExtractVideoMetadata:
    async def test_reads_capture_properties(self, video_file):
        props = {
            cv2.CAP_PROP_FPS: 60.0,
            cv2.CAP_PROP_FRAME_COUNT: 300.0,
            cv2.CAP_PROP_FRAME_WIDTH: 1920.0,
            cv2.CAP_PROP_FRAME_HEIGHT: 1080.0,
        }
        capture = _capture(props)
        with patch("snaphockey_ai.media.cv2.VideoCapture", return_value=capture):
            metadata = await extract_video_metadata(video_file)
        assert metadata.video_duration == 5.0
        assert metadata.video_resolution == (1920, 1080)
        assert metadata.frame_rate == 60.0
        assert metadata.is_landscape is True
        assert metadata.video_file_size == 2048
        capture.release.assert_called_once()

    async def test_portrait_clip(self, video_file):
        props = {
            cv2.CAP_PROP_FPS: 30.0,
            cv2.CAP_PROP_FRAME_COUNT: 90.0,
            cv2.CAP_PROP_FRAME_WIDTH: 1080.0,
            cv2.CAP_PROP_FRAME_HEIGHT: 1920.0,
        }
        with patch("snaphockey_ai.media.cv2.VideoCapture", return_value=_capture(props)):
            metadata = await extract_video_metadata(video_file)
        assert metadata.is_landscape is False
        assert metadata.video_duration == 3.0

    async def test_unreadable_falls_back_to_defaults(self, video_file):
        capture = _capture({}, opened=False)
        with patch("snaphockey_ai.media.cv2.VideoCapture", return_value=capture):
            metadata = await extract_video_metadata(video_file)
        assert metadata.video_duration == 0.0
        assert metadata.frame_rate == 30.0
        assert metadata.is_landscape is False
        capture.release.assert_called_once()
