"""Tests for core formatting helpers."""

from arrftercare.core.formatting import format_bitrate, format_file_size


class TestFormatFileSize:
    """Tests for format_file_size."""

    def test_bytes(self) -> None:
        assert format_file_size(512) == "512 B"

    def test_kilobytes(self) -> None:
        assert format_file_size(1536) == "1.5 KB"

    def test_megabytes(self) -> None:
        assert format_file_size(128 * 1024**2) == "128.0 MB"

    def test_gigabytes(self) -> None:
        assert format_file_size(int(4.2 * 1024**3)) == "4.2 GB"


class TestFormatBitrate:
    """Tests for format_bitrate."""

    def test_megabits(self) -> None:
        assert format_bitrate(8_000_000) == "8.0 Mb/s"

    def test_kilobits(self) -> None:
        assert format_bitrate(640_000) == "640 kb/s"

    def test_bits(self) -> None:
        assert format_bitrate(999) == "999 b/s"
