"""Letterbox detection."""

from arrftercare.detection.cropdetect import (
    CropDetectionError,
    CropGeometry,
    build_cropdetect_command,
    detect_crop,
    is_significant,
    parse_crop,
    removed_rows,
)

__all__ = [
    "CropDetectionError",
    "CropGeometry",
    "build_cropdetect_command",
    "detect_crop",
    "is_significant",
    "parse_crop",
    "removed_rows",
]
