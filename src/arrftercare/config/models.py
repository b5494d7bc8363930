"""Configuration data models.

This module defines dataclasses for arrftercare configuration options.
"""

from dataclasses import dataclass, field
from pathlib import Path

from arrftercare.scanner.discovery import DEFAULT_EXTENSIONS

SUPPORTED_PRESETS = (
    "ultrafast",
    "superfast",
    "veryfast",
    "faster",
    "fast",
    "medium",
    "slow",
    "slower",
    "veryslow",
)


@dataclass
class ToolPathsConfig:
    """Configuration for external tool paths.

    All paths are optional. If not specified, tools are looked up in PATH.
    """

    ffmpeg: Path | None = None
    ffprobe: Path | None = None


@dataclass
class CropConfig:
    """Configuration for crop detection and the significance gate."""

    start_seconds: int = 120
    """Seek offset before sampling, skips studio logos and cold opens."""

    frame_interval: int = 100
    """Analyze every Nth decoded frame."""

    min_removed_rows: int = 20
    """Crops removing fewer rows than this are not worth a re-encode."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.start_seconds < 0:
            raise ValueError(
                f"start_seconds must be non-negative, got {self.start_seconds}"
            )
        if self.frame_interval < 1:
            raise ValueError(
                f"frame_interval must be at least 1, got {self.frame_interval}"
            )
        if self.min_removed_rows < 0:
            raise ValueError(
                f"min_removed_rows must be non-negative, got {self.min_removed_rows}"
            )


@dataclass
class EncodeConfig:
    """Configuration for the re-encode."""

    video_codec: str = "libx264"
    crf: int = 18
    preset: str = "slow"

    ac3_bitrate: int = 640_000
    """Bitrate in bits/second for TrueHD tracks transcoded to AC3."""

    keep_original_backup: bool = False
    """Move the original aside instead of deleting it after a successful encode."""

    timeout_seconds: float | None = None
    """Abort the encode after this many seconds (None = wait indefinitely)."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not 0 <= self.crf <= 51:
            raise ValueError(f"crf must be between 0 and 51, got {self.crf}")
        if self.preset not in SUPPORTED_PRESETS:
            raise ValueError(
                f"preset must be one of {SUPPORTED_PRESETS}, got {self.preset}"
            )
        if self.ac3_bitrate <= 0:
            raise ValueError(f"ac3_bitrate must be positive, got {self.ac3_bitrate}")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError(
                f"timeout_seconds must be positive, got {self.timeout_seconds}"
            )


@dataclass
class ScanConfig:
    """Configuration for the directory-scan command."""

    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS

    def __post_init__(self) -> None:
        """Normalize extensions to lowercase with a leading dot."""
        normalized = []
        for ext in self.extensions:
            ext = ext.strip().casefold()
            if not ext:
                continue
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        if not normalized:
            raise ValueError("extensions must contain at least one entry")
        self.extensions = tuple(normalized)


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class ArrftercareConfig:
    """Main configuration container.

    Aggregates all configuration sections.
    """

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    crop: CropConfig = field(default_factory=CropConfig)
    encode: EncodeConfig = field(default_factory=EncodeConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
