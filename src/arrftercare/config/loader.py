"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (ARRFTERCARE_*)
3. Config file (~/.config/arrftercare/config.toml)
4. Default values

The environment layer matters most for the hook command: Radarr and Sonarr
run custom scripts without arguments, so settings reach a hook run either
through the config file or through the service environment.

Environment variables:
- ARRFTERCARE_CONFIG_PATH: Path to config file (overrides default location)
- ARRFTERCARE_FFMPEG_PATH: Path to ffmpeg executable
- ARRFTERCARE_FFPROBE_PATH: Path to ffprobe executable
- ARRFTERCARE_CROP_START_SECONDS: Seek offset before crop sampling (default 120)
- ARRFTERCARE_CROP_FRAME_INTERVAL: Sample every Nth frame (default 100)
- ARRFTERCARE_MIN_REMOVED_ROWS: Crop significance threshold (default 20)
- ARRFTERCARE_VIDEO_CODEC: Video encoder (default libx264)
- ARRFTERCARE_CRF: Constant rate factor (default 18)
- ARRFTERCARE_PRESET: Encoder preset (default slow)
- ARRFTERCARE_AC3_BITRATE: AC3 bitrate for TrueHD tracks (default 640000)
- ARRFTERCARE_KEEP_ORIGINAL_BACKUP: Keep original as a backup (default false)
- ARRFTERCARE_ENCODE_TIMEOUT: Encode timeout in seconds (default none)
- ARRFTERCARE_EXTENSIONS: Comma-separated extensions for scan
- ARRFTERCARE_LOG_LEVEL / ARRFTERCARE_LOG_FILE / ARRFTERCARE_LOG_FORMAT
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from arrftercare.config.env import EnvReader
from arrftercare.config.models import (
    ArrftercareConfig,
    CropConfig,
    EncodeConfig,
    LoggingConfig,
    ScanConfig,
    ToolPathsConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "arrftercare"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


def get_default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Get the default config file path.

    Can be overridden by ARRFTERCARE_CONFIG_PATH environment variable.

    Returns:
        Path to config file.
    """
    env_path = EnvReader(env).get_path("ARRFTERCARE_CONFIG_PATH", must_exist=False)
    if env_path:
        return env_path
    return DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        path: Path to config file. If None, uses default location.

    Returns:
        Parsed configuration dict. Empty dict if the file doesn't exist
        or cannot be parsed (a warning is logged in that case).
    """
    if path is None:
        path = get_default_config_path()

    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with path.open("rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load config file %s: %s", path, e)
        return {}

    logger.debug("Loaded config from %s", path)
    return config


def _file_path(section: dict[str, Any], key: str) -> Path | None:
    value = section.get(key)
    return Path(value).expanduser() if value else None


def _parse_extensions(value: str | list[str] | None) -> tuple[str, ...] | None:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split(",")
    return tuple(ext.strip() for ext in value if ext.strip())


def get_config(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
    # CLI overrides (highest precedence)
    ffmpeg_path: Path | None = None,
    ffprobe_path: Path | None = None,
) -> ArrftercareConfig:
    """Get configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides ARRFTERCARE_CONFIG_PATH).
        env: Environment mapping (None uses os.environ).
        ffmpeg_path: CLI override for ffmpeg path.
        ffprobe_path: CLI override for ffprobe path.

    Returns:
        ArrftercareConfig with merged configuration.

    Raises:
        ValueError: If a merged value fails validation.
    """
    reader = EnvReader(env)
    file_config = load_config_file(config_path or get_default_config_path(env))

    tools_file = file_config.get("tools", {})
    tools = ToolPathsConfig(
        ffmpeg=(
            ffmpeg_path
            or reader.get_path("ARRFTERCARE_FFMPEG_PATH")
            or _file_path(tools_file, "ffmpeg")
        ),
        ffprobe=(
            ffprobe_path
            or reader.get_path("ARRFTERCARE_FFPROBE_PATH")
            or _file_path(tools_file, "ffprobe")
        ),
    )

    crop_file = file_config.get("crop", {})
    crop = CropConfig(
        start_seconds=reader.get_int(
            "ARRFTERCARE_CROP_START_SECONDS",
            crop_file.get("start_seconds", 120),
        ),
        frame_interval=reader.get_int(
            "ARRFTERCARE_CROP_FRAME_INTERVAL",
            crop_file.get("frame_interval", 100),
        ),
        min_removed_rows=reader.get_int(
            "ARRFTERCARE_MIN_REMOVED_ROWS",
            crop_file.get("min_removed_rows", 20),
        ),
    )

    encode_file = file_config.get("encode", {})
    encode = EncodeConfig(
        video_codec=reader.get_str(
            "ARRFTERCARE_VIDEO_CODEC",
            encode_file.get("video_codec", "libx264"),
        ),
        crf=reader.get_int("ARRFTERCARE_CRF", encode_file.get("crf", 18)),
        preset=reader.get_str("ARRFTERCARE_PRESET", encode_file.get("preset", "slow")),
        ac3_bitrate=reader.get_int(
            "ARRFTERCARE_AC3_BITRATE",
            encode_file.get("ac3_bitrate", 640_000),
        ),
        keep_original_backup=reader.get_bool(
            "ARRFTERCARE_KEEP_ORIGINAL_BACKUP",
            encode_file.get("keep_original_backup", False),
        ),
        timeout_seconds=reader.get_float(
            "ARRFTERCARE_ENCODE_TIMEOUT",
            encode_file.get("timeout_seconds"),
        ),
    )

    scan_file = file_config.get("scan", {})
    extensions = _parse_extensions(
        reader.get_str("ARRFTERCARE_EXTENSIONS")
    ) or _parse_extensions(scan_file.get("extensions"))
    scan = ScanConfig(extensions=extensions) if extensions else ScanConfig()

    logging_file = file_config.get("logging", {})
    logging_config = LoggingConfig(
        level=reader.get_str(
            "ARRFTERCARE_LOG_LEVEL", logging_file.get("level", "info")
        ),
        file=(
            reader.get_path("ARRFTERCARE_LOG_FILE", must_exist=False)
            or _file_path(logging_file, "file")
        ),
        format=reader.get_str(
            "ARRFTERCARE_LOG_FORMAT", logging_file.get("format", "text")
        ),
        include_stderr=logging_file.get("include_stderr", False),
        max_bytes=logging_file.get("max_bytes", 10_485_760),
        backup_count=logging_file.get("backup_count", 5),
    )

    return ArrftercareConfig(
        tools=tools,
        crop=crop,
        encode=encode,
        scan=scan,
        logging=logging_config,
    )
