"""Configuration management for arrftercare.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (ARRFTERCARE_*)
3. Config file (~/.config/arrftercare/config.toml)
4. Default values (lowest priority)
"""

from arrftercare.config.env import EnvReader
from arrftercare.config.loader import (
    get_config,
    get_default_config_path,
    load_config_file,
)
from arrftercare.config.logging_factory import build_logging_config
from arrftercare.config.models import (
    ArrftercareConfig,
    CropConfig,
    EncodeConfig,
    LoggingConfig,
    ScanConfig,
    ToolPathsConfig,
)

__all__ = [
    # Models
    "ArrftercareConfig",
    "CropConfig",
    "EncodeConfig",
    "LoggingConfig",
    "ScanConfig",
    "ToolPathsConfig",
    # Loader
    "EnvReader",
    "get_config",
    "get_default_config_path",
    "load_config_file",
    "build_logging_config",
]
