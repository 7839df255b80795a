"""
Common configuration settings used throughout the application.

This module contains globally shared settings: where the project lives, how the
console logger is formatted, and where the FFmpeg executables are found. The
executable locations can be overridden from an optional 'config.user.yaml' at
the project root, so a bundled or freshly downloaded FFmpeg build can be used
without putting it on the system PATH.
"""
from pathlib import Path
from typing import Optional, Tuple

import yaml
from loguru import logger

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
USER_CONFIG_PATH = PROJECT_ROOT / "config.user.yaml"


def load_user_paths(config_path: Path = USER_CONFIG_PATH) -> Tuple[Optional[Path], Optional[Path]]:
    """
    Reads the optional executable paths from a user YAML config file.

    Expected layout:

        paths:
          ffmpeg_dir: /opt/ffmpeg/bin
          module_update_dir: /opt/ffmpeg/incoming

    Args:
        config_path: The YAML file to read.

    Returns:
        A `(ffmpeg_dir, module_update_dir)` tuple. Either entry is None when it is
        not configured, or when the file is missing or cannot be parsed.
    """
    ffmpeg_dir: Optional[Path] = None
    update_dir: Optional[Path] = None

    if not config_path.is_file():
        logger.debug(f"User config '{config_path}' not found. Relying on system PATH for executables.")
        return ffmpeg_dir, update_dir

    try:
        with config_path.open("r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not load or parse '{config_path}': {e}")
        return ffmpeg_dir, update_dir

    if isinstance(user_config, dict) and "paths" in user_config:
        paths_config = user_config.get("paths") or {}
        ffmpeg_dir_str = paths_config.get("ffmpeg_dir")
        update_dir_str = paths_config.get("module_update_dir")

        if ffmpeg_dir_str:
            ffmpeg_dir = Path(ffmpeg_dir_str)
        if update_dir_str:
            update_dir = Path(update_dir_str)

    return ffmpeg_dir, update_dir


# The directory containing the ffmpeg and ffprobe executables. If None, the
# executables are looked up on the system PATH.
# The directory where updated FFmpeg builds are dropped. Its contents are moved
# into `MODULE_PATH` before the binary is resolved. If None, updating is skipped.
MODULE_PATH, MODULE_UPDATE_PATH = load_user_paths()


# --- Logging Configuration ---
LOGGER_FORMAT = (
    "<green>{time:MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "{thread.name} - <level>{message}</level>"
)
DEFAULT_LOG_LEVEL = "INFO"
