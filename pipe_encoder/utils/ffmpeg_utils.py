"""
This module handles the external FFmpeg tools the encoder depends on: moving in
dropped-in updates, resolving the executables, checking that they run, and
rendering command lines for the logs.
"""
import os
import shlex
import shutil
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from ..config.common import MODULE_PATH, MODULE_UPDATE_PATH
from ..domain.exceptions import BinaryUnavailableException


def executable_name(tool: str) -> str:
    return f"{tool}.exe" if sys.platform == "win32" else tool


def update_modules(
    module_dir: Optional[Path] = MODULE_PATH,
    update_dir: Optional[Path] = MODULE_UPDATE_PATH,
) -> List[Path]:
    """
    Moves new FFmpeg builds from the update directory into the module directory.

    Everything found in `update_dir` replaces the entry of the same name in
    `module_dir`. If either directory is not configured, or the update directory
    does not exist, nothing happens.

    Returns:
        The destination paths that were updated.
    """
    updated: List[Path] = []
    if not update_dir:
        logger.debug("`module_update_dir` not configured. Skipping module update check.")
        return updated

    if not module_dir:
        logger.error(f"Cannot perform update: '{update_dir}' is set, but the destination `ffmpeg_dir` is not.")
        return updated

    if not update_dir.is_dir():
        logger.warning(f"Configured module update directory '{update_dir}' does not exist. Skipping update.")
        return updated

    update_items = list(update_dir.glob("*"))
    if not update_items:
        logger.debug(f"No files found in '{update_dir}'. Nothing to update.")
        return updated

    logger.info(f"Updating modules from '{update_dir}' to '{module_dir}'...")
    module_dir.mkdir(parents=True, exist_ok=True)
    for item in update_items:
        destination = module_dir / item.name
        try:
            # Replace whole directories rather than merging into them.
            if destination.is_dir() and item.is_dir():
                shutil.rmtree(destination)
            shutil.move(str(item), str(destination))
            updated.append(destination)
            logger.info(f"Moved '{item.name}' to '{destination}'")
        except OSError as e:
            logger.error(f"Failed to move '{item.name}' to '{destination}': {e}")
    return updated


def find_executable(tool: str, module_dir: Optional[Path] = MODULE_PATH) -> Optional[str]:
    """
    Looks up an FFmpeg tool ('ffmpeg' or 'ffprobe').

    The configured `ffmpeg_dir` wins when it holds the executable; otherwise the
    system PATH is searched.

    Returns:
        The absolute path of the executable, or None if it cannot be found.
    """
    exe_name = executable_name(tool)

    if module_dir and module_dir.is_dir():
        configured = module_dir / exe_name
        if configured.is_file():
            logger.debug(f"Using {tool} from configured path: '{configured}'")
            return str(configured)
        logger.warning(f"`ffmpeg_dir` is configured, but '{exe_name}' was not found there. Falling back to system PATH.")

    return shutil.which(exe_name)


def resolve_ffmpeg(
    module_dir: Optional[Path] = MODULE_PATH,
    update_dir: Optional[Path] = MODULE_UPDATE_PATH,
) -> str:
    """
    Obtains the FFmpeg executable for a new session.

    Pending updates are applied first, then the binary is located.

    Raises:
        BinaryUnavailableException: If no ffmpeg executable can be found.
    """
    update_modules(module_dir, update_dir)
    ffmpeg_path = find_executable("ffmpeg", module_dir)
    if ffmpeg_path is None:
        raise BinaryUnavailableException(
            "FFmpeg binary not found. Install FFmpeg and add it to your PATH, "
            "or set `paths.ffmpeg_dir` in config.user.yaml."
        )
    return ffmpeg_path


def resolve_ffprobe(module_dir: Optional[Path] = MODULE_PATH) -> str:
    """Returns the ffprobe executable, falling back to the bare name."""
    return find_executable("ffprobe", module_dir) or executable_name("ffprobe")


def verify_ffmpeg(module_dir: Optional[Path] = MODULE_PATH) -> bool:
    """
    Checks that FFmpeg can be found and executed by running `ffmpeg -version`.

    Logs the first line of the version banner on success, and a detailed error
    otherwise.

    Returns:
        True if FFmpeg ran successfully.
    """
    ffmpeg_cmd = find_executable("ffmpeg", module_dir)
    if ffmpeg_cmd is None:
        logger.error(
            "FFmpeg command not found. Please ensure FFmpeg is installed and accessible.\n"
            "You can either add it to your system's PATH or specify its location in the 'config.user.yaml' file."
        )
        return False

    try:
        result = subprocess.run(
            [ffmpeg_cmd, "-version"],
            check=True,
            capture_output=True,
            text=True,
            encoding="utf-8",
        )
    except subprocess.CalledProcessError as e:
        logger.error(f"FFmpeg version command failed (return code {e.returncode}):\n{e.stderr}")
        return False
    except OSError as e:
        logger.error(f"Could not execute '{ffmpeg_cmd}': {e}")
        return False

    version_lines = result.stdout.splitlines()
    logger.info(f"FFmpeg version check successful: {version_lines[0] if version_lines else '(no output)'}")
    return True


def format_command(cmd_list: List[str]) -> str:
    """Joins an argument vector into a string that can be pasted into a shell."""
    if os.name == "nt":
        return subprocess.list2cmdline(cmd_list)
    return shlex.join(cmd_list)
