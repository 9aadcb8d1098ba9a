"""DocFX integration for dox.

DocFX is treated as an opaque builder: a run either succeeds or it does
not. Its output is only surfaced in the log.
"""

import logging
import subprocess
from enum import Enum
from pathlib import Path

from ..constants import DOCFX_TIMEOUT, LOCAL_PORT

logger = logging.getLogger(__name__)


class DocFxError(Exception):
    """DocFX could not be started."""

    pass


class DocFxMode(str, Enum):
    """DocFX sub-commands dox drives."""

    METADATA = "metadata"
    BUILD = "build"


def run_docfx(
    config_path: Path,
    mode: DocFxMode,
    exec_path: str = "docfx",
    timeout: int | None = None,
) -> bool:
    """Run DocFX against a docfx.json and report success.

    Args:
        config_path: Path to docfx.json
        mode: Which DocFX sub-command to run
        exec_path: DocFX executable
        timeout: Optional timeout in seconds (default: DOCFX_TIMEOUT)

    Returns:
        True if DocFX exited with code 0
    """
    timeout = timeout or DOCFX_TIMEOUT
    cmd = [exec_path, mode.value, str(config_path)]
    logger.debug(f"Running {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            cwd=config_path.parent,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.error(f"DocFX {mode.value} timed out after {timeout} seconds")
        return False
    except FileNotFoundError:
        logger.error(f"DocFX executable not found: {exec_path}")
        return False

    for line in result.stdout.splitlines():
        logger.debug(line)
    if result.returncode != 0:
        logger.error(result.stderr.strip() or result.stdout.strip()[-2000:])
        return False
    return True


def serve(config_path: Path, exec_path: str = "docfx", port: int = LOCAL_PORT) -> subprocess.Popen:
    """Build and serve a site in a background DocFX process.

    Args:
        config_path: Path to docfx.json
        exec_path: DocFX executable
        port: Port DocFX serves on

    Returns:
        The running DocFX process

    Raises:
        DocFxError: If the executable cannot be started
    """
    cmd = [exec_path, "build", str(config_path), "--serve", "--port", str(port)]
    logger.debug(f"Spawning {' '.join(cmd)}")
    try:
        return subprocess.Popen(
            cmd,
            cwd=config_path.parent,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except FileNotFoundError:
        raise DocFxError(f"DocFX executable not found: {exec_path}") from None
