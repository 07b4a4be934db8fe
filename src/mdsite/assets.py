"""Static asset mirroring.

Copies the static directory (styles, fonts, images) into the output root
byte for byte, preserving its internal structure.
"""

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def copy_static_tree(static_dir: Path, target_dir: Path) -> int:
    """Mirror a static asset directory.

    Args:
        static_dir: Directory to copy
        target_dir: Destination; must not exist yet

    Returns:
        Number of files copied

    Raises:
        FileNotFoundError: If static_dir is not a directory
        OSError: If any file cannot be copied
    """
    if not static_dir.is_dir():
        raise FileNotFoundError(f"Static directory not found: {static_dir}")

    shutil.copytree(static_dir, target_dir)
    count = sum(1 for path in target_dir.rglob("*") if path.is_file())
    logger.debug(f"Copied {count} static files from {static_dir} to {target_dir}")
    return count
