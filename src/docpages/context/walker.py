"""Recursive discovery of AsciiDoc index files."""

import os
from pathlib import Path
from typing import Optional

import aiofiles.os

from docpages.config.defaults import INDEX_FILENAME


async def read_dir_recursive(
    root: Path,
    filename: str = INDEX_FILENAME,
    result: Optional[list[Path]] = None,
) -> list[Path]:
    """Collect absolute paths of every file named `filename` below `root`.

    Order follows the directory listing. Symlinked directories are followed
    without cycle detection.

    Args:
        root: Existing directory to scan.
        filename: Exact file name to match.
        result: Accumulator used by the recursion.

    Returns:
        List of absolute file paths.
    """
    if result is None:
        result = []

    root = Path(os.path.abspath(root))
    for name in await aiofiles.os.listdir(root):
        absolute = root / name
        if await aiofiles.os.path.isdir(absolute):
            await read_dir_recursive(absolute, filename, result)
        elif name == filename:
            result.append(absolute)

    return result
