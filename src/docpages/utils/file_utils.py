"""File system helpers."""

from pathlib import Path

import aiofiles


async def read_file_async(path: Path, encoding: str = "utf-8") -> str:
    """Read a file asynchronously.

    Raises:
        FileNotFoundError: If the file doesn't exist.
    """
    async with aiofiles.open(path, "r", encoding=encoding) as f:
        return await f.read()


async def write_file_async(
    path: Path,
    content: str,
    encoding: str = "utf-8",
    mkdir: bool = True,
) -> None:
    """Write content to a file asynchronously.

    Args:
        path: Path to the file.
        content: Content to write.
        encoding: File encoding.
        mkdir: Whether to create parent directories.
    """
    if mkdir:
        path.parent.mkdir(parents=True, exist_ok=True)

    async with aiofiles.open(path, "w", encoding=encoding) as f:
        await f.write(content)
