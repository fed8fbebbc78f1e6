import logging
from pathlib import Path

import aiofiles

logger = logging.getLogger(__name__)


async def write_file(filepath: str, content: str) -> None:
    file_path_obj = Path(filepath)
    file_path_obj.parent.mkdir(parents=True, exist_ok=True)

    async with aiofiles.open(file_path_obj, "w", encoding="utf-8", newline="\n") as f:
        await f.write(content)
    logger.info(f"Write file successfully! File: {filepath}")
