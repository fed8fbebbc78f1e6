import asyncio
import logging
import os
import time
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Union

from img_meta.core.config import configs
from img_meta.core.errors import ExtractionError
from img_meta.models.imagemeta import AggregateReport, ImageMetadata
from img_meta.schemas.enum import ErrorKind
from img_meta.services.metadata_extractor import MetadataExtractor

logger = logging.getLogger(__name__)


def parse_extensions(extensions: Union[str, Iterable[str]]) -> FrozenSet[str]:
    """'jpg, .PNG,,ico' -> {'jpg', 'png', 'ico'}"""
    if isinstance(extensions, str):
        extensions = extensions.split(",")
    return frozenset(e.strip().lstrip(".").lower() for e in extensions if e.strip().lstrip("."))


class MetadataPipeline:
    def __init__(
        self,
        extractor: Optional[MetadataExtractor] = None,
        concurrency_limit: Optional[int] = None,
        include_hidden: bool = False,
    ):
        self.extractor = extractor or MetadataExtractor()
        self.concurrency_limit = configs.CONCURRENCY_LIMIT if concurrency_limit is None else concurrency_limit
        if self.concurrency_limit < 1:
            raise ValueError("concurrency_limit must be at least 1")
        self.include_hidden = include_hidden
        logger.debug(f"Pipeline initialized with concurrency limit {self.concurrency_limit}.")

    def list_image_paths(self, root_dir: str, extensions: FrozenSet[str]) -> List[str]:
        """Absolute paths of every matching file below root_dir, sorted."""
        root = os.path.abspath(root_dir)
        if not os.path.isdir(root):
            logger.error(f"Image directory does not exist: {root}")
            raise ExtractionError(ErrorKind.ROOT_UNREADABLE, root)
        try:
            os.listdir(root)
        except OSError as e:
            raise ExtractionError(ErrorKind.ROOT_UNREADABLE, root, cause=e) from e

        def on_walk_error(err: OSError):
            logger.warning(f"Skipping unreadable directory {err.filename}: {err.strerror}")

        files = []
        for dirpath, dirnames, filenames in os.walk(root, onerror=on_walk_error):
            if not self.include_hidden:
                dirnames[:] = [d for d in dirnames if not d.startswith(".")]
            for filename in filenames:
                if not self.include_hidden and filename.startswith("."):
                    continue
                suffix = os.path.splitext(filename)[1].lstrip(".").lower()
                if suffix in extensions:
                    files.append(os.path.join(dirpath, filename))
        return sorted(files)

    async def run(self, root_dir: str, extensions: Union[str, Iterable[str], None] = None) -> AggregateReport:
        root = os.path.abspath(root_dir)
        extension_set = parse_extensions(extensions if extensions is not None else configs.DEFAULT_EXTENSIONS)

        # 1. Get list of relevant files
        filepaths = await asyncio.to_thread(self.list_image_paths, root, extension_set)
        logger.info(f"Storing metadata for {len(filepaths)} files from {root}.")

        # 2. Get metadata for each file, at most concurrency_limit at a time
        started = time.monotonic()
        semaphore = asyncio.Semaphore(self.concurrency_limit)
        tasks = [asyncio.create_task(self._extract_limited(semaphore, path)) for path in filepaths]
        try:
            meta_list = await asyncio.gather(*tasks)
        except Exception as e:
            # First failure aborts the batch. Drop everything still in flight.
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.error(f"Metadata extraction aborted after first failure: {e}")
            raise
        logger.info(f"Extracted metadata for {len(meta_list)} files in {time.monotonic() - started:.2f}s.")

        # 3. Key by root-relative path, in sorted file order
        relative_paths = ["/" + Path(path).relative_to(root).as_posix() for path in filepaths]
        return dict(zip(relative_paths, meta_list))

    async def _extract_limited(self, semaphore: asyncio.Semaphore, path: str) -> ImageMetadata:
        async with semaphore:
            return await self.extractor.extract(path)
