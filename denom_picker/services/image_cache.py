"""Example note image cache.

Preloads the QR density preview images, one per selection count 0..max_key,
named ``<prefix><zero-padded index>.<ext>`` (``ecash_0003.png``). Loads run
concurrently; each success is written to the cache as it completes, so a
fail-fast preload that aborts on the first error still leaves the earlier
entries usable. Lookups are best-effort: a missing key falls back to the URL
computed from the same naming convention.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

logger = logging.getLogger("denom_picker.images")

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class ImageLoadError(Exception):
    def __init__(self, key: int, reason: str):
        self.key = key
        super().__init__(f"failed to load preview image {key}: {reason}")


@dataclass(frozen=True)
class QrImage:
    key: int
    url: str
    path: Path
    size: int


@dataclass(frozen=True)
class QrPreview:
    src: str
    alt: str
    info: str


def qr_image_name(index: int, prefix: str = "ecash_", ext: str = "png", width: int = 4) -> str:
    return f"{prefix}{index:0{width}d}.{ext}"


def selection_info(count: int) -> str:
    if count == 0:
        return "No denominations selected"
    if count == 1:
        return "1 denomination selected"
    return f"{count} denominations selected"


class QrImageCache:
    def __init__(
        self,
        directory: Path,
        url_prefix: str,
        max_key: int = 4,
        *,
        prefix: str = "ecash_",
        ext: str = "png",
        width: int = 4,
    ):
        self.directory = Path(directory)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_key = max_key
        self._prefix = prefix
        self._ext = ext
        self._width = width
        self._images: Dict[int, QrImage] = {}

    def name_for(self, key: int) -> str:
        return qr_image_name(key, self._prefix, self._ext, self._width)

    def url_for(self, key: int) -> str:
        return f"{self.url_prefix}/{self.name_for(key)}"

    def _read(self, key: int) -> QrImage:
        path = self.directory / self.name_for(key)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise ImageLoadError(key, str(e)) from e
        if not data:
            raise ImageLoadError(key, f"{path.name} is empty")
        if self._ext.lower() == "png" and not data.startswith(PNG_SIGNATURE):
            raise ImageLoadError(key, f"{path.name} is not a PNG image")
        return QrImage(key=key, url=self.url_for(key), path=path, size=len(data))

    async def _load(self, key: int) -> QrImage:
        image = await asyncio.to_thread(self._read, key)
        self._images[key] = image
        return image

    async def preload(
        self, keys: Optional[Iterable[int]] = None, fail_fast: bool = True
    ) -> List[int]:
        """Load every key concurrently; returns the keys that failed.

        With ``fail_fast`` the first ImageLoadError propagates as soon as it
        happens (the other loads keep running and still populate the cache).
        """
        wanted = list(keys) if keys is not None else list(range(self.max_key + 1))
        tasks = [self._load(k) for k in wanted]
        if fail_fast:
            await asyncio.gather(*tasks)
            return []
        results = await asyncio.gather(*tasks, return_exceptions=True)
        failed: List[int] = []
        for key, result in zip(wanted, results):
            if isinstance(result, ImageLoadError):
                logger.warning("%s", result)
                failed.append(key)
            elif isinstance(result, BaseException):
                raise result
        return failed

    def get(self, key: int) -> Optional[QrImage]:
        return self._images.get(key)

    def cached_keys(self) -> List[int]:
        return sorted(self._images)

    def src_for(self, key: int) -> str:
        image = self._images.get(key)
        if image is not None:
            return image.url
        return self.url_for(key)

    def preview(self, count: int) -> QrPreview:
        key = min(count, self.max_key)
        return QrPreview(
            src=self.src_for(key),
            alt=f"QR Code density preview for {count} denominations",
            info=selection_info(count),
        )
