"""Default image loader: resolves panorama references against a local asset directory."""

import asyncio
import logging
import os
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


class FileImageLoader:
    """
    Async image loader backed by the local filesystem.

    Instances are callables matching the controller's ImageLoader signature:
    ``await loader(image_url)`` returns True when the panorama file exists
    and is readable. The filesystem check runs in a worker thread so the
    event loop is never blocked.

    Example:
        loader = FileImageLoader("assets/")
        controller = NavigationController(store, loader, "a-f1-north-1")
    """

    def __init__(self, asset_root: Union[str, Path]) -> None:
        self.asset_root = Path(asset_root)

    def resolve(self, image_url: str) -> Optional[Path]:
        """
        Map an image reference to a file under the asset root.

        Leading slashes are ignored, so "/images/a.jpg" and "images/a.jpg"
        resolve identically.

        Returns:
            Absolute path, or None if the reference escapes the asset root
        """
        root = self.asset_root.resolve()
        candidate = (root / image_url.lstrip("/")).resolve()
        if not candidate.is_relative_to(root):
            return None
        return candidate

    async def __call__(self, image_url: str) -> bool:
        path = self.resolve(image_url)
        if path is None:
            logger.warning(f"Rejected image reference outside asset root: {image_url}")
            return False

        readable = await asyncio.to_thread(_is_readable, path)
        if not readable:
            logger.warning(f"Image not found or unreadable: {path}")
        return readable


def _is_readable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)
