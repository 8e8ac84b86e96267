"""
Image Loader - fetches and decodes photos off the UI thread

Loader threads only produce PIL images; they never touch a Scene. The
canvas applies finished loads on the UI thread (see CanvasSurface).
"""
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from io import BytesIO
from pathlib import Path
from typing import Optional

import requests
from PIL import Image

from app import config
from .errors import ImageDecodeFailure

logger = logging.getLogger(__name__)


def fetch_image(url: str, timeout: float = config.IMAGE_LOAD_TIMEOUT) -> Image.Image:
    """
    Download (or open) and decode an image

    Args:
        url: http(s) URL or local file path
        timeout: Request timeout in seconds for remote images

    Returns:
        Decoded RGBA PIL Image

    Raises:
        ImageDecodeFailure: If the image cannot be fetched or decoded
    """
    try:
        if url.startswith(("http://", "https://")):
            response = requests.get(url, timeout=timeout)
            response.raise_for_status()
            source = BytesIO(response.content)
        else:
            source = Path(url)

        with Image.open(source) as image:
            image.load()
            return image.convert("RGBA")
    except requests.RequestException as e:
        raise ImageDecodeFailure(url, f"download failed: {e}") from e
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageDecodeFailure(url, f"decode failed: {e}") from e


class ImageLoader:
    """
    Thread pool that runs fetch_image and hands back futures

    Several loads may be in flight at once and may finish in any order.
    """

    def __init__(self, max_workers: int = config.IMAGE_LOADER_WORKERS, timeout: float = config.IMAGE_LOAD_TIMEOUT):
        """
        Initialize loader

        Args:
            max_workers: Number of download threads
            timeout: Request timeout in seconds
        """
        self.max_workers = max_workers
        self.timeout = timeout
        self._executor: Optional[ThreadPoolExecutor] = None

    def submit(self, url: str) -> "Future[Image.Image]":
        """Start loading url; the future resolves to an image or ImageDecodeFailure"""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.max_workers,
                thread_name_prefix="image-loader",
            )
        logger.info(f"Loading image: {url}")
        return self._executor.submit(fetch_image, url, self.timeout)

    def shutdown(self) -> None:
        """Stop accepting loads; in-flight loads finish in the background"""
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None
