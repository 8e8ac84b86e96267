"""
Selection Store

A single persisted slot per browser that carries the chosen image URL
across reloads. Navigation passes the URL explicitly; this store is only
the fallback used when the editor opens without one.

Each browser is identified by a random token kept in the page URL
(see app.state.resolve_browser_id), so sessions never see each other's
selection.

File layout:
    data/selections/
        <browser_id>.json       {"selectedImage": "<url>"}
"""
import json
import logging
import re
import uuid
from pathlib import Path
from typing import Optional

from app import config

logger = logging.getLogger(__name__)

BROWSER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def new_browser_id() -> str:
    """Random token identifying one browser"""
    return uuid.uuid4().hex


def is_valid_browser_id(browser_id) -> bool:
    """True if browser_id is safe to use as a file name"""
    return isinstance(browser_id, str) and bool(BROWSER_ID_PATTERN.match(browser_id))


class SelectionStore:
    """
    Storage for one browser's "selected image" key
    """

    def __init__(self, browser_id: str, base_dir: Path = None, key: str = config.SELECTION_KEY):
        """
        Initialize store

        Args:
            browser_id: Token of the browser owning the slot
            base_dir: Directory holding one JSON file per browser (default: data/selections)
            key: Key name inside the file

        Raises:
            ValueError: If browser_id is not a plain token
        """
        if not is_valid_browser_id(browser_id):
            raise ValueError(f"Invalid browser id: {browser_id!r}")
        if base_dir is None:
            base_dir = config.SELECTION_DIR
        self.browser_id = browser_id
        self.base_dir = Path(base_dir)
        self.path = self.base_dir / f"{browser_id}.json"
        self.key = key

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable selection file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self) -> Optional[str]:
        """Stored image URL, or None"""
        value = self._read().get(self.key)
        return value if isinstance(value, str) and value else None

    def set(self, url: str) -> None:
        """Persist url as the selected image"""
        data = self._read()
        data[self.key] = url
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def clear(self) -> bool:
        """
        Remove the stored URL

        Returns:
            True if a value was removed
        """
        data = self._read()
        if self.key not in data:
            return False

        del data[self.key]
        if data:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        else:
            self.path.unlink()
        return True
