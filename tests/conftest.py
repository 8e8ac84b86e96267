"""
Shared pytest fixtures for Image Caption Studio tests
"""
from concurrent.futures import Future
from typing import Dict, List, Optional, Tuple, Union

import pytest
from PIL import Image

from app.services.annotation.errors import ImageDecodeFailure
from app.services.selection import SelectionStore


# Constants for test data
PHOTO_WIDTH = 800
PHOTO_HEIGHT = 600
PHOTO_COLOR = (255, 0, 0, 255)
PHOTO_URL = "https://images.example.com/photo-cat.jpg"
OTHER_PHOTO_URL = "https://images.example.com/photo-dog.jpg"


class FakeLoader:
    """
    Image loader whose futures are completed by the test

    Loads listed in `preset` complete immediately; everything else stays
    pending until resolve() or fail() is called.
    """

    def __init__(self, preset: Optional[Dict[str, Union[Image.Image, Exception]]] = None):
        self.preset = preset or {}
        self.submitted: List[Tuple[str, Future]] = []
        self.shut_down = False

    def submit(self, url: str) -> Future:
        future = Future()
        self.submitted.append((url, future))
        if url in self.preset:
            outcome = self.preset[url]
            if isinstance(outcome, Exception):
                future.set_exception(outcome)
            else:
                future.set_result(outcome)
        return future

    def _future(self, which: Union[int, str]) -> Future:
        if isinstance(which, int):
            return self.submitted[which][1]
        for url, future in reversed(self.submitted):
            if url == which:
                return future
        raise KeyError(which)

    def resolve(self, which: Union[int, str], image: Image.Image):
        self._future(which).set_result(image)

    def fail(self, which: Union[int, str], reason: str = "decode failed: not an image"):
        url = which if isinstance(which, str) else self.submitted[which][0]
        self._future(which).set_exception(ImageDecodeFailure(url, reason))

    def shutdown(self):
        self.shut_down = True


@pytest.fixture
def fake_loader():
    """Loader with manually completed futures"""
    return FakeLoader()


@pytest.fixture
def sample_photo():
    """Create a solid red 800x600 photo"""
    return Image.new("RGBA", (PHOTO_WIDTH, PHOTO_HEIGHT), color=PHOTO_COLOR)


@pytest.fixture
def selection_store(tmp_path):
    """Create a SelectionStore for one browser in a temporary directory"""
    return SelectionStore("browser-a", base_dir=tmp_path / "selections")


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "requires_unsplash: marks tests that call the live Unsplash API (needs UNSPLASH_ACCESS_KEY)"
    )
