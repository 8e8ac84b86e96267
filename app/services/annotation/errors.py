"""
Errors raised by the annotation canvas
"""
from typing import Optional


class ImageDecodeFailure(Exception):
    """An image could not be fetched or decoded into a usable bitmap"""

    def __init__(self, url: Optional[str], reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Could not load image {url!r}: {reason}")


class InvalidShapeKind(ValueError):
    """A shape was requested with a kind the canvas does not know"""

    def __init__(self, kind):
        self.kind = kind
        super().__init__(
            f"Unknown shape kind: {kind!r}. "
            "Available kinds: circle, rectangle, triangle"
        )
