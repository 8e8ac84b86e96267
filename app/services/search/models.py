"""
Search Result Models
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class SearchResult:
    """
    One photo returned by a search

    Attributes:
        id: Provider's photo id
        thumbnail_url: Small preview image
        full_url: Full-resolution image handed to the editor
        alt_description: Accessible description, if the provider has one
    """
    id: str
    thumbnail_url: str
    full_url: str
    alt_description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchResult":
        """Parse one entry of the Unsplash /search/photos "results" list"""
        urls = data["urls"]
        return cls(
            id=str(data["id"]),
            thumbnail_url=urls["small"],
            full_url=urls["full"],
            alt_description=data.get("alt_description"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "thumbnail_url": self.thumbnail_url,
            "full_url": self.full_url,
            "alt_description": self.alt_description,
        }
