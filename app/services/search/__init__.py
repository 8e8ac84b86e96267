"""
Photo Search Service

Usage:
    from app.services.search import UnsplashClient, RemoteSearchFailure

    client = UnsplashClient(access_key="...")
    try:
        results = client.search_photos("cats")
    except RemoteSearchFailure as e:
        print(f"Error: {e}")
"""
from .models import SearchResult
from .client import UnsplashClient, RemoteSearchFailure

__all__ = ["SearchResult", "UnsplashClient", "RemoteSearchFailure"]
