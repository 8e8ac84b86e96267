"""
Application state management for Image Caption Studio

Contains dataclasses for session state that persists across Streamlit reruns.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from app import config
from app.services.search import SearchResult
from app.services.selection import is_valid_browser_id, new_browser_id

SEARCH_PAGE = "Search"
EDITOR_PAGE = "Editor"


@dataclass
class SearchState:
    """Application state for the search view"""
    query: str = ""
    results: List[SearchResult] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class EditorState:
    """Application state for the editor view"""
    # Image chosen in the search view, passed at navigation time
    image_url: Optional[str] = None
    # EditorController for the current session (created by the editor page)
    controller: Optional["EditorController"] = None  # Forward reference
    pointer_mode: str = "select"  # select, move
    # (x, y, timestamp) of the last canvas click already handled
    last_click: Optional[Tuple[float, float, Optional[int]]] = None


def resolve_browser_id(query_params) -> str:
    """
    Browser token from the page URL, minting one if missing or malformed

    The token is written back to the URL so a reload of the same tab keeps
    its selection slot.

    Args:
        query_params: Mapping of URL query parameters (st.query_params)

    Returns:
        Browser token
    """
    browser_id = query_params.get(config.BROWSER_ID_PARAM)
    if not is_valid_browser_id(browser_id):
        browser_id = new_browser_id()
        query_params[config.BROWSER_ID_PARAM] = browser_id
    return browser_id


def init_session_state():
    """Initialize session state if not already done"""
    import streamlit as st

    if "browser_id" not in st.session_state:
        st.session_state.browser_id = resolve_browser_id(st.query_params)

    if "search_state" not in st.session_state:
        st.session_state.search_state = SearchState()

    if "editor_state" not in st.session_state:
        st.session_state.editor_state = EditorState()

    if "current_page" not in st.session_state:
        st.session_state.current_page = SEARCH_PAGE
