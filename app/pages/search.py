"""
Search Page - find a photo to caption

Handles:
- Free-text photo search against Unsplash
- Thumbnail grid with an "Add Caption" action per photo
- Inline error message when the search fails
"""
import logging

import streamlit as st

from app import config
from app.services.search import RemoteSearchFailure, SearchResult, UnsplashClient
from app.services.selection import SelectionStore
from app.state import EDITOR_PAGE, EditorState, SearchState

logger = logging.getLogger(__name__)


def get_search_state() -> SearchState:
    """Get search state from session state"""
    return st.session_state.search_state


def run_search(client: UnsplashClient, state: SearchState, query: str):
    """Run a search and record results or the error message"""
    state.query = query
    try:
        state.results = client.search_photos(query)
        state.error = None
    except RemoteSearchFailure as e:
        logger.warning(f"Search for {query!r} failed: {e}")
        state.error = str(e)


def select_image(result: SearchResult, store: SelectionStore, editor_state: EditorState):
    """Hand the chosen photo to the editor and switch views"""
    store.set(result.full_url)
    editor_state.image_url = result.full_url
    st.session_state.current_page = EDITOR_PAGE


def render_search_bar(client: UnsplashClient, state: SearchState):
    """Render query input and search button"""
    col1, col2 = st.columns([4, 1])

    query = col1.text_input(
        "Search Images",
        value=state.query,
        key="search_query",
        label_visibility="collapsed",
        placeholder="Search Images",
    )

    if col2.button("Search", type="primary", use_container_width=True, key="search_submit"):
        run_search(client, state, query)


def render_results(state: SearchState, store: SelectionStore, editor_state: EditorState):
    """Render thumbnail grid with Add Caption buttons"""
    if not state.results:
        if state.query and state.error is None:
            st.info(f"No photos found for '{state.query}'")
        return

    columns = st.columns(config.SEARCH_GRID_COLUMNS)
    for i, result in enumerate(state.results):
        col = columns[i % config.SEARCH_GRID_COLUMNS]
        col.image(
            result.thumbnail_url,
            caption=result.alt_description,
            width=config.THUMBNAIL_SIZE,
        )
        if col.button("Add Caption", key=f"caption_{result.id}", use_container_width=True):
            select_image(result, store, editor_state)
            st.rerun()


def render_search_page():
    """Main search page render function"""
    state = get_search_state()
    editor_state = st.session_state.editor_state
    client = UnsplashClient()
    store = SelectionStore(st.session_state.browser_id)

    st.title("Image Search")

    render_search_bar(client, state)

    st.divider()

    render_results(state, store, editor_state)

    if state.error:
        st.error(f"Error: {state.error}")
