"""
Shared pytest fixtures for page tests
"""
from types import SimpleNamespace
from unittest.mock import MagicMock, Mock

import pytest

from app.services.annotation import CanvasSurface, EditorController
from app.services.search import SearchResult
from app.state import EditorState, SearchState, SEARCH_PAGE


def _make_column():
    col = MagicMock()
    col.button = MagicMock(return_value=False)
    col.text_input = MagicMock(side_effect=lambda label, value="", **kwargs: value)
    col.image = MagicMock()
    col.__enter__ = Mock(return_value=col)
    col.__exit__ = Mock(return_value=None)
    return col


def _make_columns(spec, **kwargs):
    count = spec if isinstance(spec, int) else len(spec)
    return [_make_column() for _ in range(count)]


@pytest.fixture
def mock_streamlit():
    """Mock Streamlit module for UI testing."""
    mock_st = MagicMock()

    # Mock sidebar
    mock_st.sidebar = MagicMock()
    mock_st.sidebar.radio = MagicMock(return_value=SEARCH_PAGE)

    # Mock main UI elements
    mock_st.button = MagicMock(return_value=False)
    mock_st.download_button = MagicMock(return_value=False)
    mock_st.radio = MagicMock(return_value="Select")
    mock_st.text_input = MagicMock(side_effect=lambda label, value="", **kwargs: value)
    mock_st.columns = MagicMock(side_effect=_make_columns)
    mock_st.info = MagicMock()
    mock_st.error = MagicMock()
    mock_st.title = MagicMock()
    mock_st.markdown = MagicMock()
    mock_st.subheader = MagicMock()
    mock_st.caption = MagicMock()
    mock_st.text = MagicMock()
    mock_st.divider = MagicMock()
    mock_st.rerun = MagicMock()

    # Mock spinner context manager
    mock_spinner = MagicMock()
    mock_spinner.__enter__ = Mock(return_value=None)
    mock_spinner.__exit__ = Mock(return_value=None)
    mock_st.spinner = MagicMock(return_value=mock_spinner)

    # Session state with attribute access
    mock_st.session_state = SimpleNamespace(
        browser_id="browser-test",
        current_page=SEARCH_PAGE,
        search_state=SearchState(),
        editor_state=EditorState(),
    )

    return mock_st


@pytest.fixture
def sample_results():
    """Create eight search results"""
    return [
        SearchResult(
            id=f"photo{i}",
            thumbnail_url=f"https://images.example.com/cat{i}-small.jpg",
            full_url=f"https://images.example.com/cat{i}-full.jpg",
            alt_description=f"cat {i}",
        )
        for i in range(8)
    ]


@pytest.fixture
def page_controller(selection_store, fake_loader):
    """EditorController using the fake loader and a temporary store"""
    return EditorController(
        selection_store,
        surface_factory=lambda: CanvasSurface(loader=fake_loader, strict_shapes=False),
    )


@pytest.fixture
def editor_state(mock_streamlit, page_controller):
    """Editor state already holding the test controller"""
    state = mock_streamlit.session_state.editor_state
    state.controller = page_controller
    return state
