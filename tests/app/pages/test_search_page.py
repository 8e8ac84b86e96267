"""
Tests for Search page UI rendering functions.

Tests the Streamlit UI components in app/pages/search.py
"""
from unittest.mock import MagicMock, patch

from app.services.search import RemoteSearchFailure
from app.state import EDITOR_PAGE, SearchState


class TestRunSearch:
    """Tests for run_search() function."""

    def test_stores_results(self, sample_results):
        """Test that results replace the previous ones."""
        from app.pages.search import run_search

        client = MagicMock()
        client.search_photos.return_value = sample_results
        state = SearchState(error="old error")

        run_search(client, state, "cats")

        assert state.query == "cats"
        assert state.results == sample_results
        assert state.error is None

    def test_failure_keeps_previous_results(self, sample_results):
        """Test that a failed search shows an error and keeps old results."""
        from app.pages.search import run_search

        client = MagicMock()
        client.search_photos.side_effect = RemoteSearchFailure("Request failed with status code 401", 401)
        state = SearchState(query="dogs", results=sample_results)

        run_search(client, state, "cats")

        assert state.results == sample_results
        assert state.error == "Request failed with status code 401"


class TestSelectImage:
    """Tests for select_image() function."""

    def test_persists_and_navigates(self, mock_streamlit, sample_results, selection_store):
        """Test that selecting stores the URL and switches to the editor."""
        from app.pages.search import select_image

        editor_state = mock_streamlit.session_state.editor_state

        with patch("app.pages.search.st", mock_streamlit):
            select_image(sample_results[3], selection_store, editor_state)

        assert selection_store.get() == sample_results[3].full_url
        assert editor_state.image_url == sample_results[3].full_url
        assert mock_streamlit.session_state.current_page == EDITOR_PAGE


class TestRenderSearchBar:
    """Tests for render_search_bar() function."""

    def test_search_button_runs_search(self, mock_streamlit, sample_results):
        """Test that clicking Search runs the typed query."""
        from app.pages.search import render_search_bar

        col1, col2 = MagicMock(), MagicMock()
        col1.text_input.return_value = "cats"
        col2.button.return_value = True
        mock_streamlit.columns = MagicMock(return_value=[col1, col2])
        client = MagicMock()
        client.search_photos.return_value = sample_results
        state = SearchState()

        with patch("app.pages.search.st", mock_streamlit):
            render_search_bar(client, state)

        client.search_photos.assert_called_once_with("cats")
        assert len(state.results) == 8

    def test_no_search_without_click(self, mock_streamlit):
        """Test that typing alone does not search."""
        from app.pages.search import render_search_bar

        client = MagicMock()

        with patch("app.pages.search.st", mock_streamlit):
            render_search_bar(client, SearchState())

        client.search_photos.assert_not_called()


class TestRenderResults:
    """Tests for render_results() function."""

    def test_renders_grid(self, mock_streamlit, sample_results, selection_store):
        """Test that every result gets a thumbnail and an Add Caption button."""
        from app.pages.search import render_results

        columns = [MagicMock(), MagicMock(), MagicMock()]
        for col in columns:
            col.button.return_value = False
        mock_streamlit.columns = MagicMock(return_value=columns)
        state = SearchState(query="cats", results=sample_results)

        with patch("app.pages.search.st", mock_streamlit):
            render_results(state, selection_store, mock_streamlit.session_state.editor_state)

        mock_streamlit.columns.assert_called_once_with(3)
        assert sum(col.image.call_count for col in columns) == 8
        assert sum(col.button.call_count for col in columns) == 8
        assert columns[0].image.call_args_list[0][0][0] == sample_results[0].thumbnail_url
        assert columns[0].button.call_args_list[0][0][0] == "Add Caption"

    def test_add_caption_selects_and_reruns(self, mock_streamlit, sample_results, selection_store):
        """Test that clicking Add Caption on the fourth photo opens it."""
        from app.pages.search import render_results

        columns = [MagicMock(), MagicMock(), MagicMock()]
        for col in columns:
            col.button.side_effect = lambda label, key=None, **kwargs: key == "caption_photo3"
        mock_streamlit.columns = MagicMock(return_value=columns)
        state = SearchState(query="cats", results=sample_results)
        editor_state = mock_streamlit.session_state.editor_state

        with patch("app.pages.search.st", mock_streamlit):
            render_results(state, selection_store, editor_state)

        assert editor_state.image_url == sample_results[3].full_url
        assert selection_store.get() == sample_results[3].full_url
        assert mock_streamlit.session_state.current_page == EDITOR_PAGE
        mock_streamlit.rerun.assert_called()

    def test_no_results_message(self, mock_streamlit, selection_store):
        """Test that an empty search shows an info message."""
        from app.pages.search import render_results

        with patch("app.pages.search.st", mock_streamlit):
            render_results(SearchState(query="zzzz"), selection_store, mock_streamlit.session_state.editor_state)

        mock_streamlit.info.assert_called_once()
        mock_streamlit.columns.assert_not_called()

    def test_nothing_before_first_search(self, mock_streamlit, selection_store):
        """Test that nothing is shown before any search."""
        from app.pages.search import render_results

        with patch("app.pages.search.st", mock_streamlit):
            render_results(SearchState(), selection_store, mock_streamlit.session_state.editor_state)

        mock_streamlit.info.assert_not_called()


class TestRenderSearchPage:
    """Tests for render_search_page() function."""

    def test_renders_title(self, mock_streamlit):
        """Test that the page title is rendered."""
        from app.pages.search import render_search_page

        with patch("app.pages.search.st", mock_streamlit):
            render_search_page()

        mock_streamlit.title.assert_called_once_with("Image Search")

    def test_shows_error(self, mock_streamlit):
        """Test that a recorded search error is displayed."""
        from app.pages.search import render_search_page

        mock_streamlit.session_state.search_state.error = "Request failed with status code 500"

        with patch("app.pages.search.st", mock_streamlit):
            render_search_page()

        mock_streamlit.error.assert_called_once_with("Error: Request failed with status code 500")
