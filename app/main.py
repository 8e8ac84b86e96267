"""
Image Caption Studio - search for a photo and caption it

Main application entry point with sidebar navigation.
"""
import streamlit as st

from app import config
from app.logging_utils import setup_logging
from app.state import EDITOR_PAGE, SEARCH_PAGE, init_session_state
from app.pages.search import render_search_page
from app.pages.editor import get_editor_state, leave_editor, render_editor_page

PAGES = [SEARCH_PAGE, EDITOR_PAGE]


def main():
    """Main application entry point"""
    # Page config
    st.set_page_config(
        page_title="Image Caption Studio",
        page_icon="",
        layout="wide",
    )

    setup_logging("app", config.LOG_LEVEL)

    # Initialize session state
    init_session_state()

    # Sidebar navigation
    st.sidebar.title("Image Caption Studio")
    previous_page = st.session_state.current_page
    page = st.sidebar.radio(
        "Navigation",
        PAGES,
        index=PAGES.index(previous_page),
        label_visibility="collapsed",
    )
    st.session_state.current_page = page
    st.sidebar.divider()

    # Leaving the editor ends its session
    if previous_page == EDITOR_PAGE and page != EDITOR_PAGE:
        leave_editor(get_editor_state())

    # Render selected page
    if page == SEARCH_PAGE:
        render_search_page()
    else:
        render_editor_page()


if __name__ == "__main__":
    main()
