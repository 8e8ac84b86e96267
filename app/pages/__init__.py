"""
Streamlit pages for Image Caption Studio
"""
from .search import render_search_page
from .editor import render_editor_page

__all__ = ["render_search_page", "render_editor_page"]
