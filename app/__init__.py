"""
Image Caption Studio Application Package

Contains the Streamlit application organized into:
- state.py: Session state management
- main.py: Main entry point with sidebar navigation
- pages/: Search and editor page modules
- services/: Annotation canvas, photo search and selection storage
"""
