"""
Services for Image Caption Studio

- annotation/: scene model, renderer and canvas surface for the editor
- search/: Unsplash photo search client
- selection.py: persisted fallback for the selected image
"""
