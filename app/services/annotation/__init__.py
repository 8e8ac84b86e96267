"""
Annotation Service

Provides the scene model, renderer and canvas surface for captioning photos.

Usage:
    from app.services.annotation import CanvasSurface, ShapeKind

    # Start a session on a photo
    surface = CanvasSurface()
    surface.load_image("https://images.unsplash.com/photo-...")
    surface.process_pending(timeout=20)  # apply the finished load

    # Toolbar actions
    surface.add_text()
    surface.add_shape(ShapeKind.RECTANGLE)
    surface.remove_selected()

    # Layer listing, always in sync with the scene
    for layer in surface.layers:
        print(layer.label)

    # Export as PNG bytes (for browser download)
    png_bytes = surface.export_png()

    # End the session
    surface.teardown()

    # Or let the controller manage surfaces per image source
    from app.services.annotation import EditorController
    from app.services.selection import SelectionStore
    controller = EditorController(SelectionStore(browser_id))
    controller.open(image_url)
"""
from .models import (
    DrawableObject,
    ImageObject,
    TextObject,
    ShapeObject,
    ShapeKind,
    LayerEntry,
    Scene,
)
from .errors import ImageDecodeFailure, InvalidShapeKind
from .renderer import render_scene
from .loader import ImageLoader, fetch_image
from .canvas import CanvasSurface, LoadOutcome
from .controller import EditorController, EditorStatus
from .exporter import CanvasExporter, encode_png

__all__ = [
    "DrawableObject",
    "ImageObject",
    "TextObject",
    "ShapeObject",
    "ShapeKind",
    "LayerEntry",
    "Scene",
    "ImageDecodeFailure",
    "InvalidShapeKind",
    "render_scene",
    "ImageLoader",
    "fetch_image",
    "CanvasSurface",
    "LoadOutcome",
    "EditorController",
    "EditorStatus",
    "CanvasExporter",
    "encode_png",
]
