"""
Application configuration settings for Image Caption Studio UI and services
"""
import os
from pathlib import Path

# Project directories
# Support bundled mode via environment variable override
PROJECT_ROOT = Path(os.environ.get('IMAGE_CAPTION_ROOT', Path(__file__).parent.parent))
DATA_DIR = PROJECT_ROOT / "data"
EXPORT_DIR = DATA_DIR / "exports"

# One persisted slot per browser carrying the chosen image across reloads
SELECTION_DIR = DATA_DIR / "selections"
SELECTION_KEY = "selectedImage"
# Query parameter holding the browser token that names the slot
BROWSER_ID_PARAM = "sid"

# Logging
LOG_LEVEL = os.getenv('IMAGE_CAPTION_LOG_LEVEL', 'INFO').upper()

# Unsplash search settings
# The access key is configured out of process, never committed
UNSPLASH_API_URL = os.getenv('UNSPLASH_API_URL', 'https://api.unsplash.com').rstrip('/')
UNSPLASH_ACCESS_KEY = os.getenv('UNSPLASH_ACCESS_KEY', '')
SEARCH_PAGE_SIZE = 8
SEARCH_TIMEOUT = float(os.getenv('SEARCH_TIMEOUT', '10'))

# UI settings
THUMBNAIL_SIZE = 300
SEARCH_GRID_COLUMNS = 3

# Canvas settings
CANVAS_WIDTH = 500
CANVAS_HEIGHT = 500
CANVAS_BACKGROUND = "lightgray"

# Loaded photos are scaled to this width and placed at this offset
TARGET_IMAGE_WIDTH = 400
IMAGE_OFFSET = (50, 50)

# Image loading
IMAGE_LOAD_TIMEOUT = float(os.getenv('IMAGE_LOAD_TIMEOUT', '20'))
IMAGE_LOADER_WORKERS = 2

# Toolbar defaults
TEXT_DEFAULTS = {
    "content": "Type Here",
    "left": 100,
    "top": 100,
    "font_size": 24,
    "fill": "black",
    "font_family": "Arial",
}

SHAPE_DEFAULTS = {
    "circle": {"left": 150, "top": 150, "radius": 50, "fill": "red"},
    "rectangle": {"left": 100, "top": 100, "width": 120, "height": 80, "fill": "blue"},
    "triangle": {"left": 120, "top": 120, "width": 100, "height": 100, "fill": "green"},
}

# Export
EXPORT_FILENAME = "edited-image.png"
EXPORT_MIME = "image/png"

# Unknown shape kinds are ignored unless strict mode is on (development builds)
STRICT_SHAPE_KINDS = os.getenv('STRICT_SHAPE_KINDS', 'false').lower() == 'true'
