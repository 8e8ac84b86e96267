"""
Scene Renderer

Pure rendering of a Scene to a PIL image. The renderer never mutates the
scene; the same scene always renders to the same pixels.
"""
from functools import lru_cache
from typing import Tuple

from PIL import Image, ImageDraw, ImageFont

from .models import DrawableObject, ImageObject, Scene, ShapeKind, ShapeObject, TextObject

Bounds = Tuple[float, float, float, float]

# Tried in order when a family has no font file of its own name
FALLBACK_FONT_FILES = ("DejaVuSans.ttf", "LiberationSans-Regular.ttf")


@lru_cache(maxsize=32)
def load_font(family: str, size: int) -> ImageFont.ImageFont:
    """
    Load a TrueType font for the given family and size

    Falls back to common system fonts, then to Pillow's bundled default font
    at the requested size.
    """
    candidates = (f"{family}.ttf", f"{family.lower()}.ttf") + FALLBACK_FONT_FILES
    for filename in candidates:
        try:
            return ImageFont.truetype(filename, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def text_bounds(obj: TextObject) -> Bounds:
    """Bounding box (left, top, right, bottom) of a text object on the canvas"""
    font = load_font(obj.font_family, obj.font_size)
    _, _, right, bottom = font.getbbox(obj.content or " ")
    return (
        obj.left,
        obj.top,
        obj.left + max(right, 1),
        obj.top + max(bottom, obj.font_size),
    )


def object_bounds(obj: DrawableObject) -> Bounds:
    """Bounding box (left, top, right, bottom) of any drawable object"""
    if isinstance(obj, TextObject):
        return text_bounds(obj)
    width = getattr(obj, "width", 0) or 0
    height = getattr(obj, "height", 0) or 0
    return (obj.left, obj.top, obj.left + width, obj.top + height)


def _paint_image(canvas: Image.Image, obj: ImageObject) -> None:
    if obj.bitmap is None:
        return
    size = (max(int(round(obj.width)), 1), max(int(round(obj.height)), 1))
    resized = obj.bitmap.resize(size, Image.Resampling.LANCZOS)
    mask = resized if resized.mode == "RGBA" else None
    canvas.paste(resized, (int(round(obj.left)), int(round(obj.top))), mask)


def _paint_shape(draw: ImageDraw.ImageDraw, obj: ShapeObject) -> None:
    left, top = obj.left, obj.top
    right, bottom = left + obj.width, top + obj.height

    if obj.kind == ShapeKind.CIRCLE:
        draw.ellipse([left, top, right, bottom], fill=obj.fill)
    elif obj.kind == ShapeKind.RECTANGLE:
        draw.rectangle([left, top, right, bottom], fill=obj.fill)
    elif obj.kind == ShapeKind.TRIANGLE:
        # Apex at top-centre, base along the bottom edge
        draw.polygon([(left + obj.width / 2, top), (right, bottom), (left, bottom)], fill=obj.fill)


def _paint_text(draw: ImageDraw.ImageDraw, obj: TextObject) -> None:
    font = load_font(obj.font_family, obj.font_size)
    draw.text((obj.left, obj.top), obj.content, fill=obj.fill, font=font)


def render_scene(scene: Scene) -> Image.Image:
    """
    Composite every object in paint order over the scene background

    Args:
        scene: Scene to render

    Returns:
        RGB PIL Image of size (scene.width, scene.height)
    """
    canvas = Image.new("RGB", (scene.width, scene.height), scene.background)
    draw = ImageDraw.Draw(canvas)

    for obj in scene:
        if isinstance(obj, ImageObject):
            _paint_image(canvas, obj)
        elif isinstance(obj, ShapeObject):
            _paint_shape(draw, obj)
        elif isinstance(obj, TextObject):
            _paint_text(draw, obj)

    return canvas
