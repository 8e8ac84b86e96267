"""
Annotation Scene Models

Dataclasses for the drawable objects on the annotation canvas, the scene that
orders them, and the layer summary derived from it.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Iterator, List, Optional, Union

from PIL import Image


class ShapeKind(str, Enum):
    """Shapes available from the toolbar"""
    CIRCLE = "circle"
    RECTANGLE = "rectangle"
    TRIANGLE = "triangle"


@dataclass
class DrawableObject:
    """
    Base class for everything painted on the canvas

    Attributes:
        left: X coordinate of the object's top-left corner
        top: Y coordinate of the object's top-left corner
        id: Session identity, assigned by the Scene when the object is added
    """
    type: ClassVar[str] = "object"

    left: float = 0
    top: float = 0
    id: Optional[int] = None

    def layer_fields(self) -> Dict[str, Any]:
        """Type-specific attributes shown in the layer summary"""
        return {}


@dataclass
class ImageObject(DrawableObject):
    """
    A decoded photo placed on the canvas

    Attributes:
        source_ref: URL or path the photo was loaded from
        width: Rendered width in canvas pixels
        height: Rendered height in canvas pixels
        bitmap: Decoded pixels at their original size
    """
    type: ClassVar[str] = "image"

    source_ref: str = ""
    width: float = 0
    height: float = 0
    bitmap: Optional[Image.Image] = field(default=None, repr=False, compare=False)

    @classmethod
    def scaled_to_width(
        cls,
        bitmap: Image.Image,
        target_width: float,
        left: float = 0,
        top: float = 0,
        source_ref: str = "",
    ) -> "ImageObject":
        """Create an image object scaled to target_width, keeping aspect ratio"""
        src_width, src_height = bitmap.size
        scale = target_width / src_width if src_width else 1.0
        return cls(
            left=left,
            top=top,
            source_ref=source_ref,
            width=target_width,
            height=round(src_height * scale),
            bitmap=bitmap,
        )

    def layer_fields(self) -> Dict[str, Any]:
        return {"width": self.width, "height": self.height}


@dataclass
class TextObject(DrawableObject):
    """
    A line of text that can be edited in place

    Attributes:
        content: The text itself
        font_size: Font size in pixels
        fill: Text colour
        font_family: Preferred font family
        editable: Whether in-place editing is allowed
    """
    type: ClassVar[str] = "text"

    content: str = ""
    font_size: int = 24
    fill: str = "black"
    font_family: str = "Arial"
    editable: bool = True

    def layer_fields(self) -> Dict[str, Any]:
        return {"text": self.content, "fill": self.fill, "font_size": self.font_size}


@dataclass
class ShapeObject(DrawableObject):
    """
    A filled circle, rectangle or triangle

    Circles keep width == height == 2 * radius so every shape has a box.
    """
    kind: ShapeKind = ShapeKind.RECTANGLE
    width: float = 0
    height: float = 0
    radius: Optional[float] = None
    fill: str = "black"

    @property
    def type(self) -> str:
        return self.kind.value

    @classmethod
    def circle(cls, left: float, top: float, radius: float, fill: str) -> "ShapeObject":
        return cls(
            left=left, top=top, kind=ShapeKind.CIRCLE,
            width=radius * 2, height=radius * 2, radius=radius, fill=fill,
        )

    @classmethod
    def rectangle(cls, left: float, top: float, width: float, height: float, fill: str) -> "ShapeObject":
        return cls(left=left, top=top, kind=ShapeKind.RECTANGLE, width=width, height=height, fill=fill)

    @classmethod
    def triangle(cls, left: float, top: float, width: float, height: float, fill: str) -> "ShapeObject":
        return cls(left=left, top=top, kind=ShapeKind.TRIANGLE, width=width, height=height, fill=fill)

    def layer_fields(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "fill": self.fill,
            "radius": self.radius,
        }


def _display_number(value: Optional[float]) -> Optional[float]:
    """Show whole floats as ints (100.0 -> 100)"""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


@dataclass(frozen=True)
class LayerEntry:
    """
    One row of the layer summary

    Attributes:
        index: 1-based position in paint order (1 = bottom)
        id: Stable identity of the object
        type: Type tag ("image", "text", "circle", "rectangle", "triangle")
    """
    index: int
    id: int
    type: str
    left: float
    top: float
    width: Optional[float] = None
    height: Optional[float] = None
    text: Optional[str] = None
    fill: Optional[str] = None
    font_size: Optional[int] = None
    radius: Optional[float] = None

    @classmethod
    def from_object(cls, index: int, obj: DrawableObject) -> "LayerEntry":
        return cls(
            index=index,
            id=obj.id,
            type=obj.type,
            left=obj.left,
            top=obj.top,
            **obj.layer_fields(),
        )

    @property
    def label(self) -> str:
        """Short description for the layer list, e.g. 'circle at (150, 150)'"""
        return f"{self.type} at ({_display_number(self.left)}, {_display_number(self.top)})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "id": self.id,
            "type": self.type,
            "left": self.left,
            "top": self.top,
            "width": self.width,
            "height": self.height,
            "text": self.text,
            "fill": self.fill,
            "font_size": self.font_size,
            "radius": self.radius,
        }


ObjectRef = Union[DrawableObject, int]
SceneListener = Callable[["Scene"], None]


class Scene:
    """
    Ordered collection of drawable objects for one editing session

    Insertion order is paint order (first = bottom). At most one object is
    selected; the selection is held by id and dropped when its object leaves
    the scene. Object ids start at 1 and are never reused.

    Every content mutation refreshes ``layers`` and then calls the
    subscribed listeners before returning.
    """

    def __init__(self, width: int, height: int, background: str):
        self._width = width
        self._height = height
        self._background = background
        self._objects: List[DrawableObject] = []
        self._selected_id: Optional[int] = None
        self._next_id = 1
        self._listeners: List[SceneListener] = []
        self.layers: List[LayerEntry] = []

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def background(self) -> str:
        return self._background

    @property
    def objects(self) -> List[DrawableObject]:
        """Snapshot of the objects in paint order"""
        return list(self._objects)

    @property
    def selected(self) -> Optional[DrawableObject]:
        """The selected object, or None"""
        if self._selected_id is None:
            return None
        return self.get(self._selected_id)

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[DrawableObject]:
        return iter(list(self._objects))

    def __contains__(self, ref: ObjectRef) -> bool:
        return self.get(ref) is not None

    def subscribe(self, listener: SceneListener) -> None:
        """Register a callable invoked after every content mutation"""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: SceneListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def get(self, ref: Optional[ObjectRef]) -> Optional[DrawableObject]:
        """Look up an object by id or by the object itself"""
        if ref is None:
            return None
        if isinstance(ref, DrawableObject):
            found = self.get(ref.id) if ref.id is not None else None
            return found if found is ref else None
        for obj in self._objects:
            if obj.id == ref:
                return obj
        return None

    def add_object(self, obj: DrawableObject) -> DrawableObject:
        """
        Add an object on top of the scene and select it

        Args:
            obj: Image, text or shape object not already in a scene

        Returns:
            The same object, with its id assigned
        """
        if not isinstance(obj, DrawableObject):
            raise TypeError(f"Cannot add {type(obj).__name__} to a scene")
        if obj.id is not None:
            raise ValueError(f"Object already has id {obj.id}; it belongs to a scene")

        obj.id = self._next_id
        self._next_id += 1
        self._objects.append(obj)
        self._selected_id = obj.id
        self._notify()
        return obj

    def remove_object(self, ref: Optional[ObjectRef]) -> bool:
        """Remove an object. Returns True if it was found and removed."""
        obj = self.get(ref)
        if obj is None:
            return False

        self._objects = [o for o in self._objects if o is not obj]
        if self._selected_id == obj.id:
            self._selected_id = None
        self._notify()
        return True

    def remove_selected(self) -> bool:
        """Remove the selected object, if any"""
        if self._selected_id is None:
            return False
        return self.remove_object(self._selected_id)

    def set_selection(self, ref: Optional[ObjectRef]) -> Optional[DrawableObject]:
        """
        Select an object, or clear the selection with None

        References to objects outside the scene clear the selection.
        Selection changes do not notify listeners.
        """
        obj = self.get(ref)
        self._selected_id = obj.id if obj is not None else None
        return obj

    def move_object(self, ref: ObjectRef, left: float, top: float) -> bool:
        """Move an object's top-left corner to (left, top)"""
        obj = self.get(ref)
        if obj is None:
            return False
        obj.left = left
        obj.top = top
        self._notify()
        return True

    def update_text(self, ref: ObjectRef, content: str) -> bool:
        """Replace the content of an editable text object"""
        obj = self.get(ref)
        if not isinstance(obj, TextObject) or not obj.editable:
            return False
        if obj.content == content:
            return False
        obj.content = content
        self._notify()
        return True

    def clear(self) -> None:
        """Drop every object and the selection. Ids keep counting up."""
        had_objects = bool(self._objects)
        self._objects = []
        self._selected_id = None
        if had_objects:
            self._notify()

    def layer_summary(self) -> List[LayerEntry]:
        """Recompute the layer summary from the current objects"""
        return [LayerEntry.from_object(i, obj) for i, obj in enumerate(self._objects, start=1)]

    def _notify(self) -> None:
        self.layers = self.layer_summary()
        for listener in list(self._listeners):
            listener(self)
