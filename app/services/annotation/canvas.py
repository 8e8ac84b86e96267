"""
Annotation Canvas - owns the scene for one editing session

The surface turns toolbar actions and pointer gestures into Scene
mutations, keeps a rendered raster in sync with the scene, and applies
asynchronous image loads.

Image loads are stamped with an epoch. Each call to load_image (and
teardown) advances the epoch, so a load that finishes after being
superseded, or after the surface is gone, is discarded instead of touching
the scene.
"""
import logging
from concurrent.futures import Future, wait
from dataclasses import dataclass
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw

from app import config
from .errors import ImageDecodeFailure, InvalidShapeKind
from .exporter import encode_png
from .loader import ImageLoader
from .models import (
    DrawableObject,
    ImageObject,
    LayerEntry,
    Scene,
    ShapeKind,
    ShapeObject,
    TextObject,
)
from .renderer import object_bounds, render_scene

logger = logging.getLogger(__name__)

DELETE_KEYS = ("Delete", "Backspace")
SELECTION_OUTLINE = "#1e90ff"


@dataclass
class LoadOutcome:
    """
    Result of applying one finished image load

    Attributes:
        epoch: Epoch the load was started in
        url: Source URL
        status: "applied", "failed" or "discarded"
        error: Decode failure when status is "failed"
    """
    epoch: int
    url: str
    status: str
    error: Optional[ImageDecodeFailure] = None


@dataclass
class _PendingLoad:
    epoch: int
    url: str
    future: Future


class CanvasSurface:
    """
    Drawing surface for one editing session

    A surface is single-use: after teardown() every operation is a no-op.
    To start over with a different image, tear down and create a new one.
    """

    def __init__(
        self,
        width: int = config.CANVAS_WIDTH,
        height: int = config.CANVAS_HEIGHT,
        background: str = config.CANVAS_BACKGROUND,
        loader: Optional[ImageLoader] = None,
        strict_shapes: bool = config.STRICT_SHAPE_KINDS,
    ):
        """
        Initialize surface

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            background: Background fill colour
            loader: Image loader (default: a private ImageLoader owned by this surface)
            strict_shapes: Raise InvalidShapeKind instead of ignoring unknown shapes
        """
        self.scene = Scene(width, height, background)
        self.scene.subscribe(self._on_scene_changed)
        self.strict_shapes = strict_shapes

        self._owns_loader = loader is None
        self._loader = loader if loader is not None else ImageLoader()
        self._epoch = 0
        self._pending: List[_PendingLoad] = []
        self._raster: Optional[Image.Image] = None
        self._revision = 0
        self._drag: Optional[Tuple[float, float, float, float]] = None
        self._torn_down = False
        self.last_error: Optional[ImageDecodeFailure] = None

    def __enter__(self) -> "CanvasSurface":
        return self

    def __exit__(self, *args):
        self.teardown()

    @property
    def is_alive(self) -> bool:
        return not self._torn_down

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def revision(self) -> int:
        """Count of scene changes; bumps on every mutation"""
        return self._revision

    @property
    def is_loading(self) -> bool:
        """True while a load for the current epoch is still in flight"""
        return any(p.epoch == self._epoch for p in self._pending)

    @property
    def layers(self) -> List[LayerEntry]:
        return list(self.scene.layers)

    # ------------------------------------------------------------------
    # Image loading
    # ------------------------------------------------------------------

    def load_image(self, url: Optional[str]) -> int:
        """
        Clear the canvas and start loading url (if given)

        Args:
            url: Image URL or path, or None for a blank canvas

        Returns:
            Epoch of this load
        """
        if self._torn_down:
            return self._epoch

        self._epoch += 1
        self.last_error = None
        self._drag = None
        self.scene.clear()
        self._raster = None

        if url:
            future = self._loader.submit(url)
            self._pending.append(_PendingLoad(self._epoch, url, future))

        return self._epoch

    def process_pending(self, timeout: Optional[float] = None) -> List[LoadOutcome]:
        """
        Apply every finished image load

        Runs on the UI thread. Loads from an older epoch are discarded.

        Args:
            timeout: Seconds to wait for in-flight loads first (None = don't wait)

        Returns:
            Outcomes of the loads that finished
        """
        if self._torn_down:
            return []

        if timeout is not None and self._pending:
            wait([p.future for p in self._pending], timeout=timeout)

        # Partition in one pass; a load may finish while we scan
        finished, still_running = [], []
        for pending in self._pending:
            (finished if pending.future.done() else still_running).append(pending)
        self._pending = still_running
        return [self._complete_load(p) for p in finished]

    def _complete_load(self, pending: _PendingLoad) -> LoadOutcome:
        if self._torn_down or pending.epoch != self._epoch:
            logger.info(f"Discarding stale image load (epoch {pending.epoch}): {pending.url}")
            return LoadOutcome(pending.epoch, pending.url, "discarded")

        try:
            bitmap = pending.future.result()
        except Exception as e:
            error = e if isinstance(e, ImageDecodeFailure) else ImageDecodeFailure(pending.url, f"decode failed: {e}")
            logger.warning(str(error))
            self.last_error = error
            return LoadOutcome(pending.epoch, pending.url, "failed", error)

        left, top = config.IMAGE_OFFSET
        image_obj = ImageObject.scaled_to_width(
            bitmap,
            config.TARGET_IMAGE_WIDTH,
            left=left,
            top=top,
            source_ref=pending.url,
        )
        self.scene.add_object(image_obj)
        logger.info(f"Loaded image {pending.url} ({bitmap.width}x{bitmap.height})")
        return LoadOutcome(pending.epoch, pending.url, "applied")

    # ------------------------------------------------------------------
    # Toolbar actions
    # ------------------------------------------------------------------

    def add_text(self, content: Optional[str] = None) -> Optional[TextObject]:
        """Add an editable text object with the default style and select it"""
        if self._torn_down:
            return None

        defaults = dict(config.TEXT_DEFAULTS)
        if content is not None:
            defaults["content"] = content
        text = TextObject(editable=True, **defaults)
        self.scene.add_object(text)
        return text

    def add_shape(self, kind) -> Optional[ShapeObject]:
        """
        Add a circle, rectangle or triangle with default size and colour

        Args:
            kind: ShapeKind or its string value

        Returns:
            The new shape, or None if the surface is gone or kind is unknown

        Raises:
            InvalidShapeKind: For unknown kinds when strict_shapes is set
        """
        if self._torn_down:
            return None

        try:
            shape_kind = ShapeKind(kind)
        except ValueError:
            error = InvalidShapeKind(kind)
            if self.strict_shapes:
                raise error
            logger.warning(f"Ignoring shape request: {error}")
            return None

        defaults = config.SHAPE_DEFAULTS[shape_kind.value]
        if shape_kind == ShapeKind.CIRCLE:
            shape = ShapeObject.circle(**defaults)
        elif shape_kind == ShapeKind.RECTANGLE:
            shape = ShapeObject.rectangle(**defaults)
        else:
            shape = ShapeObject.triangle(**defaults)

        self.scene.add_object(shape)
        return shape

    def remove_selected(self) -> bool:
        """Remove the selected object"""
        if self._torn_down:
            return False
        self._drag = None
        return self.scene.remove_selected()

    def edit_selected_text(self, content: str) -> bool:
        """Commit an in-place edit of the selected text object"""
        if self._torn_down:
            return False
        return self.scene.update_text(self.scene.selected, content)

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------

    def hit_test(self, x: float, y: float) -> Optional[DrawableObject]:
        """Topmost object whose bounding box contains (x, y)"""
        for obj in reversed(self.scene.objects):
            left, top, right, bottom = object_bounds(obj)
            if left <= x <= right and top <= y <= bottom:
                return obj
        return None

    def pointer_down(self, x: float, y: float) -> Optional[DrawableObject]:
        """Select the object under the pointer (or clear selection) and start a drag"""
        if self._torn_down:
            return None

        hit = self.hit_test(x, y)
        self.scene.set_selection(hit)
        self._drag = (x, y, hit.left, hit.top) if hit is not None else None
        return hit

    def pointer_move(self, x: float, y: float) -> bool:
        """Drag the selected object by the pointer's offset from pointer_down"""
        if self._torn_down or self._drag is None or self.scene.selected is None:
            return False

        start_x, start_y, start_left, start_top = self._drag
        return self.scene.move_object(
            self.scene.selected,
            start_left + (x - start_x),
            start_top + (y - start_y),
        )

    def pointer_up(self) -> None:
        self._drag = None

    def key_press(self, key: str) -> bool:
        """Delete/Backspace remove the selection; other keys are ignored"""
        if key in DELETE_KEYS:
            return self.remove_selected()
        return False

    def move_selected_to(self, x: float, y: float) -> bool:
        """Place the selected object's top-left corner at (x, y)"""
        if self._torn_down or self.scene.selected is None:
            return False
        return self.scene.move_object(self.scene.selected, x, y)

    # ------------------------------------------------------------------
    # Rendering and export
    # ------------------------------------------------------------------

    def _on_scene_changed(self, scene: Scene) -> None:
        self._revision += 1
        self._raster = None

    def render(self, show_selection: bool = False) -> Optional[Image.Image]:
        """
        Current raster of the scene

        Args:
            show_selection: Outline the selected object (display only)

        Returns:
            RGB PIL Image, or None if the surface has been torn down
        """
        if self._torn_down:
            return None

        if self._raster is None:
            self._raster = render_scene(self.scene)

        selected = self.scene.selected
        if not show_selection or selected is None:
            return self._raster

        display = self._raster.copy()
        ImageDraw.Draw(display).rectangle(object_bounds(selected), outline=SELECTION_OUTLINE, width=2)
        return display

    def export_png(self) -> Optional[bytes]:
        """Flatten the current scene to PNG bytes"""
        raster = self.render()
        if raster is None:
            return None
        return encode_png(raster)

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def teardown(self) -> None:
        """
        Release the raster, pending loads and scene listener

        Idempotent. Loads still in flight finish in the background and are
        discarded.
        """
        if self._torn_down:
            return

        self._torn_down = True
        self._epoch += 1
        self._pending = []
        self._drag = None
        self._raster = None
        self.scene.unsubscribe(self._on_scene_changed)
        if self._owns_loader:
            self._loader.shutdown()
        logger.info("Canvas surface torn down")
