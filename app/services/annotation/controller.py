"""
Editor Controller - binds one image source to one canvas surface

States:
    UNINITIALIZED -> open() -> LOADING (image source found) or READY (blank)
    LOADING       -> poll() once the load is applied or fails -> READY
    READY         -> toolbar actions -> READY
    LOADING/READY -> close() or open() with a new source -> UNINITIALIZED
"""
import logging
from enum import Enum
from typing import Callable, List, Optional

from .canvas import CanvasSurface, LoadOutcome
from .errors import ImageDecodeFailure
from .exporter import CanvasExporter
from .models import DrawableObject, LayerEntry, ShapeObject, TextObject
from ..selection import SelectionStore

logger = logging.getLogger(__name__)


class EditorStatus(str, Enum):
    """Lifecycle state of an editing session"""
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


class EditorController:
    """
    Per-session orchestration of the annotation canvas

    Re-running open() with the same source is a no-op, so it can be called
    on every Streamlit rerun without duplicating images or surfaces.
    """

    def __init__(
        self,
        store: SelectionStore,
        surface_factory: Callable[[], CanvasSurface] = CanvasSurface,
        exporter: Optional[CanvasExporter] = None,
    ):
        """
        Initialize controller

        Args:
            store: Persisted fallback for the selected image URL
            surface_factory: Creates a fresh CanvasSurface per session
            exporter: Encodes downloads (default: a new CanvasExporter)
        """
        self.store = store
        self.surface_factory = surface_factory
        self.exporter = exporter if exporter is not None else CanvasExporter()
        self.surface: Optional[CanvasSurface] = None
        self.source: Optional[str] = None
        self.status = EditorStatus.UNINITIALIZED
        self.last_error: Optional[ImageDecodeFailure] = None

    def open(self, image_url: Optional[str] = None) -> EditorStatus:
        """
        Start (or keep) a session for image_url

        Args:
            image_url: URL passed at navigation time; falls back to the store

        Returns:
            Status after opening
        """
        source = image_url or self.store.get()

        if self.surface is not None and self.surface.is_alive and source == self.source:
            return self.status

        self._teardown_surface()

        self.surface = self.surface_factory()
        self.source = source
        self.last_error = None
        self.surface.load_image(source)
        self.status = EditorStatus.LOADING if source else EditorStatus.READY
        logger.info(f"Editor opened ({self.status.value}): {source or 'blank canvas'}")
        return self.status

    def poll(self, timeout: Optional[float] = None) -> List[LoadOutcome]:
        """
        Apply finished image loads and leave LOADING once none remain

        Args:
            timeout: Seconds to wait for an in-flight load (None = don't wait)

        Returns:
            Outcomes of loads applied or discarded during this poll
        """
        if self.surface is None:
            return []

        outcomes = self.surface.process_pending(timeout=timeout)
        for outcome in outcomes:
            if outcome.status == "failed":
                self.last_error = outcome.error

        if self.status == EditorStatus.LOADING and not self.surface.is_loading:
            self.status = EditorStatus.READY
        return outcomes

    def close(self) -> None:
        """End the session, forget the stored image and return to UNINITIALIZED"""
        self._teardown_surface()
        self.store.clear()
        self.source = None
        self.last_error = None
        self.status = EditorStatus.UNINITIALIZED
        logger.info("Editor closed")

    def _teardown_surface(self) -> None:
        if self.surface is not None:
            self.surface.teardown()
            self.surface = None
        self.status = EditorStatus.UNINITIALIZED

    def _active_surface(self) -> Optional[CanvasSurface]:
        if self.status == EditorStatus.UNINITIALIZED or self.surface is None:
            return None
        return self.surface

    @property
    def layers(self) -> List[LayerEntry]:
        surface = self._active_surface()
        return surface.layers if surface is not None else []

    @property
    def selected(self) -> Optional[DrawableObject]:
        surface = self._active_surface()
        return surface.scene.selected if surface is not None else None

    # Toolbar actions

    def add_text(self) -> Optional[TextObject]:
        surface = self._active_surface()
        return surface.add_text() if surface is not None else None

    def add_shape(self, kind) -> Optional[ShapeObject]:
        surface = self._active_surface()
        return surface.add_shape(kind) if surface is not None else None

    def remove_selected(self) -> bool:
        surface = self._active_surface()
        return surface.remove_selected() if surface is not None else False

    def select_at(self, x: float, y: float) -> Optional[DrawableObject]:
        surface = self._active_surface()
        if surface is None:
            return None
        hit = surface.pointer_down(x, y)
        surface.pointer_up()
        return hit

    def move_selected_to(self, x: float, y: float) -> bool:
        surface = self._active_surface()
        return surface.move_selected_to(x, y) if surface is not None else False

    def edit_selected_text(self, content: str) -> bool:
        surface = self._active_surface()
        return surface.edit_selected_text(content) if surface is not None else False

    def export_png(self) -> Optional[bytes]:
        surface = self._active_surface()
        return self.exporter.export_bytes(surface) if surface is not None else None
