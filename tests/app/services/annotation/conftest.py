"""
Shared pytest fixtures for annotation tests
"""
import pytest

from app.services.annotation import (
    CanvasExporter,
    CanvasSurface,
    EditorController,
    Scene,
    ShapeObject,
    TextObject,
)


@pytest.fixture
def empty_scene():
    """Create an empty 500x500 scene"""
    return Scene(500, 500, "lightgray")


@pytest.fixture
def sample_rectangle():
    """Create the default blue rectangle"""
    return ShapeObject.rectangle(left=100, top=100, width=120, height=80, fill="blue")


@pytest.fixture
def sample_circle():
    """Create the default red circle"""
    return ShapeObject.circle(left=150, top=150, radius=50, fill="red")


@pytest.fixture
def sample_text():
    """Create the default text object"""
    return TextObject(left=100, top=100, content="Type Here", font_size=24, fill="black")


@pytest.fixture
def surface(fake_loader):
    """Create a CanvasSurface with a fake loader"""
    canvas = CanvasSurface(loader=fake_loader, strict_shapes=False)
    yield canvas
    canvas.teardown()


@pytest.fixture
def strict_surface(fake_loader):
    """Create a CanvasSurface that rejects unknown shape kinds"""
    canvas = CanvasSurface(loader=fake_loader, strict_shapes=True)
    yield canvas
    canvas.teardown()


@pytest.fixture
def controller(selection_store, fake_loader):
    """Create an EditorController whose surfaces use the fake loader"""
    return EditorController(
        selection_store,
        surface_factory=lambda: CanvasSurface(loader=fake_loader, strict_shapes=False),
    )


@pytest.fixture
def temp_exporter(tmp_path):
    """Create a CanvasExporter writing to a temporary directory"""
    return CanvasExporter(output_dir=tmp_path / "exports")
