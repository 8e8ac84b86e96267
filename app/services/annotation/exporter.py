"""
Canvas Exporter

Export the flattened canvas as:
- PNG bytes (for browser download)
- PNG file in an export directory
"""
import io
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image

from app import config


def encode_png(image: Image.Image) -> bytes:
    """
    Encode an image as lossless PNG

    Args:
        image: PIL Image to encode

    Returns:
        PNG file contents
    """
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


class CanvasExporter:
    """
    Export rendered canvases as PNG downloads or files
    """

    def __init__(self, output_dir: Path = None):
        """
        Initialize exporter

        Args:
            output_dir: Output directory for file exports (default: data/exports)
        """
        if output_dir is None:
            output_dir = config.EXPORT_DIR
        self.output_dir = Path(output_dir)
        # (surface, epoch, revision, png) of the last encode
        self._cached: Optional[Tuple[object, int, int, bytes]] = None

    def export_bytes(self, surface) -> Optional[bytes]:
        """
        Export the surface's current raster as PNG bytes

        The encoding is reused until the surface's scene changes, so it is
        cheap to call on every Streamlit rerun.

        Args:
            surface: CanvasSurface to export

        Returns:
            PNG bytes, or None if the surface has been torn down
        """
        if not surface.is_alive:
            self._cached = None
            return None

        if self._cached is not None:
            cached_surface, epoch, revision, data = self._cached
            if cached_surface is surface and epoch == surface.epoch and revision == surface.revision:
                return data

        data = surface.export_png()
        self._cached = (surface, surface.epoch, surface.revision, data)
        return data

    def export_to_file(self, surface, filename: str = config.EXPORT_FILENAME) -> Optional[Path]:
        """
        Write the surface's current raster to <output_dir>/<filename>

        Args:
            surface: CanvasSurface to export
            filename: Output filename

        Returns:
            Path to the written file, or None if the surface has been torn down
        """
        data = self.export_bytes(surface)
        if data is None:
            return None

        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / filename
        output_path.write_bytes(data)
        return output_path
