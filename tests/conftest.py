import io
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import pics2pdf
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from pics2pdf.core.models import ImageEntry


def encode_image(img: Image.Image, fmt: str = "PNG") -> bytes:
    """Encode a PIL image to bytes."""
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


# Common test fixtures
@pytest.fixture
def blob_factory():
    """Factory returning encoded image bytes of a given size."""
    def _create(width: int = 200, height: int = 100, fmt: str = "PNG", color: str = "white") -> bytes:
        return encode_image(Image.new("RGB", (width, height), color=color), fmt)
    return _create


@pytest.fixture
def entry_factory(blob_factory):
    """Factory to create ImageEntries with real (tiny) image data."""
    def _create(count: int, width: int = 40, height: int = 30):
        return [
            ImageEntry(
                image_ref=blob_factory(width, height),
                order=i,
                name=f"photo{i}.png",
            )
            for i in range(count)
        ]
    return _create


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image file."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
