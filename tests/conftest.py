import io
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import report_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from report_toolkit.core.models import ImageSource


def encode_image(width: int, height: int, color="white", fmt: str = "PNG") -> bytes:
    """Encode a solid-colour image."""
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color=color).save(buffer, format=fmt)
    return buffer.getvalue()


# Common test fixtures
@pytest.fixture
def make_source():
    """Factory for ImageSource objects backed by real PNG bytes."""
    def _make(width: int = 400, height: int = 300, color="white", name: str = "photo.png") -> ImageSource:
        return ImageSource(
            data=encode_image(width, height, color),
            mime_type="image/png",
            width=width,
            height=height,
            name=name,
        )
    return _make


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image on disk."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path


@pytest.fixture
def image_bytes():
    """Encoder for solid-colour image bytes: image_bytes(w, h, color, fmt)."""
    return encode_image
