"""
Tests for builder.images.provider

Test Coverage:
- image_source_from_bytes(): MIME detection and EXIF-aware dimensions
- load_image_source(): File loading errors
- Data URL round trip
"""
import io

import pytest
from PIL import Image

from report_toolkit.builder.images import (
    ImageLoadError,
    image_source_from_bytes,
    image_source_from_data_url,
    load_image_source,
    open_image,
    to_data_url,
)


def test_source_from_png_bytes(image_bytes):
    source = image_source_from_bytes(image_bytes(320, 200), name="a.png")
    assert (source.width, source.height) == (320, 200)
    assert source.mime_type == "image/png"
    assert source.name == "a.png"


def test_source_from_jpeg_bytes(image_bytes):
    source = image_source_from_bytes(image_bytes(64, 48, fmt="JPEG"))
    assert source.mime_type == "image/jpeg"


def test_source_applies_exif_orientation():
    """A landscape JPEG tagged 'rotate 90' is reported as portrait."""
    img = Image.new("RGB", (300, 100), "red")
    exif = Image.Exif()
    exif[0x0112] = 6
    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", exif=exif)

    source = image_source_from_bytes(buffer.getvalue())

    assert (source.width, source.height) == (100, 300)
    assert open_image(source).size == (100, 300)


@pytest.mark.parametrize("data", [b"", b"not an image at all"])
def test_source_from_bad_bytes_raises(data):
    with pytest.raises(ImageLoadError):
        image_source_from_bytes(data)


def test_load_image_source(sample_image):
    source = load_image_source(sample_image)
    assert (source.width, source.height) == (200, 100)
    assert source.name == "sample.png"


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(ImageLoadError, match="not found"):
        load_image_source(tmp_path / "missing.jpg")


def test_data_url_round_trip(make_source):
    source = make_source(40, 30)
    url = to_data_url(source)
    assert url.startswith("data:image/png;base64,")
    decoded = image_source_from_data_url(url, name="x")
    assert decoded.data == source.data
    assert (decoded.width, decoded.height) == (40, 30)


@pytest.mark.parametrize("url", ["https://example.com/a.png", "data:image/png,raw", "data:image/png;base64,@@@"])
def test_bad_data_url_raises(url):
    with pytest.raises(ImageLoadError):
        image_source_from_data_url(url)


def test_open_image_converts_to_rgb():
    buffer = io.BytesIO()
    Image.new("RGBA", (10, 10), (0, 0, 0, 0)).save(buffer, format="PNG")
    source = image_source_from_bytes(buffer.getvalue())
    assert open_image(source).mode == "RGB"
