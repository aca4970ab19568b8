"""
Module: builder.images.provider

Purpose:
    Image ingestion: turn uploaded files, bytes or data URLs into
    ImageSource values with natural pixel size and MIME type.

Key Functions:
    - load_image_source(): From a file path
    - image_source_from_bytes(): From raw encoded bytes
    - image_source_from_data_url(): From a ``data:image/...;base64,`` URL
    - to_data_url(): Back to a data URL (for the detector and previews)
    - open_image(): Decode an ImageSource to an upright PIL image

Dependencies:
    - PIL: Decoding, EXIF orientation
    - core.models: ImageSource

Used By:
    - builder.session: Image upload
    - builder.images.cropper: Cell rendering
    - report_toolkit.cli: --image arguments
"""

from __future__ import annotations

import base64
import binascii
import io
from pathlib import Path
from typing import Optional

from PIL import Image, ImageOps, UnidentifiedImageError

from report_toolkit.core.models import ImageSource

DEFAULT_MIME_TYPE = "application/octet-stream"


class ImageLoadError(Exception):
    """Uploaded data could not be decoded as an image."""
    pass


def image_source_from_bytes(data: bytes, name: Optional[str] = None) -> ImageSource:
    """
    Build an ImageSource from encoded image bytes.

    Dimensions are reported after applying EXIF orientation, matching what
    a browser displays.

    Raises:
        ImageLoadError: If the bytes are not a decodable image

    Example:
        >>> src = image_source_from_bytes(png_bytes, name="stage.png")
        >>> src.mime_type
        'image/png'
    """
    if not data:
        raise ImageLoadError(f"Empty image data: {name or '<bytes>'}")
    try:
        with Image.open(io.BytesIO(data)) as img:
            mime_type = Image.MIME.get(img.format or "", DEFAULT_MIME_TYPE)
            upright = ImageOps.exif_transpose(img)
            width, height = upright.size
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ImageLoadError(f"Cannot decode image {name or '<bytes>'}: {e}") from e

    return ImageSource(data=data, mime_type=mime_type, width=width, height=height, name=name)


def load_image_source(path: Path) -> ImageSource:
    """
    Read an image file into an ImageSource.

    Raises:
        ImageLoadError: If the file is missing or not an image
    """
    path = Path(path)
    if not path.is_file():
        raise ImageLoadError(f"Image not found: {path}")
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ImageLoadError(f"Cannot read image {path}: {e}") from e
    return image_source_from_bytes(data, name=path.name)


def image_source_from_data_url(url: str, name: Optional[str] = None) -> ImageSource:
    """
    Decode a ``data:<mime>;base64,<payload>`` URL.

    Raises:
        ImageLoadError: If the URL is not a base64 data URL or not an image
    """
    header, sep, payload = url.partition(",")
    if not sep or not header.startswith("data:") or ";base64" not in header:
        raise ImageLoadError("Expected a base64 data URL")
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageLoadError(f"Invalid base64 payload: {e}") from e
    return image_source_from_bytes(data, name=name)


def to_data_url(source: ImageSource) -> str:
    """Encode an ImageSource as a base64 data URL."""
    payload = base64.b64encode(source.data).decode("ascii")
    return f"data:{source.mime_type};base64,{payload}"


def open_image(source: ImageSource) -> Image.Image:
    """
    Decode an ImageSource into an upright RGB PIL image.

    Raises:
        ImageLoadError: If decoding fails
    """
    try:
        with Image.open(io.BytesIO(source.data)) as img:
            upright = ImageOps.exif_transpose(img)
            return upright.convert("RGB")
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ImageLoadError(f"Cannot decode image {source.name or '<bytes>'}: {e}") from e
