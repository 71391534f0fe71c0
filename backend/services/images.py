"""Upload reading and image normalization."""

from __future__ import annotations

from io import BytesIO

from fastapi import UploadFile
from PIL import Image, ImageOps, UnidentifiedImageError

from .errors import UploadTooLargeError

JPEG_CONTENT_TYPE = "image/jpeg"
MAX_IMAGE_DIMENSION = 2048
JPEG_QUALITY = 85
UPLOAD_CHUNK_SIZE = 64 * 1024


async def read_upload_file(upload: UploadFile, max_bytes: int) -> bytes:
    """Read an upload fully, failing as soon as it grows past ``max_bytes``."""
    buffer = bytearray()
    while True:
        chunk = await upload.read(UPLOAD_CHUNK_SIZE)
        if not chunk:
            break
        buffer.extend(chunk)
        if len(buffer) > max_bytes:
            raise UploadTooLargeError(
                f"Image must be at most {max_bytes // (1024 * 1024)} MiB"
            )
    return bytes(buffer)


def process_image_bytes(data: bytes) -> tuple[bytes, str]:
    """Validate an image payload and re-encode it as a bounded JPEG.

    Raises ValueError when ``data`` is not a readable image.
    """
    if not data:
        raise ValueError("Image file is empty")

    try:
        with Image.open(BytesIO(data)) as probe:
            probe.verify()
        with Image.open(BytesIO(data)) as image:
            normalized = ImageOps.exif_transpose(image) or image
            if normalized.mode != "RGB":
                normalized = normalized.convert("RGB")
            normalized.thumbnail((MAX_IMAGE_DIMENSION, MAX_IMAGE_DIMENSION))
            output = BytesIO()
            normalized.save(output, format="JPEG", quality=JPEG_QUALITY, optimize=True)
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
    ) as exc:
        raise ValueError("Only image files are allowed") from exc

    return output.getvalue(), JPEG_CONTENT_TYPE
