import base64
import io
import logging
import math
from typing import Optional

from PIL import Image, UnidentifiedImageError
import pillow_heif

from config import MAX_IMAGE_BYTES, RESIZE_TARGET_BYTES
from .errors import ImageDataError, JpegEncodeError

pillow_heif.register_heif_opener()

logger = logging.getLogger(__name__)

# Characters of base64 output that are not safe inside a urlencoded form field
PAYLOAD_ESCAPES = (("=", "%3D"), ("+", "%2B"), ("/", "%2F"))


def resize_scale(byte_length: int) -> Optional[float]:
    """Return the factor to shrink both image sides by, or None if no resize is needed."""
    if byte_length <= MAX_IMAGE_BYTES:
        return None
    return math.sqrt(byte_length / RESIZE_TARGET_BYTES)


def escape_payload(b64_text: str) -> str:
    for char, escaped in PAYLOAD_ESCAPES:
        b64_text = b64_text.replace(char, escaped)
    return b64_text


def unescape_payload(payload: str) -> str:
    for char, escaped in PAYLOAD_ESCAPES:
        payload = payload.replace(escaped, char)
    return payload


class ImagePreparer:
    """
    Turns an uploaded card photo into the image field expected by the OCR API:
    a JPEG, shrunk when the upload is over the size limit, base64 encoded and
    escaped for a form body.
    """

    def __init__(self, jpeg_quality: int = 75):
        self.jpeg_quality = jpeg_quality
        self.max_bytes = MAX_IMAGE_BYTES

    def load_image(self, image_data: bytes) -> Image.Image:
        """Decode raw bytes (JPEG / PNG / HEIC / ...) into a Pillow image"""
        try:
            img = Image.open(io.BytesIO(image_data))
            img.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            raise ImageDataError(f"Failed to decode image: {e}") from e
        return img

    def resize(self, img: Image.Image, byte_length: int) -> Image.Image:
        """Shrink the image so its footprint lands near the size limit"""
        scale = resize_scale(byte_length)
        if scale is None:
            return img

        width = max(1, round(img.width / scale))
        height = max(1, round(img.height / scale))
        logger.info(
            "Rescaling %dx%d image (%d bytes) to %dx%d",
            img.width, img.height, byte_length, width, height,
        )
        return img.resize((width, height), Image.Resampling.BICUBIC)

    def encode_jpeg(self, img: Image.Image) -> bytes:
        buffer = io.BytesIO()
        try:
            img.convert("RGB").save(buffer, "JPEG", quality=self.jpeg_quality)
        except (OSError, ValueError) as e:
            raise JpegEncodeError(f"Failed to encode JPEG: {e}") from e
        return buffer.getvalue()

    def prepare(self, image_data: bytes) -> str:
        """
        Produce the escaped base64 JPEG payload for the request form.

        Raises ImageDataError for undecodable input and JpegEncodeError when
        the encoder fails.
        """
        img = self.load_image(image_data)
        img = self.resize(img, len(image_data))
        jpeg_data = self.encode_jpeg(img)

        if len(jpeg_data) > self.max_bytes:
            logger.warning(
                "Encoded card image is %d bytes, above the %d byte limit",
                len(jpeg_data), self.max_bytes,
            )

        return escape_payload(base64.b64encode(jpeg_data).decode("ascii"))
