import io
import os

import pytest
from PIL import Image


# Credentials must exist before config.py is imported.
os.environ["TENCENT_APP_ID"] = "1000001"
os.environ["TENCENT_APP_KEY"] = "test-app-key"
os.environ["OCR_URL"] = "https://ocr.test/fcgi-bin/ocr/ocr_bcocr"


@pytest.fixture
def anyio_backend():
    return "asyncio"


def make_image_bytes(size=(64, 48), mode="RGB", fmt="PNG") -> bytes:
    color = (200, 30, 30, 255)[: len(mode)] if mode in ("RGB", "RGBA") else 128
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, fmt)
    return buffer.getvalue()


@pytest.fixture
def card_png() -> bytes:
    return make_image_bytes()
