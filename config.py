from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Tencent AI Open Platform credentials
    TENCENT_APP_ID: int
    TENCENT_APP_KEY: str

    # Business card OCR endpoint
    OCR_URL: str = "https://api.ai.qq.com/fcgi-bin/ocr/ocr_bcocr"

    # Request signing
    NONCE_LENGTH: int = 30

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()

# The OCR service rejects images larger than 1 MiB
MAX_IMAGE_BYTES = 1048576

# Byte count the rescale heuristic aims for
RESIZE_TARGET_BYTES = 1000000
