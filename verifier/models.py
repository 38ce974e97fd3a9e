from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, Field

from .errors import ApiServerError, VerifierError


@dataclass(frozen=True)
class VerifierConfig:
    """Tencent AI application credentials, shared read-only across calls."""

    app_id: int
    app_key: str

    @classmethod
    def from_settings(cls, settings) -> "VerifierConfig":
        return cls(app_id=settings.TENCENT_APP_ID, app_key=settings.TENCENT_APP_KEY)


class OcrItem(BaseModel):
    item: str
    itemstring: str


class OcrData(BaseModel):
    angle: str = ""
    item_list: List[OcrItem] = Field(default_factory=list)


class OcrResponse(BaseModel):
    """Body returned by the business card OCR endpoint."""

    ret: int = Field(ge=0)
    msg: str
    # Rejected requests may come back without a data section
    data: OcrData = Field(default_factory=OcrData)


class VerificationOutcome(BaseModel):
    """Terminal result of one verification call."""

    verified: bool
    error: Optional[str] = None
    detail: Optional[str] = None
    status_code: Optional[int] = None

    @classmethod
    def success(cls) -> "VerificationOutcome":
        return cls(verified=True)

    @classmethod
    def from_error(cls, error: VerifierError) -> "VerificationOutcome":
        status_code = error.status_code if isinstance(error, ApiServerError) else None
        return cls(
            verified=False,
            error=error.kind,
            detail=error.message or None,
            status_code=status_code,
        )
