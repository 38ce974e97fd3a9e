import logging
from typing import Optional

import anyio.to_thread
import httpx

from config import settings
from .client import ApiClient
from .errors import VerifierError
from .image_prep import ImagePreparer
from .models import VerificationOutcome, VerifierConfig
from .signing import RequestSigner, build_parameters
from .validator import ResponseValidator

logger = logging.getLogger(__name__)


class Verifier:
    """
    Runs one card verification: prepare image, sign, call OCR, match text.

    Instances hold only read-only configuration and may serve concurrent calls.
    """

    def __init__(
        self,
        config: VerifierConfig,
        ocr_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.preparer = ImagePreparer()
        self.signer = RequestSigner(config.app_key)
        self.client = ApiClient(url=ocr_url, transport=transport)
        self.validator = ResponseValidator()
        self.nonce_length = settings.NONCE_LENGTH

    async def verify(self, image_data: bytes, institute: str, student_id: Optional[str] = None) -> None:
        """Return normally on a match, raise a VerifierError otherwise"""
        logger.info("Verifying card for %s:%s", institute, student_id)

        # Pillow decoding and resizing is CPU bound
        image = await anyio.to_thread.run_sync(self.preparer.prepare, image_data)

        params = build_parameters(self.config.app_id, image, nonce_length=self.nonce_length)
        form = self.signer.sign_form(params)

        raw_response = await self.client.submit(form)
        logger.debug("OCR response: %s", raw_response)

        self.validator.validate(raw_response, institute, student_id)


async def run_verification(
    verifier: Verifier,
    image_data: bytes,
    institute: str,
    student_id: Optional[str] = None,
) -> VerificationOutcome:
    """
    Main entry point for a verification call.

    Returns:
        VerificationOutcome that is either verified or names the failure kind
    """
    try:
        await verifier.verify(image_data, institute, student_id)
    except VerifierError as e:
        logger.info("Verification failed for %s:%s: %s", institute, student_id, e.kind)
        return VerificationOutcome.from_error(e)

    return VerificationOutcome.success()
