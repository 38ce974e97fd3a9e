import logging
from typing import Optional

import httpx

from config import settings
from .errors import ApiServerConnectionError, ApiServerError, ServerResponseError
from .signing import SignedRequestForm

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class ApiClient:
    """
    Sends signed forms to the business card OCR endpoint.

    No timeout is applied to the exchange; callers that need bounded latency
    wrap the call in their own deadline.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or settings.OCR_URL
        self._transport = transport

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=None, transport=self._transport)

    async def submit(self, form: SignedRequestForm) -> str:
        """POST the form and return the response body as text"""
        try:
            async with self._build_client() as client:
                async with client.stream(
                    "POST",
                    self.url,
                    content=form.encode(),
                    headers={"Content-Type": FORM_CONTENT_TYPE},
                ) as response:
                    logger.debug("OCR API responded with HTTP %s", response.status_code)
                    if response.status_code != httpx.codes.OK:
                        raise ApiServerError(
                            f"Server response code {response.status_code}",
                            status_code=response.status_code,
                        )
                    try:
                        body = await response.aread()
                    except httpx.HTTPError as e:
                        raise ServerResponseError(f"Failed to read response body: {e}") from e
        except httpx.TransportError as e:
            logger.warning("Error %r when requesting OCR API", e)
            raise ApiServerConnectionError(f"Failed to connect to OCR API: {e}") from e

        return body.decode("utf-8", errors="replace")
