import logging
from typing import Optional

from pydantic import ValidationError

from .errors import ApiServerError, InstituteNotMatch, ServerResponseError, StudentIdNotMatch
from .models import OcrResponse

logger = logging.getLogger(__name__)


class ResponseValidator:
    """
    Checks the OCR result against the claimed identity.

    Matching is exact string equality on each extracted item; OCR noise such
    as stray spaces will produce a mismatch.
    """

    def parse(self, raw_text: str) -> OcrResponse:
        try:
            return OcrResponse.model_validate_json(raw_text)
        except ValidationError as e:
            logger.debug("Failed to parse OCR response: %s", e)
            raise ApiServerError("Failed to parse API server response.") from e

    def validate(self, raw_text: str, institute: str, student_id: Optional[str] = None) -> OcrResponse:
        """
        Raise the matching VerifierError unless the card shows the claimed
        institute and, when given, the claimed student id.
        """
        result = self.parse(raw_text)

        if result.ret != 0:
            raise ServerResponseError(result.msg)

        institute_match = False
        # No id claimed means there is nothing to match
        id_match = student_id is None

        for item in result.data.item_list:
            if item.itemstring == institute:
                institute_match = True
            if student_id is not None and item.itemstring == student_id:
                id_match = True

        if not institute_match:
            raise InstituteNotMatch()
        if not id_match:
            raise StudentIdNotMatch()

        return result
