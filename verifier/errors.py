from typing import Optional


class VerifierError(Exception):
    """Base class for every failure a verification call can end with."""

    kind = "verifier_error"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ImageDataError(VerifierError):
    """Input bytes could not be decoded as an image."""

    kind = "image_data_error"


class JpegEncodeError(VerifierError):
    """Re-encoding the card image to JPEG failed."""

    kind = "jpeg_encode_error"


class ApiServerConnectionError(VerifierError):
    """The OCR service could not be reached."""

    kind = "api_server_connection_error"


class ApiServerError(VerifierError):
    """The OCR service answered with an error status or an unreadable payload."""

    kind = "api_server_error"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ServerResponseError(VerifierError):
    """The OCR service rejected the request, or its body could not be read."""

    kind = "server_response_error"


class InstituteNotMatch(VerifierError):
    kind = "institute_not_match"

    def __init__(self, message: str = "Institute not found on card"):
        super().__init__(message)


class StudentIdNotMatch(VerifierError):
    kind = "student_id_not_match"

    def __init__(self, message: str = "Student id not found on card"):
        super().__init__(message)
