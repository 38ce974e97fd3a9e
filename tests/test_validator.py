import json

import pytest

from verifier.errors import (
    ApiServerError,
    InstituteNotMatch,
    ServerResponseError,
    StudentIdNotMatch,
)
from verifier.models import VerificationOutcome
from verifier.validator import ResponseValidator


def ocr_body(*itemstrings, ret=0, msg="ok"):
    return json.dumps({
        "ret": ret,
        "msg": msg,
        "data": {
            "angle": "0",
            "item_list": [{"item": "x", "itemstring": s} for s in itemstrings],
        },
    })


@pytest.fixture
def validator():
    return ResponseValidator()


def test_institute_match_without_student_id(validator):
    result = validator.validate(ocr_body("Example University"), "Example University")

    assert result.ret == 0
    assert result.data.item_list[0].itemstring == "Example University"


def test_other_institute_is_rejected(validator):
    with pytest.raises(InstituteNotMatch):
        validator.validate(ocr_body("Example University"), "Other University")


def test_nonzero_ret_carries_service_message(validator):
    body = json.dumps({"ret": 1001, "msg": "quota exceeded"})

    with pytest.raises(ServerResponseError) as exc_info:
        validator.validate(body, "Example University")

    assert exc_info.value.message == "quota exceeded"


def test_unparsable_body(validator):
    with pytest.raises(ApiServerError) as exc_info:
        validator.validate("<html>502 Bad Gateway</html>", "Example University")

    assert exc_info.value.message == "Failed to parse API server response."
    assert exc_info.value.status_code is None


def test_body_with_wrong_shape_is_unparsable(validator):
    with pytest.raises(ApiServerError):
        validator.validate(json.dumps({"ret": "zero", "data": []}), "Example University")


def test_student_id_match(validator):
    body = ocr_body("16340025", "Name", "Example University")
    validator.validate(body, "Example University", "16340025")


def test_student_id_missing_from_card(validator):
    with pytest.raises(StudentIdNotMatch):
        validator.validate(ocr_body("Example University", "16340026"), "Example University", "16340025")


def test_institute_is_checked_before_student_id(validator):
    with pytest.raises(InstituteNotMatch):
        validator.validate(ocr_body("Somewhere Else"), "Example University", "16340025")


@pytest.mark.parametrize("items", [(), ("Example University",), ("Example University", "", "anything")])
def test_absent_student_id_never_fails_on_id(validator, items):
    try:
        validator.validate(ocr_body(*items), "Example University")
    except InstituteNotMatch:
        pass


def test_empty_student_id_is_a_claim(validator):
    with pytest.raises(StudentIdNotMatch):
        validator.validate(ocr_body("Example University"), "Example University", "")


def test_matching_is_exact(validator):
    with pytest.raises(InstituteNotMatch):
        validator.validate(ocr_body("Example  University", "example university"), "Example University")


def test_outcome_from_error_serializes_to_json():
    outcome = VerificationOutcome.from_error(ApiServerError("Server response code 502", status_code=502))

    assert json.loads(outcome.model_dump_json()) == {
        "verified": False,
        "error": "api_server_error",
        "detail": "Server response code 502",
        "status_code": 502,
    }


def test_negative_ret_is_unparsable(validator):
    with pytest.raises(ApiServerError) as exc_info:
        validator.validate(json.dumps({"ret": -1, "msg": "odd"}), "Example University")

    assert exc_info.value.message == "Failed to parse API server response."
