# tests/test_response.py

from core.aggregator import build_gradebook
from core.response import ErrorCode, Response


def test_fail_derives_status_code():
    assert Response.fail(error=ErrorCode.NOT_FOUND).status_code == 404
    assert Response.fail(error=ErrorCode.EMPTY_SCOPE).status_code == 404
    assert Response.fail(error=ErrorCode.VALIDATION_FAILED).status_code == 400
    assert Response.fail(error=ErrorCode.NOT_FOUND, status_code=410).status_code == 410


def test_response_round_trip():
    response = Response.fail(detail="Nothing to show.", error=ErrorCode.EMPTY_SCOPE)
    restored = Response.from_dict(response.to_dict())

    assert not restored.success
    assert restored.error is ErrorCode.EMPTY_SCOPE
    assert restored.status_code == 404
    assert str(restored) == "Error: EMPTY_SCOPE"


def test_to_dict_serializes_summary(example_assessments, example_students, example_results):
    response = build_gradebook(example_assessments, example_students, example_results)

    data = response.to_dict()["data"]

    assert data["summary"]["totalWeight"] == 100.0
    assert data["summary"]["rows"][0]["student"]["id"] == "s1"
    assert data["summary"]["rows"][1]["scores"][1]["raw"] == "-"
