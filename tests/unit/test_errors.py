import pytest

from roam.core.errors import (
    HTTP_STATUS,
    AssistantUnavailable,
    ErrorCode,
    InvalidAmount,
    InvalidExpense,
    InvalidTransition,
    MissingDateRange,
    NotFound,
    RoamError,
)


def test_every_code_has_http_status():
    for code in ErrorCode:
        assert code in HTTP_STATUS


def test_error_codes_and_statuses():
    assert InvalidTransition("x").code == ErrorCode.INVALID_TRANSITION
    assert InvalidTransition("x").http_status == 409
    assert NotFound("x").http_status == 404
    assert InvalidAmount("x").http_status == 400
    assert InvalidExpense("x").http_status == 400
    assert MissingDateRange("x").http_status == 400
    assert AssistantUnavailable("x").http_status == 503


def test_all_errors_share_base():
    for cls in (InvalidTransition, InvalidAmount, InvalidExpense, MissingDateRange, NotFound):
        err = cls("boom")
        assert isinstance(err, RoamError)
        assert err.message == "boom"
        assert str(err) == "boom"


def test_base_error_requires_a_code():
    with pytest.raises(TypeError):
        RoamError("no code")
