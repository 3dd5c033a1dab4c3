import pytest

from authrules.errors import NotEnoughAccountKeys, RuleSetError, RuleSetException


@pytest.mark.parametrize(
    ("error", "code", "message"),
    [
        (RuleSetError.NUMERICAL_OVERFLOW, 0, "Numerical Overflow"),
        (RuleSetError.PAYLOAD_VEC_INDEX_ERROR, 4, "Could not index into PayloadVec"),
        (RuleSetError.NOT_IMPLEMENTED, 7, "Not implemented"),
        (RuleSetError.VALUE_OCCUPIED, 10, "Value in Payload or RuleSet is occupied"),
        (RuleSetError.NAME_TOO_LONG, 17, "Name too long"),
        (
            RuleSetError.UNSUPPORTED_RULE_SET_REV_MAP_VERSION,
            20,
            "Unsupported RuleSet revision map version",
        ),
        (RuleSetError.AMOUNT_CHECK_FAILED, 32, "Amount checked failed"),
        (RuleSetError.PROGRAM_OWNED_SET_CHECK_FAILED, 35, "Program Owned Set check failed"),
    ],
)
def test_codes_and_messages(error, code, message):
    assert int(error) == code
    assert error.message() == message
    assert RuleSetError(code) is error


def test_codes_are_contiguous():
    by_code = [RuleSetError(code) for code in range(36)]
    assert by_code == list(RuleSetError)
    assert [RuleSetException(code).code for code in range(36)] == list(range(36))


def test_every_error_has_a_message():
    messages = [str(RuleSetException(error)) for error in RuleSetError]
    assert messages == [error.message() for error in RuleSetError]
    assert all(len(message) > 0 for message in messages)


def test_exception_carries_error_and_code():
    exc = RuleSetException(RuleSetError.MISSING_ACCOUNT)
    assert exc.error is RuleSetError.MISSING_ACCOUNT
    assert exc.code == 14
    assert str(exc) == "Missing account"


def test_exception_accepts_numeric_code():
    exc = RuleSetException(23)
    assert exc.error is RuleSetError.RULE_SET_REVISION_NOT_AVAILABLE
    assert str(exc) == "RuleSet revision not available"


def test_exception_rejects_unknown_code():
    with pytest.raises(ValueError):
        RuleSetException(99)


def test_not_enough_account_keys():
    exc = NotEnoughAccountKeys()
    assert "Not enough account keys" in str(exc)