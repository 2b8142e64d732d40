import pytest

from people_api.core.result import Failure, Success


def test_success_carries_value():
    result = Success(42)
    assert result.is_success
    assert not result.is_failure
    assert result.value == 42


def test_failure_joins_messages_in_order():
    result = Failure(["Email already exists", "Document already exists"])
    assert result.is_failure
    assert result.errors == ["Email already exists", "Document already exists"]
    assert result.message == "Email already exists; Document already exists"


def test_single_error_failure():
    result = Failure.of("Person not found")
    assert result.errors == ["Person not found"]
    assert result.message == "Person not found"


def test_failure_requires_an_error():
    with pytest.raises(ValueError):
        Failure([])


def test_variants_match_structurally():
    def describe(result):
        match result:
            case Success(value=value):
                return f"ok {value}"
            case Failure(errors=errors):
                return f"failed {len(errors)}"

    assert describe(Success("x")) == "ok x"
    assert describe(Failure.of("a", "b")) == "failed 2"
