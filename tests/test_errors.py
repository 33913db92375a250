"""Error handling tests."""

from dataclasses import dataclass

import pytest

from pyjson2obj import deserialize
from pyjson2obj._errors import MappingError, MissingRootError, ParseError, TypeCoercionError


@dataclass
class Account:
    Owner: str = ""
    Balance: int = 0


class TestDualMessaging:
    def test_user_message_is_sanitized(self):
        try:
            deserialize('{"Balance":"secret-value"}', Account)
        except TypeCoercionError as e:
            assert "secret-value" not in str(e)
            assert "secret-value" in e.internal()
            assert "Balance" in e.internal()

    def test_parse_error_wraps_lark_exception(self):
        with pytest.raises(ParseError) as exc_info:
            deserialize("{oops", Account)
        assert exc_info.value.wrapped is exc_info.value.__cause__

    def test_missing_root_names_element(self):
        with pytest.raises(MissingRootError) as exc_info:
            deserialize("{}", Account, root_element="account")
        assert "'account'" in exc_info.value.internal()
        assert str(exc_info.value) == "root element not found"


class TestFailFast:
    def test_coercion_error_aborts_mapping(self):
        with pytest.raises(MappingError):
            deserialize('{"Owner":"Ann","Balance":"x"}', Account)

    def test_first_error_reported(self):
        with pytest.raises(TypeCoercionError) as exc_info:
            deserialize('{"Balance":"x","Owner":"Ann"}', Account)
        assert "Balance" in exc_info.value.internal()
