"""Error class hierarchy tests."""

import pytest

from pyjson2obj._errors import (
    InvalidTargetTypeError,
    MappingError,
    MissingRootError,
    ParseError,
    TypeCoercionError,
    UnmatchedMemberError,
    UnsupportedShapeError,
)


class TestMappingErrorBase:
    def test_str_returns_user_message(self):
        err = MappingError("user msg", "internal detail")
        assert str(err) == "user msg"

    def test_internal_returns_details(self):
        err = MappingError("user msg", "internal detail")
        assert err.internal() == "internal detail"

    def test_internal_defaults_to_user_message(self):
        err = MappingError("same message")
        assert err.internal() == "same message"

    def test_wrapped_exception(self):
        cause = ValueError("root cause")
        err = MappingError("user msg", wrapped=cause)
        assert err.wrapped is cause

    def test_is_exception(self):
        assert isinstance(MappingError("test"), Exception)


class TestErrorHierarchy:
    ALL_ERROR_CLASSES = [
        ParseError,
        MissingRootError,
        TypeCoercionError,
        UnmatchedMemberError,
        UnsupportedShapeError,
        InvalidTargetTypeError,
    ]

    @pytest.mark.parametrize("cls", ALL_ERROR_CLASSES)
    def test_is_subclass(self, cls):
        assert issubclass(cls, MappingError)

    @pytest.mark.parametrize("cls", ALL_ERROR_CLASSES)
    def test_dual_messaging(self, cls):
        err = cls("user", "internal")
        assert str(err) == "user"
        assert err.internal() == "internal"

    @pytest.mark.parametrize("cls", ALL_ERROR_CLASSES)
    def test_catchable_as_base(self, cls):
        with pytest.raises(MappingError):
            raise cls("test")
