"""Tests for waypost.errors — exception hierarchy."""

import pytest

from waypost.errors import (
    ApiError,
    ConfigurationError,
    MenuFormatError,
    NotFound,
    Unauthorized,
    WaypostError,
)


class TestHierarchy:
    @pytest.mark.parametrize("cls", [ConfigurationError, MenuFormatError, NotFound, ApiError, Unauthorized])
    def test_subclasses_base(self, cls: type) -> None:
        assert issubclass(cls, WaypostError)

    def test_menu_format_error_is_value_error(self) -> None:
        assert issubclass(MenuFormatError, ValueError)

    def test_unauthorized_is_api_error(self) -> None:
        assert issubclass(Unauthorized, ApiError)


class TestApiError:
    def test_str_with_code(self) -> None:
        assert str(ApiError("bad param", code=10002)) == "10002: bad param"

    def test_str_with_status(self) -> None:
        assert str(ApiError("Server Error", status=500)) == "HTTP 500: Server Error"

    def test_str_plain(self) -> None:
        assert str(ApiError("oops")) == "oops"

    def test_raise_and_catch(self) -> None:
        with pytest.raises(ApiError) as exc_info:
            raise Unauthorized("expired", code=10003)
        assert exc_info.value.code == 10003


class TestNotFound:
    def test_detail(self) -> None:
        assert NotFound("No route").detail == "No route"
        assert str(NotFound()) == "Not Found"
