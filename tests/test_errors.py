"""Tests for semroute.errors — hierarchy, codes and serialization."""

import pytest

from semroute.errors import (
    InvalidConfiguration,
    InvalidHandler,
    InvalidVersionFormat,
    MissingVersion,
    SemrouteError,
    VersioningError,
    VersionNotFound,
    has_error_code,
    is_versioning_error,
)


class TestHierarchy:
    def test_versioning_error_is_semroute_error(self) -> None:
        assert issubclass(VersioningError, SemrouteError)

    @pytest.mark.parametrize(
        "cls",
        [MissingVersion, InvalidVersionFormat, VersionNotFound, InvalidHandler, InvalidConfiguration],
    )
    def test_specific_errors_are_versioning_errors(self, cls: type) -> None:
        assert issubclass(cls, VersioningError)


class TestCodes:
    def test_missing_version(self) -> None:
        err = MissingVersion()
        assert err.code == "MISSING_VERSION"
        assert err.status == 422
        assert err.message == "API version is required"
        assert err.requested_version is None

    def test_invalid_version_format(self) -> None:
        err = InvalidVersionFormat("abc")
        assert err.code == "INVALID_VERSION_FORMAT"
        assert err.status == 400
        assert err.requested_version == "abc"
        assert err.message == "Invalid version format: 'abc'"

    def test_version_not_found(self) -> None:
        err = VersionNotFound("9.0.0", ["^1", "^2"])
        assert err.code == "VERSION_NOT_FOUND"
        assert err.available_versions == ("^1", "^2")
        assert err.message == "No handler found for API version '9.0.0'"

    def test_version_not_found_without_request(self) -> None:
        err = VersionNotFound(None, ["^1"], message="nothing", status=404)
        assert err.requested_version is None
        assert err.message == "nothing"
        assert err.status == 404

    def test_construction_errors_are_500(self) -> None:
        assert InvalidHandler("x", "bad").status == 500
        assert InvalidConfiguration("bad").status == 500
        assert InvalidConfiguration("bad").message == "Invalid configuration: bad"

    def test_str(self) -> None:
        assert str(MissingVersion()) == "MISSING_VERSION: API version is required"

    def test_frozen(self) -> None:
        err = MissingVersion()
        with pytest.raises(AttributeError):
            err.status = 500  # type: ignore[misc]

    def test_can_be_raised_and_caught(self) -> None:
        with pytest.raises(VersioningError) as info:
            raise VersionNotFound("2", ["^1"])
        assert info.value.requested_version == "2"


class TestToDict:
    def test_minimal(self) -> None:
        assert MissingVersion().to_dict() == {
            "code": "MISSING_VERSION",
            "message": "API version is required",
            "status": 422,
        }

    def test_full(self) -> None:
        data = VersionNotFound("3", ["^1"]).to_dict()
        assert data["requestedVersion"] == "3"
        assert data["availableVersions"] == ["^1"]


class TestGuards:
    def test_is_versioning_error(self) -> None:
        assert is_versioning_error(MissingVersion())
        assert not is_versioning_error(ValueError("x"))

    def test_has_error_code(self) -> None:
        assert has_error_code(MissingVersion(), "MISSING_VERSION")
        assert not has_error_code(MissingVersion(), "VERSION_NOT_FOUND")
        assert not has_error_code(RuntimeError(), "MISSING_VERSION")
