"""Unit tests for the lade error hierarchy."""

from __future__ import annotations

from pathlib import Path

import pytest

from lade.errors import (
    BackendError,
    BackendUnavailableError,
    ConfigError,
    InvalidPatternError,
    InvalidReferenceError,
    LadeError,
    NoProviderError,
    OutputFileError,
    RoutingError,
    RuleFileError,
    SecretNotFoundError,
    SettingsError,
)


class TestLadeError:
    def test_message_is_str(self) -> None:
        err = LadeError("something went wrong")
        assert str(err) == "something went wrong"
        assert err.message == "something went wrong"

    def test_default_code(self) -> None:
        assert LadeError("m").code == "lade_error"

    def test_custom_code(self) -> None:
        assert LadeError("m", code="custom").code == "custom"

    def test_to_dict_basic(self) -> None:
        err = LadeError("m", code="my_code", detail={"key": "val"})
        assert err.to_dict() == {"code": "my_code", "message": "m", "detail": {"key": "val"}}

    def test_to_dict_includes_cause_repr(self) -> None:
        err = LadeError("wrapper", cause=ValueError("original"))
        assert "original" in err.to_dict()["cause"]

    def test_cause_sets_dunder_cause(self) -> None:
        cause = RuntimeError("root")
        assert LadeError("wrap", cause=cause).__cause__ is cause

    def test_repr(self) -> None:
        assert repr(LadeError("boom")) == "LadeError(code='lade_error', message='boom')"


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls, parent",
        [
            (ConfigError, LadeError),
            (RuleFileError, ConfigError),
            (InvalidPatternError, ConfigError),
            (SettingsError, ConfigError),
            (RoutingError, LadeError),
            (NoProviderError, RoutingError),
            (InvalidReferenceError, RoutingError),
            (BackendError, LadeError),
            (BackendUnavailableError, BackendError),
            (SecretNotFoundError, LadeError),
            (OutputFileError, LadeError),
        ],
    )
    def test_subclassing(self, cls: type, parent: type) -> None:
        assert issubclass(cls, parent)


class TestMessages:
    def test_rule_file_error(self) -> None:
        err = RuleFileError(Path("/a/lade.yaml"), "bad shape")
        assert str(err) == "Invalid rule file /a/lade.yaml: bad shape"
        assert err.path == Path("/a/lade.yaml")

    def test_no_provider(self) -> None:
        err = NoProviderError("x://y")
        assert "x://y" in str(err)
        assert err.reference == "x://y"

    def test_invalid_reference_names_missing_part(self) -> None:
        err = InvalidReferenceError("vault://h/m", "key")
        assert "missing key" in str(err)

    def test_backend_unavailable_names_install_url(self) -> None:
        err = BackendUnavailableError("Vault", "https://example.com/install")
        assert str(err).startswith("Vault CLI not found.")
        assert "https://example.com/install" in str(err)
        assert err.provider == "Vault"

    def test_backend_error_keeps_stderr(self) -> None:
        err = BackendError("Doppler", "Doppler error: x", stderr="denied")
        assert err.stderr == "denied"
        assert str(err) == "Doppler error: x"

    def test_backend_error_default_message(self) -> None:
        assert str(BackendError("Passbolt")) == "Passbolt error"

    def test_secret_not_found_lists_sorted_fields(self) -> None:
        err = SecretNotFoundError("Doppler", ["B", "A"], "config dev of project p on h")
        assert str(err) == "Variables A, B not found in config dev of project p on h (Doppler)"
        assert err.fields == ["A", "B"]
