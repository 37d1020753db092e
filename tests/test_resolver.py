"""Tests for template resolution and validation."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

from kickstart.registry import TemplateRegistry
from kickstart.resolver import (
    InvalidTemplateError,
    LocalTemplate,
    RemoteTemplate,
    TemplateResolver,
    browse_url,
)


@pytest.fixture
def session():
    mock = MagicMock()
    mock.get.return_value = MagicMock(status_code=200)
    return mock


def test_resolves_registered_local_template(registry: TemplateRegistry, templates_root: Path) -> None:
    ref = TemplateResolver(registry).resolve("Basic")

    assert ref == LocalTemplate(path=templates_root / "basic")


def test_unregistered_identifier_uses_templates_dir(registry: TemplateRegistry, templates_root: Path) -> None:
    (templates_root / "extra").mkdir()

    ref = TemplateResolver(registry).resolve("EXTRA")

    assert ref == LocalTemplate(path=templates_root / "extra")


def test_unknown_template_is_invalid(registry: TemplateRegistry) -> None:
    with pytest.raises(InvalidTemplateError, match="not found"):
        TemplateResolver(registry).resolve("does-not-exist")


def test_empty_identifier_is_invalid(registry: TemplateRegistry) -> None:
    with pytest.raises(InvalidTemplateError):
        TemplateResolver(registry).resolve("   ")


def test_local_template_must_be_a_directory(registry: TemplateRegistry, templates_root: Path) -> None:
    (templates_root / "file").write_text("x", encoding="utf-8")

    with pytest.raises(InvalidTemplateError):
        TemplateResolver(registry).resolve("file")


def test_remote_template_checks_url_without_git_suffix(registry: TemplateRegistry, session) -> None:
    ref = TemplateResolver(registry, timeout=5, session=session).resolve("remote")

    assert ref == RemoteTemplate(url="https://example.com/owner/remote.git")
    session.get.assert_called_once_with("https://example.com/owner/remote", timeout=5, allow_redirects=True)


@pytest.mark.parametrize("status", [199, 301, 404, 500])
def test_remote_template_rejects_non_2xx(registry: TemplateRegistry, session, status: int) -> None:
    session.get.return_value = MagicMock(status_code=status)

    with pytest.raises(InvalidTemplateError, match=str(status)):
        TemplateResolver(registry, session=session).resolve("remote")


def test_remote_template_connection_error(registry: TemplateRegistry, session) -> None:
    session.get.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(InvalidTemplateError, match="unreachable"):
        TemplateResolver(registry, session=session).resolve("remote")


def test_locate_does_no_io(registry: TemplateRegistry, session) -> None:
    ref = TemplateResolver(registry, session=session).locate("remote")

    assert isinstance(ref, RemoteTemplate)
    session.get.assert_not_called()


def test_browse_url() -> None:
    assert browse_url("https://github.com/a/b.git") == "https://github.com/a/b"
    assert browse_url("https://github.com/a/b") == "https://github.com/a/b"
