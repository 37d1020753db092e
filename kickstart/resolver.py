"""
resolver.py

Responsibility: Turn a template identifier into a validated template reference.

A reference is either a `LocalTemplate` (a directory on disk) or a
`RemoteTemplate` (a git URL). Resolution always validates the reference:
this is the only gate between a bad template name and a half-written target
directory, so it must run before any task touches the filesystem.

This module must be the only place that sends HTTP requests.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import requests

from kickstart.registry import TemplateRegistry

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

_GIT_SUFFIX = re.compile(r"\.git\s*$")


class InvalidTemplateError(RuntimeError):
    pass


@dataclass(frozen=True)
class LocalTemplate:
    path: Path


@dataclass(frozen=True)
class RemoteTemplate:
    url: str


TemplateReference = Union[LocalTemplate, RemoteTemplate]


def browse_url(clone_url: str) -> str:
    """
    https://github.com/owner/name.git -> https://github.com/owner/name
    """
    return _GIT_SUFFIX.sub("", clone_url.strip())


class TemplateResolver:
    def __init__(
        self,
        registry: TemplateRegistry,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._registry = registry
        self._timeout = timeout
        self._session = session

    def locate(self, identifier: str) -> TemplateReference:
        """
        Map an identifier to a reference without touching disk or network.

        Registered templates with a URL are remote; everything else lives under
        the templates root, named after the lowercased identifier.
        """
        key = (identifier or "").strip().lower()
        if not key:
            raise InvalidTemplateError("Template name is required.")

        tpl = self._registry.get(key)
        if tpl is not None and tpl.url:
            return RemoteTemplate(url=tpl.url)
        name = tpl.key if tpl is not None else key
        return LocalTemplate(path=self._registry.templates_root / name)

    def validate(self, ref: TemplateReference) -> None:
        if isinstance(ref, LocalTemplate):
            self._check_local(ref.path)
        elif isinstance(ref, RemoteTemplate):
            self._check_remote(ref.url)
        else:
            raise TypeError(f"Unsupported template reference: {ref!r}")

    def resolve(self, identifier: str) -> TemplateReference:
        ref = self.locate(identifier)
        self.validate(ref)
        logger.debug("Resolved template %r to %r", identifier, ref)
        return ref

    def _check_local(self, path: Path) -> None:
        if not path.is_dir():
            raise InvalidTemplateError(f"Template directory not found: {path}")
        if not os.access(path, os.R_OK | os.X_OK):
            raise InvalidTemplateError(f"Template directory is not readable: {path}")

    def _check_remote(self, url: str) -> None:
        target = browse_url(url)
        get = self._session.get if self._session is not None else requests.get
        try:
            r = get(target, timeout=self._timeout, allow_redirects=True)
        except requests.RequestException as e:
            raise InvalidTemplateError(f"Template URL is unreachable: {target} ({e})") from e
        if not 200 <= r.status_code < 300:
            raise InvalidTemplateError(f"Template URL returned status {r.status_code}: {target}")
