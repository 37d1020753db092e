"""
registry.py

Responsibility: Load the template registry into an immutable, typed model.

The registry maps short template keys to a display label, an optional remote
repository URL and the ecosystem used to pick `.gitignore` patterns. It is
built once at startup and passed explicitly to whoever needs it; tests can
construct their own.

Registry files are YAML:

    templates:
      javascript:
        label: JavaScript
        ecosystem: Node
      dummy:
        label: Dummy
        url: https://github.com/atao-web/dummy-startup-kit.git
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_REGISTRY_PATH = PACKAGE_DIR / "data" / "registry.yaml"
DEFAULT_TEMPLATES_ROOT = PACKAGE_DIR / "templates"
DEFAULT_ECOSYSTEM = "Node"

REGISTRY_ENV_VAR = "KICKSTART_REGISTRY"


class RegistryError(RuntimeError):
    pass


@dataclass(frozen=True)
class TemplateDef:
    """A single registered template."""

    key: str
    label: str
    url: str | None = None
    ecosystem: str = DEFAULT_ECOSYSTEM


@dataclass(frozen=True)
class TemplateRegistry:
    """Known templates plus the directory that holds the local ones."""

    templates: tuple[TemplateDef, ...]
    templates_root: Path = DEFAULT_TEMPLATES_ROOT

    def get(self, identifier: str) -> TemplateDef | None:
        """
        Look a template up by key or by label (both case-insensitive).
        """
        wanted = identifier.strip().lower()
        for tpl in self.templates:
            if tpl.key == wanted or tpl.label.lower() == wanted:
                return tpl
        return None

    @property
    def labels(self) -> list[str]:
        return [tpl.label for tpl in self.templates]

    @property
    def default(self) -> TemplateDef:
        if not self.templates:
            raise RegistryError("Template registry is empty.")
        return self.templates[0]

    def ecosystem_for(self, identifier: str) -> str:
        tpl = self.get(identifier)
        return tpl.ecosystem if tpl is not None else DEFAULT_ECOSYSTEM


def _parse_entry(key: Any, raw: Any) -> TemplateDef:
    norm_key = str(key).strip().lower()
    if not norm_key:
        raise RegistryError("Template keys must be non-empty strings.")
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise RegistryError(f"Template `{norm_key}` must be a mapping.")

    label = str(raw.get("label") or norm_key).strip()
    url = raw.get("url")
    if url is not None:
        url = str(url).strip() or None
    ecosystem = str(raw.get("ecosystem") or DEFAULT_ECOSYSTEM).strip()

    return TemplateDef(key=norm_key, label=label, url=url, ecosystem=ecosystem)


def parse_registry(data: Any, *, templates_root: str | Path = DEFAULT_TEMPLATES_ROOT) -> TemplateRegistry:
    """
    Build a `TemplateRegistry` from already-decoded YAML data.
    """
    if not isinstance(data, dict):
        raise RegistryError("Registry must be a mapping at the top level.")
    raw_templates = data.get("templates") or {}
    if not isinstance(raw_templates, dict):
        raise RegistryError("`templates` must be a mapping of key -> definition.")

    # Keep file order: the first entry is the default template.
    templates = tuple(_parse_entry(k, v) for k, v in raw_templates.items())
    return TemplateRegistry(templates=templates, templates_root=Path(templates_root))


def load_registry(
    registry_path: str | Path | None = None,
    *,
    templates_root: str | Path | None = None,
) -> TemplateRegistry:
    """
    Load a registry YAML file.

    Falls back to `$KICKSTART_REGISTRY`, then to the bundled registry. Unless
    given, the templates root is the bundled `templates/` directory.
    """
    if registry_path is None:
        registry_path = os.environ.get(REGISTRY_ENV_VAR) or DEFAULT_REGISTRY_PATH
    path = Path(registry_path)
    if not path.exists():
        raise RegistryError(f"Registry file does not exist: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise RegistryError(f"Registry file is not valid YAML: {path}") from e

    return parse_registry(data, templates_root=templates_root or DEFAULT_TEMPLATES_ROOT)
