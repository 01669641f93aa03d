"""YAML-backed site configuration loader."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from site_issues.core.models import IssuesSettings

logger = logging.getLogger("site_issues")

DEFAULT_CONFIG_FILENAME = "_config.yml"
SETTINGS_KEY = "issues"


def load_site_config(path: str | Path) -> dict[str, Any]:
    """Load the raw site configuration mapping from a YAML file."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        raw_data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Failed to parse YAML config at {config_path}: {exc}") from exc
    except OSError as exc:
        raise OSError(f"Failed to read config file {config_path}: {exc}") from exc

    if raw_data is None:
        raw_data = {}
    if not isinstance(raw_data, dict):
        raise ValueError(f"Invalid config file at {config_path}: root must be a YAML mapping")
    return raw_data


def load_issues_settings(path: str | Path) -> IssuesSettings:
    """Load and validate the ``issues`` section of a site config file."""
    return issues_settings_from_mapping(load_site_config(path), source=str(path))


def issues_settings_from_mapping(
    config: Mapping[str, Any],
    *,
    source: str = "<site config>",
) -> IssuesSettings:
    """Validate the ``issues`` section of an already-loaded site config.

    A missing or non-mapping section yields default settings (no special
    filters); out-of-range numeric settings are rejected.
    """
    section = config.get(SETTINGS_KEY)
    if not isinstance(section, Mapping):
        if section is not None:
            logger.debug("Ignoring non-mapping %r section in %s", SETTINGS_KEY, source)
        section = {}

    try:
        return IssuesSettings.model_validate(dict(section))
    except ValidationError as exc:
        detail_text = _format_validation_errors(exc)
        raise ValueError(f"Invalid {SETTINGS_KEY!r} settings in {source}:\n{detail_text}") from exc


def _format_validation_errors(exc: ValidationError) -> str:
    details: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
        details.append(f"{location}: {error['msg']}")
    return "\n".join(f"- {line}" for line in details)
