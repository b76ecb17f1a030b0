# openchoreo/catalog/core/loader.py
"""
YAML configuration loading with environment variable substitution.

A config file holds an ``openchoreo:`` mapping::

    openchoreo:
      baseUrl: ${OPENCHOREO_API_URL:-}
      token: ${OPENCHOREO_TOKEN:-}
      defaultOwner: platform-team
      templateNamespace: openchoreo
      pageSize: 100
      schemaFetchConcurrency: 10
      timeout: 30

Files are merged in sorted order. Settings that were set explicitly
through the environment win over the files, and values missing from
every file fall back to :class:`~openchoreo.catalog.core.config.Settings`.
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from glob import glob
from pathlib import Path
from typing import Any, Iterable

import yaml

from openchoreo.catalog.core.config import Settings

logger = logging.getLogger(__name__)

# ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")

CONFIG_SECTION = "openchoreo"


@dataclass(frozen=True)
class ProviderConfig:
    base_url: str
    token: str | None
    default_owner: str
    template_namespace: str
    page_size: int
    schema_fetch_concurrency: int
    timeout: float


def substitute_env_vars(value: Any) -> Any:
    """Expand ``${VAR}`` and ``${VAR:-default}`` in every string of a config tree.

    Raises:
        ValueError: A referenced variable is unset and has no default.
    """
    if isinstance(value, str):
        return _substitute_string(value)
    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substitute_env_vars(item) for item in value]
    else:
        return value


def _substitute_string(value: str) -> str:
    def expand(match: re.Match) -> str:
        name, default = match.group(1), match.group(2)
        if name in os.environ:
            return os.environ[name]
        if default is not None:
            return default
        raise ValueError(f"Config references '{name}', which is not set and has no default")

    return ENV_VAR_PATTERN.sub(expand, value)


def load_yaml_files(patterns: Iterable[str]) -> list[dict[str, Any]]:
    """Parse every file matched by ``patterns``, ordered by resolved path."""
    patterns = list(patterns)
    paths = sorted({Path(m).resolve() for pattern in patterns for m in glob(pattern)})

    if not paths:
        logger.warning("No OpenChoreo config files match %s", patterns)
        return []

    logger.info("Reading OpenChoreo config from %s", [str(p) for p in paths])

    docs: list[dict[str, Any]] = []
    for path in paths:
        try:
            with path.open("r", encoding="utf-8") as fh:
                docs.append(yaml.safe_load(fh) or {})
        except Exception as exc:
            logger.error("Cannot parse config file '%s': %s", path, exc)
            raise

    return docs


def load_provider_config(
    patterns: Iterable[str], settings: Settings | None = None
) -> ProviderConfig:
    """Build the provider configuration.

    Precedence, highest first: settings given explicitly (environment,
    ``.env`` or constructor arguments), the merged YAML section, then the
    settings defaults.
    """
    settings = settings or Settings()

    merged: dict[str, Any] = {}
    for doc in load_yaml_files(patterns):
        section = doc.get(CONFIG_SECTION) or {}
        if not isinstance(section, dict):
            raise ValueError(f"'{CONFIG_SECTION}' must be a mapping, got {type(section).__name__}")
        merged.update(substitute_env_vars(section))

    def pick(yaml_key: str, field: str) -> Any:
        value = getattr(settings, field)
        if field in settings.model_fields_set:
            return value
        override = merged.get(yaml_key)
        if override is None or override == "":
            return value
        return override

    return ProviderConfig(
        base_url=str(pick("baseUrl", "base_url")),
        token=pick("token", "token") or None,
        default_owner=str(pick("defaultOwner", "default_owner")),
        template_namespace=str(pick("templateNamespace", "template_namespace")),
        page_size=int(pick("pageSize", "page_size")),
        schema_fetch_concurrency=int(
            pick("schemaFetchConcurrency", "schema_fetch_concurrency")
        ),
        timeout=float(pick("timeout", "request_timeout")),
    )
