"""Validator settings from the environment or a YAML file.

Environment variables:
    TAGCHECK_METADATA_KEY   field metadata key holding constraint lines
    TAGCHECK_ALIAS_NAMING   "1"/"true"/"yes"/"on" to name paths by alias
    TAGCHECK_ALIAS_KEY      field metadata key holding the alias

YAML files are checked against ``schemas/settings.schema.json``:

    metadataKey: validate
    aliasNaming: true
    aliasKey: json
    constraints:
      even: myapp.checks:is_even
"""

from __future__ import annotations

import importlib
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError as SchemaError

from tagcheck.fields import DEFAULT_ALIAS_KEY, DEFAULT_METADATA_KEY
from tagcheck.types import ConfigurationError, ConstraintFunc

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "settings.schema.json"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"", "0", "false", "no", "off"}


def _load_schema() -> dict[str, Any]:
    with _SCHEMA_PATH.open() as fh:
        return json.load(fh)


def _json_path(error: SchemaError) -> str:
    """Convert a jsonschema error path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning("Ignoring unrecognized value %r for %s", raw, name)
    return default


def load_constraint(target: str) -> ConstraintFunc:
    """Import a constraint function from a ``package.module:function`` path.

    Raises:
        ConfigurationError: If the path is malformed or cannot be imported
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError(
            f"Constraint target '{target}' must look like 'package.module:function'"
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f"Cannot import '{module_name}': {exc}") from exc
    try:
        func = getattr(module, attr)
    except AttributeError as exc:
        raise ConfigurationError(f"'{module_name}' has no attribute '{attr}'") from exc
    if not callable(func):
        raise ConfigurationError(f"'{target}' is not callable")
    return func


@dataclass
class ValidatorSettings:
    """Settings for building a Validator.

    Attributes:
        metadata_key: Field metadata key holding constraint lines
        alias_naming: Name error paths by alias when one is set
        alias_key: Field metadata key holding the alias
        constraints: Constraint name -> "package.module:function"
    """

    metadata_key: str = DEFAULT_METADATA_KEY
    alias_naming: bool = False
    alias_key: str = DEFAULT_ALIAS_KEY
    constraints: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> ValidatorSettings:
        """Create settings from environment variables, falling back to defaults."""
        return cls(
            metadata_key=os.environ.get("TAGCHECK_METADATA_KEY") or DEFAULT_METADATA_KEY,
            alias_naming=_env_flag("TAGCHECK_ALIAS_NAMING", False),
            alias_key=os.environ.get("TAGCHECK_ALIAS_KEY") or DEFAULT_ALIAS_KEY,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidatorSettings:
        """Create settings from a document already checked against the schema."""
        return cls(
            metadata_key=data.get("metadataKey", DEFAULT_METADATA_KEY),
            alias_naming=data.get("aliasNaming", False),
            alias_key=data.get("aliasKey", DEFAULT_ALIAS_KEY),
            constraints=dict(data.get("constraints", {})),
        )

    @classmethod
    def from_yaml(cls, path: Path | str) -> ValidatorSettings:
        """Load settings from a YAML file.

        Args:
            path: YAML file to read

        Returns:
            The loaded settings

        Raises:
            ConfigurationError: If the file cannot be parsed or does not match
                the settings schema (every issue is listed)
        """
        path = Path(path)
        try:
            with path.open() as fh:
                raw = yaml.safe_load(fh)
        except OSError as exc:
            raise ConfigurationError(f"Cannot read settings file {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"YAML parse error in {path}: {exc}") from exc

        if raw is None:
            raw = {}

        validator = Draft202012Validator(_load_schema())
        issues = []
        for error in sorted(validator.iter_errors(raw), key=lambda e: [str(p) for p in e.path]):
            loc = _json_path(error)
            issues.append(f"{loc}: {error.message}" if loc else error.message)
        if issues:
            raise ConfigurationError(
                f"Invalid settings file {path}: " + "; ".join(issues)
            )

        logger.debug("Loaded validator settings from %s", path)
        return cls.from_dict(raw)
