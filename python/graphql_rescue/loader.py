"""Declarative rescue configuration from YAML files.

A declaration file lists exception classes and the handler rescuing them,
both as dotted import paths. Declarations are registered in file order,
with the same first-wins rules as registrations made in code.

Example file:

    rescues:
      - errors:
          - myapp.errors.TimeoutFailure
          - myapp.errors.RateLimited
        handler: myapp.rescue.retry_later_payload
      - errors: [myapp.errors.NotFound]
        handler: myapp.rescue.null_payload

The file path is taken from the argument, or from the
GRAPHQL_RESCUE_CONFIG_PATH environment variable.

Example:
    >>> from graphql_rescue.loader import configure_from_file
    >>> configure_from_file(schema, "config/rescues.yaml")
"""

from __future__ import annotations

import importlib
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import ConfigurationError
from .instrumentation import InstrumentableSchema, configure
from .logging import log_debug, log_info
from .registry import Registrar
from .types import CONFIG_PATH_ENV, RescueConfig

# module.path.attribute, with at least one dot
DOTTED_PATH_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*(\.[a-zA-Z_][a-zA-Z0-9_]*)+$")


def import_object(dotted_path: str) -> Any:
    """Import an attribute from a ``module.path.attribute`` string.

    Args:
        dotted_path: Full path of a class or callable.

    Returns:
        The imported attribute.

    Raises:
        ConfigurationError: If the path is malformed, or the module or the
            attribute cannot be found.
    """
    if not DOTTED_PATH_PATTERN.match(dotted_path):
        raise ConfigurationError(f"not a dotted import path: {dotted_path!r}")

    module_path, attribute = dotted_path.rsplit(".", 1)

    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise ConfigurationError(f"cannot import module {module_path!r}: {e}") from e

    try:
        return getattr(module, attribute)
    except AttributeError:
        raise ConfigurationError(
            f"module {module_path!r} has no attribute {attribute!r}"
        ) from None


def load_rescue_config(path: str | Path) -> RescueConfig:
    """Read and validate a rescue declaration file.

    Args:
        path: YAML file to read.

    Returns:
        The validated configuration. An empty file yields no declarations.

    Raises:
        ConfigurationError: If the file is missing, not valid YAML, or
            does not match the declaration schema.
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"cannot read rescue config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"invalid YAML in rescue config {path}: {e}") from e

    if data is None:
        data = {}

    try:
        config = RescueConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"invalid rescue config {path}: {e}") from e

    log_debug(
        "Loaded rescue config",
        {"path": str(path), "declarations": len(config.rescues)},
    )
    return config


def register_declarations(registrar: Registrar, config: RescueConfig) -> None:
    """Register every declaration of a config, in file order."""
    for declaration in config.rescues:
        handler = import_object(declaration.handler)
        categories = [import_object(error) for error in declaration.errors]
        registrar.rescue_from(*categories, handler=handler)


def resolve_config_path(path: str | Path | None = None) -> Path:
    """Pick the declaration file: explicit path first, then the environment.

    Raises:
        ConfigurationError: If neither is set.
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path)

    raise ConfigurationError(f"no rescue config path given and {CONFIG_PATH_ENV} is not set")


def configure_from_file(target: InstrumentableSchema, path: str | Path | None = None) -> None:
    """Install failure rescue on a schema from a declaration file.

    Args:
        target: Schema exposing ``instrument(kind, instrumenter)``.
        path: YAML file; defaults to GRAPHQL_RESCUE_CONFIG_PATH.

    Raises:
        ConfigurationError: If the file cannot be found, read, validated,
            or one of its import paths cannot be resolved, or a handler
            path resolves to something that is not callable.
        NotRescuableError: If an error path resolves to something other
            than a class.
    """
    config_path = resolve_config_path(path)
    config = load_rescue_config(config_path)
    log_info(
        "Configuring rescue from file",
        {"path": str(config_path), "declarations": len(config.rescues)},
    )
    configure(target, lambda registrar: register_declarations(registrar, config))


__all__ = [
    "import_object",
    "load_rescue_config",
    "register_declarations",
    "resolve_config_path",
    "configure_from_file",
]
