"""Loading of the desired repository settings from YAML."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import ValidationError

from github_settings.errors import ConfigurationLoadError
from github_settings.models import Settings

_NUMERIC_TAGS = frozenset({"tag:yaml.org,2002:int", "tag:yaml.org,2002:float"})


class _SettingsLoader(yaml.SafeLoader):
    """Safe loader that keeps unquoted numbers as written.

    Label colors such as `000000` would otherwise become the integer 0. Numeric fields are
    converted back by pydantic during validation.
    """

    yaml_implicit_resolvers = {
        first: [(tag, regexp) for tag, regexp in resolvers if tag not in _NUMERIC_TAGS]
        for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }


def load_settings_from_mapping(data: Any, *, source: str | None = None) -> Settings:
    """Validate an already parsed structure into desired settings.

    The load-time normalization of desired settings is applied before returning, so the
    result can be handed straight to the reconciler.

    Args:
        data: The parsed configuration, expected to be a mapping.
        source: Where the data came from, used in error messages.

    Returns:
        The normalized desired settings.

    Raises:
        ConfigurationLoadError: If the data is not a mapping or does not validate.
    """
    origin = source or "<mapping>"

    if not isinstance(data, dict):
        raise ConfigurationLoadError(
            f"Settings in {origin} must be a mapping, got {type(data).__name__}",
            path=source,
        )

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationLoadError(f"Invalid settings in {origin}: {e}", path=source) from e

    for section, identities in (
        ("labels", [label.name for label in settings.labels]),
        ("branches", [branch.name for branch in settings.branches]),
        ("webhooks", [webhook.url for webhook in settings.webhooks]),
    ):
        duplicates = sorted({identity for identity in identities if identities.count(identity) > 1})
        if duplicates:
            raise ConfigurationLoadError(f"Duplicate {section} in {origin}: {', '.join(duplicates)}", path=source)

    logger.debug(
        f"Loaded settings for {settings.repository.full_name}: {len(settings.labels)} labels, "
        f"{len(settings.branches)} branches, {len(settings.webhooks)} webhooks, {len(settings.topics)} topics"
    )
    return settings.normalized_as_desired()


def load_settings_from_file(path: str | Path) -> Settings:
    """Read, parse and normalize a YAML settings file.

    Args:
        path: Path of the YAML file.

    Returns:
        The normalized desired settings.

    Raises:
        ConfigurationLoadError: If the file is missing, unreadable, not valid YAML or
            does not describe valid settings.
    """
    file_path = Path(path)
    logger.debug(f"Reading settings file {file_path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationLoadError(f"Error while reading settings file {file_path}: {e}", path=str(file_path)) from e

    try:
        data = yaml.load(content, Loader=_SettingsLoader)
    except yaml.YAMLError as e:
        raise ConfigurationLoadError(f"Error while parsing settings file {file_path}: {e}", path=str(file_path)) from e

    return load_settings_from_mapping(data, source=str(file_path))
