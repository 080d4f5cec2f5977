"""Configuration for the method timing facility."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import voluptuous as vol
import yaml

from .const import CONFIG_SECTION, DEFAULT_PREFIX
from .domain.exceptions import ConfigurationError

_LOGGER = logging.getLogger(__name__)

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional("prefix", default=DEFAULT_PREFIX): vol.All(
            str,
            vol.Length(min=1),
            vol.Match(
                r"^[A-Za-z_][A-Za-z0-9_]*$",
                msg="prefix must contain identifier characters only",
            ),
        ),
        vol.Optional("exclude_methods", default=list): vol.Any(None, [str]),
        vol.Optional("enabled", default=True): bool,
        vol.Optional("strict_clock", default=False): bool,
        vol.Optional("log_calls", default=False): bool,
    },
    extra=vol.PREVENT_EXTRA,
)


@dataclass(frozen=True)
class TimerConfig:
    """Validated method timing configuration.

    Attributes:
        prefix: Alias prefix; the original of ``name`` is kept as
            ``_<prefix><name>``
        exclude_methods: Method names never wrapped
        enabled: Whether timing starts switched on
        strict_clock: Raise ClockError when the clock goes backwards
            around a successful call
        log_calls: Emit one DEBUG log line per timed call
    """

    prefix: str = DEFAULT_PREFIX
    exclude_methods: frozenset[str] = field(default_factory=frozenset)
    enabled: bool = True
    strict_clock: bool = False
    log_calls: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> TimerConfig:
        """Validate ``data`` and build a config.

        Raises:
            ConfigurationError: If ``data`` does not match CONFIG_SCHEMA
        """
        if data is not None and not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )
        raw = dict(data or {})
        excluded = raw.get("exclude_methods")
        if isinstance(excluded, (set, frozenset, tuple)):
            raw["exclude_methods"] = sorted(excluded)

        try:
            validated = CONFIG_SCHEMA(raw)
        except vol.Invalid as err:
            raise ConfigurationError(
                f"Invalid method timing configuration: {err}"
            ) from err

        return cls(
            prefix=validated["prefix"],
            exclude_methods=frozenset(validated["exclude_methods"] or ()),
            enabled=validated["enabled"],
            strict_clock=validated["strict_clock"],
            log_calls=validated["log_calls"],
        )


def load_timer_config(path: str | Path) -> TimerConfig:
    """Load and validate timer configuration from YAML.

    The file holds either the options at top level or under a
    ``method_timing:`` section.

    Args:
        path: YAML file to read

    Returns:
        Validated TimerConfig

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the file is empty, not valid YAML or invalid
    """
    config_file = Path(path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    try:
        data = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    except yaml.YAMLError as err:
        raise ConfigurationError(f"Invalid YAML: {err}") from err

    if not data:
        raise ConfigurationError("Configuration file is empty")
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration must be a mapping, got {type(data).__name__}"
        )

    section = data.get(CONFIG_SECTION, data)
    config = TimerConfig.from_dict(section)

    _LOGGER.info(
        "Loaded method timing configuration from %s: prefix=%s, %d excluded methods",
        config_file,
        config.prefix,
        len(config.exclude_methods),
    )
    return config
