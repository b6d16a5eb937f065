# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Pass configuration.

Build tooling hands the pass either a bare boolean (enable/disable with the
default server compilation) or an options object:

	{ "isServer": true }

The value is resolved once, before the pass runs, into an enable flag
(`config_truthy`) and a compilation mode (`resolve_mode`).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union


class CompilationMode(Enum):
	SERVER = "server"
	CLIENT = "client"


class ConfigError(ValueError):
	"""Malformed pass configuration (bad JSON shape or unreadable file)."""


@dataclass(frozen=True)
class Options:
	is_server: bool


@dataclass(frozen=True)
class ConfigAll:
	"""Bare boolean form: the pass is on (server compilation) or off."""

	enabled: bool


@dataclass(frozen=True)
class ConfigWithOptions:
	options: Options


Config = Union[ConfigAll, ConfigWithOptions]


def config_from_json(value: Any) -> Config:
	"""Decode a JSON value (bool or `{"isServer": bool}`) into a Config."""
	if isinstance(value, bool):
		return ConfigAll(enabled=value)
	if isinstance(value, dict):
		unknown = sorted(k for k in value if k != "isServer")
		if unknown:
			raise ConfigError(f"unknown config key(s): {', '.join(unknown)}")
		is_server = value.get("isServer")
		if not isinstance(is_server, bool):
			raise ConfigError("config field `isServer` must be a boolean")
		return ConfigWithOptions(options=Options(is_server=is_server))
	raise ConfigError("config must be a boolean or an object with `isServer`")


def load_config(path: Path | str) -> Config:
	path = Path(path)
	try:
		obj = json.loads(path.read_text(encoding="utf-8"))
	except OSError as err:
		raise ConfigError(f"cannot read config {path}: {err}") from err
	except json.JSONDecodeError as err:
		raise ConfigError(f"invalid JSON in config {path}: {err}") from err
	return config_from_json(obj)


def config_truthy(config: Config) -> bool:
	if isinstance(config, ConfigAll):
		return config.enabled
	return True


def resolve_mode(config: Config) -> CompilationMode:
	if isinstance(config, ConfigWithOptions):
		return CompilationMode.SERVER if config.options.is_server else CompilationMode.CLIENT
	return CompilationMode.SERVER


__all__ = [
	"CompilationMode",
	"Config",
	"ConfigAll",
	"ConfigError",
	"ConfigWithOptions",
	"Options",
	"config_from_json",
	"config_truthy",
	"load_config",
	"resolve_mode",
]
