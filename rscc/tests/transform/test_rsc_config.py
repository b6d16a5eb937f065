# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

import pytest

from rscc.transform import (
	CompilationMode,
	ConfigAll,
	ConfigError,
	ConfigWithOptions,
	Options,
	config_from_json,
	config_truthy,
	load_config,
	resolve_mode,
)


def test_bare_boolean_config():
	assert config_from_json(True) == ConfigAll(enabled=True)
	assert config_from_json(False) == ConfigAll(enabled=False)


def test_options_config_uses_camel_case_key():
	assert config_from_json({"isServer": True}) == ConfigWithOptions(Options(is_server=True))
	assert config_from_json({"isServer": False}) == ConfigWithOptions(Options(is_server=False))


@pytest.mark.parametrize("value", ["yes", 1, None, [], {}, {"isServer": 1}, {"is_server": True}])
def test_malformed_config_is_rejected(value):
	with pytest.raises(ConfigError):
		config_from_json(value)


def test_config_error_is_a_value_error():
	assert issubclass(ConfigError, ValueError)


def test_truthiness():
	assert config_truthy(ConfigAll(True))
	assert not config_truthy(ConfigAll(False))
	assert config_truthy(ConfigWithOptions(Options(is_server=False)))


def test_mode_resolution():
	assert resolve_mode(ConfigAll(True)) is CompilationMode.SERVER
	assert resolve_mode(ConfigAll(False)) is CompilationMode.SERVER
	assert resolve_mode(ConfigWithOptions(Options(is_server=True))) is CompilationMode.SERVER
	assert resolve_mode(ConfigWithOptions(Options(is_server=False))) is CompilationMode.CLIENT


def test_load_config_reads_json(tmp_path: Path):
	path = tmp_path / "rsc.json"
	path.write_text('{"isServer": false}')
	assert load_config(path) == ConfigWithOptions(Options(is_server=False))
	path.write_text("true")
	assert load_config(str(path)) == ConfigAll(True)


def test_load_config_reports_bad_json_and_missing_files(tmp_path: Path):
	path = tmp_path / "rsc.json"
	path.write_text("{not json")
	with pytest.raises(ConfigError, match="invalid JSON"):
		load_config(path)
	with pytest.raises(ConfigError, match="cannot read config"):
		load_config(tmp_path / "missing.json")
