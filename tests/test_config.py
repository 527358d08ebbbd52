"""Tests for configuration loading and validation."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
import unittest
from unittest import mock

from eventhooks.config import (
    CONFIG_ENV_VAR,
    CONFIG_PATH,
    DEFAULT_CONFIG,
    load_config,
    resolve_config_path,
)
from eventhooks.exceptions import ConfigValidationError
from eventhooks.registry import EventRegistry


class ConfigTests(unittest.TestCase):
    """Validate config merge and fallback behavior."""

    def test_missing_config_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config = load_config(config_path=Path(temp_dir) / "config.toml")
            self.assertEqual(config, DEFAULT_CONFIG)
            self.assertTrue(config["registry"]["validate_handlers"])
            self.assertFalse(config["registry"]["strict_names"])
            self.assertEqual(config["logging"]["level"], "INFO")

    def test_partial_config_overrides_selected_values(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text(
                """
[registry]
strict_names = true

[logging]
level = "debug"
                """.strip(),
                encoding="utf-8",
            )
            config = load_config(config_path=config_path)
            self.assertTrue(config["registry"]["strict_names"])
            self.assertTrue(config["registry"]["log_fires"])
            self.assertEqual(config["logging"]["level"], "DEBUG")
            self.assertEqual(
                config["logging"]["structured"],
                DEFAULT_CONFIG["logging"]["structured"],
            )

    def test_invalid_values_fallback_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text(
                """
[logging]
level = "LOUD"
                """.strip(),
                encoding="utf-8",
            )
            with self.assertLogs("eventhooks.config", level="WARNING"):
                config = load_config(config_path=config_path)
            self.assertEqual(config, DEFAULT_CONFIG)

    def test_unparseable_toml_falls_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text("[registry\nbroken", encoding="utf-8")
            with self.assertLogs("eventhooks.config", level="WARNING"):
                config = load_config(config_path=config_path)
            self.assertEqual(config, DEFAULT_CONFIG)

    def test_env_var_selects_config_path(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "hooks.toml"
            config_path.write_text(
                "[registry]\nlog_fires = false\n", encoding="utf-8"
            )
            with mock.patch.dict(os.environ, {CONFIG_ENV_VAR: str(config_path)}):
                self.assertEqual(resolve_config_path(), config_path)
                config = load_config()
            self.assertFalse(config["registry"]["log_fires"])

    def test_default_path_without_env_var(self) -> None:
        with mock.patch.dict(os.environ, {CONFIG_ENV_VAR: ""}):
            self.assertEqual(resolve_config_path(), CONFIG_PATH)


class RegistryFromConfigTests(unittest.TestCase):
    """Validate building a registry from the registry config section."""

    def test_from_config_applies_registry_section(self) -> None:
        registry = EventRegistry.from_config(
            {"validate_handlers": False, "strict_names": True, "log_fires": False}
        )
        self.assertFalse(registry.validate_handlers)
        self.assertTrue(registry.strict_names)
        self.assertFalse(registry.log_fires)

    def test_from_config_defaults(self) -> None:
        registry = EventRegistry.from_config()
        self.assertTrue(registry.validate_handlers)
        self.assertFalse(registry.strict_names)
        self.assertTrue(registry.log_fires)

    def test_from_loaded_config(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config = load_config(config_path=Path(temp_dir) / "config.toml")
        registry = EventRegistry.from_config(config["registry"])
        self.assertTrue(registry.validate_handlers)

    def test_from_config_rejects_invalid_section(self) -> None:
        with self.assertRaises(ConfigValidationError):
            EventRegistry.from_config({"strict_names": "sometimes"})


if __name__ == "__main__":
    unittest.main()
