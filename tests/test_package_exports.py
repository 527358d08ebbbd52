"""Tests for top-level package exports."""

from __future__ import annotations

import unittest

import eventhooks


class PackageExportTests(unittest.TestCase):
    """Ensure __getattr__ and exported symbols behave as expected."""

    def test_exports_resolve_known_symbols(self) -> None:
        for name in eventhooks.__all__:
            self.assertIsNotNone(getattr(eventhooks, name), name)

    def test_lazy_exports_are_callable(self) -> None:
        self.assertTrue(callable(eventhooks.load_config))
        self.assertTrue(callable(eventhooks.configure_logging))

    def test_module_functions_share_default_registry(self) -> None:
        registry = eventhooks.get_registry()
        registry.clear()
        try:
            eventhooks.bind("pkg.test", lambda: "ok")
            self.assertTrue(registry.bound("pkg.test"))
            self.assertEqual(eventhooks.fire("pkg.test"), ["ok"])
        finally:
            registry.clear()

    def test_unknown_symbol_raises_attribute_error(self) -> None:
        with self.assertRaises(AttributeError):
            getattr(eventhooks, "THIS_DOES_NOT_EXIST")


if __name__ == "__main__":
    unittest.main()
