from __future__ import annotations

import os
import unittest
from unittest import mock

from config import DEFAULT_IMAGE_MODEL, DEFAULT_TEXT_MODEL, load_settings


class SettingsTests(unittest.TestCase):
    def load(self, env: dict):
        with mock.patch.dict(os.environ, env, clear=True), mock.patch("config.load_dotenv"):
            return load_settings()

    def test_defaults(self) -> None:
        settings = self.load({})
        self.assertEqual(settings.api_key, "")
        self.assertEqual(settings.text_model, DEFAULT_TEXT_MODEL)
        self.assertEqual(settings.image_model, DEFAULT_IMAGE_MODEL)
        self.assertEqual(settings.http_timeout_ms, 300_000)
        self.assertEqual(settings.port, 5001)
        self.assertFalse(settings.debug)

    def test_api_key_falls_back_to_api_key_variable(self) -> None:
        self.assertEqual(self.load({"API_KEY": "legacy"}).api_key, "legacy")
        self.assertEqual(self.load({"API_KEY": "legacy", "GEMINI_API_KEY": "new"}).api_key, "new")

    def test_overrides(self) -> None:
        settings = self.load({
            "AURA_TEXT_MODEL": "gemini-2.5-flash",
            "AURA_HTTP_TIMEOUT_MS": "1000",
            "AURA_PORT": "8080",
            "AURA_DEBUG": "true",
        })
        self.assertEqual(settings.text_model, "gemini-2.5-flash")
        self.assertEqual(settings.http_timeout_ms, 1000)
        self.assertEqual(settings.port, 8080)
        self.assertTrue(settings.debug)

    def test_invalid_integer(self) -> None:
        with self.assertRaises(ValueError):
            self.load({"AURA_PORT": "abc"})


if __name__ == "__main__":
    unittest.main()
