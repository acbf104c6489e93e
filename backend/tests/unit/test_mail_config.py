"""Unit tests for config/mail_config.py"""

import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from config.mail_config import (
    DEFAULT_BASE_URL,
    DEFAULT_FROM_EMAIL,
    DEFAULT_INSTANCE_NAME,
    MailConfig,
    load_mail_config,
)

ENV_KEYS = [
    "NOTIFICATION_FROM_EMAIL",
    "INSTANCE_NAME",
    "FRONTEND_BASE_URL",
    "RESEND_API_KEY",
]


class TestLoadMailConfig(unittest.TestCase):
    """Tests for load_mail_config()."""

    def test_defaults(self):
        env = {k: v for k, v in os.environ.items() if k not in ENV_KEYS}
        with patch.dict(os.environ, env, clear=True):
            config = load_mail_config()

        self.assertEqual(config.from_email, DEFAULT_FROM_EMAIL)
        self.assertEqual(config.instance_name, DEFAULT_INSTANCE_NAME)
        self.assertEqual(config.base_url, DEFAULT_BASE_URL)
        self.assertIsNone(config.resend_api_key)

    def test_reads_environment(self):
        env = {
            "NOTIFICATION_FROM_EMAIL": "status@cloud.example.org",
            "INSTANCE_NAME": "Example Cloud",
            "FRONTEND_BASE_URL": "https://cloud.example.org",
            "RESEND_API_KEY": "re_123",
        }
        with patch.dict(os.environ, env):
            config = load_mail_config()

        self.assertEqual(config.sender, "Example Cloud <status@cloud.example.org>")
        self.assertEqual(config.files_url, "https://cloud.example.org/apps/files")
        self.assertEqual(config.resend_api_key, "re_123")

    def test_invalid_from_email(self):
        with patch.dict(os.environ, {"NOTIFICATION_FROM_EMAIL": "not-an-email"}):
            with self.assertRaises(ValidationError):
                load_mail_config()


class TestMailConfig(unittest.TestCase):
    """Tests for MailConfig model."""

    def test_frozen(self):
        config = MailConfig()

        with self.assertRaises(ValidationError):
            config.instance_name = "Other"

    def test_files_url_strips_trailing_slash(self):
        config = MailConfig(base_url="https://cloud.example.org/")

        self.assertEqual(config.files_url, "https://cloud.example.org/apps/files")


if __name__ == "__main__":
    unittest.main()
