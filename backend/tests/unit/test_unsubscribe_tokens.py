"""
Unit tests for secret token generation and signed unsubscribe links.
"""

import hashlib
import os
import time
import unittest
from unittest.mock import patch
from urllib.parse import parse_qs, urlparse

from itsdangerous import URLSafeTimedSerializer

from notifications.unsubscribe_tokens import (
    UNSUBSCRIBE_PATH,
    UNSUBSCRIBE_SALT,
    build_unsubscribe_url,
    generate_secret_token,
    generate_unsubscribe_token,
    require_unsubscribe_secret,
    validate_unsubscribe_token,
)
from tests.fixtures.mock_helpers import create_test_mail_config


class TestSecretToken(unittest.TestCase):
    """Tests for generate_secret_token()."""

    def test_token_is_url_safe(self):
        token = generate_secret_token()

        allowed_chars = set(
            "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
        )
        self.assertGreaterEqual(len(token), 40)
        self.assertTrue(all(c in allowed_chars for c in token))

    def test_tokens_are_unique(self):
        tokens = {generate_secret_token() for _ in range(50)}

        self.assertEqual(len(tokens), 50)


class TestUnsubscribeTokens(unittest.TestCase):
    """Test token signing and validation logic."""

    def setUp(self):
        """Set up test environment with secret key."""
        self.original_secret = os.environ.get("UNSUBSCRIBE_SECRET_KEY")
        os.environ["UNSUBSCRIBE_SECRET_KEY"] = (
            "test-secret-key-for-testing-must-be-at-least-32-chars-long"
        )

    def tearDown(self):
        """Restore original environment."""
        if self.original_secret:
            os.environ["UNSUBSCRIBE_SECRET_KEY"] = self.original_secret
        else:
            os.environ.pop("UNSUBSCRIBE_SECRET_KEY", None)

    def _old_token(self, secret_token, days_ago):
        serializer = URLSafeTimedSerializer(
            os.environ["UNSUBSCRIBE_SECRET_KEY"],
            salt=UNSUBSCRIBE_SALT,
            signer_kwargs={"digest_method": hashlib.sha256},
        )
        old_timestamp = time.time() - (days_ago * 24 * 60 * 60)
        with patch("time.time", return_value=old_timestamp):
            return serializer.dumps(secret_token)

    def test_signed_token_format(self):
        """Signed token has payload.timestamp.signature format."""
        token = generate_unsubscribe_token("secret-abc")

        self.assertIsInstance(token, str)
        self.assertEqual(token.count("."), 2)

    def test_validate_returns_secret_token(self):
        secret = generate_secret_token()
        token = generate_unsubscribe_token(secret)

        self.assertEqual(validate_unsubscribe_token(token), secret)

    def test_validate_returns_none_for_invalid_token(self):
        self.assertIsNone(validate_unsubscribe_token("this-is-not-a-valid-token-at-all"))

    def test_validate_returns_none_for_empty_token(self):
        self.assertIsNone(validate_unsubscribe_token(""))

    def test_validate_returns_none_for_none_token(self):
        self.assertIsNone(validate_unsubscribe_token(None))

    def test_validate_returns_none_for_tampered_signature(self):
        parts = generate_unsubscribe_token("secret-abc").split(".")
        parts[2] = "X" * len(parts[2])

        self.assertIsNone(validate_unsubscribe_token(".".join(parts)))

    def test_validate_returns_none_for_expired_token(self):
        token = self._old_token("secret-abc", days_ago=91)

        self.assertIsNone(validate_unsubscribe_token(token, max_age_days=90))

    def test_expiry_respects_max_age_parameter(self):
        token = self._old_token("secret-abc", days_ago=45)

        self.assertEqual(validate_unsubscribe_token(token, max_age_days=90), "secret-abc")
        self.assertIsNone(validate_unsubscribe_token(token, max_age_days=30))

    def test_validate_with_different_secret_key_fails(self):
        token = generate_unsubscribe_token("secret-abc")
        os.environ["UNSUBSCRIBE_SECRET_KEY"] = (
            "different-secret-key-wont-match-original-signature-min32"
        )

        self.assertIsNone(validate_unsubscribe_token(token))

    def test_token_requires_secret_key(self):
        os.environ.pop("UNSUBSCRIBE_SECRET_KEY", None)

        with self.assertRaises(ValueError) as context:
            generate_unsubscribe_token("secret-abc")

        self.assertIn("UNSUBSCRIBE_SECRET_KEY", str(context.exception))

    def test_require_unsubscribe_secret(self):
        require_unsubscribe_secret()

        os.environ["UNSUBSCRIBE_SECRET_KEY"] = ""
        with self.assertRaises(ValueError):
            require_unsubscribe_secret()

    def test_build_unsubscribe_url(self):
        config = create_test_mail_config(base_url="https://test.example.com/")

        url = build_unsubscribe_url("secret-abc", config)

        parsed = urlparse(url)
        self.assertEqual(parsed.netloc, "test.example.com")
        self.assertEqual(parsed.path, UNSUBSCRIBE_PATH)
        token = parse_qs(parsed.query)["token"][0]
        self.assertEqual(validate_unsubscribe_token(token), "secret-abc")


if __name__ == "__main__":
    unittest.main()
