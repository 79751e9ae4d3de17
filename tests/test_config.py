import unittest

from membership_service.config import DEFAULT_MAX_UPLOAD_BYTES, Settings
from membership_service.exceptions import ConfigError


class SettingsFromEnvTests(unittest.TestCase):
    def test_defaults(self):
        settings = Settings.from_env({})

        self.assertEqual(settings.mail_transport, "smtp")
        self.assertEqual(settings.smtp_host, "smtp.gmail.com")
        self.assertEqual(settings.smtp_port, 587)
        self.assertEqual(settings.port, 3001)
        self.assertEqual(settings.max_upload_bytes, DEFAULT_MAX_UPLOAD_BYTES)
        self.assertEqual(settings.rate_limit_window_seconds, 900)
        self.assertEqual(settings.rate_limit_max_requests, 100)
        self.assertEqual(settings.cors_allowed_origins, ("*",))

    def test_addresses_fall_back_to_email_user(self):
        settings = Settings.from_env({"EMAIL_USER": "club@example.com"})

        self.assertEqual(settings.from_email, "club@example.com")
        self.assertEqual(settings.admin_email, "club@example.com")
        self.assertEqual(settings.from_header, "Simone Susinna Fan Club <club@example.com>")

    def test_explicit_values(self):
        settings = Settings.from_env({
            "EMAIL_USER": "login@example.com",
            "FROM_EMAIL": "club@example.com",
            "ADMIN_EMAIL": "admin@example.com",
            "MAIL_TRANSPORT": "Console",
            "PORT": "8080",
            "SMTP_USE_TLS": "no",
            "CORS_ALLOWED_ORIGINS": "https://a.example, https://b.example",
        })

        self.assertEqual(settings.from_email, "club@example.com")
        self.assertEqual(settings.admin_email, "admin@example.com")
        self.assertEqual(settings.mail_transport, "console")
        self.assertEqual(settings.port, 8080)
        self.assertFalse(settings.smtp_use_tls)
        self.assertEqual(
            settings.cors_allowed_origins, ("https://a.example", "https://b.example")
        )

    def test_invalid_values_raise(self):
        for env in ({"PORT": "abc"}, {"MAIL_TRANSPORT": "pigeon"}, {"SMTP_USE_TLS": "maybe"}):
            with self.subTest(env=env):
                with self.assertRaises(ConfigError):
                    Settings.from_env(env)

    def test_settings_are_frozen(self):
        settings = Settings.from_env({})
        with self.assertRaises(AttributeError):
            settings.admin_email = "x@example.com"


if __name__ == "__main__":
    unittest.main()
