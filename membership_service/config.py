"""
Settings are read from the environment once, at process start, and passed
explicitly to the dispatcher and the routes.
"""

import os
from dataclasses import dataclass, field

from membership_service.exceptions import ConfigError

DEFAULT_SENDER_NAME = "Simone Susinna Fan Club"
DEFAULT_PORTAL_URL = "https://fanclub.simonesusinna.com/portal"
DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024
MAIL_TRANSPORTS = ("smtp", "mailgun", "console")


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration. Immutable after startup."""

    email_user: str = ""
    email_pass: str = ""
    from_email: str = ""
    admin_email: str = ""
    sender_name: str = DEFAULT_SENDER_NAME
    portal_url: str = DEFAULT_PORTAL_URL

    mail_transport: str = "smtp"
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_use_tls: bool = True
    mail_timeout_seconds: float = 10.0
    mailgun_api_key: str = ""
    mailgun_domain: str = ""
    mailgun_api_base_url: str = "https://api.mailgun.net"

    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    rate_limit_window_seconds: int = 15 * 60
    rate_limit_max_requests: int = 100
    cors_allowed_origins: tuple = field(default_factory=lambda: ("*",))

    port: int = 3001
    app_env: str = "development"
    log_level: str = "INFO"

    @property
    def from_header(self):
        return f"{self.sender_name} <{self.from_email}>"

    @classmethod
    def from_env(cls, environ=None):
        env = os.environ if environ is None else environ

        email_user = _get(env, "EMAIL_USER")
        from_email = _get(env, "FROM_EMAIL") or email_user
        admin_email = _get(env, "ADMIN_EMAIL") or from_email

        mail_transport = (_get(env, "MAIL_TRANSPORT") or "smtp").lower()
        if mail_transport not in MAIL_TRANSPORTS:
            raise ConfigError(
                f"MAIL_TRANSPORT must be one of {', '.join(MAIL_TRANSPORTS)}, got {mail_transport!r}"
            )

        origins_raw = _get(env, "CORS_ALLOWED_ORIGINS") or "*"
        origins = tuple(o.strip() for o in origins_raw.split(",") if o.strip()) or ("*",)

        return cls(
            email_user=email_user,
            email_pass=_get(env, "EMAIL_PASS"),
            from_email=from_email,
            admin_email=admin_email,
            sender_name=_get(env, "SENDER_NAME") or DEFAULT_SENDER_NAME,
            portal_url=_get(env, "PORTAL_URL") or DEFAULT_PORTAL_URL,
            mail_transport=mail_transport,
            smtp_host=_get(env, "SMTP_HOST") or "smtp.gmail.com",
            smtp_port=_int(env, "SMTP_PORT", 587),
            smtp_use_tls=_bool(env, "SMTP_USE_TLS", True),
            mail_timeout_seconds=_float(env, "MAIL_TIMEOUT_SECONDS", 10.0),
            mailgun_api_key=_get(env, "MAILGUN_API_KEY"),
            mailgun_domain=_get(env, "MAILGUN_DOMAIN"),
            mailgun_api_base_url=(_get(env, "MAILGUN_API_BASE_URL") or "https://api.mailgun.net").rstrip("/"),
            max_upload_bytes=_int(env, "MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES),
            rate_limit_window_seconds=_int(env, "RATE_LIMIT_WINDOW_SECONDS", 15 * 60),
            rate_limit_max_requests=_int(env, "RATE_LIMIT_MAX_REQUESTS", 100),
            cors_allowed_origins=origins,
            port=_int(env, "PORT", 3001),
            app_env=_get(env, "APP_ENV") or "development",
            log_level=(_get(env, "LOG_LEVEL") or "INFO").upper(),
        )


def _get(env, name):
    value = env.get(name)
    return value.strip() if value else ""


def _int(env, name, default):
    raw = _get(env, name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _float(env, name, default):
    raw = _get(env, name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


def _bool(env, name, default):
    raw = _get(env, name)
    if not raw:
        return default
    normalized = raw.lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ConfigError(f"Invalid boolean value for {name}: {raw!r}")
