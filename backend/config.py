"""
Service configuration, read once from the environment.

The database password may come from the environment directly or from a
mounted secret file:
  POSTGRES_PASSWORD        the password itself
  POSTGRES_PASSWORD_FILE   path to a file holding it (Docker/Kubernetes secrets)
"""

import os
import logging

from sqlalchemy.engine import make_url

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "postgresql+asyncpg://vcconnect@postgres:5432/vcconnect"
DEFAULT_MAX_UPLOAD_SIZE = 10 * 1024 * 1024  # 10 MB


def _read_secret(name: str, file_env_var: str | None = None) -> str:
    """Return the secret ``name`` from the environment or its secret file.

    ``name`` wins when both are set. The file is located through
    ``file_env_var``, which defaults to ``<name>_FILE``; surrounding
    whitespace in the file is ignored.

    Raises:
        ValueError: Neither source yields a non-empty value.
    """
    file_env_var = file_env_var or f"{name}_FILE"

    if os.environ.get(name):
        return os.environ[name]

    secret_path = os.environ.get(file_env_var)
    if secret_path:
        try:
            with open(secret_path, "r") as f:
                secret = f.read().strip()
        except OSError as e:
            logger.error("Cannot read %s from %s: %s", name, secret_path, e)
        else:
            if secret:
                return secret

    raise ValueError(
        f"Secret not configured. Set {name} env var or {file_env_var} pointing to a file."
    )


def _parse_bool(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment and Docker secrets."""

    def __init__(self):
        # Database
        self.database_url = self._build_database_url()
        self.db_echo = _parse_bool(os.environ.get("DB_ECHO"))

        # Server
        self.host = os.environ.get("HOST", "0.0.0.0")
        self.port = int(os.environ.get("PORT", "3000"))
        self.cors_origins = [
            origin.strip()
            for origin in os.environ.get("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]

        # Uploads
        self.max_upload_size = int(
            os.environ.get("MAX_UPLOAD_SIZE", str(DEFAULT_MAX_UPLOAD_SIZE))
        )

    def _build_database_url(self) -> str:
        """DATABASE_URL, with POSTGRES_PASSWORD filled in when the URL names a user but no password."""
        raw_url = os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL)
        try:
            password = _read_secret("POSTGRES_PASSWORD")
        except ValueError:
            logger.warning("POSTGRES_PASSWORD not set, using DATABASE_URL as-is")
            return raw_url

        url = make_url(raw_url)
        if url.username is None or url.password is not None:
            return raw_url
        return url.set(password=password).render_as_string(hide_password=False)


settings = Settings()
