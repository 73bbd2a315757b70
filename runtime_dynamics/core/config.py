import base64
import binascii
import os

from fastapi import Request
from loguru import logger
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

DEFAULT_DATASTORE_NAME = "default"
DEFAULT_FRONTEND_ENDPOINT = "http://local.nitecon.net:8080"


class Settings(BaseSettings):
    # Google Cloud / Firebase
    DATASTORE_NAME: str = ""
    FRONTEND_ENDPOINT: str = ""
    FIREBASE_API_KEY: str = ""
    FIREBASE_AUTH_DOMAIN: str = ""
    GOOGLE_PROJECT_ID: str = ""

    # Server
    HOST: str = "0.0.0.0"
    LISTEN_PORT: int = 8080
    DEBUG: bool = False
    LOG_DIR: str = ""

    # Static assets
    STATIC_DIR: str = "static"
    IS_DEV: bool = False
    NO_STATIC: bool = False

    # TLS (PEM or base64-encoded PEM)
    TLS_CERT: str = ""
    TLS_KEY: str = ""

    class Config:
        env_file = ".env"
        extra = "ignore"
        env_ignore_empty = True
        str_strip_whitespace = True

    @field_validator("DEBUG", "NO_STATIC", mode="before")
    @classmethod
    def _any_value_enables(cls, v):
        if isinstance(v, str):
            return len(v.strip()) > 0
        return bool(v)

    @field_validator("IS_DEV", mode="before")
    @classmethod
    def _exactly_true(cls, v):
        if isinstance(v, str):
            return v.strip() == "true"
        return bool(v)

    @model_validator(mode="after")
    def _apply_fallbacks(self):
        if not self.DATASTORE_NAME:
            logger.info(f"Using '{DEFAULT_DATASTORE_NAME}' datastore database")
            self.DATASTORE_NAME = DEFAULT_DATASTORE_NAME
        if not self.FRONTEND_ENDPOINT:
            logger.info(f"Using [{DEFAULT_FRONTEND_ENDPOINT}] as frontend endpoint")
            self.FRONTEND_ENDPOINT = DEFAULT_FRONTEND_ENDPOINT
        return self

    @property
    def static_enabled(self) -> bool:
        return not self.NO_STATIC

    @property
    def tls_enabled(self) -> bool:
        return bool(self.TLS_CERT and self.TLS_KEY)


def load_settings() -> Settings:
    """Read the environment into a new Settings instance."""
    return Settings()


def get_settings(request: Request) -> Settings:
    """FastAPI dependency returning the settings the app was built with."""
    return request.app.state.settings


def decode_pem(value: str, name: str = "value") -> str:
    """
    Decode a certificate or key that may be base64-encoded.

    Accepts padded or raw (unpadded) base64. Anything that does not decode is
    assumed to be PEM text already and returned unchanged.
    """
    value = value.strip()
    if not value:
        return ""

    # Line-wrapped output of `base64`
    compact = value.replace("\r", "").replace("\n", "")
    try:
        decoded = base64.b64decode(compact, validate=True)
    except binascii.Error:
        decoded = None
        if len(compact) % 4:
            try:
                decoded = base64.b64decode(compact + "=" * (-len(compact) % 4), validate=True)
            except binascii.Error:
                pass

    if decoded is None:
        logger.debug(f"{name}: certificate/key not base64-encoded, using as-is")
        return value

    logger.debug(f"{name}: successfully decoded base64-encoded certificate/key")
    return decoded.decode("utf-8", errors="replace")


def decode_base64_cert(env_var: str) -> str:
    """Read a certificate or key from the environment. Empty when unset."""
    return decode_pem(os.environ.get(env_var, ""), env_var)
