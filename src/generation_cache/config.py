import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping
from urllib.parse import unquote, urlsplit

from dotenv import load_dotenv
from pydantic import ValidationError

from generation_cache.dto import RedisCacheCredential, RedisCacheUrlCredential
from generation_cache.entities import ConnectionConfig
from generation_cache.errors import ConfigurationError

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_REDIS_PORT = 6379
DEFAULT_REDIS_HOST = "localhost"


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name)
    return float(raw) if raw else None


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    return int(raw) if raw else None


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis connection defaults, used when a credential leaves a field empty
    redis_url: str | None = os.getenv("REDIS_URL")
    redis_host: str | None = os.getenv("REDIS_HOST")
    redis_port: str | None = os.getenv("REDIS_PORT")
    redis_user: str | None = os.getenv("REDIS_USER")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    redis_socket_timeout: float | None = _optional_float("REDIS_SOCKET_TIMEOUT")

    # Cache
    cache_ttl_ms: int | None = _optional_int("CACHE_TTL_MS")
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "")

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl_ms is not None and self.cache_ttl_ms <= 0:
            raise ValueError("CACHE_TTL_MS must be a positive number of milliseconds")

        if self.redis_socket_timeout is not None and self.redis_socket_timeout <= 0:
            raise ValueError("REDIS_SOCKET_TIMEOUT must be positive")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def _parse_port(value: str | int | None) -> int:
    """Parse a discrete port value, falling back to the Redis default."""
    if value is None or value == "":
        return DEFAULT_REDIS_PORT
    try:
        port = int(value)
    except (TypeError, ValueError):
        logger.debug("Unparsable Redis port %r, using %d", value, DEFAULT_REDIS_PORT)
        return DEFAULT_REDIS_PORT
    return port if port > 0 else DEFAULT_REDIS_PORT


def parse_redis_url(
    url: str,
    tls: bool = False,
    default_username: str | None = None,
    default_password: str | None = None,
) -> ConnectionConfig:
    """Parse a ``redis://`` or ``rediss://`` URL into a ConnectionConfig.

    Args:
        url: The connection URL
        tls: Force TLS even for a plain ``redis://`` URL
        default_username: Used when the URL carries no username
        default_password: Used when the URL carries no password

    Returns:
        The resolved connection configuration

    Raises:
        ConfigurationError: If the URL cannot be parsed
    """
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as e:
        raise ConfigurationError(f"Invalid Redis URL: {e}") from e

    if parts.scheme not in ("redis", "rediss"):
        raise ConfigurationError(
            f"Invalid Redis URL scheme {parts.scheme!r}, expected 'redis' or 'rediss'"
        )
    if not parts.hostname:
        raise ConfigurationError("Invalid Redis URL: missing host")

    db = 0
    path = parts.path.strip("/")
    if path:
        try:
            db = int(path)
        except ValueError as e:
            raise ConfigurationError(f"Invalid Redis URL database {path!r}") from e

    return ConnectionConfig(
        host=parts.hostname,
        port=port or DEFAULT_REDIS_PORT,
        username=unquote(parts.username) if parts.username else default_username,
        password=unquote(parts.password) if parts.password else default_password,
        tls=tls or parts.scheme == "rediss",
        db=db,
    )


def _coerce_credential(
    credential: RedisCacheCredential | RedisCacheUrlCredential | Mapping[str, Any] | None,
) -> RedisCacheCredential | RedisCacheUrlCredential | None:
    """Validate a raw credential mapping into one of the credential DTOs."""
    if credential is None or isinstance(credential, (RedisCacheCredential, RedisCacheUrlCredential)):
        return credential

    try:
        if credential.get("redisUrl") or credential.get("url"):
            return RedisCacheUrlCredential.model_validate(credential)
        return RedisCacheCredential.model_validate(credential)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid Redis credential: {e}") from e


def resolve_connection_config(
    credential: RedisCacheCredential | RedisCacheUrlCredential | Mapping[str, Any] | None = None,
    app_settings: Settings | None = None,
) -> ConnectionConfig:
    """Resolve a credential record and environment defaults into a ConnectionConfig.

    Each field takes the credential value first, then the environment default.
    A non-empty URL takes precedence over the discrete host/port/user/password
    fields.

    Note:
        With TLS enabled the server certificate is not verified. This suits
        private or managed deployments but gives no protection against an
        impersonated server.

    Args:
        credential: Credential DTO, raw credential mapping, or None
        app_settings: Settings supplying environment defaults. Defaults to settings.

    Returns:
        The resolved connection configuration

    Raises:
        ConfigurationError: If the URL or credential is malformed
    """
    app_settings = app_settings or settings
    credential = _coerce_credential(credential)

    url = credential.url if isinstance(credential, RedisCacheUrlCredential) else None
    url = url or app_settings.redis_url

    discrete = credential if isinstance(credential, RedisCacheCredential) else RedisCacheCredential()
    username = discrete.username or app_settings.redis_user
    password = discrete.password or app_settings.redis_password

    if url:
        return parse_redis_url(
            url,
            tls=discrete.ssl_enabled,
            default_username=username,
            default_password=password,
        )

    return ConnectionConfig(
        host=discrete.host or app_settings.redis_host or DEFAULT_REDIS_HOST,
        port=_parse_port(discrete.port or app_settings.redis_port),
        username=username,
        password=password,
        tls=discrete.ssl_enabled,
    )


def parse_ttl(ttl: int | str | None, app_settings: Settings | None = None) -> int | None:
    """Parse a time-to-live in milliseconds, falling back to settings.

    Raises:
        ConfigurationError: If the value is not a positive integer
    """
    if ttl is None or ttl == "":
        return (app_settings or settings).cache_ttl_ms

    try:
        ttl_ms = int(ttl)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid ttl {ttl!r}: expected milliseconds") from e

    if ttl_ms <= 0:
        raise ConfigurationError(f"Invalid ttl {ttl_ms}: must be positive")
    return ttl_ms
