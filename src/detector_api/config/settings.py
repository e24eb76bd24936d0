from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Any

import httpx
from pydantic import BeforeValidator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_AUTH_HEADER = 'X-SF-Token'
DEFAULT_USER_AGENT = 'detector-api/0.1.0'


def _parse_url(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise TypeError('api_url must be a non-empty string')
    return value.strip().rstrip('/')


ApiUrl = Annotated[str, BeforeValidator(_parse_url)]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file='.env',
        env_prefix='DETECTOR_API_',
        extra='ignore',
    )

    api_url: ApiUrl = 'https://api.signalfx.com'
    auth_token: str | None = None
    auth_header: str = DEFAULT_AUTH_HEADER
    timeout_seconds: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = 'INFO'


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


@dataclass(frozen=True)
class ClientConfig:
    """Immutable connection settings for one client instance."""

    base_url: str
    auth_token: str | None = None
    auth_header: str = DEFAULT_AUTH_HEADER
    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    transport: httpx.AsyncBaseTransport | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, 'base_url', _parse_url(self.base_url))

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        **overrides: Any,
    ) -> ClientConfig:
        settings = settings or get_settings()
        values: dict[str, Any] = {
            'base_url': settings.api_url,
            'auth_token': settings.auth_token,
            'auth_header': settings.auth_header,
            'timeout': settings.timeout_seconds,
            'user_agent': settings.user_agent,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(transport=transport, **values)

    def __repr__(self) -> str:
        token = '***' if self.auth_token else None
        return f"ClientConfig(base_url={self.base_url!r}, auth_token={token!r}, timeout={self.timeout!r})"


__all__ = ["ClientConfig", "Settings", "get_settings"]
