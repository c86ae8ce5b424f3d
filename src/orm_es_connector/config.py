"""Client configuration built from connector settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .settings import ElasticsearchSettings, HostSpec

# Level names accepted by the legacy client that the logging module lacks.
_LEVEL_ALIASES = {"trace": "DEBUG", "warn": "WARNING"}


@dataclass(frozen=True)
class ClientConfig:
    """Transport configuration for one ``AsyncElasticsearch`` instance."""

    hosts: tuple[str, ...]
    request_timeout: float | None = None
    verify_certs: bool | None = None
    ca_certs: str | None = None
    basic_auth: tuple[str, str] | None = None
    api_key: str | None = None
    log_level: int = logging.ERROR

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for the client constructor; unset values omitted."""
        kwargs: dict[str, Any] = {"hosts": list(self.hosts)}
        if self.request_timeout is not None:
            kwargs["request_timeout"] = self.request_timeout
        if self.verify_certs is not None:
            kwargs["verify_certs"] = self.verify_certs
        if self.ca_certs is not None:
            kwargs["ca_certs"] = self.ca_certs
        if self.basic_auth is not None:
            kwargs["basic_auth"] = self.basic_auth
        if self.api_key is not None:
            kwargs["api_key"] = self.api_key
        return kwargs


def _normalise_host(host: HostSpec, *, default_scheme: str) -> str:
    if isinstance(host, str):
        return host if "://" in host else f"{default_scheme}://{host}"
    scheme = host.get("scheme") or host.get("protocol") or default_scheme
    name = host.get("host") or "127.0.0.1"
    port = host.get("port") or 9200
    return f"{scheme}://{name}:{port}"


def resolve_log_level(name: str) -> int:
    """Map a level name (``"error"``, ``"trace"``...) to a logging level."""
    key = name.strip().lower()
    level = logging.getLevelName(_LEVEL_ALIASES.get(key, key.upper()))
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level: {name!r}")
    return level


def build_client_config(settings: ElasticsearchSettings) -> ClientConfig:
    """Build a fresh :class:`ClientConfig` from *settings*.

    Raises:
        ConfigurationError: the CA file does not exist or the log level is
            not recognised.
    """
    ssl = settings.ssl
    default_scheme = "https" if ssl is not None else "http"
    raw_hosts = settings.hosts if isinstance(settings.hosts, list) else [settings.hosts]
    hosts = tuple(_normalise_host(h, default_scheme=default_scheme) for h in raw_hosts)

    verify_certs: bool | None = None
    ca_certs: str | None = None
    if ssl is not None:
        verify_certs = ssl.reject_unauthorized
        if ssl.ca:
            ca_path = Path(ssl.ca).expanduser().resolve()
            if not ca_path.is_file():
                raise ConfigurationError(f"CA certificate not found: {ca_path}")
            ca_certs = str(ca_path)

    return ClientConfig(
        hosts=hosts,
        request_timeout=settings.request_timeout,
        verify_certs=verify_certs,
        ca_certs=ca_certs,
        basic_auth=settings.basic_auth,
        api_key=settings.api_key,
        log_level=resolve_log_level(settings.log),
    )
