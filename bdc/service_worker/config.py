"""Runtime configuration for the service worker."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urljoin

from bdc.core.config import Settings, settings as app_settings


@dataclass(frozen=True)
class ServiceWorkerConfig:
    """Values the worker needs; built from application settings by default."""

    origin: str = "http://localhost:3000"
    cache_name: str = "car-exchange-cache-v1"
    offline_url: str = "/offline.html"
    precache_urls: tuple[str, ...] = ()
    api_prefix: str = "/api/"
    dev_tooling_patterns: tuple[str, ...] = ("browser-sync", "socket.io")
    skip_waiting_on_install: bool = True
    default_title: str = "Car Exchange Module"
    default_body: str = "You have a new notification"
    default_icon: str = "/favicon.ico"
    badge: str = "/notification-badge.png"
    default_tag: str = "default"
    default_vibrate: tuple[int, ...] = (200, 100, 200)
    fallback_title: str = "New Notification"
    fallback_body: str = "No details available"

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> ServiceWorkerConfig:
        s = source or app_settings
        return cls(
            origin=s.SW_ORIGIN,
            cache_name=s.SW_CACHE_NAME,
            offline_url=s.SW_OFFLINE_URL,
            precache_urls=tuple(s.SW_PRECACHE_URLS),
            api_prefix=s.SW_API_PREFIX,
            dev_tooling_patterns=tuple(s.SW_DEV_TOOLING_PATTERNS),
            skip_waiting_on_install=s.SW_SKIP_WAITING_ON_INSTALL,
            default_title=s.SW_DEFAULT_TITLE,
            default_body=s.SW_DEFAULT_BODY,
            default_icon=s.SW_DEFAULT_ICON,
            badge=s.SW_BADGE,
        )

    def absolute_url(self, path: str) -> str:
        """Resolve *path* against the worker origin."""
        return urljoin(self.origin, path)
