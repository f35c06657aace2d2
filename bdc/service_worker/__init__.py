"""In-process service worker: offline caching and notification handling."""

from bdc.service_worker.cache_manager import CacheManager
from bdc.service_worker.cache_storage import (
    CacheBucket,
    CacheStorage,
    InMemoryCacheBucket,
    InMemoryCacheStorage,
)
from bdc.service_worker.clients import Client, ClientRegistry, WindowClient
from bdc.service_worker.config import ServiceWorkerConfig
from bdc.service_worker.dispatcher import NotificationDispatcher, resolve_url
from bdc.service_worker.fetch_interceptor import FetchInterceptor, RequestPolicy
from bdc.service_worker.registration import (
    DisplayedNotification,
    NotificationOptions,
    NotificationRegistration,
)
from bdc.service_worker.renderer import NotificationRenderer
from bdc.service_worker.runtime import ServiceWorker, WorkerState

__all__ = [
    "CacheBucket",
    "CacheManager",
    "CacheStorage",
    "Client",
    "ClientRegistry",
    "DisplayedNotification",
    "FetchInterceptor",
    "InMemoryCacheBucket",
    "InMemoryCacheStorage",
    "NotificationDispatcher",
    "NotificationOptions",
    "NotificationRegistration",
    "NotificationRenderer",
    "RequestPolicy",
    "ServiceWorker",
    "ServiceWorkerConfig",
    "WindowClient",
    "resolve_url",
]
