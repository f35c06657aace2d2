from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "BDC Notifications"
    version: str = "0.1.0"
    DEBUG: bool = False
    APP_DOMAIN: str = "example.com"
    APP_DATABASE_DSN: str = "sqlite:////tmp/bdc.db"
    REDIS_URL: str = "redis://localhost:6379"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Notifications
    NOTIFICATION_TTL_DAYS: int = 30

    # Web Push (VAPID)
    VAPID_PUBLIC_KEY: str = ""
    VAPID_PRIVATE_KEY: str = ""
    VAPID_CLAIMS_SUBJECT: str = "mailto:admin@example.com"
    PUSH_TTL_SECONDS: int = 86400

    # Service worker
    SW_ORIGIN: str = "http://localhost:3000"
    SW_CACHE_NAME: str = "car-exchange-cache-v1"
    SW_OFFLINE_URL: str = "/offline.html"
    SW_PRECACHE_URLS: list[str] = [
        "/",
        "/index.html",
        "/offline.html",
        "/static/css/main.chunk.css",
        "/static/js/main.chunk.js",
        "/static/js/bundle.js",
        "/static/media/logo.png",
        "/favicon.ico",
        "/manifest.json",
        "/sounds/notification-normal.mp3",
        "/sounds/notification-high.mp3",
        "/sounds/notification-low.mp3",
    ]
    SW_API_PREFIX: str = "/api/"
    SW_DEV_TOOLING_PATTERNS: list[str] = ["browser-sync", "socket.io"]
    SW_SKIP_WAITING_ON_INSTALL: bool = True
    SW_DEFAULT_TITLE: str = "Car Exchange Module"
    SW_DEFAULT_BODY: str = "You have a new notification"
    SW_DEFAULT_ICON: str = "/favicon.ico"
    SW_BADGE: str = "/notification-badge.png"

    @property
    def push_enabled(self) -> bool:
        return bool(self.VAPID_PUBLIC_KEY and self.VAPID_PRIVATE_KEY)


settings = Settings()
