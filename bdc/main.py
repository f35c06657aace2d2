from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import Response

from bdc.core.config import settings
from bdc.routers import notifications, preferences, push_subscriptions

OPENAPI_TAGS = [
    {"name": "Notifications", "description": "List, create, read and delete notifications."},
    {
        "name": "Notification Preferences",
        "description": "Per-user channel and notification type delivery settings.",
    },
    {"name": "Push", "description": "Web Push subscriptions and test delivery."},
]

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description=(
        "Notification delivery for the dealership BDC application. "
        "Stores notifications, applies delivery preferences and sends Web Push messages."
    ),
    openapi_tags=OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def options_handler(request: Request, call_next):  # type: ignore[no-untyped-def]
    if request.method == "OPTIONS":
        origin = request.headers.get("origin", "*")
        return Response(
            status_code=200,
            headers={
                "Access-Control-Allow-Origin": origin,
                "Access-Control-Allow-Methods": "*",
                "Access-Control-Allow-Headers": "*",
                "Access-Control-Allow-Credentials": "true",
                "Access-Control-Max-Age": "86400",
            },
        )
    return await call_next(request)


# Fixed paths must be registered before the /{notification_id} routes
app.include_router(
    preferences.router, prefix="/api/notifications", tags=["Notification Preferences"]
)
app.include_router(push_subscriptions.router, prefix="/api/notifications", tags=["Push"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["Notifications"])


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "domain": settings.APP_DOMAIN,
        "status": "running",
    }
