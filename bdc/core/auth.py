from uuid import UUID

from fastapi import HTTPException, Request

from bdc.models.shared import DEFAULT_USER_ID


def get_current_user(request: Request) -> UUID:
    """Resolve the calling user from the ``X-User-Id`` header.

    Authentication is handled upstream; when no header is present the default
    user is assumed.
    """
    user_id_header = request.headers.get("X-User-Id")
    if not user_id_header:
        return DEFAULT_USER_ID

    try:
        return UUID(user_id_header)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid X-User-Id header") from None
