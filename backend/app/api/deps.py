from fastapi import Header, HTTPException


def optional_user_id(x_user_id: str | None = Header(default=None)) -> str | None:
    """User id forwarded by the auth proxy in X-User-Id, if any."""
    return (x_user_id or "").strip() or None


def current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Same as optional_user_id but required. Missing -> 401."""
    user_id = optional_user_id(x_user_id)
    if not user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user_id


def current_user_name(x_user_name: str | None = Header(default=None)) -> str | None:
    """Display name forwarded in X-User-Name; used to label reviews and edits."""
    return (x_user_name or "").strip() or None
