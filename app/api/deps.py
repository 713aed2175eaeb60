from fastapi import Header, HTTPException


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> int:
    """Caller identity is resolved upstream and forwarded as X-User-Id."""
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="unauthenticated")
    try:
        return int(x_user_id.strip())
    except ValueError:
        raise HTTPException(status_code=401, detail="unauthenticated")
