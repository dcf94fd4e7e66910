"""Request dependencies shared by the routers."""

from fastapi import Header, HTTPException


async def acting_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Identifier of the authenticated user, supplied by the auth gateway.

    Only the identity is taken from the request; the role is always read from
    the stored user.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="User not authenticated")
    return x_user_id.strip()
