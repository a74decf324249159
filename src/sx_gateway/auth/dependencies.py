"""Caller identity dependency.

Authentication and sessions live in front of this service; the upstream
gateway forwards the authenticated user id in the X-User-Id header.
"""

from typing import Annotated

from fastapi import Header

from src.sx_common.errors import MissingIdentityError


async def get_current_user_id(
    x_user_id: Annotated[str | None, Header()] = None,
) -> str:
    if x_user_id is None or not x_user_id.strip():
        raise MissingIdentityError()
    return x_user_id.strip()
