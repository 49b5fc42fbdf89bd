"""Shared FastAPI dependencies."""

from uuid import UUID

from fastapi import Depends, Header, HTTPException, Request, status

from nutritalk.containers import AppContainer
from nutritalk.domain.models import AuthSession
from nutritalk.errors import InvalidTokenError

_BEARER_PREFIX = "bearer "


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the app."""
    return request.app.state.container


async def require_session(
    user_id: UUID,
    authorization: str | None = Header(default=None),
    container: AppContainer = Depends(get_container),
) -> AuthSession:
    """Ensure the bearer token belongs to the user in the path."""
    if not authorization or not authorization.lower().startswith(_BEARER_PREFIX):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    token = authorization[len(_BEARER_PREFIX) :].strip()
    try:
        session = container.account_service.authenticate(token)
    except InvalidTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=exc.message
        ) from exc
    if session.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
    return session
