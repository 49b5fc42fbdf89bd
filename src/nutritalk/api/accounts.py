"""Registration and login endpoints."""

from fastapi import APIRouter, Depends

from nutritalk.api.dependencies import get_container
from nutritalk.containers import AppContainer
from nutritalk.domain.payloads import CredentialsPayload, RegisterPayload, SessionPayload

router = APIRouter(tags=["accounts"])


@router.post("/register")
async def register(
    payload: RegisterPayload, container: AppContainer = Depends(get_container)
) -> SessionPayload:
    """Create an account and return a bearer token."""
    session = container.account_service.register(
        payload.email, payload.password, payload.name
    )
    return SessionPayload(token=session.token, user_id=session.user_id)


@router.post("/login")
async def login(
    payload: CredentialsPayload, container: AppContainer = Depends(get_container)
) -> SessionPayload:
    """Exchange credentials for a bearer token."""
    session = container.account_service.login(payload.email, payload.password)
    return SessionPayload(token=session.token, user_id=session.user_id)
