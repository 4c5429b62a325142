import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from totpguard.application.authenticate import TotpAuthenticator
from totpguard.application.resolve_user import (
    resolve_user_id_from_api_key,
    resolve_user_id_from_public_uuid,
)
from totpguard.domain.entities import UNRESOLVED_USER_ID
from totpguard.domain.errors import BackendUnavailable
from totpguard.domain.ports.user_store import UserStorePort
from totpguard.presentation.dependencies import (
    get_auth_enabled,
    get_authenticator,
    get_totp_step_seconds,
    get_user_store,
)
from totpguard.schemas.requests import TotpAuthIn
from totpguard.schemas.responses import AuthAcceptedOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/totp", response_model=AuthAcceptedOut)
async def post_totp_auth(
    body: TotpAuthIn,
    request: Request,
    user_store: Annotated[UserStorePort, Depends(get_user_store)],
    authenticator: Annotated[TotpAuthenticator, Depends(get_authenticator)],
    auth_enabled: Annotated[bool, Depends(get_auth_enabled)],
    step_seconds: Annotated[int, Depends(get_totp_step_seconds)],
):
    client_ip = request.client.host if request.client else ""

    try:
        user_id = UNRESOLVED_USER_ID
        if auth_enabled:
            if body.key_type == "api_key":
                user_id = await resolve_user_id_from_api_key(user_store, body.key)
            else:
                user_id = await resolve_user_id_from_public_uuid(user_store, body.key)

        decision = await authenticator.authenticate(
            user_id,
            client_ip,
            body.code,
            step_seconds=step_seconds,
            auth_enabled=auth_enabled,
        )
    except BackendUnavailable as exc:
        logger.warning("auth backend unavailable", extra={"backend": exc.backend})
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="authentication backend unavailable",
        )

    if not decision.accepted:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="authentication failed"
        )
    return AuthAcceptedOut()
