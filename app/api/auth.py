from fastapi import APIRouter, Request, status
import logging
import uuid
from pydantic import BaseModel
from app.core.config import RATE_LIMIT_PER_MINUTE
from app.core.limiter import limiter
from app.core.response import ApiResponse, success_response
from app.core.security import create_access_token
from app.exception.common.auth_exception import InvalidUserIdError

router = APIRouter(tags=["Auth"])
logger = logging.getLogger("app")


class TokenRequest(BaseModel):
    user_id: str = ""


class TokenResponse(BaseModel):
    token: str


@router.post("/token", status_code=status.HTTP_200_OK)
@limiter.limit(f"{RATE_LIMIT_PER_MINUTE}/minute")
def issue_token(request: Request, req: TokenRequest) -> ApiResponse[TokenResponse]:
    """
    액세스 토큰 발급

    - **user_id**: 사용자 ID (UUID 형식 필수)

    Returns:
        200 OK: {"token": "<jwt>"}
    """
    try:
        user_id = uuid.UUID(req.user_id)
    except ValueError:
        raise InvalidUserIdError()

    logger.info(f"Access token issued for user {user_id}")
    return success_response(TokenResponse(token=create_access_token(user_id)))
