import logging
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.api.auth import router as auth_router
from app.api.dependencies import get_user_repository
from app.api.favourites import router as favourites_router
from app.core.config import ALLOWED_ORIGINS, DEFAULT_USER_ID, LOG_DIR, LOG_LEVEL, SEED_DEFAULT_USER
from app.core.limiter import limiter
from app.core.logging_config import setup_logging
from app.core.middleware import CacheControlMiddleware, RealIPMiddleware, TraceIDMiddleware
from app.exception.base_exception import BaseCustomException
from app.exception.envelope_handlers import (
    custom_exception_handler,
    global_exception_handler_envelope,
    http_exception_handler,
    rate_limit_exception_handler,
    validation_exception_handler,
)
from app.models.user import User
from app.repositories.base import IUserRepository

logger = logging.getLogger("app")


def seed_default_user(repo: IUserRepository) -> uuid.UUID:
    """데모/테스트용 기본 사용자 프로비저닝 (DEFAULT_USER_ID 미설정 시 새 UUID)"""
    user_id = uuid.UUID(DEFAULT_USER_ID) if DEFAULT_USER_ID else uuid.uuid4()
    if not repo.exists(user_id):
        repo.put(User(id=user_id))
    logger.info(f"Default user_id: {user_id}")
    return user_id


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 로깅 설정(콘솔 + 일자별 파일 로테이션, JSON 포맷)
    setup_logging(log_dir=LOG_DIR, level=LOG_LEVEL)
    if SEED_DEFAULT_USER:
        app.state.default_user_id = seed_default_user(get_user_repository())
    yield


app = FastAPI(title="Asset Favourites API", lifespan=lifespan)
app.state.limiter = limiter

# 미들웨어는 나중에 추가된 것이 바깥쪽에서 실행됨 (TraceID가 가장 먼저 설정되도록 마지막에 추가)
app.add_middleware(CacheControlMiddleware)
app.add_middleware(RealIPMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(TraceIDMiddleware)


@app.get("/ping")
def ping():
    return {"ok": True}


# API 라우터 포함
app.include_router(auth_router)
app.include_router(favourites_router)

# 커스텀 예외 핸들러는 라우터 포함 이후에 추가
app.add_exception_handler(BaseCustomException, custom_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(RateLimitExceeded, rate_limit_exception_handler)
app.add_exception_handler(Exception, global_exception_handler_envelope)
