import uuid
import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_user_repository
from app.core.limiter import limiter
from app.core.security import create_access_token
from app.main import app
from app.models.user import User
from app.repositories.memory import InMemoryUserRepository
from app.services.favourite_service import FavouriteService


@pytest.fixture
def repo():
    """각 테스트마다 독립적인 In-Memory 저장소 인스턴스 생성"""
    return InMemoryUserRepository()


@pytest.fixture
def user_id(repo):
    """저장소에 프로비저닝된 사용자 ID"""
    uid = uuid.UUID("550e8400-e29b-41d4-a716-446655440000")
    repo.put(User(id=uid))
    return uid


@pytest.fixture
def service(repo):
    return FavouriteService(repo)


@pytest.fixture
def client(repo):
    """Dependency override가 적용된 TestClient 제공 및 자동 정리"""
    app.dependency_overrides[get_user_repository] = lambda: repo
    limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(user_id):
    """프로비저닝된 사용자의 Bearer 토큰 헤더"""
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}
