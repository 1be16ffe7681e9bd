from app.repositories.base import IUserRepository
from app.repositories.memory import InMemoryUserRepository

__all__ = ["IUserRepository", "InMemoryUserRepository"]
