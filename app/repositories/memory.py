import threading
import uuid
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from app.models.user import User
from app.repositories.base import IUserRepository


class ReadWriteLock:
    """
    읽기 다수 / 쓰기 단독 락

    Note:
        대기 중인 writer가 있으면 신규 reader를 막아 writer 기아를 방지합니다.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class _UserSlot:
    """맵 한 칸: 사용자와 그 사용자의 favourites를 보호하는 락"""

    __slots__ = ("user", "lock")

    def __init__(self, user: User):
        self.user = user
        self.lock = threading.Lock()


class InMemoryUserRepository(IUserRepository):
    """
    In-Memory 사용자 저장소 구현체

    Note:
        서버 재시작 시 데이터가 초기화됩니다.
        맵 자체는 ReadWriteLock으로, 각 사용자의 favourites는 사용자별 Lock으로 보호합니다.
        슬롯은 한 번 생성되면 제거되지 않으므로, 맵 락을 놓은 뒤 사용자 락을 잡아도 안전합니다.
    """

    def __init__(self):
        # Data Structure: {user_id: _UserSlot(user, lock)}
        self._slots: Dict[uuid.UUID, _UserSlot] = {}
        self._map_lock = ReadWriteLock()

    def _slot(self, user_id: uuid.UUID) -> Optional[_UserSlot]:
        with self._map_lock.read():
            return self._slots.get(user_id)

    def get(self, user_id: uuid.UUID) -> Optional[User]:
        slot = self._slot(user_id)
        if slot is None:
            return None
        with slot.lock:
            return slot.user.model_copy(deep=True)

    def put(self, user: User) -> None:
        # 호출자 객체와 분리된 사본을 보관
        user = user.model_copy(deep=True)
        with self._map_lock.write():
            slot = self._slots.get(user.id)
            if slot is None:
                self._slots[user.id] = _UserSlot(user)
                return
        # 덮어쓰기: 진행 중인 세션이 끝난 뒤 교체되도록 사용자 락 안에서 수행
        with slot.lock:
            slot.user = user

    def exists(self, user_id: uuid.UUID) -> bool:
        return self._slot(user_id) is not None

    @contextmanager
    def session(self, user_id: uuid.UUID) -> Iterator[Optional[User]]:
        slot = self._slot(user_id)
        if slot is None:
            yield None
            return
        with slot.lock:
            yield slot.user
