"""User repositories: the persistence interface and its implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any
from uuid import UUID

from loguru import logger

from tutodao.exceptions import PersistenceError
from tutodao.models import User

if TYPE_CHECKING:
    from tutodao.database import Database


class UserRepository(ABC):
    """CRUD over stored users.

    No operation raises for a database failure: create, get_by_id and update
    return None, get_all returns an empty list, delete returns False.
    """

    @abstractmethod
    def create(self, user: User) -> User | None: ...

    @abstractmethod
    def get_by_id(self, user_id: UUID) -> User | None: ...

    @abstractmethod
    def get_all(self) -> list[User]: ...

    @abstractmethod
    def update(self, user: User) -> User | None: ...

    @abstractmethod
    def delete(self, user_id: UUID) -> bool: ...


class SqlUserRepository(UserRepository):
    """User repository over the ``tuser`` table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def create(self, user: User) -> User | None:
        try:
            affected = self._db.execute("users/insert.sql", self._to_params(user))
        except PersistenceError as e:
            logger.error("INSERT failed for user {}: {}", user.id, e)
            return None
        if affected != 1:
            logger.warning("INSERT for user {} affected {} rows", user.id, affected)
            return None
        return user

    def get_by_id(self, user_id: UUID) -> User | None:
        try:
            user = self._db.query_one(User, "users/find_by_id.sql", {"id": str(user_id)})
        except PersistenceError as e:
            logger.error("SELECT failed for user {}: {}", user_id, e)
            return None
        if user is None:
            logger.warning("User {} not found", user_id)
        return user

    def get_all(self) -> list[User]:
        try:
            return self._db.query(User, "users/find_all.sql")
        except PersistenceError as e:
            logger.error("SELECT of all users failed: {}", e)
            return []

    def update(self, user: User) -> User | None:
        try:
            affected = self._db.execute("users/update.sql", self._to_params(user))
        except PersistenceError as e:
            logger.error("UPDATE failed for user {}: {}", user.id, e)
            return None
        if affected != 1:
            logger.warning("UPDATE for user {} affected {} rows", user.id, affected)
            return None
        return user

    def delete(self, user_id: UUID) -> bool:
        try:
            affected = self._db.execute("users/delete.sql", {"id": str(user_id)})
        except PersistenceError as e:
            logger.error("DELETE failed for user {}: {}", user_id, e)
            return False
        if affected != 1:
            logger.warning("DELETE for user {} affected {} rows", user_id, affected)
        return affected == 1

    @staticmethod
    def _to_params(user: User) -> dict[str, Any]:
        """Model → bind parameters."""
        return {"id": str(user.id), "name": user.name, "email": user.email}


class InMemoryUserRepository(UserRepository):
    """Dict-backed repository with the same observable behaviour.

    Stored users are copies, so mutating a returned user never changes the
    store without an update.
    """

    def __init__(self) -> None:
        self._users: dict[UUID, User] = {}

    def create(self, user: User) -> User | None:
        if user.id in self._users:
            logger.error("INSERT failed for user {}: duplicate id", user.id)
            return None
        self._users[user.id] = user.model_copy()
        return user

    def get_by_id(self, user_id: UUID) -> User | None:
        stored = self._users.get(user_id)
        return stored.model_copy() if stored is not None else None

    def get_all(self) -> list[User]:
        return [user.model_copy() for user in self._users.values()]

    def update(self, user: User) -> User | None:
        if user.id not in self._users:
            logger.warning("UPDATE for user {} affected 0 rows", user.id)
            return None
        self._users[user.id] = user.model_copy()
        return user

    def delete(self, user_id: UUID) -> bool:
        return self._users.pop(user_id, None) is not None
