"""User service: pass-through facade over a repository."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from tutodao.models import User
    from tutodao.repository import UserRepository


class UserService(ABC):
    """User operations as seen by callers."""

    @abstractmethod
    def create(self, user: User) -> User | None: ...

    @abstractmethod
    def get_by_id(self, user_id: UUID) -> User | None: ...

    @abstractmethod
    def update(self, user: User) -> User | None: ...

    @abstractmethod
    def delete(self, user_id: UUID) -> bool: ...

    @abstractmethod
    def get_all(self) -> list[User]: ...


class DelegatingUserService(UserService):
    """Delegates every call to the repository unchanged."""

    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    def create(self, user: User) -> User | None:
        return self._repository.create(user)

    def get_by_id(self, user_id: UUID) -> User | None:
        return self._repository.get_by_id(user_id)

    def update(self, user: User) -> User | None:
        return self._repository.update(user)

    def delete(self, user_id: UUID) -> bool:
        return self._repository.delete(user_id)

    def get_all(self) -> list[User]:
        return self._repository.get_all()
