"""Fixed create/read/update/list/delete walkthrough."""

from __future__ import annotations

from loguru import logger

from tutodao.config import Settings
from tutodao.database import Database
from tutodao.logs import configure_logging
from tutodao.models import User
from tutodao.pool import ConnectionProvider
from tutodao.presenter import ConsolePresenter, OutputPresenter
from tutodao.repository import SqlUserRepository
from tutodao.schema import initialize_schema
from tutodao.service import DelegatingUserService, UserService


def _deleted(done: bool) -> str:
    return "User deleted" if done else "User not deleted"


def run_demo(service: UserService, presenter: OutputPresenter) -> None:
    """Exercise every service operation and print each result."""
    new_user = User(name="John Doe", email="johndoe@example.com")
    created_user = service.create(new_user)
    presenter.show_message(f"Created user: {created_user}")

    found_user = service.get_by_id(created_user.id) if created_user else None
    presenter.show_message(f"Found user: {found_user}")

    updated_user = found_user.model_copy(update={"name": "Jane Doe"}) if found_user else None
    saved_user = service.update(updated_user) if updated_user else None
    presenter.show_message(f"Updated user: {saved_user}")

    other_user = User(name="Eduardo Fernandez", email="eferoli@gmail.com")
    created_user = service.create(other_user)
    presenter.show_message(f"Created user: {created_user}")

    presenter.show(service.get_all())

    deleted = service.delete(saved_user.id) if saved_user else False
    presenter.show_message(_deleted(deleted))

    all_users = service.get_all()
    presenter.show_message(f"All users: [{', '.join(str(u) for u in all_users)}]")

    presenter.show_message(_deleted(service.delete(other_user.id)))


def main() -> None:
    settings = Settings()
    configure_logging(settings.log_level)

    with ConnectionProvider(settings.database) as provider:
        db = Database(provider)
        initialize_schema(db)
        service = DelegatingUserService(SqlUserRepository(db))
        run_demo(service, ConsolePresenter())
    logger.debug("Demo finished")


if __name__ == "__main__":
    main()
