"""Text output of demo results."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, TextIO

from rich.console import Console, ConsoleOptions
from rich.segment import Segment

if TYPE_CHECKING:
    from tutodao.models import User

NO_USERS_MESSAGE = "No users found."


class OutputPresenter(ABC):
    @abstractmethod
    def show_message(self, msg: str, line_break: bool = True) -> None: ...

    @abstractmethod
    def show(self, users: Sequence[User], msg: str = "All users:") -> None: ...


class _Verbatim:
    """Renderable emitted as a single unstyled segment.

    Strings printed by rich become ``Text``, which expands tabs; a bare
    segment is written as-is.
    """

    def __init__(self, text: str) -> None:
        self.text = text

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> Iterator[Segment]:
        yield Segment(self.text)


class ConsolePresenter(OutputPresenter):
    """Writes plain lines to a rich console, tabs and brackets included."""

    def __init__(self, console: Console | None = None, *, file: TextIO | None = None) -> None:
        self._console = console if console is not None else Console(file=file, soft_wrap=True)

    def show_message(self, msg: str, line_break: bool = True) -> None:
        # soft_wrap disables cropping, so the segment reaches the sink unsplit
        self._console.print(_Verbatim(msg + "\n" if line_break else msg), soft_wrap=True)

    def show(self, users: Sequence[User], msg: str = "All users:") -> None:
        """Print ``msg`` and a tab-indented, numbered line per user."""
        if not users:
            self.show_message(NO_USERS_MESSAGE)
            return
        self.show_message(msg)
        for index, user in enumerate(users, start=1):
            self.show_message(f"\t{index}: {user}")
