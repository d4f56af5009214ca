"""tutodao exception classes."""


class TutodaoError(Exception):
    """Base exception for tutodao."""


class PersistenceError(TutodaoError):
    """Database driver or connection pool failure."""


class MappingError(PersistenceError):
    """A result row could not be mapped to an entity."""


class SqlParseError(TutodaoError):
    """SQL template could not be bound."""


class SqlFileNotFoundError(TutodaoError):
    """SQL file does not exist."""
