"""Row mappers: result rows (dicts keyed by column) to entities."""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, ValidationError

from tutodao.exceptions import MappingError

T = TypeVar("T")


@runtime_checkable
class RowMapper(Protocol[T]):
    """Anything with ``map_row`` and ``map_rows`` can map query results."""

    def map_row(self, row: dict[str, Any]) -> T: ...

    def map_rows(self, rows: list[dict[str, Any]]) -> list[T]: ...


class PydanticMapper:
    """Mapper for pydantic models.

    Column names are lowercased before validation, so ``ID`` from a driver that
    upper-cases identifiers still fills ``id``. The model coerces values; a
    text ``id`` column becomes a ``uuid.UUID`` field.
    """

    def __init__(self, entity_cls: type[BaseModel]) -> None:
        if not (isinstance(entity_cls, type) and issubclass(entity_cls, BaseModel)):
            msg = f"{entity_cls} is not a Pydantic BaseModel"
            raise TypeError(msg)
        self.entity_cls = entity_cls

    def map_row(self, row: dict[str, Any]) -> Any:
        """Validate one row into an entity.

        Raises:
            MappingError: the row does not validate against the model

        """
        try:
            return self.entity_cls.model_validate({k.lower(): v for k, v in row.items()})
        except ValidationError as e:
            msg = f"Cannot map row to {self.entity_cls.__name__}: {e}"
            raise MappingError(msg) from e

    def map_rows(self, rows: list[dict[str, Any]]) -> list[Any]:
        return [self.map_row(row) for row in rows]


def create_mapper(entity_cls: type, *, mapper: RowMapper[Any] | None = None) -> RowMapper[Any]:
    """Return ``mapper`` when given, else a PydanticMapper for ``entity_cls``.

    Raises:
        TypeError: mapper does not implement RowMapper, or entity_cls is not
            a pydantic model

    """
    if mapper is not None:
        if not isinstance(mapper, RowMapper):
            msg = f"{mapper!r} does not implement map_row/map_rows"
            raise TypeError(msg)
        return mapper
    try:
        return PydanticMapper(entity_cls)
    except TypeError:
        msg = f"Cannot create mapper for {entity_cls}. Use a Pydantic model or provide a custom mapper."
        raise TypeError(msg) from None
