"""Declarations that mark a class as a persisted table and tune its columns."""
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

T = TypeVar("T", bound=type)

TABLE_ATTR = "__sql_table__"


@dataclass(frozen=True)
class SqlTable:
    """Table-level metadata attached to a model class by ``@sql_table``."""
    value: str = ""
    schema: str = ""
    alias: str = ""
    constant: bool = True  # generate the constants module at all
    snake_case: bool = False  # map camelCase field names to under_score columns


@dataclass(frozen=True)
class SqlColumn:
    """
    Column-level metadata, attached through ``typing.Annotated``.

        order_no: Annotated[str, SqlColumn("ORDER_NO")]
        cache: Annotated[dict, SqlColumn(ignore=True)]
    """
    value: str = ""
    ignore: bool = False


def sql_table(
    value: str = "",
    *,
    schema: str = "",
    alias: str = "",
    constant: bool = True,
    snake_case: bool = False,
) -> Callable[[T], T]:
    """Mark a class as a persisted table."""
    def decorator(cls: T) -> T:
        setattr(cls, TABLE_ATTR, SqlTable(
            value=value,
            schema=schema,
            alias=alias,
            constant=constant,
            snake_case=snake_case,
        ))
        return cls
    return decorator


def get_sql_table(cls: type) -> Optional[SqlTable]:
    """Return the table declared directly on ``cls``; inherited ones do not count."""
    table = cls.__dict__.get(TABLE_ATTR)
    return table if isinstance(table, SqlTable) else None
