"""Column-name resolution for constants generation."""
import keyword
import re
from typing import Callable, Iterable, Iterator

from sqlconst.generators.constants_gen.types import FieldSpec, ResolvedColumn

_CASE_BOUNDARY = re.compile(r'([a-z])([A-Z])')
_NON_IDENTIFIER = re.compile(r'\W')


def to_snake_case(name: str) -> str:
    """Convert camelCase to under_score: ``orderId`` -> ``order_id``."""
    return _CASE_BOUNDARY.sub(r'\1_\2', name).lower()


def should_skip(field: FieldSpec) -> bool:
    return field.ignore


def resolve_name(field: FieldSpec, snake_case: bool) -> str:
    """Explicit override, then the case transform, then the declared name."""
    if field.column:
        return field.column
    if snake_case:
        return to_snake_case(field.name)
    return field.name


def resolve_columns(
    fields: Iterable[FieldSpec],
    snake_case: bool,
    remarks: Callable[[str], str] = lambda column: "",
) -> Iterator[ResolvedColumn]:
    for field in fields:
        if should_skip(field):
            continue
        column = resolve_name(field, snake_case)
        yield ResolvedColumn(field_name=field.name, column=column, remarks=remarks(column))


def to_identifier(column: str) -> str:
    """Python identifier used for a column's constant (column value is kept as-is)."""
    ident = _NON_IDENTIFIER.sub('_', column) or '_'
    if ident[0].isdigit():
        ident = '_' + ident
    if keyword.iskeyword(ident):
        ident += '_'
    return ident
