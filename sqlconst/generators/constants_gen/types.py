"""Dataclasses for constants generation."""
from dataclasses import dataclass, field
from typing import Any, List, Optional

from sqlconst.annotations import SqlTable, get_sql_table
from sqlconst.core.workflow import TypeResult


@dataclass(frozen=True)
class TableSpec:
    """Persisted table described by a decorated model class."""
    qualname: str
    module: str
    simple_name: str
    schema: str
    table_name: str
    alias: str
    constant: bool
    snake_case: bool
    origin: Any = field(default=None, compare=False, repr=False)

    @property
    def package(self) -> str:
        """Package holding the model module ("" for a top-level module)."""
        return self.module.rpartition(".")[0]

    @property
    def table_alias(self) -> str:
        return self.alias or self.table_name

    @classmethod
    def from_class(cls, model: type) -> "TableSpec":
        sql_table = get_sql_table(model) or SqlTable()
        return cls(
            qualname=f"{model.__module__}.{model.__qualname__}",
            module=model.__module__,
            simple_name=model.__name__,
            schema=sql_table.schema,
            table_name=sql_table.value or model.__name__,
            alias=sql_table.alias,
            constant=sql_table.constant,
            snake_case=sql_table.snake_case,
            origin=model,
        )


@dataclass(frozen=True)
class FieldSpec:
    """Annotated instance field of a table class or one of its ancestors."""
    name: str
    owner: str  # qualified name of the declaring class
    column: str = ""  # explicit column-name override
    ignore: bool = False


@dataclass(frozen=True)
class ResolvedColumn:
    field_name: str
    column: str
    remarks: str = ""


@dataclass(frozen=True)
class GeneratedFile:
    """Represents a generated constants module."""
    namespace: str  # dotted package the module belongs to
    name: str  # module (and class) name
    content: str  # File contents
    origin: Any = field(default=None, compare=False, repr=False)

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name


@dataclass
class GenerationReport:
    ok: bool = True
    results: List[TypeResult] = field(default_factory=list)
    error: Optional[str] = None
