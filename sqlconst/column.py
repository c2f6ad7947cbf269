"""Runtime column descriptor referenced by generated constant modules."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Column:
    qualified: bool
    table_alias: str
    name: str
    default: str = ""
    remarks: str = ""

    def qualified_name(self) -> str:
        if self.qualified and self.table_alias:
            return f"{self.table_alias}.{self.name}"
        return self.name

    def __str__(self) -> str:
        return self.qualified_name()
