"""Generate table and column constant modules from annotated data-model classes."""
from sqlconst.annotations import SqlColumn, SqlTable, sql_table
from sqlconst.column import Column

__all__ = ["Column", "SqlColumn", "SqlTable", "sql_table"]
__version__ = "0.1.0"
