"""Rendering of the generated constants module."""
from typing import Iterable, List, Optional

from sqlconst.core.workflow import Severity
from sqlconst.diagnostics import Diagnostics
from sqlconst.generators.constants_gen.naming import to_identifier
from sqlconst.generators.constants_gen.types import ResolvedColumn, TableSpec

HEADER = '"""The code is generated by sqlconst. Do not modify!"""'

# Names already taken inside the generated class body
RESERVED_NAMES = {"_schema", "_tableName", "_tableAlias", "_remarks", "_all", "_count", "Column"}


def escape(value: Optional[str]) -> str:
    """Escape a value for use inside a double-quoted Python string literal."""
    if value is None:
        return ""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )


def render_constants_module(
    table: TableSpec,
    columns: Iterable[ResolvedColumn],
    table_comment: str,
    package: str,
    class_name: str,
    diagnostics: Optional[Diagnostics] = None,
    suffix: str = "_",
) -> str:
    """
    Generate the constants module for one table.

    On failure the problem is reported as a warning and whatever was rendered
    so far is returned.
    """
    lines: List[str] = []
    try:
        alias = table.table_alias
        lines.extend([
            HEADER,
            f"# package {package}",
            "",
            "from sqlconst.column import Column",
            "",
            "",
            f"class {class_name}:",
            "",
            f'    _schema = "{escape(table.schema)}"',
            f'    _tableName = "{escape(table.table_name)}"',
            f'    _tableAlias = "{escape(alias)}"',
            f'    _remarks = "{escape(table_comment)}"',
            f'    _all = "{escape(alias)}.*"',
            '    _count = "COUNT(*)"',
        ])

        seen = set(RESERVED_NAMES)
        for column in columns:
            name = to_identifier(column.column)
            descriptor = name + suffix
            if name in seen or descriptor in seen:
                _report(diagnostics, Severity.WARNING,
                        f"{table.qualname}: duplicate column constant {name!r} "
                        f"(field {column.field_name!r}), keeping the first one")
                continue
            seen.update((name, descriptor))

            if name == column.column:
                lines.append("")
            else:
                lines.extend(["", f"    # column {column.column!r}"])
            lines.append(f'    {name} = "{escape(column.column)}"')
            lines.append(
                f'    {descriptor} = Column(True, _tableAlias, {name}, "", "{escape(column.remarks)}")'
            )
    except Exception as e:
        _report(diagnostics, Severity.WARNING, f"Error generating code for {table.qualname}: {e}")
    return "\n".join(lines) + "\n"


def _report(diagnostics: Optional[Diagnostics], severity: Severity, message: str) -> None:
    if diagnostics is not None:
        diagnostics.report(severity, message)
