"""
Recover table and column remarks from the model source files.

Comments never make it into the class objects, so the source file of each
class in the hierarchy is re-read and parsed. Missing or broken sources are
an ordinary situation and only ever produce empty remarks.
"""
import ast
import inspect
import io
import logging
import re
import tokenize
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from sqlconst.generators.constants_gen.hierarchy import column_from_expr, is_static_annotation
from sqlconst.generators.constants_gen.naming import resolve_name
from sqlconst.generators.constants_gen.types import FieldSpec, TableSpec

log = logging.getLogger(__name__)

_PRAGMA = re.compile(r'#\s*(noqa|type:|pragma|fmt:|pylint:|mypy:)')


def resolve_source_root(configured: Optional[str] = None, cwd: Optional[Path] = None) -> Optional[Path]:
    """
    Best-effort directory under which model modules live as ``pkg/mod.py``.

    A configured root wins when it exists (and yields None when it does not);
    otherwise ``<cwd>/src`` for src-layout projects, else ``cwd`` itself.
    """
    if configured:
        root = Path(configured).expanduser()
        if root.is_dir():
            return root.resolve()
        log.warning("Configured source root %s does not exist", configured)
        return None

    base = Path(cwd) if cwd is not None else Path.cwd()
    src = base / "src"
    if src.is_dir():
        return src.resolve()
    return base.resolve() if base.is_dir() else None


def clean_comment(raw: str, strip_hashes: bool = True) -> str:
    """Drop comment markers, leading ``*`` and surrounding blank lines."""
    cleaned = []
    for line in raw.splitlines():
        text = line.strip()
        if strip_hashes:
            text = text.lstrip("#")
            if text.startswith(":"):
                text = text[1:]
        text = text.strip().lstrip("*").strip()
        cleaned.append(text)
    while cleaned and not cleaned[0]:
        cleaned.pop(0)
    while cleaned and not cleaned[-1]:
        cleaned.pop()
    return "\n".join(cleaned)


@dataclass
class ParsedModule:
    tree: ast.Module
    comment_lines: Dict[int, str]  # lines holding nothing but a comment
    inline_comments: Dict[int, str]  # comments trailing code


@dataclass(frozen=True)
class FieldDeclaration:
    spec: FieldSpec
    comment: str


@dataclass
class TypeDocs:
    """Working set for the documentation of one table class."""
    table: TableSpec
    type_comment: str = ""
    declarations: List[FieldDeclaration] = field(default_factory=list)

    def clear(self) -> None:
        self.type_comment = ""
        self.declarations.clear()


class DocumentationMiner:
    def __init__(self, source_root: Optional[Path]):
        self.source_root = source_root

    def locate(self, module: str) -> Optional[Path]:
        if self.source_root is None or not module:
            return None
        parts = module.split(".")
        candidates = [
            self.source_root.joinpath(*parts[:-1], parts[-1] + ".py"),
            self.source_root.joinpath(*parts, "__init__.py"),
        ]
        for path in candidates:
            if path.is_file():
                return path
        return None

    @contextmanager
    def session(self, table: TableSpec, fields: Sequence[FieldSpec] = ()) -> Iterator[TypeDocs]:
        """
        Load the documentation of ``table`` for the duration of the block.

        ``fields`` are the collected fields of the table; their column
        overrides take precedence over what can be read from the source text.
        """
        docs = self.load(table, fields)
        try:
            yield docs
        finally:
            docs.clear()

    def load(self, table: TableSpec, fields: Sequence[FieldSpec] = ()) -> TypeDocs:
        docs = TypeDocs(table=table)
        parsed: Dict[str, Optional[ParsedModule]] = {}
        collected = {(f.owner, f.name): f for f in fields}

        for index, (module, qualname) in enumerate(_hierarchy(table)):
            if module not in parsed:
                parsed[module] = self._parse(module)
            source = parsed[module]
            if source is None:
                continue
            node = _find_class(source.tree, qualname)
            if node is None:
                continue
            if index == 0:
                docs.type_comment = _class_comment(node, source)
            docs.declarations.extend(_field_declarations(node, source, f"{module}.{qualname}", collected))
        return docs

    def mine_type_comment(self, docs: TypeDocs) -> str:
        return docs.type_comment

    def mine_field_comment(self, docs: TypeDocs, column: str) -> str:
        for declaration in docs.declarations:
            if declaration.spec.ignore:
                continue
            if resolve_name(declaration.spec, docs.table.snake_case) == column:
                return declaration.comment
        return ""

    def _parse(self, module: str) -> Optional[ParsedModule]:
        path = self.locate(module)
        if path is None:
            log.debug("No source found for module %s", module)
            return None
        try:
            with tokenize.open(path) as f:
                source = f.read()
            tree = ast.parse(source, filename=str(path))
            comment_lines: Dict[int, str] = {}
            inline_comments: Dict[int, str] = {}
            for tok in tokenize.generate_tokens(io.StringIO(source).readline):
                if tok.type != tokenize.COMMENT or _PRAGMA.match(tok.string):
                    continue
                if tok.line.lstrip().startswith("#"):
                    comment_lines[tok.start[0]] = tok.string
                else:
                    inline_comments[tok.start[0]] = tok.string
        except (OSError, SyntaxError, ValueError, tokenize.TokenError) as e:
            # UnicodeDecodeError is a ValueError
            log.debug("Cannot parse source %s: %s", path, e)
            return None
        return ParsedModule(tree=tree, comment_lines=comment_lines, inline_comments=inline_comments)


def _hierarchy(table: TableSpec) -> List[tuple]:
    model = table.origin
    if not isinstance(model, type):
        return [(table.module, table.qualname[len(table.module) + 1:])]
    return [
        (klass.__module__, klass.__qualname__)
        for klass in inspect.getmro(model)
        if klass is not object
    ]


def _find_class(tree: ast.Module, qualname: str) -> Optional[ast.ClassDef]:
    body = tree.body
    node = None
    for part in qualname.split("."):
        node = next(
            (n for n in body if isinstance(n, ast.ClassDef) and n.name == part),
            None,
        )
        if node is None:
            return None
        body = node.body
    return node


def _leading_comment(first_line: int, source: ParsedModule) -> str:
    lines = []
    line_no = first_line - 1
    while line_no in source.comment_lines:
        lines.append(source.comment_lines[line_no])
        line_no -= 1
    return clean_comment("\n".join(reversed(lines)))


def _class_comment(node: ast.ClassDef, source: ParsedModule) -> str:
    docstring = ast.get_docstring(node)
    if docstring:
        return clean_comment(docstring, strip_hashes=False)
    first_line = min([node.lineno] + [d.lineno for d in node.decorator_list])
    return _leading_comment(first_line, source)


def _field_declarations(
    node: ast.ClassDef,
    source: ParsedModule,
    owner: str,
    collected: Dict[Tuple[str, str], FieldSpec],
) -> Iterator[FieldDeclaration]:
    for index, stmt in enumerate(node.body):
        if not isinstance(stmt, ast.AnnAssign) or not isinstance(stmt.target, ast.Name):
            continue
        name = stmt.target.id
        if name.startswith("__") and name.endswith("__"):
            continue
        spec = collected.get((owner, name))
        if spec is None:
            # Not collected at runtime: read the override from the source text
            if is_static_annotation(ast.unparse(stmt.annotation)):
                continue
            meta = column_from_expr(stmt.annotation)
            spec = FieldSpec(
                name=name,
                owner=owner,
                column=meta.value if meta else "",
                ignore=meta.ignore if meta else False,
            )
        yield FieldDeclaration(spec=spec, comment=_field_comment(stmt, node.body[index + 1:], source))


def _field_comment(stmt: ast.AnnAssign, following: List[ast.stmt], source: ParsedModule) -> str:
    comment = _leading_comment(stmt.lineno, source)
    if comment:
        return comment

    # Attribute docstring: a bare string literal right after the field
    if following:
        nxt = following[0]
        if (isinstance(nxt, ast.Expr) and isinstance(nxt.value, ast.Constant)
                and isinstance(nxt.value.value, str)):
            return clean_comment(inspect.cleandoc(nxt.value.value), strip_hashes=False)

    inline = source.inline_comments.get(stmt.end_lineno or stmt.lineno)
    return clean_comment(inline) if inline else ""
