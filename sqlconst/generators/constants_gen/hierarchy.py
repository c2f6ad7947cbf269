"""Collect the persisted fields of a model class and its ancestors."""
import ast
import dataclasses
import inspect
import logging
import typing
from typing import Any, Dict, List, Optional

from sqlconst.annotations import SqlColumn
from sqlconst.generators.constants_gen.types import FieldSpec

log = logging.getLogger(__name__)

STATIC_MARKERS = {"ClassVar", "InitVar"}


def collect_fields(model: type) -> List[FieldSpec]:
    """
    Return the persisted fields of ``model``, most-derived class first.

    Each class in the method resolution order contributes its own annotated
    fields in declaration order; ``object`` ends the walk. Shadowed fields are
    not merged, so a name redeclared in a subclass shows up once per class.
    """
    fields: List[FieldSpec] = []
    try:
        mro = inspect.getmro(model)
    except AttributeError:
        return fields

    for klass in mro:
        if klass is object:
            break
        try:
            annotations = _own_annotations(klass)
        except Exception as e:
            # Keep what was collected so far
            log.debug("Stopping field walk at %s: %s", klass, e)
            break

        owner = f"{klass.__module__}.{klass.__qualname__}"
        for name, annotation in annotations.items():
            if _is_dunder(name) or is_static_annotation(annotation):
                continue
            meta = column_metadata(annotation)
            fields.append(FieldSpec(
                name=name,
                owner=owner,
                column=meta.value if meta else "",
                ignore=meta.ignore if meta else False,
            ))
    return fields


def _own_annotations(klass: type) -> Dict[str, Any]:
    try:
        return dict(inspect.get_annotations(klass, eval_str=True))
    except Exception:
        # Unresolvable forward references: fall back to the raw strings
        return dict(inspect.get_annotations(klass))


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def is_static_annotation(annotation: Any) -> bool:
    """True for ``ClassVar``/``InitVar`` annotations, evaluated or not."""
    if isinstance(annotation, str):
        head = annotation.split("[", 1)[0].strip()
        return head.rpartition(".")[2] in STATIC_MARKERS
    if annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar:
        return True
    return annotation is dataclasses.InitVar or isinstance(annotation, dataclasses.InitVar)


def column_metadata(annotation: Any) -> Optional[SqlColumn]:
    """Find the ``SqlColumn`` carried by an ``Annotated[...]`` annotation."""
    if isinstance(annotation, str):
        try:
            node = ast.parse(annotation, mode="eval").body
        except SyntaxError:
            return None
        return column_from_expr(node)
    if typing.get_origin(annotation) is typing.Annotated:
        for meta in annotation.__metadata__:
            if isinstance(meta, SqlColumn):
                return meta
    return None


def column_from_expr(node: Optional[ast.expr]) -> Optional[SqlColumn]:
    """
    Read a ``SqlColumn(...)`` call out of an ``Annotated[...]`` annotation
    expression without evaluating it. Only literal arguments are understood.
    """
    if not isinstance(node, ast.Subscript) or _dotted_tail(node.value) != "Annotated":
        return None
    args = node.slice.elts if isinstance(node.slice, ast.Tuple) else [node.slice]
    for arg in args[1:]:
        if not isinstance(arg, ast.Call) or _dotted_tail(arg.func) != "SqlColumn":
            continue
        value = ""
        ignore = False
        if arg.args and isinstance(arg.args[0], ast.Constant) and isinstance(arg.args[0].value, str):
            value = arg.args[0].value
        for kw in arg.keywords:
            if not isinstance(kw.value, ast.Constant):
                continue
            if kw.arg == "value" and isinstance(kw.value.value, str):
                value = kw.value.value
            elif kw.arg == "ignore":
                ignore = bool(kw.value.value)
        return SqlColumn(value=value, ignore=ignore)
    return None


def _dotted_tail(node: ast.expr) -> str:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return ""
