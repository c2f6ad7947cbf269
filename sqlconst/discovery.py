"""
Enumeration of the table classes to process.

Modules are imported for real: the decorator values and annotations live on
the class objects, not in the source text.
"""
import importlib
import logging
import pkgutil
from types import ModuleType
from typing import Iterable, Iterator, List, Protocol, Sequence

from sqlconst.annotations import get_sql_table
from sqlconst.core.workflow import Round

log = logging.getLogger(__name__)


class RoundSource(Protocol):
    def rounds(self) -> Iterable[Round]:
        ...


class ModuleScanner:
    """Find ``@sql_table`` classes in the given modules and their subpackages."""

    def __init__(self, modules: Sequence[str], exclude: Sequence[str] = ("sql",)):
        self.modules = list(modules)
        self.exclude = set(exclude)

    def rounds(self) -> Iterator[Round]:
        yield Round(types=self.discover())
        yield Round(final=True)

    def discover(self) -> List[type]:
        found: List[type] = []
        seen = set()
        for module in self._iter_modules():
            for obj in vars(module).values():
                if not isinstance(obj, type) or obj.__module__ != module.__name__:
                    continue
                if get_sql_table(obj) is None or obj in seen:
                    continue
                seen.add(obj)
                found.append(obj)
        log.info("Discovered %d table classes in %d module(s)", len(found), len(self.modules))
        return found

    def _iter_modules(self) -> Iterator[ModuleType]:
        for name in self.modules:
            module = importlib.import_module(name)
            yield module
            if not hasattr(module, "__path__"):
                continue
            for info in pkgutil.walk_packages(module.__path__, prefix=name + "."):
                if self.exclude.intersection(info.name.split(".")[1:]):
                    continue
                yield importlib.import_module(info.name)
