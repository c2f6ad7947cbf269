"""Artifact writers for constants generation."""
import io
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, ContextManager, Dict, Iterator, Protocol, TextIO

INIT_CONTENT = '"""Generated table constants."""\n'


class ArtifactWriter(Protocol):
    def open(self, namespace: str, name: str, origin: Any = None) -> ContextManager[TextIO]:
        ...


def module_path(out_dir: Path, namespace: str, name: str) -> Path:
    parts = [p for p in namespace.split(".") if p]
    return out_dir.joinpath(*parts, f"{name}.py")


class FileArtifactWriter:
    """Write each artifact to ``<out_dir>/<namespace as dirs>/<name>.py``."""

    def __init__(self, out_dir: Path):
        self.out_dir = Path(out_dir)
        self._lock = threading.Lock()

    @contextmanager
    def open(self, namespace: str, name: str, origin: Any = None) -> Iterator[TextIO]:
        file_path = module_path(self.out_dir, namespace, name)
        with self._lock:
            # Create parent directories if needed
            file_path.parent.mkdir(parents=True, exist_ok=True)
            init_path = file_path.parent / "__init__.py"
            if namespace and not init_path.exists():
                init_path.write_text(INIT_CONTENT, encoding="utf-8")
        with open(file_path, "w", encoding="utf-8") as f:
            yield f


class MemoryArtifactWriter:
    """Keep artifacts in memory, keyed by qualified module name."""

    def __init__(self) -> None:
        self.files: Dict[str, str] = {}
        self._lock = threading.Lock()

    @contextmanager
    def open(self, namespace: str, name: str, origin: Any = None) -> Iterator[TextIO]:
        buffer = io.StringIO()
        try:
            yield buffer
            key = f"{namespace}.{name}" if namespace else name
            with self._lock:
                self.files[key] = buffer.getvalue()
        finally:
            buffer.close()
