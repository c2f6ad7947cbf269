"""Command line entry point: ``sqlconst shop.models --out-dir build/``."""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sqlconst.core.config import ConfigError, load_settings
from sqlconst.core.logging import configure_logging
from sqlconst.diagnostics import LoggingDiagnostics
from sqlconst.generators.constants_gen import generate_constants
from sqlconst.generators.constants_gen.docs import resolve_source_root
from sqlconst.generators.constants_gen.writer import MemoryArtifactWriter

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlconst",
        description="Generate table/column constant modules from @sql_table classes",
    )
    parser.add_argument("modules", nargs="*", help="Modules or packages to scan (added to config modules)")
    parser.add_argument("--config", type=Path, help="YAML config file")
    parser.add_argument("--source-root", help="Directory holding the model sources (default: ./src or .)")
    parser.add_argument("--out-dir", help="Where generated packages are written (default: source root)")
    parser.add_argument("--workers", type=int, help="Number of tables processed in parallel")
    parser.add_argument("--log-level", help="Logging level (default: INFO)")
    parser.add_argument("--dry-run", action="store_true", help="Print generated modules instead of writing them")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(
            args.config,
            source_root=args.source_root,
            out_dir=args.out_dir,
            workers=args.workers,
            log_level=args.log_level,
        )
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    modules = list(dict.fromkeys(settings.modules + args.modules))
    if not modules:
        print("Error: no modules to scan. Pass module names or set 'modules' in the config.", file=sys.stderr)
        return 2

    source_root = resolve_source_root(settings.source_root)
    if source_root is None:
        print(f"Error: source root {settings.source_root} does not exist", file=sys.stderr)
        return 2
    # Model modules are imported by name, so the source root must be importable
    if str(source_root) not in sys.path:
        sys.path.insert(0, str(source_root))

    diagnostics = LoggingDiagnostics()
    writer = MemoryArtifactWriter() if args.dry_run else None
    report = generate_constants(
        modules, settings=settings, writer=writer, diagnostics=diagnostics, source_root=source_root,
    )

    if args.dry_run:
        for name, content in sorted(writer.files.items()):
            print(f"# ---- {name}")
            print(content)

    generated = sum(1 for r in report.results if r.ok)
    log.info("Generated %d of %d table modules", generated, len(report.results))
    if not report.ok or diagnostics.has_errors:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
