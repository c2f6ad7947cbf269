"""Orchestrator for constants generation."""
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence

from sqlconst.annotations import get_sql_table
from sqlconst.core.config import Settings
from sqlconst.core.config import settings as default_settings
from sqlconst.core.workflow import Round, Severity, Stage, TypeResult
from sqlconst.diagnostics import Diagnostics, LoggingDiagnostics
from sqlconst.discovery import ModuleScanner, RoundSource
from sqlconst.generators.constants_gen.docs import DocumentationMiner, resolve_source_root
from sqlconst.generators.constants_gen.hierarchy import collect_fields
from sqlconst.generators.constants_gen.naming import resolve_columns
from sqlconst.generators.constants_gen.render import render_constants_module
from sqlconst.generators.constants_gen.types import (
    GeneratedFile,
    GenerationReport,
    TableSpec,
)
from sqlconst.generators.constants_gen.writer import ArtifactWriter, FileArtifactWriter

log = logging.getLogger(__name__)


class ConstantsGenerator:
    """
    Drive constants generation for the table classes of each round.

    Tables of one round are processed concurrently; each task owns its
    documentation working set. A failing table is reported as a warning and
    never stops its siblings.
    """

    def __init__(
        self,
        settings: Settings,
        writer: ArtifactWriter,
        diagnostics: Diagnostics,
        source_root: Optional[Path] = None,
    ):
        self.settings = settings
        self.writer = writer
        self.diagnostics = diagnostics
        self.miner = DocumentationMiner(source_root)

    def namespace_for(self, table: TableSpec) -> str:
        suffix = self.settings.package_suffix
        return f"{table.package}.{suffix}" if table.package else suffix

    def name_for(self, table: TableSpec) -> str:
        return table.simple_name + self.settings.name_suffix

    def generate(self, source: RoundSource) -> GenerationReport:
        report = GenerationReport()
        try:
            for current in source.rounds():
                report.results.extend(self.process(current))
                if current.final:
                    break
        except Exception as e:
            self.diagnostics.report(Severity.ERROR, f"Constants generation failed: {e}")
            report.ok = False
            report.error = str(e)
        return report

    def process(self, current: Round) -> List[TypeResult]:
        if current.final:
            log.debug("Final round reached, nothing to do")
            return []

        models = []
        for model in current.types:
            sql_table = get_sql_table(model) if isinstance(model, type) else None
            if sql_table is None:
                continue
            if not sql_table.constant:
                self.diagnostics.report(
                    Severity.NOTE,
                    f"Constants disabled for {model.__module__}.{model.__qualname__}, skipping",
                )
                continue
            models.append(model)

        if not models:
            return []
        workers = min(self.settings.workers, len(models))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="sqlconst") as pool:
            return list(pool.map(self.process_type, models))

    def process_type(self, model: type) -> TypeResult:
        qualname = f"{model.__module__}.{model.__qualname__}"
        stage = Stage.COLLECT
        try:
            table = TableSpec.from_class(model)
            log.info("Collecting fields", extra={"table": qualname, "stage": stage.value})
            fields = collect_fields(model)

            stage = Stage.MINE
            namespace = self.namespace_for(table)
            name = self.name_for(table)
            with self.miner.session(table, fields) as docs:
                table_comment = self.miner.mine_type_comment(docs)
                columns = resolve_columns(
                    fields,
                    table.snake_case,
                    lambda column: self.miner.mine_field_comment(docs, column),
                )
                stage = Stage.RENDER
                content = render_constants_module(
                    table,
                    columns,
                    table_comment,
                    package=namespace,
                    class_name=name,
                    diagnostics=self.diagnostics,
                    suffix=self.settings.name_suffix,
                )

            stage = Stage.WRITE
            artifact = GeneratedFile(namespace=namespace, name=name, content=content, origin=model)
            self.write(artifact)
            log.info("Generated %s", artifact.qualified_name, extra={"table": qualname, "stage": Stage.DONE.value})
            return TypeResult(qualname, True, f"Generated {artifact.qualified_name}", artifact.qualified_name)
        except Exception as e:
            log.debug("Generation failed", exc_info=True, extra={"table": qualname, "stage": stage.value})
            self.diagnostics.report(
                Severity.WARNING,
                f"Constants generation failed for {qualname} at {stage.value}: {e}",
            )
            return TypeResult(qualname, False, str(e))

    def write(self, artifact: GeneratedFile) -> None:
        with self.writer.open(artifact.namespace, artifact.name, artifact.origin) as sink:
            sink.write(artifact.content)


def generate_constants(
    modules: Sequence[str],
    settings: Optional[Settings] = None,
    writer: Optional[ArtifactWriter] = None,
    diagnostics: Optional[Diagnostics] = None,
    source_root: Optional[Path] = None,
) -> GenerationReport:
    """
    Generate constants modules for every table class found in ``modules``.

    Args:
        modules: Dotted module or package names to scan
        settings: Generation settings (defaults to environment settings)
        writer: Artifact writer (defaults to files under out_dir / source root)
        diagnostics: Problem reporter (defaults to logging)
        source_root: Already resolved source root (resolved from settings if omitted)

    Returns:
        GenerationReport with one TypeResult per processed table
    """
    settings = settings or default_settings
    diagnostics = diagnostics or LoggingDiagnostics()

    # Resolved once, shared read-only by all workers
    if source_root is None:
        source_root = resolve_source_root(settings.source_root)

    if writer is None:
        out_dir = settings.out_dir or source_root
        if out_dir is None:
            diagnostics.report(Severity.ERROR, "No output directory: set out_dir or a valid source_root")
            return GenerationReport(ok=False, error="no output directory")
        writer = FileArtifactWriter(Path(out_dir))

    generator = ConstantsGenerator(settings, writer, diagnostics, source_root)
    scanner = ModuleScanner(modules, exclude=[settings.package_suffix])
    return generator.generate(scanner)
