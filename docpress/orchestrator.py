"""Pipeline orchestration for documentation builds."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from .batch import BatchRunner, BuildReport
from .config import DocPressConfig, load_config
from .culture import resolve_locale
from .dispatcher import Dispatcher
from .generators import PageElement, discover_generators
from .loader import load_manifest
from .logging import get_logger
from .models import OutputLanguage
from .output import OutputWriter
from .registry import GeneratorRegistry

DEFAULT_LANGUAGE = OutputLanguage.CSHARP
DEFAULT_WORKERS = 4
DEFAULT_OUTPUT_DIRNAME = "site"


@dataclass
class BuildOutcome:
    """Result of a build run: the report plus where it was written."""

    report: BuildReport
    output_dir: Path
    files: List[Path]


class Orchestrator:
    """Coordinates config, generator discovery, the batch run and output writing."""

    def __init__(self, generators: Optional[Iterable[PageElement]] = None) -> None:
        self._generator_overrides = list(generators) if generators is not None else None
        self.logger = get_logger("orchestrator")

    def build_registry(self, config: DocPressConfig) -> GeneratorRegistry:
        registry = GeneratorRegistry()
        for generator in self._select_generators(config):
            registry.register(generator)
        self.logger.debug("Registered %d generators", len(registry))
        return registry

    def list_generators(self, config_path: Path | None = None) -> List[PageElement]:
        config = load_config(config_path or Path.cwd())
        return self._select_generators(config)

    def run_build(
        self,
        input_path: str | Path,
        *,
        output_dir: str | Path | None = None,
        language: str | None = None,
        locale: str | None = None,
        workers: int | None = None,
        max_failures: int | None = None,
        config_path: str | Path | None = None,
    ) -> BuildOutcome:
        """Build documentation fragments for every symbol in a batch manifest."""
        manifest_path = Path(input_path).expanduser().resolve()
        if not manifest_path.exists():
            raise FileNotFoundError(f"Batch manifest not found: {manifest_path}")
        self.logger.info("Starting build for %s", manifest_path)

        config = load_config(Path(config_path) if config_path else manifest_path.parent)
        manifest = load_manifest(manifest_path)

        effective_language = OutputLanguage.parse(
            language or manifest.language or config.build.language or DEFAULT_LANGUAGE
        )
        effective_locale = resolve_locale(locale or manifest.locale or config.build.locale)
        effective_workers = workers or config.build.workers or DEFAULT_WORKERS
        effective_max_failures = max_failures if max_failures is not None else config.build.max_failures

        registry = self.build_registry(config)
        runner = BatchRunner(
            Dispatcher(registry),
            workers=effective_workers,
            max_failures=effective_max_failures,
        )
        report = runner.run(manifest.items, effective_language, effective_locale)

        target = self._resolve_output_dir(output_dir, config, manifest_path)
        writer = OutputWriter(target, markers=config.output.markers)
        files = writer.write(report)
        return BuildOutcome(report=report, output_dir=target, files=files)

    def _select_generators(self, config: DocPressConfig) -> List[PageElement]:
        if self._generator_overrides is not None:
            return list(self._generator_overrides)
        return discover_generators(
            config.generators.enabled,
            templates_dir=config.generators.templates_dir,
        )

    @staticmethod
    def _resolve_output_dir(
        output_dir: str | Path | None, config: DocPressConfig, manifest_path: Path
    ) -> Path:
        if output_dir is not None:
            return Path(output_dir).expanduser().resolve()
        if config.output.directory is not None:
            return config.output.directory
        return manifest_path.parent / DEFAULT_OUTPUT_DIRNAME


__all__ = ["BuildOutcome", "Orchestrator"]
