"""BaseProcessor — shared driver for every category processor.

A processor receives the :class:`Project` at construction time (frozen
settings plus the resolved path table) and runs each matched source file
through its chain. One failing file never aborts the category: the error
is captured as a failed :class:`FileOutcome` and the loop moves on.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from assetctl.domain.outcomes import FileOutcome, OutcomeStatus, summarize
from assetctl.services.result import ServiceResult

if TYPE_CHECKING:
    from assetctl.domain.types import AssetCategory
    from assetctl.infrastructure.project import Project

logger = logging.getLogger(__name__)


class BaseProcessor:
    """Abstract base for category processors.

    Subclasses set :attr:`category` and implement :meth:`process`::

        class ScriptsProcessor(BaseProcessor):
            category = AssetCategory.SCRIPTS

            def process(self, source: Path, out: list[Path]) -> bool:
                ...
                out.append(write_text(dest, minified))
                return True
    """

    category: ClassVar[AssetCategory]

    def __init__(self, project: Project) -> None:
        self._project = project
        self.base = project.base_dir(self.category)
        self.dest = project.dest_dir(self.category)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def collect(self) -> list[Path]:
        """Source files for this category (exclusions applied)."""
        return self._project.sources(self.category).files()

    def run(self, sources: Sequence[Path] | None = None) -> ServiceResult:
        """Process *sources* (default: everything matched) and report outcomes."""
        started = time.perf_counter()
        files = self.collect() if sources is None else list(sources)
        logger.debug("%s: %d source file(s)", self.category.value, len(files))

        outcomes = self.process_all(files)
        summary = summarize(outcomes)
        self._project.dispatch(
            "post_category",
            category=self.category.value,
            written=summary[OutcomeStatus.WRITTEN.value],
            skipped=summary[OutcomeStatus.SKIPPED.value],
            failed=summary[OutcomeStatus.FAILED.value],
        )
        warnings = [
            f"{o.title}: {o.source}: {o.message}" for o in outcomes if o.status is OutcomeStatus.FAILED
        ]
        return ServiceResult(
            ok=True,
            op=self.category.value,
            data={**summary, "files": [o.model_dump(mode="json") for o in outcomes]},
            warnings=warnings,
            meta={"duration_ms": round((time.perf_counter() - started) * 1000, 2)},
        )

    def process_all(self, files: Sequence[Path]) -> list[FileOutcome]:
        """Run every file through :meth:`process`, reporting as each finishes."""
        outcomes: list[FileOutcome] = []
        for source in files:
            outcome = self._run_one(source)
            self._report(outcome)
            outcomes.append(outcome)
        return outcomes

    def process(self, source: Path, out: list[Path]) -> bool:
        """Transform one *source*, appending each written path to *out*.

        Returns False when every output was already fresh and nothing ran.
        Raise on failure; paths already in *out* are reported as partial
        outputs of the failed file.
        """
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _relative(self, path: Path) -> str:
        return self._project.relative(path)

    def _run_one(self, source: Path) -> FileOutcome:
        out: list[Path] = []
        rel = self._relative(source)
        try:
            did_work = self.process(source, out)
        except Exception as exc:
            logger.debug("%s failed on %s", self.category.value, rel, exc_info=True)
            return FileOutcome.failed(
                self.category, rel, exc, outputs=[self._relative(p) for p in out]
            )
        if not did_work and not out:
            return FileOutcome.skipped(self.category, rel)
        return FileOutcome.written(self.category, rel, [self._relative(p) for p in out])

    def _report(self, outcome: FileOutcome) -> None:
        for path in outcome.outputs:
            self._project.dispatch(
                "post_asset_written", category=self.category.value, path=path
            )
        if outcome.status is OutcomeStatus.FAILED:
            self._project.dispatch(
                "post_asset_failed",
                category=self.category.value,
                source=outcome.source,
                title=outcome.title or "",
                message=outcome.message or "",
            )
