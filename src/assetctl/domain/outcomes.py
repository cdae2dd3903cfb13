"""Per-file outcomes reported by category processors.

Processors never notify or print; they return one :class:`FileOutcome`
per source file and the caller decides whether to log, notify, or ignore.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from assetctl.domain.types import ERROR_TITLES, AssetCategory


class OutcomeStatus(StrEnum):
    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"


class FileOutcome(BaseModel):
    """Result of running one source file through a category chain."""

    model_config = {"frozen": True}

    category: AssetCategory
    source: str
    status: OutcomeStatus
    outputs: list[str] = Field(default_factory=list)
    title: str | None = None
    message: str | None = None

    @classmethod
    def written(cls, category: AssetCategory, source: str, outputs: list[str]) -> FileOutcome:
        return cls(
            category=category,
            source=source,
            status=OutcomeStatus.WRITTEN,
            outputs=outputs,
        )

    @classmethod
    def skipped(cls, category: AssetCategory, source: str) -> FileOutcome:
        return cls(category=category, source=source, status=OutcomeStatus.SKIPPED)

    @classmethod
    def failed(
        cls,
        category: AssetCategory,
        source: str,
        error: BaseException,
        outputs: list[str] | None = None,
    ) -> FileOutcome:
        """Build a failure outcome titled after the category (``"CSS Error"``)."""
        return cls(
            category=category,
            source=source,
            status=OutcomeStatus.FAILED,
            outputs=outputs or [],
            title=ERROR_TITLES[category],
            message=f"Error: {error}",
        )

    @property
    def ok(self) -> bool:
        return self.status is not OutcomeStatus.FAILED


def summarize(outcomes: list[FileOutcome]) -> dict[str, Any]:
    """Count outcomes by status and collect written output paths."""
    counts = {status.value: 0 for status in OutcomeStatus}
    outputs: list[str] = []
    for outcome in outcomes:
        counts[outcome.status.value] += 1
        outputs.extend(outcome.outputs)
    return {**counts, "outputs": outputs}
