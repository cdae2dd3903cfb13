"""CleanService — destroy the destination tree."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from assetctl.infrastructure.filesystem import remove_tree
from assetctl.services.result import CLEAN_FAILED, ServiceResult

if TYPE_CHECKING:
    from assetctl.infrastructure.project import Project

logger = logging.getLogger(__name__)


class CleanService:
    """Remove ``dist/`` so category processors start from an empty tree."""

    def __init__(self, project: Project) -> None:
        self._project = project

    def clean(self) -> ServiceResult:
        started = time.perf_counter()
        dest = self._project.dist_root
        rel = self._project.relative(dest)
        try:
            removed = remove_tree(dest)
        except OSError as exc:
            logger.error("Could not remove %s: %s", rel, exc)
            return ServiceResult.failure(
                "clean",
                CLEAN_FAILED,
                f"Could not remove {rel}: {exc}",
                path=rel,
            )

        self._project.dispatch("post_clean", dest=rel, removed=removed)
        return ServiceResult(
            ok=True,
            op="clean",
            data={"path": rel, "removed": removed},
            meta={"duration_ms": round((time.perf_counter() - started) * 1000, 2)},
        )
