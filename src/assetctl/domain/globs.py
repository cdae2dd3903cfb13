"""Glob matching for source and watch patterns.

Patterns are project-relative, use ``/`` separators, and follow
:mod:`wcmatch.glob` rules with globstar, brace and negation enabled:

- ``*`` stays within one directory, ``**`` spans any depth (including none).
- ``*.{jpg,png}`` matches either extension.
- A leading ``!`` excludes files matched by the other patterns.

Examples:
    >>> GlobSet(Path("."), ["img/**/*.{svg,png}", "!img/sprite/*.svg"]).matches(
    ...     Path("img/logo.svg"))
    True
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from wcmatch import glob

GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.NEGATE


class GlobSet:
    """A compiled, ordered list of include/exclude patterns rooted at *root*."""

    def __init__(self, root: Path, patterns: Sequence[str]) -> None:
        self.root = root
        self.patterns = tuple(patterns)
        self._patterns = [_normalize(pattern) for pattern in self.patterns]

    def _relative(self, path: Path) -> str | None:
        try:
            rel = path.resolve().relative_to(self.root.resolve())
        except ValueError:
            return None
        return rel.as_posix()

    def matches(self, path: Path) -> bool:
        """True when *path* (absolute, or relative to root) matches the set.

        Matching is on the path string only, so deleted files still match.
        """
        candidate = path if path.is_absolute() else self.root / path
        rel = self._relative(candidate)
        if rel is None:
            return False
        return glob.globmatch(rel, self._patterns, flags=GLOB_FLAGS)

    def files(self) -> list[Path]:
        """All existing files under root that match, sorted.

        A pattern set that matches nothing yields an empty list.
        """
        if not self.root.is_dir():
            return []
        found = glob.glob(self._patterns, flags=GLOB_FLAGS | glob.NODIR, root_dir=str(self.root))
        return sorted({self.root / rel for rel in found})


def _normalize(pattern: str) -> str:
    if pattern.startswith("!"):
        return "!" + pattern[1:].removeprefix("./")
    return pattern.removeprefix("./")
