"""Diagnostics collector — accumulates warnings during one combine run."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from framestitch.models.warnings import FrameWarning, Severity

logger = logging.getLogger(__name__)


class Diagnostics:
    """Ordered, append-only list of FrameWarnings."""

    def __init__(self) -> None:
        self._warnings: list[FrameWarning] = []

    def add(self, term: str, severity: Severity = "warning", **data: str) -> FrameWarning:
        warning = FrameWarning(term=term, severity=severity, data={k: str(v) for k, v in data.items()})
        self._warnings.append(warning)
        logger.debug("Recorded %s %s %s", severity, term, warning.data)
        return warning

    def error(self, term: str, **data: str) -> FrameWarning:
        return self.add(term, "error", **data)

    def warning(self, term: str, **data: str) -> FrameWarning:
        return self.add(term, "warning", **data)

    def info(self, term: str, **data: str) -> FrameWarning:
        return self.add(term, "info", **data)

    def extend(self, other: Diagnostics) -> None:
        self._warnings.extend(other.warnings)

    def has_errors(self) -> bool:
        return any(w.severity == "error" for w in self._warnings)

    @property
    def warnings(self) -> list[FrameWarning]:
        return list(self._warnings)

    def __iter__(self) -> Iterator[FrameWarning]:
        return iter(self._warnings)

    def __len__(self) -> int:
        return len(self._warnings)
