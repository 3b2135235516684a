"""Per-operation resource logging.

``log_operation`` wraps a unit of work (tree build, k-NN query) and emits a
single INFO record of the form::

    op=knn_query wall_ms=0.412 cpu_user_ms=0.398 rss_delta=0 k=3 results=3

CPU and RSS samples come from ``psutil`` and are reported as ``NA`` when
diagnostics are disabled through ``KDTREEX_ENABLE_DIAGNOSTICS=0``.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator

import psutil

from kdtreex import config as kx_config


@dataclass
class _ResourceSample:
    cpu_user: float
    rss: int


def _sample(process: psutil.Process) -> _ResourceSample:
    cpu = process.cpu_times()
    return _ResourceSample(cpu_user=float(cpu.user), rss=int(process.memory_info().rss))


def _format_value(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.3f}"
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


@dataclass
class OperationLog:
    """Mutable record collected while an operation runs."""

    op: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    wall_ms: float | None = None
    cpu_user_ms: float | None = None
    rss_delta: int | None = None

    def add_metadata(self, **values: Any) -> None:
        self.metadata.update(values)

    def message(self) -> str:
        parts = [f"op={self.op}"]
        parts.append(
            "wall_ms=NA" if self.wall_ms is None else f"wall_ms={self.wall_ms:.3f}"
        )
        parts.append(
            "cpu_user_ms=NA"
            if self.cpu_user_ms is None
            else f"cpu_user_ms={self.cpu_user_ms:.3f}"
        )
        parts.append("rss_delta=NA" if self.rss_delta is None else f"rss_delta={self.rss_delta}")
        for key, value in self.metadata.items():
            parts.append(f"{key}={_format_value(value)}")
        return " ".join(parts)


@contextmanager
def log_operation(
    logger: logging.Logger, op: str, *, level: int = logging.INFO
) -> Iterator[OperationLog]:
    """Time the wrapped block and log one summary line when it succeeds."""

    runtime = kx_config.runtime_config()
    record = OperationLog(op=op)
    process = psutil.Process() if runtime.enable_diagnostics else None
    before = _sample(process) if process is not None else None
    start = time.perf_counter()
    yield record
    record.wall_ms = (time.perf_counter() - start) * 1e3
    if process is not None and before is not None:
        after = _sample(process)
        record.cpu_user_ms = (after.cpu_user - before.cpu_user) * 1e3
        record.rss_delta = after.rss - before.rss
    logger.log(level, record.message())


__all__ = ["OperationLog", "log_operation"]
