"""Background worker for slow preview decodes (images, documents)."""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from queue import Empty, Queue

from loguru import logger

from ..entries.types import Entry
from .payload import BinaryInfo, PreviewPayload


@dataclass(frozen=True)
class PreviewJob:
    """One preview build request."""

    request_id: int
    entry: Entry


@dataclass(frozen=True)
class PreviewJobResult:
    """Completed preview payload from the background worker."""

    job: PreviewJob
    payload: PreviewPayload


class PreviewJobScheduler:
    """Single-slot latest-request-wins preview scheduler.

    At most one job runs at a time and at most one waits. Scheduling a new job
    replaces the waiting one, and ``drain_results`` only returns the result of
    the most recent request, so superseded work is discarded.
    """

    def __init__(self, build_preview: Callable[[Entry], PreviewPayload]) -> None:
        self._build_preview = build_preview
        self._lock = threading.Lock()
        self._pending: PreviewJob | None = None
        self._running = False
        self._next_request_id = 1
        self._current_request_id = 0
        self._results: Queue[PreviewJobResult] = Queue()

    @property
    def current_request_id(self) -> int:
        with self._lock:
            return self._current_request_id

    def _is_current(self, request_id: int) -> bool:
        with self._lock:
            return request_id == self._current_request_id

    def _worker(self) -> None:
        while True:
            with self._lock:
                job = self._pending
                self._pending = None
                if job is None:
                    self._running = False
                    return
            if not self._is_current(job.request_id):
                continue

            try:
                payload = self._build_preview(job.entry)
            except Exception as exc:
                logger.exception("preview worker failed for {}", job.entry.path)
                payload = BinaryInfo(
                    path=job.entry.path,
                    size=job.entry.size,
                    note=f"preview failed ({exc.__class__.__name__})",
                )
            self._results.put(PreviewJobResult(job=job, payload=payload))

    def schedule(self, entry: Entry) -> int:
        """Queue ``entry`` for preview, superseding earlier requests, and return its id."""
        with self._lock:
            request_id = self._next_request_id
            self._next_request_id += 1
            self._current_request_id = request_id
            self._pending = PreviewJob(request_id=request_id, entry=entry)
            if self._running:
                return request_id
            self._running = True

        worker = threading.Thread(
            target=self._worker,
            name="quickswitch-preview",
            daemon=True,
        )
        worker.start()
        return request_id

    def cancel(self) -> None:
        """Invalidate any pending or running job."""
        with self._lock:
            self._pending = None
            self._current_request_id = 0

    def drain_results(self) -> list[PreviewJobResult]:
        """Drain completed results, keeping only the current request's."""
        out: list[PreviewJobResult] = []
        while True:
            try:
                result = self._results.get_nowait()
            except Empty:
                break
            if self._is_current(result.job.request_id):
                out.append(result)
        return out


__all__ = [
    "PreviewJob",
    "PreviewJobResult",
    "PreviewJobScheduler",
]
