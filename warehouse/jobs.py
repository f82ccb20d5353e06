"""
Background packing jobs — run generate + pack off the caller's thread.

A job owns a cancellation Event that the placement loop polls, and a
Queue of event dicts the caller drains:

  {"type": "progress", "processed": int, "total": int, "packed": int}
  {"type": "done", "result": {...}, "stats": {...}}
  {"type": "cancelled", "result": {...}, "stats": {...}}
  {"type": "error", "message": str, "traceback": str}

followed by a ``None`` sentinel.
"""

from __future__ import annotations

import itertools
import logging
import threading
import traceback
from queue import Queue

from warehouse.pipeline.config import PackerConfig, WarehouseConfig
from warehouse.pipeline.placer import (
    PackingResult, PackingStats,
    generate_and_pack, result_to_dict, stats_to_dict,
)


log = logging.getLogger(__name__)

_ids = itertools.count(1)


class PackingJob:
    """One cancellable packing run on a daemon thread."""

    def __init__(
        self,
        config: WarehouseConfig,
        *,
        seed: int | None = None,
        packer_config: PackerConfig | None = None,
    ) -> None:
        self.id = next(_ids)
        self.config = config
        self.seed = seed
        self.packer_config = packer_config
        self.events: Queue[dict | None] = Queue()
        self.status = "pending"
        self.result: PackingResult | None = None
        self.stats: PackingStats | None = None
        self.error: str | None = None
        self._cancel = threading.Event()
        self._done = threading.Event()
        self._thread: threading.Thread | None = None

    # ── Control ────────────────────────────────────────────────────

    def start(self) -> "PackingJob":
        if self._thread is not None:
            raise RuntimeError(f"Job {self.id} already started")
        self.status = "running"
        self._thread = threading.Thread(
            target=self._run, name=f"packing-job-{self.id}", daemon=True)
        self._thread.start()
        return self

    def cancel(self) -> None:
        self._cancel.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the job finishes.  Returns False on timeout."""
        return self._done.wait(timeout)

    @property
    def finished(self) -> bool:
        return self._done.is_set()

    # ── Worker ─────────────────────────────────────────────────────

    def _emit(self, event_type: str, data: dict) -> None:
        self.events.put({"type": event_type, **data})

    def _on_progress(self, processed: int, total: int, packed: int) -> None:
        self._emit("progress",
                   {"processed": processed, "total": total, "packed": packed})

    def _run(self) -> None:
        log.info("Job %d: started (seed=%s)", self.id, self.seed)
        try:
            result, stats = generate_and_pack(
                self.config,
                seed=self.seed,
                packer_config=self.packer_config,
                cancel=self._cancel,
                on_progress=self._on_progress,
            )
            self.result, self.stats = result, stats
            self.status = "cancelled" if result.stop_reason == "cancelled" else "done"
            self._emit(self.status, {
                "result": result_to_dict(result),
                "stats": stats_to_dict(stats),
            })
            log.info("Job %d: %s, %d/%d boxes packed", self.id, self.status,
                     stats.boxes_packed, stats.total_boxes)
        except Exception as e:
            self.status = "error"
            self.error = str(e)
            log.exception("Job %d: failed", self.id)
            self._emit("error", {
                "message": str(e),
                "traceback": traceback.format_exc(),
            })
        finally:
            self._done.set()
            self.events.put(None)  # sentinel

    def snapshot(self) -> dict:
        """JSON-safe view of the job state."""
        out: dict = {"id": self.id, "status": self.status}
        if self.stats is not None:
            out["stats"] = stats_to_dict(self.stats)
        if self.error is not None:
            out["error"] = self.error
        return out
