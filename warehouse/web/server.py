"""
FastAPI web server — packing endpoints for the layout UI.
"""

from __future__ import annotations

import asyncio
import json
import logging
from queue import Empty

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from warehouse.jobs import PackingJob
from warehouse.pipeline.config import (
    DEFAULT_CONFIG, ConfigError, PackerConfig, WarehouseConfig,
)
from warehouse.pipeline.placer import result_to_dict, stats_to_dict


log = logging.getLogger(__name__)

# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="Warehouse Packer")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Session state (persists across requests) ───────────────────────

_active_job: PackingJob | None = None   # job behind the current stream


# ── Models ─────────────────────────────────────────────────────────

class PackRequest(BaseModel):
    storage_width: int = DEFAULT_CONFIG.storage_width
    storage_length: int = DEFAULT_CONFIG.storage_length
    num_rectangles: int = DEFAULT_CONFIG.num_rectangles
    min_side: int = DEFAULT_CONFIG.min_side
    max_side: int = DEFAULT_CONFIG.max_side
    clearance: int = DEFAULT_CONFIG.clearance
    step: int = DEFAULT_CONFIG.step
    seed: int | None = None
    time_budget_s: float | None = Field(default=30.0, gt=0)

    def build(self) -> tuple[WarehouseConfig, PackerConfig]:
        data = self.model_dump(exclude={"seed", "time_budget_s"})
        try:
            config = WarehouseConfig.from_dict(data)
        except ConfigError as e:
            raise HTTPException(400, str(e)) from e
        return config, PackerConfig(time_budget_s=self.time_budget_s)


# ── Routes ─────────────────────────────────────────────────────────

@app.get("/api/defaults")
def get_defaults():
    return DEFAULT_CONFIG.to_dict()


@app.post("/api/pack")
def pack(req: PackRequest):
    """Generate and pack in one request (bounded by ``time_budget_s``)."""
    config, packer_config = req.build()
    job = PackingJob(config, seed=req.seed, packer_config=packer_config).start()
    job.wait()
    if job.status == "error":
        raise HTTPException(500, job.error or "Packing failed")
    return {
        "result": result_to_dict(job.result),
        "stats": stats_to_dict(job.stats),
    }


@app.post("/api/pack/stream")
async def pack_stream(req: PackRequest):
    """
    Streaming endpoint.  Runs the packing job in a background thread and
    pushes its progress / done events to the client as SSE.
    Disconnecting the client cancels the job.
    """
    global _active_job

    config, packer_config = req.build()
    if _active_job is not None and not _active_job.finished:
        _active_job.cancel()

    job = PackingJob(config, seed=req.seed, packer_config=packer_config).start()
    _active_job = job

    async def event_generator():
        try:
            while True:
                try:
                    item = job.events.get(timeout=0.05)
                except Empty:
                    await asyncio.sleep(0.05)
                    continue

                if item is None:
                    break
                yield f"data: {json.dumps(item)}\n\n"
        finally:
            if not job.finished:
                log.info("Stream closed early, cancelling job %d", job.id)
                job.cancel()

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@app.post("/api/pack/cancel")
def cancel_pack():
    """Cancel the job behind the current stream, if any."""
    if _active_job is None or _active_job.finished:
        return {"status": "idle"}
    _active_job.cancel()
    return {"status": "cancelling", "job": _active_job.snapshot()}


@app.get("/api/pack/status")
def pack_status():
    if _active_job is None:
        return {"status": "idle"}
    return _active_job.snapshot()


def main(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    uvicorn.run("warehouse.web.server:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
