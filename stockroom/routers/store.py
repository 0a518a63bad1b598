# stockroom/routers/store.py
#
# Whole-database export and import. The export is a SQLite database file; an
# import replaces everything currently held in memory.

import logging

from fastapi import APIRouter, Query, Request, Response
from fastapi.concurrency import run_in_threadpool

from stockroom.core.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/store", tags=["Store"])


@router.get("/export")
def export_database(request: Request):
    data = request.app.state.store.export_bytes()

    return Response(
        content=data,
        media_type="application/x-sqlite3",
        headers={
            "Content-Disposition": f'attachment; filename="{settings.EXPORT_FILENAME}"'
        },
    )


@router.post("/import")
async def import_database(request: Request):
    data = await request.body()

    # import_bytes waits on the store lock; keep that off the event loop
    await run_in_threadpool(request.app.state.store.import_bytes, data)

    return {"message": "Database imported successfully", "size": len(data)}


@router.post("/reset")
def reset_database(
    request: Request,
    seed: bool = Query(True),
):
    request.app.state.store.reset(seed=seed)
    logger.info(f"Database reset (seed={seed})")

    return {"message": "Database reset"}
