"""Liveness and readiness: /health, /api/healthz, /api/readyz."""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.db import get_db
from catalog_admin.logging_config import get_logger

router = APIRouter(tags=["health"])
logger = get_logger(__name__)


@router.get("/health")
@router.get("/api/healthz")
def health() -> dict[str, str]:
    """Process is up. Always 200; never touches the store."""
    return {"status": "ok"}


@router.get("/api/readyz")
async def readyz(db: AsyncSession = Depends(get_db)):
    """200 with the store's dialect when it answers SELECT 1, 503 otherwise."""
    try:
        await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("readyz.store_unavailable", error=type(e).__name__)
        return JSONResponse(status_code=503, content={"status": "unhealthy", "store": "fail"})
    return {"status": "ok", "store": db.bind.dialect.name}
