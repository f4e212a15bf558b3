from fastapi import APIRouter, HTTPException, status
from pymongo.errors import PyMongoError

from connection_cache.db.mongo import get_database

router = APIRouter(tags=["health"])

@router.get("/health")
async def health():
    try:
        db = await get_database()
        # Simple ping: list collections (fast & safe)
        await db.list_collection_names()
    except PyMongoError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=f"Database unavailable: {exc}")
    return {"status": "ok"}
