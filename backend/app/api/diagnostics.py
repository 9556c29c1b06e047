import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.database import Database, get_database

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/db-test")
async def db_test(database: Database = Depends(get_database)):
    """Connectivity check: lists the tables of the configured database."""
    try:
        tables = await database.list_tables()
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Database connectivity check failed: {e}")
        return JSONResponse(status_code=500, content={"ok": False, "error": str(e)})
    return {"ok": True, "tables": tables}
