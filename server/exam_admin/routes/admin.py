import logging
from typing import Optional

from fastapi import APIRouter, Depends

from exam_admin.config import Settings
from exam_admin.database import get_key_tree_store, get_settings
from exam_admin.errors import CLIENT_ERRORS, upstream_failure
from exam_admin.services import admin as admin_service
from exam_admin.stores import KeyTreeStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Admin"])


@router.get("/login")
async def admin_login(
    userid: Optional[str] = None,
    password: Optional[str] = None,
    store: KeyTreeStore = Depends(get_key_tree_store),
    settings: Settings = Depends(get_settings),
):
    """
    Check the admin credentials passed as query parameters
    """
    try:
        await admin_service.check_admin_login(store, settings, userid, password)
        return {"message": "Login successful!"}
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error fetching admin data")
        raise upstream_failure("Internal Server Error.", e) from e
