import logging
from typing import Optional

from exam_admin.config import Settings
from exam_admin.errors import AuthenticationError, ValidationError
from exam_admin.stores import KeyTreeStore

logger = logging.getLogger(__name__)


async def check_admin_login(
    store: KeyTreeStore,
    settings: Settings,
    userid: Optional[str],
    password: Optional[str],
) -> None:
    """
    Compare the supplied credentials with the single stored admin record.
    Raises AuthenticationError on mismatch; no session is issued.
    """
    if not userid or not password:
        raise ValidationError("User ID and Password are required.")

    admin_data = await store.get(settings.admin_login_path)
    if not isinstance(admin_data, dict):
        logger.warning("⚠️ Admin login attempted but no credential record is stored")
        raise AuthenticationError("Invalid User ID or Password.")

    if admin_data.get("userid") == userid.strip() and admin_data.get("password") == password.strip():
        logger.info("🔑 Admin login successful")
        return

    logger.info("🔒 Admin login rejected")
    raise AuthenticationError("Invalid User ID or Password.")
