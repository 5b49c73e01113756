import logging

from fastapi import APIRouter, Depends

from exam_admin.config import Settings
from exam_admin.database import get_key_tree_store, get_settings
from exam_admin.errors import CLIENT_ERRORS, ValidationError, upstream_failure
from exam_admin.schemas import NotificationRequest
from exam_admin.services import records
from exam_admin.services.records import RecordCollection
from exam_admin.stores import KeyTreeStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notifications"])


def get_notifications(
    store: KeyTreeStore = Depends(get_key_tree_store),
    settings: Settings = Depends(get_settings),
) -> RecordCollection:
    return records.notifications(store, settings)


@router.post("")
async def create_notification(
    request: NotificationRequest,
    notifications: RecordCollection = Depends(get_notifications),
):
    """
    Save a notification. Its id is the creation time in epoch milliseconds.
    """
    try:
        record = await notifications.create(request.model_dump(exclude_none=True))
        return {
            "message": "Notification saved successfully",
            "data": {
                "id": record["id"],
                "message": record.get("message"),
                "createdAt": record.get("createdAt"),
            },
        }
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error saving notification")
        raise upstream_failure("Failed to save notification", e) from e


@router.get("")
async def list_notifications(notifications: RecordCollection = Depends(get_notifications)):
    try:
        data = await notifications.list()
        message = "Notifications fetched successfully" if data else "No notifications found"
        return {"message": message, "data": data}
    except Exception as e:
        logger.exception("Error fetching notifications")
        raise upstream_failure("Failed to fetch notifications", e) from e


@router.get("/{notification_id}")
async def get_notification(notification_id: str, notifications: RecordCollection = Depends(get_notifications)):
    try:
        return {"data": await notifications.get(notification_id)}
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error fetching notification")
        raise upstream_failure("Failed to fetch notification", e) from e


@router.put("/{notification_id}")
async def update_notification(
    notification_id: str,
    request: NotificationRequest,
    notifications: RecordCollection = Depends(get_notifications),
):
    try:
        if not request.message:
            raise ValidationError("Message is required")
        data = await notifications.update(notification_id, request.model_dump(exclude_none=True))
        return {"message": "Notification updated successfully", "data": data}
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error updating notification")
        raise upstream_failure("Failed to update notification", e) from e


@router.delete("/{notification_id}")
async def delete_notification(notification_id: str, notifications: RecordCollection = Depends(get_notifications)):
    try:
        await notifications.delete(notification_id)
        return {"message": "Notification deleted successfully"}
    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error deleting notification")
        raise upstream_failure("Failed to delete notification", e) from e
