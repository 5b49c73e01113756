"""
Flat records kept in the key-tree store: notifications, syllabus links and
exam Q&A links.

All three share one shape: a root node holding records keyed by an id made
of a literal prefix and the creation time in epoch milliseconds. Two
creates in the same millisecond get the same id and the second overwrites
the first.
"""
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from exam_admin.config import Settings
from exam_admin.errors import NotFoundError, ValidationError
from exam_admin.stores import SERVER_TIMESTAMP, KeyTreeStore, join_path

logger = logging.getLogger(__name__)


def generate_record_id(prefix: str = "") -> str:
    return f"{prefix}{int(time.time() * 1000)}"


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class RecordCollection:
    """CRUD over one root of the key-tree store."""

    def __init__(
        self,
        store: KeyTreeStore,
        root: str,
        label: str,
        required_fields: List[str],
        missing_message: str,
        id_prefix: str = "",
        version: Optional[str] = None,
        store_id: bool = True,
        stamp_upload: bool = True,
        delete_requires_existing: bool = True,
    ):
        self.store = store
        self.root = root
        self.label = label
        self.required_fields = required_fields
        self.missing_message = missing_message
        self.id_prefix = id_prefix
        self.version = version
        self.store_id = store_id
        self.stamp_upload = stamp_upload
        self.delete_requires_existing = delete_requires_existing

    def _path(self, record_id: str) -> str:
        return join_path(self.root, record_id)

    def _validate(self, fields: Dict[str, Any]) -> None:
        if any(not fields.get(name) for name in self.required_fields):
            raise ValidationError(self.missing_message)

    async def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        self._validate(fields)
        record_id = generate_record_id(self.id_prefix)

        record: Dict[str, Any] = {}
        if self.store_id:
            record["id"] = record_id
        record.update(fields)
        if self.stamp_upload:
            record["uploadedAt"] = _iso_now()
        record["updatedAt"] = SERVER_TIMESTAMP
        if self.version:
            record["version"] = self.version

        path = self._path(record_id)
        await self.store.set(path, record)
        logger.info(f"📝 {self.label} {record_id} created")

        stored = await self.store.get(path) or {}
        return {"id": record_id, **stored}

    async def list(self) -> Dict[str, Any]:
        """All records keyed by id; an empty dict when there are none."""
        return await self.store.get(self.root) or {}

    async def get(self, record_id: str) -> Dict[str, Any]:
        record = await self.store.get(self._path(record_id))
        if not record:
            raise NotFoundError(f"{self.label} not found")
        return {"id": record_id, **record}

    async def update(self, record_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Merge ``fields`` over the stored record and rewrite it whole."""
        self._validate(fields)
        path = self._path(record_id)

        existing = await self.store.get(path)
        if not existing:
            raise NotFoundError(f"{self.label} not found")

        updated = {**existing, **fields, "updatedAt": SERVER_TIMESTAMP}
        await self.store.set(path, updated)
        logger.info(f"✏️ {self.label} {record_id} updated")

        return await self.store.get(path) or {}

    async def delete(self, record_id: str) -> None:
        path = self._path(record_id)
        if self.delete_requires_existing and not await self.store.get(path):
            raise NotFoundError(f"{self.label} not found")
        await self.store.delete(path)
        logger.info(f"🗑️ {self.label} {record_id} deleted")


def notifications(store: KeyTreeStore, settings: Settings) -> RecordCollection:
    # Notification ids are bare epoch-ms strings
    return RecordCollection(
        store,
        root=settings.notifications_root,
        label="Notification",
        required_fields=["message"],
        missing_message="Missing required fields. Please provide a message",
        store_id=False,
        stamp_upload=False,
        delete_requires_existing=False,
    )


def syllabus(store: KeyTreeStore, settings: Settings) -> RecordCollection:
    return RecordCollection(
        store,
        root=settings.syllabus_root,
        label="Syllabus",
        required_fields=["examTitle", "syllabusLink"],
        missing_message="Missing required fields. Please provide exam title and syllabus link",
        id_prefix="syllabus_",
        version=settings.syllabus_version,
    )


def exam_qa(store: KeyTreeStore, settings: Settings) -> RecordCollection:
    return RecordCollection(
        store,
        root=settings.exam_qa_root,
        label="Exam Q&A",
        required_fields=["examTitle", "qaLink"],
        missing_message="Missing required fields. Please provide exam title and Q&A link.",
        id_prefix="qa_",
        version=settings.exam_qa_version,
    )
