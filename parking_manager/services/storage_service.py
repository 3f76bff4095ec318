# parking_manager/services/storage_service.py
"""
Persistence of the parking document.
The whole document (employees, spaces, assignments) is serialized to JSON
and kept in one stored_documents row under settings.STORAGE_KEY.
"""

import json
from datetime import datetime
from typing import Optional
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from parking_manager.config import settings
from parking_manager.models.stored_document import StoredDocument
from parking_manager.schemas.document import ParkingDocument, REQUIRED_ARRAYS
from parking_manager.utils.errors import InvalidDocumentError, PersistenceError
from parking_manager.utils.logger import get_logger

logger = get_logger(__name__)


def parse_document(data) -> ParkingDocument:
    """Validate a raw JSON object as a parking document, raising InvalidDocumentError."""
    if not isinstance(data, dict):
        raise InvalidDocumentError("Document must be a JSON object")
    missing = [key for key in REQUIRED_ARRAYS if not isinstance(data.get(key), list)]
    if missing:
        raise InvalidDocumentError(f"Document is missing arrays: {', '.join(missing)}")
    try:
        return ParkingDocument.model_validate(data)
    except ValidationError as e:
        raise InvalidDocumentError(f"Document contains invalid records: {e.error_count()} errors") from e


class StorageService:
    def __init__(self, session_factory, key: Optional[str] = None):
        self.session_factory = session_factory
        self.key = key or settings.STORAGE_KEY

    async def load(self) -> ParkingDocument:
        """Read the stored document. Missing or unreadable payloads yield an empty document."""
        db = self.session_factory()
        try:
            row = db.query(StoredDocument).filter(StoredDocument.key == self.key).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read document '{self.key}': {e}", exc_info=True)
            raise PersistenceError("Could not read stored data") from e
        finally:
            db.close()

        if row is None:
            logger.info(f"No stored document under '{self.key}', starting empty")
            return ParkingDocument(version=settings.APP_VERSION)

        try:
            return parse_document(json.loads(row.payload))
        except (json.JSONDecodeError, InvalidDocumentError) as e:
            logger.warning(f"Stored document '{self.key}' is corrupt, starting empty: {e}")
            return ParkingDocument(version=settings.APP_VERSION)

    async def save(self, document: ParkingDocument) -> ParkingDocument:
        now = datetime.utcnow()
        document.version = settings.APP_VERSION
        document.last_updated = now
        payload = json.dumps(document.to_json_dict(), ensure_ascii=False)

        db = self.session_factory()
        try:
            row = db.query(StoredDocument).filter(StoredDocument.key == self.key).first()
            if row is None:
                row = StoredDocument(key=self.key, payload=payload, updated_at=now)
                db.add(row)
            else:
                row.payload = payload
                row.updated_at = now
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to write document '{self.key}': {e}", exc_info=True)
            raise PersistenceError("Could not save data") from e
        finally:
            db.close()

        logger.debug(f"Saved document '{self.key}' ({len(payload)} bytes)")
        return document

    async def clear(self):
        db = self.session_factory()
        try:
            db.query(StoredDocument).filter(StoredDocument.key == self.key).delete()
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to clear document '{self.key}': {e}", exc_info=True)
            raise PersistenceError("Could not clear stored data") from e
        finally:
            db.close()
        logger.info(f"Cleared stored document '{self.key}'")
