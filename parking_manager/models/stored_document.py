# parking_manager/models/stored_document.py
"""
Key/value table holding the serialized parking document.
One row per storage key; the payload is the full JSON text.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text
from parking_manager.database import Base


class StoredDocument(Base):
    __tablename__ = "stored_documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(100), nullable=False, unique=True, index=True)
    payload = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<StoredDocument {self.key} updated={self.updated_at}>"
