# parking_manager/services/record_store.py
from typing import Generic, Optional, TypeVar
from pydantic import BaseModel

RecordT = TypeVar("RecordT", bound=BaseModel)


class RecordStore(Generic[RecordT]):
    """Ordered in-memory list of records with integer ids."""

    not_found_error = LookupError

    def __init__(self, items: Optional[list] = None):
        self.items: list[RecordT] = list(items or [])

    def __len__(self):
        return len(self.items)

    def next_id(self) -> int:
        return max((item.id for item in self.items), default=0) + 1

    def get(self, record_id: int) -> Optional[RecordT]:
        return next((item for item in self.items if item.id == record_id), None)

    def require(self, record_id: int) -> RecordT:
        item = self.get(record_id)
        if item is None:
            raise self.not_found_error(record_id)
        return item

    def remove(self, record_id: int) -> RecordT:
        item = self.require(record_id)
        self.items.remove(item)
        return item

    def replace(self, items: list):
        self.items = list(items)

    def snapshot(self) -> list[RecordT]:
        return [item.model_copy(deep=True) for item in self.items]
