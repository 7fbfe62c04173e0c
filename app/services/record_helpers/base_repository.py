# /app/services/record_helpers/base_repository.py

"""
Shared pieces for the record repositories: the error they raise and the
validation step that turns raw dictionaries into record models.
"""

from typing import Any, Dict, Iterable, List, Type

from pydantic import ValidationError

from ...models.record_model import Course, Enrollment, Instructor, Participant, RecordBase, Room

# Collection name -> record model. The names match the keys of `config.APP_IDS`.
COLLECTION_MODELS: Dict[str, Type[RecordBase]] = {
    "dozenten": Instructor,
    "teilnehmer": Participant,
    "raeume": Room,
    "kurse": Course,
    "anmeldungen": Enrollment,
}


class RecordSourceError(Exception):
    """Raised when a collection cannot be read or its payload is malformed."""

    def __init__(self, collection: str, message: str):
        self.collection = collection
        super().__init__(f"Could not read collection '{collection}': {message}")


class BaseRecordRepository:
    """Subclasses implement `_load_raw`; validation is shared."""

    def _load_raw(self, collection: str) -> Iterable[Dict[str, Any]]:
        raise NotImplementedError

    def get_collection(self, collection: str) -> List[RecordBase]:
        if collection not in COLLECTION_MODELS:
            raise KeyError(f"Unknown collection: {collection}")
        model = COLLECTION_MODELS[collection]
        raw_records = self._load_raw(collection)
        try:
            return [model.model_validate(raw) for raw in raw_records]
        except ValidationError as e:
            raise RecordSourceError(collection, f"malformed record ({e.error_count()} validation errors)") from e
