"""Translation between entity dataclasses and stored documents."""

from datetime import datetime
from typing import Any, ClassVar, Dict, Mapping


class DocumentModel:
    """Mixin for dataclasses persisted as documents.

    ``DOCUMENT_KEYS`` maps attribute names to the keys used in the stored
    documents. The ``id`` is never part of the document body.
    """

    DOCUMENT_KEYS: ClassVar[Dict[str, str]] = {}

    @classmethod
    def document_fields(cls, changes: Mapping[str, Any]) -> Dict[str, Any]:
        """Translate attribute changes into document fields for a partial update."""
        unknown = set(changes) - set(cls.DOCUMENT_KEYS)
        if unknown:
            raise ValueError(f"Unknown fields for {cls.__name__}: {sorted(unknown)}")
        return {cls.DOCUMENT_KEYS[name]: cls._encode(value) for name, value in changes.items()}

    def to_document(self) -> Dict[str, Any]:
        values = {name: getattr(self, name) for name in self.DOCUMENT_KEYS}
        return self.document_fields(values)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]):
        values = {
            name: cls._decode(name, document[key])
            for name, key in cls.DOCUMENT_KEYS.items()
            if key in document
        }
        return cls(id=document.get("id"), **values)

    @staticmethod
    def _encode(value: Any) -> Any:
        if isinstance(value, datetime):
            return value.isoformat()
        if isinstance(value, tuple):
            return list(value)
        return value

    @classmethod
    def _decode(cls, name: str, value: Any) -> Any:
        return value
