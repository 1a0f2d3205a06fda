"""Document model."""

from .Document import SYSTEM_FIELDS, Document, FieldKind

__all__ = [
    "SYSTEM_FIELDS",
    "Document",
    "FieldKind",
]
