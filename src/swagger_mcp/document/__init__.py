"""Interface document: fetch-once cache and typed view."""

from .cache import DocumentCache, DocumentResult
from .view import InterfaceDocument, OperationRef

__all__ = ["DocumentCache", "DocumentResult", "InterfaceDocument", "OperationRef"]
