"""
Exceptions raised by the scene document layer.

Patch no-ops (delete/insert against a path that does not resolve) are NOT
errors and never raise; see petalburg.document.patcher.
"""

from typing import Optional


class SceneError(Exception):
    """Base exception for scene document operations with context."""
    def __init__(self, message: str, operation: str = ""):
        self.operation = operation
        super().__init__(message)


class SceneParseError(SceneError):
    """Persisted bytes are not valid JSON or fail scene validation."""
    def __init__(self, message: str):
        super().__init__(message, operation="parse")


class EditFormatError(SceneError):
    """An edit message has an unknown type or a malformed path."""
    def __init__(self, message: str):
        super().__init__(message, operation="edit")


class InvalidDocumentError(SceneError):
    """Editing was attempted while the document holds no valid scene."""
    def __init__(self, message: str = "Document is not a valid scene"):
        super().__init__(message, operation="edit")


class NoActiveViewError(SceneError):
    """A bridge request was made with no view attached."""
    def __init__(self, message: str = "Could not find view to save for"):
        super().__init__(message, operation="request")


class DocumentSaveError(SceneError):
    """Writing or reading the document location failed."""
    def __init__(self, message: str, operation: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message, operation=operation)
