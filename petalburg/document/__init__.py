"""
Scene document model.

This package provides the structured edit/document side of the editor:
- SceneEdit: insert/delete/update patches addressed by dotted paths
- patcher: get/set/remove/insert against nested dicts and lists
- scene: parsing, normalisation and serialisation of scene files
- EditBridge: request/response exchange with the active view
- SceneDocument: content, edit log, save/revert/backup

Usage:
    from petalburg.document import SceneDocument, EditBridge, update_edit
"""

from petalburg.document.bridge import EditBridge
from petalburg.document.channel import LocalChannel, MessageChannel, create_channel_pair
from petalburg.document.document import EditLog, SceneDocument
from petalburg.document.edits import SceneEdit, delete_edit, insert_edit, update_edit
from petalburg.document.errors import (
    DocumentSaveError,
    EditFormatError,
    InvalidDocumentError,
    NoActiveViewError,
    SceneError,
    SceneParseError,
)
from petalburg.document.patcher import apply_edit, get_value, insert_value, remove_value, set_value
from petalburg.document.scene import default_scene, encode_scene, parse_scene, serialize_scene

__all__ = [
    'EditBridge',
    'LocalChannel',
    'MessageChannel',
    'create_channel_pair',
    'EditLog',
    'SceneDocument',
    'SceneEdit',
    'insert_edit',
    'delete_edit',
    'update_edit',
    'SceneError',
    'SceneParseError',
    'EditFormatError',
    'InvalidDocumentError',
    'NoActiveViewError',
    'DocumentSaveError',
    'apply_edit',
    'get_value',
    'set_value',
    'remove_value',
    'insert_value',
    'default_scene',
    'parse_scene',
    'serialize_scene',
    'encode_scene',
]
