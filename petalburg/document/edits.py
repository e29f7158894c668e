"""
Scene edits: the insert/delete/update patches exchanged between view and host.

Wire format (dict, camelCase as in the host protocol):
{
  "type": "update",          # or "insert" / "delete"
  "path": "actors.0.pos",    # dotted path, numeric segments index lists
  "oldValue": [10, 10],      # delete + update
  "newValue": [50, 50]       # insert + update
}
"""

import copy
from dataclasses import dataclass
from typing import Any, Dict

from petalburg.document.errors import EditFormatError

EDIT_TYPES = ('insert', 'delete', 'update')


@dataclass(frozen=True)
class SceneEdit:
    """A single path-addressed patch against a scene."""
    type: str
    path: str
    old_value: Any = None
    new_value: Any = None

    def to_message(self) -> Dict[str, Any]:
        message: Dict[str, Any] = {'type': self.type, 'path': self.path}
        if self.type in ('delete', 'update'):
            message['oldValue'] = copy.deepcopy(self.old_value)
        if self.type in ('insert', 'update'):
            message['newValue'] = copy.deepcopy(self.new_value)
        return message

    @classmethod
    def from_message(cls, message: Dict[str, Any]) -> 'SceneEdit':
        edit_type = message.get('type')
        if edit_type not in EDIT_TYPES:
            raise EditFormatError(f"Unknown edit type: {edit_type!r}")
        path = message.get('path')
        if not isinstance(path, str) or not path:
            raise EditFormatError(f"Edit path must be a non-empty string, got {path!r}")
        return cls(
            type=edit_type,
            path=path,
            old_value=copy.deepcopy(message.get('oldValue')),
            new_value=copy.deepcopy(message.get('newValue')),
        )


def insert_edit(path: str, new_value: Any) -> SceneEdit:
    return SceneEdit('insert', path, new_value=copy.deepcopy(new_value))


def delete_edit(path: str, old_value: Any) -> SceneEdit:
    return SceneEdit('delete', path, old_value=copy.deepcopy(old_value))


def update_edit(path: str, old_value: Any, new_value: Any) -> SceneEdit:
    return SceneEdit('update', path, old_value=copy.deepcopy(old_value),
                     new_value=copy.deepcopy(new_value))


def is_edit_message(message: Dict[str, Any]) -> bool:
    return message.get('type') in EDIT_TYPES
