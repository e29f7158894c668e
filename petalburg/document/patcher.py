"""
Path patcher for nested dict/list structures.

Paths are dotted strings. A segment made of digits indexes a list when the
container is a list; on a dict every segment is a plain string key.

Policy:
- set_value (update) creates missing intermediate dicts, never list slots.
- remove_value / insert_value need every intermediate segment to resolve.
- Anything that cannot be resolved is a silent no-op; the structure is left
  untouched and nothing is raised. Callers that need to know whether a patch
  landed must check the state themselves.
- Out-of-range list indices: delete is a no-op, insert appends.
"""

import copy
from typing import Any, List, Optional, Tuple

from petalburg.document.edits import SceneEdit

_MISSING = object()


def split_path(path: str) -> List[str]:
    return path.split('.')


def _list_index(segment: str) -> Optional[int]:
    """Return the list index for a segment, or None if it is not one."""
    if segment.isdigit():
        return int(segment)
    return None


def _child(container: Any, segment: str) -> Any:
    if isinstance(container, dict):
        return container.get(segment, _MISSING)
    if isinstance(container, list):
        index = _list_index(segment)
        if index is not None and index < len(container):
            return container[index]
    return _MISSING


def _resolve_parent(root: Any, segments: List[str]) -> Tuple[Any, str]:
    """Walk every segment but the last. Returns (_MISSING, '') on failure."""
    node = root
    for segment in segments[:-1]:
        node = _child(node, segment)
        if node is _MISSING:
            return _MISSING, ''
    return node, segments[-1]


def get_value(root: Any, path: str, default: Any = None) -> Any:
    node = root
    for segment in split_path(path):
        node = _child(node, segment)
        if node is _MISSING:
            return default
    return node


def set_value(root: Any, path: str, value: Any) -> None:
    """Update/upsert: assign value at path, creating missing dict containers."""
    segments = split_path(path)
    node = root
    for segment in segments[:-1]:
        if isinstance(node, dict):
            if segment not in node:
                node[segment] = {}
            node = node[segment]
        elif isinstance(node, list):
            node = _child(node, segment)
            if node is _MISSING:
                return
        else:
            return

    key = segments[-1]
    if isinstance(node, dict):
        node[key] = value
    elif isinstance(node, list):
        index = _list_index(key)
        if index is not None and index < len(node):
            node[index] = value


def remove_value(root: Any, path: str) -> None:
    parent, key = _resolve_parent(root, split_path(path))
    if isinstance(parent, list):
        index = _list_index(key)
        if index is not None and index < len(parent):
            del parent[index]
    elif isinstance(parent, dict):
        parent.pop(key, None)


def insert_value(root: Any, path: str, value: Any) -> None:
    parent, key = _resolve_parent(root, split_path(path))
    if isinstance(parent, list):
        index = _list_index(key)
        if index is not None:
            parent.insert(index, value)
    elif isinstance(parent, dict):
        parent[key] = value


def apply_edit(scene: Any, edit: SceneEdit) -> Any:
    """Apply one edit in place and return the scene."""
    if edit.type == 'insert':
        insert_value(scene, edit.path, copy.deepcopy(edit.new_value))
    elif edit.type == 'delete':
        remove_value(scene, edit.path)
    elif edit.type == 'update':
        set_value(scene, edit.path, copy.deepcopy(edit.new_value))
    return scene
