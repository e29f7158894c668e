"""
Junebug scene parsing, normalisation and serialisation.

A scene is kept as a plain JSON dict so the patcher can address it directly:

{
  "size": [384, 216],
  "actors": [{"id": "a1b2c3d4", "type": "player", "pos": [10, 10]}],
  "layers": [{"id": "bg", "depth": 0, "name": "Background"}],
  "gravity": [0, 9.8]
}

Actors: "type" is required (entries without it are dropped on load), "id" is
generated when missing; "pos", "layer", "sprite" and "scale" are optional.
"""

import json
import re
import uuid
from numbers import Real
from typing import Any, Dict, List, Set, Union

from petalburg.document.errors import SceneParseError

DEFAULT_SCENE_SIZE = [384, 216]

# Save-time cosmetic rule: keep the contents of a "tiles" array on one line.
# The current schema has no "tiles" key, so this normally matches nothing.
_TILES_ARRAY = re.compile(r'("tiles": \[)([^\]]+)')
_WHITESPACE = re.compile(r'\s+')


def default_scene() -> Dict[str, Any]:
    """Scene used for untitled documents."""
    return {'size': list(DEFAULT_SCENE_SIZE), 'actors': [], 'layers': []}


def generate_actor_id(taken: Set[str]) -> str:
    while True:
        actor_id = uuid.uuid4().hex[:8]
        if actor_id not in taken:
            return actor_id


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _is_pair(value: Any) -> bool:
    return isinstance(value, list) and len(value) == 2 and all(_is_number(v) for v in value)


def _validate(data: Any) -> None:
    if not isinstance(data, dict):
        raise SceneParseError("Scene must be a JSON object")

    size = data.get('size')
    if not _is_pair(size):
        raise SceneParseError("Scene 'size' must be a pair of numbers")
    if size[0] <= 0 or size[1] <= 0:
        raise SceneParseError(f"Scene 'size' must be strictly positive, got {size}")

    if 'actors' in data and not isinstance(data['actors'], list):
        raise SceneParseError("Scene 'actors' must be a list")

    layers = data.get('layers', [])
    if not isinstance(layers, list):
        raise SceneParseError("Scene 'layers' must be a list")
    for layer in layers:
        if not isinstance(layer, dict) or not isinstance(layer.get('id'), str):
            raise SceneParseError(f"Invalid layer entry: {layer!r}")

    if 'gravity' in data and not _is_pair(data['gravity']):
        raise SceneParseError("Scene 'gravity' must be a pair of numbers")


def normalize_scene(scene: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalise a validated scene in place.

    - actors/layers default to empty lists
    - actors without a type are dropped
    - actors without an id (or with a duplicate id) get a generated one
    """
    actors: List[Dict[str, Any]] = []
    taken: Set[str] = set()
    for actor in scene.get('actors') or []:
        if not isinstance(actor, dict) or not actor.get('type'):
            continue
        actor_id = actor.get('id')
        if not actor_id or actor_id in taken:
            actor['id'] = generate_actor_id(taken | _declared_ids(scene))
        taken.add(actor['id'])
        actors.append(actor)

    scene['actors'] = actors
    scene.setdefault('layers', [])
    return scene


def _declared_ids(scene: Dict[str, Any]) -> Set[str]:
    return {
        actor['id'] for actor in scene.get('actors') or []
        if isinstance(actor, dict) and isinstance(actor.get('id'), str)
    }


def parse_scene(data: Union[bytes, str]) -> Dict[str, Any]:
    """Decode, validate and normalise scene bytes. Raises SceneParseError."""
    if isinstance(data, bytes):
        try:
            text = data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise SceneParseError(f"Scene is not valid UTF-8: {e}") from e
    else:
        text = data

    try:
        scene = json.loads(text)
    except json.JSONDecodeError as e:
        raise SceneParseError(f"Scene is not valid JSON: {e}") from e

    _validate(scene)
    return normalize_scene(scene)


def serialize_scene(scene: Dict[str, Any]) -> str:
    """Pretty-print a scene the way it is written to disk."""
    text = json.dumps(scene, indent=2, ensure_ascii=False)
    return _TILES_ARRAY.sub(
        lambda m: m.group(1) + _WHITESPACE.sub(' ', m.group(2)),
        text,
    )


def encode_scene(scene: Dict[str, Any]) -> bytes:
    return serialize_scene(scene).encode('utf-8')
