import json

import pytest

from petalburg.document.errors import SceneParseError
from petalburg.document.patcher import get_value
from petalburg.document.scene import (
    DEFAULT_SCENE_SIZE,
    default_scene,
    encode_scene,
    normalize_scene,
    parse_scene,
    serialize_scene,
)


def test_scene_without_actors_normalizes_to_empty_list():
    scene = parse_scene(b'{"size": [100, 100]}')
    assert scene['actors'] == []
    assert get_value(scene, 'actors') == []
    assert scene['layers'] == []


def test_actors_without_type_are_dropped():
    scene = parse_scene(json.dumps({
        'size': [10, 10],
        'actors': [{'id': 'a', 'pos': [0, 0]}, {'id': 'b', 'type': 'player'}, 'junk'],
    }))
    assert [a['id'] for a in scene['actors']] == ['b']


def test_missing_and_duplicate_ids_are_generated():
    scene = normalize_scene({
        'size': [10, 10],
        'actors': [
            {'type': 't'},
            {'id': 'x', 'type': 't'},
            {'id': 'x', 'type': 't'},
        ],
    })
    ids = [a['id'] for a in scene['actors']]
    assert ids[1] == 'x'
    assert len(set(ids)) == 3
    assert all(isinstance(i, str) and i for i in ids)


@pytest.mark.parametrize('data', [
    b'not json',
    b'[]',
    b'{}',
    b'{"size": [0, 10]}',
    b'{"size": [10]}',
    b'{"size": [10, 10], "actors": {}}',
    b'{"size": [10, 10], "layers": [{"name": "no id"}]}',
    b'{"size": [10, 10], "gravity": "down"}',
    b'\xff\xfe',
])
def test_parse_scene_rejects_invalid_data(data):
    with pytest.raises(SceneParseError):
        parse_scene(data)


def test_default_scene_is_fresh_each_call():
    first = default_scene()
    first['actors'].append({'id': 'a'})
    assert default_scene() == {'size': DEFAULT_SCENE_SIZE, 'actors': [], 'layers': []}


def test_serialize_is_two_space_json():
    scene = {'size': [10, 20], 'actors': []}
    text = serialize_scene(scene)
    assert text.startswith('{\n  "size": [\n    10,')
    assert json.loads(text) == scene


def test_serialize_collapses_tiles_arrays_only():
    text = serialize_scene({'size': [10, 20], 'tiles': [1, 2, 3]})
    assert '"tiles": [ 1, 2, 3 ]' in text
    assert '"size": [\n' in text


def test_encode_scene_keeps_unicode():
    data = encode_scene({'size': [1, 1], 'name': 'Pétalburg'})
    assert 'Pétalburg'.encode('utf-8') in data
    assert parse_scene(data)['name'] == 'Pétalburg'


def test_parse_serialize_round_trip():
    scene = parse_scene(json.dumps({
        'size': [384, 216],
        'actors': [
            {'id': 'a1', 'type': 'player', 'pos': [10, 20], 'layer': 'fg', 'scale': [1.5, 1.5]},
            {'id': 'b2', 'type': 'coin', 'pos': [-4, 0], 'sprite': 'coin.png'},
        ],
        'layers': [{'id': 'fg', 'depth': 1, 'name': 'Foreground'}],
        'gravity': [0, 9.8],
    }))

    assert parse_scene(serialize_scene(scene)) == scene
    assert parse_scene(encode_scene(scene)) == scene
