import json

from petalburg.document import EditBridge, SceneDocument, create_channel_pair, update_edit
from petalburg.document.scene import encode_scene
from petalburg.edit.camera import Camera
from petalburg.edit.overlay import render_scene_svg
from petalburg.host import SceneEditorProvider
from petalburg.view import SceneView


def _record(channel):
    messages = []
    channel.on_message(messages.append)
    return messages


def test_ready_triggers_init_with_file_content(tmp_path):
    path = tmp_path / 'room.sc.json'
    path.write_bytes(encode_scene({'size': [20, 20], 'actors': []}))
    host, view_end = create_channel_pair()
    document = SceneDocument.open(path, EditBridge())
    SceneEditorProvider(document, host, editable=False)
    received = _record(view_end)

    view_end.send({'type': 'ready'})

    assert received[0]['type'] == 'init'
    body = received[0]['body']
    assert body['untitled'] is False
    assert body['editable'] is False
    assert body['fileName'] == str(path)
    assert json.loads(body['value']) == {'size': [20, 20], 'actors': []}
    assert body['edits'] == []


def test_untitled_init_is_always_editable():
    host, view_end = create_channel_pair()
    document = SceneDocument.open(None, EditBridge())
    SceneEditorProvider(document, host, editable=False)
    received = _record(view_end)

    view_end.send({'type': 'ready'})

    assert received[0]['body'] == {'untitled': True, 'editable': True, 'fileName': None, 'edits': []}


def test_view_applies_init_edits_on_top_of_content():
    host, view_end = create_channel_pair()
    view = SceneView(view_end)
    view.start()

    host.send({'type': 'init', 'body': {
        'untitled': False,
        'editable': True,
        'fileName': 'room.sc.json',
        'value': encode_scene({'size': [20, 20], 'actors': [{'id': 'a', 'type': 't', 'pos': [0, 0]}]}),
        'edits': [update_edit('actors.0.pos', [0, 0], [4, 4]).to_message()],
    }})

    assert view.can_edit
    assert view.scene['actors'][0]['pos'] == [4, 4]


def test_view_update_without_content_keeps_previous_bytes():
    host, view_end = create_channel_pair()
    view = SceneView(view_end)
    view.start()
    host.send({'type': 'init', 'body': {'untitled': True, 'editable': True, 'fileName': None, 'edits': []}})

    host.send({'type': 'update', 'body': {
        'fileName': None,
        'content': b'',
        'edits': [update_edit('size', [384, 216], [64, 64]).to_message()],
    }})

    assert view.scene['size'] == [64, 64]
    assert view.valid_file


def test_view_answers_get_file_data():
    host, view_end = create_channel_pair()
    view = SceneView(view_end)
    view.start()
    host.send({'type': 'init', 'body': {'untitled': True, 'editable': True, 'fileName': None, 'edits': []}})
    received = _record(host)

    host.send({'type': 'getFileData', 'requestId': 7, 'body': {}})

    assert received[-1]['type'] == 'response'
    assert received[-1]['requestId'] == 7
    assert json.loads(received[-1]['body'])['size'] == [384, 216]


def test_view_with_invalid_content_refuses_edits():
    host, view_end = create_channel_pair()
    view = SceneView(view_end)
    view.start()
    received = _record(host)
    host.send({'type': 'init', 'body': {
        'untitled': False, 'editable': True, 'fileName': 'x.sc.json', 'value': b'nope', 'edits': [],
    }})

    assert not view.valid_file
    assert view.scene is None
    assert not view.make_edit(update_edit('size', [1, 1], [2, 2]))
    assert received == []


def test_view_listeners_are_notified():
    host, view_end = create_channel_pair()
    view = SceneView(view_end)
    seen = []
    view.on_change(lambda v: seen.append(v.scene['size']))
    view.start()
    host.send({'type': 'init', 'body': {'untitled': True, 'editable': True, 'fileName': None, 'edits': []}})
    assert seen == [[384, 216]]


def test_provider_dispose_stops_handling_messages():
    host, view_end = create_channel_pair()
    document = SceneDocument.open(None, EditBridge())
    provider = SceneEditorProvider(document, host)
    received = _record(view_end)
    provider.dispose()

    view_end.send({'type': 'ready'})

    assert received == []
    assert not document.bridge.attached


def test_replayed_drag_edit_replaces_actor_entry(tmp_path):
    path = tmp_path / 'room.sc.json'
    path.write_bytes(encode_scene({'size': [100, 100], 'actors': [{'id': 'a', 'type': 't', 'pos': [10, 10]}]}))
    host, view_end = create_channel_pair()
    document = SceneDocument.open(path, EditBridge())
    SceneEditorProvider(document, host)
    view = SceneView(view_end)
    view.start()

    # The canvas moves the actor in the live scene, then commits the drag
    view.scene['actors'][0]['pos'] = [50, 50]
    view.commit_edit(update_edit('actors.0', [10, 10], [50, 50]))
    assert document.scene['actors'] == [[50, 50]]

    document.undo()
    assert view.scene['actors'][0]['pos'] == [10, 10]

    document.redo()
    assert view.scene['actors'] == [[50, 50]]
    assert render_scene_svg(view.scene, Camera(), 100, 100).count('<title>') == 0
