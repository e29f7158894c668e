from petalburg.edit.camera import Camera
from petalburg.edit.overlay import HOVER_STROKE, SELECTED_STROKE, render_scene_svg


def test_no_scene_renders_nothing():
    assert render_scene_svg(None, Camera(), 100, 100) == ''


def test_camera_transform_wraps_the_scene():
    svg = render_scene_svg({'size': [72, 72], 'actors': []}, Camera(offset=(4, 8), scale=2), 960, 600)
    assert svg.startswith('<g transform="matrix(2 0 0 2 4 8)">')
    assert '<rect x="0" y="0" width="72" height="72"' in svg


def test_grid_is_clipped_to_scene():
    svg = render_scene_svg({'size': [72, 72], 'actors': []}, Camera(), 960, 600, tile_size=36)
    assert svg.count('<line') == 6
    assert 'vector-effect="non-scaling-stroke"' in svg


def test_actors_are_drawn_in_list_order_with_outlines():
    scene = {'size': [384, 216], 'actors': [
        {'id': 'a', 'type': '<b>', 'pos': [10, 10]},
        {'id': 'b', 'type': 't', 'pos': [40, 40]},
        {'id': 'c', 'type': 't'},
        [1, 2],
    ]}
    svg = render_scene_svg(scene, Camera(), 960, 600, hovered_id='b', selected_id='a')

    assert svg.index('x="10" y="10"') < svg.index('x="40" y="40"')
    assert '&lt;b&gt; a' in svg
    assert f'stroke="{SELECTED_STROKE}"' in svg
    assert f'stroke="{HOVER_STROKE}"' in svg
    assert svg.count('<title>') == 2
