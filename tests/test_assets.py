from petalburg.assets import GameAssets


def _workspace(tmp_path):
    assets = tmp_path / 'assets'
    for folder in ('fonts', 'scenes', 'sprites', '.cache'):
        (assets / folder).mkdir(parents=True)
    (assets / 'sprites' / 'hero.png').write_bytes(b'png')
    (assets / 'sprites' / 'enemies').mkdir()
    (assets / 'scenes' / 'intro.sc.json').write_text('{"size": [1, 1]}', encoding='utf-8')
    (assets / 'scenes' / '.draft.sc.json').write_text('{}', encoding='utf-8')
    return tmp_path


def test_root_lists_visible_asset_folders(tmp_path):
    assets = GameAssets(_workspace(tmp_path))
    assert [p.name for p in assets.folders()] == ['fonts', 'scenes', 'sprites']


def test_children_list_folders_first(tmp_path):
    workspace = _workspace(tmp_path)
    assets = GameAssets(workspace)
    children = assets.children(workspace / 'assets' / 'sprites')
    assert [p.name for p in children] == ['enemies', 'hero.png']


def test_tree_nodes_use_paths_as_ids(tmp_path):
    workspace = _workspace(tmp_path)
    tree = GameAssets(workspace).tree()
    sprites = tree[2]
    assert sprites['label'] == 'Sprites'
    assert sprites['id'] == str(workspace / 'assets' / 'sprites')
    assert [c['label'] for c in sprites['children']] == ['Enemies', 'hero.png']
    assert 'children' not in sprites['children'][1]


def test_poll_reports_added_and_removed_files(tmp_path):
    workspace = _workspace(tmp_path)
    assets = GameAssets(workspace)
    assert not assets.poll()
    assert not assets.poll()

    new_file = workspace / 'assets' / 'fonts' / 'pixel.ttf'
    new_file.write_bytes(b'ttf')
    assert assets.poll()
    assert not assets.poll()

    new_file.unlink()
    assert assets.poll()


def test_hidden_changes_are_ignored(tmp_path):
    workspace = _workspace(tmp_path)
    assets = GameAssets(workspace)
    assets.poll()
    (workspace / 'assets' / '.cache' / 'thumb.bin').write_bytes(b'')
    assert not assets.poll()


def test_scene_files_skip_hidden(tmp_path):
    workspace = _workspace(tmp_path)
    assert [p.name for p in GameAssets(workspace).scene_files()] == ['intro.sc.json']


def test_missing_assets_folder_is_empty(tmp_path):
    assets = GameAssets(tmp_path)
    assert assets.tree() == []
    assert not assets.poll()
    assert assets.scene_files() == []
