import os
from unittest.mock import patch

import pytest

from petalburg.paths import find_backup, get_backup_path


@pytest.fixture
def backup_dir(tmp_path):
    directory = tmp_path / 'backups'
    directory.mkdir()
    with patch('petalburg.paths.get_backup_dir', return_value=directory):
        yield directory


def test_backup_path_strips_scene_suffix(backup_dir):
    assert get_backup_path('/games/demo/intro.sc.json') == backup_dir / 'intro.backup.sc.json'
    assert get_backup_path(None) == backup_dir / 'Untitled.backup.sc.json'


def test_no_backup_to_restore(backup_dir, tmp_path):
    scene = tmp_path / 'intro.sc.json'
    scene.write_text('{}', encoding='utf-8')
    assert find_backup(scene) is None


def test_newer_backup_is_restored(backup_dir, tmp_path):
    scene = tmp_path / 'intro.sc.json'
    scene.write_text('{}', encoding='utf-8')
    backup = backup_dir / 'intro.backup.sc.json'
    backup.write_text('{}', encoding='utf-8')
    os.utime(scene, (1000, 1000))
    os.utime(backup, (2000, 2000))

    assert find_backup(scene) == backup


def test_stale_backup_is_ignored(backup_dir, tmp_path):
    scene = tmp_path / 'intro.sc.json'
    scene.write_text('{}', encoding='utf-8')
    backup = backup_dir / 'intro.backup.sc.json'
    backup.write_text('{}', encoding='utf-8')
    os.utime(backup, (1000, 1000))
    os.utime(scene, (2000, 2000))

    assert find_backup(scene) is None


def test_untitled_backup_is_restored(backup_dir):
    backup = backup_dir / 'Untitled.backup.sc.json'
    backup.write_text('{}', encoding='utf-8')
    assert find_backup(None) == backup
