"""
Game Assets browser for a Junebug workspace.

Lists the fixed assets/ folder (fonts, scenes, sprites, ...) as a tree for
ui.tree and notices files being added or removed. Watching is done by
polling from a ui.timer, the same way the rest of the app refreshes state.
Hidden entries (dot-files and dot-folders) are ignored everywhere.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

from petalburg.paths import SCENE_SUFFIX, get_assets_dir

logger = logging.getLogger(__name__)


def _visible(path: Path) -> bool:
    return not path.name.startswith('.')


class GameAssets:
    """Enumerates and watches <workspace>/assets."""

    def __init__(self, workspace: Union[str, Path]):
        self.root = get_assets_dir(workspace)
        self._snapshot: Optional[Set[str]] = None

    def folders(self) -> List[Path]:
        """Top-level asset folders (the tree roots)."""
        if not self.root.is_dir():
            return []
        return sorted(p for p in self.root.iterdir() if p.is_dir() and _visible(p))

    def children(self, path: Union[str, Path]) -> List[Path]:
        """Entries of a folder, folders first, each group sorted by name."""
        path = Path(path)
        if not path.is_dir():
            return []
        entries = [p for p in path.iterdir() if _visible(p)]
        return sorted(entries, key=lambda p: (not p.is_dir(), p.name.lower()))

    def _node(self, path: Path) -> Dict[str, Any]:
        node: Dict[str, Any] = {'id': str(path), 'label': path.name.capitalize() if path.is_dir() else path.name}
        if path.is_dir():
            node['children'] = [self._node(child) for child in self.children(path)]
        return node

    def tree(self) -> List[Dict[str, Any]]:
        """Nodes for ui.tree (id = absolute path, label = display name)."""
        return [self._node(folder) for folder in self.folders()]

    def _scan(self) -> Set[str]:
        if not self.root.is_dir():
            return set()
        files = set()
        for path in self.root.rglob('*'):
            relative = path.relative_to(self.root)
            if any(part.startswith('.') for part in relative.parts):
                continue
            files.add(str(relative))
        return files

    def poll(self) -> bool:
        """Return True when entries were added or removed since the last poll."""
        current = self._scan()
        previous = self._snapshot
        self._snapshot = current
        if previous is None or previous == current:
            return False
        logger.info(f"Assets changed: +{len(current - previous)} -{len(previous - current)}")
        return True

    def scene_files(self) -> List[Path]:
        """All scene files under the assets folder."""
        if not self.root.is_dir():
            return []
        return sorted(p for p in self.root.rglob(f'*{SCENE_SUFFIX}') if _visible(p))
