"""
SceneDocument - host-side data model for one scene file.

The document owns:
- the authoritative bytes of the file (content)
- the logical scene rebuilt from those bytes plus pending edits
- the append-only edit log with its saved snapshot

Undo/redo replace the edit log and notify listeners with the remaining edits;
the view re-derives its scene from content + edits (no inverse patches).
Saving pulls the live serialization from the attached view via EditBridge.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from petalburg.document.bridge import EditBridge
from petalburg.document.edits import SceneEdit
from petalburg.document.errors import DocumentSaveError, InvalidDocumentError, SceneParseError
from petalburg.document.patcher import apply_edit
from petalburg.document.scene import default_scene, parse_scene

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class EditLog:
    """Ordered edit history plus the snapshot taken at the last save."""

    def __init__(self, edits: Optional[List[SceneEdit]] = None):
        self.edits: List[SceneEdit] = list(edits or [])
        self._saved: List[SceneEdit] = list(self.edits)

    def __len__(self) -> int:
        return len(self.edits)

    @property
    def saved_cursor(self) -> int:
        return len(self._saved)

    @property
    def saved_edits(self) -> List[SceneEdit]:
        return list(self._saved)

    @property
    def is_dirty(self) -> bool:
        return self.edits != self._saved

    def append(self, edit: SceneEdit) -> None:
        self.edits.append(edit)

    def pop(self) -> Optional[SceneEdit]:
        return self.edits.pop() if self.edits else None

    def mark_saved(self) -> None:
        self._saved = list(self.edits)

    def reset_to_saved(self) -> None:
        self.edits = list(self._saved)


class SceneDocument:
    """
    Data model for a scene file opened in the editor.

    Events (register with on/off):
    - 'change': an edit was made, payload {'label', 'edit'}
    - 'content_change': the view must rebuild, payload {'content', 'edits'}
    - 'save': the document was written to its own location
    - 'dispose': the document is going away
    """

    def __init__(self, path: Optional[PathLike], content: bytes, bridge: EditBridge):
        self._path = Path(path) if path else None
        self._bridge = bridge
        self.edit_log = EditLog()
        self._redo_stack: List[SceneEdit] = []
        # (content, number of log edits already baked into that content)
        self._baselines: List[Tuple[bytes, int]] = [(content, 0)]
        self._scene: Optional[Dict[str, Any]] = None
        self._callbacks: Dict[str, List[Callable]] = {
            'change': [],
            'content_change': [],
            'save': [],
            'dispose': [],
        }

    @classmethod
    def open(cls, path: Optional[PathLike], bridge: EditBridge,
             backup_path: Optional[PathLike] = None) -> 'SceneDocument':
        """
        Open a document, reading from backup_path when restoring a hot exit.

        A file that fails to parse still opens; the document is Invalid.
        """
        source = Path(backup_path) if backup_path else (Path(path) if path else None)
        content = cls._read_file(source) if source else b''
        document = cls(path, content, bridge)
        try:
            document.load(content)
        except SceneParseError as e:
            logger.warning(f"Opened invalid scene {path}: {e}")
        return document

    @staticmethod
    def _read_file(path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise DocumentSaveError(f"Failed to read {path}: {e}", operation='read', path=str(path)) from e

    # --- Properties ---

    @property
    def path(self) -> Optional[Path]:
        return self._path

    @property
    def untitled(self) -> bool:
        return self._path is None

    @property
    def file_name(self) -> Optional[str]:
        return str(self._path) if self._path else None

    @property
    def bridge(self) -> EditBridge:
        return self._bridge

    @property
    def content(self) -> bytes:
        return self._baseline()[0]

    @property
    def scene(self) -> Optional[Dict[str, Any]]:
        return self._scene

    @property
    def is_valid(self) -> bool:
        return self._scene is not None

    @property
    def saved_cursor(self) -> int:
        return self.edit_log.saved_cursor

    @property
    def is_dirty(self) -> bool:
        return self.edit_log.is_dirty

    @property
    def pending_edits(self) -> List[SceneEdit]:
        """Edits the view must replay on top of content."""
        return self.edit_log.edits[self._baseline()[1]:]

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    # --- Events ---

    def on(self, event: str, callback: Callable) -> None:
        if event in self._callbacks:
            self._callbacks[event].append(callback)

    def off(self, event: str, callback: Callable) -> None:
        if event in self._callbacks and callback in self._callbacks[event]:
            self._callbacks[event].remove(callback)

    def _emit(self, event: str, data: Any = None) -> None:
        for callback in list(self._callbacks.get(event, [])):
            try:
                callback(data)
            except Exception as e:
                logger.error(f"Error in callback for {event}: {e}")

    # --- Loading ---

    def _baseline(self) -> Tuple[bytes, int]:
        """Latest content snapshot that is still a prefix of the log."""
        length = len(self.edit_log)
        for content, baked in reversed(self._baselines):
            if baked <= length:
                return content, baked
        return self._baselines[0]

    def _prune_baselines(self) -> None:
        length = len(self.edit_log)
        self._baselines = [b for b in self._baselines if b[1] <= length]

    def load(self, content: bytes) -> Dict[str, Any]:
        """
        Make content the authoritative bytes and parse it.

        Edits already in the log are treated as baked into content. On
        failure the document becomes Invalid (scene is None) and the
        SceneParseError propagates. Untitled documents start from the
        default scene.
        """
        self._baselines = [(content, len(self.edit_log))]
        return self._load_scene()

    def _load_scene(self) -> Dict[str, Any]:
        content = self.content
        if self.untitled and not content:
            scene = default_scene()
        else:
            try:
                scene = parse_scene(content)
            except SceneParseError:
                self._scene = None
                raise

        for edit in self.pending_edits:
            apply_edit(scene, edit)
        self._scene = scene
        return scene

    def _rebuild(self) -> None:
        try:
            self._load_scene()
        except SceneParseError as e:
            logger.warning(f"Scene {self.file_name} is invalid after rebuild: {e}")

    # --- Editing ---

    def apply_edit(self, edit: SceneEdit) -> None:
        """Apply an edit made in the view and record it in the log."""
        if self._scene is None:
            raise InvalidDocumentError()

        apply_edit(self._scene, edit)
        self._prune_baselines()
        self.edit_log.append(edit)
        self._redo_stack.clear()
        self._emit('change', {'label': 'Edit', 'edit': edit})

    def undo(self) -> Optional[SceneEdit]:
        if len(self.edit_log) <= self._baselines[0][1]:
            return None
        edit = self.edit_log.pop()
        self._redo_stack.append(edit)
        self._rebuild()
        self._notify_content()
        return edit

    def redo(self, edit: Optional[SceneEdit] = None) -> Optional[SceneEdit]:
        if edit is None:
            if not self._redo_stack:
                return None
            edit = self._redo_stack.pop()
        self._prune_baselines()
        self.edit_log.append(edit)
        self._rebuild()
        self._notify_content()
        return edit

    def _notify_content(self, content: Optional[bytes] = None) -> None:
        self._emit('content_change', {'content': content, 'edits': list(self.pending_edits)})

    # --- Persistence ---

    def _is_own_path(self, target: Path) -> bool:
        if self._path is None:
            return False
        return target.resolve() == self._path.resolve()

    async def _live_file_data(self, operation: str, target: Path) -> bytes:
        """Fetch the view's serialization. Never returns empty bytes."""
        if not self.is_valid:
            raise DocumentSaveError(f"Refusing to write {target}: document is not a valid scene",
                                    operation=operation, path=str(target))
        body = await self._bridge.request('getFileData')
        data = body if isinstance(body, bytes) else (body or '').encode('utf-8')
        if not data:
            raise DocumentSaveError(f"Refusing to write {target}: the view returned no data",
                                    operation=operation, path=str(target))
        return data

    async def save(self) -> None:
        if self._path is None:
            raise DocumentSaveError("Untitled documents must be saved with save_as", operation='save')
        await self.save_as(self._path)

    async def save_as(self, target: PathLike) -> None:
        """
        Write the view's live serialization to target.

        Only a write to the document's own location advances the saved
        cursor. A failed write leaves the log untouched.
        """
        target = Path(target)
        data = await self._live_file_data('save', target)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise DocumentSaveError(f"Failed to write {target}: {e}", operation='save', path=str(target)) from e

        logger.info(f"Saved scene to {target}")
        if self._is_own_path(target):
            self._baselines.append((data, len(self.edit_log)))
            self.edit_log.mark_saved()
            self._emit('save', {'path': str(target)})

    def revert(self) -> None:
        """Re-read the file and drop every edit made since the last save."""
        if self._path is None:
            content = b''
        else:
            content = self._read_file(self._path)

        self.edit_log.reset_to_saved()
        self._redo_stack.clear()
        self._baselines = [(content, len(self.edit_log))]
        self._rebuild()
        self._notify_content(content)

    async def backup(self, destination: PathLike) -> Callable[[], None]:
        """Write the live serialization to destination; returns its disposer."""
        destination = Path(destination)
        data = await self._live_file_data('backup', destination)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_bytes(data)
        except OSError as e:
            raise DocumentSaveError(f"Failed to write backup {destination}: {e}",
                                    operation='backup', path=str(destination)) from e

        def dispose() -> None:
            try:
                destination.unlink()
            except OSError as e:
                logger.debug(f"Ignoring backup cleanup failure for {destination}: {e}")

        return dispose

    def dispose(self) -> None:
        self._emit('dispose')
        for callbacks in self._callbacks.values():
            callbacks.clear()
