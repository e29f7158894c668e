"""
Scene View - the editor side of the host/view protocol.

Owns the live scene. The host replaces it wholesale on 'init'/'update'
(content bytes plus edits to replay) and reads it back through 'getFileData'.
Edits made in the view are applied to the live scene and sent to the host,
which records them in the document's edit log.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from petalburg.document.channel import Message, MessageChannel
from petalburg.document.edits import SceneEdit
from petalburg.document.errors import EditFormatError, SceneParseError
from petalburg.document.patcher import apply_edit
from petalburg.document.scene import encode_scene, default_scene, parse_scene, serialize_scene

logger = logging.getLogger(__name__)


class SceneView:
    """Live scene state for one editor panel."""

    def __init__(self, channel: MessageChannel):
        self._channel = channel
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._listeners: List[Callable[['SceneView'], None]] = []
        self.editable = False
        self.file_name: Optional[str] = None
        self.scene: Optional[Dict[str, Any]] = None
        self.valid_file = True
        self.content: bytes = b''

    @property
    def can_edit(self) -> bool:
        return self.editable and self.valid_file and self.scene is not None

    def start(self) -> None:
        """Subscribe to host messages and signal that the view is ready."""
        if self._unsubscribe is None:
            self._unsubscribe = self._channel.on_message(self._on_message)
        self._channel.send({'type': 'ready'})

    def dispose(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._listeners.clear()

    def on_change(self, callback: Callable[['SceneView'], None]) -> None:
        """Called whenever the scene is replaced or edited."""
        self._listeners.append(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            try:
                callback(self)
            except Exception as e:
                logger.error(f"Error in scene view listener: {e}")

    # --- Host messages ---

    def _on_message(self, message: Message) -> None:
        msg_type = message.get('type')
        body = message.get('body') or {}

        if msg_type == 'init':
            self.editable = bool(body.get('editable'))
            self.file_name = body.get('fileName')
            if body.get('untitled'):
                self._reset(encode_scene(default_scene()), body.get('edits'))
            else:
                self._reset(body.get('value'), body.get('edits'))
        elif msg_type == 'update':
            self.file_name = body.get('fileName')
            self._reset(body.get('content'), body.get('edits'))
        elif msg_type == 'getFileData':
            self._channel.send({
                'type': 'response',
                'requestId': message.get('requestId'),
                'body': self.serialize(),
            })
        else:
            logger.debug(f"View ignoring message type {msg_type!r}")

    def _reset(self, data: Optional[bytes], edits: Optional[List[Dict[str, Any]]] = None) -> None:
        if data:
            self.content = data

        try:
            scene = parse_scene(self.content)
            for message in edits or []:
                apply_edit(scene, self._as_edit(message))
            self.scene = scene
            self.valid_file = True
        except (SceneParseError, EditFormatError) as e:
            logger.error(f"Error parsing scene {self.file_name}: {e}")
            self.scene = None
            self.valid_file = False
        self._notify()

    @staticmethod
    def _as_edit(edit: Any) -> SceneEdit:
        if isinstance(edit, SceneEdit):
            return edit
        return SceneEdit.from_message(edit)

    # --- Editing ---

    def serialize(self) -> str:
        if self.scene is None:
            return ''
        return serialize_scene(self.scene)

    def make_edit(self, edit: SceneEdit) -> bool:
        """Apply an edit to the live scene and send it to the host."""
        if not self.can_edit:
            return False
        apply_edit(self.scene, edit)
        self._channel.send(edit.to_message())
        self._notify()
        return True

    def commit_edit(self, edit: SceneEdit) -> None:
        """Send an edit whose effect is already in the live scene."""
        if not self.can_edit:
            return
        self._channel.send(edit.to_message())
        self._notify()
