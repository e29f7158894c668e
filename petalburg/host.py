"""
Scene Editor Provider - the host side of the host/view protocol.

Connects one SceneDocument to one view channel:
- view 'ready'                  -> host sends 'init'
- view 'insert'/'delete'/'update' -> document.apply_edit
- view 'response'               -> resolves the pending EditBridge request
- document 'content_change'     -> host sends 'update' (undo/redo/revert)

All host-bound messages go through the single _on_message dispatcher and
are handled in arrival order.
"""

import logging
from typing import Any, Callable, Dict, Optional

from petalburg.document.channel import Message, MessageChannel
from petalburg.document.document import SceneDocument
from petalburg.document.edits import SceneEdit, is_edit_message
from petalburg.document.errors import EditFormatError, InvalidDocumentError

logger = logging.getLogger(__name__)


class SceneEditorProvider:
    """Host-side controller for one open scene document."""

    def __init__(self, document: SceneDocument, channel: MessageChannel, editable: bool = True):
        self.document = document
        self.editable = editable
        self._channel = channel
        self._unsubscribe: Optional[Callable[[], None]] = channel.on_message(self._on_message)
        document.bridge.attach(channel)
        document.on('content_change', self._on_content_change)

    def dispose(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.document.off('content_change', self._on_content_change)
        self.document.bridge.detach()

    def _post(self, msg_type: str, body: Dict[str, Any]) -> None:
        self._channel.send({'type': msg_type, 'body': body})

    def _edit_messages(self):
        return [edit.to_message() for edit in self.document.pending_edits]

    def _on_message(self, message: Message) -> None:
        msg_type = message.get('type')

        if msg_type == 'ready':
            self._send_init()
        elif msg_type == 'response':
            self.document.bridge.handle_response(message)
        elif is_edit_message(message):
            try:
                self.document.apply_edit(SceneEdit.from_message(message))
            except (EditFormatError, InvalidDocumentError) as e:
                logger.warning(f"Rejected edit from view: {e}")
        else:
            logger.debug(f"Host ignoring message type {msg_type!r}")

    def _send_init(self) -> None:
        document = self.document
        if document.untitled:
            self._post('init', {
                'untitled': True,
                'editable': True,
                'fileName': None,
                'edits': self._edit_messages(),
            })
        else:
            self._post('init', {
                'untitled': False,
                'editable': self.editable,
                'fileName': document.file_name,
                'value': document.content,
                'edits': self._edit_messages(),
            })

    def _on_content_change(self, change: Dict[str, Any]) -> None:
        content = change.get('content')
        self._post('update', {
            'fileName': self.document.file_name,
            'content': content if content is not None else self.document.content,
            'edits': [edit.to_message() for edit in change.get('edits', [])],
        })
