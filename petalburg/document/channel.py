"""
Message channel between the host shell and the scene view.

Both sides only ever talk through a MessageChannel. Messages are plain dicts
with a "type" key. LocalChannel connects two ends inside one process:
messages are deep-copied (neither side can alias the other's data) and
delivered to handlers strictly in arrival order. A message sent from inside
a handler is queued behind the one being dispatched.
"""

import copy
import logging
from collections import deque
from typing import Any, Callable, Deque, Dict, List, Optional, Protocol, Tuple, runtime_checkable

logger = logging.getLogger(__name__)

Message = Dict[str, Any]
MessageHandler = Callable[[Message], None]


@runtime_checkable
class MessageChannel(Protocol):
    """Typed channel abstraction used by host and view."""

    def send(self, message: Message) -> None:
        """Send a message to the other end."""
        ...

    def on_message(self, handler: MessageHandler) -> Callable[[], None]:
        """Register a handler. Returns a callable that unsubscribes it."""
        ...


class LocalChannel:
    """One end of an in-process channel pair."""

    def __init__(self, name: str):
        self.name = name
        self._peer: Optional['LocalChannel'] = None
        self._handlers: List[MessageHandler] = []
        self._inbox: Deque[Message] = deque()
        self._dispatching = False
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def connect(self, peer: 'LocalChannel') -> None:
        self._peer = peer
        peer._peer = self

    def send(self, message: Message) -> None:
        peer = self._peer
        if self._closed or peer is None or peer._closed:
            logger.debug(f"[{self.name}] dropping {message.get('type')!r}: channel closed")
            return
        peer._deliver(copy.deepcopy(message))

    def on_message(self, handler: MessageHandler) -> Callable[[], None]:
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def close(self) -> None:
        self._closed = True
        self._handlers.clear()
        self._inbox.clear()

    def _deliver(self, message: Message) -> None:
        self._inbox.append(message)
        if self._dispatching:
            return

        self._dispatching = True
        try:
            while self._inbox:
                current = self._inbox.popleft()
                for handler in list(self._handlers):
                    try:
                        handler(current)
                    except Exception as e:
                        logger.error(f"[{self.name}] error handling {current.get('type')!r}: {e}")
        finally:
            self._dispatching = False


def create_channel_pair() -> Tuple[LocalChannel, LocalChannel]:
    """Return connected (host_end, view_end) channels."""
    host_end = LocalChannel('host')
    view_end = LocalChannel('view')
    host_end.connect(view_end)
    return host_end, view_end
