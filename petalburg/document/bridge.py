"""
Request/response bridge from the host to the active view.

The host sends {type, requestId, body} and the view answers with
{type: "response", requestId, body}. Each request id is pending on its own;
there is no ordering across ids and no timeout.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from petalburg.document.channel import Message, MessageChannel
from petalburg.document.errors import NoActiveViewError

logger = logging.getLogger(__name__)


class EditBridge:
    """Allocates request ids and resolves them when the view responds."""

    def __init__(self, channel: Optional[MessageChannel] = None):
        self._channel = channel
        self._request_id = 1
        self._callbacks: Dict[int, asyncio.Future] = {}

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    @property
    def attached(self) -> bool:
        return self._channel is not None

    def attach(self, channel: MessageChannel) -> None:
        self._channel = channel

    def detach(self) -> None:
        # In-flight requests are left pending; a late response is harmless.
        self._channel = None

    async def request(self, type: str, body: Any = None) -> Any:
        """Send a request to the view and wait for its response body."""
        if self._channel is None:
            raise NoActiveViewError()

        request_id = self._request_id
        self._request_id += 1
        future = asyncio.get_running_loop().create_future()
        self._callbacks[request_id] = future

        self._channel.send({
            'type': type,
            'requestId': request_id,
            'body': body if body is not None else {},
        })
        return await future

    def handle_response(self, message: Message) -> bool:
        """Resolve the pending request matching message['requestId']."""
        future = self._callbacks.pop(message.get('requestId'), None)
        if future is None:
            logger.debug(f"Ignoring unmatched response for request {message.get('requestId')!r}")
            return False
        if future.done():
            return False
        future.set_result(message.get('body'))
        return True
