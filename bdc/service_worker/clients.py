"""Client contexts (open windows) and the registry the worker publishes to."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from bdc.models.shared import generate_uuid

logger = logging.getLogger(__name__)


class Client(ABC):
    """A window controlled (or about to be controlled) by the worker."""

    def __init__(self, url: str):
        self.id = str(generate_uuid())
        self.url = url
        self.controlled = False

    @abstractmethod
    async def post_message(self, message: dict[str, Any]) -> None:
        ...  # pragma: no cover

    @abstractmethod
    async def focus(self) -> Client:
        ...  # pragma: no cover


class WindowClient(Client):
    """In-process window that records what it receives."""

    def __init__(self, url: str):
        super().__init__(url)
        self.messages: list[dict[str, Any]] = []
        self.focused = False

    async def post_message(self, message: dict[str, Any]) -> None:
        self.messages.append(message)

    async def focus(self) -> Client:
        self.focused = True
        return self


class ClientRegistry:
    """Subscriber registry of client contexts.

    The set is enumerated fresh on every call; nothing is cached between
    events because windows open and close at any time.
    """

    def __init__(self, window_factory: Callable[[str], Client] = WindowClient):
        self._window_factory = window_factory
        self._clients: dict[str, Client] = {}
        self._claimed = False

    def register(self, client: Client) -> Client:
        # Pages loaded after the worker claimed are controlled from the start
        client.controlled = client.controlled or self._claimed
        self._clients[client.id] = client
        return client

    def unregister(self, client: Client) -> None:
        self._clients.pop(client.id, None)

    def match_all(self, include_uncontrolled: bool = False) -> list[Client]:
        return [
            c for c in self._clients.values() if include_uncontrolled or c.controlled
        ]

    async def claim(self) -> int:
        """Take control of every registered client."""
        self._claimed = True
        for client in self._clients.values():
            client.controlled = True
        return len(self._clients)

    async def broadcast(self, message: dict[str, Any]) -> int:
        """Post *message* to every controlled client.

        Clients are messaged concurrently; one failing client does not stop
        the others. Returns the number of clients that accepted the message.
        """
        clients = self.match_all()
        if not clients:
            return 0
        results = await asyncio.gather(
            *(client.post_message(message) for client in clients),
            return_exceptions=True,
        )
        delivered = 0
        for client, result in zip(clients, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning(
                    "Failed to post %s to client %s: %s", message.get("type"), client.id, result
                )
            else:
                delivered += 1
        return delivered

    async def open_window(self, url: str) -> Client:
        client = self._window_factory(url)
        client.controlled = True
        self.register(client)
        return await client.focus()
