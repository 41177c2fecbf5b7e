"""TCP broadcaster that mirrors adapter log lines to ``nc`` style clients."""

from __future__ import annotations

import asyncio
from collections import deque
from contextlib import suppress
from datetime import datetime
from typing import Deque, Set


class NetworkLogStreamer:
    """Fan out log lines to every connected TCP client.

    New clients first receive the last ``history`` lines. Lines published while
    the outgoing queue is full are counted in ``dropped`` and discarded.
    """

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 8765,
        *,
        history: int = 200,
        queue_size: int = 1024,
    ) -> None:
        self.host = host
        self.port = port
        self.dropped = 0
        self._backlog: Deque[str] = deque(maxlen=history)
        self._queue_size = queue_size
        self._queue: asyncio.Queue[str] | None = None
        self._server: asyncio.AbstractServer | None = None
        self._pump_task: asyncio.Task[None] | None = None
        self._clients: Set[asyncio.StreamWriter] = set()

    async def start(self) -> None:
        if self._server is not None:
            return
        self._queue = asyncio.Queue(maxsize=self._queue_size)
        self._server = await asyncio.start_server(self._serve, self.host, self.port)
        sockets = self._server.sockets or []
        if sockets:
            # port 0 asks the OS for a free port
            self.port = sockets[0].getsockname()[1]
        self._pump_task = asyncio.create_task(self._pump())

    async def stop(self) -> None:
        if self._pump_task:
            self._pump_task.cancel()
            with suppress(asyncio.CancelledError):
                await self._pump_task
            self._pump_task = None
        if self._server:
            self._server.close()
            await self._server.wait_closed()
            self._server = None
        for writer in list(self._clients):
            await self._disconnect(writer)
        self._queue = None

    def log(self, line: str) -> None:
        """Stamp ``line`` and queue it for every client."""

        stamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        entry = f"{stamp} | {line}\n"
        self._backlog.append(entry)
        if self._queue is None:
            return
        try:
            self._queue.put_nowait(entry)
        except asyncio.QueueFull:
            self.dropped += 1

    async def _pump(self) -> None:
        assert self._queue is not None
        while True:
            entry = await self._queue.get()
            payload = entry.encode("utf-8")
            for writer in list(self._clients):
                try:
                    writer.write(payload)
                    await writer.drain()
                except OSError:
                    await self._disconnect(writer)

    async def _serve(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        self._clients.add(writer)
        try:
            writer.write("".join(self._backlog).encode("utf-8"))
            await writer.drain()
            # Clients never send anything useful; wait for them to hang up.
            while await reader.read(1024):
                pass
        except OSError:
            pass
        finally:
            await self._disconnect(writer)

    async def _disconnect(self, writer: asyncio.StreamWriter) -> None:
        self._clients.discard(writer)
        writer.close()
        with suppress(OSError):
            await writer.wait_closed()


__all__ = ["NetworkLogStreamer"]
