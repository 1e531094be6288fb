"""asyncio stream transport reporting its lifecycle as events."""

from __future__ import annotations

import asyncio
import logging

from ..constants import IRC_READ_CHUNK_SIZE
from ..logs.logger import logger
from . import events as ev
from .protocols import EventEmitter


class StreamTransport:
    """Transport over ``asyncio.open_connection``.

    ``open`` returns immediately; a background task performs the connect
    (bounded by the timeout), then reads until EOF. Every outcome is
    reported through ``emit``: a timeout produces only ``TransportTimeout``,
    an ``OSError`` produces ``TransportError`` followed by ``TransportClosed``.
    """

    def __init__(self, read_chunk_size: int = IRC_READ_CHUNK_SIZE):
        self.read_chunk_size = read_chunk_size
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None
        self._task: asyncio.Task[None] | None = None
        self._emit: EventEmitter | None = None
        self._closed = False

    def open(self, host: str, port: int, timeout_ms: int, emit: EventEmitter) -> None:
        self._emit = emit
        logger.log_event("transport", "open", level=logging.DEBUG, host=host, port=port)
        self._task = asyncio.get_running_loop().create_task(
            self._run(host, port, timeout_ms / 1000)
        )

    async def _run(self, host: str, port: int, timeout: float) -> None:
        emit = self._emit
        assert emit is not None
        try:
            self.reader, self.writer = await asyncio.wait_for(
                asyncio.open_connection(host, port), timeout=timeout
            )
        except TimeoutError:
            emit(ev.TransportTimeout())
            return
        except OSError as e:
            emit(ev.TransportError(message=str(e) or type(e).__name__))
            emit(ev.TransportClosed(had_error=True))
            return

        emit(ev.TransportConnected())
        had_error = False
        try:
            while True:
                data = await self.reader.read(self.read_chunk_size)
                if not data:
                    emit(ev.TransportEnd())
                    break
                emit(ev.TransportData(data=data))
        except OSError as e:
            had_error = True
            emit(ev.TransportError(message=str(e) or type(e).__name__))
        finally:
            await self._close_writer()
        emit(ev.TransportClosed(had_error=had_error))

    def write(self, data: bytes) -> None:
        if self.writer is None or self._closed:
            logger.log_event("transport", "write_dropped", level=logging.DEBUG)
            return
        self.writer.write(data)

    def close(self) -> None:
        self._closed = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        if self.writer is not None:
            self.writer.close()

    async def _close_writer(self) -> None:
        if self.writer is None:
            return
        try:
            self.writer.close()
            await self.writer.wait_closed()
        except OSError as e:
            logger.log_event(
                "transport", "close_error", level=logging.DEBUG, error=str(e)
            )
        finally:
            self._closed = True
