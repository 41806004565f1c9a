"""Server-Sent Events decoding for streamed runs.

A ``RunEventStream`` runs one producer task that reads the response line by line and
hands each decoded ``StreamEvent`` to the consumer through a one-slot queue. The
producer closes the response when it exits, whether it stopped on the ``[DONE]``
sentinel, at end of stream, on a read error, or because the consumer closed the stream.
"""

import asyncio
import contextlib
import json
import time
from typing import Any, AsyncIterator, Optional

import httpx

from ..entities.events import DONE_EVENT, DONE_SENTINEL, ERROR_EVENT, SSE_DATA_PREFIX, SSE_EVENT_PREFIX, StreamEvent
from ..structured_logging import get_logger

logger = get_logger("SSE_DECODER")

_END = object()


def _strip_field(line: str, prefix: str) -> str:
    value = line[len(prefix) :]
    return value[1:] if value.startswith(" ") else value


class SSEDecoder:
    """Line-level SSE state machine.

    The current event name is sticky: a data line without a preceding ``event:`` line in
    its frame is attributed to the most recent explicit event name in the stream.
    """

    def __init__(self) -> None:
        self.current_event = ""

    def decode_line(self, line: str) -> Optional[StreamEvent]:
        line = line.strip()
        if not line:
            return None

        if line.startswith(SSE_EVENT_PREFIX):
            self.current_event = _strip_field(line, SSE_EVENT_PREFIX)
            return None

        if line.startswith(SSE_DATA_PREFIX):
            payload = _strip_field(line, SSE_DATA_PREFIX)
            if payload == DONE_SENTINEL:
                return StreamEvent(event=DONE_EVENT)
            return StreamEvent(event=self.current_event, data=payload.encode("utf-8"))

        # id:, retry:, comments and unknown fields
        return None


async def decode_lines(lines: AsyncIterator[str]) -> AsyncIterator[StreamEvent]:
    """Decode an async line iterator into stream events, stopping after the done event."""
    decoder = SSEDecoder()
    async for line in lines:
        event = decoder.decode_line(line)
        if event is None:
            continue
        yield event
        if event.is_done:
            return


def error_event(err: BaseException) -> StreamEvent:
    description = str(err) or type(err).__name__
    return StreamEvent(
        event=ERROR_EVENT,
        data=json.dumps({"error": description}).encode("utf-8"),
        error=description,
    )


class RunEventStream:
    """Async iterator over the events of one streamed run.

    Use it as an async context manager, or call ``aclose`` when abandoning it early, so
    the producer task is cancelled and the connection released. Breaking out of
    ``async for`` alone does not stop the producer: it stays blocked on the queue with
    the connection open until ``aclose`` is called. The running producer keeps the
    stream referenced, so garbage collection will not close it either.

    Usage:
        async with await client.runs.create_stream(thread_id, request) as stream:
            async for event in stream:
                ...
    """

    def __init__(self, response: httpx.Response, **log_context: Any):
        self._response = response
        self._log_context = log_context
        self._queue: asyncio.Queue[Any] = asyncio.Queue(maxsize=1)
        self._task: Optional[asyncio.Task[None]] = None
        self._finished = False
        self._response_closed = False

    async def _close_response(self) -> None:
        if self._response_closed:
            return
        self._response_closed = True
        try:
            await self._response.aclose()
        except httpx.HTTPError as err:
            logger.warning("Failed to close event stream", error=str(err), **self._log_context)

    async def _produce(self) -> None:
        start_time = time.monotonic()
        event_count = 0
        try:
            async for event in decode_lines(self._response.aiter_lines()):
                event_count += 1
                await self._queue.put(event)
        except Exception as err:  # noqa: BLE001
            logger.error(
                "Error while reading event stream",
                error_type=type(err).__name__,
                error=str(err),
                event_count=event_count,
                **self._log_context,
            )
            await self._queue.put(error_event(err))
        finally:
            await self._close_response()
            logger.debug(
                "Event stream closed",
                event_count=event_count,
                duration=round(time.monotonic() - start_time, 3),
                **self._log_context,
            )
        await self._queue.put(_END)

    def __aiter__(self) -> "RunEventStream":
        return self

    async def __anext__(self) -> StreamEvent:
        if self._finished:
            raise StopAsyncIteration
        if self._task is None:
            self._task = asyncio.create_task(self._produce())

        item = await self._queue.get()
        if item is _END:
            self._finished = True
            raise StopAsyncIteration
        return item

    async def aclose(self) -> None:
        """Stop consuming; cancels the producer and releases the connection. Idempotent."""
        self._finished = True
        if self._task is None:
            await self._close_response()
            return
        if not self._task.done():
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
        # A producer cancelled before its first step never reaches its finally block.
        await self._close_response()

    async def __aenter__(self) -> "RunEventStream":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()
