"""Run state machine: settle-waits, cancellation and consumption of run event streams."""

import asyncio
import time
from typing import TYPE_CHECKING, Callable, Optional

from ..config import ClientConfig
from ..entities.runs import STOPPING_STATUSES, TERMINAL_STATUSES, Run, RunStatus
from ..errors import RunCancelledError, RunTimeoutError, TransportError, UnexpectedStatusError
from ..structured_logging import get_logger, get_or_create_correlation_id
from .sse_decoder import RunEventStream

if TYPE_CHECKING:
    from ..services.runs import RunsService

logger = get_logger("RUN_PROCESSOR")


def resolve_status(run: Run) -> RunStatus:
    """Map a run's wire status onto ``RunStatus``, rejecting values outside the enumeration."""
    try:
        return RunStatus(run.status)
    except ValueError:
        raise UnexpectedStatusError(run.status, f"run {run.id}") from None


class RunProcessor:
    """Drives a run to its next stopping point.

    A run is settled when it is terminal or waiting on tool outputs. ``requires_action`` is
    handed back to the caller as is; it is never resolved here. Each run id must be driven
    by at most one settle-wait or stream at a time.
    """

    def __init__(
        self,
        runs: "RunsService",
        config: Optional[ClientConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.runs = runs
        self.config = config or ClientConfig()
        self._clock = clock

    async def _pause(self, delay: float, cancel_event: Optional[asyncio.Event]) -> bool:
        """Sleep between polls; returns True as soon as ``cancel_event`` is set."""
        if cancel_event is None:
            await asyncio.sleep(delay)
            return False
        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return False
        return True

    async def wait_until_settled(
        self,
        thread_id: str,
        run_id: str,
        poll_interval: Optional[float] = None,
        timeout: Optional[float] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Run:
        """Poll the run until it reaches a terminal status or ``requires_action``.

        The first poll is immediate. Polling errors propagate unchanged.

        Args:
            thread_id: Thread that owns the run
            run_id: Run to wait on
            poll_interval: Seconds between polls, defaults to ``config.run_poll_interval``
            timeout: Seconds before giving up, defaults to ``config.run_settle_timeout``
            cancel_event: When set, the wait stops promptly with ``RunCancelledError``

        Returns:
            The last polled snapshot

        Raises:
            RunTimeoutError: No stopping point was reached before the deadline
            RunCancelledError: ``cancel_event`` was set
            UnexpectedStatusError: The run reported a status outside the known enumeration
            ValueError: ``poll_interval`` or ``timeout`` is not positive
        """
        poll_interval = poll_interval if poll_interval is not None else self.config.run_poll_interval
        timeout = timeout if timeout is not None else self.config.run_settle_timeout
        if poll_interval <= 0 or timeout <= 0:
            raise ValueError(f"poll_interval and timeout must be positive, got {poll_interval} and {timeout}")
        correlation_id = get_or_create_correlation_id()
        deadline = self._clock() + timeout
        polls = 0
        last_status: Optional[str] = None

        logger.debug(
            "Waiting for run to settle",
            thread_id=thread_id,
            run_id=run_id,
            correlation_id=correlation_id,
            poll_interval=poll_interval,
            timeout=timeout,
        )

        while True:
            if cancel_event is not None and cancel_event.is_set():
                raise self._cancelled(thread_id, run_id, correlation_id, polls)

            run = await self.runs.get(thread_id, run_id)
            polls += 1
            status = resolve_status(run)
            if status != last_status:
                logger.debug(
                    "Run status observed",
                    thread_id=thread_id,
                    run_id=run_id,
                    correlation_id=correlation_id,
                    status=status.value,
                )
            last_status = status.value

            if status in STOPPING_STATUSES:
                logger.info(
                    "Run settled",
                    thread_id=thread_id,
                    run_id=run_id,
                    correlation_id=correlation_id,
                    status=status.value,
                    polls=polls,
                )
                return run

            remaining = deadline - self._clock()
            if remaining <= 0:
                raise self._timed_out(thread_id, run_id, timeout, last_status, correlation_id, polls)

            if await self._pause(min(poll_interval, remaining), cancel_event):
                raise self._cancelled(thread_id, run_id, correlation_id, polls)

            if self._clock() >= deadline:
                raise self._timed_out(thread_id, run_id, timeout, last_status, correlation_id, polls)

    def _timed_out(
        self, thread_id: str, run_id: str, timeout: float, last_status: Optional[str], correlation_id: str, polls: int
    ) -> RunTimeoutError:
        logger.warning(
            "Run did not settle before timeout",
            thread_id=thread_id,
            run_id=run_id,
            correlation_id=correlation_id,
            timeout=timeout,
            last_status=last_status,
            polls=polls,
        )
        return RunTimeoutError(thread_id, run_id, timeout, last_status)

    def _cancelled(self, thread_id: str, run_id: str, correlation_id: str, polls: int) -> RunCancelledError:
        logger.info(
            "Run wait cancelled", thread_id=thread_id, run_id=run_id, correlation_id=correlation_id, polls=polls
        )
        return RunCancelledError(thread_id, run_id)

    async def cancel_run(self, thread_id: str, run_id: str) -> Run:
        """Request cancellation of a run that has not finished yet.

        A run that is already terminal is returned as polled, without a cancel request.
        """
        correlation_id = get_or_create_correlation_id()
        run = await self.runs.get(thread_id, run_id)
        if resolve_status(run) in TERMINAL_STATUSES:
            logger.warning(
                "Run already in terminal state, not cancelling",
                thread_id=thread_id,
                run_id=run_id,
                correlation_id=correlation_id,
                status=run.status,
            )
            return run
        return await self.runs.cancel(thread_id, run_id)

    async def collect_run(self, stream: RunEventStream) -> Optional[Run]:
        """Consume a run event stream and return the last run snapshot it carried.

        The stream is closed on return. ``None`` means the stream ended without any
        ``thread.run.*`` event.

        Raises:
            TransportError: The stream ended with an error event
        """
        correlation_id = get_or_create_correlation_id()
        run: Optional[Run] = None
        async with stream:
            async for event in stream:
                if event.is_error:
                    logger.error(
                        "Run stream reported an error",
                        correlation_id=correlation_id,
                        run_id=run.id if run else None,
                        error=event.error,
                    )
                    raise TransportError(f"Run stream failed: {event.error}")
                if event.is_run_event:
                    run = event.as_run()
                    resolve_status(run)
        if run is not None:
            logger.info(
                "Run stream consumed",
                thread_id=run.thread_id,
                run_id=run.id,
                correlation_id=correlation_id,
                status=run.status,
            )
        return run
