"""Command line tool for inspecting and driving runs."""

import argparse
import asyncio
import contextlib
import signal
import sys
from typing import Optional, Sequence

from pydantic import BaseModel

from .client import AssistantsClient
from .config import ClientConfig
from .entities import CreateMessageRequest, CreateRunRequest, ListRunStepsParams
from .errors import AssistantClientError
from .structured_logging import CorrelationContext, LoggingContext, configure_structlog, get_logger

logger = get_logger("CLI")


def positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than zero, got {value}")
    return number


def _print_model(model: BaseModel) -> None:
    print(model.model_dump_json(indent=2, exclude_none=True))


async def _wait(client: AssistantsClient, args: argparse.Namespace) -> None:
    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    # add_signal_handler is unavailable on Windows event loops.
    with contextlib.suppress(NotImplementedError, RuntimeError):
        loop.add_signal_handler(signal.SIGINT, cancel_event.set)
    try:
        run = await client.wait_until_settled(
            args.thread_id, args.run_id, poll_interval=args.interval, timeout=args.timeout, cancel_event=cancel_event
        )
    finally:
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.remove_signal_handler(signal.SIGINT)
    _print_model(run)


async def _stream(client: AssistantsClient, args: argparse.Namespace) -> None:
    if args.message:
        await client.messages.create(args.thread_id, CreateMessageRequest(role="user", content=args.message))

    request = CreateRunRequest(assistant_id=args.assistant_id, instructions=args.instructions)
    async with await client.runs.create_stream(args.thread_id, request) as stream:
        async for event in stream:
            if event.is_done:
                print("done")
                break
            print(f"{event.event}: {event.data.decode('utf-8')}")
            if event.is_error:
                raise AssistantClientError(f"Run stream failed: {event.error}")


async def _cancel(client: AssistantsClient, args: argparse.Namespace) -> None:
    _print_model(await client.cancel_run(args.thread_id, args.run_id))


async def _steps(client: AssistantsClient, args: argparse.Namespace) -> None:
    params = ListRunStepsParams(limit=args.limit, include=args.include or None)
    steps = await client.run_steps.list(args.thread_id, args.run_id, params)
    for step in steps.data:
        print(f"{step.id}\t{step.type}\t{step.status}")


COMMANDS = {
    "wait": _wait,
    "stream": _stream,
    "cancel": _cancel,
    "steps": _steps,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="assistant-client", description="Inspect and drive assistant runs")
    parser.add_argument(
        "--base-url", type=str, default=None, help="API base URL (default: OPENAI_BASE_URL or the public API)"
    )
    parser.add_argument("--quiet", "-q", action="store_true", help="Only log errors")
    subparsers = parser.add_subparsers(dest="command", required=True)

    wait = subparsers.add_parser("wait", help="Poll a run until it completes or requires action")
    wait.add_argument("thread_id")
    wait.add_argument("run_id")
    wait.add_argument("--interval", type=positive_float, default=None, help="Seconds between polls")
    wait.add_argument("--timeout", type=positive_float, default=None, help="Seconds before giving up")

    stream = subparsers.add_parser("stream", help="Create a run and print its events as they arrive")
    stream.add_argument("thread_id")
    stream.add_argument("--assistant-id", required=True)
    stream.add_argument("--message", type=str, default=None, help="User message to add before the run")
    stream.add_argument("--instructions", type=str, default=None)

    cancel = subparsers.add_parser("cancel", help="Cancel a run unless it already finished")
    cancel.add_argument("thread_id")
    cancel.add_argument("run_id")

    steps = subparsers.add_parser("steps", help="List the steps of a run")
    steps.add_argument("thread_id")
    steps.add_argument("run_id")
    steps.add_argument("--limit", type=int, default=None)
    steps.add_argument("--include", action="append", default=[], help="Additional fields to include; repeatable")

    return parser


async def run_command(args: argparse.Namespace, config: ClientConfig) -> None:
    with CorrelationContext():
        async with AssistantsClient(config) as client:
            await COMMANDS[args.command](client, args)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    configure_structlog(LoggingContext(stream="stderr", logging_level="ERROR" if args.quiet else "INFO"))

    config = ClientConfig()
    if args.base_url:
        config = config.model_copy(update={"base_url": args.base_url.rstrip("/")})

    try:
        asyncio.run(run_command(args, config))
    except AssistantClientError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
