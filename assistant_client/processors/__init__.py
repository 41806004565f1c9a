"""Run lifecycle engine: SSE decoding, settle-waits and tool output submission."""

from .run_processor import RunProcessor, resolve_status
from .sse_decoder import RunEventStream, SSEDecoder, decode_lines
from .tool_executor import ToolExecutor
from .tool_output_submitter import ToolOutputSubmitter

__all__ = [
    "RunEventStream",
    "RunProcessor",
    "SSEDecoder",
    "ToolExecutor",
    "ToolOutputSubmitter",
    "decode_lines",
    "resolve_status",
]
