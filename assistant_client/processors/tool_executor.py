"""Local execution of function tool calls, producing the outputs a run is waiting on."""

import inspect
import json
from typing import Any, Callable, Optional

from ..entities.runs import TOOL_TYPE_FUNCTION, Run, ToolCall
from ..structured_logging import get_logger, get_or_create_correlation_id

logger = get_logger("TOOL_EXECUTOR")


def _to_output(result: Any) -> str:
    if isinstance(result, str):
        return result
    return json.dumps(result, default=str)


class ToolExecutor:
    """Maps function tool calls onto local callables.

    Failures are reported to the model as ``Error: ...`` output strings rather than raised,
    so a run always receives an answer for every tool call.
    """

    def __init__(self, tool_map: Optional[dict[str, Callable[..., Any]]] = None):
        self.tool_map = tool_map or {}

    def validate_function_args(self, func: Callable[..., Any], args: dict[str, Any], name: str) -> None:
        """Validate function arguments against the function signature."""
        sig = inspect.signature(func)

        required_params = {
            param.name
            for param in sig.parameters.values()
            if param.default is inspect.Parameter.empty
            and param.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        }
        missing_params = required_params - set(args.keys())
        if missing_params:
            missing_str = ", ".join(sorted(missing_params))
            raise TypeError(f"Missing required arguments: {missing_str}")

        accepts_kwargs = any(param.kind is inspect.Parameter.VAR_KEYWORD for param in sig.parameters.values())
        unexpected_params = set(args.keys()) - set(sig.parameters.keys())
        if unexpected_params and not accepts_kwargs:
            logger.warning(
                "Function received unexpected parameters",
                function_name=name,
                unexpected_params=sorted(unexpected_params),
            )
            raise TypeError(f"Unexpected arguments: {', '.join(sorted(unexpected_params))}")

    async def execute_tool(self, tool_name: str, tool_args: str | dict[str, Any], context: dict[str, Any]) -> str:
        """Execute a tool and return its output string.

        Args:
            tool_name: Name of the function to execute
            tool_args: Arguments as JSON string or dict
            context: Execution context (thread_id, run_id, tool_call_id, correlation_id)
        """
        correlation_id = context.get("correlation_id", "unknown")

        if isinstance(tool_args, str):
            try:
                args = json.loads(tool_args or "{}")
            except json.JSONDecodeError as e:
                logger.error("Invalid JSON in tool arguments", function_name=tool_name, error=str(e), **context)
                return f"Error: Invalid JSON arguments: {e}"
        else:
            args = tool_args

        if not isinstance(args, dict):
            logger.error("Tool arguments are not an object", function_name=tool_name, **context)
            return "Error: Tool arguments must be a JSON object"

        if tool_name not in self.tool_map:
            logger.error("Unknown function not found in tool map", function_name=tool_name, **context)
            return f"Error: Function '{tool_name}' not available (correlation_id: {correlation_id[:8]})"

        func = self.tool_map[tool_name]
        try:
            self.validate_function_args(func, args, tool_name)

            logger.debug("Executing function with args", function_name=tool_name, args=args, **context)

            result = func(**args)
            if inspect.isawaitable(result):
                result = await result

            logger.info("Function executed successfully", function_name=tool_name, **context)
            return _to_output(result)

        except TypeError as err:
            logger.error(
                "Invalid arguments for function",
                function_name=tool_name,
                error_type="TypeError",
                error=str(err),
                **context,
            )
            return f"Error: Invalid arguments for function '{tool_name}': {err} (correlation_id: {correlation_id[:8]})"

        except Exception as err:  # noqa: BLE001
            logger.error(
                "Function execution failed",
                function_name=tool_name,
                error_type=type(err).__name__,
                error=str(err),
                **context,
            )
            return f"Error: Function '{tool_name}' execution failed: {err} (correlation_id: {correlation_id[:8]})"

    async def execute_tool_call(self, tool_call: ToolCall, context: dict[str, Any]) -> str:
        if tool_call.type != TOOL_TYPE_FUNCTION or tool_call.function is None:
            logger.warning("Unsupported tool call type", tool_type=tool_call.type, **context)
            return f"Error: Tool type '{tool_call.type}' cannot be executed locally"
        return await self.execute_tool(tool_call.function.name, tool_call.function.arguments, context)

    async def execute_tool_calls(self, run: Run) -> dict[str, str]:
        """Execute every outstanding tool call of ``run`` and map tool call ids to outputs.

        The result has exactly one entry per outstanding call, ready for
        ``ToolOutputSubmitter.submit``.
        """
        correlation_id = get_or_create_correlation_id()
        outputs: dict[str, str] = {}
        for tool_call in run.tool_calls:
            context = {
                "thread_id": run.thread_id,
                "run_id": run.id,
                "tool_call_id": tool_call.id,
                "correlation_id": correlation_id,
            }
            outputs[tool_call.id] = await self.execute_tool_call(tool_call, context)
        return outputs
