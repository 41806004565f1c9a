"""HTTP transport: auth and beta headers, JSON decoding, API error mapping and streaming opens."""

from typing import Any, Optional, Sequence, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from ..config import ClientConfig
from ..entities.headers import (
    BEARER_PREFIX,
    CONTENT_TYPE_EVENT_STREAM,
    CONTENT_TYPE_JSON,
    HEADER_ACCEPT,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HEADER_OPENAI_BETA,
)
from ..errors import ErrorHandler
from ..structured_logging import get_logger, get_or_create_correlation_id

logger = get_logger("TRANSPORT")

ModelT = TypeVar("ModelT", bound=BaseModel)

QueryParams = Sequence[tuple[str, str]]
Body = Union[BaseModel, dict[str, Any], None]


def serialize_body(body: Body) -> Optional[dict[str, Any]]:
    """Render a request body as JSON-ready data; unset optional fields are omitted."""
    if body is None:
        return None
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", exclude_none=True)
    return body


class Transport:
    """Thin wrapper over ``httpx.AsyncClient`` shared by every resource service.

    The transport owns the HTTP client only when it created it; an injected client is
    left open on ``aclose``.
    """

    def __init__(self, config: ClientConfig, http_client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=config.request_timeout)

    def _headers(self, stream: bool = False) -> dict[str, str]:
        headers = {
            HEADER_AUTHORIZATION: f"{BEARER_PREFIX} {self.config.api_key}",
            HEADER_OPENAI_BETA: self.config.beta_header,
            HEADER_CONTENT_TYPE: CONTENT_TYPE_JSON,
        }
        if stream:
            headers[HEADER_ACCEPT] = CONTENT_TYPE_EVENT_STREAM
        return headers

    def url(self, path: str) -> str:
        return f"{self.config.base_url}/{path.lstrip('/')}"

    def _build_request(
        self, method: str, path: str, body: Body, params: Optional[QueryParams], stream: bool
    ) -> httpx.Request:
        return self._client.build_request(
            method,
            self.url(path),
            headers=self._headers(stream=stream),
            json=serialize_body(body),
            params=list(params) if params else None,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: Body = None,
        params: Optional[QueryParams] = None,
        operation: str = "",
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            TransportError: The request could not be sent or the response not read
            APIError: The API answered with a non-2xx status
            DecodeError: The response body is not JSON
        """
        operation = operation or f"{method} {path}"
        correlation_id = get_or_create_correlation_id()
        request = self._build_request(method, path, body, params, stream=False)

        try:
            response = await self._client.send(request)
        except httpx.HTTPError as err:
            raise ErrorHandler.handle_request_error(err, operation, correlation_id, path=path) from err

        if not response.is_success:
            raise ErrorHandler.handle_error_response(response, operation, correlation_id, path=path)

        logger.debug(
            "Request completed",
            operation=operation,
            status_code=response.status_code,
            correlation_id=correlation_id,
        )

        try:
            return response.json()
        except ValueError as err:
            raise ErrorHandler.handle_decode_error(err, operation, correlation_id, path=path) from err

    async def request_model(
        self,
        method: str,
        path: str,
        model: type[ModelT],
        *,
        body: Body = None,
        params: Optional[QueryParams] = None,
        operation: str = "",
    ) -> ModelT:
        """Send a request and validate the JSON body into ``model``."""
        operation = operation or f"{method} {path}"
        payload = await self.request(method, path, body=body, params=params, operation=operation)
        try:
            return model.model_validate(payload)
        except ValidationError as err:
            raise ErrorHandler.handle_decode_error(
                err, operation, get_or_create_correlation_id(), path=path
            ) from err

    async def open_stream(
        self,
        method: str,
        path: str,
        *,
        body: Body = None,
        operation: str = "",
    ) -> httpx.Response:
        """Open a streaming response and confirm its status before any bytes are decoded.

        The caller owns the returned response and must close it. On a non-2xx status the
        body is read for the error message and the response closed before raising.
        """
        operation = operation or f"{method} {path}"
        correlation_id = get_or_create_correlation_id()
        request = self._build_request(method, path, body, None, stream=True)

        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as err:
            raise ErrorHandler.handle_request_error(err, operation, correlation_id, path=path) from err

        if not response.is_success:
            try:
                await response.aread()
            except httpx.HTTPError as err:
                raise ErrorHandler.handle_request_error(err, operation, correlation_id, path=path) from err
            finally:
                await response.aclose()
            raise ErrorHandler.handle_error_response(response, operation, correlation_id, path=path)

        logger.debug("Stream opened", operation=operation, correlation_id=correlation_id)
        return response

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "Transport":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()
