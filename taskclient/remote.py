"""
Task service client.

RemoteTaskService is the boundary the controller talks to. Every operation
returns a RemoteResult instead of raising, so failures are ordinary values:
- 401 → AuthError
- 404 → NotFoundError
- 400/409/422 → ValidationError
- transport errors and other statuses → RemoteError
- a success body without the expected id → MalformedResponseError
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Generic, Optional, Protocol, TypeVar
import logging
import time

import httpx
from pydantic import ValidationError as PydanticValidationError

from core.errors import (
    AuthError,
    MalformedResponseError,
    NotFoundError,
    RemoteError,
    TaskDeskError,
    ValidationError,
)
from tasks.models.schemas import DeleteResponse, TaskFields, TaskResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Result envelope
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RemoteResult(Generic[T]):
    """Outcome of one remote call: a value or a typed error, never both."""
    value: Optional[T] = None
    error: Optional[TaskDeskError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "RemoteResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: TaskDeskError) -> "RemoteResult[T]":
        return cls(error=error)

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value


# ---------------------------------------------------------------------------
# Service protocol
# ---------------------------------------------------------------------------

class RemoteTaskService(Protocol):
    async def list_tasks(self) -> RemoteResult[list[TaskResponse]]: ...

    async def list_user_names(self) -> RemoteResult[list[str]]: ...

    async def create_task(self, payload: TaskFields) -> RemoteResult[TaskResponse]: ...

    async def update_task(self, task_id: str, payload: TaskFields) -> RemoteResult[TaskResponse]: ...

    async def delete_task(self, task_id: str) -> RemoteResult[DeleteResponse]: ...


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------

def _detail(resp: httpx.Response) -> str | None:
    """Human-readable message from a FastAPI error body."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200] or None

    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list) and detail:
        first = detail[0]
        if isinstance(first, dict):
            return str(first.get("msg", "")).removeprefix("Value error, ") or None
    return None


def error_for_response(resp: httpx.Response) -> TaskDeskError:
    message = _detail(resp)
    status = resp.status_code
    if status == 401:
        return AuthError(message, status)
    if status == 404:
        return NotFoundError(message, status)
    if status in (400, 409, 422):
        return ValidationError(message, status)
    return RemoteError(message or f"HTTP {status}", status)


def _require_id(body: Any, expected: str | None = None) -> None:
    if not isinstance(body, dict) or not body.get("id"):
        raise MalformedResponseError()
    if expected is not None and body["id"] != expected:
        raise MalformedResponseError(f"Expected task {expected}, got {body['id']}")


# ---------------------------------------------------------------------------
# HTTP implementation
# ---------------------------------------------------------------------------

class HttpTaskService:
    """RemoteTaskService over the TaskDesk HTTP API.

    Usage::

        async with HttpTaskService("http://localhost:8000") as service:
            await service.sign_in("ada@example.com", "secret1")
            result = await service.list_tasks()
    """

    def __init__(
        self,
        base_url: str = "",
        token: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def __aenter__(self) -> "HttpTaskService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # --- Core request ---

    async def _request(
        self, method: str, path: str, body: dict[str, Any] | None = None
    ) -> RemoteResult[Any]:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        start = time.time()
        try:
            resp = await self._client.request(
                method, path, json=body, headers=headers, timeout=self.timeout
            )
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            return RemoteResult.failure(RemoteError(str(exc) or type(exc).__name__))

        latency = (time.time() - start) * 1000
        logger.debug("%s %s → %s (%.1f ms)", method, path, resp.status_code, latency)

        if resp.status_code >= 400:
            return RemoteResult.failure(error_for_response(resp))
        if resp.status_code == 204 or not resp.content:
            return RemoteResult.success(None)
        try:
            return RemoteResult.success(resp.json())
        except ValueError:
            return RemoteResult.failure(MalformedResponseError("Response was not JSON"))

    async def _task_call(
        self, method: str, path: str, body: dict[str, Any] | None = None, expected_id: str | None = None
    ) -> RemoteResult[TaskResponse]:
        result = await self._request(method, path, body)
        if not result.ok:
            return result
        try:
            _require_id(result.value, expected_id)
            return RemoteResult.success(TaskResponse.model_validate(result.value))
        except MalformedResponseError as exc:
            return RemoteResult.failure(exc)
        except PydanticValidationError:
            return RemoteResult.failure(MalformedResponseError())

    # --- Auth ---

    async def sign_up(self, name: str, email: str, password: str) -> RemoteResult[dict]:
        result = await self._request(
            "POST", "/api/auth/signup", {"name": name, "email": email, "password": password}
        )
        if result.ok:
            self.token = result.value["token"]
        return result

    async def sign_in(self, email: str, password: str) -> RemoteResult[dict]:
        result = await self._request(
            "POST", "/api/auth/signin", {"email": email, "password": password}
        )
        if result.ok:
            self.token = result.value["token"]
        return result

    async def sign_out(self) -> RemoteResult[None]:
        result = await self._request("POST", "/api/auth/signout")
        self.token = None
        return result

    # --- Tasks ---

    async def list_tasks(self) -> RemoteResult[list[TaskResponse]]:
        result = await self._request("GET", "/api/tasks")
        if not result.ok:
            return result
        try:
            return RemoteResult.success([TaskResponse.model_validate(t) for t in result.value])
        except (PydanticValidationError, TypeError):
            return RemoteResult.failure(MalformedResponseError())

    async def list_user_names(self) -> RemoteResult[list[str]]:
        result = await self._request("GET", "/api/tasks/users")
        if not result.ok:
            return result
        if not isinstance(result.value, list):
            return RemoteResult.failure(MalformedResponseError())
        return RemoteResult.success([str(name) for name in result.value])

    async def create_task(self, payload: TaskFields) -> RemoteResult[TaskResponse]:
        return await self._task_call("POST", "/api/tasks", payload.model_dump(mode="json"))

    async def update_task(self, task_id: str, payload: TaskFields) -> RemoteResult[TaskResponse]:
        return await self._task_call(
            "PUT", f"/api/tasks/{task_id}", payload.model_dump(mode="json"), expected_id=task_id
        )

    async def delete_task(self, task_id: str) -> RemoteResult[DeleteResponse]:
        result = await self._request("DELETE", f"/api/tasks/{task_id}")
        if not result.ok:
            return result
        try:
            _require_id(result.value, task_id)
            return RemoteResult.success(DeleteResponse.model_validate(result.value))
        except MalformedResponseError as exc:
            return RemoteResult.failure(exc)
        except PydanticValidationError:
            return RemoteResult.failure(MalformedResponseError())
