"""AsyncResourceStore - the loading/error bracket shared by every client store.

Hey future me - every remote call a store makes goes through run(). The bracket is
always the same:

    is_loading = True, error = None
    result = await operation()
    on_success(result)            # merge/replace the cached slice
    ...or on failure: error = describe_error(exc)
    finally: is_loading = False

No exception ever escapes run(). Failures become state (and a log line), so UI code
just reads is_loading/error off a snapshot. The shared slot is last-writer-wins when
two operations overlap; operation_status(name) gives per-operation status for callers
that care which call failed.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import httpx
from pydantic import ValidationError

from soundhaven.client.remote import RemoteClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

GENERIC_TRANSPORT_ERROR = "Network error: could not reach the server"
GENERIC_RESPONSE_ERROR = "Unexpected response from the server"

Listener = Callable[[Any], None]


@dataclass(frozen=True)
class OperationStatus:
    """Loading/error status of one named operation."""

    is_loading: bool = False
    error: str | None = None


@dataclass(frozen=True)
class FetchState(Generic[T]):
    """One cached slice plus the status of the operation that feeds it."""

    data: T
    is_loading: bool = False
    error: str | None = None


def _message_from_body(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    for key in ("message", "detail"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def describe_error(exc: BaseException) -> str:
    """Turn any failure from a remote call into a human-readable message.

    Order of preference: the server's `message` field, then `detail`, then a
    generic message. Never raises.
    """
    try:
        if isinstance(exc, httpx.HTTPStatusError):
            message = _message_from_body(exc.response)
            if message:
                return message
            return f"Request failed with status {exc.response.status_code}"
        if isinstance(exc, httpx.TransportError):
            return GENERIC_TRANSPORT_ERROR
        if isinstance(exc, (ValidationError, ValueError)):
            return GENERIC_RESPONSE_ERROR
        return str(exc) or GENERIC_TRANSPORT_ERROR
    except Exception:
        return GENERIC_TRANSPORT_ERROR


class AsyncResourceStore:
    """Base class for stores that cache remote resources."""

    def __init__(self, remote: RemoteClient) -> None:
        self.remote = remote
        self.is_loading: bool = False
        self.error: str | None = None
        self._operations: dict[str, OperationStatus] = {}
        self._listeners: list[Listener] = []

    # --- subscriptions ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with the store after each state change.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Store listener %r failed", listener)

    # --- status ---

    def operation_status(self, name: str) -> OperationStatus:
        """Status of the most recent call of the named operation."""
        return self._operations.get(name, OperationStatus())

    def state_of(self, name: str, data: T) -> FetchState[T]:
        """Wrap a slice with the status of the operation that feeds it."""
        status = self.operation_status(name)
        return FetchState(data=data, is_loading=status.is_loading, error=status.error)

    def _set_status(self, name: str, is_loading: bool, error: str | None) -> None:
        self.is_loading = is_loading
        self.error = error
        self._operations[name] = OperationStatus(is_loading=is_loading, error=error)

    async def run(
        self,
        name: str,
        operation: Callable[[], Awaitable[T]],
        on_success: Callable[[T], None],
        on_failure: Callable[[str], None] | None = None,
    ) -> bool:
        """Run one remote operation inside the loading/error bracket.

        Returns True if the operation and on_success both completed.
        """
        self._set_status(name, True, None)
        self._emit()
        error: str | None = None
        try:
            result = await operation()
            on_success(result)
        except Exception as e:
            error = describe_error(e)
            logger.warning("Store operation %s failed: %s", name, error)
            if on_failure is not None:
                try:
                    on_failure(error)
                except Exception:
                    logger.exception("Failure callback of %s raised", name)
        finally:
            self._set_status(name, False, error)
            self._emit()
        return error is None
