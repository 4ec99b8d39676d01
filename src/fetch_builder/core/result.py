"""Tagged outcome of an execution."""

from dataclasses import dataclass
from typing import Any, Generic, Iterator, Optional, TypeVar, Union

from .exceptions import FetchError

R = TypeVar("R")


@dataclass(frozen=True)
class Success(Generic[R]):
    """
    Decoded response value.

    Attributes:
        value: Decoded (and intercepted) response
        attempts: Number of transport invocations made

    Example:
        >>> error, data = await FetchBuilder.get(url).execute()
        >>> assert error is None
    """

    value: R
    attempts: int = 1

    @property
    def ok(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None

    def unwrap(self) -> R:
        return self.value

    def __iter__(self) -> Iterator[Optional[Any]]:
        yield None
        yield self.value


@dataclass(frozen=True)
class Failure:
    """
    Classified error.

    Attributes:
        error: One of NetworkError, HTTPError, TimeoutError, AbortError,
            DecodeError, UnknownError
        attempts: Number of transport invocations made (0 if the request
            never reached the transport)
    """

    error: FetchError
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return False

    @property
    def value(self) -> None:
        return None

    def unwrap(self):
        """Raise the classified error."""
        raise self.error

    def __iter__(self) -> Iterator[Optional[Any]]:
        yield self.error
        yield None


Result = Union[Success[R], Failure]
