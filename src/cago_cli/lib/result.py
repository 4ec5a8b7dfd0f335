"""Result type for monadic error handling.

Inspired by Rust's Result<T, E>, with one extra case for flows the user
chooses to stop. Use pattern matching to handle results:

    match some_workflow():
        case Ok(value):
            # handle success
        case Cancelled(reason):
            # user backed out, nothing was written
        case Err(error):
            # handle error
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success case containing a value."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Error case containing an error."""

    error: E


@dataclass(frozen=True, slots=True)
class Cancelled:
    """The user declined to proceed. Not an error: the command exits cleanly."""

    reason: str = "Cancelled"


# Type aliases
type Result[T, E] = Ok[T] | Err[E]
type Outcome[T, E] = Ok[T] | Err[E] | Cancelled


def collect(results: list[Result[T, E]]) -> Result[list[T], E]:
    """Turn a list of results into a result of a list.

    The first Err in list order wins; every result has already been computed
    by the time this runs, so nothing is short-circuited.
    """
    values: list[T] = []
    for result in results:
        match result:
            case Ok(value):
                values.append(value)
            case Err() as e:
                return e
    return Ok(values)


