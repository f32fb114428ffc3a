"""
Ordered fallback strategies with tagged outcomes.

A driver runs each strategy in turn and returns the first success. When all
of them fail, the error of the *first* strategy is raised; errors from later
strategies are only logged.
"""

import logging
from dataclasses import dataclass
from typing import (
    Awaitable,
    Callable,
    Generic,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
)

import aiohttp

from amdl_cli.exceptions import AmdlError

log = logging.getLogger(__name__)

T = TypeVar("T")

Strategy = Callable[[], Awaitable[T]]

# Failures of the first strategy that move the chain on to the next one
FALLBACK_ERRORS = (AmdlError, aiohttp.ClientError)


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a value or the error that prevented one."""

    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def attempt(
    strategy: Strategy[T],
    recoverable: Tuple[Type[BaseException], ...] = FALLBACK_ERRORS,
) -> Outcome[T]:
    """Runs one strategy, capturing `recoverable` failures as an outcome."""
    try:
        return Outcome(value=await strategy())
    except recoverable as e:
        return Outcome(error=e)


async def run_strategies(
    strategies: Sequence[Tuple[str, Strategy[T]]], subject: str = "request"
) -> T:
    """
    Tries each `(name, strategy)` pair in order.

    Only FALLBACK_ERRORS from the first strategy move the chain on; anything
    else it raises propagates. Once the first strategy has failed, any
    exception from a later one is logged and never replaces the first error.

    Raises:
        The first strategy's error once every strategy has failed.
    """
    if not strategies:
        raise ValueError("At least one strategy is required.")

    first_error: Optional[BaseException] = None
    for name, strategy in strategies:
        recoverable = FALLBACK_ERRORS if first_error is None else (Exception,)
        outcome = await attempt(strategy, recoverable)
        if outcome.ok:
            if first_error is not None:
                log.debug(f"Resolved {subject} via fallback '{name}'.")
            return outcome.value

        if first_error is None:
            first_error = outcome.error
            log.debug(f"Strategy '{name}' failed for {subject}: {outcome.error}")
        else:
            log.debug(
                f"Fallback '{name}' also failed for {subject}: "
                f"{type(outcome.error).__name__}: {outcome.error}"
            )

    raise first_error
