from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

C = TypeVar("C")


@dataclass(frozen=True)
class Strategy(Generic[C]):
    """One way of achieving a step's goal. attempt() returns True on success."""

    name: str
    attempt: Callable[[C], bool]


def first_success(strategies: Sequence[Strategy[C]], ctx: C, *, label: str) -> Optional[str]:
    """Try strategies in order; return the first successful name, or None."""

    for strategy in strategies:
        logger.info("%s: trying %s", label, strategy.name)
        if strategy.attempt(ctx):
            logger.info("%s: %s succeeded", label, strategy.name)
            return strategy.name
        logger.info("%s: %s did not succeed", label, strategy.name)
    return None
