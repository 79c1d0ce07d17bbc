"""
Ordered fallback chains for field resolution.

Each field of a reel is resolved by a ``StrategyChain``: an ordered list of
strategies, highest confidence first. The chain runs them in sequence and
stops at the first value that passes the field's validity predicate.
"""

from __future__ import annotations

import inspect
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, Sequence, TypeVar, Union

import structlog

from ..protocols import Document

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass
class ExtractionContext:
    """Inputs every strategy may read.

    ``page_text`` is taken once per document so all text strategies scan
    the same snapshot. ``username`` is filled in as soon as it is resolved
    so later fields can exclude it.
    """

    document: Document
    page_text: str
    url: str
    username: Optional[str] = None


StrategyFn = Callable[[ExtractionContext], Union[Optional[T], Awaitable[Optional[T]]]]


@dataclass(frozen=True)
class Strategy(Generic[T]):
    name: str
    func: StrategyFn[T]


@dataclass
class StrategyStats:
    attempts: int = 0
    successes: int = 0
    failures: int = 0
    total_time: float = 0.0


@dataclass
class ChainOutcome(Generic[T]):
    value: Optional[T]
    strategy: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.strategy is not None


class StrategyChain(Generic[T]):
    """
    Runs field strategies in priority order.

    Features:
    - Sync and async strategies in the same chain
    - Per-field validity predicate
    - Strategy exceptions are treated as "no match"
    - Attempt/success counters per strategy
    """

    def __init__(
        self,
        field_name: str,
        strategies: Sequence[Strategy[T]],
        is_valid: Optional[Callable[[T], bool]] = None,
    ) -> None:
        if not strategies:
            raise ValueError(f"Strategy chain for '{field_name}' needs at least one strategy")

        names = [s.name for s in strategies]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate strategy names in chain for '{field_name}': {names}")

        self.field_name = field_name
        self.strategies: List[Strategy[T]] = list(strategies)
        self.is_valid = is_valid or (lambda value: value is not None)
        self.logger = logger.bind(component="StrategyChain", field=field_name)
        self._stats: Dict[str, StrategyStats] = {s.name: StrategyStats() for s in self.strategies}

    @property
    def strategy_names(self) -> List[str]:
        return [s.name for s in self.strategies]

    async def resolve(self, context: ExtractionContext) -> ChainOutcome[T]:
        for strategy in self.strategies:
            stats = self._stats[strategy.name]
            stats.attempts += 1
            start_time = time.perf_counter()

            try:
                value: Any = strategy.func(context)
                if inspect.isawaitable(value):
                    value = await value
            except Exception as e:
                stats.failures += 1
                self.logger.debug(
                    "Strategy failed",
                    strategy=strategy.name,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                continue
            finally:
                stats.total_time += time.perf_counter() - start_time

            if value is None or not self.is_valid(value):
                self.logger.debug("Strategy did not match", strategy=strategy.name)
                continue

            stats.successes += 1
            self.logger.debug("Strategy matched", strategy=strategy.name, value=value)
            return ChainOutcome(value=value, strategy=strategy.name)

        self.logger.debug("All strategies exhausted", strategies=self.strategy_names)
        return ChainOutcome(value=None)

    def get_metrics(self) -> Dict[str, Dict[str, float]]:
        """
        Get per-strategy counters.

        Returns:
            Dictionary of metrics per strategy
        """
        metrics = {}
        for name, stats in self._stats.items():
            metrics[name] = {
                "attempts": stats.attempts,
                "successes": stats.successes,
                "failures": stats.failures,
                "success_rate": stats.successes / stats.attempts if stats.attempts > 0 else 0.0,
                "avg_time": stats.total_time / stats.attempts if stats.attempts > 0 else 0.0,
            }
        return metrics
