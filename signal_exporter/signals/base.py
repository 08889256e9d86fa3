"""Base interface for named signals."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..utils.time import ensure_utc, utc_now


class Signal(ABC):
    """
    A named, total, side-effect-free value producer.

    Implementations hold only immutable state and compute their value from
    the instant passed in, so one instance can be evaluated from any number
    of threads at once.
    """

    name: str
    documentation: str

    @abstractmethod
    def value(self, now: datetime) -> float:
        """
        Compute the signal at an instant.

        Args:
            now: Aware UTC instant shared by every signal in one collection

        Returns:
            Signal value
        """

    def __call__(self, now: Optional[datetime] = None) -> float:
        return self.value(utc_now() if now is None else ensure_utc(now))


@dataclass(frozen=True)
class FunctionSignal(Signal):
    """Adapter exposing a zero-argument callable as a signal."""

    name: str
    fn: Callable[[], float]
    documentation: str = ""

    def value(self, now: datetime) -> float:
        return float(self.fn())
