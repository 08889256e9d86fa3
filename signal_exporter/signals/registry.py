"""Signal registry answering collection requests"""

import re
import threading
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Callable, Iterator, Mapping, Optional

from ..errors import CollectionError, DuplicateSignalError
from ..logging.config import get_collection_logger, log_collection_failure
from ..utils.time import ensure_utc, utc_now
from .base import FunctionSignal, Signal

logger = get_collection_logger(__name__)

METRIC_NAME_PATTERN = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")


@dataclass(frozen=True)
class SignalSnapshot:
    """Values of every registered signal computed at one instant"""
    timestamp: datetime
    values: Mapping[str, float]

    def __getitem__(self, name: str) -> float:
        return self.values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


class SignalRegistry:
    """
    Owns the named signals exposed for collection.

    Registration is serialized by a lock and publishes a new immutable tuple,
    so collect reads without locking and never sees a partial update.
    """

    def __init__(self) -> None:
        self._signals: tuple[Signal, ...] = ()
        self._lock = threading.Lock()

    @property
    def signals(self) -> tuple[Signal, ...]:
        return self._signals

    def names(self) -> list[str]:
        return [signal.name for signal in self._signals]

    def get(self, name: str) -> Optional[Signal]:
        for signal in self._signals:
            if signal.name == name:
                return signal
        return None

    def add(self, signal: Signal) -> Signal:
        """
        Register a signal object.

        Raises:
            DuplicateSignalError: If a signal with the same name exists
            ValueError: If the name is not a valid metric name
        """
        if not METRIC_NAME_PATTERN.match(signal.name):
            raise ValueError(f"Invalid signal name: {signal.name!r}")

        with self._lock:
            if any(existing.name == signal.name for existing in self._signals):
                raise DuplicateSignalError(
                    f"Signal already registered: {signal.name}",
                    signal_name=signal.name,
                )
            self._signals = self._signals + (signal,)

        logger.debug("Signal registered", signal_name=signal.name,
                     signal_type=type(signal).__name__)
        return signal

    def register(self, name: str, fn: Callable[[], float], documentation: str = "") -> Signal:
        """Register a zero-argument callable under name."""
        return self.add(FunctionSignal(name=name, fn=fn, documentation=documentation))

    def collect(self, now: Optional[datetime] = None) -> SignalSnapshot:
        """
        Evaluate every registered signal exactly once.

        The clock is read once and shared by all signals so that one snapshot
        is internally consistent.

        Args:
            now: Instant to evaluate at, defaults to the current wall clock

        Returns:
            Fresh snapshot of all signal values

        Raises:
            CollectionError: If any signal raises; the snapshot is abandoned
        """
        now = utc_now() if now is None else ensure_utc(now)
        values: dict[str, float] = {}

        for signal in self._signals:
            try:
                values[signal.name] = float(signal.value(now))
            except Exception as e:
                log_collection_failure(logger, signal.name, e,
                                       context={"timestamp": now.isoformat()})
                raise CollectionError(
                    f"Signal {signal.name} failed: {e}",
                    signal_name=signal.name,
                    context={"timestamp": now.isoformat()},
                ) from e

        return SignalSnapshot(timestamp=now, values=MappingProxyType(values))
