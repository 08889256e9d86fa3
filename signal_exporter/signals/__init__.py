"""
Signal generation module.

Named, side-effect-free value producers and the registry that evaluates
them for each collection request.
"""

from .base import FunctionSignal, Signal
from .oscillation import OscillationSignal, oscillation_value
from .registry import SignalRegistry, SignalSnapshot
from .wall_clock import WallClockSignal
from .window import WINDOW_LOOKAHEAD, WindowSignal, window_indicator

__all__ = [
    "Signal",
    "FunctionSignal",
    "OscillationSignal",
    "WallClockSignal",
    "WindowSignal",
    "SignalRegistry",
    "SignalSnapshot",
    "WINDOW_LOOKAHEAD",
    "oscillation_value",
    "window_indicator",
]
