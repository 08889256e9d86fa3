"""
Runtime failure classifications.

Signal errors surface programming defects in registered signals; transport
errors mean the collection endpoint cannot serve at all.
"""

from typing import Optional

from .configuration import ExporterError


class SignalError(ExporterError):
    """Base class for signal registration and evaluation failures."""

    def __init__(self, message: str, signal_name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.signal_name = signal_name


class DuplicateSignalError(SignalError):
    """A signal with the same name is already registered."""


class CollectionError(SignalError):
    """A registered signal raised while computing its value."""


class TransportError(ExporterError):
    """The collection endpoint failed to bind or serve."""

    def __init__(self, message: str, address: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.address = address
