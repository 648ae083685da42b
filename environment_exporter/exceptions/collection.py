"""
collection.py

Error raised by the collection bridge when a scrape cannot produce samples.
"""

from .sensors import SensorReadError, SensorTimeoutError


class CollectionFailure(Exception):
    """
    Raised instead of returning samples when the sensor read failed.

    A CollectionFailure always means zero samples were produced for that
    scrape. The underlying sensor error is kept on ``cause`` (and chained as
    ``__cause__``) so the embedding server can decide how to degrade.
    """

    def __init__(self, cause: SensorReadError) -> None:
        super().__init__(f"Sensor read failed: {cause}")
        self.cause = cause
        self.__cause__ = cause

    @property
    def timed_out(self) -> bool:
        """True when the sense transaction was abandoned at its deadline."""
        return isinstance(self.cause, SensorTimeoutError)
