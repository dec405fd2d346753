from __future__ import annotations


class SimulationError(Exception):
    """Base class for errors raised by the simulator."""


class ConfigurationError(SimulationError, ValueError):
    """
    Invalid input or settings, detected before any policy runs.
    """


class CapacityError(SimulationError):
    """
    A process set or timeline grew past its configured bound.
    """
