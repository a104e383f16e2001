"""
Exceptions raised by the simulator.

Everything derives from ValueError so callers that only catch ValueError
(as the CLI historically did) keep working.
"""


class SchedulerError(ValueError):
    pass


class InvalidInputError(SchedulerError):
    """The process list cannot be simulated (empty, duplicate ids, bad values)."""


class InvalidQuantumError(SchedulerError):
    """Round Robin was asked to run without a positive integer quantum."""


class WorkloadFormatError(SchedulerError):
    """A workload file could not be parsed into processes."""
