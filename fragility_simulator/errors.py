"""Exception hierarchy raised at the input boundary."""


class FragilitySimulatorError(Exception):
    """Base class for all simulator errors."""


class InvalidInputError(FragilitySimulatorError, ValueError):
    """A state or configuration field is non-finite or out of range."""


class EmptyRunError(FragilitySimulatorError, ValueError):
    """A simulation was requested (or summarized) with zero paths."""
