"""Exceptions raised when a rule or state is rejected at construction."""


class CellularAutomatonError(ValueError):
    """Base class for rejected automaton inputs."""


class InvalidRule(CellularAutomatonError):
    """Rule number or birth/survival set outside its legal range."""


class InvalidDimensions(CellularAutomatonError):
    """Empty state, empty grid, or ragged grid rows."""


class InvalidState(CellularAutomatonError):
    """A cell value other than 0 or 1."""
