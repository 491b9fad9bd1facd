"""Exceptions raised by the routing backend."""


class InvalidCoordinatesError(ValueError):
    """A ``lat,lon`` query value is missing or cannot be parsed."""


class GraphFormatError(ValueError):
    """The graph file does not describe a valid weighted digraph."""


class PathReconstructionError(RuntimeError):
    """Backpointers disagree with what the search reported.

    This is never a user error: it means a strategy declared the target
    reached (or unreachable) while its predecessor chain says otherwise.
    """
