from __future__ import annotations


class GridlockError(ValueError):
    """Base class for all puzzle errors."""


class FormatError(GridlockError):
    """Level description is malformed and no Level can be built from it."""


class MoveError(GridlockError):
    """A requested move was rejected. The level is left consistent."""


class NoPieceError(MoveError):
    pass


class BlockedMoveError(MoveError):
    pass


class AxisViolationError(MoveError):
    pass
