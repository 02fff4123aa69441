"""Error taxonomy shared by every fitter in the package."""

from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    """Reason a fit was rejected."""

    NOT_ONE_DIMENSIONAL = "input arrays must be one-dimensional"
    DIFFERENT_LENGTHS = "input arrays have different lengths"
    TOO_FEW_POINTS = "too few points for interpolation"
    NOT_STRICTLY_INCREASING = "xs values not strictly increasing"
    SINGULAR_SYSTEM = "system of linear equations is singular"


class InterpolationError(ValueError):
    """Raised when a fit cannot be carried out.

    Parameters
    ----------
    kind : ErrorKind
        Structured reason for the failure.  Callers should branch on this
        attribute rather than on the message text.
    detail : str, optional
        Human-readable context appended to the message.
    """

    def __init__(self, kind: ErrorKind, detail: str | None = None):
        self.kind = kind
        self.detail = detail
        message = kind.value if detail is None else f"{kind.value}: {detail}"
        super().__init__(message)


class SingularMatrixError(InterpolationError):
    """Raised when the second-derivative system of a smooth spline is singular."""

    def __init__(self, detail: str | None = None):
        super().__init__(ErrorKind.SINGULAR_SYSTEM, detail)
