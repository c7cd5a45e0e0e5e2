"""Error taxonomy for sealed-bid encryption.

Every error aborts the computation that raised it. The ``kind`` tag is what
the CLI and HTTP layers show to the caller.
"""


class SealedBidError(ValueError):
    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def describe(self) -> str:
        return f"error[{self.kind}]: {self.message}"


class PointNotOnCurveError(SealedBidError):
    """Supplied (x, y) do not satisfy y^2 = x^3 + 3 over the base field."""
    kind = "point-not-on-curve"


class MalformedInputError(SealedBidError):
    """Input cannot be parsed into the expected fixed-width field."""
    kind = "malformed-input"


class UnsupportedOperationError(SealedBidError):
    kind = "unsupported-operation"
