# vecsim/errors.py


class VectorSimError(ValueError):
    """Base class for errors raised by the vector simulator."""


class UnknownGate(VectorSimError):
    """Gate name not in the registry, or wrong number of qubit arguments."""


class InvalidPauliSyntax(VectorSimError):
    pass


class InconsistentStabilizers(VectorSimError):
    """A stabilizer projection had zero probability."""


class DimensionMismatch(VectorSimError):
    pass
