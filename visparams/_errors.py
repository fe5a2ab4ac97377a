"""Exception hierarchy for visparams."""


class VisParamsError(Exception):
    """Base exception for visparams."""


class InvalidDatasetHandleError(VisParamsError):
    """Raised when a dataset handle lacks a required accessor."""


class CompositionError(VisParamsError):
    """Raised when the option declarations themselves are inconsistent."""


class IdentityCollisionError(CompositionError):
    """Raised when two nodes of one panel compute the same id."""


class VisibilityReferenceError(CompositionError):
    """Raised when a node's visibility refers outside its ancestor scope."""
