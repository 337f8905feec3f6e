# rwh/errors.py


class InvalidInput(ValueError):
    """Raised when an analysis cannot be computed from the given inputs.

    Every operation is deterministic, so a call that fails with this error
    fails identically when repeated.
    """
