class SpliteratorError(Exception):
    """Base class for every error raised by spliterators itself."""


class InvalidArgumentError(SpliteratorError, ValueError):
    """A required construction input is missing or `None`.

    Always raised eagerly, before any element is pulled from an upstream source.
    """


class ContractViolationError(SpliteratorError, RuntimeError):
    """The single-consumer advancement protocol was broken.

    Raised by `CheckedSource` when `try_advance` is called again after it returned `False`,
    or when it is re-entered while another advance on the same source is still in flight.
    """


def require[T](value: T | None, name: str) -> T:
    if value is None:
        msg = f"`{name}` must not be None"
        raise InvalidArgumentError(msg)
    return value


def require_callable[T](value: T | None, name: str) -> T:
    value = require(value, name)
    if not callable(value):
        msg = f"`{name}` must be callable, got {type(value).__name__}"
        raise TypeError(msg)
    return value
