from __future__ import annotations

import os
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, PositiveInt, ValidationError

from .._errors import InvalidArgumentError

_ENV_PREFIX: Final = "SPLITERATORS_"


class Config(BaseModel):
    """Process-wide settings.

    Validation is strict when set from code, and lax when read from the environment,
    where every value is a string (`"16"`, `"yes"`, `"off"`, ...).

    Args:
        batch_unit (int): Growth step of the batches copied out by `IterSource.try_split()`.
        max_batch (int): Upper bound on the size of a single batch.
        check_contracts (bool): Wrap the sources returned by `zip()`, `group()` and `source()` in a `CheckedSource`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, strict=True)

    batch_unit: PositiveInt = 1 << 10
    max_batch: PositiveInt = 1 << 25
    check_contracts: bool = False

    @staticmethod
    def from_env() -> Config:
        """Build a `Config` from `SPLITERATORS_*` environment variables, falling back to the defaults.

        Raises:
            InvalidArgumentError: If a variable holds a value of the wrong type.
        """
        raw = {
            name: value
            for name in Config.model_fields
            if (value := os.environ.get(_ENV_PREFIX + name.upper())) is not None
        }
        return _validate(raw, strict=False)


def _validate(values: dict[str, Any], *, strict: bool) -> Config:
    try:
        return Config.model_validate(values, strict=strict)
    except ValidationError as exc:
        msg = f"invalid configuration: {exc}"
        raise InvalidArgumentError(msg) from exc


_config: Config | None = None


def get_config() -> Config:
    """Return the current process-wide `Config`.

    It is read from the environment on first access.

    Example:
    ```python
    >>> import spliterators as sp
    >>> sp.get_config().batch_unit
    1024

    ```
    """
    global _config  # noqa: PLW0603
    if _config is None:
        _config = Config.from_env()
    return _config


def set_config(**changes: Any) -> Config:
    """Replace some fields of the process-wide `Config`, and return the new one.

    Raises:
        InvalidArgumentError: On an unknown field name, a value of the wrong type, or a non-positive batch size.
    """
    global _config  # noqa: PLW0603
    _config = _validate({**get_config().model_dump(), **changes}, strict=True)
    return _config
