import logging

from ._api import IntoSource, group, source, zip  # noqa: A004
from ._core import Config, get_config, set_config
from ._errors import ContractViolationError, InvalidArgumentError, SpliteratorError
from ._grouping import GroupBuilder, GroupingSource
from ._results import NONE, Option, OptionUnwrapError, Some
from ._source import Characteristics, CheckedSource, IterSource, ListSource, Source
from ._zipping import ZipBuilder, ZippingSource

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "NONE",
    "Characteristics",
    "CheckedSource",
    "Config",
    "ContractViolationError",
    "GroupBuilder",
    "GroupingSource",
    "IntoSource",
    "InvalidArgumentError",
    "IterSource",
    "ListSource",
    "Option",
    "OptionUnwrapError",
    "Some",
    "Source",
    "SpliteratorError",
    "ZipBuilder",
    "ZippingSource",
    "get_config",
    "group",
    "set_config",
    "source",
    "zip",
]
