"""choosy - Interactive terminal list picker."""

from importlib.metadata import version

__version__ = version("choosy")

from choosy.core.controller import PickResult
from choosy.picker import pick
from choosy.utils.config import PickerConfig
from choosy.utils.exceptions import (
    ChoosyError,
    ConfigurationError,
    DisplaySurfaceError,
    InternalFaultError,
    SelectionAborted,
)

__all__ = [
    "pick",
    "PickResult",
    "PickerConfig",
    "ChoosyError",
    "ConfigurationError",
    "DisplaySurfaceError",
    "InternalFaultError",
    "SelectionAborted",
]
