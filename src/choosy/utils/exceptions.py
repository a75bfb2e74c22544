"""Custom exceptions for choosy.

This module defines a hierarchy of exceptions for different error types:
- ChoosyError: Base exception for all choosy errors
- ConfigurationError: Empty choice list (tag ``NoChoices``) or invalid
  configuration (tag ``InvalidConfig``)
- SelectionAborted: Session ended without a selection (tag ``NoSelection``)
- DisplaySurfaceError: Terminal backend could not be used
- InternalFaultError: Picker state invariant was broken
"""

from typing import Optional


NO_CHOICES = "NoChoices"
INVALID_CONFIG = "InvalidConfig"
NO_SELECTION = "NoSelection"


class ChoosyError(Exception):
    """Base exception for all choosy errors.

    All choosy-specific exceptions inherit from this class, allowing
    callers to catch all choosy errors with a single except clause.
    """

    tag: Optional[str] = None

    def __init__(self, message: str = "", tag: Optional[str] = None):
        super().__init__(message)
        if tag is not None:
            self.tag = tag


class ConfigurationError(ChoosyError):
    """Configuration related errors.

    Raised before any rendering happens, such as:
    - Empty choice list
    - Unknown colour names
    - Invalid config values

    The tag is ``NoChoices`` for an empty choice list and
    ``InvalidConfig`` otherwise.
    """

    tag = INVALID_CONFIG


class SelectionAborted(ChoosyError):
    """The session ended without a confirmed choice.

    Raised when the user aborts, or confirms while the search query
    hides every choice. Not fatal to the calling process.
    """

    tag = NO_SELECTION


class DisplaySurfaceError(ChoosyError):
    """Terminal backend errors.

    Raised when the display surface cannot be initialized or drawn to.
    The surface is always torn down before this reaches the caller.
    """

    pass


class InternalFaultError(ChoosyError):
    """Picker state invariant violations.

    Raised instead of guessing a fallback, for example when no choice is
    selected even though visible choices remain.
    """

    pass
