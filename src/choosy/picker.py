"""Public entry point: run one picking session."""

import threading
from concurrent.futures import Future
from typing import Callable, ContextManager, Optional, Sequence

from choosy.core.controller import PickerController, PickResult, Session
from choosy.surface.base import DisplaySurface
from choosy.surface.terminal import open_terminal_surface
from choosy.utils.config import PickerConfig
from choosy.utils.debug import debug, log_error, use_config
from choosy.utils.exceptions import (
    NO_CHOICES,
    ChoosyError,
    ConfigurationError,
    DisplaySurfaceError,
    SelectionAborted,
)

SurfaceFactory = Callable[[PickerConfig], ContextManager[DisplaySurface]]


def pick(
    prompt: str,
    choices: Sequence[str],
    config: Optional[PickerConfig] = None,
    surface_factory: SurfaceFactory = open_terminal_surface,
) -> PickResult:
    """Let the user pick one of ``choices`` interactively.

    The render/input loop runs on a background thread; this call blocks
    on a one-shot future until the loop finishes.

    Args:
        prompt: Text shown above the list, one header row per line
        choices: Non-empty list of choice strings
        config: Colours and debug settings (loaded from disk when None);
            also used for debug logging from here on
        surface_factory: Context manager factory yielding the display surface

    Returns:
        PickResult(value, id) of the confirmed choice

    Raises:
        ConfigurationError: ``choices`` is empty or a colour is invalid
        SelectionAborted: the user aborted or confirmed with nothing visible
        DisplaySurfaceError: the terminal could not be used
        InternalFaultError: the selection invariant was broken
    """
    if not choices:
        raise ConfigurationError("no choices to choose from", tag=NO_CHOICES)
    config = (config or PickerConfig()).validate()
    use_config(config)

    debug("pick", "session start", choices=len(choices))
    try:
        with surface_factory(config) as surface:
            session = _run_session(prompt, choices, surface, config)
        result = session.result()
    except SelectionAborted:
        debug("pick", "session aborted")
        raise
    except ChoosyError as e:
        log_error("pick", str(e), e)
        raise
    except Exception as e:
        log_error("pick", "display surface failure", e)
        raise DisplaySurfaceError(str(e)) from e

    debug("pick", "session confirmed", id=result.id)
    return result


def _run_session(
    prompt: str,
    choices: Sequence[str],
    surface: DisplaySurface,
    config: PickerConfig,
) -> Session:
    controller = PickerController(prompt, choices, surface, config)
    done: Future = Future()
    worker = threading.Thread(
        target=controller.run,
        args=(done,),
        name="choosy-picker",
        daemon=True,
    )
    worker.start()
    try:
        return done.result()
    finally:
        worker.join()
