"""Configuration management."""

import json
import os
from pathlib import Path
from typing import Iterator, Optional

from rich.color import Color, ColorParseError

from choosy.utils.exceptions import ConfigurationError

DEFAULT_TEXT_COLOR = "white"
DEFAULT_BACKGROUND_COLOR = "black"
DEFAULT_SELECTED_TEXT_COLOR = "white"

COLOR_FIELDS = ("text_color", "background_color", "selected_text_color")


def get_choosy_dir() -> Path:
    """Get the choosy data directory (XDG-compliant)."""
    if env_dir := os.environ.get("CHOOSY_DIR"):
        return Path(env_dir)
    return Path.home() / ".config" / "choosy"


class PickerConfig:
    """Picker configuration.

    Colours are rich colour names or hex codes. They are purely cosmetic
    and never influence navigation or filtering.
    """

    # Toggleable settings with descriptions (attr_name -> description)
    TOGGLES: dict[str, str] = {
        "selected_text_bold": "Bold highlighted row",
        "debug": "Log to ~/.config/choosy/debug.log",
    }

    def __init__(self, choosy_dir: Optional[Path] = None, load: bool = True):
        """Load config from directory."""
        self.choosy_dir = choosy_dir or get_choosy_dir()
        self._config_file = self.choosy_dir / "config.json"
        self._set_defaults()
        if load:
            self._load()

    @classmethod
    def defaults(cls) -> "PickerConfig":
        """Config with built-in defaults only, ignoring file and environment."""
        return cls(load=False)

    def _set_defaults(self):
        self.text_color = DEFAULT_TEXT_COLOR
        self.background_color = DEFAULT_BACKGROUND_COLOR
        self.selected_text_color = DEFAULT_SELECTED_TEXT_COLOR
        self.selected_text_bold = False
        self.debug = False
        # Env var overrides persisted in the config file
        self.env: dict[str, str] = {}

    def _load(self):
        """Load config from file."""
        if self._config_file.exists():
            try:
                data = json.loads(self._config_file.read_text())
                if not isinstance(data, dict):
                    data = {}
                self.text_color = data.get("text_color", DEFAULT_TEXT_COLOR)
                self.background_color = data.get(
                    "background_color", DEFAULT_BACKGROUND_COLOR
                )
                self.selected_text_color = data.get(
                    "selected_text_color", DEFAULT_SELECTED_TEXT_COLOR
                )
                self.selected_text_bold = data.get("selected_text_bold", False)
                self.debug = data.get("debug", False)
                self.env = data.get("env", {})
            except (json.JSONDecodeError, IOError):
                pass

        self._apply_env_overrides()

    def _apply_env_overrides(self):
        """Apply env overrides: first from config.env, then from shell CHOOSY_* vars."""
        prefix = "CHOOSY_"

        def apply_env_dict(env_dict: dict[str, str]):
            for key, value in env_dict.items():
                # Support both CHOOSY_FOO and FOO formats in config.env
                if key.startswith(prefix):
                    attr_name = key[len(prefix) :].lower()
                else:
                    attr_name = key.lower()
                if attr_name in ("dir", "env", "choosy_dir"):
                    continue
                if attr_name.startswith("_") or not hasattr(self, attr_name):
                    continue
                current = getattr(self, attr_name)
                if isinstance(current, bool):
                    setattr(
                        self, attr_name, str(value).lower() in ("true", "1", "yes")
                    )
                else:
                    setattr(self, attr_name, str(value))

        # A malformed env section is reported by validate()
        if isinstance(self.env, dict):
            apply_env_dict(self.env)

        # Shell env vars have highest priority
        shell_env = {k: v for k, v in os.environ.items() if k.startswith(prefix)}
        apply_env_dict(shell_env)

    def validate(self) -> "PickerConfig":
        """Check setting types and colour names.

        Raises:
            ConfigurationError: tagged ``InvalidConfig``, naming the first
                bad setting
        """
        for name in COLOR_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigurationError(f"invalid {name}: {value!r} is not a string")
            try:
                Color.parse(value)
            except ColorParseError as e:
                raise ConfigurationError(f"invalid {name}: {value!r}") from e
        for name in self.TOGGLES:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigurationError(f"invalid {name}: {value!r} is not a boolean")
        if not isinstance(self.env, dict):
            raise ConfigurationError(f"invalid env: {self.env!r} is not a mapping")
        return self

    def get_toggles(self) -> Iterator[tuple[str, str, bool]]:
        """Yield (name, description, current value) for each toggle."""
        for name, description in self.TOGGLES.items():
            yield name, description, bool(getattr(self, name))

    def as_dict(self) -> dict:
        return {
            "text_color": self.text_color,
            "background_color": self.background_color,
            "selected_text_color": self.selected_text_color,
            "selected_text_bold": self.selected_text_bold,
            "debug": self.debug,
        }

    def save(self):
        """Save config to file."""
        self.choosy_dir.mkdir(parents=True, exist_ok=True)
        data = self.as_dict()
        if self.env:
            data["env"] = self.env
        self._config_file.write_text(json.dumps(data, indent=2))
