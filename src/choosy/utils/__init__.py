"""Utilities for choosy."""

from choosy.utils.config import PickerConfig, get_choosy_dir

__all__ = ["PickerConfig", "get_choosy_dir"]
