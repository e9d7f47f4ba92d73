"""Model and persistence of GitHub Action metadata descriptors."""

from .config import ActionsSettings, get_settings
from .errors import ActionsError, ActionsIOError, ActionsNotImplemented
from .models import (
    ActionBranding,
    ActionDescriptor,
    ActionInput,
    ActionOutput,
    ActionRuns,
    load_action,
)

__all__ = [
    "ActionBranding",
    "ActionDescriptor",
    "ActionInput",
    "ActionOutput",
    "ActionRuns",
    "ActionsError",
    "ActionsIOError",
    "ActionsNotImplemented",
    "ActionsSettings",
    "get_settings",
    "load_action",
]
