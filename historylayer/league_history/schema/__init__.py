"""Schema exports."""

from . import models
from .inputs import PlayoffScenario, PositionalFilter, ScenarioPick

__all__ = ["models", "PlayoffScenario", "PositionalFilter", "ScenarioPick"]
