"""Phrasal verb grouping for tagged token streams."""

from .config import GroupingOptions, load_options_from_env
from .grouping import (
    CollaboratorError,
    group_phrasal_verbs,
    group_phrasal_verbs_sync,
)
from .tokens import Definition, Token, join_field

__all__ = [
    "CollaboratorError",
    "Definition",
    "GroupingOptions",
    "Token",
    "group_phrasal_verbs",
    "group_phrasal_verbs_sync",
    "join_field",
    "load_options_from_env",
]
