"""Persistent state: the alias map and the agent command."""

from .aliases import AliasMap, AliasStore, parse_aliases, serialize_aliases
from .agent import AgentStore

__all__ = [
    "AliasMap",
    "AliasStore",
    "AgentStore",
    "parse_aliases",
    "serialize_aliases",
]
