"""
Splitting of the stored agent command into a program and default arguments.

The agent setting is a free-form string such as ``claude --model opus`` or
``"my agent" --flag``. It is tokenized with POSIX shell quoting rules; the
first token is the program and the rest are passed on every call.
"""

import shlex
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class AgentCommand:
    """A parsed agent setting."""
    program: str
    default_args: List[str] = field(default_factory=list)


def split_command(text: str) -> Optional[List[str]]:
    """Tokenize ``text`` honoring quotes and escapes.

    Returns None if the text cannot be tokenized (unterminated quote or a
    trailing escape).
    """
    try:
        return shlex.split(text)
    except ValueError:
        return None


def parse_agent_command(text: str) -> AgentCommand:
    """Turn an agent setting into an AgentCommand.

    If tokenizing fails or produces nothing, the whole raw string is used as
    the program with no default arguments.
    """
    tokens = split_command(text)
    if not tokens:
        return AgentCommand(program=text, default_args=[])
    return AgentCommand(program=tokens[0], default_args=tokens[1:])
