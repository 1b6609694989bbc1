"""
Shortcut dispatch for qwk.

A qwk invocation is classified once from its raw arguments:

* no arguments                      -> HELP
* first argument starts with ``--`` -> STRUCTURED_COMMAND (argparse takes over)
* anything else                     -> DIRECT_SHORTCUT

A direct shortcut call looks up the stored prompt, splits the agent setting
into program and default arguments, appends any per-call arguments given
after a literal ``--``, and runs the agent with the prompt as its final
argument. The agent inherits stdin, stdout and stderr and qwk exits with the
agent's exit code.
"""

import subprocess
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Sequence

from .tokenizer import parse_agent_command
from ..storage import AliasStore, AgentStore
from ..utils.error_handling import AgentSpawnError, ShortcutNotFoundError, UsageError
from ..utils.logging import get_logger, log_performance

COMMAND_PREFIX = "--"
ARGS_SEPARATOR = "--"

logger = get_logger(__name__)


class Invocation(Enum):
    """How a raw argument vector is to be handled."""
    HELP = "help"
    DIRECT_SHORTCUT = "direct_shortcut"
    STRUCTURED_COMMAND = "structured_command"


def classify(argv: Sequence[str]) -> Invocation:
    """Decide how to handle ``argv`` (the process arguments without argv[0])."""
    if not argv:
        return Invocation.HELP
    if argv[0].startswith(COMMAND_PREFIX):
        return Invocation.STRUCTURED_COMMAND
    return Invocation.DIRECT_SHORTCUT


def split_call_args(shortcut: str, extra: Sequence[str]) -> List[str]:
    """Return the per-call agent arguments from the tokens after a shortcut name.

    Everything after the first ``--`` goes to the agent unchanged; tokens
    between the shortcut name and the separator are ignored. Extra tokens
    without any separator raise UsageError.
    """
    if not extra:
        return []
    
    if ARGS_SEPARATOR not in extra:
        raise UsageError(
            f"Invalid usage. Use 'qwk {shortcut} -- <agent-args>' to pass arguments to the agent",
            details={"shortcut": shortcut, "arguments": list(extra)}
        )
    return list(extra[extra.index(ARGS_SEPARATOR) + 1:])


@dataclass(frozen=True)
class AgentCall:
    """A fully resolved agent invocation."""
    program: str
    args: List[str] = field(default_factory=list)
    
    @property
    def argv(self) -> List[str]:
        return [self.program, *self.args]


def run_agent(program: str, args: Sequence[str]) -> int:
    """Run the agent in the foreground and return its exit code.

    There is no timeout. Signals are not intercepted: an interrupt reaches
    the agent from the terminal and propagates out of qwk unchanged.
    """
    try:
        process = subprocess.Popen([program, *args])
    except OSError as e:
        raise AgentSpawnError(program, e) from e
    
    with log_performance(f"agent '{program}'"):
        returncode = process.wait()
    
    # Negative return codes mean the agent was killed by a signal
    return returncode if returncode >= 0 else 0


AgentRunner = Callable[[str, Sequence[str]], int]


class ShortcutDispatcher:
    """Resolves and runs shortcut invocations."""
    
    def __init__(self, alias_store: AliasStore, agent_store: AgentStore,
                 runner: AgentRunner = run_agent):
        self.alias_store = alias_store
        self.agent_store = agent_store
        self.runner = runner
    
    def resolve(self, shortcut: str, extra: Sequence[str] = ()) -> AgentCall:
        """Build the agent call for ``shortcut`` without running it.

        Raises:
            ShortcutNotFoundError: If no alias named ``shortcut`` exists
            UsageError: If ``extra`` is not empty and not ``-- <args>``
        """
        prompt = self.alias_store.get(shortcut)
        if prompt is None:
            raise ShortcutNotFoundError(shortcut)
        
        agent = parse_agent_command(self.agent_store.get())
        per_call_args = split_call_args(shortcut, extra)
        
        return AgentCall(
            program=agent.program,
            args=[*agent.default_args, *per_call_args, prompt],
        )
    
    def run(self, shortcut: str, extra: Sequence[str] = ()) -> int:
        """Run ``shortcut`` and return the agent's exit code."""
        call = self.resolve(shortcut, extra)
        logger.debug(f"Running shortcut '{shortcut}': {call.program} with {len(call.args)} arguments")
        return self.runner(call.program, call.args)
