"""
qwk core: agent command parsing, shortcut dispatch and shell completion.
"""

from .tokenizer import AgentCommand, split_command, parse_agent_command
from .dispatch import (
    Invocation,
    classify,
    split_call_args,
    AgentCall,
    ShortcutDispatcher,
    run_agent,
)
from .completion import (
    RESERVED_FLAGS,
    Shell,
    generate_completions,
    detect_shell,
    completion_script,
    shell_rc_file,
    is_completion_installed,
    install_completion,
    setup_completion,
    is_first_run,
    mark_first_run_complete,
    handle_first_run,
)

__all__ = [
    "AgentCommand",
    "split_command",
    "parse_agent_command",
    "Invocation",
    "classify",
    "split_call_args",
    "AgentCall",
    "ShortcutDispatcher",
    "run_agent",
    "RESERVED_FLAGS",
    "Shell",
    "generate_completions",
    "detect_shell",
    "completion_script",
    "shell_rc_file",
    "is_completion_installed",
    "install_completion",
    "setup_completion",
    "is_first_run",
    "mark_first_run_complete",
    "handle_first_run",
]
