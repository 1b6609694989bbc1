"""
CLI command handlers for qwk.

Each structured command (``--set``, ``--list``, ...) maps to one private
handler that works on the stores and prints its outcome. Handlers return the
process exit code; errors are raised as QwkError and reported by
handle_cli_command.
"""

import argparse
import sys
from typing import Optional, TextIO

from .commands import create_parser
from ..config import QwkConfig
from ..core.completion import generate_completions, setup_completion
from ..core.dispatch import COMMAND_PREFIX
from ..storage import AliasStore, AgentStore
from ..utils import (
    CompletionError,
    QwkError,
    StorageError,
    UsageError,
    confirm,
    get_logger,
    read_prompt_from_stdin,
    truncate_prompt,
)

logger = get_logger(__name__)


def handle_cli_command(args: argparse.Namespace, config: QwkConfig,
                       stdin: Optional[TextIO] = None,
                       stdout: Optional[TextIO] = None,
                       stderr: Optional[TextIO] = None) -> int:
    """
    Handle a parsed structured command.
    
    Returns:
        int: Exit code (0 for success, non-zero for error)
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    
    try:
        if args.set is not None:
            alias = args.set[0]
            prompt = args.set[1] if len(args.set) > 1 else None
            return _handle_set(config, alias, prompt, stdin, stdout, stderr)
        elif args.agent is not None:
            return _handle_agent(config, args.agent, stdout)
        elif args.list:
            return _handle_list(config, stdout)
        elif args.remove is not None:
            return _handle_remove(config, args.remove, stdout)
        elif args.reset:
            return _handle_reset(config, stdin, stdout)
        elif args.complete is not None:
            return _handle_complete(config, args.complete, stdout)
        elif args.setup_completion:
            return _handle_setup_completion(config, stdout)
        else:
            create_parser().print_help(stdout)
            return 0
            
    except QwkError as e:
        print(f"❌ {e.message}", file=stderr)
        return 1


def _handle_set(config: QwkConfig, alias: str, prompt: Optional[str],
                stdin: TextIO, stdout: TextIO, stderr: TextIO) -> int:
    """Create or update an alias, reading the prompt from stdin if needed."""
    if not alias:
        raise UsageError("Alias name must not be empty")
    if alias.startswith(COMMAND_PREFIX):
        raise UsageError(f"Alias name must not start with '{COMMAND_PREFIX}'")
    
    if prompt is None:
        if stdin.isatty():
            print("Enter the prompt, then press Ctrl-D:", file=stderr)
        try:
            prompt = read_prompt_from_stdin(stdin)
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Error reading prompt: {e}") from e
    
    AliasStore(config).set(alias, prompt)
    print(f"✅ Alias '{alias}' set successfully", file=stdout)
    return 0


def _handle_agent(config: QwkConfig, command: str, stdout: TextIO) -> int:
    """Store the agent command verbatim."""
    AgentStore(config).set(command)
    print(f"✅ Agent set to '{command}'", file=stdout)
    return 0


def _handle_list(config: QwkConfig, stdout: TextIO) -> int:
    """List shortcuts sorted by name with a one-line prompt preview."""
    aliases = AliasStore(config).load()
    
    if not aliases:
        print("No shortcuts available.", file=stdout)
        return 0
    
    print("Available shortcuts:", file=stdout)
    for alias in sorted(aliases):
        preview = truncate_prompt(aliases[alias], config.preview_width)
        print(f"  {alias} - {preview}", file=stdout)
    return 0


def _handle_remove(config: QwkConfig, alias: str, stdout: TextIO) -> int:
    """Remove an alias; a missing alias is reported but is not an error."""
    if AliasStore(config).remove(alias):
        print(f"✅ Shortcut '{alias}' removed successfully", file=stdout)
    else:
        print(f"Shortcut '{alias}' does not exist", file=stdout)
    return 0


def _handle_reset(config: QwkConfig, stdin: TextIO, stdout: TextIO) -> int:
    """Back up and delete the aliases file after confirmation."""
    question = "This will remove all shortcuts (a backup will be created). Are you sure?"
    if not confirm(question, stdin, stdout):
        print("Reset cancelled.", file=stdout)
        return 0
    
    store = AliasStore(config)
    backup_path = store.backup()
    if backup_path is not None:
        print(f"Backup created: {backup_path}", file=stdout)
    else:
        print("No existing aliases file to backup.", file=stdout)
    
    store.clear()
    logger.info("Aliases reset")
    print("✅ All shortcuts have been reset.", file=stdout)
    return 0


def _handle_complete(config: QwkConfig, partial: str, stdout: TextIO) -> int:
    """Print completion candidates, one per line."""
    for candidate in generate_completions(AliasStore(config).load(), partial):
        print(candidate, file=stdout)
    return 0


def _handle_setup_completion(config: QwkConfig, stdout: TextIO) -> int:
    """Install the completion snippet for the current shell."""
    try:
        setup_completion(config, stdout)
    except QwkError as e:
        raise CompletionError(f"Error setting up autocompletion: {e.message}", details=e.details) from e
    return 0
