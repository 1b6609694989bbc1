"""
Command-line argument parser for qwk.

Only structured invocations (first argument starting with ``--``) reach this
parser; direct shortcut calls such as ``qwk review -- --model opus`` are
handled before it by the dispatcher.
"""

import argparse
from typing import Optional, Sequence

from .. import __version__

USAGE = """qwk <shortcut> [-- <agent-args>...]
       qwk --set ALIAS [PROMPT]
       qwk --agent COMMAND
       qwk --list | --reset | --setup-completion
       qwk --remove ALIAS"""


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="qwk",
        usage=USAGE,
        description="qwk - A CLI tool for creating aliases for AI agents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  qwk --set review "Review the staged changes"   # Store a shortcut
  echo "Summarize this repo" | qwk --set sum     # Read the prompt from stdin
  qwk review                                     # Run it with the agent
  qwk review -- --model opus                     # Pass extra agent arguments
  qwk --agent "claude --verbose"                 # Change the agent command
        """
    )
    
    parser.add_argument(
        "--version",
        action="version",
        version=f"qwk {__version__}"
    )
    
    commands = parser.add_mutually_exclusive_group()
    
    commands.add_argument(
        "--set",
        nargs="+",
        metavar=("ALIAS", "PROMPT"),
        help="Set an alias for a prompt. If no prompt is provided, it is read from stdin"
    )
    
    commands.add_argument(
        "--agent",
        type=str,
        metavar="COMMAND",
        help="Set the agent command to use (may include default arguments, "
             "passed on every call). Defaults to 'claude'"
    )
    
    commands.add_argument(
        "--list",
        action="store_true",
        help="List all available shortcuts"
    )
    
    commands.add_argument(
        "--remove",
        type=str,
        metavar="ALIAS",
        help="Remove a specific shortcut"
    )
    
    commands.add_argument(
        "--reset",
        action="store_true",
        help="Reset all shortcuts (creates a backup, keeps the agent setting)"
    )
    
    # Used by the shell completion scripts
    commands.add_argument(
        "--complete",
        nargs="?",
        const="",
        default=None,
        metavar="PARTIAL",
        help=argparse.SUPPRESS
    )
    
    commands.add_argument(
        "--setup-completion",
        action="store_true",
        help="Set up autocompletion for your current shell (modifies its startup file)"
    )
    
    return parser


def parse_args(args: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = create_parser()
    
    args = list(args) if args is not None else None
    # "qwk --complete --s" must treat "--s" as the partial word, not an option
    if args and len(args) == 2 and args[0] == "--complete":
        args = [f"--complete={args[1]}"]
    
    namespace = parser.parse_args(args)
    if namespace.set is not None and len(namespace.set) > 2:
        parser.error("--set takes an alias and at most one prompt (quote prompts containing spaces)")
    return namespace
