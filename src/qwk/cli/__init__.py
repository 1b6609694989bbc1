"""
CLI module for qwk.

Argument parsing and handlers for the structured ``--`` commands.
"""

from .commands import create_parser, parse_args
from .handlers import handle_cli_command

__all__ = ["create_parser", "parse_args", "handle_cli_command"]
