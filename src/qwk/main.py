"""
Main entry point for qwk.

This module provides the ``qwk`` console script. Raw arguments are
classified once: no arguments prints help, a first argument starting with
``--`` is a structured command for argparse, and anything else is a
shortcut name to run.
"""

import sys
from typing import Mapping, Optional, Sequence

from .cli import create_parser, handle_cli_command, parse_args
from .config import load_config
from .core.completion import handle_first_run
from .core.dispatch import AgentRunner, Invocation, ShortcutDispatcher, classify, run_agent
from .storage import AliasStore, AgentStore
from .utils import ConfigurationError, QwkError, get_logger, setup_logging


def main(argv: Optional[Sequence[str]] = None,
         environ: Optional[Mapping[str, str]] = None,
         runner: AgentRunner = run_agent) -> int:
    """Run qwk with ``argv`` (defaults to ``sys.argv[1:]``) and return the exit code."""
    argv = list(sys.argv[1:] if argv is None else argv)
    
    try:
        config = load_config(environ)
        setup_logging(config)
        logger = get_logger(__name__)
        logger.debug(f"Arguments: {argv}")
        
        # Completion callbacks must never trigger setup themselves
        if not argv or "complete" not in argv[0]:
            handle_first_run(config)
        
        invocation = classify(argv)
        if invocation is Invocation.HELP:
            create_parser().print_help()
            return 0
        
        if invocation is Invocation.DIRECT_SHORTCUT:
            dispatcher = ShortcutDispatcher(AliasStore(config), AgentStore(config), runner)
            return dispatcher.run(argv[0], argv[1:])
        
        return handle_cli_command(parse_args(argv), config)
        
    except ConfigurationError as e:
        print(f"❌ Configuration error: {e.message}", file=sys.stderr)
        return 1
    except QwkError as e:
        print(f"❌ {e.message}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print(file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
