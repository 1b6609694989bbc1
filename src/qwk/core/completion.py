"""
Shell completion and first-run setup for qwk.

Completion works by having the shell call ``qwk --complete=<word>``, which
prints every shortcut name and reserved flag starting with ``<word>``. The
snippets that wire this up are appended once to the user's shell startup
file, either on the first run or through ``qwk --setup-completion``.
"""

import sys
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, TextIO

from ..config.models import QwkConfig
from ..utils.error_handling import CompletionError, QwkError
from ..utils.logging import get_logger

logger = get_logger(__name__)

RESERVED_FLAGS = (
    "--set",
    "--agent",
    "--list",
    "--remove",
    "--reset",
    "--setup-completion",
    "--help",
)

COMPLETION_COMMENT = "# qwk autocompletion setup"
INSTALLED_MARKERS = ("_qwk_complete", "__qwk_complete")


class Shell(str, Enum):
    """Shells qwk can install completion for."""
    BASH = "bash"
    ZSH = "zsh"
    FISH = "fish"


COMPLETION_SCRIPTS = {
    Shell.BASH: '''
_qwk_complete() {
    local cur="${COMP_WORDS[COMP_CWORD]}"
    COMPREPLY=($(qwk --complete="$cur" 2>/dev/null))
}
complete -F _qwk_complete qwk
''',
    Shell.ZSH: '''
_qwk_complete() {
    local -a completions
    completions=(${(f)"$(qwk --complete="${words[CURRENT]}" 2>/dev/null)"})
    compadd -a completions
}
compdef _qwk_complete qwk
''',
    Shell.FISH: '''
function __qwk_complete
    set -l cur (commandline -ct)
    qwk --complete="$cur" 2>/dev/null
end
complete -c qwk -f -a "(__qwk_complete)"
''',
}


def generate_completions(aliases: Iterable[str], partial: Optional[str] = None) -> List[str]:
    """Sorted completion candidates, optionally filtered by a literal prefix."""
    candidates = set(aliases) | set(RESERVED_FLAGS)
    if partial:
        candidates = {candidate for candidate in candidates if candidate.startswith(partial)}
    return sorted(candidates)


def detect_shell(shell: Optional[str]) -> Optional[Shell]:
    """Work out the shell flavour from a ``$SHELL`` value."""
    if not shell:
        return None
    for candidate in (Shell.BASH, Shell.ZSH, Shell.FISH):
        if candidate.value in shell:
            return candidate
    return None


def completion_script(shell: Shell) -> str:
    return COMPLETION_SCRIPTS[shell]


def shell_rc_file(shell: Shell, home: Path) -> Path:
    """Startup file the completion snippet is appended to."""
    if shell is Shell.BASH:
        bashrc = home / ".bashrc"
        return bashrc if bashrc.exists() else home / ".bash_profile"
    if shell is Shell.ZSH:
        return home / ".zshrc"
    return home / ".config" / "fish" / "config.fish"


def is_completion_installed(shell: Shell, home: Path) -> bool:
    rc_file = shell_rc_file(shell, home)
    if not rc_file.exists():
        return False
    try:
        content = rc_file.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False
    return any(marker in content for marker in INSTALLED_MARKERS)


def install_completion(shell: Shell, home: Path) -> Path:
    """Append the completion snippet for ``shell`` to its startup file."""
    rc_file = shell_rc_file(shell, home)
    try:
        rc_file.parent.mkdir(parents=True, exist_ok=True)
        with open(rc_file, "a", encoding="utf-8") as f:
            f.write(f"{COMPLETION_COMMENT}\n{completion_script(shell)}\n")
    except OSError as e:
        raise CompletionError(
            f"Could not update {rc_file}: {e}",
            details={"shell": shell.value, "rc_file": str(rc_file)}
        ) from e
    logger.debug(f"Installed {shell.value} completion in {rc_file}")
    return rc_file


def setup_completion(config: QwkConfig, out: Optional[TextIO] = None) -> Shell:
    """Install completion for the current shell unless it is already there.

    Raises:
        CompletionError: If the shell cannot be detected or the startup file
            cannot be written
    """
    out = out or sys.stdout
    shell = detect_shell(config.shell)
    if shell is None:
        raise CompletionError("Could not detect current shell", details={"shell": config.shell})
    
    if is_completion_installed(shell, config.home):
        print(f"Autocompletion is already set up for {shell.value}", file=out)
        return shell
    
    rc_file = install_completion(shell, config.home)
    print(f"Autocompletion set up for {shell.value}!", file=out)
    print(f"Restart your shell or run 'source {_display_path(rc_file, config.home)}' to activate.", file=out)
    return shell


def _display_path(path: Path, home: Path) -> str:
    try:
        return "~/" + str(path.relative_to(home))
    except ValueError:
        return str(path)


def is_first_run(config: QwkConfig) -> bool:
    return not config.first_run_marker.exists()


def mark_first_run_complete(config: QwkConfig) -> None:
    config.first_run_marker.parent.mkdir(parents=True, exist_ok=True)
    config.first_run_marker.touch()


def handle_first_run(config: QwkConfig, out: Optional[TextIO] = None) -> bool:
    """Try to set up completion once per user.

    Failures are logged and never stop the command being run. Returns True
    if this was the first run.
    """
    if not is_first_run(config):
        return False
    
    out = out or sys.stdout
    print("Welcome to qwk! Setting up autocompletion...", file=out)
    try:
        setup_completion(config, out)
    except QwkError as e:
        logger.warning(f"Could not set up autocompletion automatically: {e.message}")
        logger.warning("You can set it up manually later with: qwk --setup-completion")
    
    try:
        mark_first_run_complete(config)
    except OSError as e:
        logger.warning(f"Could not mark first run as complete: {e}")
    return True
