"""Small text and terminal helpers used by the command handlers."""

import sys
from datetime import datetime
from typing import Optional, TextIO

ELLIPSIS = "..."
BACKUP_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def truncate_prompt(prompt: str, max_length: int) -> str:
    """Collapse a prompt onto one line and cut it to ``max_length`` characters.

    Newlines and runs of whitespace become single spaces. When the collapsed
    text is too long, it is shortened so that the text plus a trailing
    ``...`` is exactly ``max_length`` characters.
    """
    cleaned = " ".join(prompt.split())
    if len(cleaned) <= max_length:
        return cleaned
    if max_length <= len(ELLIPSIS):
        return ELLIPSIS[:max(max_length, 0)]
    return cleaned[:max_length - len(ELLIPSIS)] + ELLIPSIS


def backup_timestamp(now: Optional[datetime] = None) -> str:
    """Seconds-resolution timestamp used in backup file names."""
    return (now or datetime.now()).strftime(BACKUP_TIMESTAMP_FORMAT)


def read_prompt_from_stdin(stream: Optional[TextIO] = None) -> str:
    """Read everything from stdin and return it trimmed."""
    stream = stream or sys.stdin
    return stream.read().strip()


def confirm(question: str, stream_in: Optional[TextIO] = None,
            stream_out: Optional[TextIO] = None) -> bool:
    """Ask a y/N question. Only "y" or "yes" (any case) counts as consent."""
    stream_in = stream_in or sys.stdin
    stream_out = stream_out or sys.stdout
    
    stream_out.write(f"{question} (y/N): ")
    stream_out.flush()
    
    try:
        answer = stream_in.readline()
    except (OSError, UnicodeDecodeError):
        return False
    
    return answer.strip().lower() in ("y", "yes")
