"""
Alias storage for qwk.

Aliases live in a single pretty-printed JSON object (``aliases.json``) mapping
shortcut names to prompt text. Reads are tolerant: a missing file is an empty
map, and so is a corrupt one, which is logged as a warning because the next
save will overwrite whatever was there.

There is no locking. Two qwk processes writing at the same time race, and the
last write wins.
"""

import json
import shutil
from pathlib import Path
from typing import Dict, Optional

from ..config.models import QwkConfig
from ..utils.error_handling import handle_storage_operation
from ..utils.logging import get_logger
from ..utils.text import backup_timestamp

AliasMap = Dict[str, str]


def parse_aliases(text: str) -> Optional[AliasMap]:
    """Parse the contents of an aliases file.

    Returns None when the text is not a JSON object of strings to strings;
    the caller decides what to fall back to.
    """
    try:
        data = json.loads(text)
    except ValueError:
        return None
    
    if not isinstance(data, dict):
        return None
    if not all(isinstance(key, str) and isinstance(value, str) for key, value in data.items()):
        return None
    return data


def serialize_aliases(aliases: AliasMap) -> str:
    """Stable, human-readable JSON for an alias map."""
    return json.dumps(aliases, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


class AliasStore:
    """Reads and writes the alias map under the qwk config directory."""
    
    def __init__(self, config: QwkConfig):
        self.config = config
        self.path = config.aliases_file
        self.logger = get_logger(__name__)
    
    def exists(self) -> bool:
        return self.path.exists()
    
    @handle_storage_operation("loading aliases")
    def load(self) -> AliasMap:
        """Load the alias map, treating a missing or corrupt file as empty."""
        if not self.path.exists():
            return {}
        
        try:
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            text = ""

        aliases = parse_aliases(text)
        if aliases is None:
            self.logger.warning(f"Ignoring unreadable aliases file {self.path}; starting with no shortcuts")
            return {}
        return aliases
    
    @handle_storage_operation("saving aliases")
    def save(self, aliases: AliasMap) -> None:
        """Overwrite the aliases file with ``aliases``."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(serialize_aliases(aliases), encoding="utf-8")
        self.logger.debug(f"Saved {len(aliases)} aliases to {self.path}")
    
    def get(self, name: str) -> Optional[str]:
        return self.load().get(name)
    
    def set(self, name: str, prompt: str) -> None:
        """Create or overwrite a single alias."""
        aliases = self.load()
        aliases[name] = prompt
        self.save(aliases)
    
    def remove(self, name: str) -> bool:
        """Delete an alias. Returns False, and writes nothing, if it was absent."""
        aliases = self.load()
        if name not in aliases:
            return False
        del aliases[name]
        self.save(aliases)
        return True
    
    @handle_storage_operation("creating backup")
    def backup(self) -> Optional[Path]:
        """Copy the aliases file to a timestamped sibling.

        Returns the backup path, or None when there is no aliases file to copy.
        """
        if not self.path.exists():
            return None
        
        backup_path = self.config.backup_file(backup_timestamp())
        shutil.copyfile(self.path, backup_path)
        self.logger.debug(f"Backed up {self.path} to {backup_path}")
        return backup_path
    
    @handle_storage_operation("removing aliases file")
    def clear(self) -> bool:
        """Delete the aliases file. Returns False if there was none."""
        if not self.path.exists():
            return False
        self.path.unlink()
        return True
