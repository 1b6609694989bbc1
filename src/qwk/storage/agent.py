"""Storage for the configured agent command string."""

from ..config.models import QwkConfig
from ..utils.error_handling import handle_storage_operation
from ..utils.logging import get_logger


class AgentStore:
    """Persists the raw agent command in the ``agent`` file.

    The command is kept verbatim; it is only split into program and default
    arguments when a shortcut is dispatched.
    """
    
    def __init__(self, config: QwkConfig):
        self.config = config
        self.path = config.agent_file
        self.logger = get_logger(__name__)
    
    @handle_storage_operation("reading agent")
    def get(self) -> str:
        """Return the stored agent command, or the default when none is stored."""
        if not self.path.exists():
            return self.config.default_agent
        
        command = self.path.read_text(encoding="utf-8").strip()
        if not command:
            self.logger.debug(f"{self.path} is blank, using default agent")
            return self.config.default_agent
        return command
    
    @handle_storage_operation("setting agent")
    def set(self, command: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(command, encoding="utf-8")
