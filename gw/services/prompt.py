"""Yes/no confirmation prompts on the terminal."""

from rich.console import Console

from gw.logging_config import get_logger

logger = get_logger(__name__)


class Prompter:
    """Asks yes/no questions. Only "y" or "Y" counts as yes."""

    def __init__(self, console: Console):
        self.console = console

    def confirm(self, message: str) -> bool:
        try:
            response = self.console.input(f"{message} \\[y/N] ")
        except EOFError:
            logger.debug("No input available, treating as 'no'")
            return False
        return response.strip() in ("y", "Y")
