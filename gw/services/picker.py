"""Interactive fuzzy picker backed by fzf."""

import shlex
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from gw.constants import (
    PICKER_DELIMITER,
    PICKER_EXIT_CANCELLED,
    PICKER_EXIT_NO_MATCH,
    PICKER_EXIT_OK,
)
from gw.exceptions import GwError, PickerUnavailableError
from gw.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class PickerResult:
    """What the user did in the picker.

    Attributes:
        query: Text typed into the prompt (only with print_query)
        key: Key that ended the session (only with expect keys)
        selection: Selected lines, empty when nothing matched
        cancelled: User aborted with ESC / Ctrl-C
    """

    query: str = ""
    key: str = ""
    selection: List[str] = field(default_factory=list)
    cancelled: bool = False

    @property
    def selected(self) -> Optional[str]:
        """First selected line, if any."""
        return self.selection[0] if self.selection else None


class FzfPicker:
    """Runs fzf over picker lines formatted as "<key><TAB><label>"."""

    def __init__(self, command: str = "fzf", height: str = "40%"):
        self.command = shlex.split(command)
        self.height = height

    def build_args(
        self,
        prompt: Optional[str] = None,
        header: Optional[str] = None,
        preview: Optional[str] = None,
        query: str = "",
        print_query: bool = False,
        expect: Sequence[str] = (),
    ) -> List[str]:
        """Build the fzf command line."""
        args = list(self.command)
        args += [
            "--height", self.height,
            "--reverse",
            "--ansi",
            f"--delimiter={PICKER_DELIMITER}",
            "--with-nth=2..",
        ]
        if prompt:
            args += ["--prompt", prompt]
        if header:
            args += ["--header", header]
        if preview:
            args += ["--preview", preview, "--preview-window", "right:60%:wrap"]
        if query:
            args += ["--query", query]
        if print_query:
            args.append("--print-query")
        if expect:
            args.append(f"--expect={','.join(expect)}")
        return args

    @staticmethod
    def parse_output(
        stdout: str, returncode: int, print_query: bool = False, expect: Sequence[str] = ()
    ) -> PickerResult:
        """Parse fzf stdout into a PickerResult.

        With --print-query the first line is the query; with --expect the
        next line is the key pressed (empty for the default accept key).
        """
        if returncode == PICKER_EXIT_CANCELLED:
            return PickerResult(cancelled=True)

        lines = stdout.split("\n")
        if lines and lines[-1] == "":
            lines.pop()

        result = PickerResult()
        if print_query:
            result.query = lines.pop(0).strip() if lines else ""
        if expect:
            result.key = lines.pop(0) if lines else ""
        result.selection = [line for line in lines if line]
        return result

    def pick(
        self,
        lines: Sequence[str],
        prompt: Optional[str] = None,
        header: Optional[str] = None,
        preview: Optional[str] = None,
        query: str = "",
        print_query: bool = False,
        expect: Sequence[str] = (),
    ) -> PickerResult:
        """Show lines in fzf and return the user's choice.

        Raises:
            PickerUnavailableError: If fzf cannot be executed
            GwError: If fzf exits with an error
        """
        args = self.build_args(prompt, header, preview, query, print_query, expect)
        logger.debug(f"Running picker: {args}")
        try:
            proc = subprocess.run(
                args,
                input="\n".join(lines) + "\n",
                stdout=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError:
            raise PickerUnavailableError(self.command[0])

        if proc.returncode not in (PICKER_EXIT_OK, PICKER_EXIT_NO_MATCH, PICKER_EXIT_CANCELLED):
            raise GwError(f"{self.command[0]} exited with status {proc.returncode}")

        result = self.parse_output(proc.stdout or "", proc.returncode, print_query, expect)
        logger.debug(f"Picker result: {result}")
        return result
