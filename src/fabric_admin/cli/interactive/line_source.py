"""
Line acquisition for the interactive shell.

A LineSource hands out one CommandLine at a time. Passing the previous line
back into next_line() releases it, so only one line is ever live.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout

if TYPE_CHECKING:
    from fabric_admin.cli.commands.registry import CommandRegistry


class CommandLine:
    """One line of operator input.

    The line is valid until released; text of a released line must not be used.
    """

    __slots__ = ("text", "released")

    def __init__(self, text: str):
        self.text = text
        self.released = False

    def release(self) -> None:
        self.released = True

    def __repr__(self) -> str:
        state = " released" if self.released else ""
        return f"<CommandLine {self.text!r}{state}>"


class LineSource:
    """Base class for line sources. Subclasses implement _read()."""

    def preload(self, entries: Iterable[str]) -> None:
        """Seed in-session recall with entries from a previous session."""

    def next_line(self, previous: Optional[CommandLine] = None) -> Optional[CommandLine]:
        """Release previous, then block until the next line is available.

        Returns:
            The new line, or None at end of input.
        """
        if previous is not None:
            previous.release()

        text = self._read()
        if text is None:
            return None
        return CommandLine(text)

    def _read(self) -> Optional[str]:
        raise NotImplementedError


class CommandCompleter(Completer):
    """Completer for command names from the command registry."""

    def __init__(self, registry: "CommandRegistry"):
        self.registry = registry

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor

        # Only the command name is completed
        if not text or " " in text:
            return

        for cmd, description in sorted(self.registry.get_completions().items()):
            if cmd.startswith(text):
                yield Completion(
                    cmd,
                    start_position=-len(text),
                    display_meta=description,
                )


class PromptLineSource(LineSource):
    """Reads lines from the terminal with prompt_toolkit.

    Up/down arrows and Ctrl+R recall earlier lines, including those preloaded
    from the history file. While the prompt is shown, sys.stdout is patched so
    log output from other threads does not garble the input line. Ctrl+C
    discards the current input and yields an empty line; Ctrl+D yields end of
    input.
    """

    def __init__(
        self,
        prompt: str = ">>> ",
        completer: Optional[Completer] = None,
        input=None,
        output=None,
    ):
        self.prompt = prompt
        self.recall = InMemoryHistory()
        self._session: PromptSession = PromptSession(
            history=self.recall,
            completer=completer,
            auto_suggest=AutoSuggestFromHistory(),
            enable_history_search=True,
            input=input,
            output=output,
        )

    def preload(self, entries: Iterable[str]) -> None:
        for entry in entries:
            self.recall.append_string(entry)

    def _read(self) -> Optional[str]:
        try:
            # Output from other threads is printed above the prompt, which
            # is then redrawn. raw keeps the clear-line sequences intact.
            with patch_stdout(raw=True):
                return self._session.prompt(self.prompt)
        except KeyboardInterrupt:
            return ""
        except EOFError:
            return None
