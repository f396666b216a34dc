"""Yes/no confirmation gates guarding destructive or high-impact changes."""

from __future__ import annotations

import sys
from typing import Callable, TextIO

YES_ANSWERS = frozenset({"y", "yes"})
NO_ANSWERS = frozenset({"n", "no"})


def format_prompt(prompt: str, default: bool | None) -> str:
    """``"<prompt> [Y]es/[n]o"`` with the default answer capitalised."""
    yes = "Y" if default is True else "y"
    no = "N" if default is False else "n"
    return f"{prompt} [{yes}]es/[{no}]o"


class Confirmation:
    """Base gate. Subclasses implement ``_answer``."""

    def __init__(self, out: TextIO | None = None):
        self._out = out

    @property
    def out(self) -> TextIO:
        return self._out or sys.stdout

    def confirm(
        self,
        prompt: str,
        detail: str | None = None,
        decline_message: str | None = None,
        default: bool | None = None,
    ) -> bool:
        """Ask once; return True to proceed. Prints ``decline_message`` on decline."""
        print(format_prompt(prompt, default), file=self.out)
        if detail:
            print(detail, file=self.out)
        if self._answer(default):
            return True
        if decline_message:
            print(decline_message, file=self.out)
        return False

    def _answer(self, default: bool | None) -> bool:
        raise NotImplementedError


class ConsoleConfirmation(Confirmation):
    """Interactive gate reading line answers from stdin.

    Accepts y/yes/n/no in any case. An empty line takes ``default`` when one
    is given; anything else is reported as invalid and asked again, with no
    retry limit. End of input counts as a decline.
    """

    def __init__(
        self,
        input_fn: Callable[[], str] | None = None,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ):
        super().__init__(out)
        self._input_fn = input_fn
        self._err = err

    def _read(self) -> str:
        if self._input_fn is not None:
            return self._input_fn()
        return input()

    def _answer(self, default: bool | None) -> bool:
        while True:
            try:
                answer = self._read().strip().lower()
            except EOFError:
                return False
            if answer in YES_ANSWERS:
                return True
            if answer in NO_ANSWERS:
                return False
            if answer == "" and default is not None:
                return default
            print("Invalid input", file=self._err or sys.stderr)


class AutoConfirmation(Confirmation):
    """Non-interactive gate with a fixed answer.

    ``AutoConfirmation(True)`` backs ``--yes``; ``AutoConfirmation(False)``
    fails closed for embedding without an operator.
    """

    def __init__(self, answer: bool, out: TextIO | None = None):
        super().__init__(out)
        self.answer = answer

    def _answer(self, default: bool | None) -> bool:
        return self.answer
