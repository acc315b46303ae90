"""
Textual progress bar.

Draws a single line such as ``[#####-----]  50%`` and redraws it in place
with a carriage return. Assumes nothing else writes to the same stream
while the bar is active. Rounding means the bar is close to, not exactly,
the true progress.
"""

import sys
from typing import Optional, TextIO

BAR_FORMAT = "[%s] %3d%%\r"
# Characters in the line that are not part of the bar: "[", "] ", "100" and "%"
NON_BAR_CHARACTERS = 7
BAR_COMPLETE_CHAR = "#"
BAR_INCOMPLETE_CHAR = "-"


class ProgressBarError(RuntimeError):
    """Raised by a strict progress bar that is updated past 100%."""


class ProgressBar:
    """A progress bar that reaches 100% after ``total`` calls to update()."""

    def __init__(
        self,
        total: int,
        output: Optional[TextIO] = None,
        line_width: int = 70,
        strict: bool = False,
    ):
        if total < 0:
            raise ValueError("total must not be negative")

        self.output = output if output is not None else sys.stdout
        self.total = total
        self.current = 0
        self.bar_width = max(line_width - NON_BAR_CHARACTERS, 1)
        self.strict = strict
        # 0..bar_width, how much of the bar is filled
        self._progress = float(self.bar_width) if total == 0 else 0.0
        self._finished = total == 0

        self._draw()
        if self._finished:
            self.output.write("\n")
        self.output.flush()

    @property
    def percent(self) -> int:
        return self._percent(self._progress)

    @property
    def is_complete(self) -> bool:
        return self._finished

    def enable_strict_mode(self) -> None:
        """Make update() raise once progress has already reached 100%."""
        self.strict = True

    def update(self) -> None:
        """Advance by one step, redrawing when the percentage changes."""
        if self.current >= self.total:
            if self.strict:
                raise ProgressBarError("Unnecessary update() to progress bar, progress is already at 100%")
            return

        self.current += 1
        newest = self.current / self.total * self.bar_width

        if self._percent(newest) > self._percent(self._progress):
            self._progress = newest
            self._draw()

        # Print a newline once so later output does not erase the bar
        if self.current == self.total and not self._finished:
            self._finished = True
            self.output.write("\n")
        self.output.flush()

    def _percent(self, progress: float) -> int:
        return int(progress / self.bar_width * 100)

    def _draw(self) -> None:
        filled = int(self._progress)
        bar = BAR_COMPLETE_CHAR * filled + BAR_INCOMPLETE_CHAR * (self.bar_width - filled)
        self.output.write(BAR_FORMAT % (bar, self.percent))
