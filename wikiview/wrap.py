"""Optimal-fit line wrapping of styled words."""

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from .model import Line, RenderedDocument, Style, Word, display_width


@dataclass
class Penalties:
    """Costs steering the optimal-fit line breaker."""
    nline_penalty: int = 1000  # every extra line
    overflow_penalty: int = 50 * 50  # per column a lone fragment sticks out
    short_last_line_fraction: int = 4
    short_last_line_penalty: int = 25
    hyphen_penalty: int = 25


def wrap_optimal_fit(fragments: Sequence[Word], line_widths: Sequence[float],
                     penalties: Optional[Penalties] = None) -> list[list[Word]]:
    """Break fragments into lines minimising the total penalty.

    Line k is measured against line_widths[k]; lines past the end of
    line_widths use its last entry. A line may only be wider than its target
    when it holds a single fragment, so nothing is ever dropped but no line
    of several fragments overflows.
    """
    if penalties is None:
        penalties = Penalties()
    n = len(fragments)
    if n == 0:
        return []

    default_width = line_widths[-1] if line_widths else 0.0
    max_target = max([max(w, 1.0) for w in line_widths] or [1.0])

    # widths[k] is the width of fragments[:k] including their trailing gaps
    widths = [0.0]
    for fragment in fragments:
        widths.append(widths[-1] + fragment.width + fragment.whitespace_width)

    costs = [0.0] + [math.inf] * n
    breaks = [0] * (n + 1)
    line_numbers = [0] * (n + 1)

    for j in range(1, n + 1):
        last = fragments[j - 1]
        for i in range(j - 1, -1, -1):
            single = i == j - 1
            width = widths[j] - widths[i] - last.whitespace_width + last.penalty_width
            if width > max_target and not single:
                # Starting earlier only makes the line wider
                break

            line_number = line_numbers[i]
            target = line_widths[line_number] if line_number < len(line_widths) else default_width
            target = max(target, 1.0)

            cost = costs[i] + penalties.nline_penalty
            if width > target:
                if not single:
                    continue
                cost += (width - target) * penalties.overflow_penalty
            elif j < n:
                gap = target - width
                cost += gap * gap
            elif single and width < target / penalties.short_last_line_fraction:
                cost += penalties.short_last_line_penalty

            if last.penalty_width > 0:
                cost += penalties.hyphen_penalty

            if cost < costs[j]:
                costs[j] = cost
                breaks[j] = i
                line_numbers[j] = line_number + 1

    lines: list[list[Word]] = []
    pos = n
    while pos > 0:
        prev = breaks[pos]
        lines.append(list(fragments[prev:pos]))
        pos = prev
    lines.reverse()
    return lines


class LineWrapper:
    """Accumulates wrapped lines for one render.

    The last, possibly partial, line stays in current_line so that text
    arriving in several batches (one per inline node) flows as one paragraph.
    """

    def __init__(self, width: int, penalties: Optional[Penalties] = None):
        self.width = width
        self.penalties = penalties or Penalties()
        self.rendered_lines: list[Line] = []
        self.current_line: list[Word] = []
        self.left_padding = 0
        self.prefix: Optional[str] = None

    def is_last_whitespace(self) -> bool:
        """Whether the current line ends in a synthetic gap."""
        return bool(self.current_line) and self.current_line[-1].is_synthetic

    def is_last_empty(self) -> bool:
        """Whether the last finished line is blank (False while a line is open)."""
        if self.current_line:
            return False
        return bool(self.rendered_lines) and not self.rendered_lines[-1]

    def add_whitespace(self):
        """Append a zero-width gap word; at most one in a row, never at line start."""
        if not self.current_line or self.is_last_whitespace():
            return
        self.current_line.append(Word.whitespace(1))

    def retract_whitespace(self):
        if self.is_last_whitespace():
            self.current_line.pop()

    def clear_line(self):
        if not self.current_line:
            return
        self.rendered_lines.append(tuple(self.current_line))
        self.current_line = []

    def add_empty_line(self):
        self.clear_line()
        self.rendered_lines.append(())

    def ensure_empty_line(self):
        if not self.is_last_empty():
            self.add_empty_line()

    def _indent_words(self) -> list[Word]:
        words = []
        if self.left_padding:
            words.append(Word.whitespace(self.left_padding))
        if self.prefix is not None:
            words.append(Word(None, self.prefix, Style(), float(display_width(self.prefix)), 1.0))
        return words

    def _current_width(self) -> float:
        return sum(word.width + word.whitespace_width for word in self.current_line)

    def wrap_append(self, words: Sequence[Word]):
        """Fill up the current line with words and wrap the rest into new lines."""
        if not words:
            return

        remaining_width = self.width - self._current_width()

        # A first word that does not fit would leave the breaker an impossible first line
        if words[0].width > remaining_width:
            remaining_width = self.width
            self.clear_line()

        indent = self._indent_words()
        indent_width = sum(word.width + word.whitespace_width for word in indent)
        if not self.current_line:
            self.current_line.extend(indent)
            remaining_width -= indent_width

        wrapped = wrap_optimal_fit(
            words, [remaining_width, self.width - indent_width], self.penalties)

        self.current_line.extend(wrapped[0])
        following = [indent + line for line in wrapped[1:]]
        if following:
            self.clear_line()
            self.current_line = following.pop()
            self.rendered_lines.extend(tuple(line) for line in following)

    def finish(self) -> RenderedDocument:
        self.clear_line()
        return RenderedDocument(tuple(self.rendered_lines))
