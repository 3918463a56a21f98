"""Interactive conflict resolution.

The merger never talks to the terminal directly: it asks a :class:`Chooser`
for an index. Any failure to obtain one (no TTY, Ctrl-C, a broken widget, an
out-of-range answer) counts as picking the first candidate.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Sequence, Tuple, TypeVar

import questionary

from .logging import get_logger

T = TypeVar("T")

logger = get_logger("prompting")


class Chooser(Protocol):
    """Returns the 0-based index of the option the user picked."""

    def choose(self, label: str, options: Sequence[str]) -> int:
        ...


@dataclass(frozen=True)
class PromptTheme:
    """Formatting for conflict prompts. Pure data, passed to the chooser."""

    question: str = "Which of these do you want in your README?"
    pointer: str = "○"
    styles: Tuple[Tuple[str, str], ...] = field(
        default=(
            ("qmark", "fg:#7f00ff bold"),
            ("question", "bold"),
            ("pointer", "fg:#00aa00 bold"),
            ("highlighted", "fg:#00aa00"),
            ("answer", "fg:#b58900"),
        )
    )

    def label(self, field_name: str) -> str:
        return f"[{field_name}] {self.question}"

    def style(self) -> questionary.Style:
        return questionary.Style(list(self.styles))


class FirstChoiceChooser:
    """Non-interactive chooser: always the first candidate."""

    def choose(self, label: str, options: Sequence[str]) -> int:
        return 0


class QuestionaryChooser:
    """Arrow-key selection list rendered by questionary."""

    def __init__(self, theme: PromptTheme | None = None) -> None:
        self.theme = theme or PromptTheme()

    def choose(self, label: str, options: Sequence[str]) -> int:
        choices = list(options)
        answer = questionary.select(
            label,
            choices=choices,
            default=choices[0] if choices else None,
            pointer=self.theme.pointer,
            style=self.theme.style(),
        ).ask()
        if answer is None:
            return 0
        return choices.index(answer)


def safe_choose(chooser: Chooser, label: str, options: Sequence[str]) -> int:
    """Ask *chooser*, falling back to index 0 on any failure."""
    if not options:
        return 0
    try:
        index = chooser.choose(label, options)
    except (KeyboardInterrupt, EOFError):
        logger.debug("Selection cancelled; using the first candidate")
        return 0
    except Exception as exc:
        logger.debug("Selection failed (%s); using the first candidate", exc)
        return 0
    if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(options):
        logger.debug("Selection %r out of range; using the first candidate", index)
        return 0
    return index


def resolve_conflict(
    field_name: str,
    values: Sequence[Optional[T]],
    chooser: Chooser,
    *,
    display: Callable[[T], str] = str,
    theme: PromptTheme | None = None,
) -> Optional[T]:
    """Reduce the candidate values of one field to a single value.

    ``None`` entries are dropped. No values gives ``None``; a single value is
    returned as is. Two or more values, duplicates included, are offered to
    the chooser as a list deduplicated by their display text.
    """
    present = [value for value in values if value is not None]
    if not present:
        return None
    if len(present) == 1:
        return present[0]

    labels: List[str] = []
    candidates: List[T] = []
    for value in present:
        text = display(value)
        if text in labels:
            continue
        labels.append(text)
        candidates.append(value)

    theme = theme or PromptTheme()
    index = safe_choose(chooser, theme.label(field_name), labels)
    return candidates[index]


__all__ = [
    "Chooser",
    "FirstChoiceChooser",
    "PromptTheme",
    "QuestionaryChooser",
    "resolve_conflict",
    "safe_choose",
]
