from __future__ import annotations

import logging
from typing import Protocol, Sequence, TypeVar

import click

from swalogin.errors import NoCandidates, SelectionAborted
from swalogin.models import Candidate

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=Candidate)


class Chooser(Protocol):
    """Picks one candidate out of a list."""

    def choose(
        self,
        candidates: Sequence[C],
        preferred: str | None = None,
        *,
        label: str = "item",
    ) -> C:
        raise NotImplementedError


class BaseChooser:
    """Selection rules shared by every chooser.

    Subclasses only implement :meth:`ask`, the blocking part.
    """

    def choose(
        self,
        candidates: Sequence[C],
        preferred: str | None = None,
        *,
        label: str = "item",
    ) -> C:
        """Return the selected candidate.

        Args:
            candidates: What to choose from, in display order.
            preferred: Identifier to select without asking, if present in
                ``candidates``.
            label: Human name of the candidate kind, used in the prompt.

        Raises:
            NoCandidates: If ``candidates`` is empty.
            SelectionAborted: If the user cancels the prompt.
        """
        if not candidates:
            raise NoCandidates(f"No {label} to choose from.")
        if len(candidates) == 1:
            return candidates[0]
        if preferred is not None:
            for candidate in candidates:
                if candidate.id == preferred:
                    return candidate
            logger.debug("Preferred %s %s not among candidates", label, preferred)
        return self.ask(candidates, label)

    def ask(self, candidates: Sequence[C], label: str) -> C:
        raise NotImplementedError


class TerminalChooser(BaseChooser):
    """Numbered-list prompt on the terminal."""

    def ask(self, candidates: Sequence[C], label: str) -> C:
        click.echo(f"Choose your {label}:")
        for index, candidate in enumerate(candidates, start=1):
            click.echo(f"  {index}) {candidate.label}")
        try:
            answer = click.prompt(
                f"Select a {label}",
                type=click.IntRange(1, len(candidates)),
            )
        except (click.Abort, KeyboardInterrupt, EOFError) as e:
            raise SelectionAborted(f"No {label} selected.") from e
        return candidates[answer - 1]
