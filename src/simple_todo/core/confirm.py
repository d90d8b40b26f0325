# src/simple_todo/core/confirm.py

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from ..errors import InvalidTransition
from .ports import ConfirmationProvider, ConfirmOption

logger = logging.getLogger(__name__)


class ConfirmState(StrEnum):
    IDLE = "idle"
    AWAITING_FIRST = "awaiting_first"
    AWAITING_SECOND = "awaiting_second"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


_AWAITING = (ConfirmState.AWAITING_FIRST, ConfirmState.AWAITING_SECOND)

_ALLOWED: dict[ConfirmState, frozenset[ConfirmState]] = {
    ConfirmState.IDLE: frozenset({ConfirmState.AWAITING_FIRST}),
    ConfirmState.AWAITING_FIRST: frozenset(
        {ConfirmState.AWAITING_SECOND, ConfirmState.COMMITTED, ConfirmState.CANCELLED}
    ),
    ConfirmState.AWAITING_SECOND: frozenset({ConfirmState.COMMITTED, ConfirmState.CANCELLED}),
    ConfirmState.COMMITTED: frozenset({ConfirmState.IDLE}),
    ConfirmState.CANCELLED: frozenset({ConfirmState.IDLE}),
}


@dataclass(frozen=True, slots=True)
class ConfirmStep:
    title: str
    message: str
    options: tuple[ConfirmOption, ...] = (ConfirmOption.CANCEL, ConfirmOption.AFFIRM)


@dataclass(slots=True)
class ConfirmationWorkflow:
    """
    Sequential confirmation as an explicit state machine.

    idle -> awaiting_first [-> awaiting_second] -> committed | cancelled

    Any answer other than an affirmative one cancels. A provider error also
    cancels (nothing destructive happens on a broken prompt). At most two
    steps are supported.
    """

    provider: ConfirmationProvider
    steps: Sequence[ConfirmStep]
    state: ConfirmState = ConfirmState.IDLE
    history: list[ConfirmState] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not 1 <= len(self.steps) <= 2:
            raise ValueError("a confirmation workflow needs one or two steps")

    def _move(self, new_state: ConfirmState) -> None:
        if new_state not in _ALLOWED[self.state]:
            raise InvalidTransition(f"{self.state.value} -> {new_state.value}")
        self.history.append(self.state)
        self.state = new_state

    def reset(self) -> None:
        if self.state in _AWAITING:
            raise InvalidTransition(f"cannot reset while {self.state.value}")
        if self.state is not ConfirmState.IDLE:
            self._move(ConfirmState.IDLE)

    async def run(self) -> bool:
        """Ask every step in order; True only if all of them were affirmed."""
        if self.state is not ConfirmState.IDLE:
            raise InvalidTransition(f"workflow already {self.state.value}")

        for i, step in enumerate(self.steps):
            self._move(ConfirmState.AWAITING_FIRST if i == 0 else ConfirmState.AWAITING_SECOND)
            try:
                answer = await self.provider.confirm(step.title, step.message, step.options)
            except Exception:
                logger.exception("Confirmation prompt failed: %s", step.title)
                self._move(ConfirmState.CANCELLED)
                return False

            try:
                affirmed = ConfirmOption(answer).is_affirmative
            except ValueError:
                logger.warning("Unrecognised confirmation answer %r for %s", answer, step.title)
                affirmed = False

            if not affirmed:
                logger.debug("Confirmation cancelled at step %d (%s)", i + 1, step.title)
                self._move(ConfirmState.CANCELLED)
                return False

        self._move(ConfirmState.COMMITTED)
        return True

