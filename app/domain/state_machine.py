"""Declarative lifecycle transition tables for RFPs and supplier responses.

Each table maps a lifecycle action to the statuses it may start from and the
status it moves the entity to. Lifecycle services ask the table for the
target status; an action that is not legal from the current status raises
InvalidStateException and nothing is written.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from app.domain.enums import ResponseStatus, RfpStatus
from app.domain.exceptions import InvalidStateException


@dataclass(frozen=True)
class Transition:
    """One lifecycle edge set: any of `sources` moves to `target`."""

    sources: frozenset[str]
    target: str


@dataclass(frozen=True)
class TransitionTable:
    """Finite state machine for one entity kind."""

    entity: str
    transitions: Mapping[str, Transition] = field(default_factory=dict)

    def can(self, action: str, current: str) -> bool:
        """Return whether `action` is legal from `current`."""
        transition = self.transitions.get(action)
        return transition is not None and current in transition.sources

    def target_for(self, action: str, current: str) -> str:
        """Return the status `action` leads to from `current`.

        Raises:
            InvalidStateException: When the action is unknown or not legal
                from the current status.
        """
        if not self.can(action, current):
            raise InvalidStateException(self.entity, action, current)
        return self.transitions[action].target

    def statuses(self) -> frozenset[str]:
        """Return every status mentioned by the table."""
        found: set[str] = set()
        for transition in self.transitions.values():
            found.update(transition.sources)
            found.add(transition.target)
        return frozenset(found)


def _t(sources: tuple[str, ...], target: str) -> Transition:
    return Transition(sources=frozenset(sources), target=target)


RFP_LIFECYCLE = TransitionTable(
    entity="rfp",
    transitions={
        "publish": _t((RfpStatus.DRAFT.value,), RfpStatus.PUBLISHED.value),
        "close": _t((RfpStatus.PUBLISHED.value,), RfpStatus.CLOSED.value),
        "cancel": _t(
            (RfpStatus.DRAFT.value, RfpStatus.PUBLISHED.value),
            RfpStatus.CANCELLED.value,
        ),
        "award": _t(
            (RfpStatus.PUBLISHED.value, RfpStatus.CLOSED.value),
            RfpStatus.AWARDED.value,
        ),
    },
)

RESPONSE_LIFECYCLE = TransitionTable(
    entity="supplier_response",
    transitions={
        "submit": _t((ResponseStatus.DRAFT.value,), ResponseStatus.SUBMITTED.value),
        "move_to_review": _t(
            (ResponseStatus.SUBMITTED.value,), ResponseStatus.UNDER_REVIEW.value
        ),
        "approve": _t(
            (ResponseStatus.UNDER_REVIEW.value,), ResponseStatus.APPROVED.value
        ),
        "reject": _t(
            (ResponseStatus.UNDER_REVIEW.value,), ResponseStatus.REJECTED.value
        ),
        "reopen": _t((ResponseStatus.REJECTED.value,), ResponseStatus.DRAFT.value),
        "award": _t((ResponseStatus.APPROVED.value,), ResponseStatus.AWARDED.value),
    },
)
