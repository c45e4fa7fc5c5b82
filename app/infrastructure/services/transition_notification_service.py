"""Transition notification: log-only hook for environments without delivery."""

from __future__ import annotations

from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class LogOnlyTransitionHook:
    """ITransitionHook implementation that logs instead of notifying anyone.

    Production can swap in an email or websocket implementation.
    """

    async def on_transition(
        self,
        entity_kind: str,
        entity_id: str,
        from_status: str | None,
        to_status: str,
    ) -> None:
        """Log the committed transition."""
        logger.info(
            "Transition notify: %s %s %s -> %s (at %s)",
            entity_kind,
            entity_id,
            from_status or "-",
            to_status,
            utc_now().isoformat(),
        )
