"""Post-commit publication of lifecycle transitions: audit entry plus hooks.

Runs only after the business transaction committed. Neither the audit write
nor any hook can undo or mask the transition, so failures are logged and
suppressed here.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from app.application.interfaces.services import IAuditRecorder, ITransitionHook
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class TransitionPublisher:
    """Fan a committed transition out to the audit recorder and transition hooks."""

    def __init__(
        self,
        audit_recorder: IAuditRecorder,
        hooks: Sequence[ITransitionHook] = (),
    ) -> None:
        self.audit_recorder = audit_recorder
        self.hooks = list(hooks)

    async def publish(
        self,
        *,
        actor_id: str,
        action_code: str,
        entity_kind: str,
        entity_id: str,
        from_status: str | None = None,
        to_status: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Record the audit entry; notify hooks when the status changed."""
        audit_details = dict(details or {})
        if to_status is not None and from_status != to_status:
            audit_details.setdefault("previous_status", from_status)
            audit_details.setdefault("new_status", to_status)
        try:
            await self.audit_recorder.record(
                actor_id, action_code, entity_kind, entity_id, audit_details or None
            )
        except Exception:
            logger.exception(
                "Audit record failed for %s on %s %s", action_code, entity_kind, entity_id
            )
        if to_status is None or from_status == to_status:
            return
        for hook in self.hooks:
            try:
                await hook.on_transition(entity_kind, entity_id, from_status, to_status)
            except Exception:
                logger.exception(
                    "Transition hook %s failed for %s %s (%s -> %s)",
                    type(hook).__name__,
                    entity_kind,
                    entity_id,
                    from_status,
                    to_status,
                )
