"""
Connection-request ledger.

Exactly one ConnectionRequest row exists per unordered pair of users. The
pair uniqueness is enforced by the database (unique ``(user_low, user_high)``)
and every status change is a compare-and-swap on the current status, so
concurrent sends and reviews always end in a state some serial order of the
same calls would have produced.

Transitions:

* ``send`` (interested | ignored): creates the pair record or overwrites a
  pending status. Either party may overwrite; the direction fields keep
  naming whoever created the record.
* ``review`` (accepted | rejected): only the stored addressee may move an
  ``interested`` record to a terminal state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from sqlalchemy.exc import IntegrityError

from devlink.core.errors import (
    AuthorizationError,
    InternalError,
    NotFoundError,
    RelationshipClosedError,
    ValidationError,
)
from devlink.db.models import ConnectionRequest, User
from devlink.domain.relationships import (
    REVIEW_DECISIONS,
    SEND_STATUSES,
    ConnectionStatus,
    can_overwrite,
    is_valid_id,
    parse_status,
)
from devlink.repositories.sql_repository import SQLRepository

logger = logging.getLogger(__name__)

_MAX_ATTEMPTS = 5


class SendOutcome(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


_OUTCOME_MESSAGES = {
    SendOutcome.CREATED: "Connection request sent",
    SendOutcome.UPDATED: "Connection request status updated",
    SendOutcome.UNCHANGED: "Connection request already has this status",
}


@dataclass
class SendResult:
    request: ConnectionRequest
    outcome: SendOutcome

    @property
    def message(self) -> str:
        return _OUTCOME_MESSAGES[self.outcome]


@dataclass
class RelationshipLedger:
    repository: SQLRepository = field(default_factory=SQLRepository)

    # -------------------------------------- send --------------------------------------
    def send(self, actor_id: str, target_id: str, status: str | ConnectionStatus) -> SendResult:
        wanted = parse_status(status)
        if wanted not in SEND_STATUSES:
            raise ValidationError("Invalid status")
        if actor_id == target_id:
            raise ValidationError("You cannot send request to yourself")
        if not is_valid_id(target_id):
            raise ValidationError("Invalid target user id")
        if not self.repository.get_user(target_id):
            raise NotFoundError("User does not exist")

        for _ in range(_MAX_ATTEMPTS):
            existing = self.repository.find_request_by_pair(actor_id, target_id)
            if existing is None:
                try:
                    created = self.repository.insert_request(actor_id, target_id, wanted)
                except IntegrityError:
                    # The other side of the pair inserted first; pick up its row.
                    logger.info("Pair %s/%s created concurrently, retrying as update", actor_id, target_id)
                    continue
                logger.info("Request %s created: %s -> %s (%s)", created.id, actor_id, target_id, wanted.value)
                return SendResult(created, SendOutcome.CREATED)
            result = self._overwrite(existing, wanted, actor_id)
            if result is not None:
                return result
        raise InternalError("Could not record connection request")

    def _overwrite(self, existing: ConnectionRequest, wanted: ConnectionStatus, actor_id: str) -> SendResult | None:
        current = ConnectionStatus(existing.status)
        if current == wanted:
            return SendResult(existing, SendOutcome.UNCHANGED)
        if not can_overwrite(current):
            raise RelationshipClosedError()
        updated = self.repository.set_request_status(existing.id, wanted, expected=(current,))
        if updated is None:
            # Status moved underneath us; caller re-reads and decides again.
            return None
        logger.info(
            "Request %s changed by %s: %s -> %s", updated.id, actor_id, current.value, wanted.value
        )
        return SendResult(updated, SendOutcome.UPDATED)

    # -------------------------------------- review --------------------------------------
    def review(self, actor_id: str, request_id: str, decision: str | ConnectionStatus) -> ConnectionRequest:
        verdict = parse_status(decision)
        if verdict not in REVIEW_DECISIONS:
            raise ValidationError("Invalid review status")
        request_id = (request_id or "").strip()
        if not is_valid_id(request_id):
            raise ValidationError("Invalid request ID")
        updated = self.repository.set_request_status(
            request_id,
            verdict,
            expected=(ConnectionStatus.INTERESTED,),
            to_user_id=actor_id,
        )
        if updated is None:
            logger.warning("Review of %s by %s refused", request_id, actor_id)
            raise AuthorizationError()
        logger.info("Request %s reviewed by %s: %s", request_id, actor_id, verdict.value)
        return updated

    # -------------------------------------- reads --------------------------------------
    def received(self, actor_id: str) -> list[ConnectionRequest]:
        """Pending interested requests addressed to actor."""
        return self.repository.list_received(actor_id, ConnectionStatus.INTERESTED)

    def connections(self, actor_id: str) -> list[User]:
        """Users holding an accepted record with actor."""
        others = []
        for request in self.repository.list_accepted(actor_id):
            others.append(request.to_user if request.from_user_id == actor_id else request.from_user)
        return others
