from __future__ import annotations

from fastapi import APIRouter, Depends

from devlink.db.models import User
from devlink.schemas import ConnectionRequestOut, ReviewDecision, SendStatus, dump
from devlink.services.relationship_service import RelationshipLedger, SendOutcome
from devlink.services.session_service import require_user

router = APIRouter(prefix="/request", tags=["requests"])


def get_ledger() -> RelationshipLedger:
    return RelationshipLedger()


@router.post("/send/{status}/{to_user_id}")
def send_request(
    status: SendStatus,
    to_user_id: str,
    user: User = Depends(require_user),
    ledger: RelationshipLedger = Depends(get_ledger),
):
    result = ledger.send(user.id, to_user_id.strip(), status.value)
    return {
        "message": result.message,
        "created": result.outcome is SendOutcome.CREATED,
        "data": dump(ConnectionRequestOut.model_validate(result.request)),
    }


@router.post("/review/{status}/{request_id}")
def review_request(
    status: ReviewDecision,
    request_id: str,
    user: User = Depends(require_user),
    ledger: RelationshipLedger = Depends(get_ledger),
):
    request = ledger.review(user.id, request_id, status.value)
    return {
        "message": f"Request successfully marked as '{status.value}'",
        "data": dump(ConnectionRequestOut.model_validate(request)),
    }
