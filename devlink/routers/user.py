from __future__ import annotations

from fastapi import APIRouter, Depends

from devlink.db.models import User
from devlink.schemas import PublicUserOut, ReceivedRequestOut, dump
from devlink.services.relationship_service import RelationshipLedger
from devlink.services.session_service import require_user

router = APIRouter(prefix="/user", tags=["user"])


def get_ledger() -> RelationshipLedger:
    return RelationshipLedger()


@router.get("/requests/received")
def received_requests(user: User = Depends(require_user), ledger: RelationshipLedger = Depends(get_ledger)):
    pending = ledger.received(user.id)
    return {"data": [dump(ReceivedRequestOut.model_validate(item)) for item in pending]}


@router.get("/connections")
def connections(user: User = Depends(require_user), ledger: RelationshipLedger = Depends(get_ledger)):
    return {"data": [dump(PublicUserOut.model_validate(other)) for other in ledger.connections(user.id)]}
