from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..billing import BillingError
from ..database import get_db
from ..dependencies import get_billing
from ..models import User

router = APIRouter()


class SubscribeRequest(BaseModel):
    tier: str


class SubscriptionResponse(BaseModel):
    subscription_id: str
    client_secret: Optional[str] = None


@router.post("/subscribe", response_model=SubscriptionResponse)
def subscribe(
    data: SubscribeRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    billing=Depends(get_billing),
):
    try:
        return billing.create_subscription(db, user.id, data.tier)
    except BillingError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/cancel-subscription")
def cancel_subscription(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    billing=Depends(get_billing),
):
    try:
        billing.cancel_subscription(db, user.id)
    except BillingError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    return Response(status_code=200)
