# stash/api/routers/payments.py
from fastapi import APIRouter, Depends, Header, Request
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from stash.api.deps import get_current_user, get_payment_gateway
from stash.data.database import get_db
from stash.data.models.user import UserModel
from stash.domain.schemas import PaymentIntentIn, PaymentIntentOut, WebhookAck
from stash.services.payment_gateway import PaymentGateway
from stash.services.payment_service import PaymentService

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("/create-intent", response_model=PaymentIntentOut)
def create_intent(
    payload: PaymentIntentIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    return PaymentService(db, gateway).create_or_retrieve_intent(payload.order_id, user.id)


@router.post("/webhook", response_model=WebhookAck)
async def webhook(
    request: Request,
    stripe_signature: str | None = Header(None),
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    # the signature covers the exact bytes sent, so read the body raw
    payload = await request.body()
    await run_in_threadpool(PaymentService(db, gateway).handle_webhook, payload, stripe_signature)
    return WebhookAck(received=True)
