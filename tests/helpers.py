import hashlib
import hmac
import json
import time
import uuid
from datetime import datetime, timedelta, timezone

from stash.data.models.product import ProductModel
from stash.repos.user_repo import UserRepo
from stash.services.payment_gateway import PaymentGateway
from stash.services.user_service import UserService

WEBHOOK_SECRET = "whsec_test_secret"


class FakeGateway(PaymentGateway):
    """Real webhook verification, in-memory payment intents."""

    def __init__(self):
        super().__init__(api_key="sk_test_dummy", webhook_secret=WEBHOOK_SECRET)
        self.intents = {}
        self.created = []
        self.retrieved = []

    def _create(self, amount, currency, metadata, idempotency_key):
        intent_id = f"pi_{uuid.uuid4().hex[:24]}"
        intent = {
            "id": intent_id,
            "client_secret": f"{intent_id}_secret_{uuid.uuid4().hex[:8]}",
            "amount": amount,
            "currency": currency,
            "metadata": metadata,
            "status": "requires_payment_method",
        }
        self.intents[intent_id] = intent
        self.created.append((amount, currency, metadata, idempotency_key))
        return intent

    def _retrieve(self, intent_id):
        self.retrieved.append(intent_id)
        return self.intents[intent_id]


def register(client, email="a@b.com", password="secret1"):
    response = client.post("/auth/register", json={"email": email, "password": password})
    assert response.status_code == 201
    return response.json()["token"]


def auth(token):
    return {"x-auth-token": token}


def make_user(db, email, roles, password="secret1"):
    """Registers a user with the given roles, returns (token, user_id)."""
    token = UserService(db).register(email, password, roles=roles).token
    user = UserRepo(db).get_user_by_email(email)
    return token, user.id


def user_id_of(client, token):
    return client.get("/auth/me", headers=auth(token)).json()["id"]


def add_product(
    db,
    artist_id,
    name="Overlay Kit",
    price=1500,
    status="published",
    category="Overlay UI Packs",
    tags=None,
    created_at=None,
):
    created_at = created_at or datetime.now(timezone.utc)
    product = ProductModel(
        id=str(uuid.uuid4()),
        artist_id=artist_id,
        name=name,
        description="",
        price=price,
        category=category,
        tags=tags or [],
        status=status,
        preview_image_keys=[],
        s3_asset_key="",
        created_at=created_at,
        updated_at=created_at,
        version=1,
    )
    db.add(product)
    db.commit()
    return product.id


def minutes_ago(n):
    return datetime.now(timezone.utc) - timedelta(minutes=n)


def sign(payload: bytes, secret=WEBHOOK_SECRET, timestamp=None):
    timestamp = timestamp or int(time.time())
    signed = f"{timestamp}.{payload.decode('utf-8')}".encode("utf-8")
    signature = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


def event(event_type, obj):
    return json.dumps(
        {
            "id": f"evt_{uuid.uuid4().hex[:12]}",
            "object": "event",
            "type": event_type,
            "data": {"object": obj},
        }
    ).encode("utf-8")


def succeeded_event(order_id, user_id, intent_id="pi_test"):
    return event(
        "payment_intent.succeeded",
        {
            "id": intent_id,
            "object": "payment_intent",
            "metadata": {"orderId": order_id, "userId": user_id},
        },
    )
