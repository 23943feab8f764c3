import pytest
import stripe

from jobportal import storage
from jobportal.billing import BillingError, BillingService


class FakeStripe:
    """Stand-in for the stripe module's Customer/Subscription resources."""

    def __init__(self):
        self.calls = []
        self.fail_subscription = False
        fake = self

        class Customer:
            @staticmethod
            def create(**kwargs):
                fake.calls.append(("customer.create", kwargs))
                return {"id": "cus_123"}

        class Subscription:
            @staticmethod
            def create(**kwargs):
                fake.calls.append(("subscription.create", kwargs))
                if fake.fail_subscription:
                    raise stripe.InvalidRequestError("No such price", param="price")
                return {"id": "sub_456", "latest_invoice": {"payment_intent": {"client_secret": "pi_secret"}}}

            @staticmethod
            def cancel(subscription_id, **kwargs):
                fake.calls.append(("subscription.cancel", subscription_id))
                return {"id": subscription_id, "status": "canceled"}

        self.Customer = Customer
        self.Subscription = Subscription


@pytest.fixture
def fake_stripe(app):
    fake = FakeStripe()
    app.state.billing = BillingService("sk_test", {"basic": "price_b", "pro": "price_p", "premium": "price_x"}, fake)
    return fake


def test_subscribe_creates_customer_once(seeker, fake_stripe, db):
    client, user = seeker
    response = client.post("/api/subscribe", json={"tier": "pro"})
    assert response.status_code == 200
    assert response.json() == {"subscription_id": "sub_456", "client_secret": "pi_secret"}

    client.post("/api/subscribe", json={"tier": "basic"})
    kinds = [call[0] for call in fake_stripe.calls]
    assert kinds == ["customer.create", "subscription.create", "subscription.create"]

    sub_call = fake_stripe.calls[1][1]
    assert sub_call["customer"] == "cus_123"
    assert sub_call["items"] == [{"price": "price_p"}]
    assert sub_call["payment_behavior"] == "default_incomplete"

    me = client.get("/api/user").json()
    assert me["stripe_customer_id"] == "cus_123"
    assert me["subscription_tier"] == "basic"


def test_unknown_tier_rejected(seeker, fake_stripe):
    client, _ = seeker
    response = client.post("/api/subscribe", json={"tier": "platinum"})
    assert response.status_code == 400
    assert fake_stripe.calls == []


def test_stripe_errors_are_400(seeker, fake_stripe):
    client, _ = seeker
    fake_stripe.fail_subscription = True
    response = client.post("/api/subscribe", json={"tier": "basic"})
    assert response.status_code == 400
    assert "No such price" in response.json()["detail"]
    assert client.get("/api/user").json()["subscription_tier"] == "free"


def test_cancel_without_subscription(seeker, fake_stripe):
    client, _ = seeker
    response = client.post("/api/cancel-subscription")
    assert response.status_code == 400
    assert response.json()["detail"] == "No active subscription found"


def test_cancel_resets_tier(seeker, fake_stripe):
    client, _ = seeker
    client.post("/api/subscribe", json={"tier": "premium"})
    assert client.post("/api/cancel-subscription").status_code == 200
    assert ("subscription.cancel", "sub_456") in fake_stripe.calls

    me = client.get("/api/user").json()
    assert me["subscription_tier"] == "free"
    assert me["stripe_subscription_id"] is None


def test_service_rejects_missing_user(db):
    service = BillingService("sk_test", {"basic": "price_b"}, FakeStripe())
    with pytest.raises(BillingError):
        service.create_subscription(db, 12345, "basic")
    assert storage.get_user(db, 12345) is None
