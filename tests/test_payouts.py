# tests/test_payouts.py
from datetime import date
from decimal import Decimal

import pytest

from clients import stripe_client
from clients.stripe_client import ProcessorError
from models import LandlordWallet, PayoutType, RentPayment, SavedPayoutMethod
from services.payout_service import calculate_cash_out_fees
from services.rent_payment_service import RentPaymentService

MANUAL_ACCOUNT = {
    "accountHolderName": "Lana Lord",
    "routingNumber": "110000000",
    "accountNumber": "000123456789",
    "confirmAccountNumber": "000123456789",
    "accountType": "checking",
}


class FakeProcessor:
    """Records calls in place of the Stripe API."""

    def __init__(self):
        self.payouts = []
        self.removed = []
        self.removed_external = []
        self.customers = 0
        self.connect_accounts = 0
        self.onboarding_links = []
        self.enabled = True

    def create_customer(self, email, name, landlord_id):
        self.customers += 1
        return "cus_test"

    def create_connect_account(self, email, landlord_id):
        self.connect_accounts += 1
        return "acct_test"

    def create_onboarding_link(self, connect_account_id, refresh_url, return_url):
        self.onboarding_links.append((connect_account_id, return_url))
        return f"https://connect.stripe.com/setup/{connect_account_id}"

    def add_bank_account(self, customer_id, account_holder_name, routing_number, account_number, account_type):
        return {
            "id": f"ba_{account_number[-4:]}",
            "last4": account_number[-4:],
            "bank_name": "STRIPE TEST BANK",
            "status": "new",
        }

    def add_external_account(self, connect_account_id, account_holder_name, routing_number, account_number,
                             account_type):
        return f"ba_ext_{account_number[-4:]}"

    def link_external_account(self, connect_account_id, financial_connections_account_id):
        return f"ba_ext_{financial_connections_account_id}"

    def remove_external_account(self, connect_account_id, external_account_id):
        self.removed_external.append(external_account_id)

    def verify_micro_deposits(self, customer_id, source_id, amounts_cents):
        return "verified" if amounts_cents == [32, 45] else "verification_failed"

    def create_financial_connections_session(self, customer_id):
        return {"client_secret": "fcsess_secret", "session_id": "fcsess_1"}

    def attach_financial_connections_account(self, customer_id, account_id):
        if account_id == "fca_unsupported":
            raise ProcessorError(
                "This bank does not support instant verification", status_code=400, requires_manual_entry=True
            )
        return {
            "id": f"pm_{account_id}",
            "last4": "6789",
            "bank_name": "Chase",
            "account_type": "checking",
            "routing_number": "110000000",
            "account_holder_name": "Lana Lord",
        }

    def remove_payout_method(self, customer_id, method_id, method_type):
        self.removed.append(method_id)

    def payouts_enabled(self, connect_account_id):
        return self.enabled

    def create_payout(self, connect_account_id, amount_cents, method, destination, metadata=None):
        self.payouts.append((connect_account_id, amount_cents, method, destination))
        return f"po_{len(self.payouts)}"


@pytest.fixture
def processor(monkeypatch):
    fake = FakeProcessor()
    for name in (
        "create_customer",
        "create_connect_account",
        "create_onboarding_link",
        "add_bank_account",
        "add_external_account",
        "link_external_account",
        "remove_external_account",
        "verify_micro_deposits",
        "create_financial_connections_session",
        "attach_financial_connections_account",
        "remove_payout_method",
        "payouts_enabled",
        "create_payout",
    ):
        monkeypatch.setattr(stripe_client, name, getattr(fake, name))
    return fake


@pytest.fixture
def verified_account(client, headers, processor):
    res = client.post(
        "/api/landlord/payout-methods/financial-connections/attach",
        headers=headers,
        json={"accountId": "fca_1"},
    )
    assert res.status_code == 201
    return res.json()["method"]


@pytest.fixture
def collected(client, headers, db, landlord, lease):
    payment = RentPaymentService.create_payment(db, landlord.id, lease.id, Decimal("1500.00"), date(2026, 3, 1))
    db.commit()
    res = client.patch(f"/api/landlord/rent-payments/{payment.id}/mark-paid", headers=headers)
    assert res.status_code == 200
    return payment


class TestCashOutFees:

    def test_standard(self):
        fees = calculate_cash_out_fees(Decimal("1500.00"), PayoutType.STANDARD)
        assert fees["platform_fee"] == Decimal("2.00")
        assert fees["instant_fee"] == Decimal("0.00")
        assert fees["net_amount"] == Decimal("1498.00")

    def test_instant_percentage(self):
        fees = calculate_cash_out_fees(Decimal("200.00"), PayoutType.INSTANT)
        assert fees["instant_fee"] == Decimal("3.00")
        assert fees["net_amount"] == Decimal("195.00")

    def test_instant_capped(self):
        fees = calculate_cash_out_fees(Decimal("5000.00"), PayoutType.INSTANT)
        assert fees["instant_fee"] == Decimal("10.00")


def test_manual_account_needs_verification(client, headers, db, landlord, processor):
    res = client.post("/api/landlord/payout-methods/manual", headers=headers, json=MANUAL_ACCOUNT)
    assert res.status_code == 201
    body = res.json()
    assert body["needsVerification"] is True
    assert body["method"]["last4"] == "6789"
    assert body["method"]["isDefault"] is True
    assert body["method"]["isVerified"] is False
    assert landlord.stripe_customer_id == "cus_test"
    assert landlord.stripe_connect_account_id == "acct_test"
    assert db.get(SavedPayoutMethod, body["method"]["id"]).stripe_external_account_id == "ba_ext_6789"

    method_id = body["method"]["id"]
    res = client.post(
        f"/api/landlord/payout-methods/{method_id}/verify", headers=headers, json={"amount1": 0.12, "amount2": 0.34}
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Verification failed. Please check the amounts and try again."

    res = client.post(
        f"/api/landlord/payout-methods/{method_id}/verify", headers=headers, json={"amount1": 0.32, "amount2": 0.45}
    )
    assert res.status_code == 200
    assert res.json()["method"]["isVerified"] is True

    res = client.post(
        f"/api/landlord/payout-methods/{method_id}/verify", headers=headers, json={"amount1": 0.32, "amount2": 0.45}
    )
    assert res.json()["message"] == "This bank account is already verified"
    assert processor.customers == 1
    assert processor.connect_accounts == 1


def test_account_numbers_must_match(client, headers, processor):
    res = client.post(
        "/api/landlord/payout-methods/manual",
        headers=headers,
        json={**MANUAL_ACCOUNT, "confirmAccountNumber": "000123456780"},
    )
    assert res.status_code == 422
    assert res.json()["message"] == "Account numbers do not match"


def test_financial_connections(client, headers, db, landlord, processor):
    res = client.post("/api/landlord/payout-methods/financial-connections/session", headers=headers)
    assert res.json()["clientSecret"] == "fcsess_secret"

    res = client.post(
        "/api/landlord/payout-methods/financial-connections/attach", headers=headers, json={"accountId": "fca_1"}
    )
    assert res.status_code == 201
    assert res.json()["method"]["isVerified"] is True
    assert res.json()["needsVerification"] is False

    # attaching the same account again returns the saved record
    res = client.post(
        "/api/landlord/payout-methods/financial-connections/attach", headers=headers, json={"accountId": "fca_1"}
    )
    assert res.status_code == 201
    res = client.get("/api/landlord/payout-methods", headers=headers)
    assert len(res.json()["methods"]) == 1
    assert processor.connect_accounts == 1
    assert db.get(SavedPayoutMethod, res.json()["methods"][0]["id"]).stripe_external_account_id == "ba_ext_fca_1"


def test_unsupported_bank_asks_for_manual_entry(client, headers, processor):
    res = client.post(
        "/api/landlord/payout-methods/financial-connections/attach",
        headers=headers,
        json={"accountId": "fca_unsupported"},
    )
    assert res.status_code == 400
    assert res.json() == {
        "success": False,
        "message": "This bank does not support instant verification",
        "requiresManualEntry": True,
    }


def test_default_method_switching_and_delete(client, headers, db, processor, verified_account):
    res = client.post("/api/landlord/payout-methods/manual", headers=headers, json=MANUAL_ACCOUNT)
    manual = res.json()["method"]
    assert manual["isDefault"] is False

    res = client.post(f"/api/landlord/payout-methods/{manual['id']}/default", headers=headers)
    assert res.json()["method"]["isDefault"] is True
    assert res.json()["needsVerification"] is True
    assert db.get(SavedPayoutMethod, verified_account["id"]).is_default is False

    res = client.delete(f"/api/landlord/payout-methods/{manual['id']}", headers=headers)
    assert res.json()["message"] == "Payout method removed"
    assert processor.removed == ["ba_6789"]
    assert processor.removed_external == ["ba_ext_6789"]
    assert db.get(SavedPayoutMethod, verified_account["id"]).is_default is True


def test_cash_out_requires_verified_account(client, headers, processor):
    res = client.post("/api/landlord/payouts/cash-out", headers=headers, json={})
    assert res.status_code == 400
    assert res.json()["message"] == "Add and verify a bank account before cashing out"


def test_cash_out_requires_funds(client, headers, verified_account):
    res = client.post("/api/landlord/payouts/cash-out", headers=headers, json={})
    assert res.status_code == 400
    assert res.json()["message"] == "No funds available to cash out"


def test_standard_cash_out(client, headers, db, landlord, processor, verified_account, collected):
    res = client.post("/api/landlord/payouts/cash-out", headers=headers, json={"type": "standard"})
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Payout of $1,498.00 is on its way"
    payout = body["payout"]
    assert payout["grossAmount"] == 1500.0
    assert payout["platformFee"] == 2.0
    assert payout["instantFee"] == 0.0
    assert payout["netAmount"] == 1498.0
    assert payout["status"] == "processing"
    assert payout["stripePayoutId"] == "po_1"
    assert processor.payouts == [("acct_test", 149800, "standard", "ba_ext_fca_1")]

    assert db.get(RentPayment, collected.id).payout_id == payout["id"]
    wallet = db.query(LandlordWallet).filter(LandlordWallet.landlord_id == landlord.id).one()
    assert wallet.available_balance == Decimal("0.00")
    assert wallet.last_payout_at is not None

    res = client.post("/api/landlord/payouts/cash-out", headers=headers, json={})
    assert res.json()["message"] == "No funds available to cash out"

    res = client.get("/api/landlord/wallet", headers=headers)
    assert res.json()["availableBalance"] == 0.0
    assert [p["id"] for p in res.json()["recentPayouts"]] == [payout["id"]]


def test_instant_partial_cash_out(client, headers, db, landlord, processor, verified_account, collected):
    res = client.post("/api/landlord/payouts/cash-out", headers=headers, json={"type": "instant", "amount": 1000})
    payout = res.json()["payout"]
    assert payout["instantFee"] == 10.0
    assert payout["netAmount"] == 988.0
    assert processor.payouts == [("acct_test", 98800, "instant", "ba_ext_fca_1")]
    wallet = db.query(LandlordWallet).filter(LandlordWallet.landlord_id == landlord.id).one()
    assert wallet.available_balance == Decimal("500.00")


def test_cash_out_more_than_available(client, headers, verified_account, collected):
    res = client.post("/api/landlord/payouts/cash-out", headers=headers, json={"amount": 2000})
    assert res.status_code == 400
    assert res.json()["message"] == "Requested amount exceeds available balance of $1,500.00"


def test_cash_out_to_verified_manual_account(client, headers, db, landlord, processor, collected):
    res = client.post("/api/landlord/payout-methods/manual", headers=headers, json=MANUAL_ACCOUNT)
    method_id = res.json()["method"]["id"]

    res = client.post("/api/landlord/payouts/cash-out", headers=headers, json={})
    assert res.status_code == 400
    assert res.json()["message"] == "Add and verify a bank account before cashing out"

    client.post(
        f"/api/landlord/payout-methods/{method_id}/verify", headers=headers, json={"amount1": 0.32, "amount2": 0.45}
    )
    res = client.post("/api/landlord/payouts/cash-out", headers=headers, json={"type": "standard"})
    assert res.status_code == 200
    assert res.json()["payout"]["netAmount"] == 1498.0
    assert processor.payouts == [("acct_test", 149800, "standard", "ba_ext_6789")]


def test_payouts_not_enabled_points_to_onboarding(client, headers, db, landlord, processor, verified_account,
                                                  collected):
    processor.enabled = False
    res = client.post("/api/landlord/payouts/cash-out", headers=headers, json={})
    assert res.status_code == 400
    assert res.json()["message"] == "Payouts are not enabled yet. Complete payout onboarding to continue."
    assert processor.payouts == []

    res = client.post("/api/landlord/payouts/onboarding", headers=headers)
    assert res.status_code == 200
    assert res.json() == {"success": True, "url": "https://connect.stripe.com/setup/acct_test"}
    assert processor.onboarding_links == [("acct_test", "http://localhost:3000/admin/payouts?onboarding=complete")]
    assert processor.connect_accounts == 1

    wallet = db.query(LandlordWallet).filter(LandlordWallet.landlord_id == landlord.id).one()
    assert wallet.available_balance == Decimal("1500.00")


def test_onboarding_creates_connect_account(client, headers, landlord, processor):
    res = client.post("/api/landlord/payouts/onboarding", headers=headers)
    assert res.json()["url"] == "https://connect.stripe.com/setup/acct_test"
    assert landlord.stripe_connect_account_id == "acct_test"
