# tests/test_fees.py
from decimal import Decimal

from models import FeeSetting, FeeType, PropertyFeeOverride, RentPayment, PaymentType
from services.fee_service import resolve_fee


def _setting(enabled=True, amount="100", apply_to_all=True, selected=None):
    return FeeSetting(
        fee_type=FeeType.CLEANING_FEE,
        enabled=enabled,
        amount=Decimal(amount),
        apply_to_all=apply_to_all,
        selected_property_ids=selected or [],
    )


class TestResolveFee:

    def test_default_applies_to_all(self):
        fee = resolve_fee(FeeType.CLEANING_FEE, _setting(), None, property_id=7)
        assert (fee.applies, fee.amount, fee.source) == (True, Decimal("100"), "landlord_default")

    def test_disabled_default(self):
        fee = resolve_fee(FeeType.CLEANING_FEE, _setting(enabled=False), None, property_id=7)
        assert (fee.applies, fee.amount, fee.source) == (False, Decimal("0.00"), "disabled")

    def test_property_not_selected(self):
        setting = _setting(apply_to_all=False, selected=[3])
        assert resolve_fee(FeeType.CLEANING_FEE, setting, None, property_id=7).source == "not_selected"
        assert resolve_fee(FeeType.CLEANING_FEE, setting, None, property_id=3).applies is True

    def test_no_fee_override_wins(self):
        override = PropertyFeeOverride(fee_type=FeeType.CLEANING_FEE, no_fee=True, amount=None)
        fee = resolve_fee(FeeType.CLEANING_FEE, _setting(), override, property_id=7)
        assert (fee.applies, fee.amount, fee.source) == (True, Decimal("0.00"), "property_no_fee")

    def test_amount_override_applies_even_when_default_disabled(self):
        override = PropertyFeeOverride(fee_type=FeeType.CLEANING_FEE, no_fee=False, amount=Decimal("75"))
        fee = resolve_fee(FeeType.CLEANING_FEE, _setting(enabled=False), override, property_id=7)
        assert (fee.applies, fee.amount, fee.source) == (True, Decimal("75"), "property_override")


def test_fee_settings_defaults(client, headers):
    res = client.get("/api/landlord/fee-settings", headers=headers)
    assert res.status_code == 200
    settings = res.json()["settings"]
    assert settings["petDeposit"] == {"enabled": False, "amount": 300.0, "applyToAll": True, "selectedProperties": []}
    assert settings["applicationFee"]["enabled"] is True
    assert settings["securityDeposit"]["months"] == 1
    assert settings["lastMonthRent"]["required"] is True


def test_update_fee_settings(client, headers, prop):
    res = client.put("/api/landlord/fee-settings", headers=headers, json={
        "cleaningFee": {"enabled": True, "amount": 150, "applyToAll": False, "selectedProperties": [prop.id]},
        "securityDeposit": {"months": 0},
        "lastMonthRent": {"required": False},
    })
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Fee settings saved"
    settings = body["settings"]
    assert settings["cleaningFee"] == {
        "enabled": True, "amount": 150.0, "applyToAll": False, "selectedProperties": [prop.id],
    }
    assert settings["securityDeposit"]["months"] == 0
    assert settings["lastMonthRent"]["required"] is False
    # untouched groups keep their defaults
    assert settings["petRent"]["amount"] == 50.0


def test_update_fee_settings_rejects_foreign_property(client, headers, prop):
    res = client.put("/api/landlord/fee-settings", headers=headers, json={
        "petRent": {"enabled": True, "amount": 25, "applyToAll": False, "selectedProperties": [prop.id, 999]},
    })
    assert res.status_code == 404
    assert res.json()["message"] == "Properties not found: 999"


def test_overrides_and_effective_fees(client, headers, prop):
    client.put("/api/landlord/fee-settings", headers=headers, json={
        "cleaningFee": {"enabled": True, "amount": 150, "applyToAll": False, "selectedProperties": []},
    })
    res = client.put(f"/api/landlord/properties/{prop.id}/fee-overrides", headers=headers, json={
        "overrides": [
            {"feeType": "pet_rent", "amount": 99},
            {"feeType": "application_fee", "noFee": True},
        ]
    })
    assert res.status_code == 200
    assert {o["feeType"] for o in res.json()["overrides"]} == {"pet_rent", "application_fee"}

    res = client.get(f"/api/landlord/properties/{prop.id}/effective-fees", headers=headers)
    fees = {f["feeType"]: f for f in res.json()["fees"]}
    assert fees["cleaning_fee"]["applies"] is False
    assert fees["cleaning_fee"]["source"] == "not_selected"
    assert fees["pet_rent"] == {"feeType": "pet_rent", "applies": True, "amount": 99.0, "source": "property_override"}
    assert fees["application_fee"]["amount"] == 0
    assert fees["application_fee"]["source"] == "property_no_fee"
    assert fees["security_deposit"]["source"] == "landlord_default"

    res = client.delete(f"/api/landlord/properties/{prop.id}/fee-overrides/pet_rent", headers=headers)
    assert res.status_code == 200
    res = client.delete(f"/api/landlord/properties/{prop.id}/fee-overrides/pet_rent", headers=headers)
    assert res.status_code == 404


def test_override_requires_amount_or_no_fee(client, headers, prop):
    res = client.put(f"/api/landlord/properties/{prop.id}/fee-overrides", headers=headers, json={
        "overrides": [{"feeType": "cleaning_fee"}]
    })
    assert res.status_code == 422
    assert "Provide an amount or set noFee" in res.json()["message"]


def test_move_in_charges_with_defaults(client, headers, db, lease):
    res = client.post(f"/api/landlord/leases/{lease.id}/move-in-charges", headers=headers)
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Created 3 move-in charges"
    charges = {c["type"]: c for c in body["created"]}
    assert set(charges) == {"first_month_rent", "security_deposit", "last_month_rent"}
    assert charges["security_deposit"]["amount"] == 1500.0
    assert charges["security_deposit"]["description"] == "Security deposit (1 month rent)"
    assert all(c["dueDate"] == "2026-03-01" for c in body["created"])

    res = client.post(f"/api/landlord/leases/{lease.id}/move-in-charges", headers=headers)
    assert res.json()["created"] == []
    assert res.json()["message"] == "Move-in charges already exist for this lease"
    assert db.query(RentPayment).filter(RentPayment.lease_id == lease.id).count() == 3


def test_move_in_charges_with_pets_and_overrides(client, headers, db, lease, prop):
    lease.has_pets = True
    db.commit()
    client.put("/api/landlord/fee-settings", headers=headers, json={
        "petDeposit": {"enabled": True, "amount": 300},
        "petRent": {"enabled": True, "amount": 50},
        "cleaningFee": {"enabled": True, "amount": 150},
        "securityDeposit": {"months": 1.5},
    })
    client.put(f"/api/landlord/properties/{prop.id}/fee-overrides", headers=headers, json={
        "overrides": [{"feeType": "cleaning_fee", "noFee": True}, {"feeType": "last_month_rent", "noFee": True}]
    })

    res = client.post(f"/api/landlord/leases/{lease.id}/move-in-charges", headers=headers)
    charges = {c["type"]: c for c in res.json()["created"]}
    assert set(charges) == {"first_month_rent", "security_deposit", "pet_deposit_annual", "pet_rent"}
    assert charges["security_deposit"]["amount"] == 2250.0
    assert charges["pet_deposit_annual"]["amount"] == 300.0
    assert charges["pet_rent"]["amount"] == 50.0
    assert db.query(RentPayment).filter(RentPayment.payment_type == PaymentType.CLEANING_FEE).count() == 0
