# tests/test_rent_payments.py
from datetime import date, datetime
from decimal import Decimal

from models import LandlordWallet, PaymentStatus, PaymentType, RentPayment
from services.rent_ledger_service import RentLedgerService
from services.rent_payment_service import RentPaymentService


def _charge(db, landlord, lease, amount, due, payment_type=PaymentType.RENT, status=PaymentStatus.PENDING):
    return RentPaymentService.create_payment(
        db, landlord.id, lease.id, Decimal(amount), due, payment_type=payment_type, status=status
    )


def test_build_ledger_buckets(db, landlord, lease):
    paid = _charge(db, landlord, lease, "1500", date(2026, 3, 1))
    RentPaymentService.mark_paid(db, landlord.id, paid.id)
    late = _charge(db, landlord, lease, "1500", date(2026, 3, 5))
    upcoming = _charge(db, landlord, lease, "1500", date(2026, 3, 20))
    short = _charge(db, landlord, lease, "1500", date(2026, 3, 15))
    RentPaymentService.mark_paid(db, landlord.id, short.id, amount=Decimal("1000"))
    cancelled = _charge(db, landlord, lease, "1500", date(2026, 3, 25), status=PaymentStatus.CANCELLED)
    first_month = _charge(db, landlord, lease, "1500", date(2026, 3, 1), payment_type=PaymentType.FIRST_MONTH_RENT)
    deposit = _charge(db, landlord, lease, "1500", date(2026, 3, 1), payment_type=PaymentType.SECURITY_DEPOSIT)
    RentPaymentService.mark_paid(db, landlord.id, deposit.id, paid_at=datetime(2026, 3, 2, 9, 0))
    april = _charge(db, landlord, lease, "1500", date(2026, 4, 1))
    db.commit()

    ledger = RentLedgerService.build_ledger(db, landlord.id, 2026, 3, today=date(2026, 3, 10))

    assert [p.id for p in ledger["paid"]] == [paid.id, short.id, deposit.id]
    assert [p.id for p in ledger["partial"]] == [short.id]
    assert [p.id for p in ledger["late"]] == [late.id]
    remainder = db.query(RentPayment).filter(RentPayment.parent_payment_id == short.id).one()
    assert [p.id for p in ledger["pending"]] == [remainder.id, upcoming.id]
    all_ids = {p.id for bucket in ("paid", "late", "pending") for p in ledger[bucket]}
    assert cancelled.id not in all_ids
    assert april.id not in all_ids

    assert len(ledger["move_in"]) == 1
    group = ledger["move_in"][0]
    assert group["tenant_name"] == "Tom Renter"
    assert [p.id for p in group["payments"]] == [first_month.id]
    assert group["total"] == Decimal("1500")

    summary = ledger["summary"]
    assert summary["total_collected"] == Decimal("4000")
    assert summary["total_late"] == Decimal("1500")
    assert summary["total_pending"] == Decimal("2000")
    assert summary["pending_move_in"] == Decimal("1500")
    assert summary["partial_count"] == 1


def test_ledger_filters_by_property(db, landlord, lease):
    _charge(db, landlord, lease, "1500", date(2026, 3, 1))
    db.commit()
    ledger = RentLedgerService.build_ledger(
        db, landlord.id, 2026, 3, property_id=lease.unit.property_id + 100, today=date(2026, 3, 1)
    )
    assert ledger["pending"] == []


def test_rent_ledger_endpoint(client, headers, db, landlord, lease):
    payment = _charge(db, landlord, lease, "1500", date(2026, 3, 1))
    RentPaymentService.mark_paid(db, landlord.id, payment.id)
    db.commit()

    res = client.get("/api/landlord/rent-ledger?year=2026&month=3", headers=headers)
    assert res.status_code == 200
    body = res.json()
    assert (body["year"], body["month"]) == (2026, 3)
    assert [p["id"] for p in body["paid"]] == [payment.id]
    assert body["paid"][0]["tenantName"] == "Tom Renter"
    assert body["paid"][0]["unitNumber"] == "1A"
    assert body["summary"]["totalCollected"] == 1500.0


def test_create_and_list_payments(client, headers, lease):
    res = client.post("/api/landlord/rent-payments", headers=headers, json={
        "leaseId": lease.id,
        "amount": 1500,
        "dueDate": "2026-04-01",
        "description": "April rent",
    })
    assert res.status_code == 201
    created = res.json()
    assert created["status"] == "pending"
    assert created["type"] == "rent"
    assert created["description"] == "April rent"

    client.post("/api/landlord/rent-payments", headers=headers, json={
        "leaseId": lease.id, "amount": 75, "dueDate": "2026-04-10", "type": "late_fee",
    })

    res = client.get("/api/landlord/rent-payments?type=late_fee", headers=headers)
    body = res.json()
    assert body["total"] == 1
    assert body["payments"][0]["amount"] == 75.0

    res = client.get(f"/api/landlord/rent-payments?leaseId={lease.id}&pageSize=1", headers=headers)
    body = res.json()
    assert body["total"] == 2
    assert len(body["payments"]) == 1
    assert body["pageSize"] == 1


def test_payment_for_foreign_lease_is_not_found(client, headers):
    res = client.post("/api/landlord/rent-payments", headers=headers, json={
        "leaseId": 4242, "amount": 100, "dueDate": "2026-04-01",
    })
    assert res.status_code == 404


def test_mark_paid_credits_wallet(client, headers, db, landlord, lease, tenant):
    payment = _charge(db, landlord, lease, "1500", date(2026, 4, 1))
    db.commit()

    res = client.patch(f"/api/landlord/rent-payments/{payment.id}/mark-paid", headers=headers, json={"amount": 1200})
    assert res.status_code == 200
    assert res.json()["status"] == "paid"
    assert res.json()["amount"] == 1200.0

    wallet = db.query(LandlordWallet).filter(LandlordWallet.landlord_id == landlord.id).one()
    assert wallet.available_balance == Decimal("1200")

    remainder = db.query(RentPayment).filter(RentPayment.parent_payment_id == payment.id).one()
    assert remainder.amount == Decimal("300")
    assert remainder.status == PaymentStatus.PENDING
    assert remainder.payment_type == PaymentType.RENT
    assert remainder.due_date == date(2026, 4, 1)
    assert payment.payment_metadata["remainderPaymentId"] == remainder.id

    res = client.get(f"/api/landlord/tenants/{tenant.id}/balance", headers=headers)
    assert res.json()["totalOwed"] == 300.0
    assert res.json()["paidAmount"] == 1200.0

    res = client.patch(f"/api/landlord/rent-payments/{payment.id}/mark-paid", headers=headers)
    assert res.status_code == 400
    assert res.json()["message"] == "Payment is already marked as paid"

    res = client.delete(f"/api/landlord/rent-payments/{payment.id}", headers=headers)
    assert res.status_code == 400


def test_paying_remainder_in_full(db, landlord, lease):
    payment = _charge(db, landlord, lease, "1500", date(2026, 4, 1))
    RentPaymentService.mark_paid(db, landlord.id, payment.id, amount=Decimal("1000"))
    remainder = db.query(RentPayment).filter(RentPayment.parent_payment_id == payment.id).one()

    RentPaymentService.mark_paid(db, landlord.id, remainder.id)
    assert remainder.status == PaymentStatus.PAID
    assert remainder.amount == Decimal("500")
    assert db.query(RentPayment).filter(RentPayment.parent_payment_id == remainder.id).count() == 0


def test_partial_amount_only_for_rent(client, headers, db, landlord, lease):
    deposit = _charge(db, landlord, lease, "1500", date(2026, 3, 1), payment_type=PaymentType.SECURITY_DEPOSIT)
    db.commit()

    res = client.patch(f"/api/landlord/rent-payments/{deposit.id}/mark-paid", headers=headers, json={"amount": 10})
    assert res.status_code == 400
    assert res.json()["message"] == "Partial payments are only accepted for rent"
    assert deposit.status == PaymentStatus.PENDING
    assert deposit.amount == Decimal("1500")

    res = client.patch(f"/api/landlord/rent-payments/{deposit.id}/mark-paid", headers=headers, json={"amount": 1500})
    assert res.status_code == 200
    assert res.json()["amount"] == 1500.0


def test_mark_paid_rejects_overpayment(client, headers, db, landlord, lease):
    payment = _charge(db, landlord, lease, "1500", date(2026, 4, 1))
    db.commit()

    res = client.patch(f"/api/landlord/rent-payments/{payment.id}/mark-paid", headers=headers, json={"amount": 1600})
    assert res.status_code == 400
    assert res.json()["message"] == "Amount cannot exceed the charge of $1,500.00"
    assert payment.status == PaymentStatus.PENDING
    assert res.json()["message"] == "Payment is already marked as paid"

    res = client.delete(f"/api/landlord/rent-payments/{payment.id}", headers=headers)
    assert res.status_code == 400


def test_mark_overdue_and_delete(client, headers, db, landlord, lease):
    payment = _charge(db, landlord, lease, "1500", date(2026, 4, 1))
    db.commit()

    res = client.patch(f"/api/landlord/rent-payments/{payment.id}/mark-overdue", headers=headers)
    assert res.json()["status"] == "overdue"
    res = client.patch(f"/api/landlord/rent-payments/{payment.id}/mark-overdue", headers=headers)
    assert res.status_code == 400

    res = client.delete(f"/api/landlord/rent-payments/{payment.id}", headers=headers)
    assert res.json() == {"success": True, "message": "Rent payment deleted"}
    res = client.get(f"/api/landlord/rent-payments/{payment.id}", headers=headers)
    assert res.status_code == 404


def test_tenant_balance(client, headers, db, landlord, lease, tenant):
    _charge(db, landlord, lease, "1500", date(2026, 3, 1), status=PaymentStatus.OVERDUE)
    _charge(db, landlord, lease, "1500", date(2026, 4, 1))
    paid = _charge(db, landlord, lease, "1500", date(2026, 2, 1))
    RentPaymentService.mark_paid(db, landlord.id, paid.id)
    db.commit()

    res = client.get(f"/api/landlord/tenants/{tenant.id}/balance", headers=headers)
    body = res.json()
    assert body["totalOwed"] == 3000.0
    assert body["overdueCount"] == 1
    assert body["paidAmount"] == 1500.0


def test_mark_overdue_payments(db, landlord, lease):
    past = _charge(db, landlord, lease, "1500", date(2026, 3, 1))
    future = _charge(db, landlord, lease, "1500", date(2026, 4, 1))
    assert RentPaymentService.mark_overdue_payments(db, landlord.id, today=date(2026, 3, 15)) == 1
    assert past.status == PaymentStatus.OVERDUE
    assert future.status == PaymentStatus.PENDING
