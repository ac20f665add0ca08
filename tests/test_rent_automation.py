# tests/test_rent_automation.py
from contextlib import contextmanager
from datetime import date
from decimal import Decimal

import pytest

import utils.email
from models import (
    LateFeeSettings,
    LateFeeType,
    PaymentStatus,
    PaymentType,
    RecurringInterval,
    RentPayment,
    SubscriptionTier,
)
from scripts import run_rent_automation
from services.exceptions import TierRequiredError
from services.rent_automation_service import RentAutomationService, calculate_late_fee
from services.rent_payment_service import RentPaymentService


@pytest.fixture
def outbox(monkeypatch):
    sent = {"reminders": [], "late_fees": []}

    def fake_reminder(to_email, tenant_name, amount, due_date, days_before, custom_message=None):
        sent["reminders"].append((to_email, amount, due_date, days_before, custom_message))
        return True

    def fake_late_fee(to_email, tenant_name, fee_amount, original_amount, due_date):
        sent["late_fees"].append((to_email, fee_amount, due_date))
        return True

    monkeypatch.setattr(utils.email, "send_rent_reminder", fake_reminder)
    monkeypatch.setattr(utils.email, "send_late_fee_notice", fake_late_fee)
    return sent


@pytest.fixture
def pro(set_tier):
    return set_tier(SubscriptionTier.PRO)


def _late_fees(db, parent):
    return (
        db.query(RentPayment)
        .filter(RentPayment.parent_payment_id == parent.id, RentPayment.payment_type == PaymentType.LATE_FEE)
        .order_by(RentPayment.due_date)
        .all()
    )


class TestCalculateLateFee:

    def test_flat(self):
        settings = LateFeeSettings(fee_type=LateFeeType.FLAT, fee_amount=Decimal("50"))
        assert calculate_late_fee(settings, Decimal("1500")) == Decimal("50.00")

    def test_percentage(self):
        settings = LateFeeSettings(fee_type=LateFeeType.PERCENTAGE, fee_amount=Decimal("5"))
        assert calculate_late_fee(settings, Decimal("1234")) == Decimal("61.70")

    def test_percentage_capped(self):
        settings = LateFeeSettings(fee_type=LateFeeType.PERCENTAGE, fee_amount=Decimal("5"), max_fee=Decimal("60"))
        assert calculate_late_fee(settings, Decimal("1500")) == Decimal("60.00")


def test_settings_require_paid_plan(db, landlord):
    with pytest.raises(TierRequiredError):
        RentAutomationService.update_reminder_settings(db, landlord, enabled=True)


def test_free_plan_gets_403(client, headers):
    res = client.put("/api/landlord/rent-automation/late-fees", headers=headers, json={"enabled": True})
    assert res.status_code == 403
    assert res.json()["message"] == "Rent automation requires a Pro or Enterprise subscription"


def test_reminder_settings_endpoints(client, headers, pro):
    res = client.get("/api/landlord/rent-automation/reminders", headers=headers)
    assert res.json()["settings"] == {
        "enabled": False,
        "reminderDaysBefore": [7, 3, 1],
        "reminderChannels": ["email"],
        "customMessage": None,
    }

    res = client.put("/api/landlord/rent-automation/reminders", headers=headers, json={
        "enabled": True,
        "reminderDaysBefore": [1, 7, 3, 7],
        "customMessage": "Pay through the portal",
    })
    assert res.status_code == 200
    settings = res.json()["settings"]
    assert settings["enabled"] is True
    assert settings["reminderDaysBefore"] == [7, 3, 1]
    assert settings["customMessage"] == "Pay through the portal"

    res = client.put("/api/landlord/rent-automation/reminders", headers=headers, json={"reminderDaysBefore": [45]})
    assert res.status_code == 422


def test_late_fee_settings_validation(client, headers, pro):
    res = client.put("/api/landlord/rent-automation/late-fees", headers=headers, json={
        "feeType": "percentage", "feeAmount": 150,
    })
    assert res.status_code == 400
    assert res.json()["message"] == "Percentage late fee cannot exceed 100%"

    res = client.put("/api/landlord/rent-automation/late-fees", headers=headers, json={"recurringFee": True})
    assert res.status_code == 400
    assert res.json()["message"] == "Choose how often a recurring late fee is charged"

    res = client.put("/api/landlord/rent-automation/late-fees", headers=headers, json={
        "enabled": True, "feeType": "percentage", "feeAmount": 5, "maxFee": 60, "gracePeriodDays": 3,
    })
    assert res.status_code == 200
    settings = res.json()["settings"]
    assert settings["feeType"] == "percentage"
    assert settings["feeAmount"] == 5.0
    assert settings["maxFee"] == 60.0
    assert settings["gracePeriodDays"] == 3
    assert settings["recurringInterval"] is None


def test_send_reminders_once_per_offset(db, landlord, lease, pro, outbox):
    RentAutomationService.update_reminder_settings(
        db, landlord, enabled=True, reminder_days_before=[3, 1], custom_message="Thanks!"
    )
    due_soon = RentPaymentService.create_payment(db, landlord.id, lease.id, Decimal("1500"), date(2026, 3, 13))
    RentPaymentService.create_payment(db, landlord.id, lease.id, Decimal("1500"), date(2026, 3, 12))
    db.commit()

    assert RentAutomationService.send_reminders(db, landlord.id, date(2026, 3, 10)) == 1
    assert outbox["reminders"] == [("tom@example.com", Decimal("1500"), date(2026, 3, 13), 3, "Thanks!")]
    assert due_soon.payment_metadata["remindersSent"] == [3]

    assert RentAutomationService.send_reminders(db, landlord.id, date(2026, 3, 10)) == 0
    assert len(outbox["reminders"]) == 1

    # the 1-day reminder still goes out
    assert RentAutomationService.send_reminders(db, landlord.id, date(2026, 3, 12)) == 1
    assert due_soon.payment_metadata["remindersSent"] == [3, 1]


def test_reminders_disabled(db, landlord, lease, outbox):
    RentPaymentService.create_payment(db, landlord.id, lease.id, Decimal("1500"), date(2026, 3, 13))
    assert RentAutomationService.send_reminders(db, landlord.id, date(2026, 3, 10)) == 0
    assert outbox["reminders"] == []


def test_flat_late_fee_applied_once(db, landlord, lease, pro, outbox):
    RentAutomationService.update_late_fee_settings(db, landlord, enabled=True, grace_period_days=5)
    charge = RentPaymentService.create_payment(db, landlord.id, lease.id, Decimal("1500"), date(2026, 3, 1))
    db.commit()

    # still inside the grace period
    assert RentAutomationService.apply_late_fees(db, landlord.id, date(2026, 3, 6)) == 0

    assert RentAutomationService.apply_late_fees(db, landlord.id, date(2026, 3, 10)) == 1
    fees = _late_fees(db, charge)
    assert len(fees) == 1
    assert fees[0].amount == Decimal("50.00")
    assert fees[0].due_date == date(2026, 3, 10)
    assert fees[0].status == PaymentStatus.PENDING
    assert outbox["late_fees"] == [("tom@example.com", Decimal("50.00"), date(2026, 3, 1))]

    assert RentAutomationService.apply_late_fees(db, landlord.id, date(2026, 3, 11)) == 0


def test_recurring_weekly_late_fee(db, landlord, lease, pro, outbox):
    RentAutomationService.update_late_fee_settings(
        db,
        landlord,
        enabled=True,
        grace_period_days=0,
        fee_type=LateFeeType.PERCENTAGE,
        fee_amount=Decimal("5"),
        max_fee=Decimal("60"),
        recurring_fee=True,
        recurring_interval=RecurringInterval.WEEKLY,
        notify_tenant=False,
    )
    charge = RentPaymentService.create_payment(db, landlord.id, lease.id, Decimal("1500"), date(2026, 3, 1))
    db.commit()

    assert RentAutomationService.apply_late_fees(db, landlord.id, date(2026, 3, 2)) == 1
    assert RentAutomationService.apply_late_fees(db, landlord.id, date(2026, 3, 8)) == 0
    assert RentAutomationService.apply_late_fees(db, landlord.id, date(2026, 3, 9)) == 1

    fees = _late_fees(db, charge)
    assert [f.due_date for f in fees] == [date(2026, 3, 2), date(2026, 3, 9)]
    assert all(f.amount == Decimal("60.00") for f in fees)
    assert outbox["late_fees"] == []


def test_paid_charges_get_no_late_fee(db, landlord, lease, pro, outbox):
    RentAutomationService.update_late_fee_settings(db, landlord, enabled=True, grace_period_days=0)
    charge = RentPaymentService.create_payment(db, landlord.id, lease.id, Decimal("1500"), date(2026, 3, 1))
    RentPaymentService.mark_paid(db, landlord.id, charge.id)
    assert RentAutomationService.apply_late_fees(db, landlord.id, date(2026, 3, 10)) == 0


def test_run_daily(db, landlord, lease, pro, outbox):
    RentAutomationService.update_late_fee_settings(db, landlord, enabled=True, grace_period_days=5)
    charge = RentPaymentService.create_payment(db, landlord.id, lease.id, Decimal("1500"), date(2026, 3, 1))
    db.commit()

    summary = RentAutomationService.run_daily(db, today=date(2026, 3, 10))

    assert summary == {"landlords": 1, "marked_overdue": 1, "reminders_sent": 0, "late_fees_applied": 1}
    assert charge.status == PaymentStatus.OVERDUE
    assert len(_late_fees(db, charge)) == 1


def test_run_daily_free_plan_only_marks_overdue(db, landlord, lease, outbox):
    charge = RentPaymentService.create_payment(db, landlord.id, lease.id, Decimal("1500"), date(2026, 3, 1))
    db.commit()

    summary = RentAutomationService.run_daily(db, today=date(2026, 3, 10))

    assert summary["marked_overdue"] == 1
    assert summary["late_fees_applied"] == 0
    assert charge.status == PaymentStatus.OVERDUE


def test_script_runs_job(db, landlord, lease, monkeypatch, outbox):
    RentPaymentService.create_payment(db, landlord.id, lease.id, Decimal("1500"), date(2026, 3, 1))
    db.commit()

    @contextmanager
    def session_context():
        yield db
        db.commit()

    monkeypatch.setattr(run_rent_automation, "get_session_context", session_context)
    assert run_rent_automation.main(["--date", "2026-03-10"]) == 0
    overdue = db.query(RentPayment).filter(RentPayment.status == PaymentStatus.OVERDUE).count()
    assert overdue == 1


def test_script_reports_failure(monkeypatch):
    @contextmanager
    def session_context():
        yield None

    def explode(db, today=None):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(run_rent_automation, "get_session_context", session_context)
    monkeypatch.setattr(RentAutomationService, "run_daily", staticmethod(explode))
    assert run_rent_automation.main([]) == 1


def test_send_email_skipped_without_api_key(monkeypatch):
    monkeypatch.setattr(utils.email.config, "BREVO_API_KEY", None)
    assert utils.email.send_email("tom@example.com", "Rent due", "<p>Hi</p>") is False
