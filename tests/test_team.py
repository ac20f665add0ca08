# tests/test_team.py
from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from models import (
    Landlord,
    LandlordWallet,
    PayType,
    ShiftStatus,
    SubscriptionTier,
    TimeEntry,
    Timesheet,
    UserRole,
)
from services.exceptions import NotFoundError
from services.team_service import TeamService
from services.time_tracking_service import TimeTrackingService, split_overtime, worked_minutes
from services.wallet_service import WalletService
from tests.conftest import auth_headers, make_user

MONDAY = date(2026, 3, 2)


@pytest.fixture
def enterprise(set_tier):
    return set_tier(SubscriptionTier.ENTERPRISE)


@pytest.fixture
def member_user(db):
    return make_user(db, "mia@example.com", role=UserRole.TEAM_MEMBER, first_name="Mia", last_name="Fix")


@pytest.fixture
def member(db, landlord, member_user):
    member = TeamService.create_member(db, landlord.id, name="Mia Fix", email="mia@example.com", role="maintenance")
    TeamService.upsert_compensation(db, landlord.id, member.id, PayType.HOURLY, hourly_rate=Decimal("20.00"))
    db.commit()
    return member


@pytest.fixture
def member_headers(member, member_user):
    return auth_headers(member_user)


def _work_days(db, landlord, member, days, hours, property_id=None):
    """One manual entry per day starting Monday, each `hours` long after a 30 minute break."""
    for offset in range(days):
        start = datetime.combine(MONDAY + timedelta(days=offset), datetime.min.time()).replace(hour=8)
        TimeTrackingService.create_manual_entry(
            db,
            landlord.id,
            member.id,
            clock_in=start,
            clock_out=start + timedelta(hours=hours, minutes=30),
            break_minutes=30,
            property_id=property_id,
        )
    db.commit()


class TestOvertimeSplit:

    def test_weekly_threshold(self):
        days = {MONDAY + timedelta(days=i): 600 for i in range(5)}
        assert split_overtime(days, Decimal("40")) == (2400, 600)

    def test_daily_threshold_first(self):
        days = {MONDAY + timedelta(days=i): 600 for i in range(3)}
        assert split_overtime(days, Decimal("40")) == (1800, 0)
        assert split_overtime(days, Decimal("40"), Decimal("8")) == (1440, 360)

    def test_weeks_counted_separately(self):
        days = {MONDAY + timedelta(days=i): 480 for i in range(5)}
        days[MONDAY + timedelta(days=7)] = 480
        assert split_overtime(days, Decimal("40")) == (2880, 0)

    def test_worked_minutes_never_negative(self):
        start = datetime(2026, 3, 2, 8, 0)
        assert worked_minutes(start, start + timedelta(minutes=90, seconds=59), 30) == 60
        assert worked_minutes(start, start + timedelta(minutes=10), 30) == 0


def test_team_changes_need_enterprise(client, headers):
    res = client.post("/api/landlord/team/members", headers=headers, json={"name": "Mia Fix", "email": "mia@example.com"})
    assert res.status_code == 403
    assert res.json()["message"] == "Team management requires an Enterprise subscription"

    res = client.get("/api/landlord/team/members", headers=headers)
    assert res.status_code == 200
    assert res.json() == []


def test_create_member_links_login(client, headers, enterprise, member_user):
    res = client.post("/api/landlord/team/members", headers=headers, json={
        "name": "Mia Fix", "email": "Mia@Example.com", "role": "manager",
    })
    assert res.status_code == 201
    body = res.json()
    assert body["email"] == "mia@example.com"
    assert body["userId"] == member_user.id
    assert body["status"] == "active"
    assert body["compensation"] is None

    res = client.post("/api/landlord/team/members", headers=headers, json={"name": "Mia Two", "email": "mia@example.com"})
    assert res.status_code == 409
    assert res.json()["message"] == "A team member with this email already exists"


def test_compensation(client, headers, db, landlord, enterprise):
    member = TeamService.create_member(db, landlord.id, name="Sam Salary", email="sam@example.com")
    db.commit()
    url = f"/api/landlord/team/members/{member.id}/compensation"

    res = client.get(url, headers=headers)
    assert res.status_code == 404
    assert res.json()["message"] == "No compensation set up for this team member"

    res = client.put(url, headers=headers, json={"payType": "hourly"})
    assert res.status_code == 400
    assert res.json()["message"] == "Hourly rate is required for hourly pay"

    res = client.put(url, headers=headers, json={"payType": "salary", "hourlyRate": 30})
    assert res.status_code == 400
    assert res.json()["message"] == "Salary amount is required for salaried pay"

    res = client.put(url, headers=headers, json={"payType": "hourly", "hourlyRate": 0})
    assert res.status_code == 422

    res = client.put(url, headers=headers, json={"payType": "salary", "salaryAmount": 52000, "hourlyRate": 30})
    assert res.status_code == 200
    assert res.json() == {
        "payType": "salary",
        "hourlyRate": None,
        "salaryAmount": 52000.0,
        "overtimeRate": None,
        "commissionRate": None,
    }


def test_shifts(client, headers, enterprise, member, prop):
    res = client.post("/api/landlord/team/shifts", headers=headers, json={
        "teamMemberId": member.id, "propertyId": prop.id, "date": "2026-03-02", "startTime": "17:00", "endTime": "09:00",
    })
    assert res.status_code == 400
    assert res.json()["message"] == "Shift end time must be after start time"

    res = client.post("/api/landlord/team/shifts", headers=headers, json={
        "teamMemberId": member.id, "propertyId": prop.id, "date": "2026-03-02", "startTime": "09:00", "endTime": "17:00",
    })
    assert res.status_code == 201
    shift = res.json()
    assert shift["status"] == "scheduled"
    assert shift["teamMemberName"] == "Mia Fix"
    assert shift["propertyName"] == "Maple Court"

    res = client.post("/api/landlord/team/shifts", headers=headers, json={
        "teamMemberId": member.id, "date": "2026-03-09", "startTime": "25:00", "endTime": "26:00",
    })
    assert res.status_code == 422

    res = client.get("/api/landlord/team/shifts?startDate=2026-03-01&endDate=2026-03-07", headers=headers)
    assert [s["id"] for s in res.json()] == [shift["id"]]
    res = client.get("/api/landlord/team/shifts?startDate=2026-03-03", headers=headers)
    assert res.json() == []

    client.patch(f"/api/landlord/team/members/{member.id}", headers=headers, json={"status": "inactive"})
    res = client.patch(f"/api/landlord/team/shifts/{shift['id']}", headers=headers, json={"endTime": "18:00"})
    assert res.status_code == 400
    assert res.json()["message"] == "Cannot schedule an inactive team member"

    res = client.delete(f"/api/landlord/team/shifts/{shift['id']}", headers=headers)
    assert res.json()["success"] is True


def test_clock_in_and_out(client, headers, member_headers, member):
    res = client.post("/api/team/clock-in", headers=member_headers, json={"location": "Front gate"})
    assert res.status_code == 201
    entry = res.json()
    assert entry["status"] == "active"

    res = client.post("/api/team/clock-in", headers=member_headers, json={})
    assert res.status_code == 409
    assert res.json()["message"] == "You are already clocked in"

    res = client.get("/api/team/time-entries/active", headers=member_headers)
    assert res.json()["entry"]["id"] == entry["id"]

    res = client.get("/api/landlord/team/working-now", headers=headers)
    assert [e["teamMemberName"] for e in res.json()] == ["Mia Fix"]

    res = client.post("/api/team/clock-out", headers=member_headers, json={"timeEntryId": entry["id"]})
    assert res.status_code == 200
    assert res.json()["status"] == "completed"
    assert res.json()["totalMinutes"] == 0

    res = client.get("/api/team/time-entries/active", headers=member_headers)
    assert res.json()["entry"] is None


def test_portal_requires_team_member(client, headers):
    res = client.post("/api/team/clock-in", headers=headers, json={})
    assert res.status_code == 403
    assert res.json()["message"] == "Team member access required"


def test_clock_out_completes_shift(db, landlord, member):
    shift = TeamService.create_shift(
        db, landlord.id, team_member_id=member.id, date=MONDAY, start_time="09:00", end_time="17:00"
    )
    entry = TimeTrackingService.clock_in(db, member, shift_id=shift.id, now=datetime(2026, 3, 2, 8, 55))
    entry = TimeTrackingService.clock_out(
        db, member, entry.id, break_minutes=30, now=datetime(2026, 3, 2, 17, 5)
    )
    assert entry.total_minutes == 460
    assert shift.status == ShiftStatus.COMPLETED


def test_manual_entry_validation(client, headers, enterprise, member):
    res = client.post("/api/landlord/team/time-entries", headers=headers, json={
        "teamMemberId": member.id, "clockIn": "2026-03-02T17:00:00", "clockOut": "2026-03-02T09:00:00",
    })
    assert res.status_code == 400
    assert res.json()["message"] == "Clock-out must be after clock-in"

    res = client.post("/api/landlord/team/time-entries", headers=headers, json={
        "teamMemberId": member.id, "clockIn": "2026-03-02T09:00:00", "clockOut": "2026-03-02T17:00:00",
        "breakMinutes": 60,
    })
    assert res.status_code == 201
    assert res.json()["totalMinutes"] == 420
    assert res.json()["isManual"] is True


def test_timesheet_and_payroll_flow(client, headers, member_headers, db, landlord, enterprise, member):
    _work_days(db, landlord, member, days=5, hours=10)
    period = {"teamMemberId": member.id, "periodStart": "2026-03-01", "periodEnd": "2026-03-07"}

    res = client.post("/api/landlord/team/timesheets/generate", headers=headers, json=period)
    assert res.status_code == 201
    timesheet = res.json()
    assert timesheet["status"] == "draft"
    assert timesheet["totalHours"] == 50.0
    assert timesheet["regularHours"] == 40.0
    assert timesheet["overtimeHours"] == 10.0
    assert len(timesheet["entries"]) == 5
    url = f"/api/landlord/team/timesheets/{timesheet['id']}"

    res = client.post("/api/landlord/team/timesheets/generate", headers=headers, json=period)
    assert res.status_code == 409

    res = client.post(f"{url}/review", headers=headers, json={"status": "approved"})
    assert res.status_code == 400
    assert res.json()["message"] == "Only submitted timesheets can be reviewed"

    res = client.post(f"/api/team/timesheets/{timesheet['id']}/submit", headers=member_headers)
    assert res.json()["status"] == "submitted"
    res = client.post(f"{url}/review", headers=headers, json={"status": "approved", "reviewNotes": "Thanks"})
    assert res.json()["status"] == "approved"

    res = client.get("/api/landlord/team/payroll/pending", headers=headers)
    item = res.json()["items"][0]
    assert item["regularPay"] == 800.0
    assert item["overtimePay"] == 300.0
    assert item["netPay"] == 1100.0
    assert res.json()["total"] == 1100.0

    res = client.post("/api/landlord/team/payroll/process", headers=headers, json={"timesheetIds": [timesheet["id"]]})
    assert res.status_code == 400
    assert res.json()["message"].startswith("Insufficient wallet balance")

    WalletService.credit(db, landlord.id, Decimal("2000.00"))
    db.commit()

    res = client.post("/api/landlord/team/payroll/process", headers=headers, json={"timesheetIds": [timesheet["id"]]})
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Processed payroll for 1 timesheet"
    assert body["total"] == 1100.0
    assert body["payments"][0]["paymentType"] == "payroll"

    assert client.get(url, headers=headers).json()["status"] == "paid"
    res = client.post("/api/landlord/team/payroll/process", headers=headers, json={"timesheetIds": [timesheet["id"]]})
    assert res.json()["message"] == "All timesheets must be approved before processing payroll"

    res = client.post("/api/landlord/team/payroll/bonus", headers=headers, json={
        "teamMemberId": member.id, "amount": 100, "description": "Holiday bonus",
    })
    assert res.status_code == 201
    assert res.json()["paymentType"] == "bonus"

    wallet = db.query(LandlordWallet).filter(LandlordWallet.landlord_id == landlord.id).one()
    assert wallet.available_balance == Decimal("800.00")
    res = client.get(f"/api/landlord/team/payments?teamMemberId={member.id}", headers=headers)
    assert len(res.json()) == 2


def test_daily_overtime_setting(client, headers, db, landlord, enterprise, member):
    res = client.put("/api/landlord/team/payroll/settings", headers=headers, json={"dailyOvertimeThreshold": 8})
    assert res.json()["settings"]["dailyOvertimeThreshold"] == 8.0
    _work_days(db, landlord, member, days=3, hours=10)

    res = client.post("/api/landlord/team/timesheets/generate", headers=headers, json={
        "teamMemberId": member.id, "periodStart": "2026-03-01", "periodEnd": "2026-03-07",
    })
    assert res.json()["regularHours"] == 24.0
    assert res.json()["overtimeHours"] == 6.0


def test_rejected_timesheet_can_be_regenerated(client, headers, member_headers, db, landlord, enterprise, member):
    _work_days(db, landlord, member, days=2, hours=8)
    period = {"teamMemberId": member.id, "periodStart": "2026-03-01", "periodEnd": "2026-03-07"}
    timesheet_id = client.post("/api/landlord/team/timesheets/generate", headers=headers, json=period).json()["id"]
    client.post(f"/api/team/timesheets/{timesheet_id}/submit", headers=member_headers)

    res = client.post(f"/api/landlord/team/timesheets/{timesheet_id}/review", headers=headers, json={
        "status": "rejected", "reviewNotes": "Missing Wednesday",
    })
    assert res.json()["status"] == "rejected"
    assert db.get(Timesheet, timesheet_id).time_entries == []
    assert db.query(TimeEntry).filter(TimeEntry.timesheet_id.isnot(None)).count() == 0
    res = client.get(f"/api/landlord/team/timesheets/{timesheet_id}", headers=headers)
    assert res.json()["entries"] == []

    TimeTrackingService.create_manual_entry(
        db, landlord.id, member.id, clock_in=datetime(2026, 3, 4, 8, 0), clock_out=datetime(2026, 3, 4, 12, 0)
    )
    db.commit()

    res = client.post("/api/landlord/team/timesheets/generate", headers=headers, json=period)
    assert res.status_code == 201
    assert res.json()["id"] == timesheet_id
    assert res.json()["status"] == "draft"
    assert res.json()["totalHours"] == 20.0
    assert res.json()["reviewNotes"] is None
    assert len(res.json()["entries"]) == 3


def test_generate_without_entries(client, headers, enterprise, member):
    res = client.post("/api/landlord/team/timesheets/generate", headers=headers, json={
        "teamMemberId": member.id, "periodStart": "2026-03-01", "periodEnd": "2026-03-07",
    })
    assert res.status_code == 400
    assert res.json()["message"] == "No completed time entries in this period"


def test_time_off(client, headers, member_headers, enterprise, member):
    res = client.post("/api/team/time-off", headers=member_headers, json={
        "startDate": "2026-04-10", "endDate": "2026-04-08",
    })
    assert res.status_code == 400
    assert res.json()["message"] == "End date cannot be before start date"

    res = client.post("/api/team/time-off", headers=member_headers, json={
        "startDate": "2026-04-06", "endDate": "2026-04-10", "requestType": "vacation", "reason": "Family trip",
    })
    assert res.status_code == 201
    request_id = res.json()["id"]

    res = client.get("/api/landlord/team/time-off?status=pending", headers=headers)
    assert [r["id"] for r in res.json()] == [request_id]

    url = f"/api/landlord/team/time-off/{request_id}/review"
    res = client.post(url, headers=headers, json={"status": "approved"})
    assert res.json()["status"] == "approved"
    assert res.json()["reviewedAt"] is not None

    res = client.post(url, headers=headers, json={"status": "denied"})
    assert res.status_code == 400
    assert res.json()["message"] == "This request has already been reviewed"


def test_labor_costs(client, headers, db, landlord, prop, member):
    _work_days(db, landlord, member, days=2, hours=5, property_id=prop.id)
    TimeTrackingService.create_manual_entry(
        db, landlord.id, member.id, clock_in=datetime(2026, 3, 5, 8, 0), clock_out=datetime(2026, 3, 5, 10, 0)
    )
    db.commit()

    res = client.get("/api/landlord/team/reports/labor-costs?start=2026-03-01&end=2026-03-31", headers=headers)
    body = res.json()
    assert [(r["propertyName"], r["hours"], r["cost"]) for r in body["byProperty"]] == [
        ("Maple Court", 10.0, 200.0),
        ("Unassigned", 2.0, 40.0),
    ]
    assert body["totalHours"] == 12.0
    assert body["totalCost"] == 240.0
    assert body["entryCount"] == 3

    res = client.get("/api/landlord/team/reports/labor-costs?start=2026-03-31&end=2026-03-01", headers=headers)
    assert res.status_code == 400


def test_member_lookup_is_scoped(db, member):
    other_user = make_user(db, "otto@example.com", first_name="Otto")
    other = db.query(Landlord).filter(Landlord.user_id == other_user.id).one()
    with pytest.raises(NotFoundError):
        TeamService.get_member(db, other.id, member.id)
