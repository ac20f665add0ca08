# tests/test_dashboard.py
from datetime import date, datetime
from decimal import Decimal

from models import Landlord, TicketPriority, TicketStatus
from services.dashboard_service import DashboardService
from services.maintenance_service import MaintenanceService
from services.portfolio_service import PortfolioService
from services.rent_payment_service import RentPaymentService
from tests.conftest import make_user


def _paid(db, landlord, lease, due, paid_at):
    payment = RentPaymentService.create_payment(db, landlord.id, lease.id, Decimal("1500"), due)
    RentPaymentService.mark_paid(db, landlord.id, payment.id, paid_at=paid_at)
    return payment


def test_overview_counts_and_sums(db, landlord, prop, lease):
    _paid(db, landlord, lease, date(2026, 2, 1), datetime(2026, 2, 2, 10, 0))
    _paid(db, landlord, lease, date(2026, 3, 1), datetime(2026, 3, 2, 10, 0))
    RentPaymentService.create_payment(db, landlord.id, lease.id, Decimal("1500"), date(2026, 4, 1))

    MaintenanceService.create_ticket(db, landlord.id, prop.id, title="Burst pipe", priority=TicketPriority.URGENT)
    MaintenanceService.create_ticket(
        db, landlord.id, prop.id, title="No heat", priority=TicketPriority.URGENT, status=TicketStatus.RESOLVED
    )
    MaintenanceService.create_ticket(db, landlord.id, prop.id, title="Squeaky door", priority=TicketPriority.LOW)

    # Another landlord's portfolio stays out of the numbers
    other_user = make_user(db, "otto@example.com", first_name="Otto")
    other = db.query(Landlord).filter(Landlord.user_id == other_user.id).one()
    PortfolioService.create_property(db, other.id, name="Elm House")
    db.commit()

    overview = DashboardService.get_overview(db, landlord.id, today=date(2026, 3, 10))

    assert overview["properties_count"] == 1
    assert overview["total_units"] == 2
    assert overview["occupied_units"] == 1
    assert overview["vacant_units"] == 1
    assert overview["tenants_count"] == 1
    assert overview["maintenance_tickets_count"] == 3
    assert overview["urgent_tickets"] == 1
    assert overview["rent_collected_this_month"] == 1500.0
    assert overview["rent_collected_ytd"] == 3000.0
    assert overview["scheduled_rent_monthly"] == 1500.0
    assert overview["collection_rate"] == 100.0
    assert overview["available_balance"] == 3000.0
    assert overview["open_applicants"] == 0


def test_overview_for_empty_portfolio(db, landlord):
    overview = DashboardService.get_overview(db, landlord.id, today=date(2026, 3, 10))
    assert overview["properties_count"] == 0
    assert overview["collection_rate"] == 0.0
    assert overview["available_balance"] == 0.0


def test_dashboard_endpoint(client, headers, prop, lease):
    res = client.get("/api/landlord/dashboard", headers=headers)
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["propertiesCount"] == 1
    assert body["occupiedUnits"] == 1
    assert body["scheduledRentMonthly"] == 1500.0

    res = client.get(f"/api/landlord/dashboard?propertyId={prop.id}", headers=headers)
    assert res.json()["totalUnits"] == 2


def test_dashboard_unknown_property(client, headers):
    res = client.get("/api/landlord/dashboard?propertyId=999", headers=headers)
    assert res.status_code == 404
