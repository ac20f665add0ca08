# schemas/dashboard.py
from .base import CamelModel


class DashboardResponse(CamelModel):
     """Stat tiles for the landlord dashboard."""
     success: bool = True
     properties_count: int
     total_units: int
     occupied_units: int
     vacant_units: int
     tenants_count: int
     maintenance_tickets_count: int
     urgent_tickets: int
     rent_collected_this_month: float
     rent_collected_ytd: float
     scheduled_rent_monthly: float
     collection_rate: float
     available_balance: float
     open_applicants: int
