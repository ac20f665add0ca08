# routers/dashboard.py
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_session
from models import Landlord
from services.dashboard_service import DashboardService
from services.portfolio_service import PortfolioService
from schemas.dashboard import DashboardResponse
from routers.dependencies import get_current_landlord

router = APIRouter(prefix="/api/landlord", tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardResponse, summary="Landlord dashboard tiles")
def get_dashboard(
     property_id: Optional[int] = Query(None, alias="propertyId", description="Limit every tile to one property"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     if property_id:
          PortfolioService.get_property(db, landlord.id, property_id)
     return DashboardService.get_overview(db, landlord.id, property_id=property_id)
