# services/__init__.py
from .auth_service import AuthService
from .contractor_service import ContractorService
from .dashboard_service import DashboardService
from .fee_service import FeeService, resolve_fee, EffectiveFee
from .hiring_service import HiringService
from .maintenance_service import MaintenanceService
from .payout_service import PayoutService, calculate_cash_out_fees
from .payroll_service import PayrollService, calculate_pay
from .portfolio_service import PortfolioService
from .rent_automation_service import RentAutomationService, calculate_late_fee
from .rent_ledger_service import RentLedgerService
from .rent_payment_service import RentPaymentService
from .team_service import TeamService
from .time_tracking_service import TimeTrackingService
from .wallet_service import WalletService

__all__ = [
     "AuthService",
     "ContractorService",
     "DashboardService",
     "FeeService",
     "resolve_fee",
     "EffectiveFee",
     "HiringService",
     "MaintenanceService",
     "PayoutService",
     "calculate_cash_out_fees",
     "PayrollService",
     "calculate_pay",
     "PortfolioService",
     "RentAutomationService",
     "calculate_late_fee",
     "RentLedgerService",
     "RentPaymentService",
     "TeamService",
     "TimeTrackingService",
     "WalletService",
]
