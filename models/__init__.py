# models/__init__.py
from .base import Base
from .user import User, UserRole
from .landlord import Landlord, SubscriptionTier
from .property import Property
from .property_unit import PropertyUnit
from .tenant import Tenant
from .lease import Lease, LeaseStatus
from .rent_payment import RentPayment, PaymentStatus, PaymentType
from .fee_setting import FeeSetting, PropertyFeeOverride, FeeType
from .rent_automation import RentReminderSettings, LateFeeSettings, LateFeeType, RecurringInterval
from .payout import SavedPayoutMethod, Payout, LandlordWallet, PayoutType, PayoutStatus
from .team_member import TeamMember, TeamMemberCompensation, TeamMemberStatus, PayType
from .scheduling import Shift, TimeEntry, TimeOffRequest, ShiftStatus, TimeEntryStatus, TimeOffStatus
from .payroll import PayrollSettings, Timesheet, TeamPayment, PayPeriodType, TimesheetStatus, TeamPaymentType
from .hiring import JobPosting, Applicant, JobStatus, ApplicantStatus
from .contractor import Contractor
from .maintenance_ticket import MaintenanceTicket, TicketStatus, TicketPriority

__all__ = [
     "Base",
     "User",
     "UserRole",
     "Landlord",
     "SubscriptionTier",
     "Property",
     "PropertyUnit",
     "Tenant",
     "Lease",
     "LeaseStatus",
     "RentPayment",
     "PaymentStatus",
     "PaymentType",
     "FeeSetting",
     "PropertyFeeOverride",
     "FeeType",
     "RentReminderSettings",
     "LateFeeSettings",
     "LateFeeType",
     "RecurringInterval",
     "SavedPayoutMethod",
     "Payout",
     "LandlordWallet",
     "PayoutType",
     "PayoutStatus",
     "TeamMember",
     "TeamMemberCompensation",
     "TeamMemberStatus",
     "PayType",
     "Shift",
     "TimeEntry",
     "TimeOffRequest",
     "ShiftStatus",
     "TimeEntryStatus",
     "TimeOffStatus",
     "PayrollSettings",
     "Timesheet",
     "TeamPayment",
     "PayPeriodType",
     "TimesheetStatus",
     "TeamPaymentType",
     "JobPosting",
     "Applicant",
     "JobStatus",
     "ApplicantStatus",
     "Contractor",
     "MaintenanceTicket",
     "TicketStatus",
     "TicketPriority",
]
