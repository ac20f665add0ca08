# clients/stripe_client.py
"""
Thin wrapper around the Stripe SDK.

Every function returns plain values (ids, dicts) so services never touch
Stripe objects directly, and converts stripe.error.StripeError into
ProcessorError with a message that can be shown to the landlord.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

import stripe

from config import config

logger = logging.getLogger(__name__)


class ProcessorError(Exception):
     """A payment processor call failed or was refused."""

     def __init__(self, message: str, status_code: int = 502, requires_manual_entry: bool = False):
          super().__init__(message)
          self.message = message
          self.status_code = status_code
          self.requires_manual_entry = requires_manual_entry


def init_stripe() -> None:
     if not config.STRIPE_SECRET_KEY:
          raise ProcessorError("Payment processor is not configured", status_code=503)
     stripe.api_key = config.STRIPE_SECRET_KEY


def to_cents(amount: Decimal) -> int:
     """Dollars to integer cents, rounding half up."""
     return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _processor_error(action: str, e: "stripe.error.StripeError") -> ProcessorError:
     logger.error("Stripe %s failed: %s", action, e)
     message = getattr(e, "user_message", None) or str(e) or f"Failed to {action}"
     return ProcessorError(message)


# ---------------------------------------------------------------------------
# Customers and bank accounts
# ---------------------------------------------------------------------------

def create_customer(email: str, name: str, landlord_id: int) -> str:
     init_stripe()
     try:
          customer = stripe.Customer.create(
               email=email,
               name=name,
               metadata={"landlord_id": str(landlord_id)},
          )
     except stripe.error.StripeError as e:
          raise _processor_error("create customer", e)
     logger.info("Created Stripe customer %s for landlord %s", customer["id"], landlord_id)
     return customer["id"]


def add_bank_account(
     customer_id: str,
     account_holder_name: str,
     routing_number: str,
     account_number: str,
     account_type: str,
) -> dict:
     """
     Tokenize a US bank account and attach it to the customer.

     Returns:
          dict with id, last4, bank_name and status ("new" until the
          micro-deposits are verified, "verified" afterwards)
     """
     init_stripe()
     try:
          token = stripe.Token.create(
               bank_account={
                    "country": "US",
                    "currency": config.STRIPE_CURRENCY,
                    "account_holder_name": account_holder_name,
                    "account_holder_type": "individual",
                    "routing_number": routing_number,
                    "account_number": account_number,
                    "account_type": account_type,
               }
          )
          source = stripe.Customer.create_source(customer_id, source=token["id"])
     except stripe.error.StripeError as e:
          raise _processor_error("add bank account", e)
     return {
          "id": source["id"],
          "last4": source["last4"],
          "bank_name": source.get("bank_name"),
          "status": source.get("status", "new"),
     }


def verify_micro_deposits(customer_id: str, source_id: str, amounts_cents: list[int]) -> str:
     """Submit the two micro-deposit amounts. Returns the new source status."""
     init_stripe()
     try:
          source = stripe.Customer.retrieve_source(customer_id, source_id)
          verified = source.verify(amounts=amounts_cents)
     except stripe.error.StripeError as e:
          logger.warning("Micro-deposit verification failed for %s: %s", source_id, e)
          raise ProcessorError(
               getattr(e, "user_message", None) or "The amounts did not match. Please check and try again.",
               status_code=400,
          )
     return verified["status"]


def remove_payout_method(customer_id: str, method_id: str, method_type: str) -> None:
     init_stripe()
     try:
          if method_type == "us_bank_account":
               stripe.PaymentMethod.detach(method_id)
          else:
               stripe.Customer.delete_source(customer_id, method_id)
     except stripe.error.StripeError as e:
          raise _processor_error("remove bank account", e)


# ---------------------------------------------------------------------------
# Financial Connections (instant verification)
# ---------------------------------------------------------------------------

def create_financial_connections_session(customer_id: str) -> dict:
     init_stripe()
     try:
          session = stripe.financial_connections.Session.create(
               account_holder={"type": "customer", "customer": customer_id},
               permissions=["payment_method", "balances"],
               filters={"countries": ["US"], "account_subcategories": ["checking", "savings"]},
          )
     except stripe.error.StripeError as e:
          raise _processor_error("start bank connection", e)
     return {"client_secret": session["client_secret"], "session_id": session["id"]}


def attach_financial_connections_account(customer_id: str, account_id: str) -> dict:
     """
     Turn a linked Financial Connections account into a payment method.

     Raises:
          ProcessorError: requires_manual_entry is set when the bank does not
               support instant verification
     """
     init_stripe()
     try:
          account = stripe.financial_connections.Account.retrieve(account_id)
          if "us_bank_account" not in (account.get("supported_payment_method_types") or []):
               raise ProcessorError(
                    "This bank does not support instant verification. Please enter your account details manually.",
                    status_code=400,
                    requires_manual_entry=True,
               )
          payment_method = stripe.PaymentMethod.create(
               type="us_bank_account",
               us_bank_account={"financial_connections_account": account_id},
               billing_details={"name": account.get("display_name") or "Account holder"},
          )
          stripe.PaymentMethod.attach(payment_method["id"], customer=customer_id)
     except stripe.error.StripeError as e:
          raise _processor_error("link bank account", e)
     bank = payment_method["us_bank_account"]
     return {
          "id": payment_method["id"],
          "last4": bank["last4"],
          "bank_name": bank.get("bank_name") or account.get("institution_name"),
          "account_type": bank.get("account_type"),
          "routing_number": bank.get("routing_number"),
          "account_holder_name": payment_method["billing_details"].get("name"),
     }


# ---------------------------------------------------------------------------
# Connect account (where payouts are paid from)
# ---------------------------------------------------------------------------

def create_connect_account(email: str, landlord_id: int) -> str:
     """Create the landlord's Express account. Returns the account id."""
     init_stripe()
     try:
          account = stripe.Account.create(
               type="express",
               country="US",
               email=email,
               capabilities={"transfers": {"requested": True}},
               business_type="individual",
               metadata={"landlord_id": str(landlord_id)},
          )
     except stripe.error.StripeError as e:
          raise _processor_error("create payout account", e)
     logger.info("Created Stripe Connect account %s for landlord %s", account["id"], landlord_id)
     return account["id"]


def create_onboarding_link(connect_account_id: str, refresh_url: str, return_url: str) -> str:
     """Hosted onboarding page where the landlord finishes identity checks."""
     init_stripe()
     try:
          link = stripe.AccountLink.create(
               account=connect_account_id,
               refresh_url=refresh_url,
               return_url=return_url,
               type="account_onboarding",
          )
     except stripe.error.StripeError as e:
          raise _processor_error("start payout onboarding", e)
     return link["url"]


def add_external_account(
     connect_account_id: str,
     account_holder_name: str,
     routing_number: str,
     account_number: str,
     account_type: str,
) -> str:
     """
     Register a bank account on the Connect account as a payout
     destination. Returns the external account id.
     """
     init_stripe()
     try:
          token = stripe.Token.create(
               bank_account={
                    "country": "US",
                    "currency": config.STRIPE_CURRENCY,
                    "account_holder_name": account_holder_name,
                    "account_holder_type": "individual",
                    "routing_number": routing_number,
                    "account_number": account_number,
                    "account_type": account_type,
               }
          )
          external = stripe.Account.create_external_account(connect_account_id, external_account=token["id"])
     except stripe.error.StripeError as e:
          raise _processor_error("add payout bank account", e)
     return external["id"]


def link_external_account(connect_account_id: str, financial_connections_account_id: str) -> str:
     """Use an instantly verified bank as a payout destination. Returns the external account id."""
     init_stripe()
     try:
          external = stripe.Account.create_external_account(
               connect_account_id,
               external_account=financial_connections_account_id,
          )
     except stripe.error.StripeError as e:
          raise _processor_error("link payout bank account", e)
     return external["id"]


def remove_external_account(connect_account_id: str, external_account_id: str) -> None:
     init_stripe()
     try:
          stripe.Account.delete_external_account(connect_account_id, external_account_id)
     except stripe.error.StripeError as e:
          raise _processor_error("remove payout bank account", e)


# ---------------------------------------------------------------------------
# Connect payouts
# ---------------------------------------------------------------------------

def payouts_enabled(connect_account_id: str) -> bool:
     init_stripe()
     try:
          account = stripe.Account.retrieve(connect_account_id)
     except stripe.error.StripeError as e:
          raise _processor_error("check payout account", e)
     return bool(account.get("payouts_enabled"))


def create_payout(
     connect_account_id: str,
     amount_cents: int,
     method: str,
     destination: str,
     metadata: Optional[dict] = None,
) -> str:
     """
     Pay out from the connected account balance to one of its external
     accounts. Returns the payout id.
     """
     init_stripe()
     try:
          payout = stripe.Payout.create(
               amount=amount_cents,
               currency=config.STRIPE_CURRENCY,
               method=method,
               destination=destination,
               metadata=metadata or {},
               stripe_account=connect_account_id,
          )
     except stripe.error.StripeError as e:
          raise _processor_error("create payout", e)
     logger.info("Created %s payout %s for %s cents", method, payout["id"], amount_cents)
     return payout["id"]
