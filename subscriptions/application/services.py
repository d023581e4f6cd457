"""
Application Services — Subscription Lifecycle

Orchestrates account opening, deposits, withdrawals and closing on top of the
Subscription entity and the balance rules in subscriptions.domain.rules.

Core guarantees provided:

- Atomicity: every mutating operation runs inside transaction.atomic(); a
  rule violation raised mid-operation rolls back everything it touched.
- Per-account serialization: the account row is locked with
  select_for_update() before it is read, so concurrent deposits and
  withdrawals on the same account cannot interleave and break the
  non-negative or minimum-balance invariants.
- Ownership opacity: an account owned by another customer is reported as
  AccountNotFound, never as a distinct "forbidden" condition.
- Ledger consistency: each successful deposit or withdrawal appends an
  AccountTransaction row in the same transaction as the balance update.

Services receive their collaborators through the constructor; the shared
instances are wired once in subscriptions.application.
"""

import logging
from decimal import Decimal, InvalidOperation

from django.db import transaction

from subscriptions.domain import rules
from subscriptions.domain.exceptions import (
    AccountNotFound,
    CustomerNotFound,
    TransactionInvalid,
)
from subscriptions.domain.types import AccountStatus, AccountType, TransactionKind
from subscriptions.models import AccountTransaction, Customer, Subscription

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def to_amount(value):
    """Coerce a submitted amount to a two-place Decimal, or raise TransactionInvalid."""
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise TransactionInvalid(f"Invalid amount: {value!r}") from None

    if not amount.is_finite():
        raise TransactionInvalid(f"Invalid amount: {value!r}")

    try:
        quantized = amount.quantize(CENT)
    except InvalidOperation:
        raise TransactionInvalid(f"Invalid amount: {value!r}") from None

    if amount != quantized:
        raise TransactionInvalid(f"Invalid amount: {value!r}")

    return quantized


def _as_id(value):
    # Ids arriving as strings ("1") still match the integer foreign key
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class SubscriptionService:
    """Business operations on a single account."""

    def create_account(self, customer_id, account_type, initial_balance=Decimal("0.00")):
        """
        Opens a new account for the customer.

        Raises CustomerNotFound for an unknown customer and TransactionInvalid
        when the type is unknown or the opening balance breaks the type's rule.
        """
        with transaction.atomic():
            try:
                customer = Customer.objects.get(id=customer_id)
            except Customer.DoesNotExist:
                raise CustomerNotFound(customer_id) from None

            balance = to_amount(initial_balance)
            if account_type not in AccountType.values:
                raise TransactionInvalid(f"Unknown account type: {account_type}")

            try:
                rules.validate_opening(account_type, balance)
            except TransactionInvalid:
                logger.warning(
                    "Rejected account opening: customer=%s type=%s balance=%s",
                    customer_id, account_type, balance,
                )
                raise

            subscription = Subscription.objects.create(
                customer=customer,
                account_type=account_type,
                balance=balance,
                status=AccountStatus.OPEN,
            )

        logger.info(
            "Opened account: account=%s customer=%s type=%s balance=%s",
            subscription.id, customer_id, account_type, balance,
        )
        return subscription

    def get(self, account_id):
        try:
            return Subscription.objects.get(id=account_id)
        except Subscription.DoesNotExist:
            raise AccountNotFound(account_id) from None

    def get_for_customer(self, account_id, customer_id):
        """Fetches an account, treating another customer's account as absent."""
        return self._owned(Subscription.objects.all(), account_id, customer_id)

    def list_for_customer(self, customer_id):
        return list(Subscription.objects.filter(customer_id=customer_id).order_by("id"))

    def history(self, account_id, customer_id):
        subscription = self.get_for_customer(account_id, customer_id)
        return list(subscription.transactions.all())

    def deposit(self, account_id, customer_id, amount):
        amount = to_amount(amount)

        with transaction.atomic():
            subscription = self._locked(account_id, customer_id)
            self._apply(subscription.deposit, subscription, amount, "deposit")
            self._record(subscription, TransactionKind.DEPOSIT, amount)

        logger.info(
            "Deposit: account=%s customer=%s amount=%s balance=%s",
            account_id, customer_id, amount, subscription.balance,
        )
        return subscription

    def withdraw(self, account_id, customer_id, amount):
        amount = to_amount(amount)

        with transaction.atomic():
            subscription = self._locked(account_id, customer_id)
            self._apply(subscription.withdraw, subscription, amount, "withdraw")
            self._record(subscription, TransactionKind.WITHDRAW, amount)

        logger.info(
            "Withdrawal: account=%s customer=%s amount=%s balance=%s",
            account_id, customer_id, amount, subscription.balance,
        )
        return subscription

    def close(self, account_id, customer_id):
        with transaction.atomic():
            subscription = self._locked(account_id, customer_id)
            try:
                subscription.close()
            except TransactionInvalid:
                logger.warning(
                    "Rejected close: account=%s balance=%s status=%s",
                    account_id, subscription.balance, subscription.status,
                )
                raise
            subscription.save(update_fields=["status", "updated_at"])

        logger.info("Closed account: account=%s customer=%s", account_id, customer_id)
        return subscription

    def _locked(self, account_id, customer_id):
        # Lock the account row so the balance read below cannot go stale
        return self._owned(Subscription.objects.select_for_update(), account_id, customer_id)

    def _owned(self, queryset, account_id, customer_id):
        try:
            subscription = queryset.get(id=account_id)
        except Subscription.DoesNotExist:
            raise AccountNotFound(account_id) from None

        if subscription.customer_id != _as_id(customer_id):
            logger.warning(
                "Ownership mismatch: account=%s requested_by=%s",
                account_id, customer_id,
            )
            raise AccountNotFound(account_id)

        return subscription

    def _apply(self, operation, subscription, amount, name):
        try:
            operation(amount)
        except TransactionInvalid:
            logger.warning(
                "Rejected %s: account=%s amount=%s balance=%s",
                name, subscription.id, amount, subscription.balance,
            )
            raise
        subscription.save(update_fields=["balance", "updated_at"])

    def _record(self, subscription, kind, amount):
        AccountTransaction.objects.create(
            subscription=subscription,
            kind=kind,
            amount=amount,
            balance_after=subscription.balance,
        )


class UserService:
    """Customer lookups and the account operations that start from a customer."""

    def __init__(self, subscription_service):
        self.subscription_service = subscription_service

    def get(self, customer_id):
        try:
            return Customer.objects.get(id=customer_id)
        except Customer.DoesNotExist:
            raise CustomerNotFound(customer_id) from None

    def accounts(self, customer_id):
        customer = self.get(customer_id)
        return self.subscription_service.list_for_customer(customer.id)

    def add_account(self, customer_id, account_type, initial_balance=Decimal("0.00")):
        customer = self.get(customer_id)
        return self.subscription_service.create_account(customer.id, account_type, initial_balance)

    def close_account(self, customer_id, account_id):
        """
        Closes one of the customer's accounts. The account stays attached to
        the customer; only its status changes.
        """
        customer = self.get(customer_id)
        return self.subscription_service.close(account_id, customer.id)
