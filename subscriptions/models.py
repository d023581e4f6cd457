"""
Persistence Models — Subscription Domain (Django ORM)

Customers own bank accounts ("subscriptions"). Each account carries a type,
a decimal balance and an OPEN/CLOSED status; every successful deposit or
withdrawal is appended to a ledger of AccountTransaction rows.

Domain behaviour lives on the Subscription model itself: deposit(), withdraw()
and close() validate through subscriptions.domain.rules and mutate the
in-memory instance only. Persisting the change, and locking the row while
doing so, is the job of the application services.
"""

from decimal import Decimal

from django.db import models

from subscriptions.domain import rules
from subscriptions.domain.types import AccountStatus, AccountType, TransactionKind


class Customer(models.Model):
    """
    Owner of zero or more subscriptions.

    Customers are created outside this module (fixtures, the Django shell) and
    never deleted by it.
    """

    first_name = models.CharField(max_length=64)
    last_name = models.CharField(max_length=64)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=32, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"Customer {self.id} - {self.first_name} {self.last_name}"


class Subscription(models.Model):
    """A customer's bank account."""

    customer = models.ForeignKey(
        Customer,
        on_delete=models.PROTECT,
        related_name="subscriptions",
    )

    account_type = models.CharField(max_length=16, choices=AccountType.choices)

    balance = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    status = models.CharField(
        max_length=8,
        choices=AccountStatus.choices,
        default=AccountStatus.OPEN,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"Subscription {self.id} - {self.account_type} {self.status} balance: {self.balance}"

    @property
    def is_open(self):
        return self.status == AccountStatus.OPEN

    def deposit(self, amount):
        rules.validate_deposit(self, amount)
        self.balance += amount

    def withdraw(self, amount):
        rules.validate_withdraw(self, amount)
        self.balance -= amount

    def close(self):
        rules.validate_close(self)
        self.status = AccountStatus.CLOSED


class AccountTransaction(models.Model):
    """
    Ledger entry for a single deposit or withdrawal.

    Written in the same atomic block as the balance update, so the ledger and
    the balance never disagree.
    """

    subscription = models.ForeignKey(
        Subscription,
        on_delete=models.CASCADE,
        related_name="transactions",
    )

    kind = models.CharField(max_length=8, choices=TransactionKind.choices)

    amount = models.DecimalField(max_digits=12, decimal_places=2)

    balance_after = models.DecimalField(max_digits=12, decimal_places=2)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"Transaction {self.id} - {self.kind} {self.amount}"
