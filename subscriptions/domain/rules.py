"""
Transaction Validator — Account Balance Rules

Pure checks evaluated before an account is mutated. Nothing here touches the
database: callers pass the in-memory account (or, for account opening, the
requested type and balance) and either get back silently or receive a
TransactionInvalid describing the broken rule.

Rules:

- Amounts must be strictly positive; the operation decides the sign.
- Balances never go negative.
- Balances never exceed MAX_BALANCE, the capacity of the balance column.
- SAVINGS accounts keep at least SAVINGS_MINIMUM_BALANCE while open,
  including at the moment they are opened.
- Closing requires a zero balance.
- A CLOSED account accepts no further operation.
"""

from decimal import Decimal

from subscriptions.domain.exceptions import TransactionInvalid
from subscriptions.domain.types import AccountStatus, AccountType

SAVINGS_MINIMUM_BALANCE = Decimal("100.00")

# Largest value the 12-digit, 2-place balance column can store
MAX_BALANCE = Decimal("9999999999.99")

_MINIMUM_BALANCES = {
    AccountType.CHECKING: Decimal("0.00"),
    AccountType.SAVINGS: SAVINGS_MINIMUM_BALANCE,
}


def minimum_balance(account_type):
    """Lowest balance an open account of this type may hold."""
    try:
        return _MINIMUM_BALANCES[account_type]
    except KeyError:
        raise TransactionInvalid(f"Unknown account type: {account_type}") from None


def _ensure_positive(amount, account_id=None):
    if amount is None or amount <= 0:
        raise TransactionInvalid(
            f"Amount must be positive, got {amount}", account_id=account_id
        )


def _ensure_open(account):
    if account.status == AccountStatus.CLOSED:
        raise TransactionInvalid(
            f"Account # {account.pk} is closed", account_id=account.pk
        )


def validate_opening(account_type, balance):
    floor = minimum_balance(account_type)

    if balance is None or balance < 0:
        raise TransactionInvalid(f"Initial balance must not be negative, got {balance}")

    if balance < floor:
        raise TransactionInvalid(
            f"{AccountType(account_type).label} account must have a minimum value "
            f"of {floor} at all times"
        )

    if balance > MAX_BALANCE:
        raise TransactionInvalid(f"Initial balance {balance} exceeds the maximum of {MAX_BALANCE}")


def validate_deposit(account, amount):
    _ensure_open(account)
    _ensure_positive(amount, account.pk)

    if account.balance + amount > MAX_BALANCE:
        raise TransactionInvalid(
            f"Depositing {amount} would take account # {account.pk} over the maximum balance of {MAX_BALANCE}",
            account_id=account.pk,
        )


def validate_withdraw(account, amount):
    _ensure_open(account)
    _ensure_positive(amount, account.pk)

    if amount > account.balance:
        raise TransactionInvalid(
            f"{amount} is over the current balance for account # {account.pk}",
            account_id=account.pk,
        )

    floor = minimum_balance(account.account_type)
    remaining = account.balance - amount
    # A savings account may only drop below its floor by emptying it for closing.
    if remaining < floor and remaining != 0:
        raise TransactionInvalid(
            f"Withdrawing {amount} would leave {remaining} in account # {account.pk}, "
            f"below the minimum of {floor}",
            account_id=account.pk,
        )


def validate_close(account):
    _ensure_open(account)

    if account.balance != 0:
        raise TransactionInvalid(
            f"Account # {account.pk} still has funds",
            account_id=account.pk,
        )
