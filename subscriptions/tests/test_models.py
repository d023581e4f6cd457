from decimal import Decimal

from django.test import SimpleTestCase

from subscriptions.domain import rules
from subscriptions.domain.exceptions import TransactionInvalid
from subscriptions.domain.types import AccountStatus, AccountType
from subscriptions.models import Subscription


def _account(account_type=AccountType.CHECKING, balance="0.00", status=AccountStatus.OPEN):
    return Subscription(account_type=account_type, balance=Decimal(balance), status=status)


class SubscriptionEntityTest(SimpleTestCase):
    """In-memory behaviour of the Subscription entity; nothing is saved."""

    def test_deposit_increases_balance_by_amount(self):
        account = _account(balance="10.00")
        account.deposit(Decimal("32.50"))
        self.assertEqual(account.balance, Decimal("42.50"))

    def test_deposit_rejects_non_positive_amounts(self):
        account = _account(balance="10.00")
        for amount in (Decimal("0"), Decimal("-5")):
            with self.assertRaises(TransactionInvalid):
                account.deposit(amount)
        self.assertEqual(account.balance, Decimal("10.00"))

    def test_withdraw_decreases_balance(self):
        account = _account(balance="80.00")
        account.withdraw(Decimal("30.00"))
        self.assertEqual(account.balance, Decimal("50.00"))

    def test_withdraw_over_balance_fails(self):
        account = _account(balance="20.00")
        with self.assertRaises(TransactionInvalid):
            account.withdraw(Decimal("20.01"))
        self.assertEqual(account.balance, Decimal("20.00"))

    def test_savings_withdraw_keeping_minimum_succeeds(self):
        account = _account(AccountType.SAVINGS, balance="250.00")
        account.withdraw(Decimal("150.00"))
        self.assertEqual(account.balance, Decimal("100.00"))

    def test_savings_withdraw_below_minimum_fails(self):
        account = _account(AccountType.SAVINGS, balance="150.00")
        with self.assertRaises(TransactionInvalid):
            account.withdraw(Decimal("50.01"))
        self.assertEqual(account.balance, Decimal("150.00"))

    def test_savings_can_be_emptied(self):
        account = _account(AccountType.SAVINGS, balance="100.00")
        account.withdraw(Decimal("100.00"))
        self.assertEqual(account.balance, Decimal("0.00"))

    def test_close_requires_zero_balance(self):
        account = _account(balance="20.00")
        with self.assertRaises(TransactionInvalid):
            account.close()
        self.assertEqual(account.status, AccountStatus.OPEN)

        account.withdraw(Decimal("20.00"))
        account.close()
        self.assertEqual(account.status, AccountStatus.CLOSED)
        self.assertFalse(account.is_open)

    def test_closed_account_rejects_everything(self):
        account = _account(status=AccountStatus.CLOSED)
        with self.assertRaises(TransactionInvalid):
            account.deposit(Decimal("1.00"))
        with self.assertRaises(TransactionInvalid):
            account.withdraw(Decimal("1.00"))
        with self.assertRaises(TransactionInvalid):
            account.close()
        self.assertEqual(account.balance, Decimal("0.00"))


class BalanceRulesTest(SimpleTestCase):

    def test_minimum_balance_per_type(self):
        self.assertEqual(rules.minimum_balance(AccountType.CHECKING), Decimal("0"))
        self.assertEqual(rules.minimum_balance(AccountType.SAVINGS), Decimal("100"))
        self.assertEqual(rules.minimum_balance("SAVINGS"), rules.SAVINGS_MINIMUM_BALANCE)

    def test_unknown_type_is_invalid(self):
        with self.assertRaises(TransactionInvalid):
            rules.minimum_balance("BROKERAGE")

    def test_opening_balances(self):
        rules.validate_opening(AccountType.CHECKING, Decimal("0"))
        rules.validate_opening(AccountType.SAVINGS, Decimal("100"))

        with self.assertRaises(TransactionInvalid):
            rules.validate_opening(AccountType.SAVINGS, Decimal("99.99"))
        with self.assertRaises(TransactionInvalid):
            rules.validate_opening(AccountType.CHECKING, Decimal("-1"))

    def test_invalid_transaction_carries_account_id(self):
        account = _account(balance="5.00")
        account.pk = 7
        with self.assertRaises(TransactionInvalid) as ctx:
            rules.validate_withdraw(account, Decimal("6.00"))
        self.assertEqual(ctx.exception.account_id, 7)
        self.assertIn("account # 7", str(ctx.exception))
