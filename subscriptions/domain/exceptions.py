class SubscriptionError(Exception):
    """Base class for the expected, caller-recoverable subscription failures."""


class CustomerNotFound(SubscriptionError):
    """Raised when the referenced customer does not exist."""

    def __init__(self, customer_id):
        self.customer_id = customer_id
        super().__init__(f"Customer {customer_id} not found")


class AccountNotFound(SubscriptionError):
    """
    Raised when the referenced account does not exist, or exists but belongs
    to another customer. Both cases share this error so callers cannot probe
    for other customers' accounts.
    """

    def __init__(self, account_id):
        self.account_id = account_id
        super().__init__(f"Account # {account_id} not found")


class TransactionInvalid(SubscriptionError):
    """Raised when an operation breaks an account balance or lifecycle rule."""

    def __init__(self, message, account_id=None):
        self.account_id = account_id
        super().__init__(message)
