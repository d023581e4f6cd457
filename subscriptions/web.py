"""
Web Layer — Customer Subscription Forms

Handles the form posts of the customer page. Every outcome ends in a redirect
back to /customer/<cid>/ carrying a flash message: success messages through
messages.success, failures through messages.error. Rendering that page is
outside this module.
"""

from django.contrib import messages
from django.shortcuts import redirect
from django.views import View

from subscriptions.application import subscription_service, user_service
from subscriptions.domain.exceptions import (
    AccountNotFound,
    CustomerNotFound,
    TransactionInvalid,
)
from subscriptions.forms import AccountTransactionForm, SubscriptionForm


def _customer_page(cid):
    return redirect(f"/customer/{cid}/")


class AddAccountView(View):
    """POST /customer/<cid>/account/"""

    def post(self, request, cid):
        form = SubscriptionForm(request.POST)
        if not form.is_valid():
            messages.error(request, "Account creation failed missing information")
            return _customer_page(cid)

        account_type = form.cleaned_data["account_type"]
        try:
            user_service.add_account(cid, account_type, form.cleaned_data["balance"])
        except CustomerNotFound as exc:
            messages.error(request, str(exc))
            return _customer_page(cid)
        except TransactionInvalid:
            messages.error(request, "Savings account must have a minimum value of 100 at all times")
            return _customer_page(cid)

        messages.success(request, f"Created {account_type} subscription.")
        return _customer_page(cid)


class DepositView(View):
    """POST /customer/<cid>/deposit/"""

    def post(self, request, cid):
        form = AccountTransactionForm(request.POST)
        if not form.is_valid():
            messages.error(request, "Deposit failed missing information")
            return _customer_page(cid)

        account_id = form.cleaned_data["id"]
        amount = form.cleaned_data["amount"]
        try:
            subscription_service.deposit(account_id, cid, amount)
        except AccountNotFound as exc:
            messages.error(request, str(exc))
            return _customer_page(cid)
        except TransactionInvalid as exc:
            messages.error(request, f"Deposit failed. {exc}")
            return _customer_page(cid)

        messages.success(request, f"Deposited {amount} into account # {account_id}")
        return _customer_page(cid)


class WithdrawView(View):
    """POST /customer/<cid>/withdraw/"""

    def post(self, request, cid):
        form = AccountTransactionForm(request.POST)
        if not form.is_valid():
            # Blank amount or account id
            messages.error(request, "Withdraw failed missing information")
            return _customer_page(cid)

        account_id = form.cleaned_data["id"]
        amount = form.cleaned_data["amount"]
        try:
            subscription_service.withdraw(account_id, cid, amount)
        except AccountNotFound as exc:
            messages.error(request, str(exc))
            return _customer_page(cid)
        except TransactionInvalid:
            messages.error(
                request,
                f"Withdraw failed. {amount} is over the current balance for account # {account_id}",
            )
            return _customer_page(cid)

        messages.success(request, f"Withdrew {amount} from account # {account_id}")
        return _customer_page(cid)


class CloseAccountView(View):
    """GET /customer/<cid>/account/<aid>/close/"""

    def get(self, request, cid, aid):
        try:
            user_service.close_account(cid, aid)
        except (CustomerNotFound, AccountNotFound) as exc:
            messages.error(request, str(exc))
            return _customer_page(cid)
        except TransactionInvalid as exc:
            messages.error(request, f"Unable to perform closing operation. {exc}")
            return _customer_page(cid)

        messages.success(request, f"Closed account {aid}")
        return _customer_page(cid)
