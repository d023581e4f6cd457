from decimal import Decimal

from django import forms

from subscriptions.domain.types import AccountType


class SubscriptionForm(forms.Form):
    account_type = forms.ChoiceField(choices=AccountType.choices)
    balance = forms.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal("0.00"),
        required=False,
    )

    def clean_balance(self):
        balance = self.cleaned_data.get("balance")
        return Decimal("0.00") if balance is None else balance


class AccountTransactionForm(forms.Form):
    id = forms.IntegerField(min_value=1)
    amount = forms.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
