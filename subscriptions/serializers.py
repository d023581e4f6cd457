"""
Wire representation of subscriptions for the REST adapter.

Input is validated with DRF serializers before any service call; output goes
through plain mapping functions rather than model serializers, so the JSON
shape stays independent of the ORM model.
"""

from decimal import Decimal

from rest_framework import serializers

from subscriptions.domain.types import AccountType


class SubscriptionCreateSerializer(serializers.Serializer):
    accountType = serializers.ChoiceField(choices=AccountType.choices)
    balance = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=0,
        default=Decimal("0.00"),
    )

    def validate(self, attrs):
        # Ids are assigned by the server; a client-supplied one is a bad request
        if "id" in self.initial_data:
            raise serializers.ValidationError({"id": "Must not be supplied when creating an account."})
        return attrs


class AccountTransactionSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))


def subscription_to_dict(subscription):
    return {
        "id": subscription.id,
        "accountType": subscription.account_type,
        "balance": f"{subscription.balance:.2f}",
        "status": subscription.status,
        "ownerId": subscription.customer_id,
    }


def transaction_to_dict(entry):
    return {
        "id": entry.id,
        "kind": entry.kind,
        "amount": f"{entry.amount:.2f}",
        "balanceAfter": f"{entry.balance_after:.2f}",
        "createdAt": entry.created_at.isoformat(),
    }
