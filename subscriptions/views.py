"""
API Layer — Customer Subscriptions (Django REST Framework)

Thin controllers over the application services. Each view is limited to:

- Validating the request body with a serializer
- Delegating to the user / subscription service
- Translating domain exceptions into HTTP responses

Status mapping:

- CustomerNotFound, AccountNotFound -> 404
- TransactionInvalid or an invalid body -> 400
- Account created -> 201 with a Location header pointing at the new account
- Everything else that succeeds -> 200

No business rules are evaluated here.
"""

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from subscriptions.application import subscription_service, user_service
from subscriptions.domain.exceptions import (
    AccountNotFound,
    CustomerNotFound,
    TransactionInvalid,
)
from subscriptions.serializers import (
    AccountTransactionSerializer,
    SubscriptionCreateSerializer,
    subscription_to_dict,
    transaction_to_dict,
)


def _not_found(exc):
    return Response({"error": str(exc)}, status=status.HTTP_404_NOT_FOUND)


def _bad_request(exc):
    return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


class CustomerAccountListView(APIView):
    """
    GET  /api/customer/<cid>/account/
    POST /api/customer/<cid>/account/
    """

    def get(self, request, cid):
        try:
            accounts = user_service.accounts(cid)
        except CustomerNotFound as exc:
            return _not_found(exc)

        return Response([subscription_to_dict(account) for account in accounts])

    def post(self, request, cid):
        serializer = SubscriptionCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            subscription = user_service.add_account(
                cid,
                serializer.validated_data["accountType"],
                serializer.validated_data["balance"],
            )
        except CustomerNotFound as exc:
            return _not_found(exc)
        except TransactionInvalid as exc:
            return _bad_request(exc)

        location = f"/api/customer/{cid}/account/{subscription.id}/"
        return Response(
            subscription_to_dict(subscription),
            status=status.HTTP_201_CREATED,
            headers={"Location": request.build_absolute_uri(location)},
        )


class CustomerAccountDetailView(APIView):
    """GET /api/customer/<cid>/account/<aid>/"""

    def get(self, request, cid, aid):
        try:
            subscription = subscription_service.get_for_customer(aid, cid)
        except AccountNotFound as exc:
            return _not_found(exc)

        return Response(subscription_to_dict(subscription))


class AccountTransactionView(APIView):
    """
    POST /api/customer/<cid>/account/<aid>/deposit/
    POST /api/customer/<cid>/account/<aid>/withdraw/

    The operation is selected by the URL; the body only carries a positive amount.
    """

    operation = None

    def post(self, request, cid, aid):
        serializer = AccountTransactionSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        handler = getattr(subscription_service, self.operation)
        try:
            subscription = handler(aid, cid, serializer.validated_data["amount"])
        except AccountNotFound as exc:
            return _not_found(exc)
        except TransactionInvalid as exc:
            return _bad_request(exc)

        return Response(subscription_to_dict(subscription))


class CloseAccountView(APIView):
    """POST /api/customer/<cid>/account/<aid>/close/"""

    def post(self, request, cid, aid):
        try:
            subscription = user_service.close_account(cid, aid)
        except (CustomerNotFound, AccountNotFound) as exc:
            return _not_found(exc)
        except TransactionInvalid as exc:
            return _bad_request(exc)

        return Response(subscription_to_dict(subscription))


class AccountHistoryView(APIView):
    """GET /api/customer/<cid>/account/<aid>/transactions/"""

    def get(self, request, cid, aid):
        try:
            entries = subscription_service.history(aid, cid)
        except AccountNotFound as exc:
            return _not_found(exc)

        return Response([transaction_to_dict(entry) for entry in entries])
