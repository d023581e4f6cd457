from django.urls import path

from .views import (
    AccountHistoryView,
    AccountTransactionView,
    CloseAccountView,
    CustomerAccountDetailView,
    CustomerAccountListView,
)

urlpatterns = [
    path("<int:cid>/account/", CustomerAccountListView.as_view(), name="customer-accounts"),
    path("<int:cid>/account/<int:aid>/", CustomerAccountDetailView.as_view(), name="customer-account"),
    path(
        "<int:cid>/account/<int:aid>/deposit/",
        AccountTransactionView.as_view(operation="deposit"),
        name="account-deposit",
    ),
    path(
        "<int:cid>/account/<int:aid>/withdraw/",
        AccountTransactionView.as_view(operation="withdraw"),
        name="account-withdraw",
    ),
    path("<int:cid>/account/<int:aid>/close/", CloseAccountView.as_view(), name="account-close"),
    path(
        "<int:cid>/account/<int:aid>/transactions/",
        AccountHistoryView.as_view(),
        name="account-transactions",
    ),
]
