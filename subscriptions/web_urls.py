from django.urls import path

from .web import AddAccountView, CloseAccountView, DepositView, WithdrawView

urlpatterns = [
    path("<int:cid>/account/", AddAccountView.as_view(), name="web-add-account"),
    path("<int:cid>/deposit/", DepositView.as_view(), name="web-deposit"),
    path("<int:cid>/withdraw/", WithdrawView.as_view(), name="web-withdraw"),
    path("<int:cid>/account/<int:aid>/close/", CloseAccountView.as_view(), name="web-close-account"),
]
