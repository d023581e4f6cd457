from django.urls import include, path

urlpatterns = [
    path("api/customer/", include("subscriptions.urls")),
    path("customer/", include("subscriptions.web_urls")),
]
