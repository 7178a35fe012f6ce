from django.urls import path
from .views import CheckoutSummaryView, CheckoutView

urlpatterns = [
    path("", CheckoutView.as_view(), name="api-checkout"),
    path("summary/", CheckoutSummaryView.as_view(), name="api-checkout-summary"),
]
