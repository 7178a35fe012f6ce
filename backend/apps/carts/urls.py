from django.urls import path
from .views import (
    CartItemDetailView,
    CartItemListView,
    CartSessionView,
    CartVendorListView,
    CartView,
)

urlpatterns = [
    path("", CartView.as_view(), name="api-cart"),
    path("items/", CartItemListView.as_view(), name="api-cart-items"),
    path("items/<str:item_id>/", CartItemDetailView.as_view(), name="api-cart-item-detail"),
    path("vendors/", CartVendorListView.as_view(), name="api-cart-vendors"),
    path("session/", CartSessionView.as_view(), name="api-cart-session"),
]
