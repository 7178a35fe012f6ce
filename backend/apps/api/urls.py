from django.urls import path, include

urlpatterns = [
    path("cart/", include("apps.carts.urls")),
    path("checkout/", include("apps.checkout.urls")),
]
