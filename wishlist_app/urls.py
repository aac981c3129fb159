from django.urls import path
from .views import (
    WishProductListAPIView,
    WishAPIView,
)

app_name = 'wishlist'

urlpatterns = [
    path('users/<str:user_id>/products_wish/', WishProductListAPIView.as_view(), name='wish_products'),
    path('users/<str:user_id>/products/<str:product_id>/wish/', WishAPIView.as_view(), name='wish'),
]
