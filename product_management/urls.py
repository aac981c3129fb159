from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import ProductViewSet, UserProductListAPIView, ParentCategoryListAPIView

router = DefaultRouter()
router.register(r'products', ProductViewSet, basename='products')

urlpatterns = [
    path('', include(router.urls)),
    path('users/<str:user_id>/products/', UserProductListAPIView.as_view(), name='user-products'),
    path('categories/', ParentCategoryListAPIView.as_view(), name='parent-categories'),
]
