from django.urls import path
from .views import LoginUser, LogoutUser

urlpatterns = [
    path('auth/login/', LoginUser.as_view(), name='login'),
    path('auth/logout/', LogoutUser.as_view(), name='logout'),
]
