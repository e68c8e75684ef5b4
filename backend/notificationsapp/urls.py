from rest_framework.routers import DefaultRouter
from django.urls import path, include
from .views import NotificationViewSet, PolicyView

router = DefaultRouter()
router.register(r'notifications', NotificationViewSet, basename='notification')

urlpatterns = [
    path('policies/', PolicyView.as_view(), name='policy'),
    path('', include(router.urls)),
]
