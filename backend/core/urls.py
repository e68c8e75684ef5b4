from django.urls import path

from .views import healthz, WhoAmIView, DeepHealthView

urlpatterns = [
    path('healthz/', healthz),
    path('whoami/', WhoAmIView.as_view()),
    path('deep-health/', DeepHealthView.as_view()),
]
