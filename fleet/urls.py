from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import DriverViewSet, TruckViewSet

router = SimpleRouter()
router.register(r'trucks', TruckViewSet, basename='truck')
router.register(r'drivers', DriverViewSet, basename='driver')

urlpatterns = [
    path('', include(router.urls)),
]
