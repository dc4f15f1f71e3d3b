from django.urls import path, include
from rest_framework.routers import SimpleRouter

from truck_requests.views import TruckRequestViewSet

router = SimpleRouter()
router.register(r'', TruckRequestViewSet, basename='truck-request')

urlpatterns = [
    path('', include(router.urls)),
]
