from django.urls import path, include
from rest_framework.routers import SimpleRouter

from yard.views import LoadingBayViewSet, YardMovementView, YardQueueView

router = SimpleRouter()
router.register(r'bays', LoadingBayViewSet, basename='loading-bay')

urlpatterns = [
    path('', include(router.urls)),
    path('movements/', YardMovementView.as_view(), name='yard_movements'),
    path('queue/', YardQueueView.as_view(), name='yard_queue'),
]
