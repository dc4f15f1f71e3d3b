from .driver import DriverCreateSerializer, DriverProfileSerializer
from .truck import StatusChangeSerializer, TruckCreateSerializer, TruckSerializer
