from .driver import DriverViewSet
from .truck import TruckViewSet
