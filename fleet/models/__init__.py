from .core import DriverProfile, Truck
