"""Core application data models exposed as a flat module-level API."""

from .booking import Booking
from .equipment import Equipment, EquipmentLog, generate_barcode_code
from .notification import Notification
from .studio import Room, Studio, StudioPhoto
from .user import User

__all__ = [
    "User",
    "Studio",
    "StudioPhoto",
    "Room",
    "Equipment",
    "EquipmentLog",
    "generate_barcode_code",
    "Booking",
    "Notification",
]
