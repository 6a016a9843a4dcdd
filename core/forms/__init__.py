from .auth import RegisterForm
from .owner import BarcodeScanForm, EquipmentForm, RoomForm, StudioForm
from .photographer import BookingForm
from .profile import ProfileForm

__all__ = [
    "RegisterForm",
    "StudioForm",
    "RoomForm",
    "EquipmentForm",
    "BarcodeScanForm",
    "BookingForm",
    "ProfileForm",
]
