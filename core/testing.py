"""Object builders shared by the test modules."""

from datetime import datetime, time, timedelta
from decimal import Decimal
from itertools import count

from django.utils import timezone

from .models import Booking, Equipment, Room, Studio, User

_barcodes = count(1)


class MarketplaceFixtures:
    password = "s3cret-pass"

    def create_user(self, username, role=User.ROLE_PHOTOGRAPHER, **extra):
        extra.setdefault("name", username.title())
        extra.setdefault("email", f"{username}@example.com")
        return User.objects.create_user(
            username=username,
            password=self.password,
            role=role,
            **extra,
        )

    def create_owner(self, username="owner"):
        return self.create_user(username, role=User.ROLE_STUDIO_OWNER)

    def create_studio(self, owner, name="Northlight", status=Studio.STATUS_APPROVED, **extra):
        extra.setdefault("province", "Tehran")
        extra.setdefault("city", "Tehran")
        extra.setdefault("address", "12 Valiasr St")
        return Studio.objects.create(owner=owner, name=name, verification_status=status, **extra)

    def create_room(self, studio, name="Cyclorama", hourly_price="100.00", daily_price="600.00", **extra):
        return Room.objects.create(
            studio=studio,
            name=name,
            hourly_price=Decimal(hourly_price),
            daily_price=Decimal(daily_price),
            **extra,
        )

    def create_equipment(self, studio, name="Canon EOS R5", rental_price="50.00", status=Equipment.STATUS_AVAILABLE, **extra):
        extra.setdefault("barcode_code", f"EQTEST{next(_barcodes)}")
        extra.setdefault("equipment_type", "Camera")
        return Equipment.objects.create(
            studio=studio,
            name=name,
            rental_price=Decimal(rental_price),
            status=status,
            **extra,
        )

    def local_datetime(self, days_ahead=1, hour=10, minute=0):
        day = timezone.localdate() + timedelta(days=days_ahead)
        return timezone.make_aware(datetime.combine(day, time(hour, minute)), timezone.get_current_timezone())

    def create_booking(self, room, photographer, start=None, end=None, **extra):
        start = start or self.local_datetime(hour=10)
        end = end or start + timedelta(hours=2)
        extra.setdefault("total_price", Decimal("200.00"))
        return Booking.objects.create(room=room, photographer=photographer, start_time=start, end_time=end, **extra)
