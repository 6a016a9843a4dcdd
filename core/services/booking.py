from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

import structlog
from django.conf import settings
from django.db import transaction

from ..models import Booking, Equipment, Notification, Room
from .notification import NotificationService

logger = structlog.get_logger(__name__)

CENT = Decimal("0.01")
SECONDS_PER_HOUR = Decimal(3600)


class BookingError(ValueError):
    """Raised when a booking cannot be created or changed."""


@dataclass(frozen=True)
class BookingQuote:
    hours: Decimal
    room_cost: Decimal
    equipment_cost: Decimal
    total_price: Decimal
    daily_rate_applied: bool


def calculate_hours(start: datetime, end: datetime) -> Decimal:
    """Return the elapsed time between ``start`` and ``end`` in hours."""

    return Decimal(int((end - start).total_seconds())) / SECONDS_PER_HOUR


def daily_rate_applies(hours: Decimal) -> bool:
    return hours >= settings.STUDIOHUB_DAILY_RATE_HOURS


def calculate_room_cost(room: Room, hours: Decimal) -> Decimal:
    """Hourly rate times hours, or the flat daily rate for long sessions."""

    if daily_rate_applies(hours):
        return Decimal(room.daily_price).quantize(CENT, rounding=ROUND_HALF_UP)
    return (hours * Decimal(room.hourly_price)).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_equipment_cost(equipment: Iterable[Equipment]) -> Decimal:
    total = sum((Decimal(item.rental_price) for item in equipment), Decimal("0"))
    return total.quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_total_price(room: Room, start: datetime, end: datetime, equipment: Iterable[Equipment] = ()) -> Decimal:
    hours = calculate_hours(start, end)
    return calculate_room_cost(room, hours) + calculate_equipment_cost(equipment)


class BookingRequestService:
    """Builds booking quotes and orchestrates booking submissions."""

    def __init__(self, user):
        self.user = user

    def build_quote(
        self,
        room: Room,
        start: datetime,
        end: datetime,
        equipment: Iterable[Equipment] = (),
    ) -> BookingQuote:
        if end <= start:
            raise BookingError("End time must be after the start time.")
        hours = calculate_hours(start, end)
        room_cost = calculate_room_cost(room, hours)
        equipment_cost = calculate_equipment_cost(equipment)
        return BookingQuote(
            hours=hours,
            room_cost=room_cost,
            equipment_cost=equipment_cost,
            total_price=room_cost + equipment_cost,
            daily_rate_applied=daily_rate_applies(hours),
        )

    def available_equipment(self, room: Room):
        return Equipment.objects.filter(studio_id=room.studio_id, status=Equipment.STATUS_AVAILABLE).order_by("name")

    def ensure_equipment_bookable(self, room: Room, equipment: Iterable[Equipment]) -> None:
        for item in equipment:
            if item.studio_id != room.studio_id:
                raise BookingError(f"{item.name} does not belong to this studio.")
            if not item.is_available:
                raise BookingError(f"{item.name} is not available right now.")

    def ensure_room_free(self, room: Room, start: datetime, end: datetime) -> None:
        overlapping = Booking.objects.filter(
            room=room,
            booking_status__in=Booking.BLOCKING_STATUSES,
            start_time__lt=end,
            end_time__gt=start,
        )
        if overlapping.exists():
            raise BookingError("This room is already booked for the selected time.")

    def ensure_equipment_free(self, equipment: Iterable[Equipment], start: datetime, end: datetime) -> None:
        for item in equipment:
            clash = item.bookings.filter(
                booking_status__in=Booking.BLOCKING_STATUSES,
                start_time__lt=end,
                end_time__gt=start,
            )
            if clash.exists():
                raise BookingError(f"{item.name} is already reserved for the selected time.")

    @transaction.atomic
    def create_booking(
        self,
        room: Room,
        start: datetime,
        end: datetime,
        equipment: Iterable[Equipment] = (),
    ) -> Booking:
        if end <= start:
            raise BookingError("End time must be after the start time.")

        locked_room = Room.objects.select_for_update().select_related("studio__owner").get(pk=room.pk)
        if not locked_room.studio.is_approved:
            raise BookingError("This studio is not accepting bookings.")

        selected = list(
            Equipment.objects.select_for_update()
            .filter(pk__in=[item.pk for item in equipment])
            .order_by("pk")
        )
        self.ensure_equipment_bookable(locked_room, selected)
        self.ensure_room_free(locked_room, start, end)
        self.ensure_equipment_free(selected, start, end)
        quote = self.build_quote(locked_room, start, end, selected)

        booking = Booking.objects.create(
            room=locked_room,
            photographer=self.user,
            start_time=start,
            end_time=end,
            total_price=quote.total_price,
            payment_status=Booking.PAYMENT_PENDING,
            booking_status=Booking.STATUS_PENDING,
        )
        booking.equipment.set(selected)

        NotificationService.notify(
            self.user,
            title="Booking submitted",
            message=f"Your booking for {locked_room.name} was submitted and is awaiting approval.",
            notification_type=Notification.TYPE_BOOKING,
        )
        NotificationService.notify(
            locked_room.studio.owner,
            title="New booking request",
            message=f"{self.user.display_name} requested {locked_room.name} at {locked_room.studio.name}.",
            notification_type=Notification.TYPE_BOOKING,
        )
        logger.info(
            "booking_created",
            booking_id=booking.id,
            room_id=locked_room.id,
            photographer_id=self.user.id,
            total_price=str(quote.total_price),
        )
        return booking


class PhotographerBookingsService:
    """Provides booking history grouped by status for photographers."""

    STATUS_BADGE_MAP = {
        Booking.STATUS_PENDING: "warning",
        Booking.STATUS_ACCEPTED: "success",
        Booking.STATUS_REJECTED: "danger",
        Booking.STATUS_COMPLETED: "primary",
        Booking.STATUS_CANCELLED: "secondary",
    }

    def __init__(self, user):
        self.user = user

    def bookings(self) -> list[Booking]:
        booking_qs = (
            Booking.objects
            .filter(photographer=self.user)
            .select_related("room__studio")
            .prefetch_related("equipment")
            .order_by("-created_at", "-id")
        )
        bookings: list[Booking] = []
        for booking in booking_qs:
            booking.studio = booking.room.studio
            booking.badge_class = self.STATUS_BADGE_MAP.get(booking.booking_status, "secondary")
            booking.status_label = booking.get_booking_status_display()
            bookings.append(booking)
        return bookings

    def grouped_bookings(self, bookings: Iterable[Booking]) -> dict[str, list[Booking]]:
        grouped: dict[str, list[Booking]] = {status: [] for status, _ in Booking.STATUS_CHOICES}
        for booking in bookings:
            grouped[booking.booking_status].append(booking)
        return grouped

    def status_counts(self, bookings: Iterable[Booking]) -> dict[str, int]:
        grouped = self.grouped_bookings(bookings)
        counts = {key: len(value) for key, value in grouped.items()}
        counts["all"] = sum(counts.values())
        return counts


class BookingMutationService:
    """Cancels photographer bookings."""

    def __init__(self, user):
        self.user = user

    def cancel_booking(self, booking: Booking) -> None:
        if booking.photographer_id != self.user.id:
            raise PermissionError("Cannot cancel bookings made by another user.")
        try:
            booking.mark_cancelled()
        except ValueError as exc:
            raise BookingError(str(exc)) from exc
        NotificationService.notify(
            booking.room.studio.owner,
            title="Booking cancelled",
            message=f"{self.user.display_name} cancelled the booking for {booking.room.name}.",
            notification_type=Notification.TYPE_BOOKING,
        )
        logger.info("booking_cancelled", booking_id=booking.id, photographer_id=self.user.id)
