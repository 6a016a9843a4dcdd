from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import structlog
from django.conf import settings
from django.db.models import Count, Sum

from ..forms import EquipmentForm, RoomForm, StudioForm
from ..models import Booking, Equipment, Notification, Room, Studio
from .notification import NotificationService

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OwnerDashboardStats:
    studios: int
    rooms: int
    equipment: int
    bookings: int
    revenue: Decimal


@dataclass(frozen=True)
class BookingActionOutcome:
    level: str
    message: str


class OwnerInventoryService:
    """Manage studio, room and equipment creation for a studio owner."""

    def __init__(self, owner):
        self.owner = owner

    def studios(self):
        return Studio.objects.filter(owner=self.owner).order_by("-created_at", "-id")

    def approved_studios(self):
        return self.studios().filter(verification_status=Studio.STATUS_APPROVED)

    def rooms(self):
        return (
            Room.objects.filter(studio__in=self.approved_studios())
            .select_related("studio")
            .order_by("name", "id")
        )

    def equipment(self):
        return (
            Equipment.objects.filter(studio__in=self.approved_studios())
            .select_related("studio")
            .order_by("name", "id")
        )

    def studio_form(self, data: Any | None = None, files: Any | None = None) -> StudioForm:
        return StudioForm(data, files, owner=self.owner)

    def room_form(self, data: Any | None = None, files: Any | None = None) -> RoomForm:
        return RoomForm(data, files, owner=self.owner)

    def equipment_form(self, data: Any | None = None) -> EquipmentForm:
        return EquipmentForm(data, owner=self.owner)

    def create_studio(self, data: Any, files: Any | None = None) -> tuple[bool, StudioForm, Studio | None]:
        form = self.studio_form(data, files)
        if form.is_valid():
            studio = form.save()
            logger.info("studio_submitted", studio_id=studio.id, owner_id=self.owner.id)
            return True, form, studio
        return False, form, None

    def create_room(self, data: Any, files: Any | None = None) -> tuple[bool, RoomForm, Room | None]:
        form = self.room_form(data, files)
        if form.is_valid():
            room = form.save()
            logger.info("room_created", room_id=room.id, studio_id=room.studio_id)
            return True, form, room
        return False, form, None

    def create_equipment(self, data: Any) -> tuple[bool, EquipmentForm, Equipment | None]:
        form = self.equipment_form(data)
        if form.is_valid():
            item = form.save()
            logger.info("equipment_created", equipment_id=item.id, barcode=item.barcode_code)
            return True, form, item
        return False, form, None

    def set_equipment_status(self, item: Equipment, status: str) -> BookingActionOutcome:
        if item.studio.owner_id != self.owner.id:
            raise PermissionError("Cannot modify equipment for another owner.")
        if status not in {Equipment.STATUS_AVAILABLE, Equipment.STATUS_DAMAGED}:
            raise ValueError(f"Unsupported equipment status: {status}")
        if item.status == Equipment.STATUS_RENTED:
            return BookingActionOutcome("error", "Rented equipment must be scanned back in first.")
        if item.status == status:
            return BookingActionOutcome("info", f"{item.name} is already {item.get_status_display().lower()}.")
        item.status = status
        item.save(update_fields=["status"])
        logger.info("equipment_status_changed", equipment_id=item.id, status=status)
        return BookingActionOutcome("success", f"{item.name} marked as {item.get_status_display().lower()}.")


class OwnerDashboardService:
    """Aggregate data required for the studio owner dashboard."""

    STATUS_BADGE_MAP = {
        Booking.STATUS_PENDING: "bg-warning-subtle text-warning",
        Booking.STATUS_ACCEPTED: "bg-success-subtle text-success",
        Booking.STATUS_REJECTED: "bg-danger-subtle text-danger",
        Booking.STATUS_COMPLETED: "bg-primary-subtle text-primary",
        Booking.STATUS_CANCELLED: "bg-secondary-subtle text-secondary",
    }

    def __init__(self, owner):
        self.owner = owner

    def studios(self):
        return (
            Studio.objects.filter(owner=self.owner)
            .annotate(
                room_count=Count("rooms", distinct=True),
                equipment_count=Count("equipment", distinct=True),
            )
            .order_by("-created_at", "-id")
        )

    def booking_queryset(self):
        return Booking.objects.filter(room__studio__owner=self.owner)

    def bookings(self, limit: int | None = None) -> list[Booking]:
        booking_qs = (
            self.booking_queryset()
            .select_related("room__studio", "photographer")
            .order_by("-created_at", "-id")
        )
        if limit is not None:
            booking_qs = booking_qs[:limit]
        bookings: list[Booking] = []
        for booking in booking_qs:
            booking.status_label = booking.get_booking_status_display()
            booking.status_badge_class = self.STATUS_BADGE_MAP.get(booking.booking_status, "bg-light text-muted")
            booking.can_accept = booking.booking_status == Booking.STATUS_PENDING
            booking.can_reject = booking.booking_status == Booking.STATUS_PENDING
            booking.can_complete = booking.booking_status == Booking.STATUS_ACCEPTED
            booking.can_mark_paid = (
                booking.payment_status != Booking.PAYMENT_PAID
                and booking.booking_status in {Booking.STATUS_ACCEPTED, Booking.STATUS_COMPLETED}
            )
            bookings.append(booking)
        return bookings

    def recent_bookings(self) -> list[Booking]:
        return self.bookings(limit=settings.STUDIOHUB_RECENT_BOOKINGS)

    def revenue(self) -> Decimal:
        total = (
            self.booking_queryset()
            .filter(payment_status=Booking.PAYMENT_PAID)
            .aggregate(total=Sum("total_price"))["total"]
        )
        return total or Decimal("0")

    def stats(self) -> OwnerDashboardStats:
        return OwnerDashboardStats(
            studios=Studio.objects.filter(owner=self.owner).count(),
            rooms=Room.objects.filter(studio__owner=self.owner).count(),
            equipment=Equipment.objects.filter(studio__owner=self.owner).count(),
            bookings=self.booking_queryset().count(),
            revenue=self.revenue(),
        )


class OwnerBookingActionService:
    """Accept, reject or complete bookings while enforcing ownership rules."""

    def __init__(self, owner):
        self.owner = owner

    def _owns_booking(self, booking: Booking) -> bool:
        return booking.room.studio.owner_id == self.owner.id

    def _check_owner(self, booking: Booking) -> None:
        if not self._owns_booking(booking):
            raise PermissionError("Cannot modify bookings for another owner.")

    def _notify_photographer(self, booking: Booking, title: str, message: str) -> None:
        NotificationService.notify(
            booking.photographer,
            title=title,
            message=message,
            notification_type=Notification.TYPE_BOOKING,
        )

    def accept(self, booking: Booking) -> BookingActionOutcome:
        self._check_owner(booking)
        if booking.booking_status != Booking.STATUS_PENDING:
            return BookingActionOutcome("info", "This booking is no longer awaiting approval.")
        booking.mark_accepted()
        self._notify_photographer(
            booking,
            "Booking accepted",
            f"Your booking for {booking.room.name} at {booking.room.studio.name} was accepted.",
        )
        logger.info("booking_accepted", booking_id=booking.id, owner_id=self.owner.id)
        return BookingActionOutcome("success", "Booking accepted.")

    def reject(self, booking: Booking) -> BookingActionOutcome:
        self._check_owner(booking)
        if booking.booking_status != Booking.STATUS_PENDING:
            return BookingActionOutcome("info", "This booking is no longer awaiting approval.")
        booking.mark_rejected()
        self._notify_photographer(
            booking,
            "Booking rejected",
            f"Unfortunately your booking for {booking.room.name} at {booking.room.studio.name} was rejected.",
        )
        logger.info("booking_rejected", booking_id=booking.id, owner_id=self.owner.id)
        return BookingActionOutcome("success", "Booking rejected.")

    def complete(self, booking: Booking) -> BookingActionOutcome:
        self._check_owner(booking)
        if booking.booking_status != Booking.STATUS_ACCEPTED:
            return BookingActionOutcome("info", "Only accepted bookings can be completed.")
        booking.mark_completed()
        self._notify_photographer(
            booking,
            "Booking completed",
            f"Your session in {booking.room.name} is marked as completed.",
        )
        logger.info("booking_completed", booking_id=booking.id, owner_id=self.owner.id)
        return BookingActionOutcome("success", "Booking marked as completed.")

    def mark_paid(self, booking: Booking) -> BookingActionOutcome:
        self._check_owner(booking)
        if booking.payment_status == Booking.PAYMENT_PAID:
            return BookingActionOutcome("info", "This booking is already paid.")
        if booking.booking_status not in {Booking.STATUS_ACCEPTED, Booking.STATUS_COMPLETED}:
            return BookingActionOutcome("info", "Only accepted or completed bookings can be marked as paid.")
        booking.mark_paid()
        self._notify_photographer(
            booking,
            "Payment received",
            f"Payment of {booking.total_price} for {booking.room.name} was recorded.",
        )
        logger.info("booking_paid", booking_id=booking.id, total_price=str(booking.total_price))
        return BookingActionOutcome("success", "Payment recorded.")

    def apply(self, booking: Booking, action: str) -> BookingActionOutcome:
        handlers = {
            "accept": self.accept,
            "reject": self.reject,
            "complete": self.complete,
            "mark_paid": self.mark_paid,
        }
        handler = handlers.get(action)
        if handler is None:
            raise ValueError(f"Unknown booking action: {action}")
        return handler(booking)
