from decimal import Decimal

from django.db import models

from .equipment import Equipment
from .studio import Room
from .user import User


class Booking(models.Model):
    PAYMENT_PAID = "paid"
    PAYMENT_PENDING = "pending"
    PAYMENT_FAILED = "failed"
    PAYMENT_STATUS_CHOICES = (
        (PAYMENT_PAID, "Paid"),
        (PAYMENT_PENDING, "Awaiting Payment"),
        (PAYMENT_FAILED, "Payment Failed"),
    )

    STATUS_PENDING = "pending"
    STATUS_ACCEPTED = "accepted"
    STATUS_REJECTED = "rejected"
    STATUS_COMPLETED = "completed"
    STATUS_CANCELLED = "cancelled"
    STATUS_CHOICES = (
        (STATUS_PENDING, "Pending Owner Approval"),
        (STATUS_ACCEPTED, "Accepted"),
        (STATUS_REJECTED, "Rejected"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
    )
    # Bookings in these states hold their room's time slot.
    BLOCKING_STATUSES = (STATUS_PENDING, STATUS_ACCEPTED)

    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name="bookings")
    photographer = models.ForeignKey(User, on_delete=models.CASCADE, related_name="bookings")
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    equipment = models.ManyToManyField(Equipment, blank=True, related_name="bookings")
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    payment_status = models.CharField(max_length=10, choices=PAYMENT_STATUS_CHOICES, default=PAYMENT_PENDING)
    booking_status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:  # pragma: no cover - simple display helper
        return f"Booking for {self.room} by {self.photographer}"

    @property
    def duration_hours(self) -> Decimal:
        seconds = Decimal(int((self.end_time - self.start_time).total_seconds()))
        return seconds / Decimal(3600)

    @property
    def is_cancellable(self) -> bool:
        return self.booking_status in self.BLOCKING_STATUSES

    def _set_status(self, status: str) -> None:
        self.booking_status = status
        self.save(update_fields=["booking_status"])

    def mark_accepted(self) -> None:
        if self.booking_status != self.STATUS_PENDING:
            raise ValueError("Only pending bookings can be accepted.")
        self._set_status(self.STATUS_ACCEPTED)

    def mark_rejected(self) -> None:
        if self.booking_status != self.STATUS_PENDING:
            raise ValueError("Only pending bookings can be rejected.")
        self._set_status(self.STATUS_REJECTED)

    def mark_completed(self) -> None:
        if self.booking_status != self.STATUS_ACCEPTED:
            raise ValueError("Only accepted bookings can be completed.")
        self._set_status(self.STATUS_COMPLETED)

    def mark_cancelled(self) -> None:
        if not self.is_cancellable:
            raise ValueError("This booking can no longer be cancelled.")
        self._set_status(self.STATUS_CANCELLED)

    def mark_paid(self) -> None:
        self.payment_status = self.PAYMENT_PAID
        self.save(update_fields=["payment_status"])
