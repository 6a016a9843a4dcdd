from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

import structlog
from django.contrib.auth import get_user_model
from django.db.models import Sum

from ..models import Booking, Equipment, Notification, Studio
from .notification import NotificationService
from .owner import BookingActionOutcome

logger = structlog.get_logger(__name__)

User = get_user_model()


@dataclass(frozen=True)
class AdminDashboardStats:
    total_studios: int
    pending_studios: int
    approved_studios: int
    total_users: int
    total_bookings: int
    total_equipment: int
    total_revenue: Decimal


class AdminDashboardService:
    """Platform-wide counters for administrators."""

    def stats(self) -> AdminDashboardStats:
        revenue = (
            Booking.objects.filter(payment_status=Booking.PAYMENT_PAID)
            .aggregate(total=Sum("total_price"))["total"]
        )
        return AdminDashboardStats(
            total_studios=Studio.objects.count(),
            pending_studios=Studio.objects.filter(verification_status=Studio.STATUS_PENDING).count(),
            approved_studios=Studio.objects.filter(verification_status=Studio.STATUS_APPROVED).count(),
            total_users=User.objects.count(),
            total_bookings=Booking.objects.count(),
            total_equipment=Equipment.objects.count(),
            total_revenue=revenue or Decimal("0"),
        )


class StudioApprovalService:
    """Approve or reject studios awaiting verification."""

    def __init__(self, admin_user):
        self.admin_user = admin_user

    def pending_studios(self):
        return (
            Studio.objects.filter(verification_status=Studio.STATUS_PENDING)
            .select_related("owner")
            .order_by("-created_at", "-id")
        )

    def decide(self, studio: Studio, status: str) -> BookingActionOutcome:
        if status not in {Studio.STATUS_APPROVED, Studio.STATUS_REJECTED}:
            raise ValueError(f"Unsupported verification status: {status}")
        if studio.verification_status != Studio.STATUS_PENDING:
            return BookingActionOutcome("info", f"{studio.name} has already been reviewed.")

        studio.verification_status = status
        studio.save(update_fields=["verification_status"])

        if status == Studio.STATUS_APPROVED:
            title = "Studio approved"
            message = f"Your studio {studio.name} was approved and is now visible to photographers."
        else:
            title = "Studio rejected"
            message = f"Unfortunately your studio {studio.name} was not approved."
        NotificationService.notify(
            studio.owner,
            title=title,
            message=message,
            notification_type=Notification.TYPE_APPROVAL,
        )
        logger.info("studio_verified", studio_id=studio.id, status=status, admin_id=self.admin_user.id)
        return BookingActionOutcome("success", f"{studio.name} {studio.get_verification_status_display().lower()}.")

    def approve(self, studio: Studio) -> BookingActionOutcome:
        return self.decide(studio, Studio.STATUS_APPROVED)

    def reject(self, studio: Studio) -> BookingActionOutcome:
        return self.decide(studio, Studio.STATUS_REJECTED)
