from __future__ import annotations

from dataclasses import dataclass

import structlog
from django.conf import settings
from django.db import transaction

from ..models import Equipment, EquipmentLog

logger = structlog.get_logger(__name__)


class ScanError(Exception):
    """A barcode scan that cannot be applied; ``str(exc)`` is user facing."""


@dataclass(frozen=True)
class ScanOutcome:
    equipment: Equipment
    log: EquipmentLog
    message: str


class EquipmentScanService:
    """Check equipment out of and back into a studio by barcode."""

    # action -> (required current status, resulting status, success message)
    TRANSITIONS = {
        EquipmentLog.ACTION_SCAN_OUT: (
            Equipment.STATUS_AVAILABLE,
            Equipment.STATUS_RENTED,
            "Equipment checked out successfully.",
        ),
        EquipmentLog.ACTION_SCAN_IN: (
            Equipment.STATUS_RENTED,
            Equipment.STATUS_AVAILABLE,
            "Equipment returned successfully.",
        ),
    }
    STATUS_ERRORS = {
        EquipmentLog.ACTION_SCAN_OUT: "This equipment is not available right now.",
        EquipmentLog.ACTION_SCAN_IN: "This equipment is not currently rented.",
    }

    def __init__(self, owner):
        self.owner = owner

    def lookup(self, barcode: str) -> Equipment:
        code = (barcode or "").strip()
        if not code:
            raise ScanError("Please enter a barcode.")
        equipment = Equipment.objects.select_related("studio").filter(barcode_code=code).first()
        if equipment is None:
            raise ScanError("No equipment found with this barcode.")
        if equipment.studio.owner_id != self.owner.id:
            raise ScanError("You are not allowed to scan this equipment.")
        return equipment

    def scan(self, barcode: str, action: str) -> ScanOutcome:
        if action not in self.TRANSITIONS:
            raise ScanError("Unknown scan action.")
        required_status, new_status, message = self.TRANSITIONS[action]

        with transaction.atomic():
            equipment = self.lookup(barcode)
            equipment = Equipment.objects.select_for_update().select_related("studio").get(pk=equipment.pk)
            if equipment.status != required_status:
                raise ScanError(self.STATUS_ERRORS[action])

            log = EquipmentLog.objects.create(equipment=equipment, user=self.owner, action=action)
            equipment.status = new_status
            equipment.save(update_fields=["status"])

        logger.info(
            "equipment_scanned",
            equipment_id=equipment.id,
            barcode=equipment.barcode_code,
            action=action,
            status=new_status,
            owner_id=self.owner.id,
        )
        return ScanOutcome(equipment=equipment, log=log, message=message)

    def recent_scans(self) -> list[EquipmentLog]:
        return list(
            EquipmentLog.objects
            .filter(equipment__studio__owner=self.owner)
            .select_related("equipment__studio", "user")
            .order_by("-timestamp", "-id")[: settings.STUDIOHUB_RECENT_SCANS]
        )
