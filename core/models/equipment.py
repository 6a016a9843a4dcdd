import random
import time

from django.core.validators import MinValueValidator
from django.db import models

from .studio import Studio
from .user import User


def generate_barcode_code() -> str:
    """Return a new equipment barcode of the form ``EQ<epoch millis><0-999>``."""

    return f"EQ{int(time.time() * 1000)}{random.randint(0, 999)}"


class Equipment(models.Model):
    STATUS_AVAILABLE = "available"
    STATUS_RENTED = "rented"
    STATUS_DAMAGED = "damaged"
    STATUS_CHOICES = (
        (STATUS_AVAILABLE, "Available"),
        (STATUS_RENTED, "Rented"),
        (STATUS_DAMAGED, "Damaged"),
    )

    studio = models.ForeignKey(Studio, on_delete=models.CASCADE, related_name="equipment")
    name = models.CharField(max_length=150)
    brand = models.CharField(max_length=100, blank=True)
    equipment_type = models.CharField(max_length=100, help_text="e.g., Camera, Lens, Lighting")
    rental_price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])
    condition = models.CharField(max_length=100, blank=True)
    serial_number = models.CharField(max_length=100, blank=True)
    barcode_code = models.CharField(max_length=64, unique=True, default=generate_barcode_code)
    barcode_image = models.ImageField(upload_to="barcodes/", null=True, blank=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_AVAILABLE)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name", "id"]
        verbose_name_plural = "equipment"

    def __str__(self) -> str:  # pragma: no cover - simple display helper
        return f"{self.name} ({self.barcode_code})"

    @property
    def is_available(self) -> bool:
        return self.status == self.STATUS_AVAILABLE


class EquipmentLog(models.Model):
    ACTION_SCAN_OUT = "scan_out"
    ACTION_SCAN_IN = "scan_in"
    ACTION_CHOICES = (
        (ACTION_SCAN_OUT, "Checked out"),
        (ACTION_SCAN_IN, "Checked in"),
    )

    equipment = models.ForeignKey(Equipment, on_delete=models.CASCADE, related_name="logs")
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name="equipment_logs")
    action = models.CharField(max_length=10, choices=ACTION_CHOICES)
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-timestamp", "-id"]

    def __str__(self) -> str:  # pragma: no cover - simple display helper
        return f"{self.get_action_display()} {self.equipment.barcode_code}"
