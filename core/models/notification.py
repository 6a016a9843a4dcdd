from django.db import models

from .user import User


class Notification(models.Model):
    TYPE_BOOKING = "booking"
    TYPE_APPROVAL = "approval"
    TYPE_EQUIPMENT = "equipment"
    TYPE_SYSTEM = "system"
    TYPE_CHOICES = (
        (TYPE_BOOKING, "Booking"),
        (TYPE_APPROVAL, "Approval"),
        (TYPE_EQUIPMENT, "Equipment"),
        (TYPE_SYSTEM, "System"),
    )

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="notifications")
    title = models.CharField(max_length=200)
    message = models.TextField()
    notification_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=TYPE_SYSTEM)
    read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:  # pragma: no cover - simple display helper
        return f"{self.title} -> {self.user}"
