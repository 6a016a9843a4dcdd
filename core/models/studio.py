from django.core.validators import MinValueValidator
from django.db import models

from .user import User


class Studio(models.Model):
    STATUS_PENDING = "pending"
    STATUS_APPROVED = "approved"
    STATUS_REJECTED = "rejected"
    VERIFICATION_CHOICES = (
        (STATUS_PENDING, "Pending Verification"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_REJECTED, "Rejected"),
    )

    owner = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        limit_choices_to={"role": User.ROLE_STUDIO_OWNER},
        related_name="studios",
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    province = models.CharField(max_length=100)
    city = models.CharField(max_length=100)
    address = models.TextField()
    latitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    longitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    photo = models.ImageField(upload_to="studio_photos/", null=True, blank=True)
    verification_status = models.CharField(
        max_length=10,
        choices=VERIFICATION_CHOICES,
        default=STATUS_PENDING,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:  # pragma: no cover - simple display helper
        return self.name

    @property
    def is_approved(self) -> bool:
        return self.verification_status == self.STATUS_APPROVED

    @property
    def map_coordinates(self) -> dict[str, float] | None:
        if self.latitude is None or self.longitude is None:
            return None
        return {"lat": float(self.latitude), "lng": float(self.longitude)}

    @property
    def primary_photo(self):
        if self.photo:
            return self.photo
        first_additional = self.photos.order_by("created_at", "id").first()
        return first_additional.image if first_additional else None


class StudioPhoto(models.Model):
    studio = models.ForeignKey(Studio, on_delete=models.CASCADE, related_name="photos")
    image = models.ImageField(upload_to="studio_photos/")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]

    def __str__(self) -> str:  # pragma: no cover - simple display helper
        return f"Photo for {self.studio.name} ({self.image.name})"


class Room(models.Model):
    studio = models.ForeignKey(Studio, on_delete=models.CASCADE, related_name="rooms")
    name = models.CharField(max_length=150)
    description = models.TextField(blank=True)
    hourly_price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])
    daily_price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])
    features = models.TextField(blank=True, help_text="Comma separated, e.g. Cyclorama, Blackout, Makeup room")
    image = models.ImageField(upload_to="room_images/", null=True, blank=True)

    class Meta:
        ordering = ["name", "id"]

    def __str__(self) -> str:  # pragma: no cover - simple display helper
        return f"{self.studio.name} - {self.name}"

    @property
    def features_list(self) -> list[str]:
        if not self.features:
            return []
        return [feature.strip() for feature in self.features.split(",") if feature.strip()]
