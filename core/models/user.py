from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    ROLE_PHOTOGRAPHER = "photographer"
    ROLE_STUDIO_OWNER = "studio_owner"
    ROLE_ADMIN = "admin"
    ROLE_CHOICES = (
        (ROLE_PHOTOGRAPHER, "Photographer / Videographer"),
        (ROLE_STUDIO_OWNER, "Studio Owner"),
        (ROLE_ADMIN, "Administrator"),
    )

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_PHOTOGRAPHER)
    name = models.CharField(max_length=150, blank=True)
    phone_number = models.CharField(max_length=20, null=True, blank=True)
    avatar = models.ImageField(upload_to="avatars/", null=True, blank=True)

    def __str__(self) -> str:  # pragma: no cover - simple display helper
        return self.display_name

    @property
    def display_name(self) -> str:
        return self.name or self.get_full_name() or self.username

    @property
    def is_photographer(self) -> bool:
        return self.role == self.ROLE_PHOTOGRAPHER

    @property
    def is_studio_owner(self) -> bool:
        return self.role == self.ROLE_STUDIO_OWNER

    @property
    def is_platform_admin(self) -> bool:
        return self.role == self.ROLE_ADMIN or self.is_superuser

    def default_page(self) -> str:
        """Name of the URL each role lands on after signing in."""
        if self.is_platform_admin:
            return "admin_dashboard"
        if self.is_studio_owner:
            return "owner_dashboard"
        return "studio_list"
