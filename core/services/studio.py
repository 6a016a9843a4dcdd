from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from django.db.models import Min, Q

from ..models import Equipment, Studio


@dataclass(frozen=True)
class StudioFilters:
    """Value object holding filter parameters for studio catalog queries."""

    search: str = ""
    city: str = ""


class StudioCatalogService:
    """Encapsulates querying logic for the public studio catalog."""

    def __init__(self, base_queryset=None) -> None:
        self.base_queryset = base_queryset if base_queryset is not None else Studio.objects.all()

    def build_filters(self, data) -> StudioFilters:
        """Return cleaned filter parameters from raw request data."""
        return StudioFilters(
            search=(data.get("q") or "").strip(),
            city=(data.get("city") or "").strip(),
        )

    def get_catalog(self, filters: StudioFilters):
        """Apply filters and return approved studios, newest first."""
        queryset = (
            self.base_queryset.filter(verification_status=Studio.STATUS_APPROVED)
            .annotate(min_hourly_price=Min("rooms__hourly_price"))
            .order_by("-created_at", "-id")
        )
        if filters.search:
            queryset = queryset.filter(
                Q(name__icontains=filters.search) | Q(description__icontains=filters.search)
            )
        if filters.city:
            queryset = queryset.filter(city=filters.city)
        return queryset

    @staticmethod
    def available_cities() -> Iterable[str]:
        return (
            Studio.objects.filter(verification_status=Studio.STATUS_APPROVED)
            .order_by("city")
            .values_list("city", flat=True)
            .distinct()
        )


class StudioDetailService:
    """Rooms and rentable equipment of a single studio."""

    def __init__(self, studio: Studio) -> None:
        self.studio = studio

    @staticmethod
    def can_view(studio: Studio, user) -> bool:
        if studio.is_approved:
            return True
        if not user.is_authenticated:
            return False
        return studio.owner_id == user.id or user.is_platform_admin

    def get_rooms(self):
        return self.studio.rooms.order_by("name", "id")

    def get_available_equipment(self):
        return self.studio.equipment.filter(status=Equipment.STATUS_AVAILABLE).order_by("name", "id")

    def build_context(self) -> dict[str, object]:
        return {
            "rooms": self.get_rooms(),
            "equipment": self.get_available_equipment(),
            "primary_photo": self.studio.primary_photo,
            "photos": self.studio.photos.order_by("created_at", "id"),
            "map_coordinates": self.studio.map_coordinates,
        }
