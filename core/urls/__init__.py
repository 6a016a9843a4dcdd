"""Aggregate URL patterns for the core application."""

from . import api, booking, owner, platform_admin, public, shared

urlpatterns = [
    *public.urlpatterns,
    *booking.urlpatterns,
    *owner.urlpatterns,
    *platform_admin.urlpatterns,
    *shared.urlpatterns,
    *api.urlpatterns,
]
