"""Photographer booking URL patterns."""

from django.urls import path

from ..views import photographer

urlpatterns = [
    path("rooms/<int:room_id>/book/", photographer.BookingCreateView.as_view(), name="booking_create"),
    path("my-bookings/", photographer.MyBookingsView.as_view(), name="my_bookings"),
    path(
        "bookings/<int:booking_id>/cancel/",
        photographer.BookingCancelView.as_view(),
        name="booking_cancel",
    ),
]
