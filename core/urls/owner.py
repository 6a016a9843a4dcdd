"""Studio owner URL patterns."""

from django.urls import path

from ..views import owner

urlpatterns = [
    path("owner/dashboard/", owner.OwnerDashboardView.as_view(), name="owner_dashboard"),
    path("owner/studios/", owner.OwnerStudioManagementView.as_view(), name="owner_studios"),
    path("owner/rooms/", owner.OwnerRoomManagementView.as_view(), name="owner_rooms"),
    path("owner/equipment/", owner.OwnerEquipmentManagementView.as_view(), name="owner_equipment"),
    path(
        "owner/equipment/<int:equipment_id>/status/",
        owner.OwnerEquipmentStatusView.as_view(),
        name="owner_equipment_status",
    ),
    path("owner/bookings/", owner.OwnerBookingListView.as_view(), name="owner_bookings"),
    path(
        "owner/bookings/<int:booking_id>/decision/",
        owner.OwnerBookingDecisionView.as_view(),
        name="owner_booking_decision",
    ),
    path("owner/scanner/", owner.BarcodeScannerView.as_view(), name="barcode_scanner"),
]
