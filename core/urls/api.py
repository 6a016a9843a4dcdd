"""JSON API endpoints."""

from django.urls import path

from ..api import views

urlpatterns = [
    path("api/auth/me/", views.CurrentUserView.as_view(), name="auth_me"),
    path("api/notifications/", views.NotificationListView.as_view(), name="api_notifications"),
    path(
        "api/notifications/<int:pk>/read/",
        views.NotificationMarkReadView.as_view(),
        name="api_notification_read",
    ),
    path(
        "api/notifications/read-all/",
        views.NotificationMarkAllReadView.as_view(),
        name="api_notifications_read_all",
    ),
    path("api/equipment/scan/", views.EquipmentScanView.as_view(), name="api_equipment_scan"),
    path("api/rooms/<int:pk>/quote/", views.RoomQuoteView.as_view(), name="api_room_quote"),
]
