"""URL patterns shared by every signed-in role."""

from django.urls import path

from ..views import shared

urlpatterns = [
    path("profile/", shared.ProfileView.as_view(), name="profile"),
    path("notifications/", shared.NotificationsView.as_view(), name="notifications"),
    path(
        "notifications/<int:notification_id>/read/",
        shared.NotificationMarkReadView.as_view(),
        name="notification_read",
    ),
    path(
        "notifications/read-all/",
        shared.NotificationMarkAllReadView.as_view(),
        name="notifications_read_all",
    ),
]
