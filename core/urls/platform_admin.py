"""Administrator URL patterns."""

from django.urls import path

from ..views import administration

urlpatterns = [
    path("admin/", administration.AdminDashboardView.as_view(), name="admin_dashboard"),
    path("admin/approvals/", administration.StudioApprovalListView.as_view(), name="studio_approvals"),
    path(
        "admin/approvals/<int:studio_id>/",
        administration.StudioApprovalDecisionView.as_view(),
        name="studio_approval_decision",
    ),
]
