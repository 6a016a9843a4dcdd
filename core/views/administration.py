from django.contrib import messages
from django.shortcuts import get_object_or_404, redirect
from django.utils.decorators import method_decorator
from django.views import View
from django.views.generic import TemplateView

from ..decorators import admin_required
from ..models import Studio
from ..services.admin import AdminDashboardService, StudioApprovalService


@method_decorator(admin_required, name="dispatch")
class AdminDashboardView(TemplateView):
    template_name = "platform_admin/dashboard.html"
    service_class = AdminDashboardService

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["stats"] = self.service_class().stats()
        return context


@method_decorator(admin_required, name="dispatch")
class StudioApprovalListView(TemplateView):
    template_name = "platform_admin/approvals.html"
    service_class = StudioApprovalService

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["pending_studios"] = self.service_class(self.request.user).pending_studios()
        return context


@method_decorator(admin_required, name="dispatch")
class StudioApprovalDecisionView(View):
    http_method_names = ["post"]
    service_class = StudioApprovalService
    DECISIONS = {
        "approve": Studio.STATUS_APPROVED,
        "reject": Studio.STATUS_REJECTED,
    }

    def post(self, request, studio_id):
        studio = get_object_or_404(Studio.objects.select_related("owner"), id=studio_id)
        status = self.DECISIONS.get(request.POST.get("action"))
        if status is None:
            messages.error(request, "Invalid action requested.")
            return redirect("studio_approvals")

        outcome = self.service_class(request.user).decide(studio, status)
        if outcome.level == "success":
            messages.success(request, outcome.message)
        else:
            messages.info(request, outcome.message)
        return redirect("studio_approvals")
