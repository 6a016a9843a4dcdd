from django.contrib import messages
from django.contrib.auth import update_session_auth_hash
from django.contrib.auth.decorators import login_required
from django.shortcuts import get_object_or_404, redirect
from django.utils.decorators import method_decorator
from django.views import View
from django.views.generic import TemplateView

from ..models import Notification
from ..services.notification import NotificationService
from ..services.profile import ProfileService


@method_decorator(login_required(login_url="login"), name="dispatch")
class NotificationsView(TemplateView):
    template_name = "shared/notifications.html"
    service_class = NotificationService

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update(self.service_class(self.request.user).build_context())
        return context


@method_decorator(login_required(login_url="login"), name="dispatch")
class NotificationMarkReadView(View):
    http_method_names = ["post"]
    service_class = NotificationService

    def post(self, request, notification_id):
        notification = get_object_or_404(Notification, id=notification_id, user=request.user)
        self.service_class(request.user).mark_read(notification)
        return redirect("notifications")


@method_decorator(login_required(login_url="login"), name="dispatch")
class NotificationMarkAllReadView(View):
    http_method_names = ["post"]
    service_class = NotificationService

    def post(self, request):
        updated = self.service_class(request.user).mark_all_read()
        if updated:
            messages.success(request, f"{updated} notification{'s' if updated != 1 else ''} marked as read.")
        return redirect("notifications")


@method_decorator(login_required(login_url="login"), name="dispatch")
class ProfileView(TemplateView):
    template_name = "shared/profile.html"
    service_class = ProfileService

    def dispatch(self, request, *args, **kwargs):
        self.service = self.service_class(request.user)
        return super().dispatch(request, *args, **kwargs)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update(
            {
                "profile_form": kwargs.get("profile_form") or self.service.profile_form(),
                "password_form": kwargs.get("password_form") or self.service.password_form(),
            }
        )
        return context

    def post(self, request, *args, **kwargs):
        form_type = request.POST.get("form_type", "profile")
        profile_form = None
        password_form = None
        if form_type == "profile":
            success, profile_form = self.service.update_profile(request.POST, request.FILES)
            if success:
                messages.success(request, "Profile updated successfully.")
                return redirect("profile")
            messages.error(request, "Please correct the highlighted errors and try again.")
        elif form_type == "password":
            success, password_form, updated_user = self.service.update_password(request.POST)
            if success:
                update_session_auth_hash(request, updated_user)
                messages.success(request, "Password updated successfully.")
                return redirect("profile")
            messages.error(request, "Please fix the errors in the password form and resubmit.")

        context = self.get_context_data(profile_form=profile_form, password_form=password_form)
        return self.render_to_response(context)
