from django.contrib import messages
from django.shortcuts import get_object_or_404, redirect
from django.utils.decorators import method_decorator
from django.views import View
from django.views.generic import TemplateView

from ..decorators import studio_owner_required
from ..forms import BarcodeScanForm
from ..models import Booking, Equipment
from ..services.owner import OwnerBookingActionService, OwnerDashboardService, OwnerInventoryService
from ..services.scanner import EquipmentScanService, ScanError


def _level(name: str) -> int:
    return {
        "success": messages.SUCCESS,
        "info": messages.INFO,
        "error": messages.ERROR,
    }.get(name, messages.INFO)


def _flash_form_errors(request, form) -> None:
    for errors in form.errors.values():
        for error in errors:
            messages.error(request, error)


@method_decorator(studio_owner_required, name="dispatch")
class OwnerDashboardView(TemplateView):
    template_name = "owner/dashboard.html"
    service_class = OwnerDashboardService

    def get_service(self) -> OwnerDashboardService:
        return self.service_class(self.request.user)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        service = self.get_service()
        context.update(
            {
                "stats": service.stats(),
                "recent_bookings": service.recent_bookings(),
            }
        )
        return context


@method_decorator(studio_owner_required, name="dispatch")
class OwnerBookingListView(TemplateView):
    template_name = "owner/bookings.html"
    service_class = OwnerDashboardService

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["bookings"] = self.service_class(self.request.user).bookings()
        return context


@method_decorator(studio_owner_required, name="dispatch")
class OwnerStudioManagementView(TemplateView):
    template_name = "owner/studios.html"
    service_class = OwnerInventoryService

    def dispatch(self, request, *args, **kwargs):
        self.service = self.service_class(request.user)
        return super().dispatch(request, *args, **kwargs)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update(
            {
                "studios": self.service.studios(),
                "form": kwargs.get("form") or self.service.studio_form(),
            }
        )
        return context

    def post(self, request, *args, **kwargs):
        success, form, studio = self.service.create_studio(request.POST, request.FILES)
        if success:
            messages.success(request, f"{studio.name} submitted for verification.")
            return redirect("owner_studios")
        messages.error(request, "Please review the errors below.")
        return self.render_to_response(self.get_context_data(form=form))


@method_decorator(studio_owner_required, name="dispatch")
class OwnerRoomManagementView(TemplateView):
    template_name = "owner/rooms.html"
    service_class = OwnerInventoryService

    def dispatch(self, request, *args, **kwargs):
        self.service = self.service_class(request.user)
        return super().dispatch(request, *args, **kwargs)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update(
            {
                "rooms": self.service.rooms(),
                "has_approved_studios": self.service.approved_studios().exists(),
                "form": kwargs.get("form") or self.service.room_form(),
            }
        )
        return context

    def post(self, request, *args, **kwargs):
        success, form, room = self.service.create_room(request.POST, request.FILES)
        if success:
            messages.success(request, f"Room {room.name} added to {room.studio.name}.")
            return redirect("owner_rooms")
        _flash_form_errors(request, form)
        return self.render_to_response(self.get_context_data(form=form))


@method_decorator(studio_owner_required, name="dispatch")
class OwnerEquipmentManagementView(TemplateView):
    template_name = "owner/equipment.html"
    service_class = OwnerInventoryService

    def dispatch(self, request, *args, **kwargs):
        self.service = self.service_class(request.user)
        return super().dispatch(request, *args, **kwargs)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update(
            {
                "equipment": self.service.equipment(),
                "has_approved_studios": self.service.approved_studios().exists(),
                "form": kwargs.get("form") or self.service.equipment_form(),
            }
        )
        return context

    def post(self, request, *args, **kwargs):
        success, form, item = self.service.create_equipment(request.POST)
        if success:
            messages.success(request, f"{item.name} added with barcode {item.barcode_code}.")
            return redirect("owner_equipment")
        _flash_form_errors(request, form)
        return self.render_to_response(self.get_context_data(form=form))


@method_decorator(studio_owner_required, name="dispatch")
class OwnerEquipmentStatusView(View):
    http_method_names = ["post"]
    service_class = OwnerInventoryService

    def post(self, request, equipment_id):
        item = get_object_or_404(Equipment.objects.select_related("studio"), id=equipment_id)
        if item.studio.owner_id != request.user.id:
            messages.error(request, "You can only manage equipment of your own studios.")
            return redirect("owner_equipment")

        status = request.POST.get("status")
        if status not in {Equipment.STATUS_AVAILABLE, Equipment.STATUS_DAMAGED}:
            messages.error(request, "Invalid status requested.")
            return redirect("owner_equipment")

        outcome = self.service_class(request.user).set_equipment_status(item, status)
        messages.add_message(request, _level(outcome.level), outcome.message)
        return redirect("owner_equipment")


@method_decorator(studio_owner_required, name="dispatch")
class OwnerBookingDecisionView(View):
    http_method_names = ["post"]
    service_class = OwnerBookingActionService
    ACTIONS = {"accept", "reject", "complete", "mark_paid"}

    def post(self, request, booking_id):
        booking = get_object_or_404(
            Booking.objects.select_related("room__studio", "photographer"),
            id=booking_id,
        )
        if booking.room.studio.owner_id != request.user.id:
            messages.error(request, "You can only manage bookings for your own studios.")
            return redirect("owner_bookings")

        action = request.POST.get("action")
        if action not in self.ACTIONS:
            messages.error(request, "Invalid action requested.")
            return redirect("owner_bookings")

        outcome = self.service_class(request.user).apply(booking, action)
        messages.add_message(request, _level(outcome.level), outcome.message)
        return redirect("owner_bookings")


@method_decorator(studio_owner_required, name="dispatch")
class BarcodeScannerView(TemplateView):
    template_name = "owner/scanner.html"
    service_class = EquipmentScanService

    def dispatch(self, request, *args, **kwargs):
        self.service = self.service_class(request.user)
        return super().dispatch(request, *args, **kwargs)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update(
            {
                "form": kwargs.get("form") or BarcodeScanForm(),
                "scanned_equipment": kwargs.get("scanned_equipment"),
                "recent_scans": self.service.recent_scans(),
            }
        )
        return context

    def post(self, request, *args, **kwargs):
        form = BarcodeScanForm(request.POST)
        if not form.is_valid():
            _flash_form_errors(request, form)
            return self.render_to_response(self.get_context_data(form=form))

        try:
            outcome = self.service.scan(form.cleaned_data["barcode"], form.cleaned_data["action"])
        except ScanError as exc:
            messages.error(request, str(exc))
            return self.render_to_response(self.get_context_data(form=form))

        messages.success(request, outcome.message)
        return self.render_to_response(
            self.get_context_data(form=BarcodeScanForm(), scanned_equipment=outcome.equipment)
        )
