from django.contrib import messages
from django.shortcuts import get_object_or_404, redirect
from django.utils.decorators import method_decorator
from django.views import View
from django.views.generic import FormView, TemplateView

from ..decorators import photographer_required
from ..forms import BookingForm
from ..models import Booking, Room, Studio
from ..services.booking import (
    BookingError,
    BookingMutationService,
    BookingRequestService,
    PhotographerBookingsService,
)

__all__ = [
    "BookingCreateView",
    "MyBookingsView",
    "BookingCancelView",
]


@method_decorator(photographer_required, name="dispatch")
class BookingCreateView(FormView):
    template_name = "bookings/create.html"
    form_class = BookingForm
    service_class = BookingRequestService

    def dispatch(self, request, *args, **kwargs):
        self.room = get_object_or_404(
            Room.objects.select_related("studio"),
            id=kwargs["room_id"],
            studio__verification_status=Studio.STATUS_APPROVED,
        )
        return super().dispatch(request, *args, **kwargs)

    def get_service(self) -> BookingRequestService:
        return self.service_class(self.request.user)

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        kwargs["room"] = self.room
        return kwargs

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        form = context["form"]
        quote = None
        if form.is_bound and form.is_valid() and "start" in form.cleaned_data:
            try:
                quote = self.get_service().build_quote(
                    self.room,
                    form.cleaned_data["start"],
                    form.cleaned_data["end"],
                    form.cleaned_data["equipment"],
                )
            except BookingError:
                quote = None
        context.update(
            {
                "room": self.room,
                "studio": self.room.studio,
                "quote": quote,
            }
        )
        return context

    def form_valid(self, form):
        if "preview" in self.request.POST:
            return self.render_to_response(self.get_context_data(form=form))
        service = self.get_service()
        try:
            booking = service.create_booking(
                self.room,
                form.cleaned_data["start"],
                form.cleaned_data["end"],
                form.cleaned_data["equipment"],
            )
        except BookingError as exc:
            form.add_error(None, str(exc))
            return self.form_invalid(form)
        messages.success(
            self.request,
            f"Booking submitted for {booking.room.name}. Total: {booking.total_price}. The studio will review it soon.",
        )
        return redirect("my_bookings")

    def form_invalid(self, form):
        messages.error(self.request, "Unable to submit the booking. Please correct the errors below.")
        return super().form_invalid(form)


@method_decorator(photographer_required, name="dispatch")
class MyBookingsView(TemplateView):
    template_name = "bookings/mine.html"
    service_class = PhotographerBookingsService

    def get_service(self) -> PhotographerBookingsService:
        return self.service_class(self.request.user)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        service = self.get_service()
        bookings = service.bookings()
        context.update(
            {
                "bookings": bookings,
                "bookings_by_status": service.grouped_bookings(bookings),
                "status_counts": service.status_counts(bookings),
            }
        )
        return context


@method_decorator(photographer_required, name="dispatch")
class BookingCancelView(View):
    http_method_names = ["post"]
    service_class = BookingMutationService

    def post(self, request, booking_id):
        booking = get_object_or_404(
            Booking.objects.select_related("room__studio__owner"),
            id=booking_id,
            photographer=request.user,
        )
        service = self.service_class(request.user)
        try:
            service.cancel_booking(booking)
        except BookingError as exc:
            messages.info(request, str(exc))
            return redirect("my_bookings")
        messages.success(request, "Booking cancelled successfully.")
        return redirect("my_bookings")
