from datetime import datetime

from django import forms
from django.utils import timezone

from ..models import Equipment, Room


class BookingForm(forms.Form):
    date = forms.DateField(widget=forms.DateInput(attrs={"type": "date", "class": "form-control"}))
    start_time = forms.TimeField(widget=forms.TimeInput(attrs={"type": "time", "class": "form-control"}))
    end_time = forms.TimeField(widget=forms.TimeInput(attrs={"type": "time", "class": "form-control"}))
    equipment = forms.ModelMultipleChoiceField(
        queryset=Equipment.objects.none(),
        required=False,
        widget=forms.CheckboxSelectMultiple,
        error_messages={"invalid_choice": "Selected equipment is not available for this room."},
    )

    def __init__(self, *args, room: Room | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        if room is None:
            raise ValueError("BookingForm requires a Room instance")
        self.room = room
        self.fields["equipment"].queryset = (
            Equipment.objects.filter(studio_id=room.studio_id, status=Equipment.STATUS_AVAILABLE).order_by("name")
        )
        self.fields["equipment"].label_from_instance = (
            lambda item: f"{item.name} · {item.brand} · {item.rental_price}" if item.brand else f"{item.name} · {item.rental_price}"
        )
        self.fields["date"].widget.attrs["min"] = timezone.localdate().isoformat()

    def clean_date(self):
        booking_date = self.cleaned_data["date"]
        if booking_date < timezone.localdate():
            raise forms.ValidationError("Bookings cannot be made for past dates.")
        return booking_date

    def clean_equipment(self):
        equipment = list(self.cleaned_data.get("equipment") or [])
        for item in equipment:
            if item.studio_id != self.room.studio_id:
                raise forms.ValidationError(f"{item.name} does not belong to this studio.")
        return equipment

    def clean(self):
        cleaned_data = super().clean()
        booking_date = cleaned_data.get("date")
        start_time = cleaned_data.get("start_time")
        end_time = cleaned_data.get("end_time")
        if start_time and end_time and end_time <= start_time:
            self.add_error("end_time", "End time must be after the start time.")
            return cleaned_data
        if booking_date and start_time and end_time:
            tz = timezone.get_current_timezone()
            cleaned_data["start"] = timezone.make_aware(datetime.combine(booking_date, start_time), tz)
            cleaned_data["end"] = timezone.make_aware(datetime.combine(booking_date, end_time), tz)
            if cleaned_data["start"] <= timezone.now():
                self.add_error("start_time", "The start time has already passed.")
        return cleaned_data
