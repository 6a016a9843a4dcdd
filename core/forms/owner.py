from django import forms

from ..models import Equipment, EquipmentLog, Room, Studio


def _add_css_classes(form: forms.BaseForm, css_map: dict[str, str]) -> None:
    for field_name, css_class in css_map.items():
        field = form.fields.get(field_name)
        if field:
            existing_class = field.widget.attrs.get("class", "")
            field.widget.attrs["class"] = f"{existing_class} {css_class}".strip()


class StudioForm(forms.ModelForm):
    class Meta:
        model = Studio
        fields = [
            "name",
            "description",
            "province",
            "city",
            "address",
            "latitude",
            "longitude",
            "photo",
        ]
        widgets = {
            "name": forms.TextInput(attrs={"class": "form-control", "placeholder": "e.g., Northlight Studio"}),
            "description": forms.Textarea(attrs={"class": "form-control", "rows": 4}),
            "province": forms.TextInput(attrs={"class": "form-control", "placeholder": "e.g., Tehran"}),
            "city": forms.TextInput(attrs={"class": "form-control", "placeholder": "e.g., Tehran"}),
            "address": forms.Textarea(attrs={"class": "form-control", "rows": 2}),
            "latitude": forms.NumberInput(attrs={"class": "form-control", "step": "0.000001"}),
            "longitude": forms.NumberInput(attrs={"class": "form-control", "step": "0.000001"}),
            "photo": forms.ClearableFileInput(attrs={"class": "form-control", "accept": "image/*"}),
        }

    def __init__(self, *args, owner=None, **kwargs):
        self.owner = owner
        super().__init__(*args, **kwargs)

    def clean(self):
        cleaned_data = super().clean()
        latitude = cleaned_data.get("latitude")
        longitude = cleaned_data.get("longitude")
        if (latitude is None) != (longitude is None):
            raise forms.ValidationError("Provide both latitude and longitude, or neither.")
        if latitude is not None and not -90 <= latitude <= 90:
            self.add_error("latitude", "Latitude must be between -90 and 90.")
        if longitude is not None and not -180 <= longitude <= 180:
            self.add_error("longitude", "Longitude must be between -180 and 180.")
        return cleaned_data

    def save(self, commit=True):
        studio = super().save(commit=False)
        if not self.owner:
            raise ValueError("StudioForm.save() requires an owner instance")
        studio.owner = self.owner
        if not studio.pk:
            studio.verification_status = Studio.STATUS_PENDING
        if commit:
            studio.save()
        return studio


class _ApprovedStudioFormMixin:
    """Limit the ``studio`` field to the owner's approved studios."""

    def _limit_studios(self, owner) -> None:
        if owner is None:
            raise ValueError(f"{type(self).__name__} requires an owner instance")
        self.owner = owner
        studios = Studio.objects.filter(owner=owner, verification_status=Studio.STATUS_APPROVED).order_by("name")
        self.fields["studio"].queryset = studios
        self.fields["studio"].empty_label = None

    def clean_studio(self):
        studio = self.cleaned_data["studio"]
        if studio.owner_id != self.owner.id:
            raise forms.ValidationError("You can only add items to your own studios.")
        if not studio.is_approved:
            raise forms.ValidationError("The studio must be approved before adding items.")
        return studio


class RoomForm(_ApprovedStudioFormMixin, forms.ModelForm):
    class Meta:
        model = Room
        fields = ["studio", "name", "description", "hourly_price", "daily_price", "features", "image"]

    def __init__(self, *args, owner=None, **kwargs):
        super().__init__(*args, **kwargs)
        self._limit_studios(owner)
        _add_css_classes(
            self,
            {
                "studio": "form-select",
                "name": "form-control",
                "description": "form-control",
                "hourly_price": "form-control",
                "daily_price": "form-control",
                "features": "form-control",
                "image": "form-control",
            },
        )
        self.fields["description"].widget.attrs.setdefault("rows", 3)

    def clean_features(self):
        raw = self.cleaned_data.get("features") or ""
        features = [feature.strip() for feature in raw.split(",") if feature.strip()]
        return ", ".join(features)

    def clean(self):
        cleaned_data = super().clean()
        studio = cleaned_data.get("studio")
        name = (cleaned_data.get("name") or "").strip()
        if studio and name and Room.objects.filter(studio=studio, name__iexact=name).exists():
            self.add_error("name", "A room with this name already exists in this studio.")
        return cleaned_data


class EquipmentForm(_ApprovedStudioFormMixin, forms.ModelForm):
    class Meta:
        model = Equipment
        fields = ["studio", "name", "brand", "equipment_type", "rental_price", "condition", "serial_number"]

    def __init__(self, *args, owner=None, **kwargs):
        super().__init__(*args, **kwargs)
        self._limit_studios(owner)
        _add_css_classes(
            self,
            {
                "studio": "form-select",
                "name": "form-control",
                "brand": "form-control",
                "equipment_type": "form-control",
                "rental_price": "form-control",
                "condition": "form-control",
                "serial_number": "form-control",
            },
        )

    def save(self, commit=True):
        item = super().save(commit=False)
        item.status = Equipment.STATUS_AVAILABLE
        if commit:
            item.save()
        return item


class BarcodeScanForm(forms.Form):
    barcode = forms.CharField(
        max_length=64,
        widget=forms.TextInput(attrs={"class": "form-control", "autofocus": True, "placeholder": "Scan or type a barcode"}),
        error_messages={"required": "Please enter a barcode."},
    )
    action = forms.ChoiceField(choices=EquipmentLog.ACTION_CHOICES)

    def clean_barcode(self):
        barcode = self.cleaned_data["barcode"].strip()
        if not barcode:
            raise forms.ValidationError("Please enter a barcode.")
        return barcode
