from django import forms

from ..models import User

SELF_SERVICE_ROLE_CHOICES = [
    choice for choice in User.ROLE_CHOICES if choice[0] != User.ROLE_ADMIN
]


class RegisterForm(forms.ModelForm):
    password1 = forms.CharField(label="Password", widget=forms.PasswordInput)
    password2 = forms.CharField(label="Confirm Password", widget=forms.PasswordInput)
    role = forms.ChoiceField(
        label="I am a",
        choices=SELF_SERVICE_ROLE_CHOICES,
        initial=User.ROLE_PHOTOGRAPHER,
        widget=forms.RadioSelect,
    )

    class Meta:
        model = User
        fields = [
            "name",
            "username",
            "email",
            "phone_number",
            "role",
        ]

    def clean_name(self):
        name = (self.cleaned_data.get("name") or "").strip()
        if not name:
            raise forms.ValidationError("Name is required.")
        return name

    def clean_email(self):
        email = (self.cleaned_data.get("email") or "").strip()
        if not email:
            raise forms.ValidationError("Email is required.")
        if User.objects.filter(email__iexact=email).exists():
            raise forms.ValidationError("An account with this email already exists.")
        return email

    def clean_phone_number(self):
        phone = (self.cleaned_data.get("phone_number") or "").strip()
        return phone or None

    def clean(self):
        cleaned_data = super().clean()
        password1 = cleaned_data.get("password1")
        password2 = cleaned_data.get("password2")
        if password1 and password2 and password1 != password2:
            self.add_error("password2", "Passwords do not match.")
        return cleaned_data

    def save(self, commit=True):
        user = super().save(commit=False)
        user.set_password(self.cleaned_data["password1"])
        if commit:
            user.save()
        return user
