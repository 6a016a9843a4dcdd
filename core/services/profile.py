from __future__ import annotations

from typing import Any

import structlog
from django.contrib.auth.forms import PasswordChangeForm

from ..forms import ProfileForm

logger = structlog.get_logger(__name__)


class ProfileService:
    """Handles profile and password forms for any signed-in user."""

    def __init__(self, user):
        self.user = user

    # Form helpers -----------------------------------------------------
    def profile_form(self) -> ProfileForm:
        return ProfileForm(instance=self.user)

    def password_form(self) -> PasswordChangeForm:
        form = PasswordChangeForm(self.user)
        self._style_password_form(form)
        return form

    def _style_password_form(self, form: PasswordChangeForm) -> None:
        for field in form.fields.values():
            existing_class = field.widget.attrs.get("class", "")
            field.widget.attrs["class"] = f"{existing_class} form-control".strip()

    # Update handlers --------------------------------------------------
    def update_profile(self, data, files=None) -> tuple[bool, ProfileForm]:
        form = ProfileForm(data, files, instance=self.user)
        if form.is_valid():
            form.save()
            logger.info("profile_updated", user_id=self.user.id)
            return True, form
        return False, form

    def update_password(self, data) -> tuple[bool, PasswordChangeForm, Any]:
        form = PasswordChangeForm(self.user, data)
        self._style_password_form(form)
        if form.is_valid():
            user = form.save()
            logger.info("password_changed", user_id=user.id)
            return True, form, user
        return False, form, None
