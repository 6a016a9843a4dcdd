from functools import wraps

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect

from .models import User

ROLE_DENIED_MESSAGES = {
    User.ROLE_PHOTOGRAPHER: "Only photographer accounts can access that page.",
    User.ROLE_STUDIO_OWNER: "Only studio owner accounts can access that page.",
    User.ROLE_ADMIN: "Only administrators can access that page.",
}


def _has_role(user, roles) -> bool:
    if User.ROLE_ADMIN in roles and user.is_platform_admin:
        return True
    return getattr(user, 'role', None) in roles


def role_required(*roles):
    def decorator(view_func):
        @wraps(view_func)
        @login_required(login_url='login')
        def _wrapped_view(request, *args, **kwargs):
            if not _has_role(request.user, roles):
                message = ROLE_DENIED_MESSAGES[roles[0]] if len(roles) == 1 else (
                    "You do not have permission to access that page."
                )
                messages.error(request, message)
                return redirect('home')
            return view_func(request, *args, **kwargs)

        return _wrapped_view

    return decorator


photographer_required = role_required(User.ROLE_PHOTOGRAPHER)
studio_owner_required = role_required(User.ROLE_STUDIO_OWNER)
admin_required = role_required(User.ROLE_ADMIN)
