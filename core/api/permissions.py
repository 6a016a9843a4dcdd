from rest_framework.permissions import BasePermission


class IsStudioOwner(BasePermission):
    message = "Only studio owner accounts can perform this action."

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_studio_owner)


class IsPhotographer(BasePermission):
    message = "Only photographer accounts can perform this action."

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_photographer)
