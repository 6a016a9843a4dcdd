from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.generics import ListAPIView, RetrieveAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from ..models import Equipment, Notification, Room, Studio
from ..services.booking import BookingError, BookingRequestService
from ..services.notification import NotificationService
from ..services.scanner import EquipmentScanService, ScanError
from .permissions import IsPhotographer, IsStudioOwner
from .serializers import (
    EquipmentSerializer,
    NotificationSerializer,
    QuoteRequestSerializer,
    QuoteSerializer,
    ScanRequestSerializer,
    UserSerializer,
)


def _first_error(errors) -> str:
    """Flatten a serializer error dict to its first message."""
    for messages in errors.values():
        if isinstance(messages, (list, tuple)) and messages:
            return str(messages[0])
        return str(messages)
    return "Invalid request."


class CurrentUserView(RetrieveAPIView):
    """Return the authenticated user's profile information."""

    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated]

    def get_object(self):
        return self.request.user


class NotificationListView(ListAPIView):
    """The authenticated user's notifications, newest first."""

    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return NotificationService(self.request.user).notifications()


class NotificationMarkReadView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        notification = get_object_or_404(Notification, pk=pk, user=request.user)
        NotificationService(request.user).mark_read(notification)
        return Response(NotificationSerializer(notification).data)


class NotificationMarkAllReadView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        updated = NotificationService(request.user).mark_all_read()
        return Response({"updated": updated})


class EquipmentScanView(APIView):
    """Check a piece of equipment out or in by its barcode."""

    permission_classes = [IsStudioOwner]

    def post(self, request):
        serializer = ScanRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": _first_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)
        service = EquipmentScanService(request.user)
        try:
            outcome = service.scan(serializer.validated_data["barcode"], serializer.validated_data["action"])
        except ScanError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(
            {
                "message": outcome.message,
                "equipment": EquipmentSerializer(outcome.equipment).data,
            }
        )


class RoomQuoteView(APIView):
    """Price a prospective booking without creating it."""

    permission_classes = [IsPhotographer]

    def post(self, request, pk):
        room = get_object_or_404(
            Room.objects.select_related("studio"),
            pk=pk,
            studio__verification_status=Studio.STATUS_APPROVED,
        )
        serializer = QuoteRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        equipment_ids = set(data["equipment"])
        equipment = list(Equipment.objects.filter(pk__in=equipment_ids))
        if len(equipment) != len(equipment_ids):
            return Response({"error": "Unknown equipment selected."}, status=status.HTTP_400_BAD_REQUEST)

        service = BookingRequestService(request.user)
        try:
            service.ensure_equipment_bookable(room, equipment)
            quote = service.build_quote(room, data["start_time"], data["end_time"], equipment)
        except BookingError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(QuoteSerializer(quote).data)
