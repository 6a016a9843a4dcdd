from datetime import timedelta

from django.conf import settings
from rest_framework import serializers

from ..models import Equipment, EquipmentLog, Notification, User


class UserSerializer(serializers.ModelSerializer):
    """Serializer exposing the current user's public profile information."""

    avatar_url = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = (
            'id',
            'username',
            'email',
            'name',
            'role',
            'phone_number',
            'avatar_url',
        )
        read_only_fields = fields

    def get_avatar_url(self, obj):
        if not obj.avatar:
            return None
        request = self.context.get('request')
        avatar_url = obj.avatar.url
        if request is None:
            return avatar_url
        return request.build_absolute_uri(avatar_url)


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = ('id', 'title', 'message', 'notification_type', 'read', 'created_at')
        read_only_fields = fields


class EquipmentSerializer(serializers.ModelSerializer):
    studio_name = serializers.CharField(source='studio.name', read_only=True)

    class Meta:
        model = Equipment
        fields = (
            'id',
            'studio',
            'studio_name',
            'name',
            'brand',
            'equipment_type',
            'rental_price',
            'condition',
            'serial_number',
            'barcode_code',
            'status',
        )
        read_only_fields = fields


class ScanRequestSerializer(serializers.Serializer):
    barcode = serializers.CharField(
        max_length=64,
        allow_blank=True,
        error_messages={"required": "Please enter a barcode.", "null": "Please enter a barcode."},
    )
    action = serializers.ChoiceField(
        choices=EquipmentLog.ACTION_CHOICES,
        error_messages={"invalid_choice": "Unknown scan action.", "required": "Unknown scan action."},
    )


class QuoteRequestSerializer(serializers.Serializer):
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
    equipment = serializers.ListField(child=serializers.IntegerField(), required=False, default=list)

    def validate(self, attrs):
        if attrs['end_time'] <= attrs['start_time']:
            raise serializers.ValidationError({'end_time': 'End time must be after the start time.'})
        if attrs['end_time'] - attrs['start_time'] > timedelta(days=settings.STUDIOHUB_MAX_QUOTE_DAYS):
            raise serializers.ValidationError(
                {'end_time': f'Quotes cover at most {settings.STUDIOHUB_MAX_QUOTE_DAYS} days.'}
            )
        return attrs


class QuoteSerializer(serializers.Serializer):
    hours = serializers.DecimalField(max_digits=10, decimal_places=2)
    room_cost = serializers.DecimalField(max_digits=12, decimal_places=2)
    equipment_cost = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    daily_rate_applied = serializers.BooleanField()
