from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import Booking, Equipment, EquipmentLog, Notification, Room, Studio, StudioPhoto, User


@admin.register(User)
class CustomUserAdmin(BaseUserAdmin):
	list_display = ('username', 'email', 'name', 'role', 'phone_number', 'is_staff')
	list_filter = BaseUserAdmin.list_filter + ('role',)
	fieldsets = BaseUserAdmin.fieldsets + (
		('Marketplace', {'fields': ('role', 'name', 'phone_number', 'avatar')}),
	)
	add_fieldsets = BaseUserAdmin.add_fieldsets + (
		(
			'Marketplace',
			{
				'classes': ('wide',),
				'fields': ('role', 'name', 'phone_number'),
			},
		),
	)


class StudioPhotoInline(admin.TabularInline):
	model = StudioPhoto
	extra = 0


@admin.register(Studio)
class StudioAdmin(admin.ModelAdmin):
	list_display = ('name', 'owner', 'city', 'province', 'verification_status', 'created_at')
	list_filter = ('verification_status', 'province', 'city')
	search_fields = ('name', 'city', 'owner__username', 'owner__email')
	inlines = [StudioPhotoInline]


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
	list_display = ('name', 'studio', 'hourly_price', 'daily_price')
	search_fields = ('name', 'studio__name')


@admin.register(Equipment)
class EquipmentAdmin(admin.ModelAdmin):
	list_display = ('name', 'studio', 'equipment_type', 'rental_price', 'barcode_code', 'status')
	list_filter = ('status', 'equipment_type')
	search_fields = ('name', 'brand', 'barcode_code', 'serial_number')


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
	list_display = ('room', 'photographer', 'start_time', 'end_time', 'total_price', 'payment_status', 'booking_status')
	list_filter = ('booking_status', 'payment_status')
	filter_horizontal = ('equipment',)


admin.site.register(EquipmentLog)
admin.site.register(Notification)
