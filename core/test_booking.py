from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse

from .models import Booking, Equipment, Notification, Studio, User
from .services.booking import (
    BookingError,
    BookingMutationService,
    BookingRequestService,
    PhotographerBookingsService,
)
from .testing import MarketplaceFixtures


class BookingRequestServiceTest(MarketplaceFixtures, TestCase):
    def setUp(self):
        self.owner = self.create_owner()
        self.photographer = self.create_user('photo')
        self.studio = self.create_studio(self.owner)
        self.room = self.create_room(self.studio)
        self.service = BookingRequestService(self.photographer)
        self.start = self.local_datetime(hour=10)

    def test_create_booking_prices_and_notifies(self):
        lens = self.create_equipment(self.studio, name='50mm Lens', rental_price='30.00')
        booking = self.service.create_booking(self.room, self.start, self.start + timedelta(hours=3), [lens])

        self.assertEqual(booking.total_price, Decimal('330.00'))
        self.assertEqual(booking.booking_status, Booking.STATUS_PENDING)
        self.assertEqual(booking.payment_status, Booking.PAYMENT_PENDING)
        self.assertEqual(list(booking.equipment.all()), [lens])
        self.assertTrue(Notification.objects.filter(user=self.photographer, title='Booking submitted').exists())
        self.assertTrue(Notification.objects.filter(user=self.owner, title='New booking request').exists())

    def test_full_day_booking_uses_daily_rate(self):
        booking = self.service.create_booking(self.room, self.start, self.start + timedelta(hours=9))
        self.assertEqual(booking.total_price, Decimal('600.00'))

    def test_overlapping_booking_rejected(self):
        self.create_booking(self.room, self.create_user('first'), self.start, self.start + timedelta(hours=2))
        with self.assertRaises(BookingError):
            self.service.create_booking(
                self.room, self.start + timedelta(hours=1), self.start + timedelta(hours=3)
            )
        self.assertEqual(Booking.objects.count(), 1)

    def test_adjacent_booking_allowed(self):
        self.create_booking(self.room, self.create_user('first'), self.start, self.start + timedelta(hours=2))
        booking = self.service.create_booking(
            self.room, self.start + timedelta(hours=2), self.start + timedelta(hours=4)
        )
        self.assertEqual(booking.booking_status, Booking.STATUS_PENDING)

    def test_rejected_and_cancelled_bookings_free_the_slot(self):
        other = self.create_user('first')
        self.create_booking(self.room, other, self.start, booking_status=Booking.STATUS_REJECTED)
        self.create_booking(self.room, other, self.start, booking_status=Booking.STATUS_CANCELLED)
        booking = self.service.create_booking(self.room, self.start, self.start + timedelta(hours=2))
        self.assertIsNotNone(booking.pk)

    def test_same_slot_in_another_room_allowed(self):
        other_room = self.create_room(self.studio, name='Loft')
        self.create_booking(other_room, self.create_user('first'), self.start)
        booking = self.service.create_booking(self.room, self.start, self.start + timedelta(hours=2))
        self.assertIsNotNone(booking.pk)

    def test_unapproved_studio_rejected(self):
        pending = self.create_studio(self.owner, name='Waiting', status=Studio.STATUS_PENDING)
        room = self.create_room(pending)
        with self.assertRaises(BookingError):
            self.service.create_booking(room, self.start, self.start + timedelta(hours=2))

    def test_foreign_equipment_rejected(self):
        foreign_studio = self.create_studio(self.create_owner('rival'), name='Rival')
        foreign = self.create_equipment(foreign_studio)
        with self.assertRaises(BookingError):
            self.service.create_booking(self.room, self.start, self.start + timedelta(hours=2), [foreign])
        self.assertFalse(Booking.objects.exists())

    def test_unavailable_equipment_rejected(self):
        damaged = self.create_equipment(self.studio, status=Equipment.STATUS_DAMAGED)
        with self.assertRaises(BookingError):
            self.service.create_booking(self.room, self.start, self.start + timedelta(hours=2), [damaged])

    def test_equipment_reserved_in_another_room_rejected(self):
        camera = self.create_equipment(self.studio)
        loft = self.create_room(self.studio, name='Loft')
        first = self.create_booking(loft, self.create_user('first'), self.start, self.start + timedelta(hours=2))
        first.equipment.add(camera)

        with self.assertRaisesMessage(BookingError, 'already reserved'):
            self.service.create_booking(
                self.room, self.start + timedelta(hours=1), self.start + timedelta(hours=3), [camera]
            )
        self.assertEqual(Booking.objects.count(), 1)

    def test_equipment_free_after_earlier_booking_ends(self):
        camera = self.create_equipment(self.studio)
        loft = self.create_room(self.studio, name='Loft')
        first = self.create_booking(loft, self.create_user('first'), self.start, self.start + timedelta(hours=2))
        first.equipment.add(camera)
        cancelled = self.create_booking(
            loft, self.create_user('second'), self.start + timedelta(hours=2), booking_status=Booking.STATUS_CANCELLED
        )
        cancelled.equipment.add(camera)

        booking = self.service.create_booking(
            self.room, self.start + timedelta(hours=2), self.start + timedelta(hours=4), [camera]
        )
        self.assertEqual(list(booking.equipment.all()), [camera])

    def test_end_before_start_rejected(self):
        with self.assertRaises(BookingError):
            self.service.create_booking(self.room, self.start, self.start - timedelta(hours=1))

    def test_available_equipment_lists_only_available_items(self):
        available = self.create_equipment(self.studio, name='Tripod')
        self.create_equipment(self.studio, name='Flash', status=Equipment.STATUS_RENTED)
        self.assertEqual(list(self.service.available_equipment(self.room)), [available])


class BookingMutationServiceTest(MarketplaceFixtures, TestCase):
    def setUp(self):
        self.owner = self.create_owner()
        self.photographer = self.create_user('photo')
        self.room = self.create_room(self.create_studio(self.owner))
        self.booking = self.create_booking(self.room, self.photographer)

    def test_cancel_pending_booking(self):
        BookingMutationService(self.photographer).cancel_booking(self.booking)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.booking_status, Booking.STATUS_CANCELLED)
        self.assertTrue(Notification.objects.filter(user=self.owner, title='Booking cancelled').exists())

    def test_cannot_cancel_completed_booking(self):
        self.booking.booking_status = Booking.STATUS_COMPLETED
        self.booking.save()
        with self.assertRaises(BookingError):
            BookingMutationService(self.photographer).cancel_booking(self.booking)

    def test_cannot_cancel_someone_elses_booking(self):
        with self.assertRaises(PermissionError):
            BookingMutationService(self.create_user('stranger')).cancel_booking(self.booking)


class PhotographerBookingsServiceTest(MarketplaceFixtures, TestCase):
    def test_status_counts(self):
        photographer = self.create_user('photo')
        room = self.create_room(self.create_studio(self.create_owner()))
        self.create_booking(room, photographer)
        self.create_booking(room, photographer, booking_status=Booking.STATUS_ACCEPTED)
        self.create_booking(room, self.create_user('someone_else'))

        service = PhotographerBookingsService(photographer)
        bookings = service.bookings()
        counts = service.status_counts(bookings)

        self.assertEqual(counts['all'], 2)
        self.assertEqual(counts[Booking.STATUS_PENDING], 1)
        self.assertEqual(counts[Booking.STATUS_ACCEPTED], 1)
        self.assertEqual(counts[Booking.STATUS_REJECTED], 0)
        self.assertEqual(bookings[0].studio, room.studio)


class BookingViewsTest(MarketplaceFixtures, TestCase):
    def setUp(self):
        self.owner = self.create_owner()
        self.photographer = self.create_user('photo')
        self.studio = self.create_studio(self.owner)
        self.room = self.create_room(self.studio)
        self.url = reverse('booking_create', args=[self.room.pk])
        self.day = (self.local_datetime(days_ahead=2)).date().isoformat()

    def post_data(self, **overrides):
        data = {'date': self.day, 'start_time': '09:00', 'end_time': '11:00'}
        data.update(overrides)
        return data

    def test_anonymous_user_redirected_to_login(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 302)
        self.assertTrue(response.url.startswith(reverse('login')))

    def test_owner_cannot_book(self):
        self.client.force_login(self.owner)
        response = self.client.get(self.url)
        self.assertRedirects(response, reverse('home'), fetch_redirect_response=False)

    def test_booking_form_renders(self):
        self.client.force_login(self.photographer)
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['room'], self.room)

    def test_room_of_pending_studio_not_found(self):
        pending_room = self.create_room(self.create_studio(self.owner, name='Later', status=Studio.STATUS_PENDING))
        self.client.force_login(self.photographer)
        response = self.client.get(reverse('booking_create', args=[pending_room.pk]))
        self.assertEqual(response.status_code, 404)

    def test_submit_booking(self):
        self.client.force_login(self.photographer)
        response = self.client.post(self.url, self.post_data())
        self.assertRedirects(response, reverse('my_bookings'))
        booking = Booking.objects.get()
        self.assertEqual(booking.photographer, self.photographer)
        self.assertEqual(booking.total_price, Decimal('200.00'))

    def test_preview_does_not_create_booking(self):
        self.client.force_login(self.photographer)
        response = self.client.post(self.url, self.post_data(preview='1'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['quote'].total_price, Decimal('200.00'))
        self.assertFalse(Booking.objects.exists())

    def test_invalid_times_rerender_form(self):
        self.client.force_login(self.photographer)
        response = self.client.post(self.url, self.post_data(start_time='12:00', end_time='11:00'))
        self.assertEqual(response.status_code, 200)
        self.assertIn('end_time', response.context['form'].errors)
        self.assertFalse(Booking.objects.exists())

    def test_overlap_reported_as_form_error(self):
        self.client.force_login(self.photographer)
        self.client.post(self.url, self.post_data())
        response = self.client.post(self.url, self.post_data(start_time='10:00', end_time='12:00'))
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.context['form'].non_field_errors())
        self.assertEqual(Booking.objects.count(), 1)

    def test_my_bookings_lists_own_bookings(self):
        mine = self.create_booking(self.room, self.photographer)
        self.create_booking(self.room, self.create_user('other_photo'), start=self.local_datetime(hour=15))
        self.client.force_login(self.photographer)
        response = self.client.get(reverse('my_bookings'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual([booking.pk for booking in response.context['bookings']], [mine.pk])
        self.assertContains(response, '(2 h)')

    def test_my_bookings_shows_fractional_duration(self):
        start = self.local_datetime(hour=10)
        booking = self.create_booking(self.room, self.photographer, start, start + timedelta(minutes=90))
        self.assertEqual(booking.duration_hours, Decimal('1.5'))
        self.client.force_login(self.photographer)
        response = self.client.get(reverse('my_bookings'))
        self.assertContains(response, '(1.50 h)')

    def test_cancel_view(self):
        booking = self.create_booking(self.room, self.photographer)
        self.client.force_login(self.photographer)
        response = self.client.post(reverse('booking_cancel', args=[booking.pk]))
        self.assertRedirects(response, reverse('my_bookings'))
        booking.refresh_from_db()
        self.assertEqual(booking.booking_status, Booking.STATUS_CANCELLED)

    def test_cannot_cancel_other_photographers_booking(self):
        booking = self.create_booking(self.room, self.create_user('other_photo'))
        self.client.force_login(self.photographer)
        response = self.client.post(reverse('booking_cancel', args=[booking.pk]))
        self.assertEqual(response.status_code, 404)

    def test_home_redirects_by_role(self):
        admin = self.create_user('boss', role=User.ROLE_ADMIN)
        for user, target in (
            (self.photographer, 'studio_list'),
            (self.owner, 'owner_dashboard'),
            (admin, 'admin_dashboard'),
        ):
            self.client.force_login(user)
            response = self.client.get(reverse('home'))
            self.assertRedirects(response, reverse(target), fetch_redirect_response=False)
