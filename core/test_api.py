from datetime import timedelta

from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from .models import Equipment, EquipmentLog, Notification, Studio
from .services.notification import NotificationService
from .testing import MarketplaceFixtures


class MarketplaceAPITestCase(MarketplaceFixtures, TestCase):
    def setUp(self):
        self.client = APIClient()
        self.owner = self.create_owner()
        self.photographer = self.create_user('photo')
        self.studio = self.create_studio(self.owner)
        self.room = self.create_room(self.studio)


class CurrentUserAPITest(MarketplaceAPITestCase):
    def test_me(self):
        self.client.force_authenticate(self.photographer)
        response = self.client.get(reverse('auth_me'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['username'], 'photo')
        self.assertEqual(response.data['role'], 'photographer')
        self.assertIsNone(response.data['avatar_url'])

    def test_me_requires_authentication(self):
        response = self.client.get(reverse('auth_me'))
        self.assertEqual(response.status_code, 403)


class NotificationAPITest(MarketplaceAPITestCase):
    def setUp(self):
        super().setUp()
        self.client.force_authenticate(self.owner)
        self.notification = NotificationService.notify(self.owner, title='Ping', message='Body')
        NotificationService.notify(self.photographer, title='Not yours', message='Body')

    def test_list(self):
        response = self.client.get(reverse('api_notifications'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual([item['title'] for item in response.data], ['Ping'])

    def test_mark_read(self):
        response = self.client.post(reverse('api_notification_read', args=[self.notification.pk]))
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data['read'])

    def test_cannot_mark_foreign_notification(self):
        foreign = Notification.objects.get(user=self.photographer)
        response = self.client.post(reverse('api_notification_read', args=[foreign.pk]))
        self.assertEqual(response.status_code, 404)

    def test_mark_all_read(self):
        response = self.client.post(reverse('api_notifications_read_all'))
        self.assertEqual(response.data, {'updated': 1})


class EquipmentScanAPITest(MarketplaceAPITestCase):
    def setUp(self):
        super().setUp()
        self.item = self.create_equipment(self.studio)
        self.url = reverse('api_equipment_scan')

    def test_scan_out(self):
        self.client.force_authenticate(self.owner)
        response = self.client.post(self.url, {'barcode': self.item.barcode_code, 'action': 'scan_out'}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Equipment checked out successfully.')
        self.assertEqual(response.data['equipment']['status'], Equipment.STATUS_RENTED)
        self.assertEqual(response.data['equipment']['studio_name'], self.studio.name)
        self.assertEqual(EquipmentLog.objects.count(), 1)

    def test_scan_in_when_not_rented(self):
        self.client.force_authenticate(self.owner)
        response = self.client.post(self.url, {'barcode': self.item.barcode_code, 'action': 'scan_in'}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {'error': 'This equipment is not currently rented.'})

    def test_blank_barcode(self):
        self.client.force_authenticate(self.owner)
        response = self.client.post(self.url, {'barcode': '', 'action': 'scan_out'}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'Please enter a barcode.')

    def test_invalid_action(self):
        self.client.force_authenticate(self.owner)
        response = self.client.post(self.url, {'barcode': self.item.barcode_code, 'action': 'lost'}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {'error': 'Unknown scan action.'})

    def test_missing_barcode(self):
        self.client.force_authenticate(self.owner)
        response = self.client.post(self.url, {'action': 'scan_out'}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {'error': 'Please enter a barcode.'})
        self.item.refresh_from_db()
        self.assertEqual(self.item.status, Equipment.STATUS_AVAILABLE)

    def test_photographer_forbidden(self):
        self.client.force_authenticate(self.photographer)
        response = self.client.post(self.url, {'barcode': self.item.barcode_code, 'action': 'scan_out'}, format='json')
        self.assertEqual(response.status_code, 403)

    def test_anonymous_forbidden(self):
        response = self.client.post(self.url, {'barcode': self.item.barcode_code, 'action': 'scan_out'}, format='json')
        self.assertEqual(response.status_code, 403)


class RoomQuoteAPITest(MarketplaceAPITestCase):
    def setUp(self):
        super().setUp()
        self.start = self.local_datetime(hour=9)
        self.url = reverse('api_room_quote', args=[self.room.pk])
        self.client.force_authenticate(self.photographer)

    def payload(self, hours, equipment=()):
        return {
            'start_time': self.start.isoformat(),
            'end_time': (self.start + timedelta(hours=hours)).isoformat(),
            'equipment': list(equipment),
        }

    def test_hourly_quote_with_equipment(self):
        lens = self.create_equipment(self.studio, rental_price='35.50')
        response = self.client.post(self.url, self.payload(2, [lens.pk]), format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['room_cost'], '200.00')
        self.assertEqual(response.data['equipment_cost'], '35.50')
        self.assertEqual(response.data['total_price'], '235.50')
        self.assertFalse(response.data['daily_rate_applied'])

    def test_eight_hours_uses_daily_rate(self):
        response = self.client.post(self.url, self.payload(8), format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['total_price'], '600.00')
        self.assertTrue(response.data['daily_rate_applied'])

    def test_end_before_start(self):
        response = self.client.post(self.url, self.payload(-1), format='json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('end_time', response.data)

    def test_range_longer_than_limit_rejected(self):
        response = self.client.post(self.url, self.payload(1_000_000), format='json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('end_time', response.data)

    def test_range_at_limit_is_priced(self):
        with self.settings(STUDIOHUB_MAX_QUOTE_DAYS=31):
            response = self.client.post(self.url, self.payload(31 * 24), format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['hours'], '744.00')
        self.assertEqual(response.data['total_price'], '600.00')

    def test_unknown_equipment(self):
        response = self.client.post(self.url, self.payload(2, [9999]), format='json')
        self.assertEqual(response.status_code, 400)

    def test_foreign_equipment(self):
        rival_studio = self.create_studio(self.create_owner('rival'), name='Rival')
        foreign = self.create_equipment(rival_studio)
        response = self.client.post(self.url, self.payload(2, [foreign.pk]), format='json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('error', response.data)

    def test_pending_studio_room_not_found(self):
        pending_room = self.create_room(self.create_studio(self.owner, name='Later', status=Studio.STATUS_PENDING))
        response = self.client.post(reverse('api_room_quote', args=[pending_room.pk]), self.payload(2), format='json')
        self.assertEqual(response.status_code, 404)

    def test_owner_forbidden(self):
        self.client.force_authenticate(self.owner)
        response = self.client.post(self.url, self.payload(2), format='json')
        self.assertEqual(response.status_code, 403)
