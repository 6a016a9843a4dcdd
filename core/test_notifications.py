from django.test import TestCase
from django.urls import reverse

from .models import Notification
from .services.notification import NotificationService
from .testing import MarketplaceFixtures


class NotificationServiceTest(MarketplaceFixtures, TestCase):
    def setUp(self):
        self.user = self.create_user('photo')
        self.service = NotificationService(self.user)

    def notify(self, user=None, title='Hello'):
        return NotificationService.notify(user or self.user, title=title, message='Body')

    def test_notify_defaults_to_system_type(self):
        notification = self.notify()
        self.assertEqual(notification.notification_type, Notification.TYPE_SYSTEM)
        self.assertFalse(notification.read)

    def test_notifications_are_newest_first_and_scoped(self):
        first = self.notify(title='First')
        second = self.notify(title='Second')
        self.notify(user=self.create_user('other'))
        self.assertEqual(list(self.service.notifications()), [second, first])

    def test_mark_read(self):
        notification = self.notify()
        self.service.mark_read(notification)
        notification.refresh_from_db()
        self.assertTrue(notification.read)
        self.assertEqual(self.service.unread_count(), 0)

    def test_cannot_mark_other_users_notification(self):
        notification = self.notify(user=self.create_user('other'))
        with self.assertRaises(PermissionError):
            self.service.mark_read(notification)

    def test_mark_all_read_returns_count(self):
        self.notify()
        self.notify()
        self.notify(user=self.create_user('other'))
        self.assertEqual(self.service.mark_all_read(), 2)
        self.assertEqual(self.service.mark_all_read(), 0)
        self.assertEqual(Notification.objects.filter(read=False).count(), 1)


class NotificationViewsTest(MarketplaceFixtures, TestCase):
    def setUp(self):
        self.user = self.create_owner()
        self.client.force_login(self.user)

    def test_list_shows_unread_count(self):
        NotificationService.notify(self.user, title='One', message='Body')
        response = self.client.get(reverse('notifications'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['unread_count'], 1)

    def test_mark_read_view(self):
        notification = NotificationService.notify(self.user, title='One', message='Body')
        response = self.client.post(reverse('notification_read', args=[notification.pk]))
        self.assertRedirects(response, reverse('notifications'))
        notification.refresh_from_db()
        self.assertTrue(notification.read)

    def test_mark_read_view_hides_other_users_notifications(self):
        notification = NotificationService.notify(self.create_user('other'), title='One', message='Body')
        response = self.client.post(reverse('notification_read', args=[notification.pk]))
        self.assertEqual(response.status_code, 404)

    def test_mark_all_read_view(self):
        NotificationService.notify(self.user, title='One', message='Body')
        response = self.client.post(reverse('notifications_read_all'))
        self.assertRedirects(response, reverse('notifications'))
        self.assertFalse(Notification.objects.filter(user=self.user, read=False).exists())

    def test_anonymous_redirected(self):
        self.client.logout()
        response = self.client.get(reverse('notifications'))
        self.assertEqual(response.status_code, 302)
        self.assertTrue(response.url.startswith(reverse('login')))


class ProfileViewTest(MarketplaceFixtures, TestCase):
    def setUp(self):
        self.user = self.create_user('photo')
        self.client.force_login(self.user)

    def test_update_profile(self):
        response = self.client.post(
            reverse('profile'),
            {'form_type': 'profile', 'name': 'Sara Ahmadi', 'phone_number': '09120000000'},
        )
        self.assertRedirects(response, reverse('profile'))
        self.user.refresh_from_db()
        self.assertEqual(self.user.name, 'Sara Ahmadi')
        self.assertEqual(self.user.phone_number, '09120000000')

    def test_update_password(self):
        response = self.client.post(
            reverse('profile'),
            {
                'form_type': 'password',
                'old_password': self.password,
                'new_password1': 'an0ther-Secret!',
                'new_password2': 'an0ther-Secret!',
            },
        )
        self.assertRedirects(response, reverse('profile'))
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('an0ther-Secret!'))

    def test_wrong_old_password(self):
        response = self.client.post(
            reverse('profile'),
            {
                'form_type': 'password',
                'old_password': 'wrong',
                'new_password1': 'an0ther-Secret!',
                'new_password2': 'an0ther-Secret!',
            },
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn('old_password', response.context['password_form'].errors)
