from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from commerce.models import Order
from notificationsapp.engine import scan_lock
from notificationsapp.models import Notification, NotificationPolicy
from notificationsapp.triggers import default_triggers

User = get_user_model()

NOTIFICATIONS_URL = "/api/v1/notifications/"
POLICY_URL = "/api/v1/policies/"


class NotificationAPITestBase(APITestCase):
    def setUp(self):
        cache.clear()
        self.owner = User.objects.create_user("owner@example.com", "pw", full_name="Meera", role="owner")
        self.employee = User.objects.create_user("staff@example.com", "pw", full_name="Ravi")
        self.client.force_authenticate(self.employee)

    def notify(self, user, title="Hello", **kw):
        return Notification.objects.create(user=user, title=title, message=kw.pop("message", "body"), **kw)


class InboxTests(NotificationAPITestBase):
    def test_requires_authentication(self):
        self.client.force_authenticate(None)
        response = self.client.get(NOTIFICATIONS_URL)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_lists_only_own_notifications_newest_first(self):
        now = timezone.now()
        self.notify(self.employee, "old", created_at=now - timedelta(hours=2))
        self.notify(self.employee, "new", created_at=now)
        self.notify(self.owner, "not mine")

        response = self.client.get(NOTIFICATIONS_URL)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([n["title"] for n in response.data], ["new", "old"])

    def test_filters_by_read_flag_and_limits(self):
        for i in range(3):
            self.notify(self.employee, f"unread {i}")
        self.notify(self.employee, "done", read=True)

        unread = self.client.get(NOTIFICATIONS_URL, {"read": "false"})
        self.assertEqual(len(unread.data), 3)
        read = self.client.get(NOTIFICATIONS_URL, {"read": "true"})
        self.assertEqual([n["title"] for n in read.data], ["done"])
        limited = self.client.get(NOTIFICATIONS_URL, {"limit": 2})
        self.assertEqual(len(limited.data), 2)

    def test_default_limit_is_fifty(self):
        Notification.objects.bulk_create(
            Notification(user=self.employee, title=f"n{i}", message="m") for i in range(55)
        )
        response = self.client.get(NOTIFICATIONS_URL)
        self.assertEqual(len(response.data), 50)

    def test_unread_count(self):
        self.notify(self.employee)
        self.notify(self.employee, read=True)
        response = self.client.get(f"{NOTIFICATIONS_URL}unread-count/")
        self.assertEqual(response.data, {"count": 1})

    def test_mark_one_read(self):
        n = self.notify(self.employee)
        response = self.client.patch(f"{NOTIFICATIONS_URL}{n.id}/read/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["read"])
        n.refresh_from_db()
        self.assertTrue(n.read)

    def test_cannot_touch_someone_elses_notification(self):
        theirs = self.notify(self.owner)
        self.assertEqual(self.client.patch(f"{NOTIFICATIONS_URL}{theirs.id}/read/").status_code, 404)
        self.assertEqual(self.client.delete(f"{NOTIFICATIONS_URL}{theirs.id}/").status_code, 404)
        self.assertTrue(Notification.objects.filter(pk=theirs.pk).exists())

    def test_mark_all_read(self):
        self.notify(self.employee)
        self.notify(self.employee)
        other = self.notify(self.owner)
        response = self.client.patch(f"{NOTIFICATIONS_URL}read-all/")
        self.assertEqual(response.data["updated"], 2)
        self.assertFalse(Notification.objects.filter(user=self.employee, read=False).exists())
        other.refresh_from_db()
        self.assertFalse(other.read)

    def test_delete_own(self):
        n = self.notify(self.employee)
        response = self.client.delete(f"{NOTIFICATIONS_URL}{n.id}/")
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Notification.objects.exists())


class ManualNotificationTests(NotificationAPITestBase):
    url = f"{NOTIFICATIONS_URL}manual/"

    def test_owner_sends_to_everyone_by_default(self):
        self.client.force_authenticate(self.owner)
        response = self.client.post(self.url, {"title": "Holiday", "message": "Closed on Friday"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["count"], 2)
        self.assertEqual(set(Notification.objects.values_list("type", flat=True)), {"info"})

    def test_explicit_recipients_and_type(self):
        self.client.force_authenticate(self.owner)
        response = self.client.post(self.url, {
            "title": "Van booked", "message": "Pickup at 9", "type": "warning",
            "recipients": [str(self.employee.id)],
        }, format="json")
        self.assertEqual(response.data["count"], 1)
        n = Notification.objects.get()
        self.assertEqual((n.user_id, n.type, n.trigger_id), (self.employee.id, "warning", None))

    def test_title_and_message_required(self):
        self.client.force_authenticate(self.owner)
        response = self.client.post(self.url, {"title": "x"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("message", response.data)

    def test_employees_cannot_send(self):
        response = self.client.post(self.url, {"title": "x", "message": "y"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class ScanNowEndpointTests(NotificationAPITestBase):
    url = f"{NOTIFICATIONS_URL}test-triggers/"

    def test_owner_runs_a_scan(self):
        NotificationPolicy.objects.create(owner=self.owner, triggers=default_triggers())
        Order.objects.create(
            customer_name="Asha", address="12 MG Road", mobile_no="98", item="Sofa", quantity=1,
            order_date=timezone.localdate(), delivery_date=timezone.localdate() + timedelta(days=10),
            total_amount=Decimal("75000"),
        )
        self.client.force_authenticate(self.owner)
        response = self.client.post(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["report"]["created"], 2)
        self.assertEqual(Notification.objects.filter(trigger_id="highValueOrder").count(), 2)

    def test_reports_conflict_while_another_scan_runs(self):
        NotificationPolicy.objects.create(owner=self.owner, triggers=default_triggers())
        self.client.force_authenticate(self.owner)
        with scan_lock() as acquired:
            self.assertTrue(acquired)
            response = self.client.post(self.url)
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertTrue(response.data["report"]["skipped"])
        self.assertNotIn("message", response.data)

    def test_employees_cannot_run_scans(self):
        self.assertEqual(self.client.post(self.url).status_code, status.HTTP_403_FORBIDDEN)


class PolicyTests(NotificationAPITestBase):
    def valid_trigger(self, **kw):
        data = {
            "id": "bigQty", "name": "Big quantity", "field": "quantity", "operator": ">=",
            "threshold": 50, "title_template": "Big order", "message_template": "{quantity} units",
        }
        data.update(kw)
        return data

    def test_owner_gets_default_policy_on_first_read(self):
        self.client.force_authenticate(self.owner)
        response = self.client.get(POLICY_URL)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["triggers"]), 6)
        self.assertEqual(NotificationPolicy.objects.count(), 1)

    def test_employee_reads_the_owners_policy(self):
        response = self.client.get(POLICY_URL)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["owner_id"], str(self.owner.id))

    def test_employee_without_owner_gets_404(self):
        self.owner.is_active = False
        self.owner.save()
        self.assertEqual(self.client.get(POLICY_URL).status_code, status.HTTP_404_NOT_FOUND)

    def test_owner_replaces_triggers(self):
        self.client.force_authenticate(self.owner)
        response = self.client.put(POLICY_URL, {"triggers": [self.valid_trigger(operator="==")]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        [stored] = NotificationPolicy.objects.get(owner=self.owner).triggers
        self.assertEqual(stored["threshold"], 50)
        self.assertEqual(stored["recipients"], ["all"])
        self.assertEqual(stored["operator"], "==")

    def test_unknown_field_is_accepted(self):
        self.client.force_authenticate(self.owner)
        response = self.client.put(POLICY_URL, {"triggers": [self.valid_trigger(field="rating")]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_rejects_bad_operator_and_duplicate_ids(self):
        self.client.force_authenticate(self.owner)
        bad_op = self.client.put(POLICY_URL, {"triggers": [self.valid_trigger(operator="~=")]}, format="json")
        self.assertEqual(bad_op.status_code, status.HTTP_400_BAD_REQUEST)
        dupes = self.client.put(POLICY_URL, {"triggers": [self.valid_trigger(), self.valid_trigger()]}, format="json")
        self.assertEqual(dupes.status_code, status.HTTP_400_BAD_REQUEST)

    def test_employee_cannot_write(self):
        response = self.client.put(POLICY_URL, {"triggers": []}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
