from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APITestCase

User = get_user_model()


class UserManagerTests(APITestCase):
    def test_create_user_defaults_to_active_employee(self):
        user = User.objects.create_user("Staff@Example.com", "pw", full_name="Ravi")
        self.assertEqual(user.email, "Staff@example.com")
        self.assertEqual(user.role, User.Role.EMPLOYEE)
        self.assertTrue(user.is_active)
        self.assertFalse(user.is_owner)

    def test_superuser_is_an_owner(self):
        admin = User.objects.create_superuser("boss@example.com", "pw", full_name="Meera")
        self.assertTrue(admin.is_staff and admin.is_superuser)
        self.assertTrue(admin.is_owner)

    def test_email_is_required(self):
        with self.assertRaises(ValueError):
            User.objects.create_user("", "pw")

    def test_active_owners(self):
        owner = User.objects.create_user("o@example.com", "pw", role="owner")
        User.objects.create_user("o2@example.com", "pw", role="owner", is_active=False)
        User.objects.create_user("e@example.com", "pw")
        self.assertEqual(list(User.objects.active_owners()), [owner])


class TokenTests(APITestCase):
    """
    Owners and employees log in with email + password and get a JWT pair.
    """

    def setUp(self):
        self.user = User.objects.create_user("staff@example.com", "some-strong-password-123", full_name="Ravi")

    def test_obtain_token_and_call_api(self):
        response = self.client.post("/api/token/", {
            "email": "staff@example.com", "password": "some-strong-password-123",
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("refresh", response.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        me = self.client.get("/api/v1/core/whoami/")
        self.assertEqual(me.data["email"], "staff@example.com")
        self.assertEqual(me.data["role"], "employee")

    def test_wrong_password_is_rejected(self):
        response = self.client.post("/api/token/", {
            "email": "staff@example.com", "password": "nope",
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_inactive_users_cannot_log_in(self):
        self.user.is_active = False
        self.user.save()
        response = self.client.post("/api/token/", {
            "email": "staff@example.com", "password": "some-strong-password-123",
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
