from datetime import date
from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase
from django.urls import reverse

from rest_framework.test import APITestCase, APIClient
from rest_framework import status

from activities.models import Activity
from activities.state_machine import transition


User = get_user_model()


class UserManagementTests(APITestCase):
    def setUp(self):
        self.client = APIClient()

        self.admin = User.objects.create_user(
            username="admin@example.com",
            email="admin@example.com",
            password="pass1234",
            role=User.ROLE_ADMIN,
        )
        self.educator = User.objects.create_user(
            username="educator@example.com",
            email="educator@example.com",
            password="pass1234",
            role=User.ROLE_EDUCATOR,
        )
        self.student = User.objects.create_user(
            username="student@example.com",
            email="student@example.com",
            password="pass1234",
            role=User.ROLE_STUDENT,
        )

        self.client.force_authenticate(user=self.admin)
        self.list_url = reverse("user-list")

    def detail_url(self, user_id):
        return reverse("user-detail", kwargs={"pk": user_id})

    def test_admin_lists_users(self):
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        emails = {u["email"] for u in response.data["users"]}
        self.assertEqual(
            emails,
            {"admin@example.com", "educator@example.com", "student@example.com"},
        )
        self.assertNotIn("password", response.data["users"][0])

    def test_admin_creates_user(self):
        payload = {
            "email": "New.Student@Example.com",
            "password": "secret123",
            "role": "student",
            "first_name": "New",
        }
        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["message"], "User created successfully")

        user = User.objects.get(email="new.student@example.com")
        self.assertEqual(user.role, User.ROLE_STUDENT)
        self.assertEqual(user.username, "new.student@example.com")
        self.assertTrue(user.check_password("secret123"))

    def test_duplicate_email_is_rejected(self):
        payload = {"email": "STUDENT@example.com", "password": "x", "role": "student"}
        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data["errors"]["email"][0]), "User already exists")

    def test_invalid_role_is_rejected(self):
        payload = {"email": "x@example.com", "password": "x", "role": "superuser"}
        response = self.client.post(self.list_url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_non_admin_cannot_manage_users(self):
        for user in (self.educator, self.student):
            self.client.force_authenticate(user=user)
            self.assertEqual(self.client.get(self.list_url).status_code, status.HTTP_403_FORBIDDEN)
            response = self.client.delete(self.detail_url(self.student.id))
            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_delete_student_removes_activities(self):
        Activity.objects.create(
            student=self.student,
            title="Quiz",
            description="Regional quiz",
            category=Activity.CATEGORY_ACADEMICS,
            date=date(2024, 1, 1),
        )

        response = self.client.delete(self.detail_url(self.student.id))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(User.objects.filter(id=self.student.id).exists())
        self.assertFalse(Activity.objects.filter(student_id=self.student.id).exists())

    def test_last_admin_cannot_be_deleted(self):
        response = self.client.delete(self.detail_url(self.admin.id))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Cannot delete the last admin user")
        self.assertTrue(User.objects.filter(id=self.admin.id).exists())

    def test_admin_can_be_deleted_when_another_exists(self):
        second = User.objects.create_user(
            username="admin2@example.com",
            email="admin2@example.com",
            password="pass1234",
            role=User.ROLE_ADMIN,
        )
        response = self.client.delete(self.detail_url(second.id))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_verifier_with_decisions_cannot_be_deleted(self):
        activity = Activity.objects.create(
            student=self.student,
            title="Quiz",
            description="Regional quiz",
            category=Activity.CATEGORY_ACADEMICS,
            date=date(2024, 1, 1),
        )
        transition(activity.id, Activity.STATUS_VERIFIED, self.educator)

        response = self.client.delete(self.detail_url(self.educator.id))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(User.objects.filter(id=self.educator.id).exists())


class EnsureAdminCommandTests(TestCase):
    def test_creates_admin_once(self):
        out = StringIO()
        call_command("ensure_admin", email="Boot@School.edu", password="bootpass", stdout=out)

        admin = User.objects.get(email="boot@school.edu")
        self.assertEqual(admin.role, User.ROLE_ADMIN)
        self.assertTrue(admin.check_password("bootpass"))
        self.assertIn("created", out.getvalue())

        out = StringIO()
        call_command("ensure_admin", email="boot@school.edu", password="other", stdout=out)

        self.assertEqual(User.objects.filter(email="boot@school.edu").count(), 1)
        admin.refresh_from_db()
        self.assertTrue(admin.check_password("bootpass"))
        self.assertIn("already exists", out.getvalue())


class DisplayNameTests(TestCase):
    def test_falls_back_to_name_then_email(self):
        user = User.objects.create_user(
            username="plain@example.com",
            email="plain@example.com",
            password="x",
        )
        self.assertEqual(user.display_name, "plain@example.com")

        user.first_name = "Ravi"
        user.last_name = "Kumar"
        self.assertEqual(user.display_name, "Ravi Kumar")
