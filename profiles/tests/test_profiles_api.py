from django.contrib.auth import get_user_model
from django.urls import reverse

from rest_framework.test import APITestCase, APIClient
from rest_framework import status

from profiles.models import StudentProfile


User = get_user_model()


class StudentProfileAPITests(APITestCase):
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
        self.new_student = User.objects.create_user(
            username="fresh@example.com",
            email="fresh@example.com",
            password="pass1234",
            role=User.ROLE_STUDENT,
        )

        self.profile = StudentProfile.objects.create(
            user=self.student,
            full_name="Kiran Shah",
            department="ECE",
            semester=5,
            section="A",
            student_id="ECE-2022-014",
        )

        self.list_url = reverse("profile-list-create")

    def detail_url(self, user_id):
        return reverse("profile-detail", kwargs={"user_id": user_id})

    # ---- Own profile ----

    def test_student_reads_own_profile(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.get(reverse("profile-me"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["student_id"], "ECE-2022-014")
        self.assertEqual(response.data["user_id"], self.student.id)
        self.assertEqual(response.data["email"], "student@example.com")

    def test_student_without_profile(self):
        self.client.force_authenticate(user=self.new_student)
        response = self.client.get(reverse("profile-me"))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "Profile not found. Please contact administrator.")

    # ---- Create ----

    def test_admin_creates_profile(self):
        self.client.force_authenticate(user=self.admin)
        payload = {
            "user_id": self.new_student.id,
            "full_name": "Nisha Pillai",
            "department": "CSE",
            "student_id": "CSE-2023-101",
            "semester": 3,
        }

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["message"], "Student profile created successfully")
        profile = StudentProfile.objects.get(user=self.new_student)
        self.assertEqual(profile.department, "CSE")
        self.assertFalse(profile.profile_completed)

    def test_create_with_missing_fields(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(self.list_url, {"full_name": "Someone"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data["error"],
            "Missing required fields: user_id, department, student_id",
        )

    def test_create_duplicate_profile_or_student_id(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(self.list_url, {
            "user_id": self.student.id,
            "full_name": "Again",
            "department": "ECE",
            "student_id": "ECE-NEW",
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post(self.list_url, {
            "user_id": self.new_student.id,
            "full_name": "Nisha Pillai",
            "department": "CSE",
            "student_id": "ECE-2022-014",
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data["errors"]["student_id"][0]), "Student ID already exists")

    def test_only_admin_creates_or_lists(self):
        for user in (self.educator, self.student):
            self.client.force_authenticate(user=user)
            self.assertEqual(self.client.get(self.list_url).status_code, status.HTTP_403_FORBIDDEN)

    # ---- List ----

    def test_list_with_filters_and_pagination(self):
        other = User.objects.create_user(
            username="b@example.com", email="b@example.com", password="x"
        )
        StudentProfile.objects.create(
            user=other,
            full_name="Arjun Das",
            department="CSE",
            semester=5,
            section="A",
            student_id="CSE-2022-002",
        )
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(self.list_url, {"department": "ECE"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p["student_id"] for p in response.data["profiles"]], ["ECE-2022-014"])

        response = self.client.get(self.list_url, {"semester": 5, "limit": 1})
        self.assertEqual(len(response.data["profiles"]), 1)
        self.assertEqual(response.data["profiles"][0]["full_name"], "Arjun Das")
        self.assertEqual(response.data["pagination"], {"page": 1, "limit": 1, "has_more": True})

        response = self.client.get(self.list_url, {"semester": 5, "limit": 1, "page": 2})
        self.assertEqual(response.data["profiles"][0]["full_name"], "Kiran Shah")

    # ---- Detail / update ----

    def test_educator_reads_profile(self):
        self.client.force_authenticate(user=self.educator)
        response = self.client.get(self.detail_url(self.student.id))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_student_cannot_read_by_id(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.get(self.detail_url(self.student.id))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_student_updates_personal_fields_only(self):
        self.client.force_authenticate(user=self.student)
        payload = {
            "primary_phone": "9876543210",
            "emergency_contact_name": "Parent",
            "emergency_contact_phone": "9123456780",
            "cgpa": "9.99",
            "department": "MECH",
        }

        response = self.client.put(self.detail_url(self.student.id), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.profile.refresh_from_db()
        self.assertEqual(self.profile.primary_phone, "9876543210")
        self.assertEqual(self.profile.department, "ECE")
        self.assertIsNone(self.profile.cgpa)
        self.assertTrue(self.profile.profile_completed)

    def test_student_update_with_only_restricted_fields(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.put(self.detail_url(self.student.id), {"cgpa": "9.5"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "No valid fields to update")

    def test_student_cannot_update_someone_else(self):
        self.client.force_authenticate(user=self.new_student)
        response = self.client.put(
            self.detail_url(self.student.id), {"primary_phone": "1"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_updates_academic_fields(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.put(
            self.detail_url(self.student.id), {"cgpa": "8.75", "semester": 6}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.profile.refresh_from_db()
        self.assertEqual(str(self.profile.cgpa), "8.75")
        self.assertEqual(self.profile.semester, 6)

    def test_admin_deletes_profile(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.delete(self.detail_url(self.student.id))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(StudentProfile.objects.filter(user=self.student).exists())
        self.assertTrue(User.objects.filter(id=self.student.id).exists())

    def test_delete_missing_profile(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.delete(self.detail_url(self.new_student.id))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    # ---- Bulk import ----

    def test_bulk_import_reports_each_row(self):
        third = User.objects.create_user(
            username="third@example.com", email="third@example.com", password="x"
        )
        self.client.force_authenticate(user=self.admin)
        payload = {
            "profiles": [
                {
                    "user_id": self.new_student.id,
                    "full_name": "Nisha Pillai",
                    "department": "CSE",
                    "student_id": "CSE-2023-101",
                },
                # Duplicate roll number
                {
                    "user_id": third.id,
                    "full_name": "Third",
                    "department": "CSE",
                    "student_id": "ECE-2022-014",
                },
                {"user_id": third.id, "full_name": "No department"},
            ],
        }

        response = self.client.post(reverse("profile-bulk-import"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["message"], "Bulk import completed: 1 successful, 2 failed")
        self.assertEqual(len(response.data["results"]["successful"]), 1)
        self.assertEqual(len(response.data["results"]["failed"]), 2)
        self.assertTrue(StudentProfile.objects.filter(user=self.new_student).exists())
        self.assertFalse(StudentProfile.objects.filter(user=third).exists())

    def test_bulk_import_requires_a_list(self):
        self.client.force_authenticate(user=self.admin)
        for payload in ({"profiles": []}, {"profiles": "nope"}, {}):
            response = self.client.post(reverse("profile-bulk-import"), payload, format="json")
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(response.data["error"], "Invalid profiles data. Expected an array.")

    def test_bulk_import_with_list_body(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(reverse("profile-bulk-import"), [1, 2], format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Invalid profiles data. Expected an array.")

    # ---- Malformed bodies and filters ----

    def test_create_with_non_object_body(self):
        self.client.force_authenticate(user=self.admin)
        for body in ([1, 2], "profile", 5):
            response = self.client.post(self.list_url, body, format="json")
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, body)
            self.assertEqual(response.data["error"], "Invalid request body. Expected a JSON object.")

    def test_update_with_non_object_body(self):
        for user in (self.student, self.admin):
            self.client.force_authenticate(user=user)
            response = self.client.put(self.detail_url(self.student.id), [1, 2], format="json")
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(response.data["error"], "Invalid request body. Expected a JSON object.")

    def test_non_numeric_semester_filter_is_ignored(self):
        other = User.objects.create_user(
            username="c@example.com", email="c@example.com", password="x"
        )
        StudentProfile.objects.create(
            user=other,
            full_name="Bala Menon",
            department="ECE",
            student_id="ECE-2022-020",
        )
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(self.list_url, {"semester": "abc"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [p["student_id"] for p in response.data["profiles"]],
            ["ECE-2022-020", "ECE-2022-014"],
        )

    def test_educator_cannot_edit_own_profile(self):
        StudentProfile.objects.create(
            user=self.educator,
            full_name="Educator Profile",
            department="ECE",
            student_id="EDU-001",
        )
        self.client.force_authenticate(user=self.educator)

        response = self.client.put(
            self.detail_url(self.educator.id),
            {"cgpa": "9.90", "student_id": "EDU-999"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        profile = StudentProfile.objects.get(user=self.educator)
        self.assertEqual(profile.student_id, "EDU-001")
        self.assertIsNone(profile.cgpa)
