from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model

User = get_user_model()


class Command(BaseCommand):
    help = "Creates the bootstrap admin account if it does not exist yet"

    def add_arguments(self, parser):
        parser.add_argument("--email", default="admin@school.edu")
        parser.add_argument("--password", default="admin123")

    def handle(self, *args, **options):
        email = options["email"].strip().lower()

        admin, created = User.objects.get_or_create(
            email=email,
            defaults={"username": email, "role": User.ROLE_ADMIN},
        )
        if not created:
            self.stdout.write(f"Admin account {email} already exists")
            return

        admin.set_password(options["password"])
        admin.save()

        self.stdout.write(self.style.SUCCESS(f"Default admin account created: {email}"))
        self.stdout.write(self.style.WARNING("Change this password before going to production."))
