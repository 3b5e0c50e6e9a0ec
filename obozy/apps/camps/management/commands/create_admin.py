from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils.crypto import get_random_string

from obozy.apps.camps.models import PERMISSION_KEYS, Admin

USER_MODEL = get_user_model()


class Command(BaseCommand):
    help = "Create (or update) an admin account that can sign in to the panel"

    def add_arguments(self, parser):
        parser.add_argument("email")
        parser.add_argument(
            "--password",
            dest="password",
            help="Password for the admin, a random one is printed if omitted",
            default=None)
        parser.add_argument(
            "--role",
            dest="role",
            choices=[role for role, _ in Admin.ROLE_CHOICES],
            default=Admin.ADMIN)
        parser.add_argument(
            "--permission",
            dest="permissions",
            action="append",
            choices=PERMISSION_KEYS,
            default=[],
            help="Permission to grant, may be repeated")

    @transaction.atomic
    def handle(self, *args, **options):
        email = options["email"].strip().lower()
        if "@" not in email:
            raise CommandError(f"'{email}' is not an email address")
        password = options["password"] or get_random_string(12)

        user = USER_MODEL.objects.filter(email__iexact=email).first()
        if user is None:
            self.stdout.write(f"Creating user {email}")
            user = USER_MODEL.objects.create_user(email, email, password)
        else:
            self.stdout.write(f"Updating user {email}")
            user.set_password(password)
            user.save()

        Admin.objects.update_or_create(
            user=user,
            defaults={
                "role": options["role"],
                "permissions": {key: True for key in options["permissions"]},
            })

        self.stdout.write(f"{'Email'.ljust(30)} | {'Password'.ljust(12)} | Role")
        self.stdout.write(
            f"{email.ljust(30)} | {password.ljust(12)} | {options['role']}")
