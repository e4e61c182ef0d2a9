# care/management/commands/ensure_demo_accounts.py
import os

from django.core.management.base import BaseCommand, CommandError

from care.models import Account

DEMO_SET = [
    ("admin@mediguard.local", "Admin", Account.ROLE_ADMIN),
    ("doctor@mediguard.local", "Dr. Demo", Account.ROLE_DOCTOR),
    ("patient@mediguard.local", "Demo Patient", Account.ROLE_PATIENT),
]


class Command(BaseCommand):
    help = "Ensure the demo admin/doctor/patient accounts exist with the given password (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--password", help="Password for every demo account (default: $DEMO_PASSWORD)")

    def handle(self, *args, **opts):
        password = opts.get("password") or os.getenv("DEMO_PASSWORD")
        if not password:
            raise CommandError("Provide --password or set DEMO_PASSWORD")

        for email, name, role in DEMO_SET:
            account = Account.objects.filter(email=email).first()
            if account is None:
                Account.objects.create_user(email=email, password=password, name=name, role=role)
                verb = "created"
            else:
                # reset password and role to the demo values
                account.set_password(password)
                account.role = role
                account.save(update_fields=["password", "role"])
                verb = "reset"
            self.stdout.write(self.style.SUCCESS(f"{verb}: {email} ({role})"))
        self.stdout.write(self.style.SUCCESS("All demo accounts ensured."))
