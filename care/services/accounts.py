"""
Account registration and credential checks.

Passwords are hashed with Django's configured password hasher (salted,
iterated PBKDF2 by default) and never leave this module in clear.
"""
from __future__ import annotations

from typing import Optional

from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.models import update_last_login
from django.db import transaction

Account = get_user_model()


def register_account(*, name: str, email: str, password: str, role: Optional[str] = None) -> Account:
    """Insert a new account.

    A duplicate email surfaces as ``django.db.IntegrityError`` from the
    unique index; the caller decides how to report it.
    """
    with transaction.atomic():
        return Account.objects.create_user(email=email, password=password, name=name, role=role or None)


def verify_credentials(request, *, email: str, password: str) -> Optional[Account]:
    """Return the account for a matching email/password pair, else ``None``.

    An unknown email and a wrong password are indistinguishable here; the
    auth backend also runs the hasher when the email does not exist.
    """
    account = authenticate(request, email=email, password=password)
    if account is None:
        return None
    update_last_login(None, account)
    return account
