"""
Database models for the MediGuard backend.

Four tables make up the store: accounts (``users``), appointments,
medications and health logs.  Table and column names match the layout
the SPA was written against, so rows serialise to the JSON it expects
without renaming.
"""
from __future__ import annotations

from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.db import models


class AccountManager(BaseUserManager):
    """Creates accounts keyed by email, with a hashed password."""

    def create_user(self, email: str, password: str | None = None, *, name: str = '', role: str | None = None, **extra):
        if not email:
            raise ValueError('email is required')
        account = self.model(email=email, name=name, role=role or Account.ROLE_PATIENT, **extra)
        account.set_password(password)
        account.save(using=self._db)
        return account


class Account(AbstractBaseUser):
    """A registered user with credentials and a role.

    Roles mirror the front-end: 'patient', 'doctor' and 'admin'.  The role
    is stored as given at registration; only 'admin' unlocks anything
    server side.
    """
    ROLE_PATIENT = 'patient'
    ROLE_DOCTOR = 'doctor'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_PATIENT, 'Patient'),
        (ROLE_DOCTOR, 'Doctor'),
        (ROLE_ADMIN, 'Administrator'),
    ]

    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=255, unique=True)
    role = models.TextField(choices=ROLE_CHOICES, default=ROLE_PATIENT)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = AccountManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        db_table = 'users'

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"

    def public_dict(self) -> dict:
        """Projection safe to send to clients (never includes the hash)."""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
        }


class Appointment(models.Model):
    """A booked visit, owned by the account that created it."""
    STATUS_CHOICES = [
        ('scheduled', 'Scheduled'),
        ('completed', 'Completed'),
        ('cancelled', 'Cancelled'),
    ]
    patient = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='appointments')
    doctor_name = models.CharField(max_length=255)
    specialty = models.CharField(max_length=255)
    # Stored verbatim as sent by the client, e.g. '2024-05-01' and '10:00'
    date = models.CharField(max_length=32)
    time = models.CharField(max_length=32)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='scheduled', db_index=True)

    class Meta:
        db_table = 'appointments'
        ordering = ['id']

    def __str__(self) -> str:
        return f"{self.doctor_name} on {self.date} {self.time} ({self.status})"


class Medication(models.Model):
    """A medication schedule entry, owned by one account."""
    user = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='medications')
    name = models.CharField(max_length=255)
    dosage = models.CharField(max_length=255)
    frequency = models.CharField(max_length=255)
    # next dose
    time = models.CharField(max_length=32)

    class Meta:
        db_table = 'medications'
        ordering = ['id']

    def __str__(self) -> str:
        return f"{self.name} {self.dosage}"


class HealthLog(models.Model):
    """A vital-sign style reading.  Part of the schema; no route uses it yet."""
    user = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='health_logs')
    type = models.CharField(max_length=64, blank=True)
    value = models.CharField(max_length=64, blank=True)
    unit = models.CharField(max_length=32, blank=True)
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'health_logs'

    def __str__(self) -> str:
        return f"{self.type}={self.value}{self.unit}"
