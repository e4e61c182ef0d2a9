from care.models import Account, Appointment


def system_counts() -> dict:
    """Row counts over all accounts and appointments, at call time."""
    return {
        'users': {'count': Account.objects.count()},
        'appointments': {'count': Appointment.objects.count()},
    }
