from rest_framework_simplejwt.tokens import AccessToken

from care.models import Account


def issue_access_token(account: Account) -> str:
    """Sign an access token carrying the account's id, email, role and name."""
    token = AccessToken.for_user(account)
    # for_user writes the id claim as a string; clients read it as a number
    token['id'] = account.id
    token['email'] = account.email
    token['role'] = account.role
    token['name'] = account.name
    return str(token)
