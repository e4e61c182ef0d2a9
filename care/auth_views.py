"""
Registration and login endpoints.

Both routes are public and skip token authentication entirely, so a
stale ``Authorization`` header left by the client cannot block a fresh
login.  Login failures are reported with one undifferentiated message.
"""
from __future__ import annotations

from django.db import IntegrityError
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from care.serializers.auth import LoginSerializer, RegisterSerializer
from care.services.accounts import register_account, verify_credentials
from care.services.audit import log_action
from care.services.tokens import issue_access_token

INVALID_CREDENTIALS = 'Invalid credentials'


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def register_view(request):
    """
    Create an account.  Accepts ``name``, ``email``, ``password`` and an
    optional ``role``; answers ``201 {"id": ...}``.
    """
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data

    try:
        account = register_account(
            name=vd['name'],
            email=vd['email'],
            password=vd['password'],
            role=vd.get('role'),
        )
    except IntegrityError as exc:
        log_action(user=None, action='register', object_type='account',
                   detail={'result': 'fail', 'ip': request.META.get('REMOTE_ADDR')})
        return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)

    log_action(user=account, action='register', object_type='account', object_id=account.id,
               detail={'result': 'ok', 'role': account.role})
    return Response({'id': account.id}, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def login_view(request):
    """
    Exchange email and password for a bearer token.

    Returns ``{"token": ..., "user": {id, name, email, role}}``.
    """
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data

    account = verify_credentials(request, email=vd['email'], password=vd['password'])
    if account is None:
        log_action(user=None, action='login', object_type='account',
                   detail={'result': 'fail', 'ip': request.META.get('REMOTE_ADDR')})
        return Response({'error': INVALID_CREDENTIALS}, status=status.HTTP_401_UNAUTHORIZED)

    log_action(user=account, action='login', object_type='account', object_id=account.id,
               detail={'result': 'ok', 'ip': request.META.get('REMOTE_ADDR')})
    return Response({
        'token': issue_access_token(account),
        'user': account.public_dict(),
    }, status=status.HTTP_200_OK)
