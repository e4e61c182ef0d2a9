"""
Appointment and medication endpoints.

Every query is scoped to the caller: lists filter on the owner column
and creates force the owner to the token identity, whatever the body
says.  There are no update or delete routes.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Appointment, Medication
from ..serializers.records import (
    AppointmentCreateSerializer,
    AppointmentSerializer,
    MedicationCreateSerializer,
    MedicationSerializer,
)
from ..services.audit import log_action


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def appointments(request):
    user = request.user
    if request.method == 'GET':
        qs = Appointment.objects.filter(patient_id=user.id).order_by('id')
        return Response(AppointmentSerializer(qs, many=True).data)
    # POST
    s = AppointmentCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    appt = Appointment.objects.create(patient_id=user.id, **s.validated_data)
    log_action(user=user, action='appointment_create', object_type='appointment', object_id=appt.id,
               detail={'specialty': appt.specialty})
    return Response({'id': appt.id}, status=status.HTTP_201_CREATED)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def medications(request):
    user = request.user
    if request.method == 'GET':
        qs = Medication.objects.filter(user_id=user.id).order_by('id')
        return Response(MedicationSerializer(qs, many=True).data)
    # POST
    s = MedicationCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    med = Medication.objects.create(user_id=user.id, **s.validated_data)
    log_action(user=user, action='medication_create', object_type='medication', object_id=med.id)
    return Response({'id': med.id}, status=status.HTTP_201_CREATED)
