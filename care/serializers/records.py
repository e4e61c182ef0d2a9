from rest_framework import serializers

from care.models import Appointment, Medication


class AppointmentCreateSerializer(serializers.Serializer):
    doctor_name = serializers.CharField(max_length=255)
    specialty = serializers.CharField(max_length=255)
    date = serializers.CharField(max_length=32)
    time = serializers.CharField(max_length=32)


class MedicationCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    dosage = serializers.CharField(max_length=255)
    frequency = serializers.CharField(max_length=255)
    time = serializers.CharField(max_length=32)


class AppointmentSerializer(serializers.ModelSerializer):
    patient_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Appointment
        fields = ['id', 'patient_id', 'doctor_name', 'specialty', 'date', 'time', 'status']


class MedicationSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Medication
        fields = ['id', 'user_id', 'name', 'dosage', 'frequency', 'time']
