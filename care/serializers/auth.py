from rest_framework import serializers


class RegisterSerializer(serializers.Serializer):
    # CharField strips surrounding whitespace and rejects blanks; text is otherwise stored as sent
    name = serializers.CharField(max_length=255)
    email = serializers.CharField(max_length=255)
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    # Stored as given; the column default applies only when omitted
    role = serializers.CharField(required=False, allow_blank=True)


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)
