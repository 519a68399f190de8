from rest_framework import serializers

from booking.models import User


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)

    def validate_username(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('Username is required.')
        return v


class RegisterSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False, write_only=True)
    role = serializers.CharField()
    hospital_id = serializers.IntegerField(required=False, allow_null=True)

    def validate_role(self, v):
        if v not in (User.ROLE_USER, User.ROLE_HOSPITAL_ADMIN):
            raise serializers.ValidationError('Invalid role.')
        return v

    def validate_email(self, v):
        return v.strip().lower()
