import bleach
from rest_framework import serializers

from booking.models import InsuranceDetail


def _clean(v):
    return bleach.clean((v or '').strip(), strip=True)


class ReviewSerializer(serializers.Serializer):
    hospital_id = serializers.IntegerField(min_value=1)
    doctor_id = serializers.IntegerField(min_value=1)
    rating = serializers.IntegerField(min_value=1, max_value=5)
    review_text = serializers.CharField(required=False, allow_blank=True, max_length=2000, default='')


class InsuranceSerializer(serializers.ModelSerializer):
    class Meta:
        model = InsuranceDetail
        fields = ['insurance_provider', 'policy_number', 'coverage_amount', 'expiry_date']
        extra_kwargs = {'expiry_date': {'required': False}}

    def validate_insurance_provider(self, v):
        return _clean(v)

    def validate_policy_number(self, v):
        return _clean(v)


class ProfileSerializer(serializers.Serializer):
    phone = serializers.CharField(required=False, allow_blank=True, max_length=20, default='')
    address = serializers.CharField(required=False, allow_blank=True, max_length=255, default='')
    emergency_contact = serializers.CharField(required=False, allow_blank=True, max_length=100, default='')

    def validate(self, attrs):
        return {k: _clean(v) for k, v in attrs.items()}
