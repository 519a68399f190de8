from rest_framework import serializers


class CheckoutSerializer(serializers.Serializer):
    vaccine_id = serializers.IntegerField(min_value=1)
    hospital_id = serializers.IntegerField(min_value=1)
    doctor_id = serializers.IntegerField(min_value=1)
    appointment_date = serializers.DateField()
    appointment_time = serializers.TimeField(input_formats=['%H:%M', '%H:%M:%S'])


class SuccessQuerySerializer(CheckoutSerializer):
    session_id = serializers.CharField(max_length=255)


class RescheduleSerializer(serializers.Serializer):
    appointment_id = serializers.IntegerField(min_value=1)
    new_appointment_date = serializers.DateField()


class VaccineFilterSerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True, max_length=100)
    category = serializers.CharField(required=False, allow_blank=True, max_length=100)
    payment_failed = serializers.BooleanField(required=False, default=False)


class CityFilterSerializer(serializers.Serializer):
    city = serializers.CharField(required=False, allow_blank=True, max_length=100)


class AppointmentQuerySerializer(serializers.Serializer):
    appointment_id = serializers.IntegerField(min_value=1)
