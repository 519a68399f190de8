import bleach
from rest_framework import serializers


class InventoryAddSerializer(serializers.Serializer):
    vaccine_name = serializers.CharField(max_length=255)
    vaccine_type = serializers.CharField(required=False, allow_blank=True, max_length=100, default='')
    stock_quantity = serializers.IntegerField(min_value=0)
    expiry_date = serializers.DateField(required=False, allow_null=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False, default=0)
    notes = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_vaccine_name(self, v):
        v = bleach.clean((v or '').strip(), strip=True)
        if not v:
            raise serializers.ValidationError('Vaccine name is required.')
        return v

    def validate_notes(self, v):
        return bleach.clean((v or '').strip(), strip=True)


class InventoryUpdateSerializer(serializers.Serializer):
    inventory_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=0)


class InventoryRemoveSerializer(serializers.Serializer):
    inventory_id = serializers.IntegerField(min_value=1)
