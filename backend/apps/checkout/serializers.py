from rest_framework import serializers


class CheckoutSummarySerializer(serializers.Serializer):
    subtotal = serializers.DecimalField(max_digits=14, decimal_places=2, coerce_to_string=True)
    deliveryFee = serializers.DecimalField(
        source="delivery_fee", max_digits=14, decimal_places=2, coerce_to_string=True
    )
    serviceFee = serializers.DecimalField(
        source="service_fee", max_digits=14, decimal_places=2, coerce_to_string=True
    )
    total = serializers.DecimalField(max_digits=14, decimal_places=2, coerce_to_string=True)
    totalQuantity = serializers.IntegerField(source="total_quantity")
    vendorCount = serializers.IntegerField(source="vendor_count")


class CheckoutWriteSerializer(serializers.Serializer):
    name = serializers.CharField()
    phone = serializers.CharField()
    address = serializers.CharField()
    email = serializers.EmailField(required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class CheckoutResultSerializer(serializers.Serializer):
    orders = serializers.ListField(child=serializers.DictField())
    vendorIds = serializers.ListField(source="vendor_ids", child=serializers.CharField())
    summary = CheckoutSummarySerializer()
