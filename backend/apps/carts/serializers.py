from rest_framework import serializers


class CartLineItemSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField(allow_blank=True)
    price = serializers.CharField()
    quantity = serializers.IntegerField()
    lineTotal = serializers.CharField(source="line_total")
    vendorId = serializers.CharField(source="vendor_id")
    vendorName = serializers.CharField(source="vendor_name", allow_blank=True)
    imageUrl = serializers.CharField(source="image_url", allow_null=True, required=False)
    description = serializers.CharField(allow_null=True, required=False)
    entityType = serializers.CharField(source="entity_type", allow_null=True, required=False)


class CartReadSerializer(serializers.Serializer):
    items = CartLineItemSerializer(many=True)
    totalQuantity = serializers.IntegerField(source="total_quantity")
    totalAmount = serializers.CharField(source="total_amount")
    vendorCount = serializers.IntegerField(source="vendor_count")


class VendorCartSerializer(serializers.Serializer):
    vendorId = serializers.CharField(source="vendor_id")
    vendorName = serializers.CharField(source="vendor_name", allow_blank=True)
    items = CartLineItemSerializer(many=True)
    subtotal = serializers.CharField()
    quantity = serializers.IntegerField()


class CartItemQuantitySerializer(serializers.Serializer):
    id = serializers.CharField()
    quantity = serializers.IntegerField()


class CartEntryWriteSerializer(serializers.Serializer):
    # Schema documentation only; parsing is done by CartEntryCommand so legacy keys still work.
    id = serializers.CharField()
    name = serializers.CharField(required=False, allow_blank=True)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    vendorId = serializers.CharField()
    vendorName = serializers.CharField(required=False, allow_blank=True)
    imageUrl = serializers.CharField(required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_null=True)
    entityType = serializers.CharField(required=False, allow_null=True)


class CartQuantityWriteSerializer(serializers.Serializer):
    quantity = serializers.IntegerField()
