from rest_framework import serializers


class ApprovePaymentSerializer(serializers.Serializer):
    """Body posted by the client after the buyer approves the payment."""

    orderID = serializers.CharField(max_length=64)
