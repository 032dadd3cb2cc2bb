# vendors/api/serializers.py

from rest_framework import serializers

from vendors.models import Vendor


class VendorSerializer(serializers.ModelSerializer):
    class Meta:
        model = Vendor
        fields = "__all__"
        read_only_fields = ("id", "balance", "created_at", "updated_at")
