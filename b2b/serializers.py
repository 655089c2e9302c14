from rest_framework import serializers
from .models import B2BQuote


class B2BQuoteSerializer(serializers.ModelSerializer):
    class Meta:
        model = B2BQuote
        fields = [
            'id', 'business_name', 'quantity', 'department', 'municipality',
            'neighborhood', 'address', 'contact_phone', 'qr_type', 'qr_data',
            'package', 'logo_url', 'status', 'created_at'
        ]
        read_only_fields = fields


class B2BQuoteCreateSerializer(serializers.ModelSerializer):
    """Quote intake; ``package`` is a request, the tier is decided server side"""
    package = serializers.ChoiceField(choices=B2BQuote.Package.choices, required=False, allow_null=True)
    logo = serializers.FileField(required=False, allow_null=True, write_only=True)

    class Meta:
        model = B2BQuote
        fields = [
            'business_name', 'quantity', 'department', 'municipality', 'neighborhood',
            'address', 'contact_phone', 'qr_type', 'qr_data', 'package', 'logo'
        ]
