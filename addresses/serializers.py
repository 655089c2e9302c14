from rest_framework import serializers

from locations.models import Department, Municipality
from locations.serializers import DepartmentSerializer, MunicipalitySerializer
from .models import Address


class AddressSerializer(serializers.ModelSerializer):
    department = DepartmentSerializer(read_only=True)
    municipality = MunicipalitySerializer(read_only=True)
    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = Address
        fields = [
            'id', 'title', 'first_name', 'last_name', 'full_name', 'phone',
            'department', 'municipality', 'address', 'neighborhood',
            'additional_info', 'is_default', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class AddressWriteSerializer(serializers.ModelSerializer):
    """Input for creating and patching addresses"""
    department_id = serializers.PrimaryKeyRelatedField(source='department', queryset=Department.objects.all())
    municipality_id = serializers.PrimaryKeyRelatedField(source='municipality', queryset=Municipality.objects.all())

    class Meta:
        model = Address
        fields = [
            'title', 'first_name', 'last_name', 'phone', 'department_id',
            'municipality_id', 'address', 'neighborhood', 'additional_info', 'is_default'
        ]

    def validate(self, attrs):
        department = attrs.get('department', getattr(self.instance, 'department', None))
        municipality = attrs.get('municipality', getattr(self.instance, 'municipality', None))

        if department is not None and municipality is not None and municipality.department_id != department.id:
            raise serializers.ValidationError(
                {'municipality_id': 'The municipality does not belong to the selected department'}
            )
        return attrs
