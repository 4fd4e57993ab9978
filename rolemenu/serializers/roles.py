import bleach
from rest_framework import serializers


def _clean(v):
    return bleach.clean((v or '').strip(), strip=True)


class RoleWriteSerializer(serializers.Serializer):
    roleName = serializers.CharField(max_length=100, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    isActive = serializers.BooleanField(required=False)

    def validate_roleName(self, v):
        v = _clean(v)
        if not v:
            raise serializers.ValidationError('Role name is required')
        return v

    def validate_description(self, v):
        return _clean(v)


def role_to_dict(role, user_count=None) -> dict:
    data = {
        'roleId': role.id,
        'roleName': role.name,
        'description': role.description,
        'isActive': role.is_active,
        'createdAt': role.created_at.strftime('%Y-%m-%d %H:%M:%S'),
        'updatedAt': role.updated_at.strftime('%Y-%m-%d %H:%M:%S'),
    }
    if user_count is not None:
        data['userCount'] = user_count
    return data
