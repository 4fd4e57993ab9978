from rest_framework import serializers


class ActiveCategorySerializer(serializers.Serializer):
    categoryId = serializers.CharField(max_length=64)


class PathnameSerializer(serializers.Serializer):
    pathname = serializers.CharField(max_length=512)

    def validate_pathname(self, v):
        v = v.strip()
        if not v.startswith('/'):
            raise serializers.ValidationError('pathname must start with /')
        return v


class TabsQuerySerializer(serializers.Serializer):
    pagePath = serializers.CharField(max_length=512)
