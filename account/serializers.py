from django.contrib.auth import get_user_model
from rest_framework import serializers


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = get_user_model()
        fields = ("id", "email", "password", "full_name", "role", "is_staff")
        read_only_fields = ("id", "role", "is_staff")
        extra_kwargs = {"password": {"write_only": True, "min_length": 5}}

    def validate_email(self, value):
        if self.instance is not None and value.lower() != self.instance.email.lower():
            raise serializers.ValidationError(
                "E-mail cannot be changed after registration."
            )
        return value

    def create(self, validated_data):
        return get_user_model().objects.create_user(**validated_data)

    def update(self, instance, validated_data):
        password = validated_data.pop("password", None)
        user = super().update(instance, validated_data)
        if password:
            user.set_password(password)
            user.save()
        return user
