"""Serializers for the authors API."""

from typing import Any

from rest_framework import serializers

from authors.dto import AuthorsResponse
from authors.models import Author


class GetAuthorsPostsRequestSerializer(serializers.Serializer):  # type: ignore[misc]
    """Serializer for the authors posts listing query parameters."""

    columns = serializers.ListField(
        child=serializers.CharField(),
        required=False,
        default=list,
        help_text="Author columns to return; unknown names are ignored",
    )
    offset = serializers.IntegerField(
        min_value=0,
        required=False,
        default=0,
        help_text="Number of authors to skip",
    )
    limit = serializers.IntegerField(
        min_value=1,
        max_value=50,
        required=False,
        allow_null=True,
        default=None,
        help_text="Number of authors to return (1 to 50)",
    )
    sort_column = serializers.CharField(
        required=False,
        allow_null=True,
        allow_blank=True,
        default="first_name",
        help_text="Column to sort by; 'name' sorts by full name",
    )
    sort_direction = serializers.ChoiceField(
        choices=["asc", "desc"],
        required=False,
        default="asc",
    )
    filter_column = serializers.CharField(
        required=False,
        allow_null=True,
        allow_blank=True,
        default=None,
        help_text="Column to filter on; 'name' filters by full name",
    )
    filter_value = serializers.CharField(
        required=False,
        allow_null=True,
        allow_blank=True,
        default=None,
    )
    include_totals = serializers.BooleanField(required=False, default=False)


class AuthorLookupRequestSerializer(serializers.Serializer):  # type: ignore[misc]
    """Serializer for the single author lookup query parameters."""

    id = serializers.IntegerField(min_value=1)


class AuthorSerializer(serializers.ModelSerializer):  # type: ignore[misc]
    """Serializer for the raw Author record, including the full name."""

    name = serializers.CharField(read_only=True)

    class Meta:
        model = Author
        fields = [
            "id",
            "first_name",
            "last_name",
            "gender",
            "name",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AuthorsResponseSerializer(serializers.Serializer):  # type: ignore[misc]
    """
    Serializer for the authors posts listing response.

    The author records have a dynamic shape (it depends on the requested
    columns), so they are passed through as dictionaries. The totals are left
    out of the payload entirely unless they were computed.
    """

    data = serializers.ListField(
        child=serializers.DictField(), source="authors", read_only=True
    )
    total_authors_count = serializers.IntegerField(read_only=True, required=False)
    filtered_authors_count = serializers.IntegerField(read_only=True, required=False)

    def to_representation(self, instance: AuthorsResponse) -> dict[str, Any]:
        """Drop the totals when they were not requested."""
        ret = super().to_representation(instance)
        if not instance.has_totals:
            ret.pop("total_authors_count", None)
            ret.pop("filtered_authors_count", None)
        return ret
