"""API views for the authors posts listing."""

import logging
from typing import Any, Optional

from django.http import JsonResponse
from drf_spectacular.utils import OpenApiExample, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from authors.exceptions import ValidationError
from authors.serializers import (
    AuthorLookupRequestSerializer,
    AuthorSerializer,
    AuthorsResponseSerializer,
    GetAuthorsPostsRequestSerializer,
)
from authors.services import AuthorService

logger = logging.getLogger(__name__)


def _listing_params(request: Request) -> dict[str, Any]:
    """
    Flatten the query string for the listing serializer.

    Columns may be sent as ``columns[]=a&columns[]=b`` or ``columns=a&columns=b``.
    """
    params = request.query_params
    data: dict[str, Any] = {
        key: params.get(key) for key in params if not key.startswith("columns")
    }
    columns = params.getlist("columns[]") or params.getlist("columns")
    if columns:
        data["columns"] = columns
    return data


class AuthorsPostsView(APIView):  # type: ignore[misc]
    """API view listing authors with statistics about their public posts."""

    permission_classes = [AllowAny]

    @extend_schema(
        parameters=[GetAuthorsPostsRequestSerializer],
        responses={200: AuthorsResponseSerializer},
        description=(
            "List authors with post counts, the latest post and average ratings. "
            "Supports column selection, one filter, one sort and offset/limit pagination."
        ),
        tags=["Authors"],
        examples=[
            OpenApiExample(
                "Authors with totals",
                value={
                    "data": [
                        {
                            "id": 1,
                            "name": "Ada Lovelace",
                            "total_posts_count": 2,
                            "last_month_posts_count": 1,
                            "latest_post": {"title": "Notes", "content": "On the engine…"},
                            "average_rating": 8.5,
                            "average_rating_last_month": 9.0,
                        }
                    ],
                    "total_authors_count": 3,
                    "filtered_authors_count": 1,
                },
                response_only=True,
            ),
        ],
    )
    def get(self, request: Request, format: Optional[str] = None) -> Response:
        """
        List authors and their posts statistics.

        Returns 400 for invalid parameters or an unknown filter column.
        """
        serializer = GetAuthorsPostsRequestSerializer(data=_listing_params(request))
        serializer.is_valid(raise_exception=True)

        try:
            service = AuthorService()
            result = service.get_authors_posts(**serializer.validated_data)
        except ValidationError as e:
            logger.warning(f"Rejected authors posts request: {e}")
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(AuthorsResponseSerializer(result).data, status=status.HTTP_200_OK)


class AuthorView(APIView):  # type: ignore[misc]
    """API view returning a single raw author record."""

    permission_classes = [AllowAny]

    @extend_schema(
        parameters=[AuthorLookupRequestSerializer],
        responses={200: AuthorSerializer},
        description="Return the author with the given id, or null when it does not exist.",
        tags=["Authors"],
    )
    def get(self, request: Request, format: Optional[str] = None) -> Any:
        """Look up one author by id."""
        serializer = AuthorLookupRequestSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        author = AuthorService().get_author_by_id(serializer.validated_data["id"])
        if author is None:
            return JsonResponse(None, safe=False)

        return Response(AuthorSerializer(author).data, status=status.HTTP_200_OK)
