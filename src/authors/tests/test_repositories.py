"""
Unit tests for the author repository.
"""

import pytest

from authors.exceptions import (
    UnknownFilterColumnError,
    UnknownSortColumnError,
    ValidationError,
)
from authors.models import Author, PostStatus
from authors.repositories import PUBLIC_POSTS_ATTR, AuthorRepository

ALL_COLUMNS = {"id", "first_name", "last_name", "gender", "created_at", "updated_at"}


@pytest.fixture
def repository() -> AuthorRepository:
    return AuthorRepository()


@pytest.fixture
def authors(make_author):
    """Three authors whose full-name order differs from first-name order."""
    return [
        make_author(first_name="Bob", last_name="Zed", gender="male"),
        make_author(first_name="Alice", last_name="Young", gender="female"),
        make_author(first_name="Al", last_name="Bundy", gender="male"),
    ]


@pytest.mark.django_db
class TestBaseQuery:
    def test_only_public_posts_are_loaded(self, repository, make_author, make_post):
        author = make_author()
        public_post = make_post(author, is_private=PostStatus.PUBLIC)
        make_post(author, is_private=PostStatus.PRIVATE)

        loaded = repository.get_all_authors_posts_query().get(pk=author.pk)

        assert getattr(loaded, PUBLIC_POSTS_ATTR) == [public_post]

    def test_get_author_by_id(self, repository, make_author):
        author = make_author()

        assert repository.get_author_by_id(author.pk) == author
        assert repository.get_author_by_id(author.pk + 100) is None


@pytest.mark.django_db
class TestSelectColumns:
    def test_empty_request_projects_every_column(self, repository, authors):
        queryset = repository.get_all_authors_posts_query()

        projected, projection = repository.select_columns(queryset, [])

        assert set(projection.names) == ALL_COLUMNS
        assert "id" in projection.names
        assert projected is queryset

    def test_unknown_columns_are_dropped(self, repository, authors):
        _, projection = repository.select_columns(
            repository.get_all_authors_posts_query(), ["gender", "password", "nickname"]
        )

        assert projection.names == ("gender", "id")
        assert projection.requested == frozenset({"gender", "password", "nickname"})

    def test_id_is_always_projected(self, repository, authors):
        _, projection = repository.select_columns(
            repository.get_all_authors_posts_query(), ["last_name"]
        )

        assert projection.names == ("last_name", "id")

    def test_id_is_not_duplicated(self, repository, authors):
        _, projection = repository.select_columns(
            repository.get_all_authors_posts_query(), ["id", "gender", "id"]
        )

        assert projection.names == ("id", "gender")

    def test_name_expands_into_parts_and_synthesized_name(self, repository, authors):
        queryset, projection = repository.select_columns(
            repository.get_all_authors_posts_query(), ["name"]
        )

        assert projection.names == ("first_name", "last_name", "name", "id")
        assert projection.names.count("name") == 1
        assert [column.name for column in projection.derived] == ["name"]
        full_names = sorted(author.full_name for author in queryset)
        assert full_names == ["Al Bundy", "Alice Young", "Bob Zed"]

    def test_name_with_explicit_first_name(self, repository, authors):
        _, projection = repository.select_columns(
            repository.get_all_authors_posts_query(), ["first_name", "name"]
        )

        assert projection.names == ("first_name", "last_name", "name", "id")

    def test_unrequested_columns_are_deferred(self, repository, authors):
        queryset, _ = repository.select_columns(
            repository.get_all_authors_posts_query(), ["gender"]
        )

        author = queryset.first()

        assert "created_at" in author.get_deferred_fields()
        assert "first_name" not in author.get_deferred_fields()


@pytest.mark.django_db
class TestSortQueryByColumn:
    def test_empty_column_is_noop(self, repository):
        queryset = repository.get_all_authors_posts_query()

        assert repository.sort_query_by_column(queryset, None) is queryset
        assert repository.sort_query_by_column(queryset, "") is queryset

    def test_sort_by_literal_column(self, repository, authors):
        queryset = repository.sort_query_by_column(
            repository.get_all_authors_posts_query(), "last_name", "desc"
        )

        assert [author.last_name for author in queryset] == ["Zed", "Young", "Bundy"]

    def test_sort_by_name_uses_full_name(self, repository, authors):
        queryset = repository.sort_query_by_column(
            repository.get_all_authors_posts_query(), "name"
        )

        names = [author.name for author in queryset]
        assert names == sorted(names)
        assert names == ["Al Bundy", "Alice Young", "Bob Zed"]

    def test_sort_by_name_descending(self, repository, authors):
        queryset = repository.sort_query_by_column(
            repository.get_all_authors_posts_query(), "name", "desc"
        )

        assert [author.name for author in queryset] == [
            "Bob Zed",
            "Alice Young",
            "Al Bundy",
        ]

    @pytest.mark.parametrize("column", ["nickname", "posts", "posts__rating"])
    def test_unknown_or_related_column_raises(self, repository, column):
        with pytest.raises(UnknownSortColumnError) as exc_info:
            repository.sort_query_by_column(
                repository.get_all_authors_posts_query(), column
            )

        assert str(exc_info.value) == f"Sort column '{column}' not found"
        assert isinstance(exc_info.value, ValidationError)

    def test_sorting_never_duplicates_authors(self, repository, authors, make_post):
        make_post(authors[0], is_private=PostStatus.PRIVATE)
        make_post(authors[0])

        queryset = repository.sort_query_by_column(
            repository.get_all_authors_posts_query(), "id", "desc"
        )

        assert [author.pk for author in queryset] == sorted(
            (author.pk for author in authors), reverse=True
        )


@pytest.mark.django_db
class TestFilterQuery:
    def test_empty_column_is_noop(self, repository, authors):
        queryset = repository.get_all_authors_posts_query()

        assert repository.filter_query(queryset, None, "x") is queryset
        assert repository.filter_query(queryset, "", "x") is queryset

    def test_unknown_column_raises(self, repository):
        with pytest.raises(UnknownFilterColumnError) as exc_info:
            repository.filter_query(
                repository.get_all_authors_posts_query(), "nickname", "x"
            )

        assert str(exc_info.value) == "Filter column 'nickname' not found"
        assert exc_info.value.column == "nickname"
        assert isinstance(exc_info.value, ValidationError)

    def test_gender_is_exact_match(self, repository, authors):
        queryset = repository.filter_query(
            repository.get_all_authors_posts_query(), "gender", "male"
        )

        assert {author.first_name for author in queryset} == {"Bob", "Al"}

    def test_name_is_substring_of_full_name(self, repository, authors):
        queryset = repository.filter_query(
            repository.get_all_authors_posts_query(), "name", "e Yo"
        )

        assert [author.name for author in queryset] == ["Alice Young"]

    def test_other_columns_use_substring_match(self, repository, authors):
        queryset = repository.filter_query(
            repository.get_all_authors_posts_query(), "last_name", "und"
        )

        assert [author.last_name for author in queryset] == ["Bundy"]

    def test_non_text_column_is_matched_as_text(self, repository, authors):
        target = authors[1]

        queryset = repository.filter_query(
            repository.get_all_authors_posts_query(), "id", str(target.pk)
        )

        assert target in list(queryset)

    def test_filtered_queryset_keeps_its_type(self, repository, authors):
        queryset = repository.filter_query(
            repository.get_all_authors_posts_query(), "gender", "female"
        )

        assert isinstance(queryset.first(), Author)
