"""URL configuration for authors app."""

from django.urls import path

from authors.views import AuthorsPostsView, AuthorView

app_name = "authors"

urlpatterns = [
    path("get-authors-posts", AuthorsPostsView.as_view(), name="authors-posts"),
    path("author", AuthorView.as_view(), name="author"),
]
