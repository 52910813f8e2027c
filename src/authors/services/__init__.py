"""Authors services: listing orchestration and response assembly."""

from .author_service import AuthorService
from .response_assembler import AuthorsResponseAssembler

__all__ = ["AuthorService", "AuthorsResponseAssembler"]
