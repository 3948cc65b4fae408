"""
Exceptions raised by docsearch.

The ranking core never raises for degenerate input (empty query, missing
documents, empty corpus). Only collaborator failures surface, wrapped in
one of the CollaboratorError subclasses below.
"""


class DocSearchError(Exception):
    """Base exception for all docsearch errors."""

    pass


class CollaboratorError(DocSearchError):
    """An external collaborator (embedder, vector source, store) failed."""

    def __init__(self, message: str, collaborator: str = ""):
        super().__init__(message)
        self.collaborator = collaborator


class EmbeddingError(CollaboratorError):
    """Embedder raised while turning text into a vector."""

    def __init__(self, message: str):
        super().__init__(message, collaborator="embedder")


class VectorSourceError(CollaboratorError):
    """Vector candidate source raised during similarity lookup."""

    def __init__(self, message: str):
        super().__init__(message, collaborator="vector_source")


class DocumentStoreError(CollaboratorError):
    """Document store raised while loading documents."""

    def __init__(self, message: str):
        super().__init__(message, collaborator="document_store")
