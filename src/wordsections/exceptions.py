"""Custom exceptions for wordsections."""


class WordsectionsError(Exception):
    """Base exception for wordsections operations."""


class StructuralInvariantError(WordsectionsError):
    """The markup tree breaks the section anchoring rules.

    Raised when a boundary marker (``w:sectPr``) is detached from the tree or
    sits under anything other than a paragraph's properties or the body.
    """


class ParseError(WordsectionsError):
    """Error while decoding a markup part."""


class PackageError(WordsectionsError):
    """Error while reading or writing a document package."""


class FetchError(WordsectionsError):
    """Error while fetching a remote document."""


class DocumentNotFoundError(FetchError):
    """The remote document does not exist."""


class RateLimitError(FetchError):
    """Rate limited by the remote host."""
