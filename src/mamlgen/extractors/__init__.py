"""Cmdlet documentation extractors.

The generator asks extractors in order; the first one with an opinion wins.
Default order: reflection, XML comments, docstrings.
"""

from mamlgen.extractors.base import NO_OPINION, DocumentationExtractor, NoOpinion
from mamlgen.extractors.docstrings import DocstringDocumentationExtractor
from mamlgen.extractors.reflection import ReflectionDocumentationExtractor
from mamlgen.extractors.xml_comments import XmlCommentDocumentationExtractor, XmlDoc

EXTRACTOR_NAMES = {
    "reflection": ReflectionDocumentationExtractor,
    "xml-comments": XmlCommentDocumentationExtractor,
    "docstrings": DocstringDocumentationExtractor,
}

__all__ = [
    "EXTRACTOR_NAMES",
    "NO_OPINION",
    "DocstringDocumentationExtractor",
    "DocumentationExtractor",
    "NoOpinion",
    "ReflectionDocumentationExtractor",
    "XmlCommentDocumentationExtractor",
    "XmlDoc",
]
