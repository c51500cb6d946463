"""
Catalog data model: works (OPUS), their documents, and load summaries.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class Document:
    """
    One retrievable unit of an opus (a paragraph of the source text).
    
    Attributes:
        text: Full document text
        position: Zero-based position inside the owning opus
        opus_ordinal: Ordinal of the owning opus (0 until the opus is cataloged)
    """
    text: str
    position: int = 0
    opus_ordinal: int = 0
    
    @property
    def key(self) -> Tuple[int, int]:
        """Identity inside a collection: (opus ordinal, position)."""
        return (self.opus_ordinal, self.position)
    
    def preview(self, width: int = 80) -> str:
        """Single-line, shortened text for listings."""
        flat = ' '.join(self.text.split())
        return flat if len(flat) <= width else flat[:width - 3] + '...'


@dataclass
class Opus:
    """
    An author's work, loaded from a single source file.
    
    Attributes:
        title: Title of the work
        author: Author name
        file_path: Source file the documents were extracted from
        documents: Documents in source order
        ordinal: Assigned by the collection when the opus is added
    """
    title: str
    author: str
    file_path: str
    documents: List[Document] = field(default_factory=list)
    ordinal: Optional[int] = None
    
    def number_of_documents(self) -> int:
        return len(self.documents)
    
    def assign_ordinal(self, ordinal: int):
        """Assign the opus ordinal and stamp it on every document."""
        self.ordinal = ordinal
        for document in self.documents:
            document.opus_ordinal = ordinal


@dataclass(frozen=True)
class LoadSummary:
    """Result of adding an opus to a collection."""
    ordinal: int
    title: str
    author: str
    number_of_documents: int
    terms_added: int
    postings_added: int
    
    def __str__(self):
        return (f"Opus {self.ordinal}: {self.author}\t{self.title}\t"
                f"{self.number_of_documents} documents, "
                f"{self.terms_added} new index terms, {self.postings_added} postings")
