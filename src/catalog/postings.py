"""
Postings list data structures for the catalog statistics index.
"""

from typing import Iterator, List, Optional, Tuple
from dataclasses import dataclass, field
import bisect

# (opus ordinal, document position)
DocKey = Tuple[int, int]


@dataclass
class PostingEntry:
    """
    Single posting: one term occurring in one document.
    
    Attributes:
        doc_key: (opus ordinal, document position)
        positions: Token positions where the term appears
    """
    doc_key: DocKey
    positions: List[int] = field(default_factory=list)
    
    @property
    def opus_ordinal(self) -> int:
        return self.doc_key[0]
    
    @property
    def term_freq(self) -> int:
        return len(self.positions)
    
    def __lt__(self, other):
        """Compare by doc_key for sorting."""
        return self.doc_key < other.doc_key


class PostingsList:
    """
    Postings list for a single term.
    Kept sorted by doc_key.
    """
    
    def __init__(self):
        """Initialize empty postings list."""
        self.postings: List[PostingEntry] = []
    
    def add_posting_batch(self, doc_key: DocKey, positions: List[int]) -> bool:
        """
        Add all positions of the term in one document.
        
        Args:
            doc_key: Document key
            positions: Positions where term appears
            
        Returns:
            True if a new posting was created, False if an existing one grew
        """
        if not positions:
            return False
        
        idx = bisect.bisect_left([p.doc_key for p in self.postings], doc_key)
        
        if idx < len(self.postings) and self.postings[idx].doc_key == doc_key:
            self.postings[idx].positions.extend(positions)
            self.postings[idx].positions.sort()
            return False
        
        self.postings.insert(idx, PostingEntry(doc_key=doc_key, positions=sorted(positions)))
        return True
    
    def remove_opus(self, opus_ordinal: int) -> int:
        """
        Drop every posting belonging to an opus.
        
        Returns:
            Number of postings removed
        """
        before = len(self.postings)
        self.postings = [p for p in self.postings if p.opus_ordinal != opus_ordinal]
        return before - len(self.postings)
    
    def get_posting(self, doc_key: DocKey) -> Optional[PostingEntry]:
        idx = bisect.bisect_left([p.doc_key for p in self.postings], doc_key)
        if idx < len(self.postings) and self.postings[idx].doc_key == doc_key:
            return self.postings[idx]
        return None
    
    def get_doc_keys(self) -> List[DocKey]:
        return [p.doc_key for p in self.postings]
    
    def document_frequency(self) -> int:
        """Get number of documents containing this term."""
        return len(self.postings)
    
    def total_term_frequency(self) -> int:
        """Get total occurrences of term across all documents."""
        return sum(p.term_freq for p in self.postings)
    
    def __len__(self) -> int:
        return len(self.postings)
    
    def __iter__(self) -> Iterator[PostingEntry]:
        return iter(self.postings)
