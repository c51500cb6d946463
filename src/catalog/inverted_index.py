"""
Inverted index over cataloged documents.

Used for reporting (term count, posting count). Retrieval never reads it.
"""

from typing import Dict, List, Optional, Set, Tuple
from collections import defaultdict
import logging
import re

from .models import Document, Opus
from .postings import PostingsList

logger = logging.getLogger(__name__)

TERM_PATTERN = re.compile(r"[a-z0-9]+(?:'[a-z0-9]+)*")


def index_terms(text: str) -> List[str]:
    """Split text into lower-cased alphanumeric index terms."""
    return TERM_PATTERN.findall(text.lower())


class InvertedIndex:
    """
    Maps terms to postings lists keyed by (opus ordinal, document position).
    """
    
    def __init__(self):
        """Initialize empty index."""
        self.dictionary: Dict[str, PostingsList] = {}
    
    def add_document(self, document: Document) -> Tuple[int, int]:
        """
        Add a document to the index.
        
        Args:
            document: Document with its opus ordinal assigned
            
        Returns:
            (new terms, new postings) created by this document
        """
        term_positions = defaultdict(list)
        for position, term in enumerate(index_terms(document.text)):
            term_positions[term].append(position)
        
        new_terms = 0
        new_postings = 0
        for term, positions in term_positions.items():
            if term not in self.dictionary:
                self.dictionary[term] = PostingsList()
                new_terms += 1
            if self.dictionary[term].add_posting_batch(document.key, positions):
                new_postings += 1
        
        return new_terms, new_postings
    
    def add_opus(self, opus: Opus) -> Tuple[int, int]:
        """
        Index every document of an opus.
        
        Returns:
            (new terms, new postings) created by the opus
        """
        terms_added = 0
        postings_added = 0
        for document in opus.documents:
            new_terms, new_postings = self.add_document(document)
            terms_added += new_terms
            postings_added += new_postings
        
        logger.debug(f"Indexed opus {opus.ordinal}: {terms_added} new terms, "
                     f"{postings_added} postings")
        return terms_added, postings_added
    
    def remove_opus(self, opus_ordinal: int) -> int:
        """
        Remove all postings of an opus; terms left without postings are dropped.
        
        Returns:
            Number of postings removed
        """
        removed = 0
        emptied = []
        for term, postings in self.dictionary.items():
            removed += postings.remove_opus(opus_ordinal)
            if len(postings) == 0:
                emptied.append(term)
        
        for term in emptied:
            del self.dictionary[term]
        
        logger.debug(f"Removed {removed} postings and {len(emptied)} terms of opus {opus_ordinal}")
        return removed
    
    def clear(self):
        self.dictionary.clear()
    
    def get_postings(self, term: str) -> Optional[PostingsList]:
        return self.dictionary.get(term)
    
    def contains_term(self, term: str) -> bool:
        return term in self.dictionary
    
    def get_vocabulary(self) -> Set[str]:
        return set(self.dictionary.keys())
    
    def number_of_terms(self) -> int:
        """Number of distinct index terms."""
        return len(self.dictionary)
    
    def total_number_of_postings(self) -> int:
        """One posting per term per document."""
        return sum(len(postings) for postings in self.dictionary.values())
    
    def get_statistics(self) -> Dict:
        """Get index statistics."""
        num_terms = self.number_of_terms()
        num_postings = self.total_number_of_postings()
        return {
            'num_terms': num_terms,
            'num_postings': num_postings,
            'avg_postings_length': num_postings / num_terms if num_terms else 0,
        }
