"""
Collection of cataloged works and the index over their documents.
"""

from pathlib import Path
from typing import Dict, List, Optional
import logging

from .inverted_index import InvertedIndex
from .models import Document, LoadSummary, Opus

logger = logging.getLogger(__name__)


class Collection:
    """
    Ordered set of OPI (works) keyed by ordinal.
    
    Ordinals start at 1 and are never reused, even after removals or a purge.
    """
    
    def __init__(self):
        """Initialize empty collection."""
        self._opi: Dict[int, Opus] = {}
        self._next_ordinal = 1
        self.index = InvertedIndex()
    
    @property
    def opi(self) -> List[Opus]:
        """Works in ordinal order."""
        return [self._opi[ordinal] for ordinal in sorted(self._opi)]
    
    def get_opus(self, ordinal: int) -> Optional[Opus]:
        return self._opi.get(ordinal)
    
    def add_opus(self, opus: Opus) -> Optional[LoadSummary]:
        """
        Add an opus unless it duplicates one already in the collection.
        
        Args:
            opus: Opus to add; its ordinal is assigned here
            
        Returns:
            LoadSummary on success, None for a duplicate
        """
        duplicate = self.find_duplicate(opus)
        if duplicate is not None:
            logger.warning(f"Opus '{opus.title}' by {opus.author} duplicates "
                           f"opus {duplicate.ordinal}; not added")
            return None
        
        ordinal = self._next_ordinal
        self._next_ordinal += 1
        opus.assign_ordinal(ordinal)
        self._opi[ordinal] = opus
        
        terms_added, postings_added = self.index.add_opus(opus)
        
        logger.info(f"Added opus {ordinal}: '{opus.title}' by {opus.author} "
                    f"({opus.number_of_documents()} documents)")
        return LoadSummary(
            ordinal=ordinal,
            title=opus.title,
            author=opus.author,
            number_of_documents=opus.number_of_documents(),
            terms_added=terms_added,
            postings_added=postings_added
        )
    
    def find_duplicate(self, opus: Opus) -> Optional[Opus]:
        """
        Find a cataloged opus with the same source file, or the same
        title and author (case-insensitive).
        """
        source = _resolve(opus.file_path)
        identity = (opus.title.strip().lower(), opus.author.strip().lower())
        
        for existing in self._opi.values():
            if _resolve(existing.file_path) == source:
                return existing
            if (existing.title.strip().lower(), existing.author.strip().lower()) == identity:
                return existing
        return None
    
    def remove_opus(self, ordinal: int) -> bool:
        """
        Remove an opus and its postings.
        
        Returns:
            True if removed, False if no opus has that ordinal
        """
        opus = self._opi.pop(ordinal, None)
        if opus is None:
            logger.warning(f"No opus with ordinal {ordinal}")
            return False
        
        self.index.remove_opus(ordinal)
        logger.info(f"Removed opus {ordinal}: '{opus.title}'")
        return True
    
    def remove_all_opi(self):
        """Remove every opus and clear the index."""
        count = len(self._opi)
        self._opi.clear()
        self.index.clear()
        logger.info(f"Removed all {count} opi")
    
    def all_documents(self) -> List[Document]:
        """Every document across all works, in ordinal then source order."""
        return [document for opus in self.opi for document in opus.documents]
    
    def number_of_opi(self) -> int:
        return len(self._opi)
    
    def total_number_of_documents(self) -> int:
        return sum(opus.number_of_documents() for opus in self._opi.values())


def _resolve(file_path: str) -> str:
    return str(Path(file_path).expanduser().resolve())
