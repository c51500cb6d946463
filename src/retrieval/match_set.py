"""
Running result of a boolean evaluation pass.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, Optional, Tuple, TypeVar

D = TypeVar('D')


@dataclass(frozen=True)
class MatchSet(Generic[D]):
    """
    Either Unset (no constraint processed yet) or Filtered(documents).
    
    A Filtered set with zero documents is distinct from Unset.
    """
    documents: Optional[Tuple[D, ...]] = None
    
    @classmethod
    def unset(cls) -> 'MatchSet[D]':
        return cls(None)
    
    @classmethod
    def filtered(cls, documents: Iterable[D]) -> 'MatchSet[D]':
        return cls(tuple(documents))
    
    @property
    def is_unset(self) -> bool:
        return self.documents is None
    
    def is_empty(self) -> bool:
        """True when unset or filtered down to nothing."""
        return not self.documents
    
    def narrow(self, keep: Callable[[D], bool]) -> 'MatchSet[D]':
        """
        Keep only documents satisfying `keep`, preserving order.
        Narrowing an unset set yields an empty filtered set.
        """
        return MatchSet.filtered(doc for doc in (self.documents or ()) if keep(doc))
    
    def to_list(self) -> List[D]:
        return list(self.documents or ())
    
    def __len__(self) -> int:
        return len(self.documents or ())
    
    def __repr__(self):
        if self.is_unset:
            return "MatchSet(unset)"
        return f"MatchSet(filtered, {len(self)} documents)"
