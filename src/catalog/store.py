"""
Store: the root of the catalog model.

Owns the collection, answers queries through the query compiler and boolean
evaluator, and snapshots itself to a single Pirex library file (.plf).
"""

import logging
import pickle
from pathlib import Path
from typing import List, Optional, Union

from src.query import QueryCompiler
from src.retrieval import BooleanEvaluator
from .collection import Collection
from .models import Document, LoadSummary, Opus

logger = logging.getLogger(__name__)

FILE_NAME = 'pirex_library'
PLF = '.plf'


class UnsupportedSnapshotError(IOError):
    """Raised when loading a file that is not a Pirex library file."""


class Store:
    """
    Catalog model: collection of works plus search and persistence.
    
    Sample usage:
        store = Store(library_dir='library')
        store.add_opus(opus)
        docs = store.search('whale ~ ship')
    """
    
    def __init__(self, library_dir: str = '', autosave: bool = True,
                 compiler: Optional[QueryCompiler] = None,
                 evaluator: Optional[BooleanEvaluator] = None):
        """
        Initialize an empty store.
        
        Args:
            library_dir: Directory the snapshot is written to ('' for cwd)
            autosave: Save a snapshot after every catalog change
            compiler: Query compiler (default settings if None)
            evaluator: Boolean evaluator (default settings if None)
        """
        self.library_dir = library_dir
        self.autosave = autosave
        self.collection = Collection()
        self.compiler = compiler or QueryCompiler()
        self.evaluator = evaluator or BooleanEvaluator()
    
    @classmethod
    def from_config(cls, config) -> 'Store':
        """
        Load the store snapshot under paths.library_dir, or start a new one.
        
        Args:
            config: Hydra configuration object
        """
        library_dir = str(config.paths.library_dir)
        compiler = QueryCompiler.from_config(config)
        evaluator = BooleanEvaluator.from_config(config)
        autosave = bool(config.store.get('autosave', True)) if config.get('store') else True
        
        snapshot = snapshot_path(library_dir)
        if snapshot.exists():
            store = cls.load(snapshot)
            store.library_dir = library_dir
        else:
            logger.info(f"No library at {snapshot}, starting empty")
            store = cls(library_dir=library_dir)
        
        # Settings always come from the current config, not the snapshot
        store.autosave = autosave
        store.compiler = compiler
        store.evaluator = evaluator
        return store
    
    def add_opus(self, opus: Opus) -> Optional[LoadSummary]:
        """
        Add an opus to the collection.
        
        Returns:
            LoadSummary if added, None if it was a duplicate
        """
        summary = self.collection.add_opus(opus)
        self._autosave()
        return summary
    
    def remove_opus(self, opus_ordinal: int) -> bool:
        """Remove an opus by ordinal. Returns True if it was present."""
        status = self.collection.remove_opus(opus_ordinal)
        self._autosave()
        return status
    
    def purge(self):
        """Remove every opus and index entry."""
        self.collection.remove_all_opi()
        self._autosave()
    
    def search(self, raw_query: str) -> List[Document]:
        """
        Find all documents satisfying a query.
        
        Args:
            raw_query: Query string, e.g. "moby ^ dick ~ whaling"
            
        Returns:
            Matching documents in collection order
            
        Raises:
            MalformedQueryError: If an operator lacks an operand
        """
        query = self.compiler.compile(raw_query)
        documents = self.evaluator.evaluate(query, self.collection.all_documents())
        logger.info(f"Query {raw_query!r} matched {len(documents)} documents")
        return documents
    
    def summarize(self) -> str:
        """Formatted summary of every opus followed by index totals."""
        summary = ''
        for opus in self.collection.opi:
            summary += (f"OPUS {opus.ordinal}: {opus.author}\t{opus.title}\t"
                        f"{opus.number_of_documents()} documents\n\t\t{opus.file_path}\n")
        
        summary += (f"\nIndex Terms: {self.number_of_index_terms()}"
                    f"\nPostings: {self.total_number_of_postings()}")
        return summary
    
    def number_of_opi(self) -> int:
        return self.collection.number_of_opi()
    
    def total_number_of_documents(self) -> int:
        return self.collection.total_number_of_documents()
    
    def number_of_index_terms(self) -> int:
        return self.collection.index.number_of_terms()
    
    def total_number_of_postings(self) -> int:
        return self.collection.index.total_number_of_postings()
    
    def save(self, library_dir: Optional[str] = None) -> Path:
        """
        Write the whole store to pirex_library.plf.
        
        Args:
            library_dir: Target directory (default: self.library_dir)
            
        Returns:
            Path of the written snapshot
        """
        path = snapshot_path(self.library_dir if library_dir is None else library_dir)
        path.parent.mkdir(parents=True, exist_ok=True)
        
        with open(path, 'wb') as f:
            pickle.dump(self, f)
        
        logger.debug(f"Saved library to {path}")
        return path
    
    @classmethod
    def load(cls, file_path: Union[str, Path]) -> 'Store':
        """
        Restore a store from a Pirex library file.
        
        Raises:
            UnsupportedSnapshotError: If the file does not end in .plf
            FileNotFoundError: If the file does not exist
        """
        path = Path(file_path)
        if path.suffix != PLF:
            raise UnsupportedSnapshotError(f"File type not supported: {path.name}")
        
        with open(path, 'rb') as f:
            store = pickle.load(f)
        
        if not isinstance(store, cls):
            raise UnsupportedSnapshotError(f"{path} does not contain a Pirex library")
        
        logger.info(f"Loaded library from {path}: {store.number_of_opi()} opi, "
                    f"{store.total_number_of_documents()} documents")
        return store
    
    def _autosave(self):
        if not self.autosave:
            return
        try:
            self.save()
        except OSError as e:
            logger.error(f"Error serializing the model: {e}")


def snapshot_path(library_dir: str = '') -> Path:
    """Location of the library file inside a directory ('' for cwd)."""
    return Path(library_dir or '.') / f"{FILE_NAME}{PLF}"
