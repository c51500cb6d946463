#!/usr/bin/env python
"""
Main entry point for Pirex.
Uses Fire for CLI and Hydra for configuration management.
"""

import os
import sys
import logging
from pathlib import Path
import fire
import hydra
from omegaconf import OmegaConf
from dotenv import load_dotenv

# Load .env variables and register resolver
load_dotenv()
OmegaConf.register_new_resolver("env", os.getenv, replace=True)

# Add src to path
sys.path.insert(0, str(Path(__file__).parent))

from src.catalog import Store
from src.data.data_loader import OpusLoader
from src.retrieval import MalformedQueryError


class PirexCLI:
    """CLI for cataloging works and searching their documents."""
    
    def __init__(self, config_path: str = "conf", config_name: str = "config"):
        """
        Initialize CLI with configuration.
        
        Args:
            config_path: Path to config directory
            config_name: Name of main config file
        """
        self.config_path = config_path
        self.config_name = config_name
        self.config = None
        self.store = None
        self.logger = None
    
    def _init_config(self, overrides=None):
        """Initialize Hydra configuration."""
        with hydra.initialize(version_base=None, config_path=self.config_path):
            self.config = hydra.compose(config_name=self.config_name,
                                        overrides=list(overrides or []))
        
        # Setup logging
        logging.basicConfig(
            level=getattr(logging, self.config.logging.level),
            format=self.config.logging.format
        )
        self.logger = logging.getLogger(__name__)
        
        Path(self.config.paths.library_dir).mkdir(parents=True, exist_ok=True)
    
    def _get_store(self) -> Store:
        """Get or load the store."""
        if self.store is None:
            self.store = Store.from_config(self.config)
        return self.store
    
    def load(self, file: str, title: str = None, author: str = None, overrides=None):
        """
        Load a text file as a new opus.
        
        Args:
            file: Source text file
            title: Title of the work (default: file name)
            author: Author of the work
            overrides: Hydra overrides, e.g. ["loading.show_progress=false"]
        """
        self._init_config(overrides)
        
        loader = OpusLoader(self.config)
        opus = loader.load(file, title=title, author=author)
        
        summary = self._get_store().add_opus(opus)
        if summary is None:
            self.logger.warning(f"✗ '{opus.title}' is already in the library")
            return None
        
        self.logger.info(f"✓ {summary}")
        return summary.ordinal
    
    def remove(self, ordinal: int, overrides=None):
        """
        Remove an opus by ordinal.
        
        Args:
            ordinal: Ordinal number shown by `summary`
            overrides: Hydra overrides
        """
        self._init_config(overrides)
        
        if self._get_store().remove_opus(int(ordinal)):
            self.logger.info(f"✓ Removed opus {ordinal}")
            return True
        
        self.logger.warning(f"✗ No opus {ordinal}")
        return False
    
    def purge(self, overrides=None):
        """Remove every opus from the library."""
        self._init_config(overrides)
        self._get_store().purge()
        self.logger.info("✓ Library purged")
    
    def search(self, query: str, overrides=None):
        """
        Search the library.
        
        Args:
            query: Words (implicit AND), "~ word" to exclude, "a ^ b" for phrases
            overrides: Hydra overrides, e.g. ["search.legacy_empty_fallback=true"]
        """
        self._init_config(overrides)
        
        try:
            documents = self._get_store().search(str(query))
        except MalformedQueryError as e:
            self.logger.error(f"Malformed query: {e}")
            return None
        
        width = self.config.output.preview_width
        for document in documents:
            print(f"[{document.opus_ordinal}:{document.position}] {document.preview(width)}")
        
        self.logger.info(f"{len(documents)} documents retrieved")
        return len(documents)
    
    def summary(self, overrides=None):
        """Print a summary of the library."""
        self._init_config(overrides)
        print(self._get_store().summarize())
    
    def explain(self, query: str, overrides=None):
        """
        Show how a query is compiled.
        
        Args:
            query: Query string
            overrides: Hydra overrides
        """
        self._init_config(overrides)
        compiled = self._get_store().compiler.compile(str(query))
        print(compiled.describe())
        return compiled.terms()
    
    def show_config(self, overrides=None):
        """Display current configuration."""
        self._init_config(overrides)
        print(OmegaConf.to_yaml(self.config))


def main():
    """Main entry point."""
    fire.Fire(PirexCLI)


if __name__ == "__main__":
    main()
