"""
Unit tests for extracting documents from source files
Run with: pytest tests/test_data_loader.py -v
"""

import pytest
import sys
from pathlib import Path
from omegaconf import OmegaConf

# Add repository root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.data.data_loader import OpusLoader
from src.catalog import Store


SAMPLE_TEXT = """Call me Ishmael. Some years ago,
never mind how long precisely,

having little or no money in my purse.


   \t
And nothing particular to interest me on shore.
"""


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / 'moby_dick.txt'
    path.write_text(SAMPLE_TEXT, encoding='utf-8')
    return path


@pytest.fixture
def loader():
    config = OmegaConf.create({'loading': {'encoding': 'utf-8', 'show_progress': False}})
    return OpusLoader(config)


class TestOpusLoader:
    """Test OpusLoader."""
    
    def test_paragraphs_become_documents(self, loader, sample_file):
        opus = loader.load(str(sample_file), title='Moby Dick', author='Herman Melville')
        
        assert [doc.text for doc in opus.documents] == [
            "Call me Ishmael. Some years ago, never mind how long precisely,",
            "having little or no money in my purse.",
            "And nothing particular to interest me on shore.",
        ]
        assert [doc.position for doc in opus.documents] == [0, 1, 2]
    
    def test_metadata(self, loader, sample_file):
        opus = loader.load(str(sample_file), title='Moby Dick', author='Herman Melville')
        assert opus.title == 'Moby Dick'
        assert opus.author == 'Herman Melville'
        assert opus.file_path == str(sample_file)
        assert opus.ordinal is None
    
    def test_default_title_and_author(self, loader, sample_file):
        opus = loader.load(str(sample_file))
        assert opus.title == 'moby_dick'
        assert opus.author == 'Unknown'
    
    def test_empty_file(self, loader, tmp_path):
        path = tmp_path / 'empty.txt'
        path.write_text('\n\n')
        assert loader.load(str(path)).documents == []
    
    def test_missing_file(self, loader, tmp_path):
        with pytest.raises(FileNotFoundError):
            loader.load(str(tmp_path / 'missing.txt'))
    
    def test_without_config(self, sample_file):
        loader = OpusLoader()
        assert loader.encoding == 'utf-8'
        assert not loader.show_progress
        assert len(loader.load(str(sample_file)).documents) == 3
    
    def test_loaded_opus_is_searchable(self, loader, sample_file):
        store = Store(autosave=False)
        store.add_opus(loader.load(str(sample_file), title='Moby Dick', author='Herman Melville'))
        
        result = store.search('call ^ me ~ purse')
        assert [(doc.opus_ordinal, doc.position) for doc in result] == [(1, 0)]
