"""
Unit tests for query compilation
Run with: pytest tests/test_query_compiler.py -v
"""

import pytest
import sys
from pathlib import Path
from omegaconf import OmegaConf

# Add repository root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.query import (
    STOP_WORDS, MAX_QUERY_TOKENS, TokenKind, QueryToken, CompiledQuery,
    QueryCompiler, compile_query
)


class TestQueryToken:
    """Test token classification."""
    
    def test_adjacency_marker(self):
        token = QueryToken.classify('^')
        assert token.kind is TokenKind.ADJACENCY
        assert token.is_adjacency()
    
    def test_not_marker(self):
        token = QueryToken.classify('~')
        assert token.kind is TokenKind.NOT
        assert token.is_not()
    
    def test_plain_word(self):
        token = QueryToken.classify('whale')
        assert token.kind is TokenKind.WORD
        assert token.is_word()
    
    @pytest.mark.parametrize('text', ['foo^bar', '^^', '~~', 'not~', '^a', ''])
    def test_classification_is_exact_match(self, text):
        """Markers embedded in longer text are plain words."""
        assert QueryToken.classify(text).kind is TokenKind.WORD


class TestQueryCompiler:
    """Test QueryCompiler.compile."""
    
    def setup_method(self):
        self.compiler = QueryCompiler()
    
    def test_lowercases_terms(self):
        compiled = self.compiler.compile('Moby DICK')
        assert compiled.terms() == ['moby', 'dick']
        assert not compiled.advanced
    
    def test_removes_stop_words(self):
        compiled = self.compiler.compile('The cat AND the hat')
        assert compiled.terms() == ['cat', 'hat']
    
    def test_no_stop_word_survives_basic_query(self):
        raw = ' '.join(sorted(STOP_WORDS)) + ' whale'
        compiled = self.compiler.compile(raw)
        assert compiled.terms() == ['whale']
        for token in compiled:
            assert token.text not in STOP_WORDS
    
    def test_stop_words_matched_exactly(self):
        """Punctuation attached to a stop word keeps it."""
        compiled = self.compiler.compile('the, cat')
        assert compiled.terms() == ['the,', 'cat']
    
    def test_advanced_query_keeps_stop_words(self):
        compiled = self.compiler.compile('the ^ whale of a ship')
        assert compiled.advanced
        assert compiled.terms() == ['the', '^', 'whale', 'of', 'a', 'ship']
    
    def test_caret_inside_word_makes_query_advanced(self):
        compiled = self.compiler.compile('foo^bar the cat')
        assert compiled.advanced
        assert compiled.terms() == ['foo^bar', 'the', 'cat']
        assert compiled[0].kind is TokenKind.WORD
    
    def test_classifies_operators(self):
        compiled = self.compiler.compile('cat ~ dog ^ house')
        kinds = [token.kind for token in compiled]
        assert kinds == [
            TokenKind.WORD, TokenKind.NOT, TokenKind.WORD,
            TokenKind.ADJACENCY, TokenKind.WORD
        ]
    
    def test_consecutive_spaces_give_empty_words(self):
        compiled = self.compiler.compile('cat  dog')
        assert compiled.terms() == ['cat', '', 'dog']
        assert compiled[1].kind is TokenKind.WORD
    
    def test_no_trimming(self):
        compiled = self.compiler.compile(' cat ')
        assert compiled.terms() == ['', 'cat', '']
    
    def test_empty_string(self):
        compiled = self.compiler.compile('')
        assert compiled.terms() == ['']
    
    def test_only_stop_words_gives_empty_query(self):
        compiled = self.compiler.compile('the and of')
        assert compiled.is_empty()
        assert len(compiled) == 0
    
    def test_truncates_to_first_100_tokens(self):
        words = [f"w{i}" for i in range(150)]
        compiled = self.compiler.compile(' '.join(words))
        assert len(compiled) == MAX_QUERY_TOKENS == 100
        assert compiled.terms() == words[:100]
    
    def test_truncation_applies_after_stop_word_removal(self):
        words = []
        for i in range(120):
            words.extend(['the', f"w{i}"])
        compiled = self.compiler.compile(' '.join(words))
        assert compiled.terms() == [f"w{i}" for i in range(100)]
    
    def test_truncation_in_advanced_mode(self):
        words = ['the'] * 120 + ['^']
        compiled = self.compiler.compile(' '.join(words))
        assert len(compiled) == 100
        assert compiled.advanced
        assert all(term == 'the' for term in compiled.terms())
    
    def test_short_query_untouched_by_cap(self):
        compiled = self.compiler.compile('a b c')
        assert compiled.terms() == ['b', 'c']
    
    def test_compilation_is_idempotent(self):
        raw = 'Whale ~ ship the ^ sea'
        assert self.compiler.compile(raw) == self.compiler.compile(raw)
    
    def test_compiled_query_is_immutable(self):
        compiled = self.compiler.compile('cat dog')
        assert isinstance(compiled.tokens, tuple)
        with pytest.raises(AttributeError):
            compiled.advanced = True
    
    def test_custom_token_cap(self):
        compiler = QueryCompiler(max_tokens=2)
        assert compiler.compile('x y z').terms() == ['x', 'y']
    
    def test_negative_token_cap_rejected(self):
        with pytest.raises(ValueError):
            QueryCompiler(max_tokens=-1)
    
    def test_custom_stop_words(self):
        compiler = QueryCompiler(stop_words={'whale'})
        assert compiler.compile('the whale').terms() == ['the']
    
    def test_from_config(self):
        config = OmegaConf.create({'query': {'max_tokens': 3}})
        compiler = QueryCompiler.from_config(config)
        assert compiler.max_tokens == 3
        assert compiler.stop_words == STOP_WORDS
    
    def test_from_config_defaults(self):
        assert QueryCompiler.from_config(None).max_tokens == 100
        assert QueryCompiler.from_config(OmegaConf.create({})).max_tokens == 100
    
    def test_module_level_compile(self):
        assert compile_query('The Cat') == CompiledQuery(
            tokens=(QueryToken('cat', TokenKind.WORD),), advanced=False
        )
    
    def test_describe(self):
        description = compile_query('cat ~ dog').describe()
        assert description == "[basic] WORD('cat') NOT('~') WORD('dog')"
