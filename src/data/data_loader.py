import logging
import re
from pathlib import Path
from typing import Iterator, List, Optional
from tqdm import tqdm

from src.catalog.models import Document, Opus

logger = logging.getLogger(__name__)

BLANK_LINE = re.compile(r'^\s*$')


class OpusLoader:
    """Extracts documents from a plain text source file."""

    def __init__(self, config=None):
        """
        Initialize opus loader.

        Args:
            config: Hydra configuration object (uses `loading` section if present)
        """
        loading = config.get('loading') if config is not None else None
        self.encoding = loading.get('encoding', 'utf-8') if loading else 'utf-8'
        self.show_progress = bool(loading.get('show_progress', True)) if loading else False

    def load(self, file_path: str, title: Optional[str] = None,
             author: Optional[str] = None) -> Opus:
        """
        Load a text file as an opus, one document per paragraph.

        Args:
            file_path: Path to the source text
            title: Title of the work (default: file stem)
            author: Author of the work (default: 'Unknown')

        Returns:
            Opus without an ordinal (assigned when added to a collection)
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {path}")

        logger.info(f"Loading opus from: {path}")

        documents = [
            Document(text=text, position=position)
            for position, text in enumerate(self.iter_paragraphs(path))
        ]

        logger.info(f"Extracted {len(documents)} documents")

        return Opus(
            title=title or path.stem,
            author=author or 'Unknown',
            file_path=str(path),
            documents=documents
        )

    def iter_paragraphs(self, path: Path) -> Iterator[str]:
        """
        Yield paragraphs: runs of non-blank lines joined with single spaces.

        Args:
            path: Path to the source text
        """
        total_lines = self._count_lines(path)
        current: List[str] = []

        with open(path, 'r', encoding=self.encoding) as f:
            pbar = tqdm(
                total=total_lines,
                desc="Extracting documents",
                disable=not self.show_progress
            )

            for line in f:
                pbar.update(1)
                if BLANK_LINE.match(line):
                    if current:
                        yield ' '.join(current)
                        current = []
                    continue
                current.append(line.strip())

            pbar.close()

        if current:
            yield ' '.join(current)

    def _count_lines(self, filepath: Path) -> int:
        """
        Count lines in a file.

        Args:
            filepath: Path to the file

        Returns:
            Number of lines in the file
        """
        count = 0
        with open(filepath, 'r', encoding=self.encoding) as f:
            for _ in f:
                count += 1
        return count
