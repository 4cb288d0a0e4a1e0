import logging
import os
import random
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_WORDS_FILE = os.path.abspath(
    os.path.join(os.path.dirname(__file__), '..', '..', 'data', 'words.txt')
)


def normalize_word(text: Optional[str]) -> str:
    """Trim and lowercase a word supplied by a client or a word list."""
    return (text or '').strip().lower()


def parse_words(lines: Iterable[str]) -> Tuple[List[str], List[str]]:
    """Split raw lines into (usable words, rejected entries).

    Blank lines are skipped silently; anything that is not purely
    alphabetic after normalizing is rejected.
    """
    words, rejected = [], []
    for line in lines:
        word = normalize_word(line)
        if not word:
            continue
        if word.isalpha():
            words.append(word)
        else:
            rejected.append(line.strip())
    return words, rejected


class WordSource:
    """Vocabulary the secret word is drawn from when the host does not choose one."""

    def __init__(self, words: Iterable[str], rng: Optional[random.Random] = None):
        self.words, rejected = parse_words(words)
        for entry in rejected:
            logger.warning(f"[words-skip] entry={entry!r} not alphabetic")
        if not self.words:
            raise ValueError('word list is empty')
        self._rng = rng or random.Random()

    @classmethod
    def from_file(cls, path: Optional[str] = None, rng: Optional[random.Random] = None) -> 'WordSource':
        path = path or DEFAULT_WORDS_FILE
        with open(path, encoding='utf-8') as fh:
            source = cls(fh, rng=rng)
        logger.info(f"[words-loaded] file={path} count={len(source)}")
        return source

    def pick(self) -> str:
        return self._rng.choice(self.words)

    def __len__(self):
        return len(self.words)
