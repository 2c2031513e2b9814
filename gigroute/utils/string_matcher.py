"""String matching utilities for job text feature detection"""

import logging
from typing import Dict, Iterable, List, Set
import ahocorasick


class KeywordMatcher:
    """
    Multi-pattern keyword matching using the Aho-Corasick algorithm

    The automaton is built once for a fixed keyword set and reused for every
    text it scans. Matching is case-insensitive substring matching, so
    "tip" also matches "tips".
    """

    def __init__(self, keywords: Iterable[str]):
        """
        Build the automaton

        Args:
            keywords: Keywords to search for (blank entries are ignored)
        """
        self.logger = logging.getLogger("gigroute.utils.string_matcher")
        self.keywords: List[str] = []

        for keyword in keywords:
            normalized = keyword.lower().strip()
            if normalized and normalized not in self.keywords:
                self.keywords.append(normalized)

        self._automaton = None
        if self.keywords:
            automaton = ahocorasick.Automaton()
            for idx, keyword in enumerate(self.keywords):
                automaton.add_word(keyword, (idx, keyword))
            automaton.make_automaton()
            self._automaton = automaton

    def find_keywords(self, text: str) -> Set[str]:
        """
        Get the set of keywords present in the text

        Example:
            >>> matcher = KeywordMatcher(["heavy", "organic"])
            >>> matcher.find_keywords("Heavy order, 12 items")
            {'heavy'}
        """
        if self._automaton is None or not text:
            return set()

        found: Set[str] = set()
        for _end_index, (_idx, keyword) in self._automaton.iter(text.lower()):
            found.add(keyword)

        return found

    def contains_any(self, text: str) -> bool:
        """Check if at least one keyword is present in the text"""
        if self._automaton is None or not text:
            return False

        for _end_index, (_idx, keyword) in self._automaton.iter(text.lower()):
            self.logger.debug(f"Found keyword: {keyword}")
            return True

        return False

    def count_keywords(self, text: str) -> Dict[str, int]:
        """
        Get all matched keywords with their occurrence counts

        Example:
            >>> matcher = KeywordMatcher(["photo", "receipt"])
            >>> matcher.count_keywords("Photo of shelf, photo of receipt")
            {'photo': 2, 'receipt': 1}
        """
        if self._automaton is None or not text:
            return {}

        matches: Dict[str, int] = {}
        for _end_index, (_idx, keyword) in self._automaton.iter(text.lower()):
            matches[keyword] = matches.get(keyword, 0) + 1

        return matches


def match_any_keywords(keywords: List[str], text: str) -> bool:
    """
    Convenience function to check if any keyword is in text

    Args:
        keywords: List of keywords to search for
        text: Text to search in

    Returns:
        True if at least one keyword is found, False otherwise
    """
    return KeywordMatcher(keywords).contains_any(text)
