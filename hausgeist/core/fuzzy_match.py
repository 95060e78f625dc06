"""Fuzzy matching of loosely worded task references against stored tasks."""

from collections.abc import Sequence

from hausgeist.domain.task import Task


def _words_overlap(needle_word: str, title_words: list[str]) -> bool:
    return any(needle_word in title_word or title_word in needle_word for title_word in title_words)


def find_best_match(identifier: str, candidates: Sequence[Task]) -> Task | None:
    """Resolve a spoken task reference to one concrete task.

    Priority: exact title > title contains identifier > identifier contains
    title > word-overlap score. Ties keep the first candidate in input order.

    Args:
        identifier: Phrase the user used for the task (e.g. "brushing teeth")
        candidates: Tasks to search, usually the open tasks

    Returns:
        Best matching task or None
    """
    if not identifier or not candidates:
        return None

    needle = identifier.lower()

    # Exact match (highest priority)
    for task in candidates:
        if task.title.lower() == needle:
            return task

    # Contains match
    for task in candidates:
        if needle in task.title.lower():
            return task

    # Reverse contains match
    for task in candidates:
        if task.title.lower() in needle:
            return task

    # Word overlap scoring
    needle_words = needle.split()
    best_score = 0
    best_match: Task | None = None
    for task in candidates:
        title_words = task.title.lower().split()
        score = sum(1 for word in needle_words if _words_overlap(word, title_words))
        if score > best_score:
            best_score = score
            best_match = task

    return best_match
