"""
Word-level comparison of a candidate text against a reference text.

Each token is a word together with the whitespace around it, so joining
the tokens of a text gives the text back unchanged. Tokens are matched
on the word alone: a word that ends a line in one text and sits
mid-line in the other is unchanged.

Alignment is a minimal edit script computed by diff-match-patch over
word-encoded strings (one character per distinct word).
"""

import logging
import re

from diff_match_patch import diff_match_patch

# Handle both package imports and standalone imports
try:
    from ..models import ComparisonResult, DiffSegment, SegmentKind
except ImportError:
    from models import ComparisonResult, DiffSegment, SegmentKind

logger = logging.getLogger(__name__)

# Leading whitespace belongs to the first word; the second branch only
# matches whitespace-only text
TOKEN_PATTERN = re.compile(r"\s*\S+\s*|\s+")

SURROGATE_START = 0xD800
SURROGATE_SPAN = 0x800


def tokenize(text: str) -> list[str]:
    """Split text into word tokens that concatenate back to ``text``."""
    return TOKEN_PATTERN.findall(text)


def token_key(token: str) -> str:
    """Identity of a token for matching: the word without its whitespace."""
    return token.strip()


def _encode_words(keys: list[str], codes: dict[str, int]) -> str:
    """Map each distinct word to one character, sharing ``codes`` across texts."""
    chars = []
    for key in keys:
        code = codes.get(key)
        if code is None:
            code = len(codes) + 1
            if code >= SURROGATE_START:
                code += SURROGATE_SPAN
            codes[key] = code
        chars.append(chr(code))
    return "".join(chars)


def _align(first: list[str], second: list[str]) -> list[tuple[int, int]]:
    """
    Minimal edit script between two word lists.

    Returns ``(op, length)`` pairs using diff-match-patch operation codes.
    """
    dmp = diff_match_patch()
    # No timeout: the bisection runs to the optimal path and is deterministic
    dmp.Diff_Timeout = 0

    codes: dict[str, int] = {}
    first_chars = _encode_words(first, codes)
    second_chars = _encode_words(second, codes)

    diffs = dmp.diff_main(first_chars, second_chars, False)
    return [(op, len(chars)) for op, chars in diffs]


def diff_tokens(reference: str, candidate: str) -> list[DiffSegment]:
    """
    Compute the ordered word diff between two texts.

    Each changed hunk produces a removed segment (reference tokens)
    followed by an added segment (candidate tokens). Unchanged segments
    carry the candidate's text. Empty segments are never emitted.

    The alignment is always computed with the lexicographically smaller
    word list first, so that swapping the arguments yields the mirrored
    diff.
    """
    old = tokenize(reference)
    new = tokenize(candidate)
    old_keys = [token_key(token) for token in old]
    new_keys = [token_key(token) for token in new]

    swapped = new_keys < old_keys
    if swapped:
        script = _align(new_keys, old_keys)
    else:
        script = _align(old_keys, new_keys)

    segments: list[DiffSegment] = []
    removed: list[str] = []
    added: list[str] = []

    def flush_hunk():
        if removed:
            segments.append(_segment(SegmentKind.REMOVED, removed))
        if added:
            segments.append(_segment(SegmentKind.ADDED, added))
        removed.clear()
        added.clear()

    i = j = 0
    for op, length in script:
        if swapped:
            op = -op

        if op == diff_match_patch.DIFF_EQUAL:
            flush_hunk()
            segments.append(_segment(SegmentKind.UNCHANGED, new[j : j + length]))
            i += length
            j += length
        elif op == diff_match_patch.DIFF_DELETE:
            removed.extend(old[i : i + length])
            i += length
        else:
            added.extend(new[j : j + length])
            j += length
    flush_hunk()

    return segments


def _segment(kind: SegmentKind, tokens: list[str]) -> DiffSegment:
    return DiffSegment(value="".join(tokens), count=len(tokens), kind=kind)


class ComparisonService:
    """Compares uploaded text against a reference text."""

    def compare(self, reference: str, candidate: str) -> ComparisonResult:
        """
        Diff ``candidate`` against ``reference``.

        Args:
            reference: Baseline text.
            candidate: Text extracted from the uploaded document.

        Returns:
            ComparisonResult with the full diff plus the trimmed text of
            every removed segment (missing) and added segment (additional).
        """
        diff = diff_tokens(reference, candidate)
        missing = [s.value.strip() for s in diff if s.kind is SegmentKind.REMOVED]
        additional = [s.value.strip() for s in diff if s.kind is SegmentKind.ADDED]

        logger.info(
            "Comparison complete: %d segment(s), %d missing, %d additional",
            len(diff),
            len(missing),
            len(additional),
        )
        return ComparisonResult(diff=diff, missing=missing, additional=additional)


# Singleton instance for convenience
_comparison_service: ComparisonService | None = None


def get_comparison_service() -> ComparisonService:
    """Get or create the comparison service singleton."""
    global _comparison_service
    if _comparison_service is None:
        _comparison_service = ComparisonService()
    return _comparison_service
