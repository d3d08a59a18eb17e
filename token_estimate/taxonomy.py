"""Character taxonomies: per-category Stats records and their classification rules.

Two taxonomy profiles exist side by side. ``BASIC`` buckets text into six
English/CJK/other categories; ``SCRIPT`` distinguishes ten script-specific
categories and applies the Latin-extended correction after counting. Each
profile has its own Stats shape, and the regression weights trained for one
profile are never valid for the other.
"""

from collections import Counter
from dataclasses import asdict, dataclass, fields, replace
from typing import Callable, Mapping, Optional

from token_estimate import charsets

# Latin-extended counts above latin_letters // LATIN_EXTENDED_DIVISOR are moved to symbols
LATIN_EXTENDED_DIVISOR = 15


class _StatsMixin:
    """Shared helpers for the fixed-shape Stats records."""

    @classmethod
    def categories(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @property
    def total(self) -> int:
        """Sum of all counters."""
        return sum(getattr(self, name) for name in self.categories())

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class BasicStats(_StatsMixin):
    """Character counts for the six-category English/CJK taxonomy."""

    symbols: int = 0
    letters: int = 0
    digits: int = 0
    cjk: int = 0
    spaces: int = 0
    other: int = 0


@dataclass(frozen=True)
class ScriptStats(_StatsMixin):
    """Character counts for the ten-category script-specific taxonomy."""

    symbols: int = 0
    latin_letters: int = 0
    latin_extended: int = 0
    digits: int = 0
    chinese: int = 0
    japanese: int = 0
    korean: int = 0
    russian: int = 0
    arabic: int = 0
    spaces: int = 0


Rule = tuple[str, Callable[[str], bool]]


@dataclass(frozen=True)
class Taxonomy:
    """A closed category set: Stats shape, ordered rule table and correction.

    Rules are tried in order and the first predicate that matches decides the
    category; characters matching no rule go to ``fallback``. When
    ``extended_category`` is set, counts in it exceeding
    ``base_category // LATIN_EXTENDED_DIVISOR`` are moved to
    ``overflow_category``.
    """

    name: str
    stats_type: type
    rules: tuple[Rule, ...]
    fallback: str
    extended_category: Optional[str] = None
    base_category: Optional[str] = None
    overflow_category: Optional[str] = None

    @property
    def categories(self) -> tuple[str, ...]:
        return self.stats_type.categories()

    def category_of(self, ch: str) -> str:
        """Category of a single code point."""
        for category, matches in self.rules:
            if matches(ch):
                return category
        return self.fallback

    def build(self, counts: Mapping[str, int]):
        """Create a Stats record from a category -> count mapping."""
        return self.stats_type(**{name: counts.get(name, 0) for name in self.categories})

    def correct(self, stats):
        """Apply the Latin-extended cap, if this taxonomy has one."""
        if self.extended_category is None:
            return stats
        extended = getattr(stats, self.extended_category)
        base = getattr(stats, self.base_category)
        excess = extended - base // LATIN_EXTENDED_DIVISOR
        if excess <= 0:
            return stats
        return replace(
            stats,
            **{
                self.extended_category: extended - excess,
                self.overflow_category: getattr(stats, self.overflow_category) + excess,
            },
        )

    def count(self, chars) -> Counter:
        """Raw per-category counts for an iterable of code points."""
        return Counter(map(self.category_of, chars))

    def classify(self, text: str):
        """Classify every code point of text and return corrected Stats."""
        return self.correct(self.build(self.count(text)))


BASIC = Taxonomy(
    name="basic",
    stats_type=BasicStats,
    rules=(
        ("letters", charsets.is_ascii_letter),
        ("digits", charsets.is_digit),
        ("cjk", charsets.is_cjk),
        ("symbols", charsets.is_ascii_symbol),
        ("spaces", charsets.is_space),
    ),
    fallback="other",
)

SCRIPT = Taxonomy(
    name="script",
    stats_type=ScriptStats,
    rules=(
        ("latin_letters", charsets.is_ascii_letter),
        ("latin_extended", charsets.is_latin_extended),
        ("digits", charsets.is_digit),
        ("japanese", charsets.is_japanese_kana),
        ("korean", charsets.is_korean_hangul),
        ("chinese", charsets.is_han),
        ("russian", charsets.is_cyrillic),
        ("arabic", charsets.is_arabic),
        ("symbols", charsets.is_ascii_symbol),
        ("spaces", charsets.is_space),
    ),
    # unmatched characters count as symbols in this profile
    fallback="symbols",
    extended_category="latin_extended",
    base_category="latin_letters",
    overflow_category="symbols",
)
