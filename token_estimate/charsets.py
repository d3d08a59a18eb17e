"""Unicode code-point range tables used to classify characters by script."""

# Inclusive (start, end) code-point ranges per script block
LATIN_EXTENDED_RANGES = (
    (0x00C0, 0x00FF),  # Latin-1 Supplement (à, ñ, ü, etc.)
    (0x0100, 0x017F),  # Latin Extended-A
    (0x0180, 0x024F),  # Latin Extended-B
    (0x1E00, 0x1EFF),  # Latin Extended Additional
)

JAPANESE_KANA_RANGES = (
    (0x3040, 0x309F),  # Hiragana
    (0x30A0, 0x30FF),  # Katakana
)

KOREAN_HANGUL_RANGES = (
    (0xAC00, 0xD7AF),  # Hangul Syllables
    (0x1100, 0x11FF),  # Hangul Jamo
    (0x3130, 0x318F),  # Hangul Compatibility Jamo
    (0xA960, 0xA97F),  # Hangul Jamo Extended-A
    (0xD7B0, 0xD7FF),  # Hangul Jamo Extended-B
)

HAN_RANGES = (
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
    (0x3400, 0x4DBF),  # Extension A
    (0x20000, 0x2A6DF),  # Extension B
    (0x2A700, 0x2B73F),  # Extension C
    (0x2B740, 0x2B81F),  # Extension D
    (0x2B820, 0x2CEAF),  # Extension E
    (0x2CEB0, 0x2EBEF),  # Extension F
    (0x30000, 0x3134F),  # Extension G
)

CYRILLIC_RANGES = (
    (0x0400, 0x04FF),  # Cyrillic
    (0x0500, 0x052F),  # Cyrillic Supplement
    (0x2DE0, 0x2DFF),  # Cyrillic Extended-A
    (0xA640, 0xA69F),  # Cyrillic Extended-B
    (0x1C80, 0x1C8F),  # Cyrillic Extended-C
)

ARABIC_RANGES = (
    (0x0600, 0x06FF),  # Arabic
    (0x0750, 0x077F),  # Arabic Supplement
    (0x08A0, 0x08FF),  # Arabic Extended-A
    (0xFB50, 0xFDFF),  # Arabic Presentation Forms-A
    (0xFE70, 0xFEFF),  # Arabic Presentation Forms-B
)

ASCII_SYMBOL_RANGES = (
    (0x21, 0x2F),  # !"#$%&'()*+,-./
    (0x3A, 0x40),  # :;<=>?@
    (0x5B, 0x60),  # [\]^_`
    (0x7B, 0x7E),  # {|}~
)


def _in_ranges(cp: int, ranges: tuple[tuple[int, int], ...]) -> bool:
    for start, end in ranges:
        if start <= cp <= end:
            return True
    return False


def is_ascii_letter(ch: str) -> bool:
    """ASCII a-z / A-Z."""
    return ord(ch) < 128 and ch.isalpha()


def is_digit(ch: str) -> bool:
    """Any Unicode decimal digit (general category Nd), not only 0-9."""
    return ch.isdecimal()


def is_space(ch: str) -> bool:
    """Unicode whitespace. The U+001C-U+001F separators are not spaces."""
    return ch.isspace() and not "\x1c" <= ch <= "\x1f"


def is_latin_extended(ch: str) -> bool:
    return _in_ranges(ord(ch), LATIN_EXTENDED_RANGES)


def is_japanese_kana(ch: str) -> bool:
    return _in_ranges(ord(ch), JAPANESE_KANA_RANGES)


def is_korean_hangul(ch: str) -> bool:
    return _in_ranges(ord(ch), KOREAN_HANGUL_RANGES)


def is_han(ch: str) -> bool:
    return _in_ranges(ord(ch), HAN_RANGES)


def is_cjk(ch: str) -> bool:
    """Han ideographs, Japanese kana or Korean Hangul."""
    return is_han(ch) or is_japanese_kana(ch) or is_korean_hangul(ch)


def is_cyrillic(ch: str) -> bool:
    return _in_ranges(ord(ch), CYRILLIC_RANGES)


def is_arabic(ch: str) -> bool:
    return _in_ranges(ord(ch), ARABIC_RANGES)


def is_ascii_symbol(ch: str) -> bool:
    """ASCII punctuation or symbol."""
    return _in_ranges(ord(ch), ASCII_SYMBOL_RANGES)
