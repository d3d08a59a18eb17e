"""Exact tiktoken reference counts for checking regression estimates."""

from functools import lru_cache


@lru_cache(maxsize=16)
def _get_tiktoken_encoder(model: str = "gpt-4.1"):
    """Lazy load tiktoken encoder. Models missing from tiktoken's registry fall back to o200k_base."""
    import tiktoken

    try:
        return tiktoken.encoding_for_model(model)
    except KeyError:
        # e.g. gpt-4.1 is not registered yet; same family as gpt-4o
        return tiktoken.get_encoding("o200k_base")


def count_text_tokens(text: str, model: str = "gpt-4.1") -> int:
    """Exact token count for text using tiktoken."""
    enc = _get_tiktoken_encoder(model)
    return len(enc.encode(text, disallowed_special=()))


def relative_error(estimated: int, actual: int) -> float:
    """|estimated - actual| / actual as a percentage; 0 when both are 0."""
    if actual == 0:
        return 0.0 if estimated == 0 else 100.0
    return abs(estimated - actual) / actual * 100
