"""Cost estimation from token counts."""

from token_estimate.pricing import get_price_per_million


def estimate_cost(tokens: int, model: str, direction: str = "input") -> float:
    """
    Estimate USD cost for ``tokens`` sent to (input) or generated by (output) a model.
    Unknown models cost 0.
    """
    price_per_million = get_price_per_million(model, direction)
    if price_per_million <= 0:
        return 0.0
    return (tokens / 1_000_000) * price_per_million
