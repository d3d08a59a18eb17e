"""Provider/model pricing for cost estimation."""

# USD per 1M tokens - fallback when tokencost lacks the model
DEFAULT_PRICING = {
    "kimi-k2": {"input": 0.60, "output": 2.50},
    "gpt-4o": {"input": 2.50, "output": 10.00},
    "gpt-4o-mini": {"input": 0.15, "output": 0.60},
    "gpt-4.1": {"input": 2.00, "output": 8.00},
    "gpt-4.1-mini": {"input": 0.40, "output": 1.60},
    "gemini-2.0-flash": {"input": 0.10, "output": 0.40},
    "claude-haiku-4-5": {"input": 1.00, "output": 5.00},
}

DIRECTIONS = ("input", "output")


def get_price_per_million(model: str, direction: str = "input") -> float:
    """Price per 1M tokens for a model in one direction. Returns 0 if unknown."""
    if direction not in DIRECTIONS:
        raise ValueError(f"direction must be one of {DIRECTIONS}, got {direction!r}")

    key = model.lower().split("/")[-1]
    if key in DEFAULT_PRICING:
        return DEFAULT_PRICING[key][direction]

    # tokencost knows several hundred more models
    try:
        from tokencost.costs import calculate_cost_by_tokens

        cost = calculate_cost_by_tokens(1_000_000, model, direction)
        return float(cost)
    except (KeyError, ValueError, ImportError):
        pass

    return 0.0
