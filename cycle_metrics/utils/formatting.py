"""Number formatting for metric report lines."""

import math


def format_number(value: float) -> str:
    """Format a value with grouped thousands and at most one decimal place.

    Equivalent to the decimal pattern ``,##0.#``: ``1234.56`` renders as
    ``"1,234.6"`` and ``5`` as ``"5"``.

    Args:
        value: The number to format.

    Returns:
        The formatted string. Non-finite values render as ``inf``/``nan``.
    """
    if not math.isfinite(value):
        return str(float(value))

    text = f"{value:,.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return text
