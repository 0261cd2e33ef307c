"""Promotion price toggle.

Switching a product into promotion moves the current price into the original
(struck-through) price and resets the current price so a new one can be typed.
Switching back restores it.
"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class PriceState:
    """Price fields of the product form."""

    price: Optional[float] = None
    original_price: Optional[float] = None
    on_promotion: bool = False


def toggle_promotion(state: PriceState, on_promotion: bool) -> PriceState:
    """
    Apply a change of the promotion flag to the price fields.

    Args:
        state: Current price fields.
        on_promotion: New value of the flag.

    Returns:
        The new price state. Unchanged flags return the state as is.
    """
    if on_promotion == state.on_promotion:
        return state

    if on_promotion:
        if state.price and not state.original_price:
            return PriceState(price=0, original_price=state.price, on_promotion=True)
        return replace(state, on_promotion=True)

    if state.original_price:
        return PriceState(price=state.original_price, original_price=None, on_promotion=False)
    return replace(state, on_promotion=False)
