"""
Diverging colour scale for turnout change, in percentage points.
"""
from enum import Enum
from typing import Optional


class ColorBucket(Enum):
    NO_DATA = ('#c0d8c1', 'No data')
    STRONG_INCREASE = ('#00441b', '+5 pp or more')
    MODERATE_INCREASE = ('#238b45', '+2 to +5 pp')
    SLIGHT_INCREASE = ('#a1d99b', '+0.5 to +2 pp')
    NEAR_ZERO = ('#f7f7f7', '-0.5 to +0.5 pp')
    SLIGHT_DECREASE = ('#fcae91', '-0.5 to -2 pp')
    MODERATE_DECREASE = ('#de2d26', '-2 to -5 pp')
    STRONG_DECREASE = ('#a50f15', '-5 pp or less')

    def __init__(self, color: str, label: str):
        self.color = color
        self.label = label


# Top to bottom as drawn in the legend
LEGEND = [
    ColorBucket.STRONG_INCREASE,
    ColorBucket.MODERATE_INCREASE,
    ColorBucket.SLIGHT_INCREASE,
    ColorBucket.NEAR_ZERO,
    ColorBucket.SLIGHT_DECREASE,
    ColorBucket.MODERATE_DECREASE,
    ColorBucket.STRONG_DECREASE,
    ColorBucket.NO_DATA,
]


def classify(change: Optional[float]) -> ColorBucket:
    """Bucket a fractional change (0.02 == +2 pp).

    Checks run from largest to smallest and the first match wins, so
    increases are inclusive at +0.5/+2/+5 while decreases are exclusive
    at -0.5/-2/-5 and -5 itself falls through to STRONG_DECREASE.
    """
    if change is None:
        return ColorBucket.NO_DATA

    change_pp = change * 100

    if change_pp >= 5:
        return ColorBucket.STRONG_INCREASE
    if change_pp >= 2:
        return ColorBucket.MODERATE_INCREASE
    if change_pp >= 0.5:
        return ColorBucket.SLIGHT_INCREASE
    if change_pp > -0.5:
        return ColorBucket.NEAR_ZERO
    if change_pp > -2:
        return ColorBucket.SLIGHT_DECREASE
    if change_pp > -5:
        return ColorBucket.MODERATE_DECREASE
    return ColorBucket.STRONG_DECREASE


def change_color(change: Optional[float]) -> str:
    """Hex fill colour for a fractional change."""
    return classify(change).color
