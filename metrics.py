"""
Year-over-year turnout changes for a county.

All changes are ``current - previous`` on the fractional scale
(0.61 - 0.59 == 0.02); rounding belongs to the presentation layer.
"""
from typing import Any, Iterable, List, NamedTuple, Optional, Tuple

import pandas as pd

from color_scale import classify
from fips import normalize_fips
from record_index import RecordIndex


class TurnoutChange(NamedTuple):
    voter_turnout: Optional[float]
    reg_voter_turnout: Optional[float]
    reg_voters_pct: Optional[float]


def _diff(current: Optional[float], previous: Optional[float]) -> Optional[float]:
    if current is None or previous is None:
        return None
    return current - previous


def turnout_changes(index: RecordIndex, fips_code: Any, current_year: Any,
                    previous_year: Any) -> Optional[TurnoutChange]:
    """All three metric changes, or None when either year has no record."""
    current = index.lookup(fips_code, current_year)
    previous = index.lookup(fips_code, previous_year)
    if current is None or previous is None:
        return None

    return TurnoutChange(
        voter_turnout=_diff(current.voter_turnout_pct, previous.voter_turnout_pct),
        reg_voter_turnout=_diff(current.reg_voter_turnout_pct, previous.reg_voter_turnout_pct),
        reg_voters_pct=_diff(current.reg_voters_pct, previous.reg_voters_pct),
    )


def turnout_change(index: RecordIndex, fips_code: Any, current_year: Any,
                   previous_year: Any) -> Optional[float]:
    """Voter turnout (VAP) change only; called once per polygon on every redraw."""
    current = index.lookup(fips_code, current_year)
    previous = index.lookup(fips_code, previous_year)
    if current is None or previous is None:
        return None
    return _diff(current.voter_turnout_pct, previous.voter_turnout_pct)


def available_years(index: RecordIndex) -> List[int]:
    return index.years()


def default_year_pair(years: List[int]) -> Tuple[Optional[int], Optional[int]]:
    """(current, previous) defaults for the year selectors: the two latest years."""
    if not years:
        return None, None
    ordered = sorted(years)
    if len(ordered) == 1:
        return ordered[0], ordered[0]
    return ordered[-1], ordered[-2]


def delta_table(index: RecordIndex, fips_codes: Iterable[Any], current_year: Any,
                previous_year: Any) -> pd.DataFrame:
    """One row per county with the three changes and the map colour bucket."""
    rows = []
    for fips_code in fips_codes:
        changes = turnout_changes(index, fips_code, current_year, previous_year)
        voter_turnout = changes.voter_turnout if changes else None
        rows.append({
            'fips': normalize_fips(fips_code),
            'voter_turnout_change': voter_turnout,
            'reg_voter_turnout_change': changes.reg_voter_turnout if changes else None,
            'reg_voters_pct_change': changes.reg_voters_pct if changes else None,
            'bucket': classify(voter_turnout).label,
        })

    columns = ['fips', 'voter_turnout_change', 'reg_voter_turnout_change',
               'reg_voters_pct_change', 'bucket']
    df = pd.DataFrame(rows, columns=columns)
    for col in columns[1:4]:
        df[col] = pd.to_numeric(df[col], errors='coerce')
    return df
