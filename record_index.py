"""
Per-county turnout statistics and the (county, year) lookup index.
"""
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from fips import normalize_fips, normalize_key

logger = logging.getLogger(__name__)


def _ratio(value: Any) -> Optional[float]:
    """Coerce a ratio field to float; None for nulls, NaN and junk."""
    if value is None:
        return None
    try:
        value = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(value) else value


@dataclass(frozen=True)
class StatRecord:
    """One county's statistics for one election year.

    Ratio fields are fractions in [0, 1], not percentages.
    """
    fips: str
    year: int
    voter_turnout_pct: Optional[float] = None
    reg_voter_turnout_pct: Optional[float] = None
    reg_voters_pct: Optional[float] = None
    partisan_index_dem: Optional[float] = None
    partisan_index_rep: Optional[float] = None

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> 'StatRecord':
        return cls(
            fips=normalize_fips(row['STCOFIPS10']),
            year=int(row['YEAR']),
            voter_turnout_pct=_ratio(row.get('VOTER_TURNOUT_PCT')),
            reg_voter_turnout_pct=_ratio(row.get('REG_VOTER_TURNOUT_PCT')),
            reg_voters_pct=_ratio(row.get('REG_VOTERS_PCT')),
            partisan_index_dem=_ratio(row.get('PARTISAN_INDEX_DEM')),
            partisan_index_rep=_ratio(row.get('PARTISAN_INDEX_REP')),
        )

    @property
    def key(self) -> str:
        return normalize_key(self.fips, self.year)


class RecordIndex:
    """Maps ``"<5-digit fips>_<year>"`` to exactly one StatRecord.

    Duplicate (county, year) rows are resolved last-write-wins.
    """

    def __init__(self, records: Iterable[StatRecord] = ()):
        self._records: Dict[str, StatRecord] = {}
        self.build(records)

    def build(self, records: Iterable[StatRecord]) -> 'RecordIndex':
        """Replace the index contents with ``records``."""
        self._records = {}
        for record in records:
            self._records[record.key] = record
        logger.debug("Indexed %d county-year records", len(self._records))
        return self

    def lookup(self, county_id: Any, year: Any) -> Optional[StatRecord]:
        return self._records.get(normalize_key(county_id, year))

    def years(self) -> List[int]:
        return sorted({record.year for record in self._records.values()})

    def fips_codes(self) -> List[str]:
        return sorted({record.fips for record in self._records.values()})

    def clear(self) -> None:
        self._records = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, item) -> bool:
        county_id, year = item
        return normalize_key(county_id, year) in self._records


def build_index(records: Iterable[StatRecord]) -> RecordIndex:
    return RecordIndex(records)
