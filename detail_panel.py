"""
Side panel and tooltip text for a selected county.
"""
import html
from dataclasses import dataclass
from typing import Any, Dict, Optional

from fips import county_name, normalize_fips, state_name
from metrics import turnout_change, turnout_changes
from record_index import RecordIndex, StatRecord

NOT_AVAILABLE = 'N/A'

PROMPT_HTML = """<h2>Click a County for Details</h2>
<p>Map shows the percentage point change in Voter Turnout (VAP) between the selected years.</p>"""

LOADING_HTML = '<p>Loading map data...</p>'

LOAD_ERROR_HTML = '<p style="color: red;">Error loading map data. Please refresh the page.</p>'


def format_pct(value: Optional[float]) -> str:
    """0.6123 -> '61.23%'"""
    if value is None:
        return NOT_AVAILABLE
    return f"{value * 100:.2f}%"


def format_pp(change: Optional[float]) -> str:
    """0.02 -> '2.00 pp'"""
    if change is None:
        return NOT_AVAILABLE
    return f"{change * 100:.2f} pp"


@dataclass(frozen=True)
class YearSummary:
    year: Any
    reg_voters_pct: str
    voter_turnout: str
    reg_voter_turnout: str


@dataclass(frozen=True)
class CountyDetail:
    fips: str
    county_name: str
    state_name: str
    current: YearSummary
    previous: YearSummary
    reg_voters_pct_change: str
    voter_turnout_change: str
    reg_voter_turnout_change: str
    partisan_index_dem: str
    partisan_index_rep: str


def _year_summary(record: Optional[StatRecord], year: Any) -> YearSummary:
    return YearSummary(
        year=year,
        reg_voters_pct=format_pct(record.reg_voters_pct if record else None),
        voter_turnout=format_pct(record.voter_turnout_pct if record else None),
        reg_voter_turnout=format_pct(record.reg_voter_turnout_pct if record else None),
    )


def build_county_detail(index: RecordIndex, boundaries: Optional[Dict[str, Any]],
                        fips_code: Any, current_year: Any, previous_year: Any) -> CountyDetail:
    """Formatted comparison of two years for one county.

    Missing records never raise; every field that depends on one reads 'N/A'.
    """
    fips_code = normalize_fips(fips_code)
    current = index.lookup(fips_code, current_year)
    previous = index.lookup(fips_code, previous_year)
    changes = turnout_changes(index, fips_code, current_year, previous_year)

    return CountyDetail(
        fips=fips_code,
        county_name=county_name(boundaries, fips_code),
        state_name=state_name(fips_code),
        current=_year_summary(current, current_year),
        previous=_year_summary(previous, previous_year),
        reg_voters_pct_change=format_pp(changes.reg_voters_pct if changes else None),
        voter_turnout_change=format_pp(changes.voter_turnout if changes else None),
        reg_voter_turnout_change=format_pp(changes.reg_voter_turnout if changes else None),
        partisan_index_dem=format_pct(current.partisan_index_dem if current else None),
        partisan_index_rep=format_pct(current.partisan_index_rep if current else None),
    )


def _year_block(summary: YearSummary) -> str:
    return (
        f"<p><strong>{summary.year}:</strong><br>\n"
        f"&nbsp;&nbsp;• Percent of Voting Age Registered: {summary.reg_voters_pct}<br>\n"
        f"&nbsp;&nbsp;• Voter Turnout (VAP): {summary.voter_turnout}<br>\n"
        f"&nbsp;&nbsp;• Registered Voter Turnout: {summary.reg_voter_turnout}</p>"
    )


def render_detail_html(detail: Optional[CountyDetail]) -> str:
    """Panel markup; with no selection, the click prompt."""
    if detail is None:
        return PROMPT_HTML

    return f"""<h2>{html.escape(detail.county_name)} County, {html.escape(detail.state_name)}</h2>
<h3>Turnout Comparison</h3>
{_year_block(detail.previous)}
{_year_block(detail.current)}
<p><strong>Change ({detail.previous.year} to {detail.current.year}):</strong><br>
&nbsp;&nbsp;• Percent Registered: {detail.reg_voters_pct_change}<br>
&nbsp;&nbsp;• Voter Turnout (VAP): {detail.voter_turnout_change}<br>
&nbsp;&nbsp;• Registered Voter Turnout: {detail.reg_voter_turnout_change}</p>
<h3>Partisan Index ({detail.current.year})</h3>
<p><strong>Partisan Index (Dem):</strong> {detail.partisan_index_dem}</p>
<p><strong>Partisan Index (Rep):</strong> {detail.partisan_index_rep}</p>"""


def tooltip_text(index: RecordIndex, feature: Dict[str, Any], fips_code: str,
                 current_year: Any, previous_year: Any) -> str:
    props = feature.get('properties') or {}
    name = html.escape(props.get('NAME') or 'Unknown')
    state = state_name(fips_code)
    change = turnout_change(index, fips_code, current_year, previous_year)
    return (
        f"{name} County, {state}<br>"
        f"Turnout Change ({previous_year} to {current_year}): {format_pp(change)}"
    )
