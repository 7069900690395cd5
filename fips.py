"""
County identifiers (5-digit state + county FIPS) and name lookups.
"""
from typing import Any, Dict, Optional


UNKNOWN = 'Unknown'
KEY_DELIMITER = '_'

STATE_NAMES = {
    '01': 'Alabama', '02': 'Alaska', '04': 'Arizona', '05': 'Arkansas',
    '06': 'California', '08': 'Colorado', '09': 'Connecticut', '10': 'Delaware',
    '11': 'District of Columbia', '12': 'Florida', '13': 'Georgia', '15': 'Hawaii',
    '16': 'Idaho', '17': 'Illinois', '18': 'Indiana', '19': 'Iowa',
    '20': 'Kansas', '21': 'Kentucky', '22': 'Louisiana', '23': 'Maine',
    '24': 'Maryland', '25': 'Massachusetts', '26': 'Michigan', '27': 'Minnesota',
    '28': 'Mississippi', '29': 'Missouri', '30': 'Montana', '31': 'Nebraska',
    '32': 'Nevada', '33': 'New Hampshire', '34': 'New Jersey', '35': 'New Mexico',
    '36': 'New York', '37': 'North Carolina', '38': 'North Dakota', '39': 'Ohio',
    '40': 'Oklahoma', '41': 'Oregon', '42': 'Pennsylvania', '44': 'Rhode Island',
    '45': 'South Carolina', '46': 'South Dakota', '47': 'Tennessee', '48': 'Texas',
    '49': 'Utah', '50': 'Vermont', '51': 'Virginia', '53': 'Washington',
    '54': 'West Virginia', '55': 'Wisconsin', '56': 'Wyoming', '72': 'Puerto Rico',
}


def normalize_fips(county_id: Any) -> str:
    """Return the canonical 5-character county identifier.

    Tabular parsing can turn ``"06001"`` into ``6001`` or ``6001.0``;
    all of those map back to ``"06001"``.
    """
    if isinstance(county_id, float) and county_id.is_integer():
        county_id = int(county_id)
    return str(county_id).strip().zfill(5)


def normalize_key(county_id: Any, year: Any) -> str:
    """Composite index key, e.g. ``normalize_key(6001, 2020) == "06001_2020"``."""
    return f"{normalize_fips(county_id)}{KEY_DELIMITER}{year}"


def state_name(county_id: Any) -> str:
    return STATE_NAMES.get(normalize_fips(county_id)[:2], UNKNOWN)


def feature_fips(feature: Dict[str, Any]) -> Optional[str]:
    """STATEFP + COUNTYFP of a boundary feature, or None if either is missing."""
    props = feature.get('properties') or {}
    state_fp = props.get('STATEFP')
    county_fp = props.get('COUNTYFP')
    if state_fp is None or county_fp is None:
        return None
    return f"{state_fp}{county_fp}"


def find_county_feature(boundaries: Optional[Dict[str, Any]], county_id: Any) -> Optional[Dict[str, Any]]:
    if not boundaries:
        return None
    fips_code = normalize_fips(county_id)
    return next(
        (f for f in boundaries.get('features', []) if feature_fips(f) == fips_code),
        None,
    )


def county_name(boundaries: Optional[Dict[str, Any]], county_id: Any) -> str:
    feature = find_county_feature(boundaries, county_id)
    if feature is None:
        return UNKNOWN
    return (feature.get('properties') or {}).get('NAME') or UNKNOWN
