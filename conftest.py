import pytest

from record_index import RecordIndex, StatRecord


def _square(x, y):
    return {
        'type': 'Polygon',
        'coordinates': [[[x, y], [x + 1, y], [x + 1, y + 1], [x, y + 1], [x, y]]],
    }


STAT_ROWS = [
    {'STCOFIPS10': 6001, 'YEAR': 2016, 'VOTER_TURNOUT_PCT': 0.59, 'REG_VOTER_TURNOUT_PCT': 0.75,
     'REG_VOTERS_PCT': 0.70, 'PARTISAN_INDEX_DEM': 0.70, 'PARTISAN_INDEX_REP': 0.22},
    {'STCOFIPS10': 6001, 'YEAR': 2020, 'VOTER_TURNOUT_PCT': 0.6123, 'REG_VOTER_TURNOUT_PCT': 0.80,
     'REG_VOTERS_PCT': 0.74, 'PARTISAN_INDEX_DEM': 0.75, 'PARTISAN_INDEX_REP': 0.20},
    {'STCOFIPS10': '01001', 'YEAR': 2016, 'VOTER_TURNOUT_PCT': 0.55, 'REG_VOTER_TURNOUT_PCT': 0.70,
     'REG_VOTERS_PCT': 0.78, 'PARTISAN_INDEX_DEM': 0.25, 'PARTISAN_INDEX_REP': 0.72},
    {'STCOFIPS10': '01001', 'YEAR': 2020, 'VOTER_TURNOUT_PCT': 0.48, 'REG_VOTER_TURNOUT_PCT': 0.66,
     'REG_VOTERS_PCT': 0.76, 'PARTISAN_INDEX_DEM': 0.27, 'PARTISAN_INDEX_REP': 0.71},
    # Only reported in 2020
    {'STCOFIPS10': '48201', 'YEAR': 2020, 'VOTER_TURNOUT_PCT': 0.50, 'REG_VOTER_TURNOUT_PCT': 0.68,
     'REG_VOTERS_PCT': 0.73, 'PARTISAN_INDEX_DEM': 0.56, 'PARTISAN_INDEX_REP': 0.42},
]

BOUNDARIES = {
    'type': 'FeatureCollection',
    'features': [
        {'type': 'Feature', 'geometry': _square(-122, 37),
         'properties': {'STATEFP': '06', 'COUNTYFP': '001', 'NAME': 'Alameda'}},
        {'type': 'Feature', 'geometry': _square(-87, 32),
         'properties': {'STATEFP': '01', 'COUNTYFP': '001', 'NAME': 'Autauga'}},
        {'type': 'Feature', 'geometry': _square(-95, 29),
         'properties': {'STATEFP': '48', 'COUNTYFP': '201', 'NAME': 'Harris'}},
        # Boundary with no statistics at all
        {'type': 'Feature', 'geometry': _square(-100, 40),
         'properties': {'STATEFP': '31', 'COUNTYFP': '005', 'NAME': 'Arthur'}},
    ],
}


@pytest.fixture
def stat_rows():
    return [dict(row) for row in STAT_ROWS]


@pytest.fixture
def records(stat_rows):
    return [StatRecord.from_dict(row) for row in stat_rows]


@pytest.fixture
def index(records):
    return RecordIndex(records)


@pytest.fixture
def boundaries():
    return {
        'type': 'FeatureCollection',
        'features': [
            {**f, 'properties': dict(f['properties'])} for f in BOUNDARIES['features']
        ],
    }
