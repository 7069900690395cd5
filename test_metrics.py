import pytest

from metrics import (
    TurnoutChange, available_years, default_year_pair, delta_table,
    turnout_change, turnout_changes,
)
from record_index import RecordIndex, StatRecord


def test_turnout_changes(index):
    changes = turnout_changes(index, '06001', 2020, 2016)
    assert isinstance(changes, TurnoutChange)
    assert changes.voter_turnout == pytest.approx(0.0223)
    assert changes.reg_voter_turnout == pytest.approx(0.05)
    assert changes.reg_voters_pct == pytest.approx(0.04)


def test_changes_are_antisymmetric(index):
    forward = turnout_changes(index, '01001', 2020, 2016)
    backward = turnout_changes(index, '01001', 2016, 2020)
    for a, b in zip(forward, backward):
        assert a == -b


def test_missing_year_is_absent(index):
    assert turnout_changes(index, '48201', 2020, 2016) is None
    assert turnout_change(index, '48201', 2020, 2016) is None
    assert turnout_changes(index, '06001', 2020, 2012) is None


def test_single_change_matches_full(index):
    assert turnout_change(index, '01001', 2020, 2016) == turnout_changes(index, '01001', 2020, 2016).voter_turnout


def test_null_metric_only_affects_that_metric():
    index = RecordIndex([
        StatRecord(fips='06001', year=2016, voter_turnout_pct=None, reg_voter_turnout_pct=0.7, reg_voters_pct=0.7),
        StatRecord(fips='06001', year=2020, voter_turnout_pct=0.6, reg_voter_turnout_pct=0.8, reg_voters_pct=0.7),
    ])
    changes = turnout_changes(index, '06001', 2020, 2016)
    assert changes.voter_turnout is None
    assert changes.reg_voter_turnout == pytest.approx(0.1)
    assert turnout_change(index, '06001', 2020, 2016) is None


def test_year_defaults(index):
    assert available_years(index) == [2016, 2020]
    assert default_year_pair([2012, 2020, 2016]) == (2020, 2016)
    assert default_year_pair([2016]) == (2016, 2016)
    assert default_year_pair([]) == (None, None)


def test_delta_table(index):
    df = delta_table(index, index.fips_codes(), 2020, 2016)
    assert list(df['fips']) == ['01001', '06001', '48201']
    rows = df.set_index('fips')
    assert rows.loc['01001', 'voter_turnout_change'] == pytest.approx(-0.07)
    assert rows.loc['01001', 'bucket'] == '-5 pp or less'
    assert rows.loc['06001', 'bucket'] == '+2 to +5 pp'
    assert rows.loc['48201', 'bucket'] == 'No data'
    assert df['voter_turnout_change'].isna().sum() == 1
