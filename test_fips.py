from fips import (
    STATE_NAMES, county_name, feature_fips, find_county_feature,
    normalize_fips, normalize_key, state_name,
)


def test_normalize_fips_pads_to_five_characters():
    assert normalize_fips(6001) == '06001'
    assert normalize_fips('6001') == '06001'
    assert normalize_fips(6001.0) == '06001'
    assert normalize_fips(' 48201 ') == '48201'


def test_normalize_key_is_deterministic():
    assert normalize_key(6001, 2020) == '06001_2020'
    assert normalize_key('06001', '2020') == normalize_key(6001, 2020)


def test_normalize_key_does_not_collide():
    keys = {normalize_key(fips, year) for fips in ('01001', '10010', '00110') for year in (2016, 2020)}
    assert len(keys) == 6


def test_state_table():
    assert len(STATE_NAMES) == 52
    assert state_name('06001') == 'California'
    assert state_name(1001) == 'Alabama'
    assert state_name('99001') == 'Unknown'


def test_feature_lookup(boundaries):
    feature = boundaries['features'][0]
    assert feature_fips(feature) == '06001'
    assert feature_fips({'properties': {'STATEFP': '06'}}) is None
    assert find_county_feature(boundaries, 6001) is feature
    assert county_name(boundaries, '48201') == 'Harris'


def test_unresolved_county_name_is_unknown(boundaries):
    assert county_name(boundaries, '99999') == 'Unknown'
    assert county_name(None, '06001') == 'Unknown'
