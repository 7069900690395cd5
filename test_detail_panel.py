from detail_panel import (
    PROMPT_HTML, build_county_detail, format_pct, format_pp,
    render_detail_html, tooltip_text,
)


def test_format_pct():
    assert format_pct(0.6123) == '61.23%'
    assert format_pct(None) == 'N/A'


def test_format_pp():
    assert format_pp(0.02) == '2.00 pp'
    assert format_pp(-0.0705) == '-7.05 pp'
    assert format_pp(None) == 'N/A'


def test_county_detail(index, boundaries):
    detail = build_county_detail(index, boundaries, 6001, 2020, 2016)
    assert detail.fips == '06001'
    assert detail.county_name == 'Alameda'
    assert detail.state_name == 'California'
    assert detail.current.voter_turnout == '61.23%'
    assert detail.previous.voter_turnout == '59.00%'
    assert detail.voter_turnout_change == '2.23 pp'
    assert detail.reg_voters_pct_change == '4.00 pp'
    assert detail.partisan_index_dem == '75.00%'
    assert detail.partisan_index_rep == '20.00%'


def test_missing_previous_year_renders_placeholders(index, boundaries):
    detail = build_county_detail(index, boundaries, '48201', 2020, 2016)
    assert detail.current.voter_turnout == '50.00%'
    assert detail.previous.voter_turnout == 'N/A'
    assert detail.previous.reg_voters_pct == 'N/A'
    assert detail.voter_turnout_change == 'N/A'
    assert detail.reg_voter_turnout_change == 'N/A'
    assert detail.partisan_index_dem == '56.00%'


def test_unknown_county(index, boundaries):
    detail = build_county_detail(index, boundaries, '99999', 2020, 2016)
    assert detail.county_name == 'Unknown'
    assert detail.state_name == 'Unknown'
    assert detail.current.voter_turnout == 'N/A'
    assert detail.partisan_index_rep == 'N/A'


def test_render_detail_html(index, boundaries):
    html = render_detail_html(build_county_detail(index, boundaries, '06001', 2020, 2016))
    assert '<h2>Alameda County, California</h2>' in html
    assert 'Change (2016 to 2020)' in html
    assert 'Partisan Index (2020)' in html
    assert html.index('<strong>2016:</strong>') < html.index('<strong>2020:</strong>')
    assert render_detail_html(None) == PROMPT_HTML


def test_tooltip_text(index, boundaries):
    feature = boundaries['features'][1]
    text = tooltip_text(index, feature, '01001', 2020, 2016)
    assert text == 'Autauga County, Alabama<br>Turnout Change (2016 to 2020): -7.00 pp'

    no_data = tooltip_text(index, boundaries['features'][3], '31005', 2020, 2016)
    assert no_data.endswith('N/A')


def test_county_names_are_escaped(index, boundaries):
    boundaries['features'][0]['properties']['NAME'] = '<b>Alameda</b>'
    panel = render_detail_html(build_county_detail(index, boundaries, '06001', 2020, 2016))
    assert '<h2>&lt;b&gt;Alameda&lt;/b&gt; County, California</h2>' in panel

    text = tooltip_text(index, boundaries['features'][0], '06001', 2020, 2016)
    assert text.startswith('&lt;b&gt;Alameda&lt;/b&gt; County, California<br>')
