"""
Folium rendering of county polygons.

The renderer knows nothing about turnout: it is handed a style callback
and a tooltip callback and draws one GeoJson layer with them.
"""
import logging
from typing import Any, Callable, Dict, Optional

import folium

import config
from color_scale import LEGEND
from fips import feature_fips

logger = logging.getLogger(__name__)

TOOLTIP_FIELD = 'tooltip'

StyleFunction = Callable[[Dict[str, Any]], Dict[str, Any]]
TooltipFunction = Callable[[Dict[str, Any]], str]


def create_base_map() -> folium.Map:
    return folium.Map(
        location=config.MAP_CENTER,
        zoom_start=config.MAP_ZOOM,
        tiles=config.DEFAULT_MAP_TILES,
        zoom_control=True,
        scroll_wheel_zoom=True,
        dragging=True,
        double_click_zoom=False,
    )


def add_legend(m: folium.Map):
    """Add legend to the map."""
    rows = ''.join(
        f'<p style="margin: 4px 0;"><span style="display: inline-block; width: 16px; height: 16px; '
        f'background-color: {bucket.color}; border: 1px solid grey; margin-right: 5px;"></span> {bucket.label}</p>'
        for bucket in LEGEND
    )
    legend_html = f'''
    <div style="position: fixed;
                bottom: 40px; left: 40px; width: 190px;
                background-color: white; border:2px solid grey; z-index:9999;
                font-size:13px; padding: 10px; border-radius: 5px; box-shadow: 0 0 15px rgba(0,0,0,0.2);">
    <p style="margin: 0 0 8px 0; font-weight: bold; font-size: 14px;">Turnout Change (VAP)</p>
    {rows}
    </div>
    '''
    m.get_root().html.add_child(folium.Element(legend_html))


def _annotated_collection(boundaries: Dict[str, Any], tooltip_function: TooltipFunction) -> Dict[str, Any]:
    """Shallow copy of the boundaries with per-feature tooltip text.

    Loaded boundaries are never mutated.
    """
    features = []
    for i, feature in enumerate(boundaries.get('features', [])):
        props = dict(feature.get('properties') or {})
        props[TOOLTIP_FIELD] = tooltip_function(feature)
        feature_id = feature.get('id') or feature_fips(feature) or str(i)
        features.append({**feature, 'id': feature_id, 'properties': props})
    return {'type': 'FeatureCollection', 'features': features}


class CountyMapRenderer:
    """Owns the folium map and its single county layer."""

    def __init__(self, m: Optional[folium.Map] = None):
        self.map = m if m is not None else create_base_map()
        self.render_count = 0
        add_legend(self.map)

    def county_layers(self):
        return [child for child in self.map._children.values() if isinstance(child, folium.GeoJson)]

    def clear(self) -> None:
        """Remove every county layer drawn so far."""
        for name, child in list(self.map._children.items()):
            if isinstance(child, folium.GeoJson):
                del self.map._children[name]

    def render(self, boundaries: Dict[str, Any], style_function: StyleFunction,
               tooltip_function: TooltipFunction) -> Optional[folium.GeoJson]:
        self.clear()
        if not boundaries.get('features'):
            logger.warning("No county boundaries to render")
            return None
        layer = folium.GeoJson(
            _annotated_collection(boundaries, tooltip_function),
            name='counties',
            style_function=style_function,
            tooltip=folium.GeoJsonTooltip(fields=[TOOLTIP_FIELD], labels=False),
        )
        layer.add_to(self.map)
        self.render_count += 1
        logger.debug("Rendered %d county polygons", len(boundaries.get('features', [])))
        return layer


def clicked_fips(map_state: Optional[Dict[str, Any]]) -> Optional[str]:
    """County identifier of the polygon last clicked in st_folium's return value."""
    if not map_state:
        return None
    drawing = map_state.get('last_active_drawing')
    if not drawing:
        return None
    return feature_fips(drawing)


def new_click_fips(map_state: Optional[Dict[str, Any]], last_count: Optional[int]):
    """(county identifier, click count) for a click not handled yet, else (None, last_count).

    st_folium repeats its last click on every rerun; the click counter
    goes up on every click, including repeat clicks at the same spot.
    """
    if not map_state:
        return None, last_count
    count = map_state.get('last_object_clicked_count')
    if not count or count == last_count:
        return None, last_count
    return clicked_fips(map_state), count
