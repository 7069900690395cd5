"""
Settings for the turnout change map.

Values can be overridden through environment variables so the app and
the data service can be pointed at a different host or data directory.
"""
import os


# Data service
API_URL = os.getenv('TURNOUT_API_URL', 'http://localhost:8000')
DATA_DIR = os.getenv('TURNOUT_DATA_DIR', 'data')
HTTP_TIMEOUT = float(os.getenv('TURNOUT_HTTP_TIMEOUT', '30'))

STATS_PATH = '/tool/json/voterturnoutdata-ICPSR.json'
BOUNDARIES_PATH = '/tool/json/counties.geojson'
STATS_FILE = 'voterturnoutdata-ICPSR.json'
BOUNDARIES_FILE = 'counties.geojson'

# Redraw coalescing window, in seconds
REDRAW_DELAY = float(os.getenv('TURNOUT_REDRAW_DELAY', '0.1'))

LOG_LEVEL = os.getenv('TURNOUT_LOG_LEVEL', 'INFO')

# Visualization settings
MAP_CENTER = [39.8, -98.5]  # Center of the US
MAP_ZOOM = 4
DEFAULT_MAP_TILES = 'OpenStreetMap'
