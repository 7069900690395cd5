"""
Session controller for the turnout change map.

Holds everything one page session needs (datasets, index, selection,
ready flags) and coalesces redraw requests so a burst of year changes
produces a single redraw.

The Streamlit app drives each interaction in its own ``asyncio.run`` and
flushes straight away, so there a trigger only ever sees itself and the
debounce is a fixed delay; bursts of widget changes in the browser are
coalesced by Streamlit superseding reruns. Callers that keep one loop
running across events get the trailing-edge behaviour directly.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

import config
from color_scale import change_color
from county_map import CountyMapRenderer
from data_loader import DataLoadError, TurnoutDataClient
from detail_panel import (
    LOAD_ERROR_HTML, LOADING_HTML, PROMPT_HTML,
    build_county_detail, render_detail_html, tooltip_text,
)
from fips import feature_fips, normalize_fips
from metrics import available_years, default_year_pair, turnout_change
from record_index import RecordIndex, StatRecord

logger = logging.getLogger(__name__)

SELECTED_STROKE = '#ffff00'
DEFAULT_STROKE = 'white'


class DebouncedTask:
    """Trailing-edge debounce on the running asyncio loop.

    Every ``trigger()`` cancels the pending call and schedules a new one,
    so only the most recently scheduled call ever runs.
    """

    def __init__(self, callback: Callable[[], None], delay: float = config.REDRAW_DELAY):
        self.callback = callback
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None
        self._done: Optional[asyncio.Future] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        if self._done is None or self._done.done() or self._done.get_loop() is not loop:
            self._done = loop.create_future()
        self._handle = loop.call_later(self.delay, self._fire)

    def _fire(self) -> None:
        self._handle = None
        done = self._done
        try:
            self.callback()
        except Exception as e:
            if done is not None and not done.done():
                done.set_exception(e)
            raise
        if done is not None and not done.done():
            done.set_result(None)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self._done is not None and not self._done.done():
            self._done.cancel()
        self._done = None

    async def flush(self) -> None:
        """Wait until the pending call, if any, has run."""
        if self._handle is None or self._done is None:
            return
        if self._done.get_loop() is not asyncio.get_running_loop():
            # Scheduled on a loop that has since gone away
            self._handle = None
            self._done = None
            return
        await self._done


class TurnoutMapSession:
    def __init__(self, redraw_delay: float = config.REDRAW_DELAY,
                 renderer_factory: Callable[[], CountyMapRenderer] = CountyMapRenderer):
        self._renderer_factory = renderer_factory
        self._redraw_task = DebouncedTask(self.redraw, redraw_delay)
        self.index = RecordIndex()
        self.reset()

    def reset(self) -> None:
        """Back to the initial, unready state."""
        self._redraw_task.cancel()
        self.records: List[StatRecord] = []
        self.boundaries: Optional[Dict[str, Any]] = None
        self.index.clear()
        self.data_loaded = False
        self.map_initialized = False
        self.renderer: Optional[CountyMapRenderer] = None
        self.selected_fips: Optional[str] = None
        self.current_year: Any = None
        self.previous_year: Any = None
        self.panel_html = PROMPT_HTML
        self.error: Optional[str] = None

    @property
    def ready(self) -> bool:
        return self.data_loaded and self.map_initialized

    @property
    def years(self) -> List[int]:
        return available_years(self.index)

    async def load(self, client: TurnoutDataClient) -> bool:
        """Fetch both datasets, build the index and draw the map.

        On failure nothing is kept and the panel shows the load error.
        """
        self.panel_html = LOADING_HTML
        try:
            records, boundaries = await client.fetch_datasets()
        except DataLoadError as e:
            logger.error("Error fetching data: %s", e)
            self.error = str(e)
            self.panel_html = LOAD_ERROR_HTML
            return False

        self.records = records
        self.boundaries = boundaries
        self.index.build(records)
        logger.info("Built index over %d county-year records", len(self.index))

        if self.current_year is None or self.previous_year is None:
            self.current_year, self.previous_year = default_year_pair(self.years)

        self.error = None
        self.data_loaded = True
        self.panel_html = PROMPT_HTML
        self.init_map()
        return True

    def init_map(self) -> None:
        if self.map_initialized:
            return
        self.renderer = self._renderer_factory()
        self.map_initialized = True
        self.request_redraw()

    def set_years(self, current_year: Any, previous_year: Any) -> None:
        if (current_year, previous_year) == (self.current_year, self.previous_year):
            return
        self.current_year = current_year
        self.previous_year = previous_year
        if self.selected_fips is not None:
            self.display_county_info(self.selected_fips)
        self.request_redraw()

    def select_county(self, fips_code: Any) -> None:
        """Toggle the highlighted county; clicking it again clears the selection."""
        fips_code = normalize_fips(fips_code)
        if self.selected_fips == fips_code:
            self.selected_fips = None
            self.display_county_info(None)
        else:
            self.selected_fips = fips_code
            self.display_county_info(fips_code)
        self.request_redraw()

    def display_county_info(self, fips_code: Optional[str]) -> None:
        detail = None
        if fips_code:
            detail = build_county_detail(
                self.index, self.boundaries, fips_code, self.current_year, self.previous_year
            )
        self.panel_html = render_detail_html(detail)

    def request_redraw(self) -> None:
        self._redraw_task.trigger()

    async def flush(self) -> None:
        await self._redraw_task.flush()

    def redraw(self) -> None:
        if not self.ready:
            return

        # folium evaluates the style callback when the map HTML is built,
        # so pin the selection as it is right now.
        current_year = self.current_year
        previous_year = self.previous_year
        selected_fips = self.selected_fips
        index = self.index

        def style_function(feature):
            fips_code = feature_fips(feature)
            change = turnout_change(index, fips_code, current_year, previous_year)
            is_selected = fips_code is not None and fips_code == selected_fips
            return {
                'fillColor': change_color(change),
                'weight': 3 if is_selected else 0.5,
                'opacity': 1,
                'color': SELECTED_STROKE if is_selected else DEFAULT_STROKE,
                'fillOpacity': 0.7,
            }

        def tooltip_function(feature):
            return tooltip_text(index, feature, feature_fips(feature), current_year, previous_year)

        self.renderer.render(self.boundaries, style_function, tooltip_function)
        logger.info("Redrew map for %s vs %s", current_year, previous_year)
