"""
Client for the turnout data service.

Both datasets are requested concurrently and the load only succeeds if
both do; a single failure discards whatever the other request returned.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pandas as pd

import config
from record_index import StatRecord

logger = logging.getLogger(__name__)

STAT_FIELDS = [
    'VOTER_TURNOUT_PCT', 'REG_VOTER_TURNOUT_PCT', 'REG_VOTERS_PCT',
    'PARTISAN_INDEX_DEM', 'PARTISAN_INDEX_REP',
]


class DataLoadError(RuntimeError):
    """Either dataset could not be fetched or decoded."""


def parse_stat_records(payload: Any) -> List[StatRecord]:
    """Turn the statistics JSON array into StatRecords.

    Rows without a county identifier or year are skipped.
    """
    if not isinstance(payload, list):
        raise DataLoadError("Turnout statistics must be a JSON array")
    if not payload:
        return []

    df = pd.DataFrame(payload)
    if 'STCOFIPS10' not in df.columns or 'YEAR' not in df.columns:
        raise DataLoadError("Turnout statistics must contain STCOFIPS10 and YEAR")

    df['YEAR'] = pd.to_numeric(df['YEAR'], errors='coerce')
    for field in STAT_FIELDS:
        if field in df.columns:
            df[field] = pd.to_numeric(df[field], errors='coerce')

    usable = df['STCOFIPS10'].notna() & df['YEAR'].notna()
    skipped = int((~usable).sum())
    if skipped:
        logger.warning("Skipped %d statistics rows without STCOFIPS10/YEAR", skipped)
    df = df[usable].copy()

    # Numeric identifiers lose their leading zero
    df['STCOFIPS10'] = df['STCOFIPS10'].map(
        lambda v: str(int(v)) if isinstance(v, float) else str(v)
    ).str.strip().str.zfill(5)
    df['YEAR'] = df['YEAR'].astype(int)

    df = df.astype(object).where(df.notna(), None)
    return [StatRecord.from_dict(row) for row in df.to_dict('records')]


def validate_boundaries(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict) or not isinstance(payload.get('features'), list):
        raise DataLoadError("County boundaries must be a GeoJSON FeatureCollection")
    return payload


class TurnoutDataClient:
    """Client for the turnout data service"""

    def __init__(self, base_url: str = config.API_URL, timeout: float = config.HTTP_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.transport = transport

    async def _get_json(self, client: httpx.AsyncClient, path: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = await client.get(url)
            response.raise_for_status()
            return response.json()
        except httpx.ConnectError as e:
            raise DataLoadError(f"Could not connect to data service at {self.base_url}") from e
        except httpx.TimeoutException as e:
            raise DataLoadError(f"Request for {path} timed out") from e
        except httpx.HTTPStatusError as e:
            raise DataLoadError(f"Data service returned {e.response.status_code} for {path}") from e
        except httpx.HTTPError as e:
            raise DataLoadError(f"Failed to fetch {path}: {e}") from e
        except ValueError as e:
            raise DataLoadError(f"{path} is not valid JSON") from e

    async def fetch_datasets(self) -> Tuple[List[StatRecord], Dict[str, Any]]:
        """Fetch statistics and boundaries in parallel.

        Returns (stat records, boundary FeatureCollection). Raises
        DataLoadError if either request fails.
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            results = await asyncio.gather(
                self._get_json(client, config.STATS_PATH),
                self._get_json(client, config.BOUNDARIES_PATH),
                return_exceptions=True,
            )

        for result in results:
            if isinstance(result, BaseException):
                if isinstance(result, DataLoadError):
                    raise result
                raise DataLoadError(f"Failed to fetch data files: {result}") from result

        stats_payload, boundaries_payload = results
        records = parse_stat_records(stats_payload)
        boundaries = validate_boundaries(boundaries_payload)
        logger.info("Fetched %d statistics records and %d county boundaries",
                    len(records), len(boundaries['features']))
        return records, boundaries

    def test_connection(self) -> bool:
        """Test if the data service is reachable"""
        try:
            response = httpx.get(f"{self.base_url}/health", timeout=5.0)
            return response.status_code == 200
        except httpx.HTTPError:
            return False
