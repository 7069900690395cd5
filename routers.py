import json
import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter, HTTPException, Request

import config

logger = logging.getLogger(__name__)

router = APIRouter()


def _read_dataset(request: Request, filename: str) -> Any:
    data_dir = Path(getattr(request.app.state, 'data_dir', config.DATA_DIR))
    path = data_dir / filename
    if not path.is_file():
        raise HTTPException(status_code=404, detail=f"{filename} not found")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        logger.error("Could not read %s: %s", path, e)
        raise HTTPException(status_code=500, detail=f"{filename} could not be read")


@router.get("/health")
def health() -> dict:
    return {'status': 'ok'}


@router.get(config.STATS_PATH)
def get_turnout_statistics(request: Request) -> Any:
    """Per-county, per-year turnout statistics"""
    return _read_dataset(request, config.STATS_FILE)


@router.get(config.BOUNDARIES_PATH)
def get_county_boundaries(request: Request) -> Any:
    """County boundary FeatureCollection"""
    return _read_dataset(request, config.BOUNDARIES_FILE)
