"""Shared pytest configuration and fixtures for bomwater tests."""

import json
import sys
from pathlib import Path

import pytest

# Ensure the bomwater package is importable when running tests from the repo root
sys.path.insert(0, str(Path(__file__).parent.parent))


STATION_LIST_PAYLOAD = [
    ["station_name", "station_no", "station_id", "station_latitude", "station_longitude"],
    ["Cotter R. at Gingera", "410730", "13360", "-35.5917", "148.8217"],
    ["Cotter R. at Kiosk", "410700", "13352", "-35.3244", "148.9425"],
]

TIMESERIES_LIST_PAYLOAD = [
    ["station_name", "station_no", "station_id", "ts_id", "ts_name",
     "parametertype_id", "parametertype_name"],
    ["Cotter R. at Gingera", "410730", "13360", "1573010", "DMQaQc.Merged.DailyMean.24HR",
     "560", "Water Course Discharge"],
]

VALUES_PAYLOAD = [
    {
        "ts_id": "1573010",
        "rows": "2",
        "columns": "Timestamp,Value,Quality Code",
        "data": [
            ["2020-01-01T00:00:00.000+10:00", 0.357, 140],
            ["2020-01-02T00:00:00.000+10:00", 0.349, 140],
        ],
    }
]


@pytest.fixture
def station_list_body():
    return json.dumps(STATION_LIST_PAYLOAD)


@pytest.fixture
def timeseries_list_body():
    return json.dumps(TIMESERIES_LIST_PAYLOAD)


@pytest.fixture
def values_body():
    return json.dumps(VALUES_PAYLOAD)
