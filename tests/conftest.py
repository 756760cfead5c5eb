"""Pytest configuration and common fixtures for Theme Studio tests."""

import copy
import json
import os
import sys
import pytest

# Add the project root to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set environment variables for testing
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")


SETTINGS_DOC = {
    "chartThemes": [{
        "name": "Dark",
        "background": "0,0,0",
        "axisLine": "60,60,60",
        "gridLine": "30,30,30,128",
        "crossHair": "200,200,200",
        "textFg": "220,220,220",
        "font": "Monaco",
    }],
    "barThemes": [{
        "up": "0,200,0",
        "upFill": "0,200,0,210",
        "upOutline": "0,150,0",
        "down": "200,0,0",
        "downFill": "200,0,0,210",
        "downOutline": "150,0,0",
    }],
    "templates": [{
        "name": "Scalper",
        "settings": {"bgColor": "101010"},
        "graph": {
            "figures": [
                {"sid": "EMA", "settings": {"paths": [{"name": "ema", "c1": "255,255,0"}]}},
            ],
        },
    }],
}

CONFIG_DOC = {
    "windows": [{
        "type": "chart",
        "ESZ4.CME": {"period": "5m"},
        "figures": [
            {
                "sid": "com.motivewave;VWAP",
                "settings": {
                    "colors": [
                        {"name": "vwapLine", "color": "255,165,0", "enabled": True},
                        {"name": "upperBand", "color": "0,128,255,128", "enabled": False},
                    ],
                    "fillColor": "10,20,30,40",
                    "colorMode": "0,0,0",
                },
            },
            {"sid": "TREND_LINE", "settings": {"lineColor": "FF0000"}},
        ],
    }],
    "table": {"upText": "FFFFFF", "downText": "FF0000", "upBg": "not-a-color"},
    "dom": {"bidColor": "FF000033", "askColor": "FFFFFF33", "bottomPanel": {"widgets": []}},
    "panel": {"id": "watchlist", "settings": {"headerColor": "C,1A2B3C"}},
}

DEFAULTS_DOC = [
    {
        "id": "VWAP",
        "data": {
            "sid": "com.motivewave;VWAP",
            "settings": {
                "colors": [
                    {"name": "vwapLine", "color": "1,2,3"},
                    {"name": "lowerBand", "color": "4,5,6"},
                ],
            },
            "ratios": [0.5],
        },
    },
    {
        "id": "FIB_RETRACEMENT",
        "data": {
            "sid": "FIB_RETRACEMENT",
            "settings": {
                "paths": [{"name": "level1", "c1": "10,10,10"}],
                "fonts": [{"name": "label", "color": "FFFFFF", "bg": "000000CC"}],
            },
        },
    },
]


BUTTONS_DOC = {
    "dom": {
        "bidColor": "FF000033",
        "bottomPanel": {"widgets": [
            {"type": "row", "widgets": [
                {"type": "BM", "font": "Monaco|12|Bold||000000|FFFFFF99"},
                {"type": "SM", "font": "Monaco|12|Bold||FFFFFF|A52A2A99"},
            ]},
        ]},
    },
    "tradePanel": {"panels": [
        {"widgets": [
            {"type": "BM", "font": "Monaco|11|||111111|2222AA99"},
            {"type": "SM", "font": "Monaco|11|||FFFFFF"},
            {"type": "label", "font": "Monaco|11|||FF0000"},
        ]},
    ]},
}

@pytest.fixture
def settings_doc():
    return copy.deepcopy(SETTINGS_DOC)


@pytest.fixture
def config_doc():
    return copy.deepcopy(CONFIG_DOC)


@pytest.fixture
def defaults_doc():
    return copy.deepcopy(DEFAULTS_DOC)


@pytest.fixture
def buttons_doc():
    return copy.deepcopy(BUTTONS_DOC)


@pytest.fixture
def documents(settings_doc, config_doc, defaults_doc):
    """Document set in workspace order."""
    return {"settings": settings_doc, "config": config_doc, "defaults": defaults_doc}


@pytest.fixture
def user_dir(tmp_path):
    """A MotiveWave user directory with one workspace named 'Main'."""
    root = tmp_path / "MotiveWave"
    cfg_dir = root / "workspaces" / "Main" / "config"
    cfg_dir.mkdir(parents=True)
    (root / "settings.json").write_text(json.dumps(SETTINGS_DOC), encoding="utf-8")
    (cfg_dir / "config.json").write_text(json.dumps(CONFIG_DOC), encoding="utf-8")
    (cfg_dir / "defaults.json").write_text(json.dumps(DEFAULTS_DOC), encoding="utf-8")
    return root


def pytest_configure(config):
    """Configure pytest for Theme Studio testing."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


def pytest_collection_modifyitems(config, items):
    """Mark file-system and CLI tests as integration tests."""
    for item in items:
        if "test_cli_entrypoints.py" in str(item.fspath) or "test_swatches.py" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
