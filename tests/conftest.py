"""
Pytest configuration and shared datasets for id3tree tests.
"""

import pytest

from id3tree import Dataset

WEATHER_NAMES = ["Outlook", "Temperature", "Humidity", "Wind", "PlayTennis"]

WEATHER_ROWS = [
    ["Sunny", "Hot", "High", "Weak", "No"],
    ["Sunny", "Hot", "High", "Strong", "No"],
    ["Overcast", "Hot", "High", "Weak", "Yes"],
    ["Rain", "Mild", "High", "Weak", "Yes"],
    ["Rain", "Cool", "Normal", "Weak", "Yes"],
    ["Rain", "Cool", "Normal", "Strong", "No"],
    ["Overcast", "Cool", "Normal", "Strong", "Yes"],
    ["Sunny", "Mild", "High", "Weak", "No"],
    ["Sunny", "Cool", "Normal", "Weak", "Yes"],
    ["Rain", "Mild", "Normal", "Weak", "Yes"],
    ["Sunny", "Mild", "Normal", "Strong", "Yes"],
    ["Overcast", "Mild", "High", "Strong", "Yes"],
    ["Overcast", "Hot", "Normal", "Weak", "Yes"],
    ["Rain", "Mild", "High", "Strong", "No"],
]


@pytest.fixture
def weather():
    """The classic 14-row play-tennis dataset."""
    return Dataset.from_rows(WEATHER_NAMES, WEATHER_ROWS)


@pytest.fixture
def weather_csv(tmp_path):
    """The play-tennis dataset written to a CSV file."""
    path = tmp_path / "weather.csv"
    lines = [",".join(WEATHER_NAMES)] + [",".join(row) for row in WEATHER_ROWS]
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def gap_dataset():
    """
    Dataset where the red branch splits on Size but has no medium rows.

    The root splits on Color; under red the Size split has an empty
    'medium' partition whose leaf must carry red's majority (Yes), not the
    global majority (No).
    """
    return Dataset.from_rows(
        ["Color", "Size", "Label"],
        [
            ["red", "small", "Yes"],
            ["red", "small", "Yes"],
            ["red", "large", "No"],
            ["blue", "small", "No"],
            ["blue", "large", "No"],
            ["blue", "medium", "No"],
        ],
    )
