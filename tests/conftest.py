import pytest

from smartsaver.models import Dataset


def series(labels, values):
    return {"labels": labels, "datasets": [{"data": values}]}


def water_json(_id="w1", labels=None, total=None):
    labels = labels or ["01-03-2024", "02-03-2024", "03-03-2024", "04-03-2024"]
    total = total or [100, 250, 0, 150]
    return {
        "_id": _id,
        "type": "water",
        "analysis": {
            "chartData": series(labels, total),
            "bathingData": series(labels, [40, 120, 0, 60]),
            "drinkingData": series(labels, [20, 30, 0, 25]),
            "dishwashingData": series(labels, [10, 20, 0, 15]),
            "washingClothesData": series(labels, [20, 60, 0, 30]),
            "cookingData": series(labels, [10, 20, 0, 20]),
        },
    }


def electricity_json(_id="e1", labels=None, total=None):
    labels = labels or ["04/01/2024", "04/02/2024", "04/03/2024"]
    total = total or [10, 12, 8]
    return {
        "_id": _id,
        "type": "electricity",
        "analysis": {
            "chartData": series(labels, total),
            "fanData": series(labels, [1, 1.5, 0.5]),
            "heaterData": series(labels, [5, 6, 4]),
            "refrigeratorData": series(labels, [2, 2, 2]),
            "washingMachineData": series(labels, [1, 1.5, 0.5]),
            "lightsData": series(labels, [1, 1, 1]),
        },
    }


@pytest.fixture
def water_dataset():
    return Dataset.from_json(water_json())


@pytest.fixture
def electricity_dataset():
    return Dataset.from_json(electricity_json())


@pytest.fixture
def water_datasets():
    return [
        Dataset.from_json(water_json("w1")),
        Dataset.from_json(water_json("w2", ["01-02-2024", "02-02-2024"], [300, 500])),
        Dataset.from_json(water_json("w3", ["01/01/24", "02/01/24"], [50, 50])),
    ]
