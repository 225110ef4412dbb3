"""
ID3 decision tree induction and inference for categorical data.

Typical use:

    from id3tree import ID3, Dataset, exchange

    dataset = Dataset.from_csv("weather.csv")
    model = ID3().fit(dataset)
    exchange.dump(model.tree, "weather_model.json")
    tree = exchange.load("weather_model.json")
    tree.classify(["Sunny", "Cool", "High", "Strong"])
"""

from .dataset import Dataset, Partition
from .errors import (
    ID3Error,
    MalformedRowError,
    ModelFormatError,
    NotFittedError,
    UndefinedGainRatioError,
    UnopenableSourceError,
    UnrecognizedCategoryError,
)
from .id3 import ID3
from .scoring import conditional_entropy, entropy, gain, gain_ratio, split_information
from .selection import select_attribute
from .tree import DecisionTree, Node

__version__ = "0.1.0"

__all__ = [
    "Dataset",
    "Partition",
    "ID3",
    "DecisionTree",
    "Node",
    "entropy",
    "conditional_entropy",
    "gain",
    "split_information",
    "gain_ratio",
    "select_attribute",
    "ID3Error",
    "MalformedRowError",
    "ModelFormatError",
    "NotFittedError",
    "UndefinedGainRatioError",
    "UnopenableSourceError",
    "UnrecognizedCategoryError",
]
