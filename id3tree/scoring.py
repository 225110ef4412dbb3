"""
Information-theoretic scores for choosing a split attribute.

All functions take a non-empty Partition (a subset of a Dataset's rows) and,
where relevant, the index of a non-label attribute. Partitions by attribute
value are formed from the values observed inside the subset only.

    entropy            H(S)     = -sum(p_c * log2(p_c)) over labels c
    conditional        H(S|A)   = sum(|S_v| / |S| * H(S_v)) over values v
    gain               IG(S, A) = H(S) - H(S|A)
    split information  SI(S, A) = -sum(|S_v| / |S| * log2(|S_v| / |S|))
    gain ratio         GR(S, A) = IG(S, A) / SI(S, A)
"""

from collections import Counter

import numpy as np

from .errors import UndefinedGainRatioError

GAIN_TOLERANCE = 1e-12


def _distribution_entropy(values):
    """
    Shannon entropy (base 2) of the empirical distribution of values.

    Only observed values are counted, so no term ever has p = 0. A single
    distinct value gives exactly 0.0.
    """
    counts = Counter(values)
    if len(counts) <= 1:
        return 0.0
    n = len(values)
    probabilities = np.array(list(counts.values()), dtype=float) / n
    return float(-np.sum(probabilities * np.log2(probabilities)))


def entropy(subset):
    """
    Calculate the entropy of the label distribution of a subset.

    Args:
        subset (Partition): Rows to score.

    Returns:
        float: 0.0 for a single-label subset, 1.0 for a 50/50 two-label
               subset, at most log2(number of labels).

    Example:
        >>> entropy(Dataset.from_rows(["x", "y"], [["a", "1"], ["b", "0"]]).view())
        1.0
    """
    return _distribution_entropy(subset.labels)


def _value_partitions(subset, attribute_index):
    column = subset.column(attribute_index)
    # dict.fromkeys keeps first-seen order and drops duplicates
    return [subset.where(attribute_index, value) for value in dict.fromkeys(column)]


def conditional_entropy(subset, attribute_index):
    """
    Size-weighted average entropy after partitioning on an attribute.

    Only values present in the subset form partitions.
    """
    n = len(subset)
    return float(sum(
        len(part) / n * entropy(part)
        for part in _value_partitions(subset, attribute_index)
    ))


def gain(subset, attribute_index):
    """
    Information gain of splitting the subset on the attribute.

    Differences within GAIN_TOLERANCE of zero are rounding noise from the
    two entropy sums and are returned as exactly 0.0, so the gain is never
    negative and an attribute independent of the label never looks useful.
    """
    value = entropy(subset) - conditional_entropy(subset, attribute_index)
    if value <= GAIN_TOLERANCE:
        return 0.0
    return value


def split_information(subset, attribute_index):
    """Entropy of the attribute's own value distribution in the subset."""
    return _distribution_entropy(subset.column(attribute_index))


def gain_ratio(subset, attribute_index):
    """
    Information gain normalized by split information.

    Dividing by split information penalizes attributes that break the
    subset into many small pieces.

    Args:
        subset (Partition): Rows to score.
        attribute_index (int): Non-label attribute to evaluate.

    Returns:
        float: The gain ratio.

    Raises:
        UndefinedGainRatioError: If the attribute takes a single value in the
                                 subset (split information is zero).
    """
    split_info = split_information(subset, attribute_index)
    if split_info == 0.0:
        raise UndefinedGainRatioError(attribute_index)
    return gain(subset, attribute_index) / split_info
