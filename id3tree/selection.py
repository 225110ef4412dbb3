"""Choice of the split attribute for a node."""

from .errors import UndefinedGainRatioError
from .logging import get_logger
from .scoring import GAIN_TOLERANCE, gain_ratio

logger = get_logger(__name__)


def select_attribute(subset, attribute_indices=None):
    """
    Return the attribute with the highest gain ratio on subset.

    Attributes whose gain ratio is undefined (a single observed value) are
    skipped. Only a ratio above GAIN_TOLERANCE qualifies, and on ties the lowest
    attribute index wins.

    Args:
        subset (Partition): Rows at the node being split.
        attribute_indices (iterable, optional): Candidates to consider.
            Defaults to every non-label attribute of the dataset.

    Returns:
        tuple: (attribute_index, ratio), or (None, 0.0) when no attribute
               yields a usable split.
    """
    if attribute_indices is None:
        attribute_indices = range(subset.dataset.n_attributes)

    best_index, best_ratio = None, GAIN_TOLERANCE
    for index in sorted(attribute_indices):
        try:
            ratio = gain_ratio(subset, index)
        except UndefinedGainRatioError:
            logger.debug("Attribute %d has a single value here, skipped", index)
            continue
        if ratio > best_ratio:
            best_index, best_ratio = index, ratio

    if best_index is None:
        return None, 0.0
    return best_index, best_ratio
