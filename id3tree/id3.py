"""
ID3 Decision Tree Algorithm with Gain Ratio and Majority Pruning

This module implements the ID3 (Iterative Dichotomiser 3) decision tree
algorithm for categorical data. Attributes are ranked by gain ratio, and a
node whose majority label already covers more than a fixed share of its
rows is closed as a leaf without splitting.

The algorithm works by:
1. Stopping at a leaf when every row of the subset has the same label
2. Selecting the attribute with the highest gain ratio
3. Stopping at a majority leaf when no attribute is usable, or when the
   majority label's share exceeds the pruning threshold
4. Creating one child per value in the attribute's full-dataset domain
5. Recursively applying the process to each non-empty branch; an empty
   branch becomes a leaf labelled with the parent's majority

The tree is stored as an index-addressed DecisionTree, and nodes are
numbered in depth-first order as they are created.
"""

import numpy as np

from .dataset import Dataset
from .errors import NotFittedError
from .logging import get_logger
from .selection import select_attribute
from .tree import DecisionTree

logger = get_logger(__name__)

DEFAULT_MAJORITY_THRESHOLD = 0.8


class ID3:
    """
    ID3 Decision Tree Classifier for categorical attributes.

    Key characteristics:
    - Every field is an opaque category, numeric-looking or not
    - Greedy algorithm (makes locally optimal choices)
    - Creates multiway splits with one branch per known attribute value
    - Deterministic: the same rows in the same order give the same tree

    Attributes:
        tree (DecisionTree): The trained tree, None before fit()
        majority_threshold (float): Share above which a node is pruned
        attribute_names (tuple): Names of the training columns
        attribute_domains (tuple): Sorted values of every non-label attribute
        classes_ (list): Sorted unique class labels in the training data
    """

    def __init__(self, majority_threshold=DEFAULT_MAJORITY_THRESHOLD):
        """
        Initialize the ID3 decision tree classifier.

        Args:
            majority_threshold (float, optional): A node becomes a leaf when
                                                  its majority label's share
                                                  of rows is strictly greater
                                                  than this. 1.0 disables
                                                  pruning. Defaults to 0.8.
        """
        if not 0.0 < majority_threshold <= 1.0:
            raise ValueError(
                f"Invalid majority_threshold {majority_threshold!r}. "
                "Must be in (0, 1]"
            )
        self.majority_threshold = majority_threshold
        self.tree = None
        self.attribute_names = None
        self.attribute_domains = None
        self.classes_ = None

    def majority_class(self, subset):
        """
        Return the most common label of a subset and its share of the rows.

        Ties go to the label appearing first in row order.
        """
        label, count = subset.majority()
        return label, count / len(subset)

    def build_tree(self, subset, node):
        """
        Recursively grow the tree below node from the rows in subset.

        Args:
            subset (Partition): Non-empty rows reaching this node.
            node (Node): Freshly created node to fill in.
        """
        # === STOPPING CRITERIA ===

        if subset.is_pure():
            node.make_leaf(subset.labels[0])
            return

        attribute_index, ratio = select_attribute(subset)
        majority, share = self.majority_class(subset)

        if attribute_index is None:
            logger.debug(
                "Node %d: no usable split over %d rows, leaf %r",
                node.index, len(subset), majority
            )
            node.make_leaf(majority)
            return

        if share > self.majority_threshold:
            logger.debug(
                "Node %d: majority %r holds %.3f of %d rows, pruned",
                node.index, majority, share, len(subset)
            )
            node.make_leaf(majority)
            return

        # === SPLIT ===

        node.split_attribute_index = attribute_index
        logger.debug(
            "Node %d: split on %s (gain ratio %.4f) over %d rows",
            node.index, self.attribute_names[attribute_index], ratio, len(subset)
        )

        for value in self.attribute_domains[attribute_index]:
            child = self.tree.add_node(incoming_value=value)
            node.children.append(child.index)

            branch = subset.where(attribute_index, value)
            if len(branch) == 0:
                logger.debug(
                    "Node %d: no rows for %s = %s, leaf %r",
                    child.index, self.attribute_names[attribute_index],
                    value, majority
                )
                child.make_leaf(majority)
            else:
                self.build_tree(branch, child)

    def fit(self, dataset):
        """
        Fit the ID3 decision tree to a training dataset.

        Args:
            dataset (Dataset): Categorical training table, label last.

        Returns:
            self: Returns the fitted estimator instance

        Raises:
            ValueError: If the dataset has no rows
        """
        if len(dataset) == 0:
            raise ValueError("Cannot fit a decision tree on an empty dataset")

        self.attribute_names = dataset.attribute_names
        self.attribute_domains = dataset.attribute_domains
        self.classes_ = sorted(set(dataset.view().labels))

        self.tree = DecisionTree()
        root = self.tree.add_node()
        self.build_tree(dataset.view(), root)

        logger.info(
            "Built tree with %d nodes (%d leaves, depth %d) from %d rows "
            "and %d attributes",
            len(self.tree), len(self.tree.leaves()), self.tree.depth(),
            len(dataset), dataset.n_attributes
        )
        return self

    def _check_fitted(self):
        if self.tree is None:
            raise NotFittedError("This ID3 instance is not fitted yet")

    def predict_sample(self, row):
        """
        Predict the class of a single row.

        Raises:
            NotFittedError: If fit() has not been called
            UnrecognizedCategoryError: If the row holds a value the tree has
                                       no branch for
        """
        self._check_fitted()
        return self.tree.classify(row)

    def predict(self, rows):
        """
        Predict class labels for multiple rows.

        Args:
            rows (iterable or Dataset): Rows aligned with the training
                                        attribute names.

        Returns:
            numpy.ndarray: Predicted labels (object dtype).
        """
        if isinstance(rows, Dataset):
            rows = rows.rows
        return np.array([self.predict_sample(row) for row in rows], dtype=object)

    def score(self, dataset):
        """Return the fraction of dataset rows whose label is predicted correctly."""
        if len(dataset) == 0:
            raise ValueError("Cannot score an empty dataset")
        predictions = self.predict(dataset)
        return float(np.mean(predictions == dataset.view().labels))

    def print_tree(self):
        """Print one line per leaf using the training attribute names."""
        self._check_fitted()
        self.tree.print_tree(self.attribute_names)

    def plot_tree(self, filename='decision_tree', view=False):
        """Render the tree with Graphviz; see DecisionTree.plot_tree."""
        self._check_fitted()
        return self.tree.plot_tree(filename, self.attribute_names, view)
