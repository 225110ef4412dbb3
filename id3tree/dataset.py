"""
Categorical training data for the ID3 classifier.

A Dataset is a table of string fields whose header row names the attributes
and whose last column is the class label. Nothing is type-converted: a field
such as "12" or "NA" is just another category.

Recursive tree building never copies rows. It works on Partition objects,
which pair the owning Dataset with a numpy array of row indices, and
filtering a partition only produces a smaller index array.
"""

import re
from collections import Counter

import numpy as np
import pandas as pd

from .errors import MalformedRowError, UnopenableSourceError
from .logging import get_logger

logger = get_logger(__name__)


class Dataset:
    """
    In-memory categorical table with fixed attribute domains.

    Attributes:
        attribute_names (tuple): Column names; the last one is the label.
        rows (numpy.ndarray): Object array of shape (n_rows, n_columns)
                              holding the fields as plain strings.
        attribute_domains (tuple): For every non-label attribute index, a
                                   tuple of its distinct values in sorted
                                   order. Computed once from the full
                                   table and never from a subset.
    """

    def __init__(self, attribute_names, rows):
        """
        Build a dataset from already validated rows.

        Prefer from_rows(), from_frame() or from_csv(), which check row
        lengths before calling this.

        Args:
            attribute_names (list): Attribute names, label name last.
            rows (list): Rows of strings aligned with attribute_names.
        """
        self.attribute_names = tuple(str(name) for name in attribute_names)
        if not self.attribute_names:
            raise ValueError("A dataset needs at least a label column")

        width = len(self.attribute_names)
        self.rows = np.empty((len(rows), width), dtype=object)
        for i, row in enumerate(rows):
            self.rows[i, :] = [str(field) for field in row]
        self.rows.flags.writeable = False

        # Sorted so child order and node numbering do not depend on
        # the order rows happen to appear in.
        self.attribute_domains = tuple(
            tuple(sorted(set(self.rows[:, i])))
            for i in range(self.n_attributes)
        )

    @classmethod
    def from_rows(cls, attribute_names, rows, source=None):
        """
        Create a dataset after checking that every row fits the header.

        Args:
            attribute_names (list): Attribute names, label name last.
            rows (iterable): Data rows (sequences of strings).
            source (str, optional): Name used in error messages.

        Returns:
            Dataset: The new dataset.

        Raises:
            MalformedRowError: If a row's field count differs from the
                               number of attribute names. The row number
                               is 1-based and counts data rows only.
        """
        attribute_names = list(attribute_names)
        rows = [list(row) for row in rows]
        for number, row in enumerate(rows, start=1):
            if len(row) != len(attribute_names):
                raise MalformedRowError(number, len(attribute_names), len(row), source)
        return cls(attribute_names, rows)

    @classmethod
    def from_frame(cls, frame, source=None):
        """
        Create a dataset from a pandas DataFrame of strings.

        Missing cells (NaN) mean the row was shorter than the header.

        Raises:
            MalformedRowError: If any row has missing cells.
        """
        missing = frame.isna()
        if missing.to_numpy().any():
            position = int(np.flatnonzero(missing.any(axis=1).to_numpy())[0])
            actual = int((~missing.iloc[position]).sum())
            raise MalformedRowError(position + 1, frame.shape[1], actual, source)
        return cls(list(frame.columns), frame.to_numpy(dtype=object).tolist())

    @classmethod
    def from_csv(cls, path, sep=","):
        """
        Read a dataset from a delimited text file.

        The first line holds the attribute names and every following line
        is a data row whose last field is the class label.

        Args:
            path (str or Path): CSV file to read.
            sep (str): Field delimiter. Defaults to ','.

        Returns:
            Dataset: The loaded dataset.

        Raises:
            UnopenableSourceError: If the file is missing, unreadable or empty.
            MalformedRowError: If a row has more or fewer fields than the header.
        """
        try:
            # The header is read as a data line so that a ragged first row
            # is reported instead of being taken as an index column.
            raw = pd.read_csv(
                path, sep=sep, header=None, dtype=str, keep_default_na=False
            )
        except (OSError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise UnopenableSourceError(path, e) from e
        except pd.errors.ParserError as e:
            raise _malformed_from_parser_error(e, str(path)) from e

        frame = raw.iloc[1:].reset_index(drop=True)
        frame.columns = list(raw.iloc[0])
        dataset = cls.from_frame(frame, source=str(path))
        logger.info(
            "Loaded %d rows with %d attributes from %s",
            len(dataset), dataset.n_attributes, path
        )
        return dataset

    @property
    def label_index(self):
        return len(self.attribute_names) - 1

    @property
    def n_attributes(self):
        """Number of non-label attributes."""
        return len(self.attribute_names) - 1

    @property
    def label_name(self):
        return self.attribute_names[-1]

    def __len__(self):
        return self.rows.shape[0]

    def view(self, indices=None):
        """Return a Partition over the given row indices (all rows if None)."""
        if indices is None:
            indices = np.arange(len(self))
        return Partition(self, indices)


class Partition:
    """
    A subset of a Dataset's rows, addressed by index.

    Row order is that of the index array, which filtering preserves.
    """

    def __init__(self, dataset, indices):
        self.dataset = dataset
        self.indices = np.asarray(indices, dtype=np.intp)

    def __len__(self):
        return len(self.indices)

    @property
    def labels(self):
        return self.dataset.rows[self.indices, self.dataset.label_index]

    def column(self, attribute_index):
        return self.dataset.rows[self.indices, attribute_index]

    def where(self, attribute_index, value):
        """Return the rows whose attribute equals value, in their current order."""
        mask = self.column(attribute_index) == value
        return Partition(self.dataset, self.indices[mask])

    def is_pure(self):
        """True when every row carries the same label."""
        return len(set(self.labels)) <= 1

    def majority(self):
        """
        Return the most common label and its count.

        Rows are counted in order and the leader only changes when a label
        overtakes it, so a tie goes to the label that reached the top count
        first: A, B, B, A gives B.

        Raises:
            ValueError: If the partition is empty.
        """
        if len(self) == 0:
            raise ValueError("An empty partition has no majority label")
        counts = Counter()
        best_label, best_count = None, 0
        for label in self.labels:
            counts[label] += 1
            if counts[label] > best_count:
                best_label, best_count = label, counts[label]
        return best_label, best_count


_TOKENIZER_ERROR = re.compile(r"Expected (\d+) fields in line (\d+), saw (\d+)")


def _malformed_from_parser_error(error, source):
    """Translate a pandas tokenizer error into a MalformedRowError."""
    # e.g. "Error tokenizing data. C error: Expected 3 fields in line 5, saw 4"
    match = _TOKENIZER_ERROR.search(str(error))
    if match is None:
        return MalformedRowError(None, None, None, source)
    expected, line, actual = (int(group) for group in match.groups())
    # pandas counts file lines from 1 including the header
    return MalformedRowError(line - 1, expected, actual, source)
