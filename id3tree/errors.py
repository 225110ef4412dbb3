"""
Exceptions raised by the id3tree package.

Every error derives from ID3Error, and also from the builtin exception
that best describes it, so callers can catch either.
"""


class ID3Error(Exception):
    """Base class for all id3tree errors."""


class UnopenableSourceError(ID3Error, OSError):
    """Raised when a training CSV or a saved model cannot be opened or read."""

    def __init__(self, source, reason):
        self.source = str(source)
        self.reason = reason
        super().__init__(f"{self.source} could not be opened: {reason}")


class MalformedRowError(ID3Error, ValueError):
    """Raised when a data row does not have one field per attribute."""

    def __init__(self, row_number, expected, actual, source=None, attribute_index=None):
        self.row_number = row_number
        self.expected = expected
        self.actual = actual
        self.source = source
        self.attribute_index = attribute_index
        where = f" in {source}" if source else ""
        if attribute_index is not None:
            message = (
                f"Row has {actual} fields, so attribute {attribute_index} "
                "tested by the tree is missing"
            )
        elif row_number is None:
            message = f"Rows{where} do not all have the same number of fields"
        else:
            message = f"Row {row_number}{where} has {actual} fields, expected {expected}"
        super().__init__(message)


class UndefinedGainRatioError(ID3Error, ArithmeticError):
    """
    Raised when the gain ratio of an attribute is undefined.

    This happens when the attribute takes a single value in the subset, so
    its split information is zero. The attribute selector catches it and
    drops the attribute from candidacy.
    """

    def __init__(self, attribute_index):
        self.attribute_index = attribute_index
        super().__init__(
            f"Attribute {attribute_index} has zero split information"
        )


class UnrecognizedCategoryError(ID3Error, LookupError):
    """Raised when a row's value matches no branch of the node being visited."""

    def __init__(self, node_index, attribute_index, value):
        self.node_index = node_index
        self.attribute_index = attribute_index
        self.value = value
        super().__init__(
            f"Value {value!r} of attribute {attribute_index} matches no "
            f"branch at node {node_index}"
        )


class ModelFormatError(ID3Error, ValueError):
    """Raised when a persisted record list does not describe a valid tree."""


class NotFittedError(ID3Error, RuntimeError):
    """Raised when a classifier is used before fit() was called."""
