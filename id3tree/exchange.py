"""
Persistence of trained trees as a list of flat node records.

Record k describes node k, and every record carries all six fields:

    index                   node position, equal to the record position
    split_attribute_index   attribute tested at the node, -1 for leaves
    incoming_value          parent's value leading here, "" for the root
    is_leaf                 true for leaves
    label                   predicted class for leaves, "" otherwise
    children                child indices in domain order, [] for leaves

The record list is written as a JSON array.
"""

import json

from .errors import ModelFormatError, UnopenableSourceError
from .logging import get_logger
from .tree import DecisionTree, Node

logger = get_logger(__name__)

FIELDS = (
    "index",
    "split_attribute_index",
    "incoming_value",
    "is_leaf",
    "label",
    "children",
)


def to_records(tree):
    """Return the tree's nodes as a list of plain dicts, in index order."""
    return [
        {
            "index": node.index,
            "split_attribute_index": node.split_attribute_index,
            "incoming_value": node.incoming_value,
            "is_leaf": node.is_leaf,
            "label": node.label,
            "children": list(node.children),
        }
        for node in tree.nodes
    ]


def _check_record(position, record):
    if not isinstance(record, dict):
        raise ModelFormatError(f"Record {position} is not an object")
    missing = [name for name in FIELDS if name not in record]
    if missing:
        raise ModelFormatError(f"Record {position} is missing {', '.join(missing)}")

    types = {
        "index": int,
        "split_attribute_index": int,
        "incoming_value": str,
        "is_leaf": bool,
        "label": str,
        "children": list,
    }
    for name, expected in types.items():
        value = record[name]
        # bool is an int subclass but never a valid index
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ModelFormatError(
                f"Record {position} field {name} should be {expected.__name__}"
            )
    if record["index"] != position:
        raise ModelFormatError(
            f"Record {position} has index {record['index']}; records must be "
            "in node index order"
        )


def from_records(records):
    """
    Rebuild a DecisionTree from records produced by to_records().

    Args:
        records (list): Node records in index order.

    Returns:
        DecisionTree: The rebuilt tree.

    Raises:
        ModelFormatError: If the records do not describe a valid tree.
    """
    if not isinstance(records, list) or not records:
        raise ModelFormatError("A model must be a non-empty list of node records")

    nodes = []
    for position, record in enumerate(records):
        _check_record(position, record)
        nodes.append(Node(
            index=record["index"],
            is_leaf=record["is_leaf"],
            label=record["label"],
            split_attribute_index=record["split_attribute_index"],
            incoming_value=record["incoming_value"],
            children=list(record["children"]),
        ))

    for node in nodes:
        if node.is_leaf and node.children:
            raise ModelFormatError(f"Leaf node {node.index} has children")
        if not node.is_leaf:
            if not node.children:
                raise ModelFormatError(f"Split node {node.index} has no children")
            if node.split_attribute_index < 0:
                raise ModelFormatError(
                    f"Split node {node.index} has no split attribute"
                )
        for child in node.children:
            if not isinstance(child, int) or isinstance(child, bool):
                raise ModelFormatError(f"Node {node.index} has a non-integer child")
            if not node.index < child < len(nodes):
                raise ModelFormatError(
                    f"Node {node.index} refers to child {child} out of range"
                )

    return DecisionTree(nodes)


def dumps(tree, indent=4):
    return json.dumps(to_records(tree), indent=indent)


def loads(text):
    """Parse a JSON record list into a DecisionTree."""
    try:
        records = json.loads(text)
    except json.JSONDecodeError as e:
        raise ModelFormatError(f"Model is not valid JSON: {e}") from e
    return from_records(records)


def dump(tree, path, indent=4):
    """Write the tree to path as a JSON record list."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps(tree, indent=indent))
        f.write("\n")
    logger.info("Saved %d nodes to %s", len(tree), path)


def load(path):
    """
    Read a tree saved with dump().

    Raises:
        UnopenableSourceError: If the file cannot be read.
        ModelFormatError: If the content is not a valid tree.
    """
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise UnopenableSourceError(path, e) from e
    tree = loads(text)
    logger.info("Loaded %d nodes from %s", len(tree), path)
    return tree
