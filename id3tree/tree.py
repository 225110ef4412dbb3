"""
Index-addressed decision tree.

Nodes live in one append-only list and refer to their children by list
index, so node 0 is always the root and a node's index never changes.
"""

from dataclasses import dataclass, field
from typing import List

from .errors import MalformedRowError, UnrecognizedCategoryError
from .logging import get_logger

logger = get_logger(__name__)


@dataclass
class Node:
    """
    One node of a DecisionTree.

    Attributes:
        index: Position of the node in DecisionTree.nodes.
        is_leaf: Whether the node predicts a label.
        label: Predicted class (leaves only, "" otherwise).
        split_attribute_index: Attribute tested here (-1 for leaves).
        incoming_value: Parent's attribute value leading here ("" for the root).
        children: Child node indices, in the split attribute's domain order.
    """
    index: int
    is_leaf: bool = False
    label: str = ""
    split_attribute_index: int = -1
    incoming_value: str = ""
    children: List[int] = field(default_factory=list)

    def make_leaf(self, label):
        self.is_leaf = True
        self.label = str(label)
        self.split_attribute_index = -1
        self.children = []


class DecisionTree:
    """Rooted tree stored as a list of Node records."""

    def __init__(self, nodes=None):
        self.nodes = list(nodes) if nodes is not None else []

    def __len__(self):
        return len(self.nodes)

    def __getitem__(self, index):
        return self.nodes[index]

    def __eq__(self, other):
        if not isinstance(other, DecisionTree):
            return NotImplemented
        return self.nodes == other.nodes

    @property
    def root(self):
        return self.nodes[0]

    def add_node(self, incoming_value=""):
        """Append a fresh internal node and return it."""
        node = Node(index=len(self.nodes), incoming_value=str(incoming_value))
        self.nodes.append(node)
        return node

    def classify(self, row):
        """
        Predict the label of a row by walking down from the root.

        At each split node the child whose incoming value equals the row's
        value for the split attribute is followed.

        Args:
            row (sequence): Field values aligned with the training attribute
                            names. The label field may be absent.

        Returns:
            str: The label of the leaf reached.

        Raises:
            UnrecognizedCategoryError: If no child matches the row's value.
            MalformedRowError: If the row is too short to hold a tested
                               attribute.
        """
        node = self.root
        while not node.is_leaf:
            attribute_index = node.split_attribute_index
            if attribute_index >= len(row):
                raise MalformedRowError(
                    None, attribute_index + 1, len(row),
                    attribute_index=attribute_index,
                )
            value = str(row[attribute_index])
            for child_index in node.children:
                if self.nodes[child_index].incoming_value == value:
                    node = self.nodes[child_index]
                    break
            else:
                raise UnrecognizedCategoryError(
                    node.index, node.split_attribute_index, value
                )
        return node.label

    def depth(self, index=0):
        """Number of edges on the longest path from node index down to a leaf."""
        node = self.nodes[index]
        if node.is_leaf or not node.children:
            return 0
        return 1 + max(self.depth(child) for child in node.children)

    def leaves(self):
        return [node for node in self.nodes if node.is_leaf]

    def _attribute_name(self, index, attribute_names):
        if attribute_names is None:
            return f"[{index}]"
        return attribute_names[index]

    def rules(self, attribute_names=None):
        """
        List every root-to-leaf path as one readable line.

        Args:
            attribute_names (sequence, optional): Names to print instead of
                                                  attribute indices.

        Returns:
            list: Lines such as "Outlook = Sunny, Humidity = High, Label: No",
                  in depth-first child order.
        """
        lines = []

        def walk(index, branch):
            node = self.nodes[index]
            if node.is_leaf:
                lines.append(f"{branch}Label: {node.label}")
                return
            name = self._attribute_name(node.split_attribute_index, attribute_names)
            for child_index in node.children:
                child = self.nodes[child_index]
                walk(child_index, f"{branch}{name} = {child.incoming_value}, ")

        if self.nodes:
            walk(0, "")
        return lines

    def print_tree(self, attribute_names=None):
        """Print the rules of the tree, one leaf per line."""
        for line in self.rules(attribute_names):
            print(line)

    def to_dot(self, attribute_names=None):
        """
        Generate Graphviz DOT source for the tree.

        Split nodes are drawn as light blue ellipses and leaves as light
        green boxes. Edges carry the incoming attribute value.

        Returns:
            str: DOT format string
        """
        lines = ['digraph "ID3 Decision Tree" {', 'rankdir=TB;']
        for node in self.nodes:
            if node.is_leaf:
                lines.append(
                    f'n{node.index} [label="{_escape(node.label)}" shape=box '
                    'style=filled fillcolor=lightgreen];'
                )
                continue
            name = self._attribute_name(node.split_attribute_index, attribute_names)
            lines.append(
                f'n{node.index} [label="{_escape(name)}" shape=ellipse '
                'style=filled fillcolor=lightblue];'
            )
            for child_index in node.children:
                value = self.nodes[child_index].incoming_value
                lines.append(
                    f'n{node.index} -> n{child_index} [label="{_escape(value)}"];'
                )
        lines.append('}')
        return '\n'.join(lines)

    def plot_tree(self, filename='decision_tree', attribute_names=None, view=False):
        """
        Render the tree to a PNG file with Graphviz.

        Requires the graphviz Python package (the "plot" extra) and the
        system Graphviz binaries.

        Args:
            filename (str): Output path without extension.
            attribute_names (sequence, optional): Names for split nodes.
            view (bool): Open the rendered image when done.

        Returns:
            str: Path of the rendered file.
        """
        import graphviz

        source = graphviz.Source(self.to_dot(attribute_names))
        path = source.render(filename, format='png', cleanup=True, view=view)
        logger.info("Tree rendered to %s", path)
        return path


def _escape(text):
    return str(text).replace('\\', '\\\\').replace('"', '\\"')
