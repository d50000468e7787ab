"""
Huffman coding algorithm -
frequency analysis, tree construction and code generation
"""

import heapq
import itertools
import logging
from collections import defaultdict
from typing import Optional

logger = logging.getLogger(__name__)


class Node:
    """
    Class object for Node in Huffman's Tree
    """

    def __init__(self, value: Optional[int], val_freq: int, order: int = 0):
        """
        Function initializes the structure of a node.

        :param value: symbol held by a leaf, None for internal nodes
        :param val_freq: int, the frequency in our data for this value
        :param order: int, creation sequence number used to break ties
        """
        self.left = None
        self.right = None
        self.value = value
        self.val_freq = val_freq
        self.order = order

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __lt__(self, val):
        return (self.val_freq, self.order) < (val.val_freq, val.order)

    def __repr__(self):
        return f"Node(value={self.value!r}, val_freq={self.val_freq})"


def char_frequency(data) -> dict[int, int]:
    """
    Function builds dictionary with frequency
    of each symbol for given data.

    :param data: bytes to count symbol frequency for
    :return: dict, symbol -> number of occurrences
    """
    char_frequency_dict = defaultdict(int)
    for el in data:
        char_frequency_dict[el] += 1

    return dict(char_frequency_dict)


class HuffmanTree:
    """
    Class object for Huffman Tree - main structure used
    in Huffman coding algorithm. Builds the tree from
    symbol frequencies and generates the prefix codes.
    """

    def __init__(self, data=None):
        """
        Function initializes the structure of Huffman Tree.

        :param data: optional bytes, the tree is built from their frequencies
        """
        self.res_codes: dict[int, str] = {}
        self.root: Optional[Node] = None
        self.char_frequency_dict: dict[int, int] = {}
        if data:
            self.char_frequency_dict = char_frequency(data)
            self.tree()
            self.codes_generation()

    @classmethod
    def build_from_freq(cls, freq_dict: dict[int, int]) -> "HuffmanTree":
        """
        Builds a Huffman tree from an external frequency dictionary,
        generates prefix codes and returns the instance.

        :param freq_dict: dictionary {symbol: frequency}
        :return: HuffmanTree with filled res_codes
        """
        tree = cls(data=None)
        tree.char_frequency_dict = dict(freq_dict)
        tree.tree()
        tree.codes_generation()
        return tree

    def tree(self):
        """
        Function builds Huffman Tree.

        Ties are broken by creation order: leaves are created in
        ascending symbol order, merged nodes after them, so the same
        frequencies always give the same shape.
        """
        counter = itertools.count()
        nodes = [
            Node(val, val_freq, next(counter))
            for val, val_freq in sorted(self.char_frequency_dict.items())
        ]

        if not nodes:
            self.root = None
            return

        if len(nodes) == 1:
            # a lone leaf would get an empty code, hang it under a synthetic root
            root = Node(None, nodes[0].val_freq, next(counter))
            root.left = nodes[0]
            self.root = root
            return

        heapq.heapify(nodes)
        while len(nodes) != 1:
            # left smallest node
            l = heapq.heappop(nodes)
            # right smallest node
            r = heapq.heappop(nodes)

            # creating new merged node from the smallest left and right
            new_merged_node = Node(None, l.val_freq + r.val_freq, next(counter))
            new_merged_node.left, new_merged_node.right = l, r
            heapq.heappush(nodes, new_merged_node)

        self.root = nodes[0]

    def codes_generation(self, node=None, curr_code=""):
        """
        Recursive function that generates
        code for each symbol, preorder traversal of Huffman's tree

        :param node: node to start traversal from
        :param curr_code: str, current code of a symbol
        """

        # if node is not passed, we start traversal from the root
        if node is None:
            node = self.root
            self.res_codes = {}
            if node is None:
                return

        # if our node is a leaf than we write the code for it
        if node.is_leaf():
            self.res_codes.setdefault(node.value, curr_code)
            return

        if node.left is not None:
            self.codes_generation(node.left, curr_code + "0")
        if node.right is not None:
            self.codes_generation(node.right, curr_code + "1")

    def codes(self) -> dict[int, str]:
        """Code table of the built tree, symbol -> '0'/'1' string."""
        return dict(self.res_codes)

    def encoded_bit_length(self) -> int:
        """Total number of payload bits for the data the tree was built from."""
        return sum(
            len(self.res_codes[sym]) * freq
            for sym, freq in self.char_frequency_dict.items()
        )


def build_code_table(data) -> dict[int, str]:
    """Frequency analysis, tree construction and code generation in one go."""
    huffman_tree = HuffmanTree.build_from_freq(char_frequency(data))
    logger.debug(
        "Built Huffman code table with %d symbols", len(huffman_tree.res_codes)
    )
    return huffman_tree.codes()
