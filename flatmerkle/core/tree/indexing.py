"""
Index arithmetic over the flat heap layout.

Index 0 is the root; node i has children 2i+1 and 2i+2. Leaves occupy the
trailing positions of the array. These functions are the only way the rest
of the package navigates a tree.
"""


def left_child_index(index: int) -> int:
    return 2 * index + 1


def right_child_index(index: int) -> int:
    return 2 * index + 2


def parent_index(index: int) -> int:
    """Parent position. Meaningless for the root."""
    return (index - 1) // 2


def sibling_index(index: int) -> int:
    """Sibling position. Meaningless for the root."""
    return index - 1 if index % 2 == 0 else index + 1


def is_tree_node(index: int, tree_len: int) -> bool:
    return 0 <= index < tree_len


def is_internal_node(index: int, tree_len: int) -> bool:
    return is_tree_node(left_child_index(index), tree_len)


def is_leaf_node(index: int, tree_len: int) -> bool:
    return is_tree_node(index, tree_len) and not is_internal_node(index, tree_len)


def leaf_tree_index(leaf_position: int, leaf_count: int) -> int:
    """
    Map the k-th input leaf to its array position.

    Leaves are laid out in reverse, so input leaf 0 sits at the last slot.
    """
    return 2 * leaf_count - 2 - leaf_position


def leaf_count(tree_len: int) -> int:
    """Number of leaves in a tree of ``tree_len`` nodes."""
    return (tree_len + 1) // 2


__all__ = [
    "left_child_index",
    "right_child_index",
    "parent_index",
    "sibling_index",
    "is_tree_node",
    "is_internal_node",
    "is_leaf_node",
    "leaf_tree_index",
    "leaf_count",
]
