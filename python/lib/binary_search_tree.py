#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
binary_search_tree.py
---------------------

An ordered **set** backed by a plain (unbalanced) binary search tree.
Every key is stored in its own node; nodes own their children and keep a
*weak* back‑reference to their parent, so a node is alive exactly as long as
it is reachable from the root.

Operations are O(h) where h is the height of the tree: O(log n) on average,
O(n) for degenerate (e.g. sorted) insertion orders.  No rebalancing is done.

Features
~~~~~~~~
* `tree.insert(key)`     – add a key (duplicates are kept, in the right subtree)
* `tree.get(key)`        – the stored key equal to *key*, or ``None``
* `tree.contains(key)`, `key in tree` – membership test
* `tree.min()`, `tree.max()` – smallest / largest key, or ``None`` if empty
* `tree.delete(key)`     – remove one occurrence (no‑op if missing)
* `tree.clear()`         – release every node (post‑order teardown)
* `tree.validate()`      – sanity‑check the ordering and parent links

Heterogeneous lookup
~~~~~~~~~~~~~~~~~~~~
Pass ``borrow=`` to compare lookup arguments against a *view* of each stored
key instead of the key itself.  The view must order exactly like the stored
keys do, e.g. records ordered by their name can be looked up by name:

>>> by_name = BinarySearchTree(borrow=lambda rec: rec[0])
>>> by_name.insert(("alice", 1))
>>> by_name.insert(("bob", 2))
>>> by_name.get("bob")
('bob', 2)

Typical usage
~~~~~~~~~~~~~
>>> from binary_search_tree import BinarySearchTree
>>> bst = BinarySearchTree()
>>> for k in (3, 44, 5):
...     bst.insert(k)
>>> bst.min(), bst.max()
(3, 44)
>>> bst.delete(3)
>>> 3 in bst
False
"""

from __future__ import annotations

import logging
import weakref
from typing import (
    Any,
    Callable,
    Generic,
    Iterable,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

logger = logging.getLogger(__name__)

# ----------------------------------------------------------------------
#  Type variable (keys must be totally ordered)
# ----------------------------------------------------------------------
K = TypeVar("K")


class _Node(Generic[K]):
    """Internal node object – not meant to be used directly by callers.

    ``left`` / ``right`` are owning references.  ``parent`` is a weak
    reference, so the node graph never contains a reference cycle.
    """

    __slots__ = ("key", "left", "right", "_parent", "__weakref__")

    def __init__(self, key: K, parent: Optional["_Node[K]"] = None) -> None:
        self.key = key
        self.left: Optional[_Node[K]] = None
        self.right: Optional[_Node[K]] = None
        self._parent: Optional[weakref.ref] = None
        self.parent = parent

    @property
    def parent(self) -> Optional["_Node[K]"]:
        return self._parent() if self._parent is not None else None

    @parent.setter
    def parent(self, node: Optional["_Node[K]"]) -> None:
        self._parent = weakref.ref(node) if node is not None else None

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self) -> str:
        return f"<_Node {self.key!r}>"


class BinarySearchTree(Generic[K]):
    """
    An ordered set implemented with an unbalanced binary search tree.

    Keys smaller than a node go to its left subtree; keys greater than *or
    equal to* it go to its right subtree, so inserting a duplicate adds a
    second node instead of being rejected.
    """

    __slots__ = ("_root", "_borrow", "_node_type")

    # ------------------------------------------------------------------
    #   Construction / teardown
    # ------------------------------------------------------------------
    def __init__(
        self,
        items: Optional[Iterable[K]] = None,
        *,
        borrow: Optional[Callable[[K], Any]] = None,
        node_type: Type[_Node[K]] = _Node,
    ) -> None:
        """
        Create an empty tree or optionally initialise it from an iterable.

        Parameters
        ----------
        items : iterable of keys   optional
            Each key is inserted in iteration order using ``insert``.
        borrow : callable   optional
            Maps a stored key to the value lookups are compared against
            (``get``, ``contains``, ``delete``).  Defaults to the key itself.
        node_type : subclass of ``_Node``   optional
            Class used to allocate nodes.
        """
        if not (isinstance(node_type, type) and issubclass(node_type, _Node)):
            raise TypeError(f"node_type must be a _Node subclass, not {node_type!r}")

        self._root: Optional[_Node[K]] = None
        self._borrow = borrow
        self._node_type = node_type

        if items is not None:
            for key in items:
                self.insert(key)

    def __del__(self) -> None:
        # __init__ may have failed before _root was assigned
        if getattr(self, "_root", None) is not None:
            self._dispose()

    def clear(self) -> None:
        """Release every node and leave the tree empty."""
        released = self._dispose()
        logger.debug("cleared tree, released %d nodes", released)

    def _dispose(self) -> int:
        """
        Post‑order teardown using an explicit stack.

        Each child is detached from its parent and fully released before the
        parent itself is popped.  The walk never follows ``parent`` links, so
        no node is visited twice.  Returns the number of released nodes.
        """
        root, self._root = self._root, None
        if root is None:
            return 0

        released = 0
        stack: List[_Node[K]] = [root]
        del root
        while stack:
            node = stack[-1]
            if node.left is not None:
                stack.append(node.left)
                node.left = None
            elif node.right is not None:
                stack.append(node.right)
                node.right = None
            else:
                node.parent = None
                stack.pop()
                released += 1
            # the popped node must not outlive this iteration
            del node
        return released

    # ------------------------------------------------------------------
    #   Helper look‑ups (internal)
    # ------------------------------------------------------------------
    def _search_node(self, key: Any) -> Optional[_Node[K]]:
        """Return the first node on the search path that equals *key*."""
        borrow = self._borrow
        cur = self._root
        while cur is not None:
            stored = cur.key if borrow is None else borrow(cur.key)
            if key == stored:
                return cur
            elif key < stored:
                cur = cur.left
            else:
                cur = cur.right
        return None

    @staticmethod
    def _minimum_node(node: Optional[_Node[K]]) -> Optional[_Node[K]]:
        """Return the leftmost node of the subtree rooted at *node*."""
        if node is None:
            return None
        while node.left is not None:
            node = node.left
        return node

    @staticmethod
    def _maximum_node(node: Optional[_Node[K]]) -> Optional[_Node[K]]:
        """Return the rightmost node of the subtree rooted at *node*."""
        if node is None:
            return None
        while node.right is not None:
            node = node.right
        return node

    # ------------------------------------------------------------------
    #   Public set methods
    # ------------------------------------------------------------------
    def insert(self, key: K) -> None:
        """Add *key* as a new leaf.  Duplicates are stored, never rejected."""
        parent: Optional[_Node[K]] = None
        cur = self._root
        go_left = False
        while cur is not None:
            parent = cur
            go_left = key < cur.key
            cur = cur.left if go_left else cur.right

        node = self._node_type(key, parent)
        if parent is None:
            self._root = node
        elif go_left:
            parent.left = node
        else:
            parent.right = node

    def get(self, key: Any) -> Optional[K]:
        """Return the stored key equal to *key*, or ``None`` if there is none."""
        node = self._search_node(key)
        return node.key if node is not None else None

    def contains(self, key: Any) -> bool:
        return self._search_node(key) is not None

    def __contains__(self, key: object) -> bool:
        return self.contains(key)

    def min(self) -> Optional[K]:
        """Return the smallest key, or ``None`` if the tree is empty."""
        node = self._minimum_node(self._root)
        return node.key if node is not None else None

    def max(self) -> Optional[K]:
        """Return the largest key, or ``None`` if the tree is empty."""
        node = self._maximum_node(self._root)
        return node.key if node is not None else None

    def is_empty(self) -> bool:
        return self._root is None

    def __bool__(self) -> bool:
        return self._root is not None

    # ------------------------------------------------------------------
    #   Deletion
    # ------------------------------------------------------------------
    def delete(self, key: Any) -> None:
        """
        Remove one node equal to *key* – the first one met on the search
        path.  Deleting a key that is not stored is a no‑op.
        """
        node = self._search_node(key)
        if node is None:
            logger.debug("delete: %r not found", key)
            return
        self._delete_node(node)

    def _transplant(self, u: _Node[K], v: Optional[_Node[K]]) -> None:
        """Put the subtree rooted at `v` into the slot `u` occupies."""
        parent = u.parent
        if parent is None:
            self._root = v
        elif u is parent.left:
            parent.left = v
        else:
            parent.right = v
        if v is not None:
            v.parent = parent

    def _delete_node(self, z: _Node[K]) -> None:
        """Unlink exactly one node from the tree and release it."""
        if z.is_leaf():
            logger.debug("delete: leaf %r", z.key)
            self._transplant(z, None)
        elif z.left is None:
            logger.debug("delete: %r has a right child only", z.key)
            self._transplant(z, z.right)
        elif z.right is None:
            logger.debug("delete: %r has a left child only", z.key)
            self._transplant(z, z.left)
        else:
            # In‑order successor: leftmost node of the right subtree.  It has
            # no left child, so it is removed with a single transplant.
            y = self._minimum_node(z.right)
            assert y is not None and y.left is None
            logger.debug("delete: %r has two children, successor %r", z.key, y.key)
            z.key = y.key
            self._transplant(y, y.right)
            z = y

        # z is out of the graph; drop its stale links
        z.left = z.right = None
        z.parent = None

    # ------------------------------------------------------------------
    #   Validation/checking utilities – useful for debugging
    # ------------------------------------------------------------------
    def validate(self) -> None:
        """
        Verify the ordering and parent‑link invariants.
        Raises ``AssertionError`` with a descriptive message if something is broken.
        """
        if self._root is None:
            return
        assert self._root.parent is None, "Root has a parent"

        # (node, lower bound inclusive, upper bound exclusive); None = unbounded
        stack: List[Tuple[_Node[K], Optional[_Node[K]], Optional[_Node[K]]]] = [
            (self._root, None, None)
        ]
        while stack:
            node, low, high = stack.pop()
            if low is not None:
                assert not (
                    node.key < low.key
                ), f"BST property violated ({node.key!r} in right subtree of {low.key!r})"
            if high is not None:
                assert (
                    node.key < high.key
                ), f"BST property violated ({node.key!r} in left subtree of {high.key!r})"

            if node.left is not None:
                assert node.left.parent is node, f"Bad parent link below {node.key!r}"
                stack.append((node.left, low, node))
            if node.right is not None:
                assert node.right.parent is node, f"Bad parent link below {node.key!r}"
                stack.append((node.right, node, high))

    # ------------------------------------------------------------------
    #   Convenience string representation (for debugging)
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        if self._root is None:
            return "BinarySearchTree()"
        return (
            f"BinarySearchTree(root={self._root.key!r}, "
            f"min={self.min()!r}, max={self.max()!r})"
        )
