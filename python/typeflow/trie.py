"""Prefix index over candidate strings.

:class:`PrefixIndex` is a compressed (radix) trie: every edge carries a label of
one or more characters, and no two edges leaving a node start with the same
character. Values are stored on the node where their key ends; several values
may share a key.

The index is built once and then only read. Reading it from several threads
at the same time is safe as long as nobody inserts concurrently.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, NamedTuple, Optional

from typeflow._utils import ensure_str
from typeflow.enums import Visit


class PrefixInfo(NamedTuple):
    """What a traversal visitor learns about the node it is visiting.

    Attributes:
        prefix: Full key prefix from the root to this node.
        depth: Node depth, 1 for children of the root and 0 for the root itself.
        shared_length: Length of the prefix shared with the previously visited
            node. ``prefix[shared_length:]`` is what was added since the parent.
        values: Values whose key is exactly ``prefix`` (empty if none).
    """

    prefix: str
    depth: int
    shared_length: int
    values: tuple

    @property
    def is_word(self) -> bool:
        return bool(self.values)

    @property
    def delta(self) -> str:
        return self.prefix[self.shared_length:]


Visitor = Callable[[PrefixInfo], Optional[Visit]]


class _Node:
    __slots__ = ("label", "children", "values")

    def __init__(self, label: str = ""):
        self.label = label
        self.children: Optional[dict[str, _Node]] = None
        self.values: Optional[list] = None

    def child(self, char: str) -> Optional["_Node"]:
        if self.children is None:
            return None
        return self.children.get(char)

    def set_child(self, node: "_Node") -> None:
        if self.children is None:
            self.children = {}
        self.children[node.label[0]] = node

    def sorted_children(self) -> list["_Node"]:
        if not self.children:
            return []
        return [self.children[c] for c in sorted(self.children)]


def _common_prefix_length(a: str, b: str) -> int:
    n = min(len(a), len(b))
    i = 0
    while i < n and a[i] == b[i]:
        i += 1
    return i


class PrefixIndex:
    """
    A radix trie mapping normalized keys to one or more values.

    Keys that share a prefix share the path to it, so a depth-first walk
    visits them contiguously. That is what lets a search reuse the edit
    distance computed for a prefix across every key below it.

    Warning:
        Inserting is NOT thread-safe. Concurrent reads are fine once the
        index is fully built.

    Example:
        >>> index = PrefixIndex()
        >>> index.insert("iran", "Iran")
        >>> index.insert("iraq", "Iraq")
        >>> index.insert("ireland", "Ireland")
        >>> [key for key, _ in index.items()]
        ['iran', 'iraq', 'ireland']
    """

    def __init__(self):
        self._root = _Node()
        self._size = 0
        self._keys = 0

    def insert(self, key: str, value: Any) -> None:
        """Associate ``value`` with ``key``.

        The empty key is stored on the root node.
        """
        ensure_str(key, "key")

        node = self._root
        rest = key
        if not rest:
            if node.values is None:
                node.values = []
                self._keys += 1
            node.values.append(value)
            self._size += 1
            return

        while True:
            child = node.child(rest[0])
            if child is None:
                leaf = _Node(rest)
                leaf.values = [value]
                node.set_child(leaf)
                self._keys += 1
                break

            common = _common_prefix_length(child.label, rest)
            if common < len(child.label):
                # split the edge so the shared part gets its own node
                split = _Node(child.label[:common])
                child.label = child.label[common:]
                split.set_child(child)
                node.set_child(split)
                child = split

            rest = rest[common:]
            if not rest:
                if child.values is None:
                    child.values = []
                    self._keys += 1
                child.values.append(value)
                break
            node = child

        self._size += 1

    def _find(self, key: str) -> Optional[_Node]:
        node = self._root
        rest = key
        while rest:
            child = node.child(rest[0])
            if child is None or not rest.startswith(child.label):
                return None
            rest = rest[len(child.label):]
            node = child
        return node

    def contains(self, key: str) -> bool:
        """Return True if at least one value is stored under ``key``."""
        ensure_str(key, "key")
        node = self._find(key)
        return node is not None and bool(node.values)

    def get(self, key: str) -> list:
        """Return the values stored under ``key`` (empty list if none)."""
        ensure_str(key, "key")
        node = self._find(key)
        if node is None or not node.values:
            return []
        return list(node.values)

    def traverse(self, visitor: Visitor) -> bool:
        """Walk the index depth-first in pre-order.

        Children are visited in ascending order of their edge label, so a
        node's prefix always extends its parent's. The visitor is called once
        per node and returns a :class:`~typeflow.Visit` signal (None means
        ``Visit.CONTINUE``).

        When values are stored under the empty key, the root is visited first
        with ``prefix=""`` and ``depth=0``. Skipping its subtree skips the
        whole index.

        Args:
            visitor: Callable receiving a PrefixInfo for each node.

        Returns:
            False if the visitor halted the walk, True otherwise.
        """
        root = self._root
        if root.values:
            signal = visitor(PrefixInfo("", 0, 0, tuple(root.values)))
            if signal is Visit.HALT:
                return False
            if signal is Visit.SKIP_SUBTREE:
                return True

        stack = [(child, "", 1) for child in reversed(root.sorted_children())]
        while stack:
            node, parent_prefix, depth = stack.pop()
            prefix = parent_prefix + node.label
            info = PrefixInfo(
                prefix=prefix,
                depth=depth,
                shared_length=len(parent_prefix),
                values=tuple(node.values) if node.values else (),
            )
            signal = visitor(info)
            if signal is Visit.HALT:
                return False
            if signal is Visit.SKIP_SUBTREE:
                continue
            for child in reversed(node.sorted_children()):
                stack.append((child, prefix, depth + 1))
        return True

    def items(self) -> list[tuple[str, tuple]]:
        """Return ``(key, values)`` pairs in prefix order."""
        found = []

        def _collect(info: PrefixInfo) -> None:
            if info.is_word:
                found.append((info.prefix, info.values))

        self.traverse(_collect)
        return found

    def keys(self) -> list[str]:
        return [key for key, _ in self.items()]

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __len__(self) -> int:
        """Return the number of stored values (aliases counted separately)."""
        return self._size

    @property
    def key_count(self) -> int:
        """Number of distinct keys."""
        return self._keys

    @property
    def node_count(self) -> int:
        """Number of nodes below the root."""
        count = 0
        stack = [self._root]
        while stack:
            node = stack.pop()
            if node.children:
                count += len(node.children)
                stack.extend(node.children.values())
        return count

    def __repr__(self) -> str:
        return f"PrefixIndex(keys={self._keys}, values={self._size})"


__all__ = ["PrefixIndex", "PrefixInfo", "Visitor"]
