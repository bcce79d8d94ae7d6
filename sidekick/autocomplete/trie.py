"""
Compressed-edge (Patricia) trie with a ranked top-5 list at every node.

Each edge carries a label that may span several characters. Labels are
views ``(source, start, end)`` into the query strings owned by the
frequency table rather than freshly sliced substrings. Children are
dispatched on the first character of their label, so sibling labels
never share a first character.

Every node remembers the best five queries that pass through it, ranked
by the path-aware score at the node's depth. Lists are maintained
eagerly: each insertion offers the query to every node on its path.
Nodes are never deleted; a split only subdivides an existing edge.
"""

from __future__ import annotations

from typing import Iterator, Optional

from sidekick.autocomplete.frequency import FrequencyTable
from sidekick.autocomplete.ranking import RankedList, Scorer


class TrieInvariantError(RuntimeError):
    """The trie reached a state its structural invariants rule out."""


class EdgeLabel:
    """Read-only view onto ``source[start:end]``."""

    __slots__ = ("source", "start", "end")

    def __init__(self, source: str, start: int, end: int) -> None:
        self.source = source
        self.start = start
        self.end = end

    @property
    def first(self) -> str:
        return self.source[self.start]

    @property
    def text(self) -> str:
        return self.source[self.start:self.end]

    def common_prefix_length(self, text: str, offset: int = 0) -> int:
        """Length of the common prefix of this label and ``text[offset:]``."""
        n = min(len(self), len(text) - offset)
        src, start = self.source, self.start
        i = 0
        while i < n and src[start + i] == text[offset + i]:
            i += 1
        return i

    def head(self, length: int) -> "EdgeLabel":
        return EdgeLabel(self.source, self.start, self.start + length)

    def tail(self, length: int) -> "EdgeLabel":
        return EdgeLabel(self.source, self.start + length, self.end)

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"EdgeLabel({self.text!r})"


class TrieNode:
    """
    Single node in the trie.

    label: edge label leading into this node (empty for the root)
    depth: number of characters from the root to the end of *label*
    children: first character of the child's label -> child
    top: ranked queries reachable beneath this node
    is_terminal: a stored query ends exactly here
    """

    __slots__ = ("label", "depth", "children", "top", "is_terminal")

    def __init__(self, label: EdgeLabel, depth: int) -> None:
        self.label = label
        self.depth = depth
        self.children: dict[str, TrieNode] = {}
        self.top = RankedList()
        self.is_terminal = False

    def __repr__(self) -> str:
        return f"TrieNode(label={self.label.text!r}, depth={self.depth}, top={self.top.as_list()!r})"


class CompressedTrie:
    """Prefix index over every known query."""

    def __init__(self, frequencies: FrequencyTable, scorer: Optional[Scorer] = None) -> None:
        self._frequencies = frequencies
        self._scorer = scorer or Scorer(frequencies)
        self._root = TrieNode(EdgeLabel("", 0, 0), depth=0)
        self._size = 0
        self._node_count = 1

    @property
    def root(self) -> TrieNode:
        return self._root

    @property
    def size(self) -> int:
        """Number of distinct queries stored."""
        return self._size

    @property
    def node_count(self) -> int:
        """Number of nodes, root included."""
        return self._node_count

    # ---- insertion ----

    def insert(self, query: str) -> None:
        """
        Insert *query* and offer it to the ranked list of every node on its path.

        Re-inserting a stored query changes no structure; it only lets each
        node on the path re-rank the query with its current frequency.
        """
        if not query:
            return

        text = self._frequencies.intern(query)
        node = self._root
        pos = 0

        while True:
            child = node.children.get(text[pos])
            if child is None:
                self._attach_leaf(node, text, pos)
                return

            lcp = child.label.common_prefix_length(text, pos)
            if lcp == 0:
                raise TrieInvariantError(
                    f"child keyed {text[pos]!r} has label {child.label.text!r}"
                )

            if lcp == len(child.label):
                pos += lcp
                self._consider(child, text)
                if pos == len(text):
                    self._mark_terminal(child)
                    return
                node = child
                continue

            self._split(node, child, text, pos, lcp)
            return

    def _attach_leaf(self, parent: TrieNode, text: str, pos: int) -> TrieNode:
        leaf = TrieNode(EdgeLabel(text, pos, len(text)), depth=len(text))
        parent.children[text[pos]] = leaf
        self._node_count += 1
        self._mark_terminal(leaf)
        self._consider(leaf, text)
        return leaf

    def _split(self, parent: TrieNode, child: TrieNode, text: str, pos: int, lcp: int) -> None:
        """
        Break ``child``'s edge after *lcp* characters.

        The shared slice becomes a new branch node that takes over the
        child's position. The branch inherits the child's ranked list,
        since everything beneath the child is now beneath the branch.
        """
        branch = TrieNode(child.label.head(lcp), depth=parent.depth + lcp)
        branch.top = child.top.copy()

        child.label = child.label.tail(lcp)
        branch.children[child.label.first] = child
        parent.children[branch.label.first] = branch
        self._node_count += 1

        pos += lcp
        if pos == len(text):
            self._mark_terminal(branch)
        else:
            self._attach_leaf(branch, text, pos)
        self._consider(branch, text)

    def _mark_terminal(self, node: TrieNode) -> None:
        if not node.is_terminal:
            node.is_terminal = True
            self._size += 1

    def _consider(self, node: TrieNode, query: str) -> None:
        depth = node.depth
        node.top.consider(query, lambda q: self._scorer.path_aware(q, depth))

    # ---- lookup ----

    def locate(self, prefix: str) -> TrieNode:
        """
        Deepest node reached by *prefix*.

        A prefix that ends inside an edge, or diverges part way along it,
        stops at that edge's child. A prefix with no matching child at
        some node stops at that node; for the first character this is
        the root.
        """
        node = self._root
        reached = self._root
        pos = 0
        while pos < len(prefix):
            child = node.children.get(prefix[pos])
            if child is None:
                break
            reached = child
            lcp = child.label.common_prefix_length(prefix, pos)
            if lcp < len(child.label):
                break
            pos += lcp
            node = child
        return reached

    def __contains__(self, query: object) -> bool:
        if not isinstance(query, str) or not query:
            return False
        node = self._root
        pos = 0
        while pos < len(query):
            child = node.children.get(query[pos])
            if child is None:
                return False
            if child.label.common_prefix_length(query, pos) != len(child.label):
                return False
            pos += len(child.label)
            node = child
        return node.is_terminal

    def iter_queries(self) -> Iterator[str]:
        """Rebuild every stored query by concatenating labels root-to-node."""
        stack: list[tuple[TrieNode, str]] = [(self._root, "")]
        while stack:
            node, path = stack.pop()
            if node.is_terminal:
                yield path
            for child in node.children.values():
                stack.append((child, path + child.label.text))

    def iter_nodes(self) -> Iterator[tuple[str, TrieNode]]:
        """Yield ``(path, node)`` for every node below the root."""
        stack: list[tuple[TrieNode, str]] = [(self._root, "")]
        while stack:
            node, path = stack.pop()
            for child in node.children.values():
                child_path = path + child.label.text
                yield child_path, child
                stack.append((child, child_path))
