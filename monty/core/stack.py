# core/stack.py
"""
Value stack backing the interpreter.

Nodes live in an index arena owned by the Stack. Each node records the arena
index of its predecessor (towards the top) and successor (towards the bottom),
so push/pop/swap/rotate are all O(1) relinks with no ownership cycles.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional

from .errors import AllocationFailure


class EmptyStackError(IndexError):
    pass


class StackTooShortError(IndexError):
    pass


@dataclass
class StackNode:
    value: int
    prev: Optional[int] = None  # index of the node above, None at the top
    next: Optional[int] = None  # index of the node below, None at the bottom


class Stack:
    """LIFO stack of integers; the head is the most recently pushed value."""

    def __init__(self, max_size: Optional[int] = None):
        self.max_size = max_size
        self._nodes: List[Optional[StackNode]] = []
        self._free: List[int] = []
        self._top: Optional[int] = None
        self._bottom: Optional[int] = None
        self._size = 0

    # --- arena bookkeeping ---

    def _allocate(self, node: StackNode) -> int:
        if self.max_size is not None and self._size >= self.max_size:
            raise AllocationFailure()
        try:
            if self._free:
                index = self._free.pop()
                self._nodes[index] = node
            else:
                self._nodes.append(node)
                index = len(self._nodes) - 1
        except MemoryError as e:
            raise AllocationFailure() from e
        return index

    def _release(self, index: int) -> None:
        self._nodes[index] = None
        self._free.append(index)

    def _node(self, index: int) -> StackNode:
        return self._nodes[index]

    # --- stack operations ---

    def push(self, value: int) -> None:
        index = self._allocate(StackNode(value=value, next=self._top))
        if self._top is None:
            self._bottom = index
        else:
            self._node(self._top).prev = index
        self._top = index
        self._size += 1

    def pop(self) -> int:
        if self._top is None:
            raise EmptyStackError("pop from an empty stack")
        index = self._top
        node = self._node(index)
        self._top = node.next
        if self._top is None:
            self._bottom = None
        else:
            self._node(self._top).prev = None
        self._release(index)
        self._size -= 1
        return node.value

    def peek(self) -> int:
        if self._top is None:
            raise EmptyStackError("peek at an empty stack")
        return self._node(self._top).value

    def replace_top(self, value: int) -> None:
        """Overwrite the head value in place."""
        if self._top is None:
            raise EmptyStackError("replace on an empty stack")
        self._node(self._top).value = value

    def swap_top_two(self) -> None:
        if self._size < 2:
            raise StackTooShortError("swap needs at least two values")
        first = self._top
        second = self._node(first).next
        third = self._node(second).next

        self._node(first).prev = second
        self._node(first).next = third
        if third is None:
            self._bottom = first
        else:
            self._node(third).prev = first

        self._node(second).prev = None
        self._node(second).next = first
        self._top = second

    def rotate_top_to_bottom(self) -> None:
        """rotl: the head becomes the tail, the second node becomes the head."""
        if self._size < 2:
            return
        first = self._top
        second = self._node(first).next
        self._node(second).prev = None
        self._top = second

        self._node(self._bottom).next = first
        self._node(first).prev = self._bottom
        self._node(first).next = None
        self._bottom = first

    def rotate_bottom_to_top(self) -> None:
        """rotr: the tail becomes the head."""
        if self._size < 2:
            return
        last = self._bottom
        new_bottom = self._node(last).prev
        self._node(new_bottom).next = None
        self._bottom = new_bottom

        self._node(last).prev = None
        self._node(last).next = self._top
        self._node(self._top).prev = last
        self._top = last

    def clear(self) -> None:
        self._nodes.clear()
        self._free.clear()
        self._top = None
        self._bottom = None
        self._size = 0

    # --- inspection ---

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[int]:
        """Yield values head to tail."""
        index = self._top
        while index is not None:
            node = self._node(index)
            yield node.value
            index = node.next

    def to_list(self) -> List[int]:
        return list(self)

    def __repr__(self) -> str:
        return f"Stack(top->{self.to_list()})"

    def check_invariants(self) -> None:
        """
        Walk the chain and verify the link structure.

        Raises:
            AssertionError: If a link is inconsistent, a cycle exists, or the
                recorded size/bottom do not match the chain.
        """
        seen = set()
        prev_index: Optional[int] = None
        index = self._top
        while index is not None:
            if index in seen:
                raise AssertionError(f"cycle detected at node {index}")
            seen.add(index)
            node = self._node(index)
            if node is None:
                raise AssertionError(f"link to released node {index}")
            if node.prev != prev_index:
                raise AssertionError(
                    f"node {index} records predecessor {node.prev}, expected {prev_index}"
                )
            prev_index = index
            index = node.next
        if prev_index != self._bottom:
            raise AssertionError(f"bottom is {self._bottom}, chain ends at {prev_index}")
        if len(seen) != self._size:
            raise AssertionError(f"size is {self._size}, chain holds {len(seen)} nodes")
