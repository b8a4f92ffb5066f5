#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/ast/walk.py
"""Enter/exit tree walking and handler dispatch.

:func:`walk` performs a depth-first traversal that calls a visit function
twice per node: once when entering it (before its children) and once when
exiting it (after its children). The visit function steers the walk by
returning a :class:`WalkStatus`.

:class:`HandlerRegistry` maps each :class:`~mdcanon.ast.nodes.NodeKind` to
the handler that renders it; renderers populate a registry once and dispatch
through it from their visit function.

"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Iterator, Optional

from mdcanon.ast.nodes import Node, NodeKind, get_node_children


class WalkStatus(Enum):
    """Instruction returned by a visit function."""

    CONTINUE = "continue"
    SKIP_CHILDREN = "skip_children"
    STOP = "stop"


VisitFunc = Callable[[Node, bool], WalkStatus]
NodeHandler = Callable[[Node, bool], WalkStatus]


def walk(node: Node, visit: VisitFunc) -> WalkStatus:
    """Walk ``node`` and its descendants depth-first.

    ``visit(child, True)`` is called before a node's children are visited and
    ``visit(child, False)`` after them. Returning
    :attr:`WalkStatus.SKIP_CHILDREN` from the entering call skips the
    children; the exiting call still happens. Returning
    :attr:`WalkStatus.STOP` from any call ends the walk immediately.

    The walk keeps its own stack, so arbitrarily deep trees do not hit the
    interpreter's recursion limit.

    Parameters
    ----------
    node : Node
        Root of the subtree to walk
    visit : callable
        Function ``(node, entering) -> WalkStatus``

    Returns
    -------
    WalkStatus
        ``STOP`` if the walk was aborted, otherwise ``CONTINUE``

    Examples
    --------
    >>> from mdcanon.ast.nodes import Document, Paragraph, String
    >>> seen = []
    >>> def visit(n, entering):
    ...     seen.append((n.kind.value, entering))
    ...     return WalkStatus.CONTINUE
    >>> walk(Document(children=[Paragraph(content=[String(b"x")])]), visit)
    <WalkStatus.CONTINUE: 'continue'>
    >>> seen[:2]
    [('document', True), ('paragraph', True)]

    """
    # Each frame holds a node and an iterator over its remaining children,
    # or None once the children have been skipped.
    stack: list[tuple[Node, Optional[Iterator[Node]]]] = []

    status = visit(node, True)
    if status is WalkStatus.STOP:
        return status
    stack.append((node, iter(get_node_children(node)) if status is WalkStatus.CONTINUE else None))

    while stack:
        current, children = stack[-1]
        child = next(children, None) if children is not None else None
        if child is None:
            stack.pop()
            if visit(current, False) is WalkStatus.STOP:
                return WalkStatus.STOP
            continue

        status = visit(child, True)
        if status is WalkStatus.STOP:
            return status
        stack.append((child, iter(get_node_children(child)) if status is WalkStatus.CONTINUE else None))

    return WalkStatus.CONTINUE


class HandlerRegistry:
    """Dispatch table from node kind to rendering handler.

    Registering a handler for a kind that already has one replaces it, which
    lets extensions and subclasses override individual node kinds.
    """

    def __init__(self) -> None:
        self._handlers: dict[NodeKind, NodeHandler] = {}

    def register(self, kind: NodeKind, handler: NodeHandler) -> None:
        """Register ``handler`` for nodes of ``kind``."""
        self._handlers[kind] = handler

    def get(self, kind: NodeKind) -> Optional[NodeHandler]:
        """Return the handler for ``kind``, or None when none is registered."""
        return self._handlers.get(kind)

    def kinds(self) -> frozenset[NodeKind]:
        """Return the set of kinds that have a handler."""
        return frozenset(self._handlers)

    def __contains__(self, kind: object) -> bool:
        return kind in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
