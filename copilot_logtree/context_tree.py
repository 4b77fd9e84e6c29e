# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Prefix tree of configured contexts.

Nodes live in a flat list and refer to each other by index. The root node
(index 0) represents the empty path. A node carries logger specs only when
its exact path was configured; its composite logger is built lazily, at
most once, the first time a lookup resolves to it.
"""

import logging
import re
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .exceptions import WrongLoggersConfigurationError
from .logger import Logger
from .models import is_spec_like, normalize_specs

logger = logging.getLogger(__name__)

DEFAULT_DELIMITERS = (".", "/", "\\")
RESERVED_PREFIX = "_"


@dataclass
class ContextNode:
    """One path segment of the context tree.

    Attributes:
        node_id: Index of this node in the tree
        path: Full context path reconstructed from the root
        parent: Index of the parent node, None for the root
        children: Segment -> child node index
        specs: Logger specs configured for exactly this path
    """
    node_id: int
    path: str
    parent: int | None = None
    children: dict[str, int] = field(default_factory=dict)
    specs: tuple[Any, ...] | None = None
    _logger: Logger | None = field(default=None, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def is_built(self) -> bool:
        return self._logger is not None

    def get_logger(self, build: Callable[["ContextNode"], Logger]) -> Logger:
        """Return this node's logger, building it on first use.

        Failed builds are not remembered; the next call tries again.
        """
        built = self._logger
        if built is not None:
            return built

        with self._lock:
            if self._logger is None:
                self._logger = build(self)
            return self._logger


class ContextTree:
    """Resolves context strings to the most specific configured node."""

    def __init__(
        self,
        delimiters: Iterable[str] = DEFAULT_DELIMITERS,
        reserved_names: Iterable[str] = (),
    ):
        self.delimiters = tuple(delimiters)
        if not self.delimiters or any(not d for d in self.delimiters):
            raise WrongLoggersConfigurationError("At least one non-empty context delimiter is required")

        self.separator = self.delimiters[0]
        self.reserved_names = frozenset(reserved_names)
        self._split_pattern = re.compile("|".join(re.escape(d) for d in self.delimiters))
        self.nodes: list[ContextNode] = [ContextNode(node_id=0, path="")]

    @property
    def root(self) -> ContextNode:
        return self.nodes[0]

    @classmethod
    def from_config(
        cls,
        contexts_config: Mapping[str, Any],
        delimiters: Iterable[str] = DEFAULT_DELIMITERS,
        reserved_names: Iterable[str] = (),
    ) -> "ContextTree":
        """Build a tree from a context -> spec(s) mapping.

        Raises:
            WrongLoggersConfigurationError: If the config or one of its values is malformed
        """
        if not isinstance(contexts_config, Mapping):
            raise WrongLoggersConfigurationError(
                f"Contexts config must be a mapping, got {type(contexts_config).__name__}"
            )

        tree = cls(delimiters, reserved_names)
        for context, value in contexts_config.items():
            tree.add(context, value)

        logger.debug("Built context tree with %d nodes from %d contexts", len(tree.nodes), len(contexts_config))
        return tree

    def split(self, context: str) -> list[str]:
        """Split a context string into its non-empty segments."""
        return [segment for segment in self._split_pattern.split(str(context)) if segment]

    def _validate_segment(self, context: str, segment: str) -> None:
        if segment.startswith(RESERVED_PREFIX) and segment not in self.reserved_names:
            raise WrongLoggersConfigurationError(
                f"Context '{context}' has segment '{segment}' starting with reserved prefix '{RESERVED_PREFIX}'"
            )

    def _child(self, node: ContextNode, segment: str) -> ContextNode:
        child_id = node.children.get(segment)
        if child_id is not None:
            return self.nodes[child_id]

        path = f"{node.path}{self.separator}{segment}" if node.path else segment
        child = ContextNode(node_id=len(self.nodes), path=path, parent=node.node_id)
        self.nodes.append(child)
        node.children[segment] = child.node_id
        return child

    def add(self, context: str, value: Any) -> ContextNode:
        """Attach logger specs to the node for context, creating the path as needed.

        Raises:
            WrongLoggersConfigurationError: If value is not a spec or a list of specs
        """
        specs = normalize_specs(value)
        for spec in specs:
            if not is_spec_like(spec):
                raise WrongLoggersConfigurationError(
                    f"Context '{context}' must contain logger specs, got {type(spec).__name__}"
                )

        node = self.root
        for segment in self.split(context):
            self._validate_segment(context, segment)
            node = self._child(node, segment)

        if node.specs is not None:
            logger.warning("Context '%s' configured more than once; last config wins", node.path)
        node.specs = specs
        return node

    def resolve(self, context: str) -> ContextNode | None:
        """Find the deepest configured node along the literal path of context.

        The walk stops at the first segment without a matching child; the
        last node with specs seen on the way wins.

        Returns:
            The most specific configured node, or None
        """
        segments = self.split(context)
        if not segments:
            return self.root if self.root.specs is not None else None

        node = self.root
        found = None
        for segment in segments:
            child_id = node.children.get(segment)
            if child_id is None:
                break
            node = self.nodes[child_id]
            if node.specs is not None:
                found = node

        return found
