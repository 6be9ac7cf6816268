"""Configuration system for DazzleWalkLib.

This module defines how users tell a walk when to hand control back
(the iteration mode), how deep to go and which children to visit.
"""

from dataclasses import dataclass
from enum import IntFlag
from typing import Any, Callable, List, Optional, Union


class IterationMode(IntFlag):
    """Bitmask selecting when a graph iterator returns control.

    Flags are combined with ``|`` and tested with ``&``. Negative masks
    such as ``~IterationMode.LEAF`` mean "everything except leaves".

    For the tree ``X{a{a1,a2}, b{b1,b2}}`` the iterator yields:

        ENTER:               X, a, b
        LEAF:                a1, a2, b1, b2
        EXIT:                a, b, X
        SIBLING_STEP:        a, X, b  (top of the stack at each step)
        ENTER | LEAF:        X, a, a1, a2, b, b1, b2
        EXIT | LEAF:         a1, a2, a, b1, b2, b, X
        ~LEAF:               X, a, a, a, X, b, b, b, X
    """
    NONE = 0
    ENTER = 1           # Entered a node that has children
    LEAF = 2            # Entered a node without children
    EXIT = 4            # Left a node that had children
    SIBLING_STEP = 8    # Moved from an exited node to its next sibling
    ALL = ENTER | LEAF | EXIT | SIBLING_STEP
    DEFAULT = ENTER | LEAF
    DEPTH_FIRST = EXIT | LEAF


ModeLike = Union[IterationMode, int]


class ConfigurationError(ValueError):
    """Raised when a walk configuration is inconsistent."""
    pass


@dataclass
class WalkConfig:
    """Complete configuration for a walk.

    This is the primary way users of the functional API describe a walk.
    The iterator itself only needs a mode; depth limits and filters are
    applied by wrapping the child-enumeration function.
    """

    # When to yield
    mode: ModeLike = IterationMode.DEFAULT

    # Depth control (root = depth 0, None = unlimited)
    max_depth: Optional[int] = None

    # Children rejected by the predicate are skipped with their subtrees
    include_filter: Optional[Callable[[Any], bool]] = None

    # Observer notified about every begin/end/transition
    listener: Optional[Any] = None

    @classmethod
    def pre_order(cls, max_depth: Optional[int] = None) -> 'WalkConfig':
        """Parents before children (the default mode)."""
        return cls(mode=IterationMode.DEFAULT, max_depth=max_depth)

    @classmethod
    def post_order(cls, max_depth: Optional[int] = None) -> 'WalkConfig':
        """Children before parents."""
        return cls(mode=IterationMode.DEPTH_FIRST, max_depth=max_depth)

    @classmethod
    def leaves_only(cls, max_depth: Optional[int] = None) -> 'WalkConfig':
        """Only nodes without children.

        Note that with a depth limit, nodes at ``max_depth`` become leaves.
        """
        return cls(mode=IterationMode.LEAF, max_depth=max_depth)

    @classmethod
    def all_events(cls) -> 'WalkConfig':
        """Yield on every enter, leaf, exit and sibling step."""
        return cls(mode=IterationMode.ALL)

    @classmethod
    def from_kwargs(cls, config: Optional['WalkConfig'] = None, **kwargs) -> 'WalkConfig':
        """Build a WalkConfig from keyword arguments.

        Keyword arguments override the fields of ``config`` (which is not
        modified); unknown keywords are rejected.

        Args:
            config: Base configuration (defaults to ``WalkConfig()``)
            **kwargs: Field overrides (mode, max_depth, include_filter, listener)

        Returns:
            A validated WalkConfig

        Raises:
            ConfigurationError: If a keyword is unknown or a value is invalid
        """
        base = config if config is not None else cls()
        values = {
            'mode': base.mode,
            'max_depth': base.max_depth,
            'include_filter': base.include_filter,
            'listener': base.listener,
        }
        for key, value in kwargs.items():
            if key not in values:
                raise ConfigurationError(f"Unknown configuration option: {key}")
            values[key] = value
        return cls(**values).check()

    def allows_depth(self, depth: int) -> bool:
        """Check if a node at the given depth may be entered.

        Args:
            depth: Depth of the candidate node

        Returns:
            True if the depth is within the configured limit
        """
        if self.max_depth is None:
            return True
        return depth <= self.max_depth

    def should_include(self, node: Any) -> bool:
        if self.include_filter is None:
            return True
        return bool(self.include_filter(node))

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if isinstance(self.mode, bool) or not isinstance(self.mode, int):
            errors.append("mode must be an IterationMode or an int mask")

        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                errors.append("max_depth must be an integer")
            elif self.max_depth < 0:
                errors.append("max_depth cannot be negative")

        if self.include_filter is not None and not callable(self.include_filter):
            errors.append("include_filter must be callable")

        if self.listener is not None:
            for name in ('on_begin', 'on_end', 'on_transition'):
                if not callable(getattr(self.listener, name, None)):
                    errors.append(f"listener is missing {name}()")

        return errors

    def check(self) -> 'WalkConfig':
        """Raise ConfigurationError if :meth:`validate` finds problems."""
        errors = self.validate()
        if errors:
            raise ConfigurationError(
                f"Invalid configuration: {'; '.join(errors)}"
            )
        return self


def classify_step(previous: Any, candidate: Any) -> IterationMode:
    """Return the iteration status for a walker step.

    Args:
        previous: The node the walker just left (None after an activation)
        candidate: The next child returned by the enumeration function

    Returns:
        ENTER, LEAF, SIBLING_STEP or EXIT
    """
    if previous is None:
        return IterationMode.ENTER if candidate is not None else IterationMode.LEAF
    return IterationMode.SIBLING_STEP if candidate is not None else IterationMode.EXIT
