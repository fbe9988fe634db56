# symkernel - Expression Nodes
# Copyright (c) 2024 symkernel Contributors. All rights reserved.

"""
Immutable expression trees.

Every expression is an ``Entity``. Entities never change after construction,
may be shared between parents and cache their derived properties (size,
depth, free variables, ...) for their whole lifetime.

Each node kind provides two small pure rule functions: one used by
``evaled()`` and one used by ``inner_simplified()``. The walk over the tree
and the rebuilding of unchanged nodes are written once here, in
``Entity._expand_on``.

Example:
    >>> x = Variable('x')
    >>> expr = x * 3 * 0
    >>> expr.inner_simplified()
    0
    >>> (x + 1).substitute(x, 2).evaled()
    3
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, fields
from enum import IntEnum
from fractions import Fraction
from functools import cached_property
import inspect
import sys
import threading
from typing import (
    Any, Callable, ClassVar, Dict, FrozenSet, Iterator, List, Optional, Tuple, Type,
    Union,
)

from .config import get_config
from .domain import Domain, fits_domain
from .exceptions import NotConstantError, TreeTooDeepError, UnsupportedOperandError


# Type alias for things that can be converted to expressions
EntityLike = Union['Entity', bool, int, float, complex, Fraction]

# A rule maps the reduced children of a node to a replacement, or None
Rules = Callable[..., Optional['Entity']]

# Names that Variable treats as mathematical constants
CONSTANT_NAMES = frozenset({'pi', 'e'})

# Weights of the simplicity score
WEIGHT_TINY = 0.5
WEIGHT_MINOR = 1.0
WEIGHT = 2.0
WEIGHT_MAJOR = 4.0
WEIGHT_HEAVY = 8.0

# Python frames consumed per tree level by the recursive algorithms
_FRAMES_PER_LEVEL = 12
_FRAME_MARGIN = 500


class Priority(IntEnum):
    """
    Binding strength of a node, lowest binds loosest.

    The high nibble is the band (keyword, boolean, comparison, set, numeric);
    the low bits order the kinds inside a band.
    """
    LAMBDA = 0x0000 | 10
    PROVIDED = 0x0000 | 20
    IMPLICATION = 0x1000 | 10
    DISJUNCTION = 0x1000 | 30
    CONJUNCTION = 0x1000 | 50
    NEGATION = 0x1000 | 70
    EQUALITY = 0x2000 | 10
    COMPARISON = 0x2000 | 20
    CONTAINMENT = 0x3000 | 10
    SUM = 0x4000 | 20
    PRODUCT = 0x4000 | 40
    POWER = 0x4000 | 60
    FACTORIAL = 0x4000 | 70
    FUNCTION = 0x4000 | 80
    LEAF = 0x4000 | 100

    @property
    def band(self) -> int:
        return self & 0xF000


_KINDS: Dict[str, Type['Entity']] = {}


def kinds() -> Dict[str, Type['Entity']]:
    """Return every concrete node kind registered so far, by class name."""
    return {name: cls for name, cls in _KINDS.items() if not inspect.isabstract(cls)}


def _register_kind(cls: Type['Entity']) -> None:
    existing = _KINDS.get(cls.__name__)
    if existing is not None and (existing.__module__, existing.__qualname__) \
            != (cls.__module__, cls.__qualname__):
        raise TypeError(
            f"node kind {cls.__name__!r} is already defined in {existing.__module__}"
        )
    _KINDS[cls.__name__] = cls


# Recursion limits requested by the walks currently running, in any thread
_headroom_lock = threading.Lock()
_headroom_requests: List[int] = []
_headroom_baseline = 0


@contextmanager
def _recursion_headroom(node: 'Entity') -> Iterator[None]:
    """
    Make sure the interpreter can recurse as deep as ``node`` is.

    The recursion limit is process-wide. While any thread needs a raised
    limit it stays at the largest outstanding request, and the limit found
    before the first request is restored once the last one ends.
    """
    global _headroom_baseline

    depth = node.depth
    limit = get_config().max_tree_depth
    if depth > limit:
        raise TreeTooDeepError(depth, limit)
    needed = depth * _FRAMES_PER_LEVEL + _FRAME_MARGIN
    with _headroom_lock:
        if not _headroom_requests:
            _headroom_baseline = sys.getrecursionlimit()
        raised = needed > _headroom_baseline
        if raised:
            _headroom_requests.append(needed)
            sys.setrecursionlimit(max(_headroom_requests))
    if not raised:
        yield
        return
    try:
        yield
    finally:
        with _headroom_lock:
            _headroom_requests.remove(needed)
            sys.setrecursionlimit(max(_headroom_requests, default=_headroom_baseline))


class Entity(ABC):
    """
    Base class for all expression nodes.

    Subclasses are frozen dataclasses whose fields are their children (and,
    for leaves, their payload). They must implement:

        _init_direct_children: the ordered tuple of children
        _rebuild: a node of the same kind from new children
        _inner_eval: one evaluation step (usually ``_reduce_eval``)
        _inner_simplify: one simplification step (usually ``_reduce_simplify``)
    """

    priority: ClassVar[Priority] = Priority.FUNCTION
    is_set_like: ClassVar[bool] = False
    # Indices of children that ``replace`` must not rewrite (binders)
    _binder_slots: ClassVar[Tuple[int, ...]] = ()
    _simplicity_weight: ClassVar[float] = WEIGHT

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        _register_kind(cls)

    def __post_init__(self):
        # Children given as Python numbers or booleans are converted
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, Entity):
                object.__setattr__(self, f.name, to_entity(value))

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @abstractmethod
    def _init_direct_children(self) -> Tuple[Entity, ...]:
        ...

    @abstractmethod
    def _rebuild(self, children: Tuple[Entity, ...]) -> Entity:
        ...

    @cached_property
    def direct_children(self) -> Tuple[Entity, ...]:
        """Immediate children of this node, in order."""
        return tuple(self._init_direct_children())

    def _with_children(self, children: Tuple[Entity, ...]) -> Entity:
        """Rebuild from children, reusing this node if none of them changed."""
        own = self.direct_children
        if len(own) == len(children) and all(a is b for a, b in zip(own, children)):
            return self
        return self._rebuild(tuple(children))

    def replace(self, func: Callable[[Entity], Entity]) -> Entity:
        """
        Transform the tree bottom-up.

        Children are replaced first, the node is rebuilt from the new
        children (or reused if none changed) and ``func`` is applied to the
        rebuilt node. Shared subtrees are transformed once.

        Example:
            >>> (x + 1).replace(lambda n: Integer(2) if n == x else n)
            2 + 1
        """
        done: Dict[int, Entity] = {}
        stack = [(self, False)]
        while stack:
            node, expanded = stack.pop()
            if id(node) in done:
                continue
            children = node.direct_children
            if not expanded:
                stack.append((node, True))
                for index in reversed(range(len(children))):
                    if index not in node._binder_slots:
                        stack.append((children[index], False))
                continue
            new_children = tuple(
                child if index in node._binder_slots else done[id(child)]
                for index, child in enumerate(children)
            )
            done[id(node)] = func(node._with_children(new_children))
        return done[id(self)]

    @property
    def nodes(self) -> Iterator[Entity]:
        """All nodes of the tree in preorder."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.direct_children))

    def contains(self, node: Entity) -> bool:
        """Whether ``node`` occurs anywhere in this tree."""
        return any(n == node for n in self.nodes)

    # ------------------------------------------------------------------
    # Memoized properties
    # ------------------------------------------------------------------

    def _memo(self, name: str, compute: Callable[[Entity], Any]) -> Any:
        """
        Compute-or-fetch a derived property.

        ``compute`` may read the same property of the children; they are
        filled in first with an explicit stack so deep trees never recurse.
        """
        cache = self.__dict__
        if name in cache:
            return cache[name]
        stack = [self]
        while stack:
            node = stack[-1]
            if name in node.__dict__:
                stack.pop()
                continue
            pending = [c for c in node.direct_children if name not in c.__dict__]
            if pending:
                stack.extend(pending)
            else:
                node.__dict__[name] = compute(node)
                stack.pop()
        return cache[name]

    @property
    def depth(self) -> int:
        """Length of the longest path from this node to a leaf, counting nodes."""
        return self._memo(
            '_depth', lambda n: 1 + max((c.depth for c in n.direct_children), default=0)
        )

    @property
    def complexity(self) -> int:
        """Number of nodes in the tree."""
        return self._memo(
            '_complexity', lambda n: 1 + sum(c.complexity for c in n.direct_children)
        )

    @property
    def is_finite(self) -> bool:
        """False if any node of the tree is an infinity or NaN."""
        return self._memo(
            '_is_finite',
            lambda n: n._this_is_finite and all(c.is_finite for c in n.direct_children),
        )

    @property
    def _this_is_finite(self) -> bool:
        return True

    @property
    def vars_and_consts(self) -> FrozenSet[Variable]:
        """Every Variable of the tree, including the constants pi and e."""
        return self._memo('_vars_and_consts', lambda n: n._collect_vars_and_consts())

    def _collect_vars_and_consts(self) -> FrozenSet[Variable]:
        return frozenset().union(*(c.vars_and_consts for c in self.direct_children))

    @property
    def vars(self) -> FrozenSet[Variable]:
        """Every Variable of the tree except the constants."""
        return frozenset(v for v in self.vars_and_consts if not v.is_constant)

    @property
    def free_variables(self) -> FrozenSet[Variable]:
        """Variables not bound by an enclosing Lambda (constants excluded)."""
        return self._memo('_free_variables', lambda n: n._collect_free_variables())

    def _collect_free_variables(self) -> FrozenSet[Variable]:
        return frozenset().union(*(c.free_variables for c in self.direct_children))

    @property
    def simplicity(self) -> float:
        """
        Cost score used to pick the simplest candidate; lower is simpler.

        Every node costs ``WEIGHT``. Variables, divisions, negative numbers,
        unit fractions, negative powers and logarithms add extra penalties.
        """
        return self._memo(
            '_simplicity',
            lambda n: n._own_simplicity() + sum(c.simplicity for c in n.direct_children),
        )

    def _own_simplicity(self) -> float:
        return self._simplicity_weight

    # ------------------------------------------------------------------
    # Equality
    # ------------------------------------------------------------------

    def _leaf_key(self) -> Any:
        """Payload that distinguishes nodes of the same kind beyond their children."""
        return None

    def __hash__(self) -> int:
        return self._memo(
            '_hash',
            lambda n: hash((type(n).__name__, n._leaf_key(),
                            tuple(hash(c) for c in n.direct_children))),
        )

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Entity):
            return NotImplemented
        stack = [(self, other)]
        while stack:
            a, b = stack.pop()
            if a is b:
                continue
            if type(a) is not type(b) or hash(a) != hash(b):
                return False
            if a._leaf_key() != b._leaf_key():
                return False
            ca, cb = a.direct_children, b.direct_children
            if len(ca) != len(cb):
                return False
            stack.extend(zip(ca, cb))
        return True

    # ------------------------------------------------------------------
    # Evaluation and simplification
    # ------------------------------------------------------------------

    @abstractmethod
    def _inner_eval(self) -> Entity:
        ...

    @abstractmethod
    def _inner_simplify(self) -> Entity:
        ...

    @property
    def codomain(self) -> Domain:
        """Domain the values of this node must belong to."""
        return get_config().codomain

    @property
    def is_nan(self) -> bool:
        return False

    def intrinsic_condition(self, *children: Entity) -> Optional[bool]:
        """
        Whether this node is defined for the given reduced children.

        Returns True or False when it can be decided, None otherwise.
        """
        return True

    def try_contains(self, element: Entity) -> Optional[bool]:
        """Membership test of set-like nodes; None when undecidable."""
        return None

    def evaled(self) -> Entity:
        """
        Reduce the tree to a closed value where possible.

        Returns a Number or Boolean when all leaves are constant, NaN when
        the value is undefined, and a partially reduced tree otherwise.
        """
        with _recursion_headroom(self):
            return self._evaled()

    def _evaled(self) -> Entity:
        return self._checked(self._inner_eval(), keep_self=False)

    def inner_simplified(self) -> Entity:
        """
        One bottom-up simplification pass.

        Children are simplified once, exact values are folded and the
        identities of each node kind are applied.
        """
        with _recursion_headroom(self):
            return self._inner_simplified()

    def _inner_simplified(self) -> Entity:
        return self._checked(self._inner_simplify(), keep_self=True)

    def simplify(self, level: Optional[int] = None) -> Entity:
        """Bounded multi-pass simplification, see ``symkernel.simplify``."""
        from .simplify import simplify
        return simplify(self, level)

    def _checked(self, result: Entity, keep_self: bool) -> Entity:
        from .numeric import Real

        if any(c.is_nan for c in result.direct_children):
            return Real.nan
        if fits_domain(result, self.codomain):
            return result
        return self if keep_self else Real.nan

    def _reduce_eval(self, rules: Rules) -> Entity:
        """Evaluate the children, check definedness, then apply ``rules``."""
        from .numeric import Real

        children = tuple([c._evaled() for c in self.direct_children])
        if self.intrinsic_condition(*children) is False:
            return Real.nan
        return self._expand_on(children, rules)

    def _reduce_simplify(self, rules: Rules, allow_nan_as_exact: bool = True) -> Entity:
        """Simplify the children once, fold exact values, then apply ``rules``."""
        children = tuple([c._inner_simplified() for c in self.direct_children])
        return self._expand_on(
            children, rules, exact_check=True, allow_nan_as_exact=allow_nan_as_exact
        )

    def _expand_on(
        self,
        children: Tuple[Entity, ...],
        rules: Rules,
        exact_check: bool = False,
        allow_nan_as_exact: bool = True,
    ) -> Entity:
        """
        Match reduced children against a rule function.

        Args:
            children: The already reduced children.
            rules: Pure function returning a replacement or None.
            exact_check: Return this node's value first if it is exact.
            allow_nan_as_exact: Whether an exact NaN value may be folded.

        Returns:
            The replacement, or this node rebuilt from ``children``.
        """
        if exact_check:
            value = self._evaled()
            if getattr(value, 'is_exact', False) and (allow_nan_as_exact or not value.is_nan):
                return value
        result = rules(*children)
        if result is not None:
            return result
        # A predicate under a binder may mention the bound variable
        if self._binder_slots:
            return self._with_children(children)
        parts = [c._provided_parts() for c in children]
        predicates = [p for _, p in parts if p is not None]
        if predicates:
            inner = self._with_children(tuple(e for e, _ in parts))
            inner = inner._expand_on(inner.direct_children, rules, exact_check, allow_nan_as_exact)
            predicate = predicates[0]
            for p in predicates[1:]:
                predicate = predicate & p
            return inner.provided(predicate)
        return self._with_children(children)

    def _provided_parts(self) -> Tuple[Entity, Optional[Entity]]:
        return self, None

    def eval_numerical(self) -> Any:
        """
        Evaluate to a Number.

        Raises:
            NotConstantError: If the tree does not reduce to a number.
        """
        from .numeric import Number

        result = self.evaled()
        if not isinstance(result, Number):
            raise NotConstantError('number', result)
        return result

    def eval_boolean(self) -> Boolean:
        """
        Evaluate to a Boolean.

        Raises:
            NotConstantError: If the tree does not reduce to a boolean.
        """
        result = self.evaled()
        if not isinstance(result, Boolean):
            raise NotConstantError('boolean', result)
        return result

    # ------------------------------------------------------------------
    # Substitution
    # ------------------------------------------------------------------

    def substitute(self, x: EntityLike, value: EntityLike) -> Entity:
        """
        Replace every free occurrence of ``x`` with ``value``.

        Binders are respected: a Lambda whose parameter is ``x`` is left
        untouched, and parameters that would capture a variable of
        ``value`` are renamed first.
        """
        with _recursion_headroom(self):
            return self._substitute(to_entity(x), to_entity(value))

    def _substitute(self, x: Entity, value: Entity) -> Entity:
        if self == x:
            return value
        if isinstance(x, Variable) and x not in self.vars_and_consts:
            return self
        return self._with_children(tuple([c._substitute(x, value) for c in self.direct_children]))

    # ------------------------------------------------------------------
    # Operator overloading for natural math syntax
    # ------------------------------------------------------------------

    def __neg__(self) -> Entity:
        from .arithmetic import Mul
        from .numeric import Integer
        return Mul(Integer(-1), self)

    def __add__(self, other: EntityLike) -> Entity:
        from .arithmetic import Sum
        return Sum(self, to_entity(other))

    def __radd__(self, other: EntityLike) -> Entity:
        from .arithmetic import Sum
        return Sum(to_entity(other), self)

    def __sub__(self, other: EntityLike) -> Entity:
        from .arithmetic import Minus
        return Minus(self, to_entity(other))

    def __rsub__(self, other: EntityLike) -> Entity:
        from .arithmetic import Minus
        return Minus(to_entity(other), self)

    def __mul__(self, other: EntityLike) -> Entity:
        from .arithmetic import Mul
        return Mul(self, to_entity(other))

    def __rmul__(self, other: EntityLike) -> Entity:
        from .arithmetic import Mul
        return Mul(to_entity(other), self)

    def __truediv__(self, other: EntityLike) -> Entity:
        from .arithmetic import Div
        return Div(self, to_entity(other))

    def __rtruediv__(self, other: EntityLike) -> Entity:
        from .arithmetic import Div
        return Div(to_entity(other), self)

    def __pow__(self, other: EntityLike) -> Entity:
        from .arithmetic import Pow
        return Pow(self, to_entity(other))

    def __rpow__(self, other: EntityLike) -> Entity:
        from .arithmetic import Pow
        return Pow(to_entity(other), self)

    def __and__(self, other: EntityLike) -> Entity:
        from .logic import And
        return And(self, to_entity(other))

    def __or__(self, other: EntityLike) -> Entity:
        from .logic import Or
        return Or(self, to_entity(other))

    def __xor__(self, other: EntityLike) -> Entity:
        from .logic import Xor
        return Xor(self, to_entity(other))

    def __invert__(self) -> Entity:
        from .logic import Not
        return Not(self)

    def implies(self, other: EntityLike) -> Entity:
        from .logic import Implies
        return Implies(self, to_entity(other))

    def provided(self, predicate: EntityLike) -> Entity:
        from .omni import Provided
        return Provided(self, to_entity(predicate))

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------

    def _render(self) -> str:
        args = ', '.join(str(c) for c in self.direct_children)
        return f"{type(self).__name__.lower()}({args})"

    def _wrap(self, child: Entity, right: bool = False) -> str:
        """Render a child of a binary operator, parenthesised if it binds looser."""
        if child.priority < self.priority or (right and child.priority == self.priority):
            return f"({child})"
        return str(child)

    def __str__(self) -> str:
        return self._render()

    def __repr__(self) -> str:
        return self._render()


def to_entity(x: EntityLike) -> Entity:
    """
    Convert a Python value to an Entity.

    Raises:
        UnsupportedOperandError: For values with no expression counterpart.
    """
    if isinstance(x, Entity):
        return x
    if isinstance(x, bool):
        return Boolean(x)
    from .numeric import number
    return number(x)


@dataclass(frozen=True, eq=False, repr=False)
class Variable(Entity):
    """
    A named symbol. The names ``pi`` and ``e`` denote constants.
    """
    name: str
    priority: ClassVar[Priority] = Priority.LEAF

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise UnsupportedOperandError(self.name)

    @property
    def is_constant(self) -> bool:
        return self.name in CONSTANT_NAMES

    def _init_direct_children(self) -> Tuple[Entity, ...]:
        return ()

    def _rebuild(self, children: Tuple[Entity, ...]) -> Entity:
        return self

    def _leaf_key(self) -> Any:
        return self.name

    def _collect_vars_and_consts(self) -> FrozenSet[Variable]:
        return frozenset({self})

    def _collect_free_variables(self) -> FrozenSet[Variable]:
        return frozenset() if self.is_constant else frozenset({self})

    def _own_simplicity(self) -> float:
        return WEIGHT + (0.0 if self.is_constant else WEIGHT)

    def _inner_eval(self) -> Entity:
        if self.is_constant:
            from .numeric import constant_value
            return constant_value(self.name)
        return self

    def _inner_simplify(self) -> Entity:
        return self

    def _render(self) -> str:
        return self.name


@dataclass(frozen=True, eq=False, repr=False)
class Boolean(Entity):
    """A truth value."""
    value: bool
    priority: ClassVar[Priority] = Priority.LEAF

    def __post_init__(self):
        if not isinstance(self.value, bool):
            raise UnsupportedOperandError(self.value)

    def __bool__(self) -> bool:
        return self.value

    @property
    def codomain(self) -> Domain:
        return Domain.BOOLEAN

    def _init_direct_children(self) -> Tuple[Entity, ...]:
        return ()

    def _rebuild(self, children: Tuple[Entity, ...]) -> Entity:
        return self

    def _leaf_key(self) -> Any:
        return self.value

    def _inner_eval(self) -> Entity:
        return self

    def _inner_simplify(self) -> Entity:
        return self

    def _render(self) -> str:
        return 'true' if self.value else 'false'


TRUE = Boolean(True)
FALSE = Boolean(False)
