# symkernel - Binders and Conditional Values
# Copyright (c) 2024 symkernel Contributors. All rights reserved.

"""
Lambda abstraction, function application and conditional values.

``Lambda`` is the only binder of the kernel: substitution stops at a lambda
whose parameter is the substituted variable, and a parameter that would
capture a free variable of the inserted value is renamed first.

Example:
    >>> x, y = Variable('x'), Variable('y')
    >>> f = Lambda(x, x + y)
    >>> f.substitute(y, x)
    lambda x_1: x_1 + x
    >>> Application(f, (2,)).substitute(y, 3).evaled()
    5
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, ClassVar, Dict, FrozenSet, Optional, Tuple

from . import numeric as num
from .domain import Domain
from .entity import Boolean, Entity, Priority, Variable, to_entity
from .exceptions import UnsupportedOperandError


def fresh_variable(base: Variable, taken: FrozenSet[Variable]) -> Variable:
    """A variable named after ``base`` that does not occur in ``taken``."""
    names = {v.name for v in taken}
    index = 1
    while f"{base.name}_{index}" in names:
        index += 1
    return Variable(f"{base.name}_{index}")


# ----------------------------------------------------------------------
# Lambda
# ----------------------------------------------------------------------

def _eta_reduce(parameter: Entity, body: Entity) -> Optional[Entity]:
    # lambda x: f(x)  ->  f, when f does not mention x
    if isinstance(body, Application) and len(body.arguments) == 1:
        if body.arguments[0] == parameter and parameter not in body.expression.free_variables:
            return body.expression
    return None


@dataclass(frozen=True, eq=False, repr=False)
class Lambda(Entity):
    """An anonymous function of one parameter."""
    parameter: Variable
    body: Entity
    priority: ClassVar[Priority] = Priority.LAMBDA
    _binder_slots: ClassVar[Tuple[int, ...]] = (0,)

    def __post_init__(self):
        if isinstance(self.parameter, str):
            object.__setattr__(self, 'parameter', Variable(self.parameter))
        if not isinstance(self.parameter, Variable) or self.parameter.is_constant:
            raise UnsupportedOperandError(self.parameter)
        object.__setattr__(self, 'body', to_entity(self.body))

    @property
    def codomain(self) -> Domain:
        return Domain.ANY

    def _init_direct_children(self):
        return (self.parameter, self.body)

    def _rebuild(self, children):
        return Lambda(*children)

    def _collect_free_variables(self) -> FrozenSet[Variable]:
        return self.body.free_variables - {self.parameter}

    def _inner_eval(self) -> Entity:
        return self._reduce_eval(_eta_reduce)

    def _inner_simplify(self) -> Entity:
        return self._reduce_simplify(_eta_reduce)

    def _substitute(self, x: Entity, value: Entity) -> Entity:
        if self == x:
            return value
        if x == self.parameter:
            return self
        if isinstance(x, Variable) and x not in self.vars_and_consts:
            return self
        if self.parameter in value.free_variables:
            fresh = fresh_variable(
                self.parameter, self.vars_and_consts | value.vars_and_consts | {x}
            )
            body = self.body._substitute(self.parameter, fresh)
            return Lambda(fresh, body._substitute(x, value))
        return self._with_children((self.parameter, self.body._substitute(x, value)))

    def apply(self, argument: Entity) -> Entity:
        """Beta reduction: the body with the parameter replaced by ``argument``."""
        return self.body._substitute(self.parameter, to_entity(argument))

    def _render(self) -> str:
        return f"lambda {self.parameter}: {self.body}"


# ----------------------------------------------------------------------
# Application
# ----------------------------------------------------------------------

def _builtin_functions() -> Dict[str, Tuple[int, Callable[..., Entity]]]:
    from . import arithmetic as ar
    from . import trigonometry as tr

    e = Variable('e')
    return {
        'sin': (1, tr.Sin), 'cos': (1, tr.Cos), 'tan': (1, tr.Tan),
        'cotan': (1, tr.Cotan), 'sec': (1, tr.Sec), 'cosec': (1, tr.Cosec),
        'arcsin': (1, tr.Arcsin), 'arccos': (1, tr.Arccos), 'arctan': (1, tr.Arctan),
        'arccotan': (1, tr.Arccotan), 'arcsec': (1, tr.Arcsec), 'arccosec': (1, tr.Arccosec),
        'sqrt': (1, lambda a: ar.Pow(a, num.HALF)),
        'ln': (1, lambda a: ar.Log(e, a)),
        'exp': (1, lambda a: ar.Pow(e, a)),
        'log': (2, ar.Log),
        'abs': (1, ar.Abs),
        'sign': (1, ar.Signum),
        'factorial': (1, ar.Factorial),
        'phi': (1, ar.Phi),
    }


def _as_builtin(expression: Entity, arguments: Tuple[Entity, ...]) -> Optional[Entity]:
    if not isinstance(expression, Variable):
        return None
    entry = _builtin_functions().get(expression.name)
    if entry is None or entry[0] != len(arguments):
        return None
    return entry[1](*arguments)


def _beta_reduce(expression: Entity, arguments: Tuple[Entity, ...]) -> Optional[Entity]:
    if not isinstance(expression, Lambda) or not arguments:
        return None
    reduced = expression.apply(arguments[0])
    if len(arguments) > 1:
        return Application(reduced, arguments[1:])
    return reduced


@dataclass(frozen=True, eq=False, repr=False)
class Application(Entity):
    """``expression`` applied to ``arguments``."""
    expression: Entity
    arguments: Tuple[Entity, ...]
    priority: ClassVar[Priority] = Priority.FUNCTION

    def __post_init__(self):
        object.__setattr__(self, 'expression', to_entity(self.expression))
        object.__setattr__(self, 'arguments', tuple(to_entity(a) for a in self.arguments))

    def _init_direct_children(self):
        return (self.expression,) + self.arguments

    def _rebuild(self, children):
        return Application(children[0], tuple(children[1:]))

    def _reduced(self, expression: Entity, *arguments: Entity) -> Tuple[Optional[Entity], bool]:
        builtin = _as_builtin(expression, arguments)
        if builtin is not None:
            return builtin, True
        reduced = _beta_reduce(expression, arguments)
        if reduced is None:
            return None, False
        # A lambda applied to itself would reduce forever
        if isinstance(reduced, Application) and isinstance(reduced.expression, Lambda) \
                and reduced == self:
            return None, False
        return reduced, True

    def _eval_rule(self, expression: Entity, *arguments: Entity) -> Optional[Entity]:
        reduced, found = self._reduced(expression, *arguments)
        return reduced._evaled() if found else None

    def _simplify_rule(self, expression: Entity, *arguments: Entity) -> Optional[Entity]:
        reduced, found = self._reduced(expression, *arguments)
        return reduced._inner_simplified() if found else None

    def _inner_eval(self) -> Entity:
        return self._reduce_eval(self._eval_rule)

    def _inner_simplify(self) -> Entity:
        return self._reduce_simplify(self._simplify_rule)

    def _render(self) -> str:
        args = ', '.join(str(a) for a in self.arguments)
        head = self.expression
        if head.priority < Priority.FUNCTION:
            return f"({head})({args})"
        return f"{head}({args})"


# ----------------------------------------------------------------------
# Provided
# ----------------------------------------------------------------------

def _provided(expression: Entity, predicate: Entity) -> Optional[Entity]:
    if isinstance(predicate, Boolean):
        return expression if predicate.value else num.NAN
    if isinstance(expression, Provided):
        return Provided(expression.expression, expression.predicate & predicate)
    return None


@dataclass(frozen=True, eq=False, repr=False)
class Provided(Entity):
    """
    ``expression`` where ``predicate`` holds, undefined elsewhere.

    Operations applied to a Provided act on its expression and keep the
    predicate: ``Provided(x, p) + 1`` evaluates to ``Provided(x + 1, p)``.
    """
    expression: Entity
    predicate: Entity
    priority: ClassVar[Priority] = Priority.PROVIDED

    @property
    def codomain(self) -> Domain:
        return Domain.ANY

    def _init_direct_children(self):
        return (self.expression, self.predicate)

    def _rebuild(self, children):
        return Provided(*children)

    def _provided_parts(self) -> Tuple[Entity, Optional[Entity]]:
        return self.expression, self.predicate

    def _inner_eval(self) -> Entity:
        return self._reduce_eval(_provided)

    def _inner_simplify(self) -> Entity:
        return self._reduce_simplify(_provided)

    def _render(self) -> str:
        return f"{self._wrap(self.expression)} provided {self._wrap(self.predicate, right=True)}"


# ----------------------------------------------------------------------
# Piecewise
# ----------------------------------------------------------------------

Case = Tuple[Entity, Entity]


def _as_case(case) -> Case:
    if isinstance(case, Provided):
        return case.expression, case.predicate
    expression, predicate = case
    return to_entity(expression), to_entity(predicate)


@dataclass(frozen=True, eq=False, repr=False)
class Piecewise(Entity):
    """
    The expression of the first case whose predicate holds.

    Cases are ``(expression, predicate)`` pairs or ``Provided`` nodes. When
    every predicate is false the value is undefined. False cases are dropped
    and cases after the first true one are never reached, so only the
    undecided cases and the first true one are kept.
    """
    cases: Tuple[Case, ...]
    priority: ClassVar[Priority] = Priority.FUNCTION

    def __post_init__(self):
        cases = tuple(_as_case(c) for c in self.cases)
        if not cases:
            raise ValueError("a piecewise expression needs at least one case")
        object.__setattr__(self, 'cases', cases)

    @property
    def codomain(self) -> Domain:
        return Domain.ANY

    def _init_direct_children(self):
        return tuple(child for case in self.cases for child in case)

    def _rebuild(self, children):
        return Piecewise(tuple(zip(children[::2], children[1::2])))

    def _decide(self, cases: Tuple[Case, ...]) -> Entity:
        kept = []
        decided = True
        for expression, predicate in cases:
            value = predicate._evaled()
            if not isinstance(value, Boolean):
                decided = False
                kept.append((expression, predicate))
            elif value.value:
                if decided:
                    return expression
                kept.append((expression, predicate))
                break
        if decided:
            return num.NAN
        return self._with_children(tuple(child for case in kept for child in case))

    def _inner_eval(self) -> Entity:
        return self._decide(tuple((e._evaled(), p._evaled()) for e, p in self.cases))

    def _inner_simplify(self) -> Entity:
        return self._decide(
            tuple((e._inner_simplified(), p._inner_simplified()) for e, p in self.cases)
        )

    def _checked(self, result: Entity, keep_self: bool) -> Entity:
        # Undefined cases that are never selected do not make the whole undefined
        return result

    def _render(self) -> str:
        return '(' + ', '.join(f"{e} if {p}" for e, p in self.cases) + ')'
