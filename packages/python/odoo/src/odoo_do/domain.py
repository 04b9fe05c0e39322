"""
Domain - Odoo search filters.

A domain is a flat list in prefix (Polish) notation: each clause is a
(field, operator, value) triple, and the boolean operators "&" and "|"
combine the two expressions that follow them while "!" negates the next
one. Top-level expressions that are not joined by an operator are ANDed
by the server.

Example:
    from odoo_do import clause, new_domain, OP_OR

    # active users OR the user whose login is "john"
    domain = new_domain(OP_OR, clause("active", "=", True), clause("login", "=", "john"))

    # the same filter, built from combinators
    domain = any_of(clause("active", "=", True), clause("login", "=", "john"))
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Union

from .errors import InvalidDomainError

__all__ = [
    "OP_AND",
    "OP_OR",
    "OP_NOT",
    "Clause",
    "Domain",
    "clause",
    "new_domain",
    "all_of",
    "any_of",
    "negate",
    "validate_domain",
]

OP_AND = "&"
OP_OR = "|"
OP_NOT = "!"

# Number of expressions each prefix operator consumes.
_ARITY = {OP_AND: 2, OP_OR: 2, OP_NOT: 1}

Clause = tuple[str, str, Any]
Term = Union[str, Clause, Sequence[Any]]


def clause(field: str, operator: str, value: Any) -> Clause:
    """
    Build a single (field, operator, value) filter term.

    Args:
        field: Field name, dotted paths allowed (e.g. "partner_id.country_id")
        operator: Comparison operator ("=", "!=", "in", "ilike", ...)
        value: Value to compare against
    """
    return (field, operator, value)


class Domain(list):
    """
    An Odoo domain: a flat, ordered list of operators and clauses.

    Domain is a plain list subclass so it can be passed to the transport
    unchanged. Building it with new_domain() performs no validation; call
    validate() to check operator arity locally before sending.
    """

    def expressions(self) -> list[list[Any]]:
        """Split the domain into its top-level expressions."""
        return _split(list(self))

    def validate(self) -> "Domain":
        """
        Check that every operator has the operands it needs.

        Returns:
            The domain itself, for chaining

        Raises:
            InvalidDomainError: On a missing operand, an unknown operator or
                a malformed clause
        """
        validate_domain(self)
        return self

    def __repr__(self) -> str:
        return f"Domain({list.__repr__(self)})"


def new_domain(*expressions: Term) -> Domain:
    """
    Create a domain from clauses and prefix operators, in the given order.

    Example:
        new_domain(OP_AND, clause("active", "=", True), clause("share", "=", False))
    """
    return Domain(expressions)


def all_of(*terms: Term) -> Domain:
    """Domain matching records that satisfy every term."""
    operands = [_single(term) for term in terms]
    operands = [op for op in operands if op]
    return _join(OP_AND, operands)


def any_of(*terms: Term) -> Domain:
    """
    Domain matching records that satisfy at least one term.

    Raises:
        InvalidDomainError: No terms were given. The empty domain matches
            every record, so it cannot stand for an OR of nothing.
    """
    if not terms:
        raise InvalidDomainError("any_of() needs at least one term")
    operands = [_single(term) for term in terms]
    if any(not op for op in operands):
        # An empty domain matches every record.
        return Domain()
    return _join(OP_OR, operands)


def negate(term: Term) -> Domain:
    """Domain matching records that do not satisfy term."""
    operand = _single(term)
    if not operand:
        raise InvalidDomainError("Cannot negate an empty domain")
    return Domain([OP_NOT, *operand])


def validate_domain(terms: Iterable[Any]) -> None:
    """Raise InvalidDomainError unless terms form a well-formed domain."""
    _split(list(terms))


def _join(operator: str, operands: list[list[Any]]) -> Domain:
    result = Domain([operator] * (len(operands) - 1)) if operands else Domain()
    for operand in operands:
        result.extend(operand)
    return result


def _single(term: Term) -> list[Any]:
    """Normalize a clause or a domain into exactly one prefix expression."""
    if isinstance(term, Domain):
        expressions = term.expressions()
        flat = [OP_AND] * (len(expressions) - 1)
        for expression in expressions:
            flat.extend(expression)
        return flat
    if isinstance(term, str):
        raise InvalidDomainError(f"Operator {term!r} cannot be used as an operand")
    _check_leaf(term)
    return [tuple(term)]


def _split(terms: list[Any]) -> list[list[Any]]:
    """Split terms into top-level expressions, counting pending operands."""
    expressions: list[list[Any]] = []
    start = 0
    pending = 0
    for position, term in enumerate(terms):
        if pending == 0:
            start = position
            pending = 1
        if isinstance(term, str):
            arity = _ARITY.get(term)
            if arity is None:
                raise InvalidDomainError(f"Unknown domain operator {term!r}")
            pending += arity - 1
        else:
            _check_leaf(term)
            pending -= 1
        if pending == 0:
            expressions.append(terms[start:position + 1])
    if pending:
        raise InvalidDomainError("Domain ends before an operator received all its operands")
    return expressions


def _check_leaf(term: Any) -> None:
    if not isinstance(term, (list, tuple)) or len(term) != 3:
        raise InvalidDomainError(f"Domain clause must be a (field, operator, value) triple, got {term!r}")
    if not isinstance(term[1], str):
        raise InvalidDomainError(f"Clause operator must be a string, got {term[1]!r}")
