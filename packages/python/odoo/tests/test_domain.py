"""
Tests for domain construction and validation.
"""

from __future__ import annotations

import pytest

from odoo_do import (
    OP_AND,
    OP_NOT,
    OP_OR,
    Domain,
    InvalidDomainError,
    all_of,
    any_of,
    clause,
    negate,
    new_domain,
    validate_domain,
)

from tests.mock_server import evaluate_domain

ACTIVE = clause("active", "=", True)
ADMIN = clause("login", "=", "admin")
DEMO = clause("login", "=", "demo")


class TestClause:
    """Tests for clause()."""

    def test_clause_is_triple(self):
        assert clause("name", "ilike", "deco") == ("name", "ilike", "deco")

    def test_clause_keeps_value_type(self):
        assert clause("id", "in", [1, 2])[2] == [1, 2]


class TestNewDomain:
    """Tests for new_domain()."""

    def test_single_level_sequence(self):
        domain = new_domain(OP_OR, ACTIVE, ADMIN)

        assert isinstance(domain, Domain)
        assert list(domain) == ["|", ACTIVE, ADMIN]

    def test_empty(self):
        assert new_domain() == []

    def test_no_validation_at_construction(self):
        domain = new_domain(OP_AND, ACTIVE)

        assert list(domain) == ["&", ACTIVE]

    def test_repr(self):
        assert repr(new_domain(ACTIVE)) == "Domain([('active', '=', True)])"


class TestCombinators:
    """Tests for all_of(), any_of() and negate()."""

    def test_all_of_two(self):
        assert list(all_of(ACTIVE, ADMIN)) == ["&", ACTIVE, ADMIN]

    def test_all_of_three_adds_two_operators(self):
        assert list(all_of(ACTIVE, ADMIN, DEMO)) == ["&", "&", ACTIVE, ADMIN, DEMO]

    def test_all_of_single_term(self):
        assert list(all_of(ACTIVE)) == [ACTIVE]

    def test_all_of_skips_empty_domains(self):
        assert list(all_of(Domain(), ACTIVE)) == [ACTIVE]

    def test_any_of_nested(self):
        domain = all_of(ACTIVE, any_of(ADMIN, DEMO))

        assert list(domain) == ["&", ACTIVE, "|", ADMIN, DEMO]

    def test_any_of_with_empty_domain_matches_all(self):
        assert any_of(ADMIN, Domain()) == []

    def test_any_of_without_terms(self):
        with pytest.raises(InvalidDomainError, match="at least one term"):
            any_of()

    def test_all_of_without_terms_matches_all(self):
        assert all_of() == []

    def test_implicit_and_is_made_explicit(self):
        implicit = new_domain(ACTIVE, ADMIN)

        assert list(any_of(implicit, DEMO)) == ["|", "&", ACTIVE, ADMIN, DEMO]

    def test_negate(self):
        assert list(negate(ADMIN)) == ["!", ADMIN]

    def test_negate_empty_domain(self):
        with pytest.raises(InvalidDomainError):
            negate(Domain())

    def test_operator_is_not_an_operand(self):
        with pytest.raises(InvalidDomainError):
            all_of(OP_AND, ACTIVE)

    def test_combinators_produce_valid_domains(self):
        domain = any_of(all_of(ACTIVE, negate(ADMIN)), new_domain(DEMO, ACTIVE), ADMIN)

        assert domain.validate() is domain

    def test_combinator_semantics(self):
        domain = all_of(ACTIVE, any_of(ADMIN, DEMO))

        assert evaluate_domain(list(domain), {"active": True, "login": "demo"})
        assert not evaluate_domain(list(domain), {"active": False, "login": "demo"})
        assert not evaluate_domain(list(domain), {"active": True, "login": "portal"})


class TestValidation:
    """Tests for the opt-in arity check."""

    @pytest.mark.parametrize(
        "terms",
        [
            [],
            [ACTIVE],
            [ACTIVE, ADMIN],
            ["|", ACTIVE, ADMIN],
            ["!", ACTIVE],
            ["&", "|", ACTIVE, ADMIN, "!", DEMO],
            [["active", "=", True]],
        ],
    )
    def test_well_formed(self, terms: list):
        validate_domain(terms)

    @pytest.mark.parametrize(
        "terms",
        [
            ["&", ACTIVE],
            ["|"],
            ["!"],
            ["&", "|", ACTIVE, ADMIN],
        ],
    )
    def test_missing_operand(self, terms: list):
        with pytest.raises(InvalidDomainError, match="operands"):
            validate_domain(terms)

    def test_unknown_operator(self):
        with pytest.raises(InvalidDomainError, match="Unknown domain operator"):
            validate_domain(["^", ACTIVE, ADMIN])

    @pytest.mark.parametrize("leaf", [("active", "="), ("a", "=", 1, 2), 42, ("a", 1, 2)])
    def test_malformed_clause(self, leaf: object):
        with pytest.raises(InvalidDomainError):
            validate_domain([leaf])

    def test_domain_expressions(self):
        domain = new_domain("|", ACTIVE, ADMIN, DEMO)

        assert domain.expressions() == [["|", ACTIVE, ADMIN], [DEMO]]

    def test_validate_error_code(self):
        with pytest.raises(InvalidDomainError) as exc_info:
            new_domain(OP_NOT).validate()

        assert exc_info.value.code_name == "INVALID_DOMAIN"


class TestLargeDomains:
    """Long operator chains are handled without deep recursion."""

    LOGINS = [clause("login", "=", f"user{i}") for i in range(5000)]

    def test_validate_long_or_chain(self):
        domain = any_of(*self.LOGINS)

        assert domain.validate() is domain
        assert domain.count(OP_OR) == 4999

    def test_nest_long_or_chain(self):
        domain = all_of(ACTIVE, any_of(*self.LOGINS))

        assert domain[:2] == [OP_AND, ACTIVE]
        assert len(domain.expressions()) == 1
        assert evaluate_domain(list(domain), {"active": True, "login": "user4999"})

    def test_negate_long_and_chain(self):
        domain = negate(new_domain(*self.LOGINS))

        assert domain[0] == OP_NOT
        assert domain.count(OP_AND) == 4999
        validate_domain(domain)

    def test_truncated_long_chain(self):
        with pytest.raises(InvalidDomainError, match="operands"):
            validate_domain([OP_OR] * 5000 + self.LOGINS)
