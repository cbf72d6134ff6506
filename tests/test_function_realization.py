"""
Tests for realizing operator expressions as callables on Functions.

The contract checks come from RealizationChecks; the classes below verify
the algebraic laws of the primitives on concrete functions.
"""

import pytest
import numpy as np

from pylinblock import (
    Function,
    FunctionRealization,
    IntervalDomain,
    OperatorExpression,
)
from .checks.realization import RealizationChecks


XS = np.linspace(-1, 1, 41)


@pytest.fixture(scope="module")
def domain() -> IntervalDomain:
    return IntervalDomain(-1, 1)


@pytest.fixture(scope="module")
def seed(domain) -> FunctionRealization:
    return FunctionRealization.seed(domain)


@pytest.fixture(scope="module")
def z(domain) -> Function:
    """z(x) = sin(x) on [-1, 1]."""
    return Function(domain, evaluate_callable=np.sin, name="sin")


@pytest.fixture(scope="module")
def x_fun(domain) -> Function:
    """f(x) = x on [-1, 1]."""
    return Function(domain, evaluate_callable=lambda x: x, name="x")


@pytest.fixture(scope="module")
def jump() -> Function:
    """-1 left of 0, +1 right of 0."""
    return Function(
        [-1, 0, 1], evaluate_callable=lambda x: np.where(x < 0, -1.0, 1.0)
    )


class TestFunctionRealizationContract(RealizationChecks):
    """Runs the standard Realization checks on FunctionRealization."""

    @pytest.fixture
    def realization_class(self):
        return FunctionRealization


class TestPrimitives:
    """Each primitive against a closed form."""

    def test_eye(self, seed, z):
        assert seed.eye()(z) is z

    def test_diff(self, seed, z):
        assert np.allclose(seed.diff(1)(z)(XS), np.cos(XS), atol=1e-12)
        assert np.allclose(seed.diff(2)(z)(XS), -np.sin(XS), atol=1e-10)

    def test_cumsum(self, seed, domain):
        u = Function(domain, evaluate_callable=np.cos)
        expected = np.sin(XS) - np.sin(-1.0)
        assert np.allclose(seed.cumsum(1)(u)(XS), expected, atol=1e-13)

    def test_feval(self, seed, z):
        assert seed.feval(0.3, 0)(z) == pytest.approx(np.sin(0.3))

    def test_inner(self, seed, z, x_fun):
        expected = 2 * (np.sin(1.0) - np.cos(1.0))
        assert seed.inner(x_fun)(z) == pytest.approx(expected, abs=1e-13)

    def test_inner_conjugates_by_default(self, domain):
        seed = FunctionRealization.seed(domain)
        e = Function(domain, evaluate_callable=lambda x: np.exp(1j * x))
        assert seed.inner(e)(e) == pytest.approx(2.0, abs=1e-12)
        assert seed.inner(e, conjugate=False)(e) == pytest.approx(
            np.sin(2.0), abs=1e-12
        )

    def test_mult(self, seed, z, x_fun):
        assert np.allclose(seed.mult(x_fun)(z)(XS), XS * np.sin(XS))

    def test_sum(self, seed, domain):
        u = Function(domain, evaluate_callable=np.cos)
        assert seed.sum()(u) == pytest.approx(2 * np.sin(1.0), abs=1e-13)

    def test_zero(self, seed, z):
        assert seed.zero()(z) == 0

    def test_zeros(self, seed, z, domain):
        result = seed.zeros()(z)
        assert isinstance(result, Function)
        assert result.domain == domain
        assert np.all(result(XS) == 0)

    def test_zeros_without_seed_domain(self, z):
        result = FunctionRealization(None).zeros()(z)
        assert result.domain == z.domain

    def test_scalar_mtimes(self, seed, z):
        A = seed.diff(1)
        assert np.allclose(seed.mtimes(3, A)(z)(XS), 3 * np.cos(XS))
        assert np.allclose(seed.mtimes(A, -2.0)(z)(XS), -2 * np.cos(XS))

    def test_func_is_payload(self, seed):
        A = seed.eye()
        assert A.func is A.payload


class TestAlgebraicLaws:
    """Laws every function realization must obey."""

    def test_identity_law(self, seed, z):
        A = seed.mtimes(seed.diff(1), seed.mult(Function.constant(2.0)))
        composed = seed.mtimes(seed.eye(), A)
        assert np.allclose(composed(z)(XS), A(z)(XS))

    def test_zero_orders_are_identity(self, seed, z):
        assert seed.diff(0)(z) is z
        assert seed.cumsum(0)(z) is z

    def test_composition_applies_right_operand_first(self, seed, z, x_fun):
        A = seed.diff(1)
        B = seed.mult(x_fun)
        AB = seed.mtimes(A, B)
        BA = seed.mtimes(B, A)
        x0 = np.pi / 4
        assert AB(z)(x0) == pytest.approx(
            np.sin(x0) + x0 * np.cos(x0), abs=1e-12
        )
        assert BA(z)(x0) == pytest.approx(x0 * np.cos(x0), abs=1e-12)
        assert abs(AB(z)(x0) - BA(z)(x0)) > 1e-3

    def test_adding_zero_functional_is_noop(self, seed, z):
        D = seed.diff(1)
        P = seed.plus(D, seed.zero())
        assert np.allclose(P(z)(XS), D(z)(XS), atol=1e-14)

    def test_adding_zero_operator_is_noop(self, seed, z):
        D = seed.diff(1)
        P = seed.plus(D, seed.zeros())
        assert np.allclose(P(z)(XS), D(z)(XS), atol=1e-14)

    def test_double_negation(self, seed, z):
        A = seed.diff(1)
        minus_minus = seed.uminus(seed.uminus(A))
        assert np.allclose(minus_minus(z)(XS), A(z)(XS))
        assert np.allclose(seed.uminus(A)(z)(XS), -np.cos(XS))

    def test_uplus_is_exact(self, seed, z):
        A = seed.diff(1)
        assert np.array_equal(seed.uplus(A)(z)(XS), A(z)(XS))

    def test_plus_adds_actions(self, seed, z):
        S = seed.plus(seed.diff(1), seed.eye())
        assert np.allclose(S(z)(XS), np.cos(XS) + np.sin(XS))


class TestDirectionalEvaluation:
    """feval at a breakpoint where the function jumps."""

    @pytest.fixture
    def jump_seed(self):
        return FunctionRealization.seed([-1, 0, 1])

    def test_left_limit(self, jump_seed, jump):
        assert jump_seed.feval(0.0, -1)(jump) == pytest.approx(-1.0)

    def test_right_limit(self, jump_seed, jump):
        assert jump_seed.feval(0.0, 1)(jump) == pytest.approx(1.0)

    def test_two_sided_value_is_average(self, jump_seed, jump):
        assert jump_seed.feval(0.0, 0)(jump) == pytest.approx(0.0, abs=1e-14)

    def test_limits_differ_at_jump(self, jump_seed, jump):
        left = jump_seed.feval(0.0, -1)(jump)
        right = jump_seed.feval(0.0, 1)(jump)
        assert right - left == pytest.approx(2.0)

    def test_direction_uses_sign_only(self, jump_seed, jump):
        assert jump_seed.feval(0.0, -0.5)(jump) == pytest.approx(-1.0)
        assert jump_seed.feval(0.0, 7)(jump) == pytest.approx(1.0)

    def test_direction_irrelevant_away_from_breakpoints(self, seed, z):
        for direction in (-1, 0, 1):
            assert seed.feval(0.5, direction)(z) == pytest.approx(np.sin(0.5))


class TestReplay:
    """Realizing whole expressions."""

    def test_replay_is_idempotent(self, z):
        L = OperatorExpression.diff(2) + OperatorExpression.mult(
            Function(evaluate_callable=np.exp)
        )
        R1 = FunctionRealization.from_expression(L)
        R2 = FunctionRealization.from_expression(L)
        assert R1 is not R2
        assert np.array_equal(R1(z)(XS), R2(z)(XS))

    def test_second_derivative_plus_identity_annihilates_sine(self, z):
        L = OperatorExpression.diff(2, [-1, 1]) + OperatorExpression.eye([-1, 1])
        R = L.realize(FunctionRealization)
        u = R(z)
        xs = np.linspace(-1, 1, 201)
        assert np.max(np.abs(u(xs))) < 1e-10

    def test_functional_expression_yields_scalar(self, z):
        L = OperatorExpression.feval(0.5) @ OperatorExpression.diff(1)
        assert FunctionRealization.from_expression(L)(z) == pytest.approx(
            np.cos(0.5)
        )

    def test_replay_logs_at_debug_level(self, caplog):
        import logging
        L = OperatorExpression.eye()
        with caplog.at_level(logging.DEBUG, logger="pylinblock"):
            FunctionRealization.from_expression(L)
        assert "Replaying operator" in caplog.text
