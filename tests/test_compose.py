"""Tests for polynomial composition."""

import random
import unittest

from polycalc_pkg.compose import compose
from polycalc_pkg.parser import parse_polynomial as P
from polycalc_pkg.poly import Mono, add_monos, from_coeff, render, variable, zero


class TestComposeBasics(unittest.TestCase):
    """Small cases with known results."""

    def test_zero_without_substitutes(self):
        self.assertEqual(compose(zero(), []), zero())

    def test_zero_with_substitute(self):
        self.assertEqual(compose(zero(), [from_coeff(42)]), zero())

    def test_constant_without_substitutes(self):
        self.assertEqual(compose(from_coeff(43), []), from_coeff(43))

    def test_constant_with_substitute(self):
        self.assertEqual(compose(from_coeff(44), [from_coeff(45)]), from_coeff(44))

    def test_variable_with_zero(self):
        self.assertEqual(compose(P("(1,1)"), [zero()]), zero())

    def test_variable_with_constant(self):
        self.assertEqual(compose(P("(1,1)"), [from_coeff(7)]), from_coeff(7))

    def test_variable_with_itself(self):
        self.assertEqual(compose(P("(1,1)"), [P("(1,1)")]), P("(1,1)"))

    def test_missing_substitutes_become_zero(self):
        self.assertEqual(compose(P("(3,0)+(1,1)"), []), from_coeff(3))
        self.assertEqual(compose(P("((1,1),0)+(1,1)"), [from_coeff(7)]), from_coeff(7))

    def test_square_of_shifted_variable(self):
        result = compose(P("(1,2)"), [P("(1,0)+(1,1)")])
        self.assertEqual(render(result), "(1,0)+(2,1)+(1,2)")

    def test_two_variables(self):
        result = compose(P("((1,1),1)"), [from_coeff(2), from_coeff(3)])
        self.assertEqual(result, from_coeff(6))

    def test_swap_variables(self):
        p = P("((2,1),0)+(1,1)")  # x0 + 2*x1
        result = compose(p, [variable(1), variable(0)])
        self.assertEqual(result, P("((1,1),0)+(2,1)"))


class TestComposeProperties(unittest.TestCase):
    def _random_poly(self, rng, depth=2):
        if depth == 0 or rng.random() < 0.25:
            return from_coeff(rng.randint(-9, 9))
        monos = [
            Mono(rng.randint(0, 3), self._random_poly(rng, depth - 1))
            for _ in range(rng.randint(0, 3))
        ]
        return add_monos(monos, rng.randint(-5, 5))

    def test_identity_substitution(self):
        """Substituting every variable with itself changes nothing."""
        rng = random.Random(99)
        identity = [variable(i) for i in range(4)]
        for _ in range(100):
            p = self._random_poly(rng)
            self.assertEqual(compose(p, identity), p)

    def test_deep_nesting_is_iterative(self):
        depth = 2000
        p = P("(" * depth + "1" + ",1)" * depth)
        ones = [from_coeff(1)] * depth
        self.assertEqual(compose(p, ones), from_coeff(1))
        self.assertTrue(compose(p, ones[:-1]).is_zero())


if __name__ == "__main__":
    unittest.main()
