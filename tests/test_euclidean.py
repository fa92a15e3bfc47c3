import asyncio
import math
import unittest

import numpy as np

from bigfraction import gcd, gcd_async


def fibonacci(n):
    a, b = 0, 1
    for _ in range(n):
        a, b = b, a + b
    return a


class GcdTests(unittest.TestCase):
    def test_known_values(self):
        self.assertEqual(gcd(6, 9), 3)
        self.assertEqual(gcd(-30, 105), 15)
        self.assertEqual(gcd(1, -1), 1)
        self.assertEqual(gcd(12, 15), 3)

    def test_zero_argument_yields_zero(self):
        for n in (-7, -1, 0, 1, 11, 10**30):
            self.assertEqual(gcd(0, n), 0)
            self.assertEqual(gcd(n, 0), 0)

    def test_equal_arguments(self):
        self.assertEqual(gcd(5, 5), 5)
        self.assertEqual(gcd(-5, -5), 5)
        self.assertEqual(gcd(-5, 5), 5)

    def test_commutative_and_sign_invariant(self):
        for a in range(-12, 13):
            for b in range(-12, 13):
                self.assertEqual(gcd(a, b), gcd(b, a))
                self.assertEqual(gcd(a, b), gcd(abs(a), abs(b)))
                if a and b:
                    self.assertEqual(gcd(a, b), math.gcd(a, b))

    def test_large_operands(self):
        self.assertEqual(gcd(12 * 10**40, 18 * 10**40), 6 * 10**40)
        self.assertEqual(gcd(fibonacci(300), fibonacci(301)), 1)
        self.assertEqual(gcd(7 * fibonacci(300), 7 * fibonacci(301)), 7)

    def test_fixed_width_integers(self):
        result = gcd(np.int64(12), np.int32(-15))
        self.assertEqual(result, 3)
        self.assertIs(type(result), int)

    def test_rejects_non_integers(self):
        with self.assertRaises(TypeError):
            gcd(1.5, 3)


class GcdAsyncTests(unittest.IsolatedAsyncioTestCase):
    async def test_known_values(self):
        self.assertEqual(await gcd_async(11, 0), 0)
        self.assertEqual(await gcd_async(12, 15), 3)
        self.assertEqual(await gcd_async(1, -1), 1)
        self.assertEqual(await gcd_async(-30, 105), 15)
        self.assertEqual(await gcd_async(0, 0), 0)

    async def test_matches_synchronous_form(self):
        pairs = [
            (6, 9),
            (-8, -8),
            (fibonacci(200), fibonacci(150)),
            (3 * fibonacci(301), 3 * fibonacci(300)),
        ]
        for a, b in pairs:
            self.assertEqual(await gcd_async(a, b), gcd(a, b))

    async def test_yields_between_steps(self):
        # Consecutive Fibonacci numbers take about one modulus step per index.
        ticks = 0
        done = False

        async def ticker():
            nonlocal ticks
            while not done:
                ticks += 1
                await asyncio.sleep(0)

        task = asyncio.create_task(ticker())
        result = await gcd_async(fibonacci(101), fibonacci(100))
        done = True
        await task
        self.assertEqual(result, 1)
        self.assertGreaterEqual(ticks, 90)


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
