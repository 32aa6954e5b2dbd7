import unittest

from fstream import FOption, EMPTY, ElementMissing


class TestFOptionBasics(unittest.TestCase):
    def test_of_and_get(self):
        for v in (0, "", "x", 3.5, [1], False):
            o = FOption.of(v)
            self.assertTrue(o.is_present())
            self.assertFalse(o.is_absent())
            self.assertEqual(o.get(), v)

    def test_of_none_is_the_empty_singleton(self):
        self.assertIs(FOption.of(None), EMPTY)
        self.assertIs(FOption.empty(), EMPTY)
        self.assertEqual(FOption.of(None), FOption.empty())
        self.assertTrue(EMPTY.is_absent())
        self.assertFalse(EMPTY.is_present())

    def test_get_on_empty_raises(self):
        with self.assertRaises(ElementMissing):
            EMPTY.get()
        self.assertIsNone(EMPTY.get_or_null())
        self.assertEqual(FOption.of(4).get_or_null(), 4)

    def test_immutable(self):
        o = FOption.of(1)
        with self.assertRaises(Exception):
            o._value = 2  # type: ignore[misc]


class TestFOptionDefaults(unittest.TestCase):
    def test_get_or_else(self):
        self.assertEqual(FOption.of(1).get_or_else(5), 1)
        self.assertEqual(EMPTY.get_or_else(5), 5)

    def test_get_or_else_get_is_lazy(self):
        calls: list[int] = []

        def supplier():
            calls.append(1)
            return 9

        self.assertEqual(FOption.of(1).get_or_else_get(supplier), 1)
        self.assertEqual(calls, [])
        self.assertEqual(EMPTY.get_or_else_get(supplier), 9)
        self.assertEqual(calls, [1])

    def test_get_or_else_throw(self):
        self.assertEqual(FOption.of("a").get_or_else_throw(lambda: KeyError("k")), "a")
        with self.assertRaises(KeyError):
            EMPTY.get_or_else_throw(lambda: KeyError("k"))


class TestFOptionCombinators(unittest.TestCase):
    def test_if_present(self):
        seen: list[int] = []
        o = FOption.of(3)
        self.assertIs(o.if_present(seen.append), o)
        self.assertIs(EMPTY.if_present(seen.append), EMPTY)
        self.assertEqual(seen, [3])

    def test_if_absent_runs_unconditionally(self):
        runs: list[str] = []
        o = FOption.of(3)
        self.assertIs(o.if_absent(lambda: runs.append("present")), o)
        self.assertIs(EMPTY.if_absent(lambda: runs.append("absent")), EMPTY)
        self.assertEqual(runs, ["present", "absent"])

    def test_filter(self):
        o = FOption.of(4)
        self.assertIs(o.filter(lambda x: x % 2 == 0), o)
        self.assertIs(o.filter(lambda x: x > 10), EMPTY)
        self.assertIs(EMPTY.filter(lambda x: True), EMPTY)

    def test_test(self):
        self.assertTrue(FOption.of(4).test(lambda x: x == 4))
        self.assertFalse(FOption.of(4).test(lambda x: x == 5))
        self.assertFalse(EMPTY.test(lambda x: True))

    def test_map(self):
        self.assertEqual(FOption.of(2).map(lambda x: x + 1), FOption.of(3))
        self.assertIs(EMPTY.map(lambda x: x + 1), EMPTY)
        self.assertIs(FOption.of(2).map(lambda x: None), EMPTY)


class TestFOptionEquality(unittest.TestCase):
    def test_eq_by_value(self):
        self.assertEqual(FOption.of(1), FOption.of(1))
        self.assertNotEqual(FOption.of(1), FOption.of(2))
        self.assertNotEqual(FOption.of(1), EMPTY)
        self.assertNotEqual(FOption.of(1), 1)
        self.assertNotEqual(EMPTY, None)

    def test_hash(self):
        self.assertEqual(hash(EMPTY), 0)
        self.assertEqual(hash(FOption.of("abc")), hash("abc"))
        self.assertEqual(len({FOption.of(1), FOption.of(1), EMPTY, FOption.empty()}), 2)

    def test_repr(self):
        self.assertEqual(repr(FOption.of("a")), "FOption('a')")
        self.assertEqual(repr(EMPTY), "FOption.empty")
