import unittest

from floatcore.domain.utils import create_path_builder


class _Boom(RuntimeError):
    def __init__(self, name, state):
        super().__init__(f"{name}@{state}")
        self.name = name
        self.state = state


class TestCreatePathBuilder(unittest.TestCase):
    def setUp(self) -> None:
        # Fresh builder per test to avoid map-sharing across tests.
        self.decorator = create_path_builder("mode")

    def test_state_must_be_hashable(self) -> None:
        class C:
            mode = "A"

            def foo(self, x: int) -> int:
                return x

        with self.assertRaises(TypeError) as ctx:
            self.decorator(C, C.foo, ["not-hashable"])

        self.assertIn("must be hashable", str(ctx.exception))

    def test_dispatch_selects_registered_control_path(self) -> None:
        class C:
            def __init__(self, mode):
                self.mode = mode

            def foo(self, x: int) -> int:
                """Base contract."""
                ...

        @self.decorator(C, C.foo, "A")
        def foo_a(self, x: int) -> int:
            return x + 1

        @self.decorator(C, C.foo, "B")
        def foo_b(self, x: int) -> int:
            return x * 10

        self.assertEqual(C("A").foo(1), 2)
        self.assertEqual(C("B").foo(2), 20)

    def test_implementation_receives_self(self) -> None:
        class C:
            mode = "A"

            def who(self): ...

        @self.decorator(C, C.who, "A")
        def who_a(self):
            return self

        obj = C()
        self.assertIs(obj.who(), obj)

    def test_dispatch_follows_state_changes(self) -> None:
        class C:
            mode = "A"

            def foo(self) -> str: ...

        @self.decorator(C, C.foo, "A")
        def foo_a(self):
            return "a"

        @self.decorator(C, C.foo, "B")
        def foo_b(self):
            return "b"

        obj = C()
        self.assertEqual(obj.foo(), "a")
        obj.mode = "B"
        self.assertEqual(obj.foo(), "b")

    def test_missing_path_raises_not_implemented_without_trap(self) -> None:
        class C:
            mode = "Z"

            def foo(self): ...

        @self.decorator(C, C.foo, "A")
        def foo_a(self):
            return 1

        with self.assertRaises(NotImplementedError) as ctx:
            C().foo()
        self.assertIn("Missing control path", str(ctx.exception))

    def test_missing_path_raises_trap_exception(self) -> None:
        decorator = create_path_builder("mode", trap_exception=_Boom)

        class C:
            mode = "Z"

            def foo(self): ...

        @decorator(C, C.foo, "A")
        def foo_a(self):
            return 1

        with self.assertRaises(_Boom) as ctx:
            C().foo()
        self.assertEqual(ctx.exception.name, "foo")
        self.assertEqual(ctx.exception.state, "Z")

    def test_wrapper_keeps_base_metadata(self) -> None:
        class C:
            mode = "A"

            def foo(self):
                """Documented contract."""

        @self.decorator(C, C.foo, "A")
        def foo_a(self):
            return None

        @self.decorator(C, C.foo, "B")
        def foo_b(self):
            return None

        self.assertEqual(C.foo.__name__, "foo")
        self.assertEqual(C.foo.__doc__, "Documented contract.")

    def test_builders_do_not_share_registrations(self) -> None:
        other = create_path_builder("mode")

        class C:
            mode = "A"

            def foo(self): ...

        class D:
            mode = "A"

            def foo(self): ...

        @self.decorator(C, C.foo, "A")
        def foo_c(self):
            return "c"

        @other(D, D.foo, "A")
        def foo_d(self):
            return "d"

        self.assertEqual(len(self.decorator.registered), 1)
        self.assertEqual(len(other.registered), 1)
        self.assertEqual(C().foo(), "c")
        self.assertEqual(D().foo(), "d")

    def test_decorator_returns_decorated_function(self) -> None:
        class C:
            mode = "A"

            def foo(self): ...

        def foo_a(self):
            return 5

        self.assertIs(self.decorator(C, C.foo, "A")(foo_a), foo_a)


if __name__ == "__main__":
    unittest.main()
