import gc
import unittest
from concurrent.futures import ThreadPoolExecutor

from floatcore.domain import (
    DuplicateTensorIdError,
    IdCounter,
    ITensorRegistry,
    UnknownTensorIdError,
    default_id_counter,
)
from floatcore.infrastructure.registry import InMemoryTensorRegistry
from floatcore.infrastructure.tensor import FloatTensor
from tests.fixtures import FakeDeviceRuntime


class TestInMemoryTensorRegistry(unittest.TestCase):
    def setUp(self) -> None:
        self.registry = InMemoryTensorRegistry()

    def test_satisfies_registry_protocol(self) -> None:
        self.assertIsInstance(self.registry, ITensorRegistry)

    def test_create_registers_under_tensor_id(self) -> None:
        t = self.registry.create((2,), [1, 2])
        self.assertIs(self.registry.resolve(t.id), t)
        self.assertIn(t.id, self.registry)
        self.assertEqual(len(self.registry), 1)

    def test_create_uses_registry_counter(self) -> None:
        counter = IdCounter(start=100)
        registry = InMemoryTensorRegistry(counter)
        t = registry.create((1,))
        self.assertEqual(t.id, 101)
        self.assertIs(registry.counter, counter)

    def test_create_on_device(self) -> None:
        rt = FakeDeviceRuntime()
        t = self.registry.create((2,), backend="gpu", runtime=rt)
        self.assertTrue(self.registry.resolve(t.id).is_device())

    def test_register_existing_tensor(self) -> None:
        t = FloatTensor((1,), counter=self.registry.counter)
        self.assertEqual(self.registry.register(t), t.id)
        self.assertEqual(self.registry.register(t), t.id)
        self.assertEqual(len(self.registry), 1)

    def test_registration_does_not_keep_tensor_alive(self) -> None:
        t = FloatTensor((1,), counter=self.registry.counter)
        tid = self.registry.register(t)
        self.assertFalse(self.registry.owns(tid))
        del t
        gc.collect()
        self.assertNotIn(tid, self.registry)
        with self.assertRaises(UnknownTensorIdError):
            self.registry.resolve(tid)

    def test_owned_registration_keeps_tensor_alive(self) -> None:
        tid = self.registry.register(FloatTensor((1,), [5], counter=self.registry.counter), owned=True)
        gc.collect()
        self.assertTrue(self.registry.owns(tid))
        self.assertEqual(self.registry.resolve(tid).tolist(), [5.0])

        self.registry.unregister(tid)
        self.assertFalse(self.registry.owns(tid))

    def test_created_tensors_are_owned(self) -> None:
        tid = self.registry.create((2,)).id
        gc.collect()
        self.assertTrue(self.registry.owns(tid))
        self.assertIn(tid, self.registry)

    def test_register_upgrades_to_owned(self) -> None:
        t = FloatTensor((1,), counter=self.registry.counter)
        self.registry.register(t)
        self.registry.register(t, owned=True)
        self.assertTrue(self.registry.owns(t.id))

    def test_register_rejects_non_tensors(self) -> None:
        with self.assertRaises(TypeError):
            self.registry.register("not a tensor")

    def test_duplicate_id_rejected(self) -> None:
        a = FloatTensor((1,), counter=IdCounter())
        b = FloatTensor((1,), counter=IdCounter())
        self.assertEqual(a.id, b.id)
        self.registry.register(a)
        with self.assertRaises(DuplicateTensorIdError):
            self.registry.register(b)
        self.assertIs(self.registry.resolve(a.id), a)

    def test_unknown_id(self) -> None:
        for bad in (999, -1, "1", [1]):
            with self.subTest(tensor_id=bad):
                with self.assertRaises(UnknownTensorIdError) as ctx:
                    self.registry.resolve(bad)
                self.assertEqual(ctx.exception.tensor_id, bad)
        self.assertNotIn([1], self.registry)

    def test_unregister(self) -> None:
        t = self.registry.create((1,))
        self.assertIs(self.registry.unregister(t.id), t)
        self.assertNotIn(t.id, self.registry)
        with self.assertRaises(UnknownTensorIdError):
            self.registry.unregister(t.id)

    def test_reassign(self) -> None:
        t = self.registry.create((2,), [3, 4])
        old = t.id
        self.registry.reassign(t, 500)
        self.assertEqual(t.id, 500)
        self.assertIs(self.registry.resolve(500), t)
        self.assertNotIn(old, self.registry)
        self.assertEqual(t.tolist(), [3.0, 4.0])
        self.assertTrue(self.registry.owns(500))
        self.assertFalse(self.registry.owns(old))

    def test_default_counter_shared_with_plain_construction(self) -> None:
        self.assertIs(self.registry.counter, default_id_counter())
        created = [self.registry.create((1,), [i]) for i in range(50)]
        plain = FloatTensor((1,), [7.0])
        self.assertEqual(self.registry.register(plain), plain.id)
        self.assertNotIn(plain.id, [t.id for t in created])
        self.assertIs(self.registry.resolve(plain.id), plain)

    def test_register_advances_counter_past_external_id(self) -> None:
        registry = InMemoryTensorRegistry(IdCounter())
        external = FloatTensor((1,), counter=IdCounter(start=40))
        registry.register(external)
        self.assertEqual(registry.create((1,)).id, 42)

    def test_reassign_ahead_of_counter_advances_it(self) -> None:
        registry = InMemoryTensorRegistry(IdCounter())
        a = registry.create((1,), [1])
        b = registry.create((1,), [2])
        registry.reassign(b, 3)

        c = registry.create((1,), [3])
        self.assertEqual(c.id, 4)
        out = a.add(b)
        self.assertEqual(registry.register(out, owned=True), 5)
        self.assertEqual(registry.resolve(5).tolist(), [3.0])

    def test_reassign_errors(self) -> None:
        a = self.registry.create((1,))
        b = self.registry.create((1,))
        with self.assertRaises(DuplicateTensorIdError):
            self.registry.reassign(a, b.id)
        with self.assertRaises(UnknownTensorIdError):
            self.registry.reassign(FloatTensor((1,), counter=IdCounter(start=900)), 1000)
        with self.assertRaises(TypeError):
            self.registry.reassign(a, "7")
        self.assertIs(self.registry.resolve(a.id), a)

    def test_ids_snapshot_sorted(self) -> None:
        ts = [self.registry.create((1,)) for _ in range(3)]
        self.assertEqual(list(self.registry.ids()), sorted(t.id for t in ts))

    def test_concurrent_creation(self) -> None:
        with ThreadPoolExecutor(max_workers=8) as pool:
            tensors = list(pool.map(lambda _: self.registry.create((1,)), range(200)))
        ids = [t.id for t in tensors]
        self.assertEqual(len(set(ids)), 200)
        self.assertEqual(len(self.registry), 200)


if __name__ == "__main__":
    unittest.main()
