from __future__ import annotations

import os
import sys
import tempfile
import unittest

from claim_decoder import JwtClaimDecoder
from contracts import InstantiationError, TypeNotFoundError
from factory_registry import FactoryRegistry, instantiate


class Exploding:
    def __init__(self) -> None:
        raise RuntimeError("boom")


class NeedsArgument:
    def __init__(self, value: str) -> None:
        self.value = value


NOT_CALLABLE = 42


class TestFactoryRegistry(unittest.TestCase):
    def test_instantiate_registered_key_returns_new_instance_each_call(self) -> None:
        registry = FactoryRegistry({"jwt": JwtClaimDecoder})
        first = registry.instantiate("jwt")
        second = instantiate(registry, "jwt")
        self.assertIsInstance(first, JwtClaimDecoder)
        self.assertIsInstance(second, JwtClaimDecoder)
        self.assertIsNot(first, second)

    def test_unknown_key_raises_type_not_found(self) -> None:
        with self.assertRaises(TypeNotFoundError):
            FactoryRegistry().instantiate("no.such.Type")

    def test_failing_constructor_raises_instantiation_error(self) -> None:
        registry = FactoryRegistry().register("boom", Exploding).register("needs_arg", NeedsArgument)
        with self.assertRaises(InstantiationError) as ctx:
            registry.instantiate("boom")
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)

        with self.assertRaises(InstantiationError) as ctx:
            registry.instantiate("needs_arg")
        self.assertIsInstance(ctx.exception.__cause__, TypeError)

    def test_register_validates_inputs(self) -> None:
        registry = FactoryRegistry()
        with self.assertRaises(ValueError):
            registry.register("  ", JwtClaimDecoder)
        with self.assertRaises(TypeError):
            registry.register("x", NOT_CALLABLE)  # type: ignore[arg-type]

    def test_keys_and_membership(self) -> None:
        registry = FactoryRegistry({"b": dict, "a": list})
        self.assertEqual(("a", "b"), registry.keys())
        self.assertEqual(["a", "b"], list(registry))
        self.assertEqual(2, len(registry))
        self.assertIn("a", registry)
        self.assertNotIn("c", registry)

    def test_from_qualified_names_resolves_at_startup(self) -> None:
        registry = FactoryRegistry.from_qualified_names(
            {"jwt": "claim_decoder.JwtClaimDecoder", "od": "collections.OrderedDict"}
        )
        self.assertIsInstance(registry.instantiate("jwt"), JwtClaimDecoder)
        self.assertEqual({}, dict(registry.instantiate("od")))

    def test_from_qualified_names_unknown_module_or_attribute(self) -> None:
        for name in ("no.such.Type", "claim_decoder.NoSuchDecoder", "Unqualified"):
            with self.subTest(name=name):
                with self.assertRaises(TypeNotFoundError):
                    FactoryRegistry.from_qualified_names({"x": name})

    def test_from_qualified_names_invalid_relative_name(self) -> None:
        with self.assertRaises(TypeNotFoundError) as ctx:
            FactoryRegistry.from_qualified_names({"x": "..Foo"})
        self.assertIsInstance(ctx.exception.__cause__, TypeError)

    def test_from_qualified_names_module_failing_on_import(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with open(os.path.join(td, "broken_decoder_plugin.py"), "w", encoding="utf-8") as f:
                f.write("raise RuntimeError('plugin misconfigured')\n")
            sys.path.insert(0, td)
            try:
                with self.assertRaises(TypeNotFoundError) as ctx:
                    FactoryRegistry.from_qualified_names({"x": "broken_decoder_plugin.Decoder"})
            finally:
                sys.path.remove(td)
                sys.modules.pop("broken_decoder_plugin", None)
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)

    def test_from_qualified_names_non_callable_target(self) -> None:
        with self.assertRaises(InstantiationError):
            FactoryRegistry.from_qualified_names({"x": f"{__name__}.NOT_CALLABLE"})


if __name__ == "__main__":
    unittest.main()
