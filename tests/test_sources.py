from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from fizzy.errors import AmbiguousVariableSetError, UndefinedVariableSetError
from fizzy.sources import VariableFormat, VariableSource


class VariableSourceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.vars_dir = Path(self.temp_dir.name)

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_reads_yaml_file(self) -> None:
        (self.vars_dir / "base.yml").write_text("a: 1\n")
        raw = VariableSource(self.vars_dir, environ={}).read("base")
        self.assertEqual(raw.format, VariableFormat.YAML)
        self.assertEqual(raw.content, "a: 1\n")
        self.assertEqual(raw.origin, str(self.vars_dir / "base.yml"))

    def test_reads_json_file(self) -> None:
        (self.vars_dir / "base.json").write_text('{"a": 1}')
        raw = VariableSource(self.vars_dir, environ={}).read("base")
        self.assertEqual(raw.format, VariableFormat.JSON)

    def test_file_takes_precedence_over_environment(self) -> None:
        (self.vars_dir / "base.yaml").write_text("a: 1\n")
        raw = VariableSource(self.vars_dir, environ={"base": '{"a": 2}'}).read("base")
        self.assertEqual(raw.format, VariableFormat.YAML)

    def test_falls_back_to_environment_json(self) -> None:
        raw = VariableSource(self.vars_dir, environ={"ci": '{"a": 2}'}).read("ci")
        self.assertEqual(raw.format, VariableFormat.JSON)
        self.assertEqual(raw.content, '{"a": 2}')
        self.assertEqual(raw.origin, "env:ci")

    def test_environment_only_without_directory(self) -> None:
        raw = VariableSource(None, environ={"ci": "{}"}).read("ci")
        self.assertEqual(raw.content, "{}")

    def test_missing_set_is_undefined(self) -> None:
        source = VariableSource(self.vars_dir, environ={})
        with self.assertRaises(UndefinedVariableSetError) as ctx:
            source.read("nope")
        self.assertEqual(ctx.exception.name, "nope")
        with self.assertRaises(UndefinedVariableSetError):
            source.read(None)

    def test_available_lists_variable_sets(self) -> None:
        (self.vars_dir / "b.yaml").write_text("")
        (self.vars_dir / "a.json").write_text("{}")
        (self.vars_dir / "README.md").write_text("")
        self.assertEqual(VariableSource(self.vars_dir, environ={}).available(), ["a", "b"])
        self.assertEqual(VariableSource(None, environ={}).available(), [])

    def test_duplicate_formats_are_ambiguous(self) -> None:
        (self.vars_dir / "base.yaml").write_text("")
        (self.vars_dir / "base.json").write_text("{}")
        with self.assertRaises(AmbiguousVariableSetError):
            VariableSource(self.vars_dir, environ={}).read("base")

    def test_ambiguity_is_limited_to_the_requested_set(self) -> None:
        (self.vars_dir / "other.yaml").write_text("")
        (self.vars_dir / "other.json").write_text("{}")
        (self.vars_dir / "base.yaml").write_text("x: 1\n")
        source = VariableSource(self.vars_dir, environ={})
        self.assertEqual(source.read("base").content, "x: 1\n")
        self.assertEqual(source.available(), ["base", "other"])
        with self.assertRaises(AmbiguousVariableSetError):
            source.read("other")

    def test_extension_case_is_ignored(self) -> None:
        (self.vars_dir / "Base.YAML").write_text("a: 1\n")
        source = VariableSource(self.vars_dir, environ={})
        self.assertEqual(source.find_file("Base"), self.vars_dir / "Base.YAML")
        self.assertEqual(source.find_file("Base.YAML"), self.vars_dir / "Base.YAML")
        self.assertIsNone(source.find_file("base"))
        self.assertIsNone(VariableSource(self.vars_dir / "missing", environ={}).find_file("Base"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
