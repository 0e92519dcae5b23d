from __future__ import annotations

import textwrap
import unittest

from fizzy.errors import InvalidContentError, UnrecognizedFormatError
from fizzy.parser import parse_parents, parse_variables
from fizzy.sources import VariableFormat


class ParseVariablesTests(unittest.TestCase):
    def test_yaml_mapping(self) -> None:
        content = textwrap.dedent(
            """
            # => inherits: base <= #
            db:
              port: 5432
            features: [a, b]
            """
        )
        self.assertEqual(
            parse_variables(VariableFormat.YAML, content),
            {"db": {"port": 5432}, "features": ["a", "b"]},
        )

    def test_empty_yaml_is_empty_mapping(self) -> None:
        self.assertEqual(parse_variables("yaml", ""), {})
        self.assertEqual(parse_variables("yaml", "# just a comment\n"), {})

    def test_invalid_yaml(self) -> None:
        with self.assertRaises(InvalidContentError):
            parse_variables("yaml", "a: [1, 2\n")

    def test_yaml_root_must_be_mapping(self) -> None:
        with self.assertRaises(InvalidContentError):
            parse_variables("yaml", "- a\n- b\n")

    def test_json_with_directive(self) -> None:
        content = '/* => inherits: base <= */\n{"a": 1}'
        self.assertEqual(parse_variables(VariableFormat.JSON, content), {"a": 1})

    def test_invalid_json(self) -> None:
        with self.assertRaises(InvalidContentError):
            parse_variables("json", "{a: 1}")

    def test_unrecognized_format(self) -> None:
        with self.assertRaises(UnrecognizedFormatError):
            parse_variables("toml", "a = 1")


class ParseParentsTests(unittest.TestCase):
    def test_yaml_directive(self) -> None:
        content = "# => inherits: base, linux , dev <= #\na: 1\n"
        self.assertEqual(parse_parents("yaml", content), ["base", "linux", "dev"])

    def test_directive_without_colon(self) -> None:
        self.assertEqual(parse_parents("yaml", "#=> inherits base <=#\n"), ["base"])

    def test_directive_on_later_line(self) -> None:
        content = "a: 1\n# => inherits: base <= #\n"
        self.assertEqual(parse_parents("yaml", content), ["base"])

    def test_placeholders_are_dropped(self) -> None:
        self.assertEqual(parse_parents("yaml", "# => inherits: None <= #\n"), [])
        self.assertEqual(parse_parents("yaml", "# => inherits: NOTHING, base <= #\n"), ["base"])
        self.assertEqual(parse_parents("yaml", "# => inherits: nonexistent <= #\n"), ["nonexistent"])

    def test_missing_directive_means_no_parents(self) -> None:
        self.assertEqual(parse_parents("yaml", "a: 1\n"), [])
        self.assertEqual(parse_parents("yaml", "  # => inherits: base <= #\n"), [])

    def test_json_directive(self) -> None:
        content = "/* => inherits: a,b <= */\n{}"
        self.assertEqual(parse_parents(VariableFormat.JSON, content), ["a", "b"])
        self.assertEqual(parse_parents("json", "# => inherits: a <= #\n{}"), [])

    def test_unrecognized_format_for_parents(self) -> None:
        with self.assertRaises(UnrecognizedFormatError):
            parse_parents("ini", "")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
