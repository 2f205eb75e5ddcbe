import tempfile
import unittest
from pathlib import Path

from detect_changed_files.config import GroupsConfig, load_config, parse_config, parse_toml_config, parse_yaml_config
from detect_changed_files.errors import ConfigParseError, InvalidEncodingError, MalformedGroupDefinitionError
from detect_changed_files.globmatch import MatchPath


SECTIONS = """
[compile]
.github/changed-files.conf
src/**

[test]
tests/**
"""


class TestParseConfig(unittest.TestCase):
    def test_empty(self) -> None:
        self.assertEqual({}, parse_config(""))

    def test_valid(self) -> None:
        result = parse_config(SECTIONS)
        self.assertEqual({"compile": [".github/changed-files.conf", "src/**"], "test": ["tests/**"]}, result)
        self.assertEqual(["compile", "test"], list(result))

    def test_empty_sections(self) -> None:
        self.assertEqual({"empty-section": []}, parse_config("[empty-section]\n"))
        result = parse_config("[empty-section]\n[section]\nitem1\nitem2\n")
        self.assertEqual({"empty-section": [], "section": ["item1", "item2"]}, result)

    def test_comments_and_whitespace(self) -> None:
        content = "# comment\n[section]\n; another\n   \n  item1  \n\titem2\n"
        self.assertEqual({"section": ["item1", "item2"]}, parse_config(content))

    def test_duplicate_section(self) -> None:
        with self.assertRaises(MalformedGroupDefinitionError) as cm:
            parse_config("\n[section]\nitem1\n[section]\nitem2\n")
        self.assertEqual(4, cm.exception.line)
        self.assertIn("Duplicate section", str(cm.exception))

    def test_item_before_section(self) -> None:
        with self.assertRaises(ConfigParseError) as cm:
            parse_config("\nitem1\n[section]\n")
        self.assertEqual(2, cm.exception.line)
        self.assertIn("before any section", cm.exception.message)

    def test_short_header(self) -> None:
        with self.assertRaises(ConfigParseError) as cm:
            parse_config("[]\n")
        self.assertEqual(1, cm.exception.line)


class TestParseYamlConfig(unittest.TestCase):
    def test_valid(self) -> None:
        content = "compile:\n  - src/**\n  - '*.c'\ndocs:\n  - docs/**\nnone: []\n"
        self.assertEqual({"compile": ["src/**", "*.c"], "docs": ["docs/**"], "none": []}, parse_yaml_config(content))

    def test_empty_document(self) -> None:
        self.assertEqual({}, parse_yaml_config(""))
        self.assertEqual({}, parse_yaml_config("# only a comment\n"))

    def test_duplicate_group(self) -> None:
        with self.assertRaises(MalformedGroupDefinitionError) as cm:
            parse_yaml_config("a:\n  - x\na:\n  - y\n")
        self.assertEqual(3, cm.exception.line)

    def test_non_list_value(self) -> None:
        with self.assertRaises(MalformedGroupDefinitionError):
            parse_yaml_config("a: src/**\n")
        with self.assertRaises(MalformedGroupDefinitionError):
            parse_yaml_config("a:\n")
        with self.assertRaises(MalformedGroupDefinitionError):
            parse_yaml_config("a:\n  - 3\n")

    def test_non_mapping_root(self) -> None:
        with self.assertRaises(MalformedGroupDefinitionError):
            parse_yaml_config("- a\n- b\n")

    def test_syntax_error(self) -> None:
        with self.assertRaises(ConfigParseError):
            parse_yaml_config("a: [unterminated\n")


class TestParseTomlConfig(unittest.TestCase):
    def test_valid(self) -> None:
        content = 'compile = ["src/**", "*.c"]\n"docs" = ["docs/**"]\n'
        self.assertEqual({"compile": ["src/**", "*.c"], "docs": ["docs/**"]}, parse_toml_config(content))

    def test_duplicate_group(self) -> None:
        with self.assertRaises(ConfigParseError):
            parse_toml_config('a = ["x"]\na = ["y"]\n')

    def test_non_list_value(self) -> None:
        with self.assertRaises(MalformedGroupDefinitionError):
            parse_toml_config('a = "x"\n')
        with self.assertRaises(MalformedGroupDefinitionError):
            parse_toml_config("[a]\nb = 1\n")


class TestLoadConfig(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_section_file(self) -> None:
        path = self.tmp / "changed-files.conf"
        path.write_text(SECTIONS, encoding="utf-8")
        config = load_config(path)
        self.assertEqual(2, len(config))
        self.assertEqual((MatchPath.from_str(".github/changed-files.conf"), MatchPath.from_str("src/**")), config.groups["compile"])

    def test_yaml_file(self) -> None:
        path = self.tmp / "changed-files.yml"
        path.write_text("docs:\n  - docs/**\n", encoding="utf-8")
        self.assertEqual({"docs": (MatchPath.from_str("docs/**"),)}, dict(load_config(path).groups))

    def test_toml_file(self) -> None:
        path = self.tmp / "changed-files.toml"
        path.write_text('docs = ["docs/**"]\n', encoding="utf-8")
        self.assertEqual({"docs": (MatchPath.from_str("docs/**"),)}, dict(load_config(path).groups))

    def test_invalid_utf8(self) -> None:
        path = self.tmp / "bad.conf"
        path.write_bytes(b"[group]\nsrc/\xff\xfe\n")
        with self.assertRaises(InvalidEncodingError) as cm:
            load_config(path)
        self.assertEqual(str(path), cm.exception.source)

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_config(self.tmp / "nope.conf")

    def test_from_raw(self) -> None:
        config = GroupsConfig.from_raw({"a": ["x//y/"], "b": []})
        self.assertEqual({"a": (MatchPath.from_str("x/y"),), "b": ()}, dict(config.groups))

    def test_groups_are_read_only(self) -> None:
        raw = {"a": ["x"]}
        config = GroupsConfig.from_raw(raw)
        with self.assertRaises(TypeError):
            config.groups["b"] = ()  # type: ignore[index]
        raw["b"] = ["y"]
        self.assertNotIn("b", config.groups)


if __name__ == "__main__":
    unittest.main()
