import tempfile
import unittest
from pathlib import Path

from filemap.config import RunConfig
from filemap.errors import (
    InvalidDestination,
    InvalidRegex,
    MalformedRule,
    ParseError,
    RulesFileUnreadable,
    UnknownRuleKind,
)
from filemap.planning.rules import RuleKind, load_rules, load_rules_file, parse_rule, parse_rules


class TestParseRule(unittest.TestCase):
    def test_copy_rule(self):
        rule = parse_rule(r"c /\.pdf$/Books", 1)
        self.assertEqual(rule.kind, RuleKind.COPY)
        self.assertEqual(rule.destination, "Books")
        self.assertEqual(rule.line_number, 1)
        self.assertTrue(rule.matches("novel.pdf"))
        self.assertFalse(rule.matches("novel.pdf.txt"))

    def test_move_rule_without_spaces(self):
        rule = parse_rule("m/lime/Lime Files", 3)
        self.assertEqual(rule.kind, RuleKind.MOVE)
        self.assertEqual(rule.destination, "Lime Files")
        self.assertTrue(rule.matches("lime.txt"))

    def test_surrounding_whitespace_is_ignored(self):
        rule = parse_rule("   c   /regex/   nested/dir  \n", 1)
        self.assertEqual(rule.kind, RuleKind.COPY)
        self.assertEqual(rule.pattern.pattern, "regex")
        self.assertEqual(rule.destination, "nested/dir")

    def test_interior_whitespace_in_destination_is_kept(self):
        rule = parse_rule("c/x/ My  Docs / 2024 ", 1)
        self.assertEqual(rule.destination, "My  Docs / 2024")

    def test_escaped_slash_stays_in_regex(self):
        rule = parse_rule(r"c /a\/b/Out", 1)
        self.assertEqual(rule.pattern.pattern, r"a\/b")
        self.assertEqual(rule.destination, "Out")

    def test_matching_uses_search(self):
        rule = parse_rule("c/match/Out", 1)
        self.assertTrue(rule.matches("is_a_match.txt"))

    def test_rules_differing_only_in_pattern_are_not_equal(self):
        first = parse_rule("c /a/X", 1)
        second = parse_rule("c /b/X", 1)
        self.assertNotEqual(first, second)
        self.assertEqual(len({first, second}), 2)
        self.assertEqual(parse_rule("c /a/X", 1), first)

    def test_blank_line_returns_none(self):
        self.assertIsNone(parse_rule("", 1))
        self.assertIsNone(parse_rule("   \t ", 2))

    def test_unknown_kind(self):
        with self.assertRaises(UnknownRuleKind) as ctx:
            parse_rule("x /foo/Bar", 7)
        self.assertEqual(ctx.exception.line_number, 7)
        self.assertEqual(ctx.exception.kind, "x")
        self.assertIn("Line 7", str(ctx.exception))

    def test_multi_character_kind_is_unknown(self):
        with self.assertRaises(UnknownRuleKind):
            parse_rule("copy /foo/Bar", 1)

    def test_missing_kind_is_unknown(self):
        with self.assertRaises(UnknownRuleKind):
            parse_rule("/foo/Bar", 1)

    def test_invalid_regex(self):
        with self.assertRaises(InvalidRegex) as ctx:
            parse_rule("c/(/ destination", 4)
        self.assertEqual(ctx.exception.line_number, 4)
        self.assertTrue(ctx.exception.reason)

    def test_unterminated_regex(self):
        with self.assertRaises(MalformedRule):
            parse_rule("m /foo", 1)

    def test_missing_regex(self):
        with self.assertRaises(MalformedRule):
            parse_rule("c destination", 1)

    def test_empty_destination(self):
        with self.assertRaises(InvalidDestination):
            parse_rule("c /foo/   ", 1)

    def test_absolute_destination(self):
        for line in ("c /foo//etc", "c /foo/\\share", "c /foo/C:\\Books"):
            with self.subTest(line=line):
                with self.assertRaises(InvalidDestination):
                    parse_rule(line, 1)

    def test_parse_errors_share_base_class(self):
        for line in ("x /a/b", "c /(/b", "c /a/", "c a"):
            with self.subTest(line=line):
                with self.assertRaises(ParseError):
                    parse_rule(line, 1)


class TestParseRules(unittest.TestCase):
    def test_keeps_declaration_order_and_line_numbers(self):
        rules = parse_rules(["c /a/A", "", "m /b/B"])
        self.assertEqual([r.kind for r in rules], [RuleKind.COPY, RuleKind.MOVE])
        self.assertEqual([r.line_number for r in rules], [1, 3])

    def test_one_bad_line_rejects_everything(self):
        with self.assertRaises(InvalidRegex) as ctx:
            parse_rules(["c /a/A", "m /[/B", "c /c/C"])
        self.assertEqual(ctx.exception.line_number, 2)


class TestLoadRules(unittest.TestCase):
    def test_load_rules_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "rules.txt"
            path.write_text("c /\\.pdf$/Books\n\nm /lime/Lime Files\n", encoding="utf-8")
            rules = load_rules_file(path)
        self.assertEqual(len(rules), 2)
        self.assertEqual(rules[1].line_number, 3)

    def test_missing_rules_file(self):
        with self.assertRaises(RulesFileUnreadable):
            load_rules_file(Path("does-not-exist.rules"))

    def test_load_rules_from_inline_rule(self):
        rules = load_rules(RunConfig(inline_rule="m/lime/Lime Files"))
        self.assertEqual(len(rules), 1)
        self.assertEqual(rules[0].kind, RuleKind.MOVE)

    def test_load_rules_prefers_rules_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "rules.txt"
            path.write_text("c /a/A\nc /b/B\n", encoding="utf-8")
            rules = load_rules(RunConfig(rules_file=path))
        self.assertEqual(len(rules), 2)


if __name__ == "__main__":
    unittest.main()
