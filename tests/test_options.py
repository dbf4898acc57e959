import unittest

from contrail.config import DEFAULT_CONFIG, Config, merge_config
from contrail.errors import ConfigTypeError, InvalidFormError, NoSuchMatchError
from contrail.options import SegmentStyle, effective_style, read_style, resolve_options
from contrail.style import NamedColor, RGBColor, TextAttribute


def make_config(overrides=None, defaults=True):
    base = DEFAULT_CONFIG if defaults else {}
    return Config(merge_config(base, overrides or {}))


class TestResolveOptions(unittest.TestCase):
    """Test per-segment option resolution"""

    def test_padding_and_separator_defaults(self):
        """Test padding and separator defaults"""
        options = resolve_options("custom", make_config(defaults=False))
        self.assertEqual(options.padding_left, " ")
        self.assertEqual(options.padding_right, " ")
        self.assertEqual(options.separator, "")
        self.assertIsNone(options.output_override)

    def test_segment_value_wins_over_global(self):
        """Test segment value wins over global"""
        config = make_config(
            {
                "global": {"separator": ">"},
                "segments": {"custom": {"separator": "|", "padding_left": ""}},
            }
        )
        options = resolve_options("custom", config)
        self.assertEqual(options.separator, "|")
        self.assertEqual(options.padding_left, "")

    def test_global_value_used_when_segment_silent(self):
        """Test global value used when segment silent"""
        config = make_config({"global": {"separator": ">"}})
        self.assertEqual(resolve_options("custom", config).separator, ">")

    def test_output_override_is_segment_local(self):
        """Test output override is segment local"""
        config = make_config({"global": {"output": "nope"}, "segments": {"a": {"output": "hi"}}})
        self.assertEqual(resolve_options("a", config).output_override, "hi")
        self.assertIsNone(resolve_options("b", config).output_override)

    def test_style_fields_parsed(self):
        """Test style fields parsed"""
        config = make_config(
            {
                "segments": {
                    "a": {
                        "style": {
                            "foreground": "(1, 2, 3)",
                            "background": "red",
                            "text_attributes": ["bold", "italic"],
                        }
                    }
                }
            }
        )
        style = resolve_options("a", config).style
        self.assertEqual(style.foreground, RGBColor(1, 2, 3))
        self.assertEqual(style.background, NamedColor("red"))
        self.assertEqual(style.attributes, TextAttribute.BOLD | TextAttribute.ITALIC)

    def test_absent_style_fields_stay_unset(self):
        """Test absent style fields stay unset"""
        style = resolve_options("a", make_config()).style
        self.assertEqual(style, SegmentStyle())

    def test_wrong_kind_is_fatal(self):
        """Test wrong kind is fatal"""
        config = make_config({"segments": {"a": {"separator": True}}})
        with self.assertRaises(ConfigTypeError) as ctx:
            resolve_options("a", config)
        self.assertEqual(ctx.exception.key, "segments.a.separator")
        self.assertEqual(ctx.exception.expected, "string")
        self.assertEqual(ctx.exception.actual, "boolean")

    def test_segment_table_must_be_table(self):
        """Test segment table must be table"""
        with self.assertRaises(ConfigTypeError):
            resolve_options("a", make_config({"segments": {"a": "oops"}}))

    def test_bad_color_is_fatal(self):
        """Test bad color is fatal"""
        config = make_config({"segments": {"a": {"style": {"background": "teal"}}}})
        with self.assertRaises(NoSuchMatchError):
            resolve_options("a", config)

    def test_bad_global_color_is_fatal(self):
        """Test bad global color is fatal"""
        config = make_config({"global": {"foreground": "(1, 2)"}})
        with self.assertRaises(InvalidFormError):
            resolve_options("a", config)


class TestEffectiveStyle(unittest.TestCase):
    """Test the segment -> global -> built-in style fallback"""

    def test_falls_back_to_global(self):
        """Test falls back to global"""
        config = make_config({"global": {"foreground": "white", "background": "blue"}})
        style = effective_style(resolve_options("a", config))
        self.assertEqual(style.foreground, NamedColor("white"))
        self.assertEqual(style.background, NamedColor("blue"))
        self.assertEqual(style.attributes, TextAttribute(0))

    def test_segment_overrides_global(self):
        """Test segment overrides global"""
        config = make_config({"segments": {"a": {"style": {"background": "red"}}}})
        style = effective_style(resolve_options("a", config))
        self.assertEqual(style.background, NamedColor("red"))
        self.assertEqual(style.foreground, NamedColor("bright_white"))

    def test_override_replaces_segment_style(self):
        """Test override replaces segment style"""
        config = make_config(
            {"segments": {"a": {"style": {"background": "red", "foreground": "black"}}}}
        )
        override = SegmentStyle(background=NamedColor("green"))
        style = effective_style(resolve_options("a", config), override)
        self.assertEqual(style.background, NamedColor("green"))
        # The segment's own foreground is replaced too; the global one shows through.
        self.assertEqual(style.foreground, NamedColor("bright_white"))

    def test_global_text_style(self):
        """Test global text style"""
        config = make_config({"global": {"style": "bold"}})
        self.assertEqual(effective_style(resolve_options("a", config)).attributes, TextAttribute.BOLD)

    def test_read_style_missing_table(self):
        """Test read style missing table"""
        self.assertEqual(read_style("segments.none.style", make_config()), SegmentStyle())
