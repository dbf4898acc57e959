import unittest

import pytest

from contrail.errors import ConfigTypeError, InvalidFormError, NoSuchMatchError
from contrail.style import (
    NAMED_COLORS,
    IndexedColor,
    NamedColor,
    RGBColor,
    Style,
    TextAttribute,
    parse_color,
    parse_rgb,
    parse_text_attributes,
)


class TestParseColor(unittest.TestCase):
    """Test color parsing from configuration values"""

    def test_named_colors_emit_palette_escape(self):
        """Every palette name paints with its fixed 256-color index"""
        for name, index in NAMED_COLORS.items():
            color = parse_color(name)
            painted = Style(foreground=color).paint("hi")
            self.assertEqual(painted, f"\x1b[38;5;{index}mhi\x1b[0m")

    def test_green_is_index_2(self):
        """Test green is index 2"""
        self.assertEqual(Style(foreground=parse_color("green")).paint("hi"), "\x1b[38;5;2mhi\x1b[0m")
        self.assertEqual(
            Style(foreground=parse_color("bright_green")).paint("hi"), "\x1b[38;5;10mhi\x1b[0m"
        )

    def test_named_colors_are_case_insensitive(self):
        """Test named colors are case insensitive"""
        self.assertEqual(parse_color("Blue"), NamedColor("blue"))
        self.assertEqual(parse_color("BRIGHT_WHITE"), NamedColor("bright_white"))

    def test_integer_value(self):
        """Test integer values become indexed colors"""
        self.assertEqual(parse_color(0), IndexedColor(0))
        self.assertEqual(parse_color(255), IndexedColor(255))

    def test_integer_out_of_range(self):
        """Test integer out of range"""
        with self.assertRaises(InvalidFormError):
            parse_color(256)
        with self.assertRaises(InvalidFormError):
            parse_color(-1)

    def test_integer_string(self):
        """Test a numeric string becomes an indexed color"""
        self.assertEqual(parse_color("208"), IndexedColor(208))

    def test_integer_string_out_of_range(self):
        """Test integer string out of range"""
        with self.assertRaises(InvalidFormError):
            parse_color("300")

    def test_rgb_string(self):
        """Test RGB triples written as strings"""
        self.assertEqual(parse_color("(1, 2, 3)"), RGBColor(1, 2, 3))
        self.assertEqual(parse_color("0, 100, 0"), RGBColor(0, 100, 0))

    def test_rgb_array(self):
        """Test RGB triples written as arrays"""
        self.assertEqual(parse_color([14, 76, 1]), RGBColor(14, 76, 1))

    def test_rgb_array_wrong_arity(self):
        """Test rgb array wrong arity"""
        with self.assertRaises(InvalidFormError):
            parse_color([1, 2])

    def test_rgb_array_out_of_range(self):
        """Test rgb array out of range"""
        with self.assertRaises(InvalidFormError):
            parse_color([1, 2, 300])

    def test_unknown_name(self):
        """Test an unrecognized color name raises NoSuchMatchError"""
        with self.assertRaises(NoSuchMatchError):
            parse_color("turquoise")

    def test_boolean_is_a_type_error(self):
        """Test boolean is a type error"""
        with self.assertRaises(ConfigTypeError):
            parse_color(True, key="global.background")

    def test_error_names_key(self):
        """Test parse errors name the offending key"""
        with self.assertRaises(NoSuchMatchError) as ctx:
            parse_color("teal", key="segments.git.style.background")
        self.assertIn("segments.git.style.background", str(ctx.exception))


class TestParseRGB:
    """RGB triples: tolerant of stray parentheses, strict about arity and range"""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("(0, 0, 0)", RGBColor(0, 0, 0)),
            ("(255, 255, 255)", RGBColor(255, 255, 255)),
            ("(0, 0, 0))", RGBColor(0, 0, 0)),
            ("()()(0, 0, 0)", RGBColor(0, 0, 0)),
        ],
    )
    def test_valid(self, text, expected):
        """Test well-formed RGB strings, including stray parentheses"""
        assert parse_rgb(text) == expected

    @pytest.mark.parametrize(
        "text",
        ["(256, 0, 0)", "(1,2,3,4)", "(0, 0, 0,)", "(0, 0)", "(1000, 0, 0)", "(0, 0, -1)", "(a, b, c)"],
    )
    def test_invalid(self, text):
        """Test RGB strings with bad arity or out-of-range components"""
        with pytest.raises(InvalidFormError):
            parse_rgb(text)

    def test_out_of_range_through_parse_color(self):
        """Test out of range through parse color"""
        with pytest.raises(InvalidFormError):
            parse_color("(256, 0, 0)")


class TestParseTextAttributes(unittest.TestCase):
    """Test text attribute parsing"""

    def test_single_string(self):
        """Test parsing a single attribute name"""
        self.assertEqual(parse_text_attributes("bold"), TextAttribute.BOLD)

    def test_array(self):
        """Test parsing an array of attribute names"""
        self.assertEqual(
            parse_text_attributes(["bold", "Underline"]),
            TextAttribute.BOLD | TextAttribute.UNDERLINE,
        )

    def test_duplicates_are_idempotent(self):
        """Test duplicates are idempotent"""
        self.assertEqual(parse_text_attributes(["bold", "bold"]), parse_text_attributes(["bold"]))

    def test_order_independent(self):
        """Test order independent"""
        self.assertEqual(
            parse_text_attributes(["italic", "blink"]), parse_text_attributes(["blink", "italic"])
        )

    def test_empty_and_absent(self):
        """Test empty and absent"""
        self.assertEqual(parse_text_attributes(""), TextAttribute(0))
        self.assertEqual(parse_text_attributes(None), TextAttribute(0))
        self.assertEqual(parse_text_attributes([]), TextAttribute(0))

    def test_default_alias(self):
        """Test default means no attributes"""
        self.assertEqual(parse_text_attributes("default"), TextAttribute(0))

    def test_unknown_attribute(self):
        """Test unknown attribute"""
        with self.assertRaises(NoSuchMatchError):
            parse_text_attributes(["bold", "sparkly"])

    def test_wrong_kind(self):
        """Test non-string attribute values raise ConfigTypeError"""
        with self.assertRaises(ConfigTypeError):
            parse_text_attributes(3)
        with self.assertRaises(ConfigTypeError):
            parse_text_attributes(["bold", 3])


class TestStyleEscapes(unittest.TestCase):
    """Escape codes: attributes, then background, then foreground"""

    def test_foreground_only(self):
        """Test foreground only"""
        style = Style(foreground=NamedColor("white"))
        self.assertEqual(style.paint("Hello"), "\x1b[38;5;7mHello\x1b[0m")

    def test_bold_on_background(self):
        """Test bold on background"""
        style = Style(background=NamedColor("blue"), attributes=TextAttribute.BOLD)
        self.assertEqual(style.paint("Hello"), "\x1b[1;48;5;4mHello\x1b[0m")

    def test_underline_background_and_foreground(self):
        """Test underline background and foreground"""
        style = Style(
            foreground=NamedColor("white"),
            background=NamedColor("blue"),
            attributes=TextAttribute.UNDERLINE,
        )
        self.assertEqual(style.paint("Hello"), "\x1b[4;48;5;4;38;5;7mHello\x1b[0m")

    def test_rgb_codes(self):
        """Test truecolor and indexed escape codes"""
        style = Style(foreground=RGBColor(1, 2, 3), background=IndexedColor(200))
        self.assertEqual(style.prefix(), "\x1b[48;5;200;38;2;1;2;3m")

    def test_plain_style_emits_nothing(self):
        """Test plain style emits nothing"""
        style = Style()
        self.assertTrue(style.is_plain)
        self.assertEqual(style.paint("Hello"), "Hello")
