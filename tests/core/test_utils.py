from decimal import Decimal

import pytest
from lxml import etree as ET

from dmn_builder.core.exceptions import DmnDocumentError
from dmn_builder.core.utils import escape_xml, is_well_formed, save_dmn_file, to_feel_string


class TestEscapeXml:
    """Test cases for escape_xml function."""

    def test_each_reserved_character(self):
        """Test that the five reserved characters map to their entities."""
        assert escape_xml("<") == "&lt;"
        assert escape_xml(">") == "&gt;"
        assert escape_xml("&") == "&amp;"
        assert escape_xml("'") == "&apos;"
        assert escape_xml('"') == "&quot;"

    def test_mixed_text(self):
        assert escape_xml('a < b && c > "d"') == "a &lt; b &amp;&amp; c &gt; &quot;d&quot;"

    def test_other_characters_unchanged(self):
        """Test that whitespace, unicode and existing entities-like text pass through."""
        assert escape_xml("") == ""
        assert escape_xml("  tab\tnew\nline ") == "  tab\tnew\nline "
        assert escape_xml("café – ü") == "café – ü"
        assert escape_xml("#x27;") == "#x27;"

    def test_not_idempotent(self):
        """Escaping twice double-escapes ampersands; callers escape once."""
        assert escape_xml(escape_xml("&")) == "&amp;amp;"

    @pytest.mark.parametrize("raw", [
        "<tag attr='x'>",
        'say "hi" & bye',
        "&&&<<<>>>'''\"\"\"",
        "plain",
    ])
    def test_decodes_back_through_xml_parser(self, raw):
        """Test the escaped text parses back to the original in text and attribute position."""
        escaped = escape_xml(raw)
        for ch in "<>'\"":
            assert ch not in escaped
        assert "&" not in escaped.replace("&lt;", "").replace("&gt;", "").replace(
            "&amp;", "").replace("&apos;", "").replace("&quot;", "")

        root = ET.fromstring(f'<r a="{escaped}">{escaped}</r>')
        assert root.text == raw
        assert root.get("a") == raw


class TestToFeelString:
    """Test cases for to_feel_string function."""

    def test_booleans(self):
        assert to_feel_string(True) == "true"
        assert to_feel_string(False) == "false"

    def test_integers(self):
        assert to_feel_string(42) == "42"
        assert to_feel_string(-7) == "-7"
        assert to_feel_string(0) == "0"

    def test_integral_floats_drop_fraction(self):
        assert to_feel_string(3.0) == "3"
        assert to_feel_string(-0.0) == "0"
        assert to_feel_string(1e16) == "10000000000000000"

    def test_fractional_floats(self):
        assert to_feel_string(1.5) == "1.5"
        assert to_feel_string(0.1) == "0.1"
        assert to_feel_string(0.000001) == "0.000001"

    def test_float_exponent_forms(self):
        assert to_feel_string(1e-7) == "1e-7"
        assert to_feel_string(1e21) == "1e+21"
        assert to_feel_string(2.5e-10) == "2.5e-10"
        assert to_feel_string(-1e21) == "-1e+21"
        assert to_feel_string(1.5e300) == "1.5e+300"

    def test_large_integral_floats_use_shortest_digits(self):
        """Test that floats past 2**53 print shortest digits padded with zeros."""
        assert to_feel_string(float(2**60)) == "1152921504606847000"
        assert to_feel_string(1.2345678901234568e20) == "123456789012345680000"
        assert to_feel_string(-float(2**60)) == "-1152921504606847000"
        assert to_feel_string(9.999999999999999e20) == "999999999999999900000"

    def test_special_floats(self):
        assert to_feel_string(float("nan")) == "NaN"
        assert to_feel_string(float("inf")) == "Infinity"
        assert to_feel_string(float("-inf")) == "-Infinity"

    def test_decimal_and_strings(self):
        assert to_feel_string(Decimal("12.50")) == "12.50"
        assert to_feel_string("  keep spaces ") == "  keep spaces "

    def test_none_and_unknown_types(self):
        assert to_feel_string(None) == "null"
        assert to_feel_string([1, 2]) == "[1, 2]"


class TestSaveDmnFile:
    """Test cases for the file helpers."""

    def test_is_well_formed(self):
        assert is_well_formed("<a><b/></a>")
        assert not is_well_formed("<a><b></a>")

    def test_writes_text_and_creates_parents(self, tmp_path):
        target = tmp_path / "out" / "nested" / "table.dmn"
        xml = '<?xml version="1.0" encoding="UTF-8"?>\n<definitions/>'

        result = save_dmn_file(xml, target)

        assert result == target
        assert target.read_text(encoding="utf-8") == xml

    def test_rejects_malformed_document(self, tmp_path):
        target = tmp_path / "broken.dmn"

        with pytest.raises(DmnDocumentError) as exc_info:
            save_dmn_file("<definitions><decision></definitions>", target)

        assert not target.exists()
        assert str(target) in str(exc_info.value)
        assert isinstance(exc_info.value.cause, ET.XMLSyntaxError)

    def test_check_can_be_disabled(self, tmp_path):
        target = tmp_path / "raw.dmn"
        save_dmn_file("<not-closed>", target, check_well_formed=False)
        assert target.read_text(encoding="utf-8") == "<not-closed>"
