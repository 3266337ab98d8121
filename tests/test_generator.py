"""Tests for services.generator — generate(), fallbacks, preview characters."""

import unittest

from segcode.core.models import (
    BitOrder,
    EncodingConfig,
    NumberFormat,
    OutputStyle,
    Polarity,
    ScanMode,
)
from segcode.encoding import parse_value
from segcode.patterns import PatternTable
from segcode.services.generator import (
    digit_select_entries,
    encode_chars,
    generate,
    normalize_config,
    preview_chars,
)
from segcode.segments import FORWARD_ORDER

# =============================================================================
# Concrete encodings
# =============================================================================


class TestConcreteValues(unittest.TestCase):
    """Known bytes for the forward, MSB-first wiring."""

    def _entry(self, ch, **kw):
        cfg = EncodingConfig(charset=(ch,), **kw)
        return generate(cfg).entries[0]

    def test_eight_cathode(self):
        e = self._entry('8', number_format=NumberFormat.HEX)
        self.assertEqual(e.raw_value, 0xFE)
        self.assertEqual(e.value, 0xFE)
        self.assertEqual(e.text, '0xFE')

    def test_eight_anode(self):
        e = self._entry('8', polarity=Polarity.COMMON_ANODE,
                        number_format=NumberFormat.HEX)
        self.assertEqual(e.raw_value, 0xFE)
        self.assertEqual(e.value, 0x01)
        self.assertEqual(e.text, '0x01')

    def test_one_binary(self):
        e = self._entry('1')
        self.assertEqual(e.raw_value, 0x60)
        self.assertEqual(e.text, '0b01100000')

    def test_one_lsb_decimal(self):
        e = self._entry('1', bit_order=BitOrder.LSB, number_format=NumberFormat.DEC)
        self.assertEqual(e.text, '6')

    def test_override_used(self):
        patterns = PatternTable({'1': ['b', 'c', 'dp']})
        result = generate(EncodingConfig(charset=('1',)), patterns)
        self.assertEqual(result.entries[0].raw_value, 0x61)

    def test_unknown_char_is_zero(self):
        e = self._entry('Z')
        self.assertEqual(e.raw_value, 0)


# =============================================================================
# Full text
# =============================================================================


class TestGenerateText(unittest.TestCase):

    def test_default_array_output(self):
        cfg = EncodingConfig(charset=tuple('01'), number_format=NumberFormat.HEX)
        result = generate(cfg)
        self.assertEqual(result.code, "\n".join([
            "// order: a, b, c, d, e, f, g, dp",
            "// polarity: common_cathode",
            "// bit_order: msb",
            "// scan: static",
            "",
            'static const char sevenseg_charset[] = "01";',
            "static const uint8_t sevenseg_table[] = {",
            "  /* 0 */ 0xFC,",
            "  /* 1 */ 0x60,",
            "};",
        ]))
        self.assertEqual(result.warnings, [])

    def test_macro_output(self):
        cfg = EncodingConfig(charset=('8', ' '), output_style=OutputStyle.MACRO,
                             polarity=Polarity.COMMON_ANODE,
                             number_format=NumberFormat.HEX)
        lines = generate(cfg).code.splitlines()
        self.assertEqual(lines[-2:], [
            "#define SEVENSEG_8 0x01",
            "#define SEVENSEG_SPACE 0xFF",
        ])

    def test_dynamic_hex_digit_table(self):
        cfg = EncodingConfig(scan_mode=ScanMode.DYNAMIC, digit_count=4,
                             number_format=NumberFormat.HEX)
        lines = generate(cfg).code.splitlines()
        self.assertEqual(lines[-7:], [
            "",
            "static const uint8_t sevenseg_digits[] = {",
            "  0x1,",
            "  0x2,",
            "  0x4,",
            "  0x8,",
            "};",
        ])

    def test_dynamic_binary_width_is_digit_count(self):
        cfg = EncodingConfig(scan_mode=ScanMode.DYNAMIC, digit_count=3)
        result = generate(cfg)
        self.assertEqual([e.text for e in result.digit_entries],
                         ['0b001', '0b010', '0b100'])

    def test_string_valued_config(self):
        cfg = EncodingConfig(polarity='common_anode', scan_mode='dynamic',
                             number_format='hex', charset=('8',))
        result = generate(cfg)
        self.assertIn('// polarity: common_anode', result.code)
        self.assertIn('// scan: dynamic', result.code)
        self.assertEqual(result.entries[0].text, '0x01')
        self.assertEqual(len(result.digit_entries), 4)
        self.assertIn('static const uint8_t sevenseg_digits[] = {', result.code)

    def test_control_char_in_charset_is_escaped(self):
        code = generate(EncodingConfig(charset=('1', '\n'))).code
        self.assertIn('static const char sevenseg_charset[] = "1\\n";', code)
        self.assertIn('/* UA */', code)
        self.assertEqual(len(code.splitlines()), 10)

    def test_static_has_no_digit_entries(self):
        self.assertEqual(generate(EncodingConfig()).digit_entries, [])

    def test_style_does_not_change_values(self):
        """array/macro/enum differ only in surrounding text."""
        base = EncodingConfig(charset=tuple('0123456789ABCDEF '),
                              polarity=Polarity.COMMON_ANODE,
                              bit_order=BitOrder.LSB,
                              number_format=NumberFormat.HEX)
        values = {}
        for style in OutputStyle:
            result = generate(base.with_changes(output_style=style))
            values[style] = [(e.char, e.value) for e in result.entries]
            for e in result.entries:
                self.assertIn(e.text, result.code)
        self.assertEqual(values[OutputStyle.ARRAY], values[OutputStyle.MACRO])
        self.assertEqual(values[OutputStyle.ARRAY], values[OutputStyle.ENUM])

    def test_every_number_format_round_trips(self):
        for fmt in NumberFormat:
            result = generate(EncodingConfig(charset=tuple('0123456789ABCDEF'),
                                             number_format=fmt))
            for e in result.entries:
                self.assertEqual(parse_value(e.text), e.value)

    def test_accepts_missing_patterns(self):
        self.assertTrue(generate(EncodingConfig(), None).code)


# =============================================================================
# Fallbacks
# =============================================================================


class TestFallbacks(unittest.TestCase):

    def test_empty_charset_uses_digits(self):
        result = generate(EncodingConfig(charset=()))
        self.assertEqual([e.char for e in result.entries], list('0123456789'))
        self.assertEqual(len(result.warnings), 1)
        self.assertIn('charset is empty', result.warnings[0])

    def test_digit_count_clamped_high(self):
        cfg = EncodingConfig(scan_mode=ScanMode.DYNAMIC, digit_count=40)
        result = generate(cfg)
        self.assertEqual(len(result.digit_entries), 12)
        self.assertTrue(any('out of range' in w for w in result.warnings))

    def test_digit_count_clamped_low(self):
        cfg = EncodingConfig(scan_mode=ScanMode.DYNAMIC, digit_count=0)
        result = generate(cfg)
        self.assertEqual(len(result.digit_entries), 1)
        self.assertEqual(result.preview, [' '])

    def test_invalid_order_uses_forward(self):
        cfg = EncodingConfig(order=('a', 'b'), charset=('8',))
        result = generate(cfg)
        self.assertEqual(result.entries[0].raw_value, 0xFE)
        self.assertIn('// order: a, b, c, d, e, f, g, dp', result.code)
        self.assertEqual(len(result.warnings), 1)

    def test_duplicate_charset_removed(self):
        cfg = EncodingConfig(charset=tuple('1121'))
        self.assertEqual(cfg.charset, ('1', '2'))
        self.assertEqual(len(generate(cfg).entries), 2)

    def test_name_collision_warned_not_dropped(self):
        cfg = EncodingConfig(charset=('℃', 'U2103'), output_style=OutputStyle.MACRO)
        result = generate(cfg)
        self.assertEqual(len(result.warnings), 1)
        self.assertIn('U2103', result.warnings[0])
        self.assertEqual(result.code.count('#define SEVENSEG_U2103 '), 2)

    def test_normalize_leaves_valid_config_untouched(self):
        cfg = EncodingConfig()
        normalized, warnings = normalize_config(cfg)
        self.assertIs(normalized, cfg)
        self.assertEqual(warnings, [])

    def test_normalize_reports_every_problem(self):
        cfg = EncodingConfig(order=(), charset=(), digit_count=99)
        normalized, warnings = normalize_config(cfg)
        self.assertEqual(normalized.order, FORWARD_ORDER)
        self.assertEqual(normalized.digit_count, 12)
        self.assertEqual(len(warnings), 3)


# =============================================================================
# Preview characters
# =============================================================================


class TestPreviewChars(unittest.TestCase):

    def test_static_previews_charset(self):
        cfg = EncodingConfig(charset=tuple('0AF'))
        self.assertEqual(preview_chars(cfg, 'ignored'), ['0', 'A', 'F'])

    def test_dynamic_pads_with_space(self):
        cfg = EncodingConfig(scan_mode=ScanMode.DYNAMIC, digit_count=4)
        self.assertEqual(preview_chars(cfg, '12'), ['1', '2', ' ', ' '])

    def test_dynamic_truncates(self):
        cfg = EncodingConfig(scan_mode=ScanMode.DYNAMIC, digit_count=2)
        self.assertEqual(preview_chars(cfg, '1234'), ['1', '2'])

    def test_dynamic_blanks_unknown_chars(self):
        cfg = EncodingConfig(scan_mode=ScanMode.DYNAMIC, digit_count=3)
        self.assertEqual(preview_chars(cfg, '1A2'), ['1', ' ', '2'])

    def test_padding_space_encodes_to_zero(self):
        cfg = EncodingConfig(scan_mode=ScanMode.DYNAMIC, digit_count=4,
                             charset=tuple('0123456789 '))
        result = generate(cfg, PatternTable(), '12')
        self.assertEqual(result.preview, ['1', '2', ' ', ' '])
        space = [e for e in result.entries if e.char == ' '][0]
        self.assertEqual(space.value, 0x00)

    def test_sample_may_be_char_list(self):
        cfg = EncodingConfig(scan_mode=ScanMode.DYNAMIC, digit_count=2)
        self.assertEqual(generate(cfg, None, ['7', '8']).preview, ['7', '8'])


class TestHelpers(unittest.TestCase):

    def test_encode_chars_order(self):
        entries = encode_chars(EncodingConfig(), PatternTable(), ['1', '0'])
        self.assertEqual([e.char for e in entries], ['1', '0'])

    def test_digit_select_entries(self):
        cfg = EncodingConfig(digit_count=2, number_format=NumberFormat.DEC)
        entries = digit_select_entries(cfg)
        self.assertEqual([e.text for e in entries], ['1', '2'])
        self.assertEqual([e.char for e in entries], ['0', '1'])


if __name__ == '__main__':
    unittest.main()
