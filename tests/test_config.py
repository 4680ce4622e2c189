"""Tests for the configuration resolver.

Covers: tb.core.config
"""

import os
import tempfile
import unittest

os.environ.setdefault("TIMERBALL_HOME", tempfile.mkdtemp())


# ──────────────────────────────────────────────────────────────────────────
# resolve()
# ──────────────────────────────────────────────────────────────────────────

class TestResolve(unittest.TestCase):

    def assertKind(self, total, interval, kind):
        from tb.core.config import ConfigError, resolve
        with self.assertRaises(ConfigError) as ctx:
            resolve(total, interval)
        self.assertEqual(ctx.exception.kind, kind)
        self.assertTrue(ctx.exception.message)

    def test_valid_pairs_give_ceiling_dot_count(self):
        from tb.core.config import resolve
        cases = [
            (300, 60, 5),
            (120, 30, 4),
            (100, 30, 4),   # ragged last dot
            (1, 1, 1),
            (300, 1, 300),  # exactly at the cap
            (3600, 12, 300),
            (7200, 7200, 1),
            (61, 60, 2),
        ]
        for total, interval, dots in cases:
            with self.subTest(total=total, interval=interval):
                cfg = resolve(total, interval)
                self.assertEqual(cfg.total_seconds, total)
                self.assertEqual(cfg.interval_seconds, interval)
                self.assertEqual(cfg.dot_count, dots)

    def test_invalid_total(self):
        from tb.core.config import ConfigErrorKind
        self.assertKind(0, 10, ConfigErrorKind.INVALID_TOTAL)
        self.assertKind(-5, 10, ConfigErrorKind.INVALID_TOTAL)

    def test_invalid_interval(self):
        from tb.core.config import ConfigErrorKind
        self.assertKind(60, 0, ConfigErrorKind.INVALID_INTERVAL)

    def test_interval_exceeds_total(self):
        from tb.core.config import ConfigErrorKind
        self.assertKind(30, 60, ConfigErrorKind.INTERVAL_EXCEEDS_TOTAL)

    def test_too_many_intervals(self):
        from tb.core.config import ConfigErrorKind
        self.assertKind(100000, 1, ConfigErrorKind.TOO_MANY_INTERVALS)
        self.assertKind(301, 1, ConfigErrorKind.TOO_MANY_INTERVALS)

    def test_checks_run_in_order(self):
        """A zero total is reported even when the interval is also bad."""
        from tb.core.config import ConfigErrorKind
        self.assertKind(0, 0, ConfigErrorKind.INVALID_TOTAL)
        self.assertKind(0, 60, ConfigErrorKind.INVALID_TOTAL)

    def test_custom_max_dots(self):
        from tb.core.config import ConfigError, resolve
        self.assertEqual(resolve(100, 10, max_dots=10).dot_count, 10)
        with self.assertRaises(ConfigError):
            resolve(100, 9, max_dots=10)

    def test_fractional_seconds_truncate_before_validation(self):
        """Stored seconds are whole and dot_count is computed from them."""
        from tb.core.config import resolve
        cfg = resolve(90.5, 30)
        self.assertEqual(cfg.total_seconds, 90)
        self.assertEqual(cfg.interval_seconds, 30)
        self.assertEqual(cfg.dot_count, 3)
        for total, interval in [(90.5, 30), (100.9, 29.7), (61.2, 60.0)]:
            with self.subTest(total=total, interval=interval):
                cfg = resolve(total, interval)
                self.assertIsInstance(cfg.total_seconds, int)
                self.assertIsInstance(cfg.interval_seconds, int)
                self.assertEqual(cfg.dot_count,
                                 -(-cfg.total_seconds // cfg.interval_seconds))

    def test_sub_second_values_are_invalid(self):
        from tb.core.config import ConfigErrorKind
        self.assertKind(2, 0.5, ConfigErrorKind.INVALID_INTERVAL)
        self.assertKind(0.9, 0.5, ConfigErrorKind.INVALID_TOTAL)

    def test_non_numeric_values_are_invalid(self):
        from tb.core.config import ConfigErrorKind
        self.assertKind("abc", 10, ConfigErrorKind.INVALID_TOTAL)
        self.assertKind(None, 10, ConfigErrorKind.INVALID_TOTAL)
        self.assertKind(float("nan"), 10, ConfigErrorKind.INVALID_TOTAL)
        self.assertKind(60, float("inf"), ConfigErrorKind.INVALID_INTERVAL)

    def test_config_error_is_value_error(self):
        from tb.core.config import ConfigError, resolve
        with self.assertRaises(ValueError):
            resolve(0, 1)
        self.assertTrue(issubclass(ConfigError, ValueError))

    def test_timer_config_is_frozen(self):
        import dataclasses
        from tb.core.config import resolve
        cfg = resolve(300, 60)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            cfg.dot_count = 9


# ──────────────────────────────────────────────────────────────────────────
# Raw form inputs
# ──────────────────────────────────────────────────────────────────────────

class TestInputs(unittest.TestCase):

    def test_preset_total(self):
        from tb.core.config import RawInputs, total_seconds_from_inputs
        self.assertEqual(total_seconds_from_inputs(RawInputs(preset=1800)), 1800)

    def test_custom_total_units(self):
        from tb.core.config import RawInputs, TotalUnit, total_seconds_from_inputs
        minutes = RawInputs(preset=None, custom_quantity=7, custom_unit=TotalUnit.MINUTES)
        hours = RawInputs(preset=None, custom_quantity=2, custom_unit=TotalUnit.HOURS)
        self.assertEqual(total_seconds_from_inputs(minutes), 420)
        self.assertEqual(total_seconds_from_inputs(hours), 7200)

    def test_interval_units(self):
        from tb.core.config import IntervalUnit, RawInputs, interval_seconds_from_inputs
        self.assertEqual(interval_seconds_from_inputs(
            RawInputs(interval_quantity=45, interval_unit=IntervalUnit.SECONDS)), 45)
        self.assertEqual(interval_seconds_from_inputs(
            RawInputs(interval_quantity=3, interval_unit=IntervalUnit.MINUTES)), 180)

    def test_unit_strings_are_accepted(self):
        from tb.core.config import RawInputs, interval_seconds_from_inputs, total_seconds_from_inputs
        raw = RawInputs(preset=None, custom_quantity=1, custom_unit="hours",
                        interval_quantity=2, interval_unit="minutes")
        self.assertEqual(total_seconds_from_inputs(raw), 3600)
        self.assertEqual(interval_seconds_from_inputs(raw), 120)

    def test_quantities_clamp_to_one(self):
        from tb.core.config import RawInputs, interval_seconds_from_inputs, total_seconds_from_inputs
        for bad in (0, -4, None, "", "abc"):
            with self.subTest(value=bad):
                raw = RawInputs(preset=None, custom_quantity=bad, interval_quantity=bad)
                self.assertEqual(total_seconds_from_inputs(raw), 60)
                self.assertEqual(interval_seconds_from_inputs(raw), 1)

    def test_fractional_quantities_are_kept(self):
        """2.5 minutes is 150 seconds, not clamped down to one minute."""
        from tb.core.config import IntervalUnit, RawInputs, TotalUnit, interval_seconds_from_inputs, \
            total_seconds_from_inputs
        raw = RawInputs(preset=None, custom_quantity="2.5", custom_unit=TotalUnit.MINUTES,
                        interval_quantity="2.5", interval_unit=IntervalUnit.SECONDS)
        self.assertEqual(total_seconds_from_inputs(raw), 150)
        self.assertEqual(interval_seconds_from_inputs(raw), 2)
        raw = RawInputs(preset=None, custom_quantity=1.5, custom_unit=TotalUnit.HOURS,
                        interval_quantity=2.5, interval_unit=IntervalUnit.MINUTES)
        self.assertEqual(total_seconds_from_inputs(raw), 5400)
        self.assertEqual(interval_seconds_from_inputs(raw), 150)

    def test_fractional_quantities_below_one_clamp(self):
        from tb.core.config import RawInputs, interval_seconds_from_inputs
        for small in ("0.4", 0.5, "inf", "nan"):
            with self.subTest(value=small):
                self.assertEqual(interval_seconds_from_inputs(RawInputs(interval_quantity=small)), 1)

    def test_resolve_inputs(self):
        from tb.core.config import IntervalUnit, RawInputs, TimerConfig, resolve_inputs
        raw = RawInputs(preset=300, interval_quantity=1, interval_unit=IntervalUnit.MINUTES)
        self.assertEqual(resolve_inputs(raw), TimerConfig(300, 60, 5))

    def test_defaults_resolve(self):
        from tb.core.config import DEFAULTS, resolve_inputs
        self.assertEqual(resolve_inputs(DEFAULTS).dot_count, 5)


# ──────────────────────────────────────────────────────────────────────────
# preview() / suggested_interval()
# ──────────────────────────────────────────────────────────────────────────

class TestPreview(unittest.TestCase):

    def test_summary_text(self):
        from tb.core.config import RawInputs, preview
        p = preview(RawInputs(preset=300, interval_quantity=60))
        self.assertEqual(p.dot_count, 5)
        self.assertEqual(p.summary, "5 dots of 01:00 for 05:00")

    def test_preview_does_not_validate(self):
        """An over-cap grid still previews with its real size."""
        from tb.core.config import RawInputs, TotalUnit, preview
        p = preview(RawInputs(preset=None, custom_quantity=10, custom_unit=TotalUnit.HOURS,
                              interval_quantity=1))
        self.assertEqual(p.dot_count, 36000)
        self.assertEqual(p.summary, "36000 dots of 00:01 for 10:00:00")

    def test_preview_is_pure(self):
        from tb.core.config import DEFAULTS, preview
        self.assertEqual(preview(DEFAULTS), preview(DEFAULTS))

    def test_suggested_interval_for_short_presets(self):
        from tb.core.config import IntervalUnit, PRESETS, suggested_interval
        self.assertEqual(suggested_interval(300), (60, IntervalUnit.SECONDS))
        self.assertEqual(suggested_interval(900), (60, IntervalUnit.SECONDS))
        self.assertIsNone(suggested_interval(1800))
        self.assertIsNone(suggested_interval(None))
        self.assertEqual(list(PRESETS), sorted(PRESETS))


if __name__ == "__main__":
    unittest.main()
