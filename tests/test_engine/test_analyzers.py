"""
Tests for the five factor analyzers.

Scenarios are built so every threshold the analyzer crosses is known,
which pins the exact score.
"""

import logging
import random
import unittest

from breakout_algo.analyzers import (
    DeliveryTrendAnalyzer,
    MarketCorrelationAnalyzer,
    MarketSentimentAnalyzer,
    StockTechnicalsAnalyzer,
    VolumePatternAnalyzer,
)

from . import build_days, build_market, make_day, random_days, random_market

logging.disable(logging.CRITICAL)


class TestStockTechnicals(unittest.TestCase):

    def setUp(self):
        self.analyzer = StockTechnicalsAnalyzer()

    def test_short_history_is_neutral(self):
        self.assertEqual(self.analyzer.analyze(build_days([100] * 19)), 50.0)

    def test_breakout_setup(self):
        # +3% day (+15), above MA (+10), quiet tape (-5), at the 10-day high (+15)
        days = build_days([100] * 19 + [103])
        self.assertEqual(self.analyzer.analyze(days), 85.0)

    def test_flat_tape(self):
        # Unchanged (-5), on the MA (-10), no volatility (-5), near resistance (+15)
        days = build_days([100] * 20)
        self.assertEqual(self.analyzer.analyze(days), 45.0)

    def test_selloff(self):
        # -5% day (-15), below MA (-10), volatility ~1.1 (0), far below the prior highs
        days = build_days([100] * 19 + [95])
        self.assertEqual(self.analyzer.analyze(days), 25.0)


class TestMarketCorrelation(unittest.TestCase):

    def setUp(self):
        self.analyzer = MarketCorrelationAnalyzer()
        self.rising = build_days([100 + i for i in range(10)])
        self.falling = build_days([110 - i for i in range(10)])

    def test_short_index_history_is_neutral(self):
        market = build_market([18000 + 10 * i for i in range(9)])
        self.assertEqual(self.analyzer.analyze(self.rising, market), 50.0)

    def test_no_index_history_is_neutral(self):
        self.assertEqual(self.analyzer.analyze(self.rising, []), 50.0)

    def test_rising_together(self):
        market = build_market([18000 + 10 * i for i in range(10)])
        self.assertEqual(self.analyzer.analyze(self.rising, market), 85.0)

    def test_outperforming_a_falling_market(self):
        # +5 for outperformance; strong negative correlation adds nothing
        market = build_market([18000 - 10 * i for i in range(10)])
        self.assertEqual(self.analyzer.analyze(self.rising, market), 55.0)

    def test_falling_together(self):
        market = build_market([18000 - 10 * i for i in range(10)])
        self.assertEqual(self.analyzer.analyze(self.falling, market), 25.0)

    def test_flat_market(self):
        market = build_market([18000] * 10)
        self.assertEqual(self.analyzer.analyze(self.rising, market), 50.0)


class TestVolumePattern(unittest.TestCase):

    def setUp(self):
        self.analyzer = VolumePatternAnalyzer()

    def _days(self, last_volume, last_open, last_close):
        days = build_days([100] * 9, volumes=[1000] * 9)
        days.append(make_day(9, last_close, open_price=last_open, volume=last_volume))
        return days

    def test_short_history_is_neutral(self):
        self.assertEqual(self.analyzer.analyze(build_days([100] * 9)), 50.0)

    def test_accumulation(self):
        # 3x volume (+25), rising volume (+10), up on volume (+15)
        self.assertEqual(self.analyzer.analyze(self._days(3000, 100, 102)), 100.0)

    def test_distribution(self):
        # 3x volume (+25), rising volume (+10), down on volume (-10)
        self.assertEqual(self.analyzer.analyze(self._days(3000, 102, 100)), 75.0)

    def test_thin_volume(self):
        # 0.5x volume (-10), falling volume (-5)
        self.assertEqual(self.analyzer.analyze(self._days(500, 100, 100)), 35.0)

    def test_zero_volume_window(self):
        days = build_days([100] * 10, volumes=[0] * 10)
        # Ratio falls back to 1.0, flat volume trend (-5)
        self.assertEqual(self.analyzer.analyze(days), 45.0)


class TestDeliveryTrend(unittest.TestCase):

    def setUp(self):
        self.analyzer = DeliveryTrendAnalyzer()

    def _days(self, last_delivery, last_open=100, last_close=102, prior=None):
        days = prior if prior is not None else build_days([100] * 4, delivery_pcts=[50] * 4)
        days.append(make_day(
            len(days), last_close, open_price=last_open, volume=1000, delivery_qty=last_delivery,
        ))
        return days

    def test_short_history_is_neutral(self):
        self.assertEqual(self.analyzer.analyze(build_days([100] * 4)), 50.0)

    def test_genuine_buying(self):
        # 80% (+20), rising delivery (+10), up day with >60% (+15)
        self.assertEqual(self.analyzer.analyze(self._days(800)), 95.0)

    def test_speculative_selling(self):
        # 20% (-15), falling delivery (-5), down day with <40% (-10)
        days = self._days(200, last_open=102, last_close=100)
        self.assertEqual(self.analyzer.analyze(days), 20.0)

    def test_zero_volume_latest_is_neutral(self):
        days = build_days([100] * 4)
        days.append(make_day(4, 102, open_price=100, volume=0, delivery_qty=0))
        self.assertEqual(self.analyzer.analyze(days), 50.0)

    def test_zero_volume_inside_window_is_skipped(self):
        prior = build_days([100] * 4, volumes=[1000, 0, 1000, 1000], delivery_pcts=[50] * 4)
        self.assertEqual(self.analyzer.analyze(self._days(800, prior=prior)), 95.0)

    def test_monotonic_in_latest_delivery(self):
        previous = -1.0
        for delivery in range(0, 1001, 50):
            score = self.analyzer.analyze(self._days(delivery))
            self.assertGreaterEqual(score, previous, f"delivery_qty={delivery}")
            previous = score


class TestMarketSentiment(unittest.TestCase):

    def setUp(self):
        self.analyzer = MarketSentimentAnalyzer()

    def test_short_history_is_neutral(self):
        self.assertEqual(self.analyzer.analyze(build_market([18000] * 4)), 50.0)

    def test_risk_on(self):
        market = build_market([18000 + 20 * i for i in range(5)], vix=12.0, advance_decline=2.0)
        self.assertEqual(self.analyzer.analyze(market), 85.0)

    def test_risk_off(self):
        market = build_market([18000 - 20 * i for i in range(5)], vix=30.0, advance_decline=0.5)
        self.assertEqual(self.analyzer.analyze(market), 20.0)

    def test_missing_vix_and_breadth_ignored(self):
        self.assertEqual(self.analyzer.analyze(build_market([18000] * 5)), 50.0)

    def test_moderate_readings_ignored(self):
        market = build_market([18000] * 5, vix=20.0, advance_decline=1.0)
        self.assertEqual(self.analyzer.analyze(market), 50.0)


class TestScoreBounds(unittest.TestCase):
    """Every analyzer stays in [0, 100] on arbitrary input."""

    def test_random_histories(self):
        rng = random.Random(42)
        technicals = StockTechnicalsAnalyzer()
        correlation = MarketCorrelationAnalyzer()
        volume = VolumePatternAnalyzer()
        delivery = DeliveryTrendAnalyzer()
        sentiment = MarketSentimentAnalyzer()

        for _ in range(200):
            count = rng.randint(0, 40)
            days = random_days(rng, count)
            market = random_market(rng, rng.randint(0, count))
            scores = [
                technicals.analyze(days),
                correlation.analyze(days, market),
                volume.analyze(days),
                delivery.analyze(days),
                sentiment.analyze(market),
            ]
            for score in scores:
                self.assertGreaterEqual(score, 0.0)
                self.assertLessEqual(score, 100.0)


if __name__ == "__main__":
    unittest.main()
