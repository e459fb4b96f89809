"""Tests for window scanning and the per-window analysis report."""

import numpy as np
import pytest

from dtmf_goertzel import keypad, scanner
from dtmf_goertzel.detector import PowerReading, detect
from dtmf_goertzel.errors import InvalidConfiguration, UnknownKey
from dtmf_goertzel.synth import synthesize, synthesize_sequence


def reading(key, row_power, column_power):
    return PowerReading(keypad.lookup(key), row_power, column_power)


class TestIterWindows:
    def test_partial_last_window(self):
        windows = list(scanner.iter_windows(np.arange(600), 256))
        assert [start for start, _ in windows] == [0, 256, 512]
        assert [len(w) for _, w in windows] == [256, 256, 88]
        np.testing.assert_array_equal(windows[2][1], np.arange(512, 600))

    def test_exact_multiple(self):
        assert [len(w) for _, w in scanner.iter_windows(np.zeros(512), 256)] == [256, 256]

    def test_empty(self):
        assert list(scanner.iter_windows([], 256)) == []

    @pytest.mark.parametrize("bin_size", [0, -256])
    def test_rejects_non_positive_bin_size(self, bin_size):
        with pytest.raises(InvalidConfiguration):
            list(scanner.iter_windows(np.zeros(10), bin_size))

    def test_bin_size_checked_before_iteration(self):
        with pytest.raises(InvalidConfiguration):
            scanner.iter_windows(np.zeros(10), 0)


class TestScanForKey:
    def test_finds_key(self):
        samples = synthesize(8000, 1024, [852.0, 1477.0])
        assert scanner.scan_for_key(samples, 256, 8000, 25.0, "9")

    def test_absent_key(self):
        samples = synthesize(8000, 1024, [852.0, 1477.0])
        assert not scanner.scan_for_key(samples, 256, 8000, 25.0, "3")

    def test_empty_input(self):
        assert scanner.scan_for_key([], 256, 8000, 25.0, "1") is False

    def test_silence(self):
        assert scanner.scan_for_key(np.zeros(8000), 256, 8000, 25.0, "1") is False

    def test_short_final_window_is_scanned(self, monkeypatch):
        lengths = []

        def fake_detect(window, sr, threshold):
            lengths.append(len(window))
            return []

        monkeypatch.setattr(scanner, "detect", fake_detect)
        assert not scanner.scan_for_key(np.zeros(300), 256, 8000, 25.0, "1")
        assert lengths == [256, 44]

    def test_only_strongest_key_counts(self, monkeypatch):
        monkeypatch.setattr(
            scanner, "detect",
            lambda window, sr, threshold: [reading("#", 30, 31), reading("1", 25, 26)],
        )
        assert scanner.scan_for_key(np.zeros(512), 256, 8000, 25.0, "#")
        assert not scanner.scan_for_key(np.zeros(512), 256, 8000, 25.0, "1")

    def test_stops_at_first_hit(self, monkeypatch):
        calls = []

        def fake_detect(window, sr, threshold):
            calls.append(1)
            return [reading("7", 40, 40)]

        monkeypatch.setattr(scanner, "detect", fake_detect)
        assert scanner.scan_for_key(np.zeros(2560), 256, 8000, 25.0, "7")
        assert len(calls) == 1

    def test_bad_bin_size(self):
        with pytest.raises(InvalidConfiguration):
            scanner.scan_for_key(np.zeros(10), 0, 8000, 25.0, "1")

    def test_unknown_key(self):
        with pytest.raises(UnknownKey):
            scanner.scan_for_key(np.zeros(10), 256, 8000, 25.0, "E")

    @pytest.mark.parametrize("samples", [[], np.zeros(0), np.zeros(10)])
    @pytest.mark.parametrize("rate", [0, -8000])
    def test_bad_sample_rate_with_any_input(self, samples, rate):
        with pytest.raises(InvalidConfiguration):
            scanner.scan_for_key(samples, 256, rate, 25.0, "1")


class TestAnalyze:
    def test_reports_sequence(self):
        samples = synthesize_sequence(8000, "2580", tone_ms=500, gap_ms=100)
        result = scanner.analyze(samples, 8000)
        d = result["data"]
        assert result["detected"]
        assert 0.0 < result["confidence"] <= 1.0
        assert set("2580") <= set(d["keys"])
        assert d["keys"] == sorted(d["keys"], key=keypad.KEYS.index)
        assert d["windows_scanned"] == int(np.ceil(len(samples) / 256))
        starts = [w["start_sec"] for w in d["windows"]]
        assert starts == sorted(starts)
        for w in d["windows"]:
            assert w["row_power_db"] > 25.0
            assert w["col_power_db"] > 25.0
            assert w["matches"] >= 1

    def test_silence(self):
        result = scanner.analyze(np.zeros(4000), 8000)
        assert result == {
            "detected": False,
            "confidence": 0.0,
            "data": {
                "sample_rate_hz": 8000,
                "bin_size": 256,
                "power_threshold_db": 25.0,
                "windows_scanned": 16,
                "keys": [],
                "windows": [],
            },
        }

    def test_empty(self):
        result = scanner.analyze(np.zeros(0), 8000)
        assert not result["detected"]
        assert result["confidence"] == 0.0
        assert result["data"]["windows_scanned"] == 0

    @pytest.mark.parametrize("rate", [0, -1])
    def test_bad_sample_rate_on_empty_input(self, rate):
        with pytest.raises(InvalidConfiguration):
            scanner.analyze(np.zeros(0), rate)

    def test_confidence_is_share_of_windows(self, monkeypatch):
        hits = iter([[reading("5", 30, 30)], [], [], [reading("5", 31, 31)]])
        monkeypatch.setattr(scanner, "detect", lambda window, sr, threshold: next(hits))
        result = scanner.analyze(np.zeros(1024), 8000)
        assert result["confidence"] == 0.5
        assert [w["start_sec"] for w in result["data"]["windows"]] == [0.0, 0.096]


class TestFormatResult:
    def test_no_detection(self):
        result = scanner.analyze(np.zeros(512), 8000)
        assert scanner.format_result(result) == "No DTMF keys detected in 2 windows."

    def test_table(self):
        samples = synthesize(8000, 256, [941.0, 1633.0])
        text = scanner.format_result(scanner.analyze(samples, 8000))
        first = text.splitlines()[0]
        assert first.startswith("Keys:")
        assert "D" in first.split()[1:]
        assert "Row Hz" in text
        assert "941" in text and "1633" in text


class TestKeyFilter:
    def test_binds_settings(self):
        kf = scanner.KeyFilter(8000, 25.0)
        samples = synthesize(8000, 1024, [770.0, 1336.0])
        assert kf.scan_for_key(samples, 256, "5")
        assert not kf.scan_for_key(samples, 256, "6")

    def test_detect_matches_function(self):
        kf = scanner.KeyFilter(8000, 20.0)
        samples = synthesize(8000, 32, [941.0, 1633.0])
        assert kf.detect(samples) == detect(samples, 8000, 20.0)

    def test_rejects_bad_rate(self):
        with pytest.raises(InvalidConfiguration):
            scanner.KeyFilter(-8000, 25.0)

    def test_unknown_expected_key(self):
        with pytest.raises(UnknownKey):
            scanner.KeyFilter(8000, 25.0).scan_for_key(np.zeros(10), 256, "Q")

    def test_repr(self):
        assert repr(scanner.KeyFilter(8000, 25.0)) == "KeyFilter(sample_rate=8000, power_threshold=25.0)"
