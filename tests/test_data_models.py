from datetime import datetime

import pytest

from signal_survey.color_mapper import quality_color
from signal_survey.data_models import APData, RenderConfig, SamplePoint, SurveyStatistics
from signal_survey.signal_quality import SignalQuality


def make_ap(**overrides):
    values = dict(ssid="WLANS", bssid="9C-A2-F4-10-20-8E", channel=6, signal_strength=-58,
                  security="WPA2", frequency=2437, quality=72, band="2.4 GHz")
    values.update(overrides)
    return APData(**values)


def test_sample_from_measurement_copies_ap_identity():
    stamp = datetime(2024, 5, 1, 12, 30)
    sample = SamplePoint.from_measurement(0.4, 0.6, make_ap(), timestamp=stamp)
    assert (sample.x, sample.y) == (0.4, 0.6)
    assert sample.signal_strength == -58
    assert sample.link_quality == 72
    assert (sample.ssid, sample.bssid, sample.channel) == ("WLANS", "9C-A2-F4-10-20-8E", 6)
    assert sample.frequency == 2437
    assert sample.timestamp == stamp


def test_sample_quality_and_color():
    sample = SamplePoint(0.1, 0.2, -72)
    assert sample.quality is SignalQuality.WEAK
    assert sample.quality_description == "Weak"
    assert sample.signal_color() == quality_color(SignalQuality.WEAK)
    assert sample.signal_color(90)[3] == 90


def test_sample_dict_round_trip_keeps_every_field():
    sample = SamplePoint(0.25, 0.75, -47, link_quality=88, channel=36, ssid="Office", bssid="AA-BB",
                         band="5 GHz", frequency=5180, timestamp=datetime(2024, 1, 2, 3, 4, 5), note="lobby")
    restored = SamplePoint.from_dict(sample.to_dict())
    assert restored.to_dict() == sample.to_dict()
    assert sample.to_dict()['timestamp'] == "2024-01-02T03:04:05"


def test_sample_from_minimal_dict():
    sample = SamplePoint.from_dict({'x': 0.5, 'y': 0.5, 'signal_strength': -66})
    assert sample.ssid == ""
    assert sample.link_quality == 0
    assert isinstance(sample.timestamp, datetime)


def test_sample_repr():
    sample = SamplePoint(0.5, 0.25, -50, ssid="WLANS")
    assert repr(sample) == "WLANS @ (0.50, 0.25): -50 dBm (Excellent)"


def test_ap_dict_round_trip():
    ap = make_ap()
    assert APData.from_dict(ap.to_dict()).to_dict() == ap.to_dict()


def test_render_config_defaults():
    config = RenderConfig()
    assert config.interpolation_radius == 100.0
    assert config.smoothing_factor == 0.7
    assert config.opacity == 150
    assert config.preview_scale == 4


@pytest.mark.parametrize("kwargs, attribute, expected", [
    ({'interpolation_radius': 0}, 'interpolation_radius', 1.0),
    ({'smoothing_factor': -0.5}, 'smoothing_factor', 0.0),
    ({'smoothing_factor': 2}, 'smoothing_factor', 1.0),
    ({'opacity': 300}, 'opacity', 255),
    ({'opacity': -4}, 'opacity', 0),
    ({'preview_scale': 0}, 'preview_scale', 1),
])
def test_render_config_clamps(kwargs, attribute, expected):
    assert getattr(RenderConfig(**kwargs), attribute) == expected


def test_render_config_from_partial_dict():
    config = RenderConfig.from_dict({'opacity': 90})
    assert config.opacity == 90
    assert config.interpolation_radius == 100.0
    assert RenderConfig.from_dict(config.to_dict()).to_dict() == config.to_dict()


def test_empty_statistics():
    stats = SurveyStatistics()
    assert stats.bucket_counts == [0] * 5
    assert stats.coverage_percentage("Excellent") == 0.0


def test_statistics_dict_lists_every_bucket():
    stats = SurveyStatistics(total_points=4, bucket_counts=[2, 0, 1, 0, 1])
    coverage = stats.to_dict()['coverage']
    assert list(coverage) == ["Excellent", "Good", "Fair", "Weak", "Poor"]
    assert coverage["Excellent"] == {'count': 2, 'percentage': 50.0}
    assert coverage["Poor"]['percentage'] == 25.0
