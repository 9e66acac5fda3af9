import os

# Qt must not look for a display while the tests paint legends and encode images
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt5.QtGui import QGuiApplication

from signal_survey.data_models import SamplePoint


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QGuiApplication.instance() or QGuiApplication(["signal-survey-tests"])
    yield app


@pytest.fixture
def make_sample():
    def _make(x=0.5, y=0.5, signal=-50, ssid="WLANS", channel=6, link_quality=80):
        return SamplePoint(x=x, y=y, signal_strength=signal, ssid=ssid,
                           channel=channel, link_quality=link_quality)
    return _make
