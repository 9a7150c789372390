import cv2
import numpy as np
import pytest

from asciivid.config import Settings
from asciivid.converter import FrameConverter
from asciivid.data_models import OutputGeometry
from asciivid.errors import SourceUnavailable
from asciivid.sampler import compute_geometry, sample_frame

from conftest import FakeSource, solid_frame


def test_full_hd_geometry():
    geometry = compute_geometry(1920, 1080, 150, 0.5)
    assert geometry == OutputGeometry(150, 42)


def test_geometry_tracks_width():
    assert compute_geometry(1920, 1080, 300).height == 84
    assert compute_geometry(1920, 1080, 50).height == 14


def test_very_wide_source_keeps_one_row():
    assert compute_geometry(4000, 10, 50).height == 1


@pytest.mark.parametrize("width,height", [(0, 1080), (1920, 0), (0, 0)])
def test_zero_area_source(width, height):
    with pytest.raises(SourceUnavailable):
        compute_geometry(width, height, 150)


def test_sample_shape():
    pixels = sample_frame(solid_frame((10, 20, 30)), OutputGeometry(40, 11))
    assert pixels.shape == (11, 40, 3)
    assert (pixels == (10, 20, 30)).all()


def test_sample_grayscale_and_rgba():
    gray = np.full((90, 160), 77, dtype=np.uint8)
    assert (sample_frame(gray, OutputGeometry(16, 4)) == 77).all()
    rgba = np.full((90, 160, 4), 200, dtype=np.uint8)
    assert sample_frame(rgba, OutputGeometry(16, 4)).shape == (4, 16, 3)


def test_sample_does_not_touch_input():
    frame = solid_frame(50)
    before = frame.copy()
    sample_frame(frame, OutputGeometry(20, 5))
    assert np.array_equal(frame, before)


@pytest.mark.parametrize("frame", [None, np.zeros((0, 0, 3), dtype=np.uint8),
                                   np.zeros((0, 10, 3), dtype=np.uint8)])
def test_sample_without_frame(frame):
    with pytest.raises(SourceUnavailable):
        sample_frame(frame, OutputGeometry(20, 5))


def test_resample_failure_is_source_unavailable(monkeypatch):
    def broken_resize(*args, **kwargs):
        raise cv2.error("resize failed")

    converter = FrameConverter(Settings(resolution=50))
    source = FakeSource()
    previous = converter.refresh(source)

    monkeypatch.setattr(cv2, "resize", broken_resize)
    with pytest.raises(SourceUnavailable):
        sample_frame(solid_frame(10), OutputGeometry(20, 5))
    assert converter.refresh(source) == previous
    assert converter.conversions == 1
