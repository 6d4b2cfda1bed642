"""Tests for applying decode plans to Pillow images."""

from __future__ import annotations

import pytest
from PIL import Image

from downsample_companion.sampling import plan_decode
from downsample_companion.scale import (
    apply_plan,
    downsample,
    reduce_by_sample_size,
    resize_lanczos_to_box,
)
from downsample_companion.strategy import (
    AT_LEAST,
    AT_MOST,
    CENTER_INSIDE,
    CENTER_OUTSIDE,
    NONE,
)


@pytest.fixture
def landscape():
    return Image.new("RGB", (800, 400), (10, 20, 30))


def test_reduce_by_one_is_identity(landscape):
    assert reduce_by_sample_size(landscape, 1) is landscape


def test_reduce_by_sample_size(landscape):
    assert reduce_by_sample_size(landscape, 4).size == (200, 100)


def test_resize_to_same_size_is_identity(landscape):
    assert resize_lanczos_to_box(landscape, (800, 400)) is landscape


@pytest.mark.parametrize("strategy,expected", [
    (AT_LEAST, (200, 100)),
    (AT_MOST, (100, 50)),
    (CENTER_INSIDE, (100, 50)),
    (CENTER_OUTSIDE, (200, 100)),
    (NONE, (800, 400)),
])
def test_downsample_sizes(landscape, strategy, expected):
    assert downsample(landscape, (100, 100), strategy).size == expected


def test_downsample_default_strategy(landscape):
    assert downsample(landscape, (100, 100)).size == (200, 100)


def test_apply_plan_with_residual_scale():
    img = Image.new("RGBA", (1000, 500), (255, 0, 0, 128))
    plan = plan_decode(CENTER_INSIDE, 1000, 500, 300, 300)
    out = apply_plan(img, plan)
    assert out.size == (300, 150)
    assert out.mode == "RGBA"


def test_apply_plan_rejects_wrong_image(landscape):
    plan = plan_decode(AT_LEAST, 640, 480, 100, 100)
    with pytest.raises(ValueError, match="plan expects 640x480"):
        apply_plan(landscape, plan)
