import numpy as np
import pytest

from signal_survey.interpolation import (
    NO_SIGNAL_DBM, HeatmapCancelledError, blur, build_grid, gaussian_kernel, snapshot_samples
)


def reference_blur(grid, kernel):
    """Straightforward loop version: in-bounds taps only, renormalized per cell."""
    height, width = grid.shape
    radius = kernel.shape[0] // 2
    result = np.zeros_like(grid)
    for y in range(height):
        for x in range(width):
            total = 0.0
            weight_sum = 0.0
            for ky in range(-radius, radius + 1):
                for kx in range(-radius, radius + 1):
                    ny, nx = y + ky, x + kx
                    if 0 <= nx < width and 0 <= ny < height:
                        weight = kernel[ky + radius, kx + radius]
                        total += grid[ny, nx] * weight
                        weight_sum += weight
            result[y, x] = total / weight_sum
    return result


# --- build_grid ---

def test_grid_without_samples_defaults_to_no_signal():
    grid = build_grid(8, 6, [], 100, 0.7)
    assert grid.shape == (6, 8)
    assert np.all(grid == NO_SIGNAL_DBM)


@pytest.mark.parametrize("width, height", [(0, 0), (0, 10), (10, 0), (-5, -5)])
def test_grid_with_degenerate_size_is_one_cell(width, height, make_sample):
    grid = build_grid(width, height, [make_sample()], 100, 0.7)
    assert grid.shape == (1, 1)


def test_single_sample_sets_the_whole_grid(make_sample):
    grid = build_grid(20, 10, [make_sample(signal=-63)], 5, 0.7)
    assert grid == pytest.approx(np.full((10, 20), -63.0))


def test_equidistant_pixel_averages_two_samples(make_sample):
    samples = [make_sample(x=0.25, y=0.5, signal=-40), make_sample(x=0.75, y=0.5, signal=-80)]
    grid = build_grid(100, 100, samples, 100, 0.7)
    # Samples land on columns 25 and 75 of row 50
    assert grid[50, 50] == pytest.approx(-60.0)
    assert grid[50, 25] > -41
    assert grid[50, 75] < -79


def test_distance_is_floored_at_one_pixel(make_sample):
    # Pixel (10, 10) sits on the first sample and one pixel from the second,
    # so both get weight 1 and the estimate is their mean.
    samples = [make_sample(x=0.10, y=0.10, signal=-40), make_sample(x=0.11, y=0.10, signal=-80)]
    grid = build_grid(100, 100, samples, 100, 0.7)
    assert grid[10, 10] == pytest.approx(-60.0)
    assert np.all(np.isfinite(grid))


def test_falloff_beyond_radius_favours_the_nearer_sample(make_sample):
    samples = [make_sample(x=0.1, y=0.5, signal=-40), make_sample(x=0.9, y=0.5, signal=-80)]
    wide = build_grid(200, 20, samples, 200, 0.5)
    narrow = build_grid(200, 20, samples, 10, 0.5)
    # Column 40 is 20 px from the strong sample and 140 px from the weak one
    assert wide[10, 40] < -40.5
    assert narrow[10, 40] > wide[10, 40]
    assert narrow[10, 40] == pytest.approx(-40.0, abs=0.01)


def test_zero_smoothing_cuts_off_beyond_radius(make_sample):
    grid = build_grid(50, 50, [make_sample(x=0.0, y=0.0, signal=-50)], 10, 0.0)
    assert grid[5, 5] == pytest.approx(-50.0)
    assert grid[40, 40] == NO_SIGNAL_DBM


def test_out_of_range_coordinates_still_contribute(make_sample):
    samples = [make_sample(x=1.5, y=-0.2, signal=-45), make_sample(x=0.2, y=0.8, signal=-85)]
    grid = build_grid(40, 40, samples, 20, 0.7)
    assert grid.shape == (40, 40)
    assert np.all(np.isfinite(grid))
    # Top right corner is nearest the off-canvas sample
    assert grid[0, 39] > grid[32, 8]


def test_status_callback_reports_every_row(make_sample):
    progress = []
    build_grid(30, 12, [make_sample()], 100, 0.7, status_callback=progress.append)
    assert len(progress) == 12
    assert progress == sorted(progress)
    assert progress[-1] == 100


def test_cancellation_is_checked_between_rows(make_sample):
    polls = []

    def should_cancel():
        polls.append(True)
        return len(polls) > 3

    with pytest.raises(HeatmapCancelledError):
        build_grid(30, 12, [make_sample()], 100, 0.7, should_cancel=should_cancel)
    assert len(polls) == 4


def test_snapshot_is_independent_of_later_mutation(make_sample):
    sample = make_sample(x=0.3, y=0.4, signal=-66)
    samples = [sample]
    snapshot = snapshot_samples(samples)
    sample.signal_strength = -20
    samples.append(make_sample())
    assert snapshot.shape == (1, 3)
    assert snapshot[0].tolist() == [0.3, 0.4, -66.0]


def test_snapshot_accepts_arrays_and_empty_input():
    assert snapshot_samples([]).shape == (0, 3)
    rows = snapshot_samples(np.array([[0.1, 0.2, -70]]))
    assert rows.dtype == np.float64
    assert rows.shape == (1, 3)


def test_grid_is_deterministic(make_sample):
    samples = [make_sample(x=0.2, y=0.3, signal=-45), make_sample(x=0.7, y=0.6, signal=-78)]
    first = build_grid(64, 48, samples, 30, 0.7)
    second = build_grid(64, 48, samples, 30, 0.7)
    assert np.array_equal(first, second)


# --- gaussian_kernel / blur ---

def test_gaussian_kernel_is_normalized_and_symmetric():
    kernel = gaussian_kernel(5)
    assert kernel.shape == (5, 5)
    assert kernel.sum() == pytest.approx(1.0)
    assert np.allclose(kernel, kernel.T)
    assert np.allclose(kernel, kernel[::-1, ::-1])
    assert kernel[2, 2] == kernel.max()


def test_gaussian_kernel_uses_sigma_of_a_third_of_size():
    kernel = gaussian_kernel(5)
    sigma = 5 / 3.0
    assert kernel[2, 2] / kernel[2, 3] == pytest.approx(np.exp(1 / (2 * sigma * sigma)))


def test_blur_keeps_constant_grid_constant_up_to_the_edges():
    grid = np.full((9, 7), -70.0)
    assert blur(grid) == pytest.approx(grid)


def test_blur_matches_renormalized_reference():
    grid = np.random.default_rng(0).uniform(-95, -30, size=(6, 7))
    expected = reference_blur(grid, gaussian_kernel(5))
    assert blur(grid, 5) == pytest.approx(expected)


def test_blur_returns_new_grid():
    grid = np.zeros((5, 5))
    grid[2, 2] = -100.0
    original = grid.copy()
    blurred = blur(grid)
    assert np.array_equal(grid, original)
    assert blurred is not grid
    assert blurred[2, 2] > -100.0
    assert blurred[2, 3] < 0.0


def test_blur_with_tiny_kernel_is_identity():
    grid = np.arange(12, dtype=np.float64).reshape(3, 4)
    assert np.array_equal(blur(grid, 1), grid)
