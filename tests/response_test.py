#!/usr/bin/env python3
"""
Test script for SFRF response computation
"""
import unittest
import sys
from pathlib import Path

import numpy as np
import pandas as pd
from scipy.integrate import trapezoid

# Add parent directory to import path
parent_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(parent_dir))

from sfrfs.errors import (
    AmbiguousInput,
    NoInput,
    ConditionNotFound,
    DimensionMismatch,
    MaskLengthMismatch,
    ValidationError
)
from sfrfs.families import FaultFamily, FAULT_FAMILIES
from sfrfs.parameters import (
    make_geometry,
    make_operating_grid,
    make_shape_parameters,
    make_shape_parameter_set,
    SnapshotParameters
)
from sfrfs.parameters.operating_conditions import OperatingCondition
from sfrfs.bands import BandTable, BandTableRow, generate_bands
from sfrfs.bands.frequency_bands import make_band
from sfrfs.masks import synthesize_gain_functions
from sfrfs.response import compute_spectrum, compute_response, resolve_condition


class TestComputeResponse(unittest.TestCase):

    def setUp(self):
        self.snapshot = SnapshotParameters(sampling_frequency=10240, duration=1)
        self.f = self.snapshot.frequency_axis()
        self.t = self.snapshot.time_axis()
        self.geometry = make_geometry(8, 7.92, 34.55, 0)
        self.grid = make_operating_grid([30.0, 35.0], [10.0, 10.0])
        self.params = make_shape_parameter_set(same_for_all=make_shape_parameters())
        bands = generate_bands(self.geometry, self.grid, self.params)
        self.masks = synthesize_gain_functions(bands, self.f)

        rng = np.random.default_rng(7)
        self.signal = rng.standard_normal((len(self.t), 3))

    def test_one_row_per_family(self):
        result = compute_response(self.masks, self.params, (30.0, 10.0), signal=self.signal)
        self.assertEqual(result.families, list(FAULT_FAMILIES))
        self.assertEqual(result.as_matrix().shape, (4, 3))
        self.assertEqual(result.condition, OperatingCondition(30.0, 10.0))

    def test_signal_and_spectrum_paths_agree(self):
        from_signal = compute_response(self.masks, self.params, (30.0, 10.0), signal=self.signal)
        from_spectrum = compute_response(self.masks, self.params, (30.0, 10.0),
                                         spectrum=compute_spectrum(self.signal))
        np.testing.assert_allclose(from_signal.as_matrix(), from_spectrum.as_matrix(), rtol=1e-12)

    def test_matches_manual_difference_of_gaussians(self):
        x = compute_spectrum(self.signal)
        n = x.shape[0]
        result = compute_response(self.masks, self.params, (35.0, 10.0), spectrum=x)

        for mask_row in self.masks.rows_for(OperatingCondition(35.0, 10.0)):
            center = trapezoid(np.abs(x * mask_row.center_mask[:, None]) / n, x=self.f, axis=0)
            surround = trapezoid(np.abs(x * mask_row.surround_mask[:, None]) / n, x=self.f, axis=0)
            expected = center - 0.8 * surround
            np.testing.assert_allclose(result.value(mask_row.family), expected, rtol=1e-10)

    def test_linear_in_spectrum_scale(self):
        x = compute_spectrum(self.signal)
        base = compute_response(self.masks, self.params, (30.0, 10.0), spectrum=x).as_matrix()
        scaled = compute_response(self.masks, self.params, (30.0, 10.0), spectrum=3.5 * x).as_matrix()
        np.testing.assert_allclose(scaled, 3.5 * base, rtol=1e-10)

    def test_column_independence(self):
        full = compute_response(self.masks, self.params, (30.0, 10.0), signal=self.signal).as_matrix()
        single = compute_response(self.masks, self.params, (30.0, 10.0),
                                  signal=self.signal[:, 1]).as_matrix()
        np.testing.assert_allclose(single[:, 0], full[:, 1], rtol=1e-12)

    def test_per_family_inhibition_factor(self):
        p = dict(num_sidebands=0)
        params = make_shape_parameter_set(
            outer_race=make_shape_parameters(inhibition_factor=0.0, **p),
            inner_race=make_shape_parameters(inhibition_factor=1.0),
            ball=make_shape_parameters(),
            cage=make_shape_parameters(inhibition_factor=0.5, **p))
        x = compute_spectrum(self.signal)
        result = compute_response(self.masks, params, (30.0, 10.0), spectrum=x)

        outer = self.masks.rows_for(OperatingCondition(30.0, 10.0))[0]
        center = trapezoid(np.abs(x * outer.center_mask[:, None]) / len(self.f), x=self.f, axis=0)
        np.testing.assert_allclose(result.value(FaultFamily.OUTER_RACE), center, rtol=1e-10)

    def test_tone_far_from_bands_gives_zero(self):
        tone = np.cos(2 * np.pi * 3000.0 * self.t)
        result = compute_response(self.masks, self.params, (30.0, 10.0), signal=tone)
        for value in result.as_matrix().ravel():
            self.assertAlmostEqual(value, 0.0, delta=1e-9)

    def test_column_names(self):
        result = compute_response(self.masks, self.params, (30.0, 10.0), signal=self.signal,
                                  columns=['a', 'b', 'c'])
        frame = result.to_frame()
        self.assertEqual(list(frame.columns),
                         ['FaultGroup', 'Description', 'Speed', 'Load', 'a', 'b', 'c'])
        with self.assertRaises(DimensionMismatch):
            compute_response(self.masks, self.params, (30.0, 10.0), signal=self.signal,
                             columns=['a'])

    def test_no_input(self):
        with self.assertRaises(NoInput):
            compute_response(self.masks, self.params, (30.0, 10.0))
        with self.assertRaises(NoInput):
            compute_response(self.masks, self.params, (30.0, 10.0), signal=np.array([]))

    def test_ambiguous_input(self):
        with self.assertRaises(AmbiguousInput):
            compute_response(self.masks, self.params, (30.0, 10.0),
                             signal=self.signal, spectrum=compute_spectrum(self.signal))

    def test_condition_not_found(self):
        with self.assertRaises(ConditionNotFound):
            compute_response(self.masks, self.params, (40.0, 10.0), signal=self.signal)
        with self.assertRaises(LookupError):
            compute_response(self.masks, self.params, (30.0, 12.0), signal=self.signal)

    def test_mask_length_mismatch(self):
        with self.assertRaises(MaskLengthMismatch):
            compute_response(self.masks, self.params, (30.0, 10.0), signal=self.signal[:1000])


class TestPureTone(unittest.TestCase):
    """A unit-bin tone at the band center: center and surround integrals both equal A/2."""

    def setUp(self):
        self.snapshot = SnapshotParameters(sampling_frequency=1000, duration=1)
        self.f = self.snapshot.frequency_axis()
        self.t = self.snapshot.time_axis()
        self.condition = OperatingCondition(30.0, 10.0)

    def _response(self, inhibition_factor, amplitude):
        params = make_shape_parameter_set(
            same_for_all=make_shape_parameters(num_sidebands=0, inhibition_factor=inhibition_factor))
        band = make_band(100.0, params.outer_race, 1, 0, "Fo")
        table = BandTable(rows=(BandTableRow(self.condition, FaultFamily.OUTER_RACE, (band,)),),
                          shape_parameters=params)
        masks = synthesize_gain_functions(table, self.f)
        tone = amplitude * np.cos(2 * np.pi * 100.0 * self.t)
        return compute_response(masks, params, self.condition, signal=tone)

    def test_center_only(self):
        result = self._response(0.0, 2.0)
        self.assertAlmostEqual(result.value('outer_race')[0], 1.0, places=9)

    def test_inhibition(self):
        result = self._response(0.8, 2.0)
        self.assertAlmostEqual(result.value('outer_race')[0], 0.2, places=9)

    def test_full_inhibition_cancels(self):
        result = self._response(1.0, 4.0)
        self.assertAlmostEqual(result.value('outer_race')[0], 0.0, places=9)


class TestResolveCondition(unittest.TestCase):

    def test_accepted_forms(self):
        expected = OperatingCondition(30.0, 10.0)
        forms = [
            expected,
            (30, 10),
            np.array([30.0, 10.0]),
            {'Speed': 30, 'Load': 10},
            {'speed_hz': 30, 'load_kn': 10},
            pd.DataFrame({'Speed': [30.0], 'Load': [10.0]}),
        ]
        for form in forms:
            with self.subTest(form=type(form).__name__):
                self.assertEqual(resolve_condition(form), expected)

    def test_multiple_rows(self):
        with self.assertRaises(DimensionMismatch):
            resolve_condition(pd.DataFrame({'Speed': [30.0, 35.0], 'Load': [10.0, 10.0]}))

    def test_missing_columns(self):
        with self.assertRaises(ValidationError):
            resolve_condition(pd.DataFrame({'Speed': [30.0]}))
        with self.assertRaises(ValidationError):
            resolve_condition({'speed': 30})

    def test_wrong_pair_size(self):
        with self.assertRaises(DimensionMismatch):
            resolve_condition((30.0, 10.0, 5.0))


if __name__ == '__main__':
    unittest.main()
