#!/usr/bin/env python3
"""
Test script for the ensemble broker, registry and processor
"""
import os
import sys
import tempfile
import threading
import unittest
from pathlib import Path

import numpy as np
import pandas as pd

# Add parent directory to import path
parent_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(parent_dir))

from sfrfs.errors import ConditionNotFound, EnsembleNotFound, EnsembleProcessingError, ValidationError
from sfrfs.parameters import (
    make_geometry,
    make_operating_grid,
    make_shape_parameters,
    make_shape_parameter_set,
    SnapshotParameters
)
from sfrfs.ensemble import (
    EnsembleBroker,
    EnsembleEntry,
    EnsembleProcessor,
    EnsembleRegistry,
    append_suffix,
    remove_suffix
)
from sfrfs.utils import Logger
from sfrfs.response import compute_response


class MemoryStore:
    """In-memory member storage keyed by member id"""

    def __init__(self, frames):
        self.frames = dict(frames)
        self.saved = {}
        self._lock = threading.Lock()

    def load(self, member_id):
        return self.frames[member_id].copy()

    def save(self, member_id, frame):
        with self._lock:
            self.saved[member_id] = frame


def make_member(snapshot, speed, load, indices, seed):
    rng = np.random.default_rng(seed)
    t = snapshot.time_axis()
    rows = []
    for index in indices:
        samples = np.sin(2 * np.pi * 92.0 * t) + 0.1 * rng.standard_normal(len(t))
        rows.append({'SnapshotIndex': index, 'Speed': speed, 'Load': load, 'Vib': samples})
    return pd.DataFrame(rows)


class TestBrokerNaming(unittest.TestCase):

    def test_suffix_helpers(self):
        self.assertEqual(append_suffix("Vib", "_FFT"), "Vib_FFT")
        self.assertEqual(remove_suffix("Vib_FFT", "_FFT"), "Vib")
        with self.assertRaises(ValidationError):
            remove_suffix("Vib_SFRFs", "_FFT")

    def test_column_mapping(self):
        broker = EnsembleBroker(["m1"], lambda m: None, lambda m, f: None, ["Vib"])
        self.assertEqual(broker.map_to_spectral_column("Vib"), "Vib_FFT")
        self.assertEqual(broker.map_to_sfrf_column("Vib"), "Vib_SFRFs")
        self.assertEqual(broker.map_to_temporal_column("Vib_FFT"), "Vib")
        self.assertEqual(broker.map_to_temporal_from_sfrf_column("Vib_SFRFs"), "Vib")

    def test_invalid_construction(self):
        with self.assertRaises(ValidationError):
            EnsembleBroker(None, lambda m: None, lambda m, f: None, ["Vib"])
        with self.assertRaises(ValidationError):
            EnsembleBroker(["m1"], None, lambda m, f: None, ["Vib"])
        with self.assertRaises(ValidationError):
            EnsembleBroker(["m1"], lambda m: None, lambda m, f: None, "Vib")


class TestBrokerLoading(unittest.TestCase):

    def setUp(self):
        self.snapshot = SnapshotParameters(sampling_frequency=1000, duration=1)
        frame = make_member(self.snapshot, 30.0, 10.0, [2, 0, 1], seed=1)
        self.store = MemoryStore({"m1": frame, "nosort": frame.drop(columns=['SnapshotIndex'])})
        self.broker = EnsembleBroker(lambda: ["m1"], self.store.load, self.store.save, ["Vib"])

    def test_members_from_callable(self):
        self.assertEqual(self.broker.get_members(), ["m1"])

    def test_load_sorts_by_snapshot_index(self):
        frame = self.broker.load("m1")
        self.assertEqual(frame['SnapshotIndex'].tolist(), [0, 1, 2])
        self.assertEqual(list(frame.index), [0, 1, 2])

    def test_missing_sort_field(self):
        with self.assertRaises(ValidationError):
            self.broker.load("nosort")
        self.assertEqual(len(self.broker.load("nosort", sort=False)), 3)

    def test_add_spectrum_columns(self):
        frame = self.broker.add_spectrum_columns(self.broker.load("m1"))
        self.assertIn("Vib_FFT", frame.columns)
        spectrum = frame.loc[0, "Vib_FFT"]
        self.assertEqual(spectrum.shape, (1000,))
        self.assertTrue(np.iscomplexobj(spectrum))
        # Peak at the 92 Hz test tone
        self.assertEqual(int(np.argmax(np.abs(spectrum[:500]))), 92)

    def test_add_spectrum_columns_missing_signal(self):
        with self.assertRaises(ValidationError):
            self.broker.add_spectrum_columns(pd.DataFrame({'Other': [1]}))


class MockListener:
    """Collects messages forwarded by the logger"""

    def __init__(self):
        self.messages = []

    def add_message(self, message, level, logLevel):
        self.messages.append(message)


class TestEnsembleRegistry(unittest.TestCase):

    def setUp(self):
        self.logger = Logger(console=False)
        self.listener = MockListener()
        self.logger.set_listener(self.listener)
        self.registry = EnsembleRegistry(self.logger)
        self.entry = EnsembleEntry(members=["m1", "m2"], temporal_columns=["Vib"])

    def test_add_and_get(self):
        self.registry.add("xjtu", self.entry)
        self.assertTrue(self.registry.has("xjtu"))
        self.assertIn("xjtu", self.registry)
        self.assertIs(self.registry.get("xjtu"), self.entry)
        self.assertEqual(self.registry.names(), ["xjtu"])

    def test_overwrite_is_logged(self):
        self.registry.add("xjtu", self.entry)
        other = EnsembleEntry(members=["m3"], temporal_columns=["Vib"])
        self.registry.add("xjtu", other)
        self.assertIs(self.registry.get("xjtu"), other)
        self.assertTrue(any('Overwriting ensemble "xjtu"' in m for m in self.listener.messages))

    def test_add_broker(self):
        broker = EnsembleBroker(lambda: ["a", "b"], lambda m: None, lambda m, f: None, ["Vib", "Acc"])
        entry = self.registry.add("bench", broker)
        self.assertEqual(entry.members, ("a", "b"))
        self.assertEqual(entry.temporal_columns, ("Vib", "Acc"))

    def test_missing_name(self):
        with self.assertRaises(EnsembleNotFound):
            self.registry.get("unknown")
        with self.assertRaises(LookupError):
            self.registry.reconfigure("unknown", members=["m1"])
        self.assertFalse(self.registry.has("unknown"))

    def test_invalid_input(self):
        with self.assertRaises(ValidationError):
            self.registry.add("", self.entry)
        with self.assertRaises(ValidationError):
            self.registry.add("xjtu", {"members": ["m1"]})
        with self.assertRaises(ValidationError):
            EnsembleEntry(members=["m1"], temporal_columns="Vib")

    def test_remove(self):
        self.registry.add("xjtu", self.entry)
        self.registry.remove("xjtu")
        self.registry.remove("xjtu")
        self.assertEqual(len(self.registry), 0)

    def test_reconfigure_keeps_unspecified_fields(self):
        self.registry.add("xjtu", self.entry)
        updated = self.registry.reconfigure("xjtu", temporal_columns=["Horizontal", "Vertical"])
        self.assertEqual(updated.temporal_columns, ("Horizontal", "Vertical"))
        self.assertEqual(updated.members, ("m1", "m2"))
        self.assertIs(self.registry.get("xjtu"), updated)

    def test_registries_are_independent(self):
        self.registry.add("xjtu", self.entry)
        self.assertEqual(EnsembleRegistry().names(), [])

    def test_save_and_load(self):
        self.registry.add("xjtu", self.entry)
        self.registry.add("bench", EnsembleEntry(members=[1, 2, 3], temporal_columns=["Acc"],
                                                 sort_field="Time"))
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "ensembles.pkl")
            self.registry.save(path)
            restored = EnsembleRegistry.load(path)

        self.assertEqual(restored.names(), ["xjtu", "bench"])
        self.assertEqual(restored.get("xjtu"), self.entry)
        self.assertEqual(restored.get("bench").sort_field, "Time")
        self.assertEqual(restored.get("bench").members, (1, 2, 3))

    def test_load_rejects_other_files(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "other.pkl")
            pd.DataFrame({'x': [1]}).to_pickle(path)
            with self.assertRaises(ValidationError):
                EnsembleRegistry.load(path)

    def test_entry_builds_broker(self):
        frame = pd.DataFrame({'Time': [2, 1], 'Acc': [np.zeros(4), np.ones(4)]})
        store = MemoryStore({"a": frame})
        entry = EnsembleEntry(members=["a"], temporal_columns=["Acc"], sort_field="Time")
        broker = entry.make_broker(store.load, store.save)
        self.assertEqual(broker.get_members(), ["a"])
        self.assertEqual(broker.load("a")['Time'].tolist(), [1, 2])


class TestEnsembleProcessor(unittest.TestCase):

    def setUp(self):
        self.snapshot = SnapshotParameters(sampling_frequency=1000, duration=1)
        self.geometry = make_geometry(8, 7.92, 34.55, 0)
        self.grid = make_operating_grid([30.0, 35.0], [10.0, 12.0])
        self.params = make_shape_parameter_set(same_for_all=make_shape_parameters())

        helper = EnsembleBroker([], lambda m: None, lambda m, f: None, ["Vib"])
        self.frames = {
            "m1": helper.add_spectrum_columns(make_member(self.snapshot, 30.0, 10.0, [1, 0, 2], seed=1)),
            "m2": helper.add_spectrum_columns(make_member(self.snapshot, 35.0, 12.0, [0, 1], seed=2)),
        }

    def make_processor(self, store, members, num_workers=2):
        broker = EnsembleBroker(members, store.load, store.save, ["Vib"])
        return EnsembleProcessor(broker, self.snapshot, self.geometry, self.grid, self.params,
                                 num_workers=num_workers)

    def test_process_all_members(self):
        store = MemoryStore(self.frames)
        processor = self.make_processor(store, ["m1", "m2"])

        done = processor.process()

        self.assertEqual(sorted(done), ["m1", "m2"])
        self.assertEqual(sorted(store.saved), ["m1", "m2"])
        frame = store.saved["m1"]
        self.assertIn("Vib_SFRFs", frame.columns)
        self.assertEqual(frame['SnapshotIndex'].tolist(), [0, 1, 2])
        for cell in frame["Vib_SFRFs"]:
            self.assertEqual(cell.shape, (4,))

    def test_member_results_match_direct_computation(self):
        store = MemoryStore(self.frames)
        processor = self.make_processor(store, ["m1"], num_workers=1)
        processor.process()

        saved = store.saved["m1"]
        spectra = np.column_stack(list(saved["Vib_FFT"]))
        expected = compute_response(processor.gain_masks, self.params, (30.0, 10.0),
                                    spectrum=spectra).as_matrix()
        for i, cell in enumerate(saved["Vib_SFRFs"]):
            np.testing.assert_allclose(cell, expected[:, i], rtol=1e-12)

    def test_bands_built_once(self):
        store = MemoryStore(self.frames)
        processor = self.make_processor(store, ["m1"])
        processor.prepare()
        bands = processor.band_table
        processor.prepare()
        self.assertIs(processor.band_table, bands)
        self.assertEqual(len(processor.gain_masks[0]), self.snapshot.total_samples)

    def test_failures_are_aggregated(self):
        frames = dict(self.frames)
        frames["bad"] = self.frames["m2"].assign(Speed=40.0)
        store = MemoryStore(frames)
        processor = self.make_processor(store, ["m1", "bad", "m2"])

        with self.assertRaises(EnsembleProcessingError) as ctx:
            processor.process()

        self.assertEqual(list(ctx.exception.causes), ["bad"])
        self.assertIsInstance(ctx.exception.causes["bad"], ConditionNotFound)
        self.assertIn("member bad", str(ctx.exception))
        # Healthy members are still saved
        self.assertEqual(sorted(store.saved), ["m1", "m2"])

    def test_missing_spectrum_column(self):
        frames = {"m1": self.frames["m1"].drop(columns=["Vib_FFT"])}
        store = MemoryStore(frames)
        processor = self.make_processor(store, ["m1"])

        with self.assertRaises(EnsembleProcessingError) as ctx:
            processor.process()
        cause = ctx.exception.causes["m1"]
        self.assertIsInstance(cause, ValidationError)
        self.assertIn('"Vib_FFT"', str(cause))

    def test_custom_compute(self):
        store = MemoryStore(self.frames)
        processor = self.make_processor(store, ["m1", "m2"])

        done = processor.process(compute=lambda frame: frame.assign(Checked=True))

        self.assertEqual(sorted(done), ["m1", "m2"])
        self.assertTrue(store.saved["m2"]["Checked"].all())
        self.assertIsNone(processor.band_table)

    def test_invalid_worker_count(self):
        with self.assertRaises(ValidationError):
            self.make_processor(MemoryStore(self.frames), ["m1"], num_workers=0)

    def test_empty_ensemble(self):
        processor = self.make_processor(MemoryStore(self.frames), [])
        with self.assertRaises(ValidationError):
            processor.process()


if __name__ == '__main__':
    unittest.main()
