# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the Satellite entity, its bounded history and its builder."""
import math
import threading

import pytest

from orbitsim.domain.atmosphere import DEFAULT_DRAG, DragConfig
from orbitsim.domain.element_set import format_element_lines, parse_two_line_element
from orbitsim.domain.propagation import OrbitPropagator, circular_state, create_regime_propagator
from orbitsim.domain.satellite import (
    DEFAULT_MAX_HISTORY,
    IncompleteSatelliteError,
    Satellite,
    SatelliteBuilder,
)
from orbitsim.domain.vectors import vec_norm


# ── Helpers ──────────────────────────────────────────────────────────

def _elements(name="SAT-1"):
    line1, line2 = format_element_lines(1, 53.0, 0.0, 0.0, 0.0, 0.0, 15.5)
    return parse_two_line_element(name, line1, line2)


def _satellite(max_history=DEFAULT_MAX_HISTORY, name="SAT-1"):
    el = _elements(name)
    return (
        SatelliteBuilder()
        .name(name)
        .elements(el)
        .propagator(OrbitPropagator(el))
        .max_history(max_history)
        .build()
    )


# ── Builder ──────────────────────────────────────────────────────────

class TestSatelliteBuilder:

    def test_builds_with_defaults(self):
        sat = _satellite()
        assert isinstance(sat, Satellite)
        assert sat.name == "SAT-1"
        assert sat.regime_label == "LEO"
        assert sat.max_history == DEFAULT_MAX_HISTORY
        assert sat.initial_position is None
        assert sat.orbit_points == ()
        assert len(sat) == 0

    def test_missing_name(self):
        el = _elements()
        with pytest.raises(IncompleteSatelliteError, match="name"):
            SatelliteBuilder().elements(el).propagator(OrbitPropagator(el)).build()

    def test_missing_everything_lists_all(self):
        with pytest.raises(IncompleteSatelliteError) as excinfo:
            SatelliteBuilder().build()
        message = str(excinfo.value)
        for part in ("name", "elements", "propagator"):
            assert part in message

    def test_missing_propagator(self):
        with pytest.raises(IncompleteSatelliteError, match="propagator"):
            SatelliteBuilder().name("X").elements(_elements()).build()

    def test_nonpositive_history_rejected(self):
        el = _elements()
        builder = SatelliteBuilder().name("X").elements(el).propagator(OrbitPropagator(el))
        with pytest.raises(IncompleteSatelliteError):
            builder.max_history(0).build()

    def test_error_is_runtime_error(self):
        with pytest.raises(RuntimeError):
            SatelliteBuilder().build()

    def test_optional_parts(self):
        el = _elements()
        cfg = DragConfig(cd=2.0, area_m2=4.0, mass_kg=150.0)
        points = [(7000.0, 0.0, 0.0), (0.0, 7000.0, 0.0)]
        sat = (
            SatelliteBuilder()
            .name("X")
            .elements(el)
            .propagator(OrbitPropagator(el))
            .regime_label("MEO")
            .drag_config(cfg)
            .initial_position((1.0, 2.0, 3.0))
            .orbit_points(points)
            .build()
        )
        assert sat.regime_label == "MEO"
        assert sat.drag_config is cfg
        assert sat.mass_kg == 150.0
        assert sat.cross_section_m2 == 4.0
        assert sat.initial_position == (1.0, 2.0, 3.0)
        assert sat.orbit_points == tuple(points)

    def test_builder_is_fluent(self):
        builder = SatelliteBuilder()
        assert builder.name("X") is builder


# ── Direct construction ──────────────────────────────────────────────

class TestSatelliteConstructor:

    def test_all_parts_missing(self):
        with pytest.raises(IncompleteSatelliteError) as excinfo:
            Satellite(None, None, None)
        message = str(excinfo.value)
        for part in ("name", "elements", "propagator"):
            assert part in message

    def test_missing_propagator(self):
        with pytest.raises(IncompleteSatelliteError, match="propagator"):
            Satellite("X", _elements(), None)

    @pytest.mark.parametrize("max_history", [0, -3, 2.5, True, None])
    def test_bad_max_history(self, max_history):
        el = _elements()
        with pytest.raises(IncompleteSatelliteError, match="max_history"):
            Satellite("X", el, OrbitPropagator(el), max_history=max_history)

    def test_valid_construction_records_history(self):
        el = _elements()
        sat = Satellite("X", el, OrbitPropagator(el), max_history=1)
        state = sat.propagate_state(5.0)
        assert sat.current_state() == state
        assert len(sat) == 1


# ── Drag agreement ───────────────────────────────────────────────────

class TestDragConfigAgreement:

    def test_defaults_from_propagator(self):
        el = _elements()
        cfg = DragConfig(cd=2.0, area_m2=4.0, mass_kg=150.0)
        sat = SatelliteBuilder().name("X").elements(el).propagator(
            OrbitPropagator(el, drag_config=cfg)).build()
        assert sat.drag_config is cfg
        assert sat.mass_kg == 150.0

    def test_defaults_through_regime_propagator(self):
        el = _elements()
        cfg = DragConfig(cd=2.0, area_m2=4.0, mass_kg=150.0)
        sat = Satellite("X", el, create_regime_propagator(el, cfg))
        assert sat.drag_config is cfg

    def test_falls_back_without_propagator_drag(self):
        class _Fixed:
            def state_at(self, minutes):
                return (7000.0, 0.0, 0.0), (0.0, 7.5, 0.0)

            def position_at(self, minutes):
                return self.state_at(minutes)[0]

            def reset(self):
                pass

        sat = Satellite("X", _elements(), _Fixed())
        assert sat.drag_config is DEFAULT_DRAG

    def test_explicit_value_wins(self):
        el = _elements()
        cfg = DragConfig(cd=2.0, area_m2=4.0, mass_kg=150.0)
        sat = SatelliteBuilder().name("X").elements(el).propagator(
            OrbitPropagator(el)).drag_config(cfg).build()
        assert sat.drag_config is cfg
        assert sat.propagator.drag_config is DEFAULT_DRAG


# ── Recording history ────────────────────────────────────────────────

class TestHistory:

    def test_empty_current_state(self):
        assert _satellite().current_state() is None

    def test_propagate_records(self):
        sat = _satellite()
        state = sat.propagate_state(10.0)
        assert len(sat) == 1
        assert sat.current_state() == state
        assert sat.time_history == (10.0,)
        assert sat.position_history == (state[0],)
        assert sat.velocity_history == (state[1],)

    def test_parallel_histories_aligned(self):
        sat = _satellite()
        for t in (1.0, 2.0, 3.0):
            sat.propagate_state(t)
        for i in range(3):
            assert (sat.position_at(i), sat.velocity_at(i)) == sat.propagator.state_at(sat.time_at(i))

    def test_ring_buffer_evicts_oldest(self):
        sat = _satellite(max_history=5)
        for t in range(8):
            sat.propagate_state(float(t))
        assert len(sat) == 5
        assert sat.time_history == (3.0, 4.0, 5.0, 6.0, 7.0)
        assert len(sat.position_history) == 5
        assert len(sat.velocity_history) == 5

    def test_batch_sorted_ascending(self):
        sat = _satellite()
        states = sat.propagate_states([30.0, 10.0, 20.0])
        assert sat.time_history == (10.0, 20.0, 30.0)
        assert [s[0] for s in states] == list(sat.position_history)

    def test_batch_deduplicates(self):
        sat = _satellite()
        sat.propagate_states([5.0, 5.0, 1.0])
        assert sat.time_history == (1.0, 5.0)

    def test_predict_does_not_record(self):
        sat = _satellite()
        sat.propagate_state(1.0)
        sat.predict_state(99.0)
        assert len(sat) == 1
        assert sat.time_history == (1.0,)

    def test_approximate_state_circular(self):
        sat = _satellite()
        assert sat.approximate_state(12.0) == circular_state(sat.elements, 12.0)
        assert len(sat) == 0

    def test_clear_history(self):
        sat = _satellite()
        for t in (1.0, 2.0):
            sat.propagate_state(t)
        sat.clear_history()
        assert len(sat) == 0
        assert sat.current_state() is None
        assert sat.position_history == ()
        assert sat.velocity_history == ()

    def test_history_pairs(self):
        sat = _satellite()
        first = sat.propagate_state(1.0)
        second = sat.propagate_state(2.0)
        assert sat.history() == [first, second]

    def test_last_n_states(self):
        sat = _satellite()
        states = [sat.propagate_state(float(t)) for t in range(5)]
        assert sat.last_n_states(2) == states[-2:]
        assert sat.last_n_states(10) == states
        assert sat.last_n_states(0) == []
        assert sat.last_n_states(-3) == []

    def test_snapshots_detached(self):
        sat = _satellite()
        sat.propagate_state(1.0)
        snapshot = sat.time_history
        sat.propagate_state(2.0)
        assert snapshot == (1.0,)

    def test_positions_are_orbital(self):
        sat = _satellite()
        pos, _ = sat.propagate_state(30.0)
        assert vec_norm(pos) == pytest.approx(sat.elements.semi_major_axis_km, rel=1e-6)

    def test_nan_time_recorded(self):
        sat = _satellite()
        pos, _ = sat.propagate_state(math.nan)
        assert math.isnan(pos[0])
        assert len(sat) == 1


# ── Concurrency ──────────────────────────────────────────────────────

class TestConcurrentHistory:

    def test_concurrent_appends_keep_lengths_equal(self):
        sat = _satellite(max_history=50)
        barrier = threading.Barrier(6)

        def worker(offset):
            barrier.wait()
            for k in range(40):
                sat.propagate_state(offset * 100.0 + k)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(6)]
        for th in threads:
            th.start()
        for th in threads:
            th.join()

        assert len(sat.time_history) == 50
        assert len(sat.position_history) == 50
        assert len(sat.velocity_history) == 50
        for i in range(50):
            assert (sat.position_at(i), sat.velocity_at(i)) == sat.propagator.state_at(sat.time_at(i))

    def test_repr(self):
        assert "SAT-1" in repr(_satellite())
