"""
Formula-focused unit tests for session XP scoring and level projection.

Values are hand-computed from the formulas so the tests double as formula documentation.
"""

import math

import pytest

from xp_engine.core.config import (
    DEFAULT_BODYWEIGHT_KG,
    SESSION_XP_MAX,
    SESSION_XP_MIN,
)
from xp_engine.core.models import (
    BodyweightData,
    ConsistencyData,
    ExerciseSet,
    FatigueData,
    WorkoutData,
)

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _workout(
    sets: list[tuple[int, float | None]],
    duration: int = 45,
    edited: bool = False,
) -> WorkoutData:
    return WorkoutData(
        sets=[ExerciseSet(reps=r, weight_kg=w) for r, w in sets],
        duration_minutes=duration,
        is_edited=edited,
    )


# Regression fixture: volume 1880 kg, intensity (1.0 + 1.15) / 2 = 1.075
# base = (sqrt(1880/70)*1.5 + 1880/45*0.4 + 45*0.3) * 1.075 ≈ 40.83 → 41
FIXTURE_SETS = [(10, 100.0), (8, 110.0)]
FIXTURE_BASE = 40.8335


# ===========================================================================
# session_xp.py — intensity
# ===========================================================================

class TestIntensityFactor:
    """<=5 → 1.3, 6-8 → 1.15, 9-12 → 1.0, >12 → 0.9"""

    @pytest.mark.parametrize("reps,expected", [
        (1, 1.3), (5, 1.3),
        (6, 1.15), (8, 1.15),
        (9, 1.0), (12, 1.0),
        (13, 0.9), (20, 0.9), (50, 0.9),
    ])
    def test_rep_buckets(self, reps, expected):
        from xp_engine.core.session_xp import calculate_intensity_factor
        assert calculate_intensity_factor(reps) == expected

    def test_average_over_sets(self):
        from xp_engine.core.session_xp import calculate_average_intensity
        sets = [ExerciseSet(5, 100), ExerciseSet(12, 60)]
        assert calculate_average_intensity(sets) == pytest.approx((1.3 + 1.0) / 2)

    def test_missing_reps_use_lowest_rep_bucket(self):
        from xp_engine.core.session_xp import calculate_average_intensity
        sets = [ExerciseSet(None, 100), ExerciseSet(12, 60)]
        assert calculate_average_intensity(sets) == pytest.approx((1.3 + 1.0) / 2)

    def test_empty_session_is_neutral(self):
        from xp_engine.core.session_xp import calculate_average_intensity
        assert calculate_average_intensity([]) == 1.0


# ===========================================================================
# session_xp.py — volume and density
# ===========================================================================

class TestVolumeAndDensity:

    def test_total_volume_sums_weight_times_reps(self):
        from xp_engine.core.session_xp import calculate_total_volume
        sets = [ExerciseSet(10, 100), ExerciseSet(8, 110), ExerciseSet(6, 120)]
        assert calculate_total_volume(sets) == pytest.approx(1000 + 880 + 720)

    def test_unloaded_sets_add_no_volume(self):
        from xp_engine.core.session_xp import calculate_total_volume
        assert calculate_total_volume([ExerciseSet(15, None), ExerciseSet(20, None)]) == 0

    def test_negative_values_count_as_zero(self):
        from xp_engine.core.session_xp import calculate_total_volume
        sets = [ExerciseSet(-5, 100), ExerciseSet(10, -20), ExerciseSet(10, 50)]
        assert calculate_total_volume(sets) == pytest.approx(500)

    def test_work_density(self):
        from xp_engine.core.session_xp import calculate_work_density
        assert calculate_work_density(1000, 50) == pytest.approx(20)
        assert calculate_work_density(300, 60) == pytest.approx(5)

    def test_work_density_zero_duration(self):
        from xp_engine.core.session_xp import calculate_work_density
        assert calculate_work_density(1000, 0) == 0


# ===========================================================================
# session_xp.py — bodyweight normalization
# ===========================================================================

class TestClampBodyweight:

    @pytest.mark.parametrize("bw", [None, 0, -10])
    def test_missing_or_non_positive_uses_default(self, bw):
        from xp_engine.core.session_xp import clamp_bodyweight
        assert clamp_bodyweight(bw) == DEFAULT_BODYWEIGHT_KG

    @pytest.mark.parametrize("bw,expected", [(30, 50), (49, 50), (121, 120), (200, 120)])
    def test_out_of_range_is_clamped(self, bw, expected):
        from xp_engine.core.session_xp import clamp_bodyweight
        assert clamp_bodyweight(bw) == expected

    @pytest.mark.parametrize("bw", [50, 70, 82.5, 120])
    def test_in_range_passes_through(self, bw):
        from xp_engine.core.session_xp import clamp_bodyweight
        assert clamp_bodyweight(bw) == bw


# ===========================================================================
# session_xp.py — base XP
# ===========================================================================

class TestBaseXP:
    """(sqrt(V / BW) * 1.5 + density * 0.4 + minutes * 0.3) * intensity"""

    def test_hand_computed_value(self):
        # sqrt(2500/70) ≈ 5.976 → (8.964 + 20 + 18) * 1.15 ≈ 54.01
        from xp_engine.core.session_xp import calculate_base_xp
        assert calculate_base_xp(2500, 50, 60, 1.15, 70) == pytest.approx(54.01, abs=0.01)

    def test_heavy_dense_beats_light_slow(self):
        from xp_engine.core.session_xp import calculate_base_xp
        assert calculate_base_xp(4900, 80, 60, 1.3, 70) > calculate_base_xp(900, 15, 60, 0.9, 70)

    def test_lighter_lifter_earns_more_for_same_volume(self):
        from xp_engine.core.session_xp import calculate_base_xp
        assert calculate_base_xp(3000, 50, 60, 1.0, 60) > calculate_base_xp(3000, 50, 60, 1.0, 90)

    def test_proportional_volume_scores_equal(self):
        # 3000/60 == 4500/90 → identical relative volume
        from xp_engine.core.session_xp import calculate_base_xp
        light = calculate_base_xp(3000, 50, 60, 1.0, 60)
        heavy = calculate_base_xp(4500, 50, 60, 1.0, 90)
        assert light == pytest.approx(heavy)

    def test_missing_bodyweight_matches_default(self):
        from xp_engine.core.session_xp import calculate_base_xp
        assert calculate_base_xp(2000, 40, 50, 1.0) == calculate_base_xp(2000, 40, 50, 1.0, 70)


# ===========================================================================
# session_xp.py — modifiers and bounds
# ===========================================================================

class TestModifiers:

    @pytest.mark.parametrize("fatigue,expected", [
        (0, 1.0), (39, 1.0),
        (40, 0.85), (59, 0.85),
        (60, 0.7), (79, 0.7),
        (80, 0.55), (100, 0.55),
    ])
    def test_fatigue_modifier(self, fatigue, expected):
        from xp_engine.core.session_xp import get_fatigue_modifier
        assert get_fatigue_modifier(fatigue) == expected

    @pytest.mark.parametrize("sessions,expected", [
        (0, 1.0), (1, 1.0), (2, 1.0), (3, 1.1), (4, 1.2), (5, 1.25), (7, 1.25),
    ])
    def test_weekly_frequency_multiplier(self, sessions, expected):
        from xp_engine.core.session_xp import get_consistency_multiplier
        assert get_consistency_multiplier(sessions) == expected

    @pytest.mark.parametrize("raw,expected", [
        (10, 20), (19.4, 20), (45.3, 45), (45.5, 46), (45.7, 46), (150, 120),
    ])
    def test_bounds_round_half_up_and_clamp(self, raw, expected):
        from xp_engine.core.session_xp import apply_xp_bounds
        assert apply_xp_bounds(raw) == expected


# ===========================================================================
# session_xp.py — calculate_session_xp
# ===========================================================================

class TestSessionXP:

    def test_regression_fixture(self):
        from xp_engine.core.session_xp import calculate_session_xp
        assert calculate_session_xp(_workout(FIXTURE_SETS)) == 41

    def test_defaults_match_explicit_neutral_context(self):
        from xp_engine.core.session_xp import calculate_session_xp
        explicit = calculate_session_xp(
            _workout(FIXTURE_SETS),
            FatigueData(0),
            ConsistencyData(0),
            BodyweightData(70),
        )
        assert explicit == calculate_session_xp(_workout(FIXTURE_SETS))

    def test_short_session_scores_zero(self):
        from xp_engine.core.session_xp import calculate_session_xp
        assert calculate_session_xp(_workout([(5, 200.0)] * 10, duration=19)) == 0

    def test_no_volume_scores_zero(self):
        from xp_engine.core.session_xp import calculate_session_xp
        assert calculate_session_xp(_workout([(20, None), (20, 0.0)], duration=60)) == 0

    def test_no_sets_scores_zero(self):
        from xp_engine.core.session_xp import calculate_session_xp
        assert calculate_session_xp(_workout([], duration=60)) == 0

    def test_missing_reps_count_as_zero(self):
        # volume 1000, intensity (1.0 + 1.3) / 2 = 1.15
        # (sqrt(1000/70)*1.5 + 1000/45*0.4 + 45*0.3) * 1.15 ≈ 32.27 → 32
        from xp_engine.core.session_xp import calculate_session_xp
        workout = WorkoutData(sets=[ExerciseSet(10, 100.0), ExerciseSet(None, 100.0)], duration_minutes=45)
        assert calculate_session_xp(workout) == 32

    def test_light_session_gets_floor(self):
        from xp_engine.core.session_xp import calculate_session_xp
        assert calculate_session_xp(_workout([(10, 10.0)], duration=20)) == SESSION_XP_MIN

    def test_huge_session_is_capped(self):
        from xp_engine.core.session_xp import calculate_session_xp
        xp = calculate_session_xp(
            _workout([(5, 200.0)] * 10, duration=60),
            consistency=ConsistencyData(5),
        )
        assert xp == SESSION_XP_MAX

    def test_fatigue_strictly_lowers_xp(self):
        from xp_engine.core.session_xp import calculate_session_xp
        results = [
            calculate_session_xp(_workout(FIXTURE_SETS), FatigueData(level))
            for level in (0, 50, 70, 85)
        ]
        assert results == [41, 35, 29, 22]
        assert all(a > b for a, b in zip(results, results[1:]))

    def test_weekly_frequency_raises_xp(self):
        from xp_engine.core.session_xp import calculate_session_xp
        results = [
            calculate_session_xp(_workout(FIXTURE_SETS), consistency=ConsistencyData(n))
            for n in (1, 3, 4, 5)
        ]
        assert results == [41, 45, 49, 51]

    def test_edit_penalty(self):
        from xp_engine.core.session_xp import calculate_session_xp
        original = calculate_session_xp(_workout(FIXTURE_SETS))
        edited = calculate_session_xp(_workout(FIXTURE_SETS, edited=True))
        assert edited == round(FIXTURE_BASE * 0.8)
        assert edited < original

    def test_extreme_bodyweights_are_clamped(self):
        from xp_engine.core.session_xp import calculate_session_xp
        w = _workout(FIXTURE_SETS)
        assert calculate_session_xp(w, bodyweight=BodyweightData(20)) == \
            calculate_session_xp(w, bodyweight=BodyweightData(50))
        assert calculate_session_xp(w, bodyweight=BodyweightData(300)) == \
            calculate_session_xp(w, bodyweight=BodyweightData(120))

    def test_deterministic(self):
        from xp_engine.core.session_xp import calculate_session_xp
        w = _workout([(6, 90.0), (6, 90.0), (8, 80.0)], duration=50)
        assert len({calculate_session_xp(w, FatigueData(45)) for _ in range(5)}) == 1

    @pytest.mark.parametrize("sets,duration", [
        ([(3, 180.0)] * 5, 30),
        ([(12, 40.0)] * 4, 25),
        ([(20, 20.0)] * 3, 90),
        ([(8, 100.0)] * 6, 75),
    ])
    def test_scored_sessions_stay_in_bounds(self, sets, duration):
        from xp_engine.core.session_xp import calculate_session_xp
        xp = calculate_session_xp(_workout(sets, duration=duration))
        assert SESSION_XP_MIN <= xp <= SESSION_XP_MAX


class TestClassification:

    @pytest.mark.parametrize("xp,label", [
        (120, "Very intense session"),
        (100, "Very intense session"),
        (99, "Heavy compound day"),
        (70, "Heavy compound day"),
        (45, "Normal hypertrophy"),
        (44, "Light / recovery"),
        (20, "Light / recovery"),
    ])
    def test_thresholds(self, xp, label):
        from xp_engine.core.session_xp import classify_workout
        assert classify_workout(xp) == label

    def test_system_message_tracks_classification(self):
        from xp_engine.core.session_xp import get_system_message
        assert "Exceptional" in get_system_message(105)
        assert "Significant" in get_system_message(75)
        assert get_system_message(50).startswith("Training stress")
        assert "Recovery" in get_system_message(25)


# ===========================================================================
# levels.py
# ===========================================================================

class TestLevels:
    """level = floor(sqrt(XP / 100)) + 1"""

    @pytest.mark.parametrize("xp,level", [
        (0, 1), (99, 1), (100, 2), (399, 2), (400, 3), (899, 3),
        (900, 4), (1600, 5), (8100, 10), (9999, 10), (36100, 20),
    ])
    def test_level_from_xp(self, xp, level):
        from xp_engine.core.levels import calculate_level_from_xp
        assert calculate_level_from_xp(xp) == level

    def test_negative_xp_is_level_one(self):
        from xp_engine.core.levels import calculate_level_from_xp
        assert calculate_level_from_xp(-50) == 1

    def test_xp_for_level(self):
        from xp_engine.core.levels import calculate_xp_for_level
        assert [calculate_xp_for_level(n) for n in (1, 2, 3, 10)] == [0, 100, 400, 8100]

    def test_boundaries_round_trip_exactly(self):
        from xp_engine.core.levels import calculate_level_from_xp, calculate_xp_for_level
        for level in range(1, 60):
            threshold = calculate_xp_for_level(level)
            assert calculate_level_from_xp(threshold) == level
            if level > 1:
                assert calculate_level_from_xp(threshold - 1) == level - 1

    def test_round_trip_is_monotonic(self):
        from xp_engine.core.levels import calculate_level_from_xp, calculate_xp_for_level
        values = [calculate_xp_for_level(calculate_level_from_xp(x)) for x in range(0, 20000, 37)]
        assert values == sorted(values)

    def test_level_progress(self):
        from xp_engine.core.levels import calculate_level_progress
        p = calculate_level_progress(250)
        assert p.current_level == 2
        assert p.current_level_xp == 100
        assert p.next_level_xp == 400
        assert p.xp_in_current_level == 150
        assert p.xp_needed_for_next_level == 300
        assert p.progress_percentage == pytest.approx(50.0)

    def test_next_level_helpers(self):
        from xp_engine.core.levels import calculate_xp_for_next_level, xp_to_next_level
        assert calculate_xp_for_next_level(2) == 400
        assert xp_to_next_level(250) == 150
        assert xp_to_next_level(0) == 100

    def test_level_matches_sqrt_formula(self):
        from xp_engine.core.levels import calculate_level_from_xp
        for xp in (1, 57, 123, 2500, 4711, 99999):
            assert calculate_level_from_xp(xp) == math.floor(math.sqrt(xp / 100)) + 1
