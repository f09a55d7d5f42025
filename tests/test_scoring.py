import math

import pytest

from algorithms.blood_compatibility import resolve_compatibility
from algorithms.haversine import Candidate
from algorithms.scoring import (
    ActivityStats,
    URGENCY_WEIGHTS,
    activity_score,
    distance_score,
    score_candidate,
)
from tests.conftest import make_donor, make_patient

RADIUS = 20_000


def score(donor_km, blood_type='O-', patient=None, stats=None, radius=RADIUS):
    patient = patient or make_patient('O+')
    donor = make_donor(blood_type, km=donor_km)
    return score_candidate(
        Candidate(donor, donor_km * 1000),
        patient,
        radius,
        stats or ActivityStats(),
        resolve_compatibility(patient.blood_type),
    )


def test_distance_score_decays_with_distance():
    assert distance_score(0, RADIUS) == 1.0
    assert distance_score(2, RADIUS) == pytest.approx(math.exp(-0.5))
    assert distance_score(5, RADIUS) < distance_score(4, RADIUS)
    assert 0 < distance_score(20, RADIUS) < 0.01


def test_activity_defaults_to_neutral():
    assert activity_score(ActivityStats()) == 0.5
    assert activity_score(None) == 0.5


def test_activity_reflects_completion_rate():
    assert activity_score(ActivityStats(completed=3, accepted=1, rejected=0)) == pytest.approx(0.875)
    assert activity_score(ActivityStats(completed=0, accepted=0, rejected=4)) == 0.5
    assert activity_score(ActivityStats(completed=5)) == 1.0


def test_breakdown_rounds_halves_up():
    # 0.5 + 0.5 * 1/4 = 0.625, shown as 63 rather than banker's 62
    result = score(2, stats=ActivityStats(completed=1, accepted=3, rejected=0))
    assert result.score_breakdown.activity == 63


def test_composite_score_for_reference_donor():
    result = score(2)
    # 0.4 * e^-0.5 + 0.3 * 1.0 + 0.2 * 0.5 + 0.1 * 1.0
    assert result.match_score == 74.3
    assert result.score_breakdown.distance == 61
    assert result.score_breakdown.blood_type == 100
    assert result.score_breakdown.activity == 50
    assert result.score_breakdown.urgency == 'Medium'
    assert result.distance_km == pytest.approx(2.0)


def test_urgency_adds_unnormalised_weight():
    critical = score(2, patient=make_patient('O+', urgency_level='Critical'))
    low = score(2, patient=make_patient('O+', urgency_level='Low'))
    assert critical.match_score == pytest.approx(74.3 + 2.0, abs=0.05)
    assert low.match_score == pytest.approx(74.3 - 1.0, abs=0.05)
    assert critical.score_breakdown.urgency == 'Critical'


def test_unknown_urgency_falls_back_to_medium():
    result = score(2, patient=make_patient('O+', urgency_level=None))
    assert result.score_breakdown.urgency == 'Medium'
    assert result.match_score == score(2).match_score


def test_closer_donor_scores_higher():
    assert score(1).match_score > score(3).match_score > score(9).match_score


def test_score_never_exceeds_one_hundred():
    best = score(0, patient=make_patient('O+', urgency_level='Critical'), stats=ActivityStats(completed=10))
    assert best.match_score == 100.0


@pytest.mark.parametrize('km', [0, 0.37, 4.1, 12.5, 19.99])
@pytest.mark.parametrize('urgency', list(URGENCY_WEIGHTS))
def test_score_bounds_and_precision(km, urgency):
    result = score(km, patient=make_patient('AB+', urgency_level=urgency), blood_type='AB+')
    assert 0 <= result.match_score <= 100
    assert round(result.match_score, 1) == result.match_score


def test_incompatible_donor_gets_zero_blood_type_score():
    result = score(1, blood_type='A+', patient=make_patient('O-'))
    assert result.score_breakdown.blood_type == 0


def test_wire_shape():
    body = score(2).as_dict()
    assert set(body) == {
        '_id', 'name', 'email', 'phone', 'bloodType', 'location', 'availability',
        'badges', 'points', 'distanceKm', 'matchScore', 'scoreBreakdown',
    }
    assert set(body['scoreBreakdown']) == {'distance', 'bloodType', 'activity', 'urgency'}
    assert body['location']['type'] == 'Point'
