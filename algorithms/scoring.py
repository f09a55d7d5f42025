# algorithms/scoring.py
"""
Weighted donor scoring

Criteria:
1. Distance (exponential decay inside the search radius)
2. Blood type (scarcity weight of the donor's type)
3. Activity (completion rate of past donation requests)
4. Urgency (patient urgency multiplier)
"""
import math
from dataclasses import dataclass, field
from typing import NamedTuple

DISTANCE_WEIGHT = 0.4
BLOOD_TYPE_WEIGHT = 0.3
ACTIVITY_WEIGHT = 0.2
URGENCY_WEIGHT = 0.1

DEFAULT_URGENCY = 'Medium'

URGENCY_WEIGHTS = {
    'Critical': 1.2,
    'High': 1.1,
    'Medium': 1.0,
    'Low': 0.9,
}

MAX_SCORE = 100.0


class ActivityStats(NamedTuple):
    """Donation request counts for one donor"""
    completed: int = 0
    accepted: int = 0
    rejected: int = 0

    @property
    def responded(self):
        return self.completed + self.accepted + self.rejected


@dataclass(frozen=True)
class ScoreBreakdown:
    distance: int
    blood_type: int
    activity: int
    urgency: str

    def as_dict(self):
        return {
            'distance': self.distance,
            'bloodType': self.blood_type,
            'activity': self.activity,
            'urgency': self.urgency,
        }


@dataclass(frozen=True)
class ScoredCandidate:
    id: object
    name: str
    email: str
    phone: str
    blood_type: str
    location: dict
    availability: bool
    distance_meters: float
    distance_km: float
    match_score: float
    score_breakdown: ScoreBreakdown
    badges: list = field(default_factory=list)
    points: int = 0

    def as_dict(self):
        return {
            '_id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'bloodType': self.blood_type,
            'location': self.location,
            'availability': self.availability,
            'badges': self.badges,
            'points': self.points,
            'distanceKm': self.distance_km,
            'matchScore': self.match_score,
            'scoreBreakdown': self.score_breakdown.as_dict(),
        }


def distance_score(distance_km, radius_meters):
    """
    Exponential decay: 1.0 at the origin, small but positive at the radius
    """
    scale_km = radius_meters / 1000 / 10
    return math.exp(-0.5 * distance_km / scale_km)


def blood_type_score(donor_blood_type, compatibility):
    """Table weight of the donor's type, 0 if not compatible with the patient"""
    return compatibility.weight_for(donor_blood_type)


def activity_score(stats):
    """
    0.5 + 0.5 * completion rate. Donors with no responded requests get
    the neutral 0.5.
    """
    if stats is None or stats.responded <= 0:
        return 0.5
    response_rate = stats.completed / stats.responded
    return min(1.0, max(0.0, 0.5 + 0.5 * response_rate))


def as_percent(component):
    """Whole percent, halves rounded up"""
    return int(component * 100 + 0.5)


def urgency_label(urgency_level):
    return urgency_level if urgency_level in URGENCY_WEIGHTS else DEFAULT_URGENCY


def score_candidate(candidate, patient, radius_meters, stats, compatibility) -> ScoredCandidate:
    """
    Score one located donor for a patient

    Args:
        candidate: Candidate(donor, distance_meters) from the locator
        patient: Patient with blood_type and urgency_level
        radius_meters: Effective search radius used for the query
        stats: ActivityStats for the donor
        compatibility: Compatibility resolved for the patient

    Returns:
        ScoredCandidate with match_score in [0, 100] (one decimal place)
    """
    donor = candidate.donor
    distance_km = candidate.distance_meters / 1000
    urgency = urgency_label(getattr(patient, 'urgency_level', None))

    distance = distance_score(distance_km, radius_meters)
    blood_type = blood_type_score(donor.blood_type, compatibility)
    activity = activity_score(stats)

    # Urgency multiplier is added un-normalised on top of the other three
    raw = (
        distance * DISTANCE_WEIGHT +
        blood_type * BLOOD_TYPE_WEIGHT +
        activity * ACTIVITY_WEIGHT +
        URGENCY_WEIGHTS[urgency] * URGENCY_WEIGHT
    ) * 100
    match_score = round(min(MAX_SCORE, max(0.0, raw)), 1)

    return ScoredCandidate(
        id=donor.id,
        name=donor.name,
        email=donor.email,
        phone=donor.phone,
        blood_type=donor.blood_type,
        location={'type': 'Point', 'coordinates': [donor.longitude, donor.latitude]},
        availability=donor.availability,
        badges=list(donor.badges or []),
        points=donor.points,
        distance_meters=candidate.distance_meters,
        distance_km=distance_km,
        match_score=match_score,
        score_breakdown=ScoreBreakdown(
            distance=as_percent(distance),
            blood_type=as_percent(blood_type),
            activity=as_percent(activity),
            urgency=urgency,
        ),
    )
