import asyncio
import itertools
import math
from types import SimpleNamespace

import pytest

from algorithms.haversine import EARTH_RADIUS_KM, find_nearby_donors
from algorithms.scoring import ActivityStats

KM_PER_DEGREE = EARTH_RADIUS_KM * math.pi / 180

# Bengaluru
ORIGIN = (77.59, 12.97)

_ids = itertools.count(1)


def north_of(origin, km):
    """(lng, lat) of a point `km` due north of origin"""
    lng, lat = origin
    return lng, lat + km / KM_PER_DEGREE


def make_donor(blood_type='O-', km=1.0, name=None, verified=True, otp_verified=True,
               availability=True, points=0, badges=None, origin=ORIGIN, donor_id=None):
    donor_id = donor_id or next(_ids)
    lng, lat = north_of(origin, km)
    return SimpleNamespace(
        id=donor_id,
        name=name or f'Donor {donor_id}',
        email=f'donor{donor_id}@example.com',
        phone=f'98000{donor_id:05d}',
        blood_type=blood_type,
        latitude=lat,
        longitude=lng,
        verified=verified,
        otp_verified=otp_verified,
        availability=availability,
        points=points,
        badges=badges or [],
    )


def make_patient(blood_type='O+', urgency_level='Medium', coordinates=ORIGIN, patient_id=1):
    return SimpleNamespace(
        id=patient_id,
        name='Test Patient',
        blood_type=blood_type,
        urgency_level=urgency_level,
        coordinates=list(coordinates),
    )


class FakePatientStore:

    def __init__(self, *patients):
        self.patients = {p.id: p for p in patients}

    async def get(self, patient_id):
        return self.patients.get(patient_id)


class FakeDonorStore:
    """In-memory donor pool honouring the same hard filters as the ORM store"""

    def __init__(self, *donors):
        self.donors = list(donors)
        self.calls = []

    async def find_candidates(self, origin, radius_meters, eligible_types, name=None):
        self.calls.append((origin, radius_meters, tuple(eligible_types), name))
        pool = [
            d for d in self.donors
            if d.blood_type in eligible_types
            and d.verified and d.otp_verified and d.availability
            and (not name or name.lower() in d.name.lower())
        ]
        return find_nearby_donors(origin, pool, radius_meters)


class FakeRequestStore:

    def __init__(self, stats=None, delay=0.0):
        self.stats = stats or {}
        self.delay = delay
        self.requested = []

    async def activity_stats(self, donor_id):
        self.requested.append(donor_id)
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.stats.get(donor_id, ActivityStats())


@pytest.fixture
def patient():
    return make_patient()


@pytest.fixture
def stores(patient):
    def build(*donors, stats=None, delay=0.0, patients=None):
        return {
            'patients': FakePatientStore(*(patients or [patient])),
            'donors': FakeDonorStore(*donors),
            'requests': FakeRequestStore(stats=stats, delay=delay),
        }
    return build
