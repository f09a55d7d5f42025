import pytest
from asgiref.sync import async_to_sync

from algorithms.scoring import ActivityStats
from donors.matching import find_match_sync
from donors.stores import DonationRequestStore, DonorStore, PatientStore
from tests.conftest import ORIGIN
from tests.factories import create_donor, create_patient, create_requests

# Store reads run on worker threads, which only see committed rows
pytestmark = pytest.mark.django_db(transaction=True)

O_POSITIVE_DONORS = ('O+', 'O-')


def find(radius_meters=20_000, eligible_types=O_POSITIVE_DONORS, name=None):
    return async_to_sync(DonorStore().find_candidates)(ORIGIN, radius_meters, eligible_types, name=name)


def test_patient_store_lookup():
    patient = create_patient()
    store = PatientStore()
    assert async_to_sync(store.get)(patient.id) == patient
    assert async_to_sync(store.get)(patient.id + 100) is None
    assert async_to_sync(store.get)('not-an-id') is None


def test_donor_store_applies_hard_filters():
    eligible = create_donor('O-', km=2)
    create_donor('A+', km=1)
    create_donor('O-', km=1, verified=False)
    create_donor('O+', km=1, otp_verified=False)
    create_donor('O+', km=1, availability=False)
    create_donor('O+', km=1, latitude=None, longitude=None)

    candidates = find()
    assert [c.donor.id for c in candidates] == [eligible.id]
    assert candidates[0].distance_meters == pytest.approx(2000, rel=1e-6)


def test_donor_store_radius_and_order():
    far = create_donor('O+', km=15)
    near = create_donor('O-', km=3)
    create_donor('O-', km=25)
    assert [c.donor.id for c in find()] == [near.id, far.id]


def test_donor_store_name_filter():
    priya = create_donor('O+', km=3, name='Priya Sharma')
    create_donor('O-', km=2, name='Ramesh')
    assert [c.donor.id for c in find(name='pRiYa')] == [priya.id]
    assert find(name='nobody') == []


def test_activity_stats_counts_by_status():
    patient = create_patient()
    donor = create_donor()
    create_requests(donor, patient, completed=3, accepted=1, rejected=2, pending=4, cancelled=1)

    stats = async_to_sync(DonationRequestStore().activity_stats)(donor.id)
    assert stats == ActivityStats(completed=3, accepted=1, rejected=2)


def test_activity_stats_without_history():
    donor = create_donor()
    assert async_to_sync(DonationRequestStore().activity_stats)(donor.id) == ActivityStats()


def test_end_to_end_o_positive_patient():
    patient = create_patient('O+', coordinates=(77.59, 12.97))
    o_negative = create_donor('O-', km=2)
    create_donor('A+', km=1)

    result = find_match_sync(patient.id, radius_km=20)
    assert [c.id for c in result] == [o_negative.id]
    assert result[0].match_score == 74.3
    assert result[0].score_breakdown.activity == 50


def test_end_to_end_radius_cap():
    patient = create_patient('AB+')
    inside = create_donor('B+', km=190)
    create_donor('B+', km=210)
    assert [c.id for c in find_match_sync(patient.id, radius_km=10_000)] == [inside.id]
