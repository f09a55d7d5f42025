import asyncio
import logging
import math

from asgiref.sync import async_to_sync
from django.conf import settings
from django.db import DatabaseError

from algorithms.blood_compatibility import resolve_compatibility
from algorithms.exceptions import InvalidRadius, MatchError, PatientNotFound, UpstreamTimeout
from algorithms.haversine import validate_location
from algorithms.ranking import rank
from algorithms.scoring import score_candidate
from donors.stores import DonationRequestStore, DonorStore, PatientStore

# Defaults, overridable through settings.LIFELINK_MATCHING
MATCHING_DEFAULTS = {
    'DEFAULT_RADIUS_KM': 50,
    'MAX_RADIUS_KM': 200,
    'RESULT_LIMIT': 20,
    'TIMEOUT_SECONDS': 5.0,
}

# Logger setup
logger = logging.getLogger(__name__)


def matching_setting(key):
    return getattr(settings, 'LIFELINK_MATCHING', {}).get(key, MATCHING_DEFAULTS[key])


def resolve_radius_meters(radius_km=None):
    """Requested radius in meters, defaulted when missing and capped at MAX_RADIUS_KM"""
    if radius_km is None:
        radius_km = matching_setting('DEFAULT_RADIUS_KM')
    try:
        radius_km = float(radius_km)
    except (TypeError, ValueError):
        raise InvalidRadius()
    if not math.isfinite(radius_km) or radius_km <= 0:
        raise InvalidRadius()
    radius_km = min(radius_km, float(matching_setting('MAX_RADIUS_KM')))
    return radius_km * 1000


async def find_match(patient_id, radius_km=None, name=None, blood_type=None, *,
                     patients=None, donors=None, requests=None, timeout=None, limit=None):
    """
    Find and rank compatible donors near a patient.

    Steps:
    1. Load the patient and resolve compatible donor types
    2. Locate eligible donors inside the (capped) radius
    3. Fetch every candidate's request history concurrently
    4. Score, sort and truncate

    Returns:
        List of ScoredCandidate, best first (possibly empty)

    Raises:
        InvalidRadius, PatientNotFound, InvalidBloodType, InvalidLocation,
        UpstreamTimeout, MatchError
    """
    if timeout is None:
        timeout = matching_setting('TIMEOUT_SECONDS')
    if limit is None:
        limit = matching_setting('RESULT_LIMIT')
    radius_meters = resolve_radius_meters(radius_km)

    try:
        return await asyncio.wait_for(
            _find_match(
                patient_id, radius_meters, name, blood_type,
                patients=patients or PatientStore(),
                donors=donors or DonorStore(),
                requests=requests or DonationRequestStore(),
                limit=limit,
            ),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        logger.warning(f"Matching for patient {patient_id} timed out after {timeout}s")
        raise UpstreamTimeout()
    except DatabaseError as exc:
        logger.exception(f"Database error while matching patient {patient_id}")
        raise MatchError() from exc


async def _find_match(patient_id, radius_meters, name, blood_type, *, patients, donors, requests, limit):
    patient = await patients.get(patient_id)
    if patient is None:
        raise PatientNotFound()

    compatibility = resolve_compatibility(patient.blood_type, blood_type)
    origin = validate_location(patient.coordinates)

    if compatibility.is_empty:
        # Filtered type can't donate to this patient
        logger.debug(f"Blood type {blood_type} incompatible with patient {patient_id} ({patient.blood_type})")
        return []

    candidates = await donors.find_candidates(
        origin, radius_meters, compatibility.effective_types, name=name
    )

    stats = await asyncio.gather(*(
        requests.activity_stats(candidate.donor.id) for candidate in candidates
    ))

    scored = [
        score_candidate(candidate, patient, radius_meters, donor_stats, compatibility)
        for candidate, donor_stats in zip(candidates, stats)
    ]
    ranked = rank(scored, limit=limit)

    logger.info(f"{len(ranked)} of {len(candidates)} donors matched for patient {patient_id}")
    return ranked


def find_match_sync(*args, **kwargs):
    """Blocking entry point for sync views and tasks"""
    return async_to_sync(find_match)(*args, **kwargs)
