# donors/stores.py
"""
Read-only stores the matching pipeline queries.
Each read runs in a worker thread so independent reads can overlap.
"""
import functools
import logging

from asgiref.sync import sync_to_async
from django.db import connection
from django.db.models import Count, Q

from algorithms.haversine import bounding_box, find_nearby_donors
from algorithms.scoring import ActivityStats
from donors.models import Donor, DonationRequest
from patients.models import Patient

logger = logging.getLogger(__name__)


def in_worker_thread(func):
    """Run a blocking ORM read on a worker thread and release its connection afterwards"""

    def run_and_close(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        finally:
            connection.close()

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        return await sync_to_async(run_and_close, thread_sensitive=False)(*args, **kwargs)

    return wrapper


class PatientStore:

    @in_worker_thread
    def get(self, patient_id):
        try:
            return Patient.objects.get(pk=patient_id)
        except (Patient.DoesNotExist, ValueError, TypeError):
            return None


class DonorStore:

    def eligible_donors(self, eligible_types, name=None):
        queryset = Donor.objects.filter(
            blood_type__in=eligible_types,
            verified=True,
            otp_verified=True,
            availability=True,
            latitude__isnull=False,
            longitude__isnull=False,
        )
        if name:
            queryset = queryset.filter(name__icontains=name)
        return queryset

    @in_worker_thread
    def find_candidates(self, origin, radius_meters, eligible_types, name=None):
        """
        Donors within radius_meters of origin that pass every hard filter

        Returns:
            List of Candidate sorted by distance, then donor id
        """
        queryset = self.eligible_donors(eligible_types, name=name)

        min_lat, max_lat, min_lng, max_lng = bounding_box(origin, radius_meters)
        queryset = queryset.filter(latitude__gte=min_lat, latitude__lte=max_lat)
        if min_lng is not None:
            queryset = queryset.filter(longitude__gte=min_lng, longitude__lte=max_lng)

        candidates = find_nearby_donors(origin, list(queryset), radius_meters)
        logger.debug("%d donors within %.0fm of %s", len(candidates), radius_meters, origin)
        return candidates


class DonationRequestStore:

    @in_worker_thread
    def activity_stats(self, donor_id):
        counts = DonationRequest.objects.filter(donor_id=donor_id).aggregate(
            completed=Count('id', filter=Q(status=DonationRequest.STATUS_COMPLETED)),
            accepted=Count('id', filter=Q(status=DonationRequest.STATUS_ACCEPTED)),
            rejected=Count('id', filter=Q(status=DonationRequest.STATUS_REJECTED)),
        )
        return ActivityStats(**counts)
