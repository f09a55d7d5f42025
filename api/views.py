# api/views.py
import logging

from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status, viewsets
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from algorithms.exceptions import PatientNotFound
from api.serializers import (
    FindMatchQuerySerializer,
    PatientSerializer,
    ScoredCandidateSerializer,
    SendAlertSerializer,
)
from donors.matching import find_match_sync
from donors.models import Donor
from donors.tasks import send_donor_alert
from patients.models import Patient

logger = logging.getLogger(__name__)


class PatientViewSet(viewsets.ReadOnlyModelViewSet):
    """API endpoint for picking the patient to match for"""
    queryset = Patient.objects.all().order_by('-created_at')
    serializer_class = PatientSerializer
    permission_classes = [AllowAny]

    def get_queryset(self):
        queryset = super().get_queryset()
        blood_type = self.request.query_params.get('blood_type')
        if blood_type and blood_type != 'all':
            queryset = queryset.filter(blood_type=blood_type)
        return queryset


@api_view(['GET'])
@permission_classes([AllowAny])
def find_match(request):
    """
    Ranked compatible donors near a patient.
    An incompatible bloodType filter returns 200 with an empty list.
    """
    query = FindMatchQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    params = query.validated_data

    try:
        patient_id = int(params['patientId'])
    except ValueError:
        raise PatientNotFound()

    matches = find_match_sync(
        patient_id,
        radius_km=params.get('radiusKm'),
        name=params.get('name') or None,
        blood_type=params.get('bloodType') or None,
    )

    serializer = ScoredCandidateSerializer(matches, many=True)
    return Response(serializer.data, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([AllowAny])
def send_alert(request):
    """Queue an email/SMS alert to a matched donor"""
    payload = SendAlertSerializer(data=request.data)
    payload.is_valid(raise_exception=True)

    donor = get_object_or_404(Donor, id=payload.validated_data['donorId'])
    patient = get_object_or_404(Patient, id=payload.validated_data['patientId'])

    send_donor_alert.delay(donor.id, patient.id)
    logger.info(f"Alert queued for donor {donor.id} → patient {patient.id}")

    return Response(
        {'message': 'Alert queued, the request will be tracked once the email is sent'},
        status=status.HTTP_202_ACCEPTED,
    )


@api_view(['GET'])
@permission_classes([AllowAny])
def health(request):
    return Response({'status': 'UP', 'timestamp': timezone.now().isoformat()})
