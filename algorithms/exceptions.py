"""
Matching errors
Rendered by Django REST Framework as {"detail": ...} with the status below
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class MatchError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Server error finding matches'
    default_code = 'match_error'


class PatientNotFound(MatchError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Patient not found'
    default_code = 'patient_not_found'


class InvalidBloodType(MatchError):
    # Stored data is outside the 8 ABO/Rh types: a server-side problem
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Invalid patient blood type'
    default_code = 'invalid_blood_type'


class InvalidLocation(MatchError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid location coordinates'
    default_code = 'invalid_location'


class UpstreamTimeout(MatchError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Matching timed out, please retry'
    default_code = 'upstream_timeout'


class InvalidRadius(MatchError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Search radius must be a positive number of kilometers'
    default_code = 'invalid_radius'
