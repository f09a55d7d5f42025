# api/serializers.py

from rest_framework import serializers

from patients.models import Patient


class FindMatchQuerySerializer(serializers.Serializer):
    """
    Query parameters for GET /api/find-match/
    """
    patientId = serializers.CharField()
    radiusKm = serializers.FloatField(required=False)
    name = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)
    # Any string is accepted; types outside the patient's set just match nothing
    bloodType = serializers.CharField(required=False, allow_blank=True)

    def validate_radiusKm(self, value):
        if value <= 0:
            raise serializers.ValidationError('Radius must be greater than 0.')
        return value

    def validate_bloodType(self, value):
        return value.strip().upper()


class SendAlertSerializer(serializers.Serializer):
    donorId = serializers.IntegerField()
    patientId = serializers.IntegerField()


class ScoredCandidateSerializer(serializers.BaseSerializer):
    """
    Read-only wire shape of a ScoredCandidate
    """

    def to_representation(self, instance):
        return instance.as_dict()


class PatientSerializer(serializers.ModelSerializer):
    """
    Serializer for Patient with the GeoJSON location the front end expects
    """
    bloodType = serializers.CharField(source='blood_type', read_only=True)
    urgencyLevel = serializers.CharField(source='urgency_level', read_only=True)
    location = serializers.JSONField(read_only=True)

    class Meta:
        model = Patient
        fields = [
            'id',
            'name',
            'email',
            'bloodType',
            'urgencyLevel',
            'hospital',
            'location',
            'created_at',
            'updated_at',
        ]
