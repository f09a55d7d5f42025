from django.db import models

from algorithms.blood_compatibility import BLOOD_TYPE_CHOICES


# ---------------------------
# Donor
# ---------------------------
class Donor(models.Model):
    name = models.CharField(max_length=200)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=20, blank=True, db_index=True)
    blood_type = models.CharField(max_length=4, choices=BLOOD_TYPE_CHOICES)

    # Geolocation
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)

    # Verification (both required before a donor can be matched)
    verified = models.BooleanField(default=False)
    otp_verified = models.BooleanField(default=False)
    availability = models.BooleanField(default=True)

    # Gamification
    points = models.PositiveIntegerField(default=0)
    badges = models.JSONField(default=list, blank=True)  # [{"name": ..., "description": ...}]

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def is_eligible(self) -> bool:
        return self.verified and self.otp_verified and self.availability

    @property
    def location(self):
        return {'type': 'Point', 'coordinates': [self.longitude, self.latitude]}

    def __str__(self):
        return f"{self.name} ({self.blood_type})"

    class Meta:
        verbose_name = "Donor"
        verbose_name_plural = "Donors"
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['blood_type', 'availability'], name='donor_blood_avail_idx'),
            models.Index(fields=['latitude', 'longitude'], name='donor_lat_lng_idx'),
        ]


class DonationRequest(models.Model):
    STATUS_PENDING = 'Pending'
    STATUS_ACCEPTED = 'Accepted'
    STATUS_REJECTED = 'Rejected'
    STATUS_COMPLETED = 'Completed'
    STATUS_CANCELLED = 'Cancelled'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_ACCEPTED, 'Accepted'),
        (STATUS_REJECTED, 'Rejected'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]

    patient = models.ForeignKey(
        'patients.Patient',
        on_delete=models.CASCADE,
        related_name='donation_requests'
    )
    donor = models.ForeignKey(
        Donor,
        on_delete=models.CASCADE,
        related_name='donation_requests'
    )

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING)
    requested_at = models.DateTimeField(auto_now_add=True)
    responded_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    def __str__(self):
        return f"{self.donor.name} → {self.patient.name} | {self.status}"

    class Meta:
        ordering = ['-requested_at']
        indexes = [
            models.Index(fields=['donor', 'status'], name='donation_req_donor_status_idx'),
        ]
