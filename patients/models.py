# patients/models.py
from django.db import models

from algorithms.blood_compatibility import BLOOD_TYPE_CHOICES


class Patient(models.Model):
    URGENCY_CHOICES = [
        ('Critical', 'Critical - Life Threatening'),
        ('High', 'High - Within Hours'),
        ('Medium', 'Medium - Within 24 Hours'),
        ('Low', 'Low - Within 48 Hours'),
    ]

    name = models.CharField(max_length=200)
    email = models.EmailField(blank=True)
    blood_type = models.CharField(max_length=4, choices=BLOOD_TYPE_CHOICES)
    hospital = models.CharField(max_length=200, blank=True)

    # Geolocation
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)

    urgency_level = models.CharField(max_length=10, choices=URGENCY_CHOICES, default='Medium')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def coordinates(self):
        """[longitude, latitude] like a GeoJSON point"""
        return [self.longitude, self.latitude]

    @property
    def location(self):
        return {'type': 'Point', 'coordinates': self.coordinates}

    def __str__(self):
        return f"{self.name} ({self.blood_type}, {self.urgency_level})"

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Patient'
        verbose_name_plural = 'Patients'
