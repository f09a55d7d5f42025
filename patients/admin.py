# patients/admin.py
from django.contrib import admin
from .models import Patient


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'blood_type', 'urgency_level', 'hospital', 'request_count', 'created_at']
    list_filter = ['urgency_level', 'blood_type', 'created_at']
    search_fields = ['name', 'email', 'hospital']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Patient Information', {
            'fields': ('name', 'email', 'blood_type', 'urgency_level', 'hospital')
        }),
        ('Location', {
            'fields': ('latitude', 'longitude')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    @admin.display(description='Donation Requests')
    def request_count(self, obj):
        return obj.donation_requests.count()
