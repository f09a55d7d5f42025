from django.contrib import admin
from django.utils import timezone
from .models import Donor, DonationRequest

POINTS_PER_DONATION = 50


@admin.register(Donor)
class DonorAdmin(admin.ModelAdmin):
    list_display   = ['name', 'blood_type', 'points', 'verified', 'otp_verified', 'availability', 'is_eligible_display']
    list_filter    = ['blood_type', 'availability', 'verified', 'otp_verified']
    search_fields  = ['name', 'email', 'phone']
    ordering       = ['-points']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Personal Info', {
            'fields': ('name', 'email', 'phone', 'blood_type')
        }),
        ('Location', {
            'fields': ('latitude', 'longitude')
        }),
        ('Verification', {
            'fields': ('verified', 'otp_verified', 'availability')
        }),
        ('Gamification', {
            'fields': ('points', 'badges'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    @admin.display(boolean=True, description='Can Be Matched')
    def is_eligible_display(self, obj):
        return obj.is_eligible

    actions = ['award_points_manually']

    @admin.action(description='Award 50 points to selected donors')
    def award_points_manually(self, request, queryset):
        updated = 0
        for donor in queryset:
            donor.points += POINTS_PER_DONATION
            donor.save(update_fields=['points'])
            updated += 1
        self.message_user(request, f'Awarded {POINTS_PER_DONATION} points to {updated} donor(s).')


@admin.register(DonationRequest)
class DonationRequestAdmin(admin.ModelAdmin):
    list_display  = ['donor', 'patient', 'status', 'requested_at', 'responded_at', 'completed_at']
    list_filter   = ['status']
    search_fields = ['donor__name', 'patient__name']
    ordering      = ['-requested_at']
    readonly_fields = ['requested_at']

    actions = ['mark_completed']

    @admin.action(description='Mark selected requests as Completed')
    def mark_completed(self, request, queryset):
        now = timezone.now()
        updated = queryset.exclude(status=DonationRequest.STATUS_COMPLETED).update(
            status=DonationRequest.STATUS_COMPLETED,
            completed_at=now,
        )
        self.message_user(request, f'{updated} request(s) marked as completed.')
