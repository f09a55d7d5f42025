# donors/tasks.py
"""
Celery tasks for donor alerts
"""
import logging

from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail

from donors.models import Donor, DonationRequest
from patients.models import Patient

logger = logging.getLogger(__name__)


@shared_task
def send_donor_alert(donor_id, patient_id):
    """
    Alert a matched donor about a patient.
    Sends the email, logs the SMS payload and, when the email went out,
    tracks the request as Pending.
    """
    try:
        donor = Donor.objects.get(id=donor_id)
        patient = Patient.objects.get(id=patient_id)
    except (Donor.DoesNotExist, Patient.DoesNotExist):
        logger.warning(f"Alert skipped: donor {donor_id} or patient {patient_id} not found")
        return None

    email_sent = send_alert_email(donor, patient)

    # SMS gateway not wired up yet, payload is only logged
    logger.info(f"SMS to {donor.phone or 'N/A'}: URGENT: LifeLink match for patient {patient.name}.")

    if not email_sent:
        return None

    donation_request = DonationRequest.objects.create(
        patient=patient,
        donor=donor,
        status=DonationRequest.STATUS_PENDING,
    )
    logger.info(f"Donation request {donation_request.id} tracked for donor {donor.id} → patient {patient.id}")
    return donation_request.id


def send_alert_email(donor, patient):
    """Send the alert email, returning True on success"""
    message = f"""
URGENT BLOOD NEEDED

Dear {donor.name},

A patient near you needs blood and you are a compatible match.

Patient: {patient.name}
Blood Type Needed: {patient.blood_type}
Urgency: {patient.urgency_level}
Hospital: {patient.hospital or 'N/A'}

Please log in to LifeLink to respond: {settings.SITE_URL}

Thank you for being a lifesaver!
LifeLink
    """.strip()

    try:
        send_mail(
            subject=f"URGENT: {patient.blood_type} blood needed - LifeLink",
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[donor.email],
            fail_silently=False,
        )
    except Exception:
        logger.exception(f"Alert email to donor {donor.id} failed")
        return False

    logger.info(f"Alert email sent to {donor.name}")
    return True
