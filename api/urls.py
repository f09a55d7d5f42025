# api/urls.py

from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'patients', views.PatientViewSet, basename='patient')

app_name = 'api'

urlpatterns = [
    path('', include(router.urls)),

    path('find-match/', views.find_match, name='find-match'),
    path('send-alert/', views.send_alert, name='send-alert'),
    path('health/', views.health, name='health'),
]

# Available endpoints:
# GET  /api/patients/                    - List patients
# GET  /api/patients/{id}/               - Get specific patient
# GET  /api/find-match/?patientId=...    - Ranked compatible donors
# POST /api/send-alert/                  - Alert a donor about a patient
# GET  /api/health/                      - Liveness check
