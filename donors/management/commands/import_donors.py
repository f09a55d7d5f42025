# donors/management/commands/import_donors.py
"""
Django management command to import donor data from CSV or Excel
Usage: python manage.py import_donors path/to/donors.xlsx [--verified]
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
import pandas as pd

from algorithms.blood_compatibility import BLOOD_TYPES
from algorithms.exceptions import InvalidLocation
from algorithms.haversine import validate_location
from donors.models import Donor

TRUE_VALUES = {'1', 'true', 'yes', 'y'}


def as_bool(value, default=False):
    if pd.isna(value):
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


def parse_points(value):
    """Non-negative integer points, 0 when blank, None when unusable"""
    if pd.isna(value):
        return 0
    try:
        points = int(value)
    except (TypeError, ValueError):
        return None
    return points if points >= 0 else None


def read_table(path):
    if str(path).lower().endswith(('.xlsx', '.xls')):
        return pd.read_excel(path, dtype={'phone': str})
    return pd.read_csv(path, dtype={'phone': str})


class Command(BaseCommand):
    help = 'Import donors from a CSV or Excel file'

    def add_arguments(self, parser):
        parser.add_argument('path', type=str, help='Path to the CSV/Excel file')
        parser.add_argument(
            '--verified',
            action='store_true',
            help='Mark imported donors as verified and OTP verified when the file has no such columns',
        )

    def handle(self, *args, **options):
        path = options['path']

        self.stdout.write(self.style.WARNING(f'Starting import from {path}...'))

        try:
            df = read_table(path)
        except FileNotFoundError:
            raise CommandError(f'File not found: {path}')

        self.stdout.write(f'Found {len(df)} rows')

        missing = {'name', 'email'} - set(df.columns)
        if missing:
            raise CommandError(f'Missing required columns: {", ".join(sorted(missing))}')

        # Remove rows with missing critical data
        df = df.dropna(subset=['name', 'email'])

        imported_count = 0
        updated_count = 0
        skipped_count = 0

        with transaction.atomic():
            for index, row in df.iterrows():
                line = index + 2
                blood_type = str(row.get('blood_type', row.get('blood_group', ''))).strip().upper()
                if blood_type not in BLOOD_TYPES:
                    self.stdout.write(self.style.WARNING(f'Skipping row {line}: Invalid blood type {blood_type!r}'))
                    skipped_count += 1
                    continue

                latitude = row.get('latitude')
                longitude = row.get('longitude')
                if pd.notna(latitude) and pd.notna(longitude):
                    try:
                        longitude, latitude = validate_location([float(longitude), float(latitude)])
                    except (InvalidLocation, ValueError):
                        self.stdout.write(self.style.WARNING(f'Skipping row {line}: Invalid coordinates'))
                        skipped_count += 1
                        continue
                else:
                    latitude = longitude = None

                points = parse_points(row.get('points'))
                if points is None:
                    self.stdout.write(self.style.WARNING(f'Skipping row {line}: Invalid points {row.get("points")!r}'))
                    skipped_count += 1
                    continue

                phone = row.get('phone', '')

                donor, created = Donor.objects.update_or_create(
                    email=str(row['email']).strip().lower(),
                    defaults={
                        'name': str(row['name']).strip(),
                        'phone': '' if pd.isna(phone) else str(phone).strip(),
                        'blood_type': blood_type,
                        'latitude': latitude,
                        'longitude': longitude,
                        'verified': as_bool(row.get('verified'), options['verified']),
                        'otp_verified': as_bool(row.get('otp_verified'), options['verified']),
                        'availability': as_bool(row.get('availability'), True),
                        'points': points,
                    }
                )

                if created:
                    imported_count += 1
                    self.stdout.write(f'Created: {donor.name} ({donor.blood_type})')
                else:
                    updated_count += 1
                    self.stdout.write(f'Updated: {donor.name} ({donor.blood_type})')

        self.stdout.write(
            self.style.SUCCESS(
                f'\nImport complete!\n'
                f'Created: {imported_count}\n'
                f'Updated: {updated_count}\n'
                f'Skipped: {skipped_count}'
            )
        )
