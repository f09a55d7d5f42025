"""
Blood Type Compatibility Helper
Determines which donor blood types can donate to which recipient blood types
"""
from dataclasses import dataclass
from types import MappingProxyType

from algorithms.exceptions import InvalidBloodType

BLOOD_TYPES = ('A+', 'A-', 'B+', 'B-', 'AB+', 'AB-', 'O+', 'O-')

BLOOD_TYPE_CHOICES = [(blood_type, blood_type) for blood_type in BLOOD_TYPES]

# Recipient type -> donor types it can receive from
RECEIVES_FROM = {
    'A+': ('A+', 'A-', 'O+', 'O-'),
    'A-': ('A-', 'O-'),
    'B+': ('B+', 'B-', 'O+', 'O-'),
    'B-': ('B-', 'O-'),
    'AB+': ('A+', 'A-', 'B+', 'B-', 'AB+', 'AB-', 'O+', 'O-'),  # Universal recipient
    'AB-': ('A-', 'B-', 'AB-', 'O-'),
    'O+': ('O+', 'O-'),
    'O-': ('O-',),
}

# Donor type -> scarcity/priority weight (0.5 - 1.0)
DONOR_WEIGHTS = {
    'O-': 1.0,  # Universal donor
    'O+': 0.9,
    'A-': 0.8,
    'B-': 0.8,
    'A+': 0.7,
    'B+': 0.7,
    'AB-': 0.6,
    'AB+': 0.5,
}


class CompatibilityTable:
    """
    Immutable lookup of donor compatibility and per-donor-type weights.
    Built once and shared by every match request.
    """

    def __init__(self, receives_from, weights):
        self._receives_from = MappingProxyType({
            recipient: tuple(donors) for recipient, donors in receives_from.items()
        })
        self._weights = MappingProxyType(dict(weights))

    def __contains__(self, blood_type):
        return blood_type in self._receives_from

    def donors_for(self, recipient_blood_type):
        return self._receives_from.get(recipient_blood_type, ())

    def weight_for(self, donor_blood_type):
        return self._weights.get(donor_blood_type, 0.0)

    def recipients_for(self, donor_blood_type):
        return tuple(
            recipient for recipient, donors in self._receives_from.items()
            if donor_blood_type in donors
        )


DEFAULT_TABLE = CompatibilityTable(RECEIVES_FROM, DONOR_WEIGHTS)


@dataclass(frozen=True)
class Compatibility:
    patient_blood_type: str
    eligible_types: tuple
    effective_types: tuple
    table: CompatibilityTable = DEFAULT_TABLE

    @property
    def is_empty(self):
        """True when an explicit filter ruled out every donor type"""
        return not self.effective_types

    def weight_for(self, donor_blood_type):
        if donor_blood_type not in self.eligible_types:
            return 0.0
        return self.table.weight_for(donor_blood_type)


def resolve_compatibility(patient_blood_type, explicit_filter=None, table=DEFAULT_TABLE) -> Compatibility:
    """
    Work out which donor types may be queried for a patient

    Args:
        patient_blood_type: Patient's stored blood type (e.g. 'O+')
        explicit_filter: Optional blood type the caller wants to narrow to
        table: Compatibility table to resolve against

    Returns:
        Compatibility with eligible_types (everything compatible) and
        effective_types (what should actually be queried). effective_types
        is empty when the filter is not compatible with the patient.

    Raises:
        InvalidBloodType: patient_blood_type is not one of the 8 ABO/Rh types
    """
    if patient_blood_type not in table:
        raise InvalidBloodType(f'Invalid patient blood type: {patient_blood_type!r}')

    eligible_types = table.donors_for(patient_blood_type)

    if explicit_filter:
        effective_types = (explicit_filter,) if explicit_filter in eligible_types else ()
    else:
        effective_types = eligible_types

    return Compatibility(
        patient_blood_type=patient_blood_type,
        eligible_types=eligible_types,
        effective_types=effective_types,
        table=table,
    )


def is_compatible(donor_blood_type, recipient_blood_type):
    """
    Check if donor blood type is compatible with recipient

    Args:
        donor_blood_type: Donor's blood type (e.g., 'O+')
        recipient_blood_type: Recipient's blood type (e.g., 'A+')

    Returns:
        Boolean: True if compatible, False otherwise
    """
    return donor_blood_type in DEFAULT_TABLE.donors_for(recipient_blood_type)


def get_compatible_donors(recipient_blood_type):
    """List of blood types that can donate to recipient"""
    return list(DEFAULT_TABLE.donors_for(recipient_blood_type))


def get_compatible_recipients(donor_blood_type):
    """List of blood types that can receive from donor"""
    return list(DEFAULT_TABLE.recipients_for(donor_blood_type))
