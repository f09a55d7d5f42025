import pytest

from algorithms.blood_compatibility import (
    BLOOD_TYPES,
    DEFAULT_TABLE,
    get_compatible_donors,
    get_compatible_recipients,
    is_compatible,
    resolve_compatibility,
)
from algorithms.exceptions import InvalidBloodType


@pytest.mark.parametrize('recipient', BLOOD_TYPES)
def test_o_negative_donates_to_everyone(recipient):
    assert 'O-' in get_compatible_donors(recipient)


def test_ab_positive_receives_from_all_types():
    assert set(get_compatible_donors('AB+')) == set(BLOOD_TYPES)


def test_o_negative_receives_only_o_negative():
    assert get_compatible_donors('O-') == ['O-']


def test_recipients_mirror_donors():
    for donor in BLOOD_TYPES:
        for recipient in get_compatible_recipients(donor):
            assert is_compatible(donor, recipient)
    assert set(get_compatible_recipients('O-')) == set(BLOOD_TYPES)
    assert get_compatible_recipients('AB+') == ['AB+']


def test_is_compatible_rejects_unknown_types():
    assert not is_compatible('X+', 'A+')
    assert not is_compatible('A+', 'X+')


def test_resolve_without_filter_uses_full_set():
    result = resolve_compatibility('O+')
    assert set(result.eligible_types) == {'O+', 'O-'}
    assert result.effective_types == result.eligible_types
    assert not result.is_empty


def test_resolve_narrows_to_compatible_filter():
    result = resolve_compatibility('A+', 'O-')
    assert result.effective_types == ('O-',)
    assert set(result.eligible_types) == {'A+', 'A-', 'O+', 'O-'}


def test_resolve_incompatible_filter_is_empty_not_error():
    result = resolve_compatibility('A-', 'B+')
    assert result.is_empty
    assert result.effective_types == ()


def test_resolve_unknown_filter_is_empty():
    assert resolve_compatibility('AB+', 'Z-').is_empty


def test_resolve_invalid_patient_type_raises():
    with pytest.raises(InvalidBloodType):
        resolve_compatibility('C+')


def test_weights_are_zero_outside_patient_set():
    result = resolve_compatibility('O+')
    assert result.weight_for('O-') == 1.0
    assert result.weight_for('O+') == 0.9
    assert result.weight_for('AB+') == 0.0


def test_weights_span_half_to_one():
    weights = [DEFAULT_TABLE.weight_for(t) for t in BLOOD_TYPES]
    assert min(weights) == 0.5
    assert max(weights) == 1.0
    assert DEFAULT_TABLE.weight_for('AB+') == 0.5


def test_table_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_TABLE._receives_from['O-'] = ('A+',)
