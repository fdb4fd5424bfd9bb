import pytest

from gallery_api.services.access_gate import status_for


def usage(store, code):
    record = store.lookup(code).record
    return record.current_uses, record.is_active


def test_welcome_code_walkthrough(store, gate):
    store.create_code('WELCOME1', description='Launch week', max_uses=2)

    preview = gate.validate('welcome1')
    assert preview['valid'] is True
    assert preview['code'] == 'WELCOME1'
    assert preview['description'] == 'Launch week'
    assert preview['remainingUses'] == 2

    first = gate.consume('WELCOME1')
    assert first['success'] is True
    assert first['remainingUses'] == 1

    second = gate.consume('Welcome1')
    assert second['success'] is True
    assert second['remainingUses'] == 0
    assert usage(store, 'WELCOME1') == (2, False)

    third = gate.consume('WELCOME1')
    assert third['success'] is False
    assert third['reason'] == 'exhausted'


def test_validate_never_changes_usage(store, gate):
    store.create_code('PREVIEWED', max_uses=3)
    store.create_code('UNTOUCHED', max_uses=3)

    for _ in range(5):
        assert gate.validate(' previewed ')['valid'] is True

    gate.consume('PREVIEWED')
    gate.consume('UNTOUCHED')

    assert usage(store, 'PREVIEWED') == usage(store, 'UNTOUCHED') == (1, True)


@pytest.mark.parametrize('setup, reason, message', [
    ({}, 'not_found', 'Invalid access code'),
    ({'is_active': False}, 'inactive', 'This access code is no longer active'),
])
def test_validate_rejections(store, gate, setup, reason, message):
    if setup:
        store.create_code('CODE', max_uses=2, **setup)

    outcome = gate.validate('code')

    assert outcome == {'valid': False, 'reason': reason, 'message': message}


def test_validate_reports_spent_code_as_exhausted(store, gate):
    store.create_code('SPENT', max_uses=1)
    gate.consume('SPENT')

    outcome = gate.validate('SPENT')

    assert outcome['valid'] is False
    assert outcome['reason'] == 'exhausted'
    assert outcome['message'] == 'This access code has reached its maximum usage limit'


@pytest.mark.parametrize('raw', ['', '   ', None])
def test_missing_code_is_rejected_before_lookup(gate, raw):
    assert gate.validate(raw)['reason'] == 'invalid'
    assert gate.consume(raw)['reason'] == 'invalid'


def test_deleted_code_is_not_found(store, gate):
    access_code = store.create_code('GONE', max_uses=2)
    store.delete_code(access_code.id)

    assert gate.validate('GONE')['reason'] == 'not_found'
    assert gate.consume('GONE')['reason'] == 'not_found'


def test_status_mapping_distinguishes_not_found():
    assert status_for({'reason': 'not_found'}) == 404
    assert status_for({'reason': 'inactive'}) == 400
    assert status_for({'reason': 'exhausted'}) == 400
    assert status_for({'reason': 'invalid'}) == 400
