"""
Access gate between untrusted registration input and the access code store
"""
from gallery_api.models.access_code import canonicalize_code
from gallery_api.services.access_code_store import AccessCodeStore, ConsumptionError
from gallery_api.services.metrics_service import MetricsService

MISSING_CODE_REASON = 'invalid'

REJECTION_MESSAGES = {
    ConsumptionError.NOT_FOUND: 'Invalid access code',
    ConsumptionError.INACTIVE: 'This access code is no longer active',
    ConsumptionError.EXHAUSTED: 'This access code has reached its maximum usage limit',
}


def status_for(outcome):
    """HTTP status for a rejected validate/consume outcome"""
    return 404 if outcome.get('reason') == ConsumptionError.NOT_FOUND.value else 400


class AccessGate:
    """
    Validate and consume access codes on behalf of registration.

    validate() is a read-only preview that may be called on every keystroke;
    it reserves nothing. consume() is the only registration path that changes
    a code's usage.
    """

    def __init__(self, store=None):
        self.store = store or AccessCodeStore()

    @staticmethod
    def _rejected(flag, error):
        return {
            flag: False,
            'reason': error.value,
            'message': REJECTION_MESSAGES[error]
        }

    @staticmethod
    def _missing(flag):
        return {
            flag: False,
            'reason': MISSING_CODE_REASON,
            'message': 'Access code is required'
        }

    def validate(self, raw_code):
        if not canonicalize_code(raw_code):
            return self._missing('valid')

        lookup = self.store.lookup(raw_code)
        if lookup.error is not None:
            return self._rejected('valid', lookup.error)

        record = lookup.record
        return {
            'valid': True,
            'message': 'Access code is valid',
            'code': record.code,
            'description': record.description,
            'remainingUses': record.remaining_uses
        }

    def consume(self, raw_code, commit=True):
        if not canonicalize_code(raw_code):
            MetricsService.track_access_code_consumption(MISSING_CODE_REASON)
            return self._missing('success')

        result = self.store.consume_if_usable(raw_code, commit=commit)
        if result.error is not None:
            MetricsService.track_access_code_consumption(result.error.value)
            return self._rejected('success', result.error)

        snapshot = result.snapshot
        MetricsService.track_access_code_consumption('success')
        return {
            'success': True,
            'message': 'Access code used successfully',
            'code': snapshot['code'],
            'description': snapshot['description'],
            'remainingUses': snapshot['maxUses'] - snapshot['currentUses']
        }
