"""Structural checks for poem data loaded from JSON.

Problems are returned as human-readable strings instead of raised, so the
caller can decide whether to reject a whole catalog or drop single records.
"""

from collections.abc import Mapping
from typing import List, NamedTuple

CATALOG_SIZE = 100
MIN_POEM_ID = 1
MAX_POEM_ID = 100
TEXT_FIELDS = ('author', 'upperVerse', 'lowerVerse')


class ValidationResult(NamedTuple):
    valid: bool
    errors: List[str]

    def to_dict(self) -> dict:
        return {'valid': self.valid, 'errors': list(self.errors)}


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_record(candidate) -> ValidationResult:
    if candidate is None:
        return ValidationResult(False, ['Poem must be a non-null object'])
    if isinstance(candidate, (list, tuple)):
        return ValidationResult(False, ['Poem must be a plain object, not an array'])
    if not isinstance(candidate, Mapping):
        return ValidationResult(False, ['Poem must be a non-null object'])

    errors = []
    poem_id = candidate.get('id')
    if not _is_int(poem_id):
        errors.append('id must be an integer')
    elif not MIN_POEM_ID <= poem_id <= MAX_POEM_ID:
        errors.append(f'id must be between {MIN_POEM_ID} and {MAX_POEM_ID}')

    for name in TEXT_FIELDS:
        value = candidate.get(name)
        if not isinstance(value, str):
            errors.append(f'{name} must be a string')
        elif not value.strip():
            errors.append(f'{name} must be a non-empty string')

    return ValidationResult(not errors, errors)


def validate_collection(candidates) -> ValidationResult:
    if not isinstance(candidates, (list, tuple)):
        return ValidationResult(False, ['Poem collection must be an array'])

    errors = []
    if len(candidates) != CATALOG_SIZE:
        errors.append(
            f'Poem collection must contain exactly {CATALOG_SIZE} poems, but got {len(candidates)}'
        )

    seen = set()
    duplicates = []
    for index, candidate in enumerate(candidates):
        result = validate_record(candidate)
        for err in result.errors:
            errors.append(f'Poem at index {index}: {err}')

        poem_id = candidate.get('id') if isinstance(candidate, Mapping) else None
        if _is_int(poem_id):
            if poem_id in seen:
                duplicates.append(poem_id)
            else:
                seen.add(poem_id)

    if duplicates:
        errors.append('Duplicate poem IDs found: ' + ', '.join(str(d) for d in duplicates))

    return ValidationResult(not errors, errors)
