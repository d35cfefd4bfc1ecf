"""
Reference Resolver
Extracts exercise ids from the reference strings stored on PR entries

References look like <base>/apps/<appId>/records/<exerciseId>. Only the
trailing id matters to the analytics; everything before it is opaque.
"""

import re
import secrets
from dataclasses import dataclass
from typing import Optional

RECORD_ID_LENGTH = 24

_TRAILING_ID = re.compile(r'([0-9a-f]{%d})$' % RECORD_ID_LENGTH, re.IGNORECASE)


def resolve(ref: Optional[str]) -> Optional[str]:
    """
    Return the exercise id embedded at the end of `ref`.

    The id is the trailing run of 24 hex characters, matched
    case-insensitively and returned lower-cased. Returns None for an empty
    reference or one without such a suffix.
    """
    if not ref:
        return None
    match = _TRAILING_ID.search(ref)
    return match.group(1).lower() if match else None


@dataclass(frozen=True)
class ExerciseRef:
    """Opaque foreign-key reference from a PR entry to its exercise"""
    value: Optional[str]

    @property
    def exercise_id(self) -> Optional[str]:
        return resolve(self.value)


def make_reference(base_url: str, app_id: str, exercise_id: str) -> str:
    """Build the reference string stored on a new PR entry"""
    return f"{base_url.rstrip('/')}/apps/{app_id}/records/{exercise_id}"


def new_record_id() -> str:
    """Fresh 24-hex record id, the same shape the references embed"""
    return secrets.token_hex(RECORD_ID_LENGTH // 2)
