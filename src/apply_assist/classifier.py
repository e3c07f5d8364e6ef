# Copyright 2026 Justin Cook
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Assigns semantic roles (first name, email, cover letter, ...) to form controls.

Each role has a list of substring patterns matched against the control's
signature text. Roles are tried in FieldRole order for every control; the
first unfilled role that matches wins, and a filled role is never revisited.
"""

import logging
from enum import Enum
from typing import Iterable

from apply_assist.models import FieldDescriptor, FieldKind, FieldRole, RoleAssignment

logger = logging.getLogger(__name__)

ROLE_PATTERNS = {
    FieldRole.FIRST_NAME: ['first', 'fname', 'firstname', 'given'],
    FieldRole.LAST_NAME: ['last', 'lname', 'lastname', 'surname', 'family'],
    FieldRole.FULL_NAME: ['fullname', 'full name', 'name'],
    FieldRole.EMAIL: ['email', 'e-mail'],
    FieldRole.PHONE: ['phone', 'mobile', 'telephone', 'contact'],
    FieldRole.LOCATION: ['location', 'city', 'address', 'where'],
    FieldRole.PORTFOLIO: ['portfolio', 'website', 'personal site'],
    FieldRole.LINKEDIN: ['linkedin', 'profile url'],
    FieldRole.COVER_LETTER: ['cover', 'letter', 'why', 'interest', 'message'],
    FieldRole.SUMMARY: ['summary', 'about', 'bio', 'yourself'],
}

# Control kinds that satisfy a role regardless of signature text
ROLE_KINDS = {
    FieldRole.EMAIL: FieldKind.EMAIL,
    FieldRole.PHONE: FieldKind.TEL,
}

TEXTAREA_ONLY = {FieldRole.COVER_LETTER, FieldRole.SUMMARY}

# Roles a hidden control may never take, even in compatible mode
HIDDEN_EXCLUDED = {
    FieldRole.FIRST_NAME,
    FieldRole.LAST_NAME,
    FieldRole.FULL_NAME,
    FieldRole.LOCATION,
}


class HiddenPolicy(str, Enum):
    """
    How hidden controls are treated.

    COMPATIBLE keeps them out of the name and location roles only, so a
    hidden email/phone/link input can still be picked. UNIFORM keeps them
    out of every role.
    """
    COMPATIBLE = "compatible"
    UNIFORM = "uniform"


def matches_pattern(text: str, patterns) -> bool:
    return any(pattern in text for pattern in patterns)


def coerce_kind(value) -> FieldKind:
    """Accepts a FieldKind or its string value; anything else is OTHER."""
    if isinstance(value, FieldKind):
        return value
    try:
        return FieldKind(str(value).strip().lower())
    except ValueError:
        return FieldKind.OTHER


def normalize_signature(value) -> str:
    return (value or "").lower()


def role_matches(role: FieldRole, descriptor: FieldDescriptor,
                 hidden_policy: HiddenPolicy = HiddenPolicy.COMPATIBLE) -> bool:
    """Checks a single role predicate against a descriptor."""
    text = normalize_signature(descriptor.signature_text)
    kind = coerce_kind(descriptor.control_kind)

    if kind == FieldKind.HIDDEN:
        if hidden_policy == HiddenPolicy.UNIFORM or role in HIDDEN_EXCLUDED:
            return False

    if role in TEXTAREA_ONLY and kind != FieldKind.TEXTAREA:
        return False

    if ROLE_KINDS.get(role) == kind:
        return True

    if not matches_pattern(text, ROLE_PATTERNS[role]):
        return False

    # Split-name fields must not be captured as a full name
    if role == FieldRole.FULL_NAME and ('first' in text or 'last' in text):
        return False

    return True


def _is_valid(descriptor) -> bool:
    return (
        isinstance(descriptor, FieldDescriptor)
        and (descriptor.signature_text is None or isinstance(descriptor.signature_text, str))
    )


def classify(descriptors: Iterable[FieldDescriptor],
             hidden_policy: HiddenPolicy = HiddenPolicy.COMPATIBLE) -> RoleAssignment:
    """
    Classifies form controls into roles.

    Args:
        descriptors: Controls in page order.
        hidden_policy: Treatment of hidden controls (see HiddenPolicy).

    Returns:
        RoleAssignment: Each role mapped to at most one descriptor. Roles
        nothing matched are simply absent.
    """
    assignment = RoleAssignment()

    for index, descriptor in enumerate(descriptors or []):
        if not _is_valid(descriptor):
            logger.warning(f"Skipping malformed field descriptor at position {index}: {descriptor!r}")
            continue

        for role in FieldRole:
            if role in assignment:
                continue
            if role_matches(role, descriptor, hidden_policy):
                assignment.assign(role, descriptor)
                logger.debug(f"    > {role.value}: {descriptor.control_ref}")
                break

        if len(assignment) == len(FieldRole):
            break

    logger.info(f"Classified {len(assignment)} fillable fields")
    return assignment


classify_fields = classify
