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
Pairs classified controls with the profile values that should go in them.
"""

import logging
from typing import List

from apply_assist.models import FieldRole, FillAction, Profile, RoleAssignment

logger = logging.getLogger(__name__)


def role_value(role: FieldRole, profile: Profile) -> str:
    """The profile value for a role, or "" when the profile has none."""
    info = profile.personal_info
    values = {
        FieldRole.FIRST_NAME: info.first_name,
        FieldRole.LAST_NAME: info.last_name,
        FieldRole.FULL_NAME: info.full_name.strip(),
        FieldRole.EMAIL: info.email,
        FieldRole.PHONE: info.phone,
        FieldRole.LOCATION: info.location,
        FieldRole.PORTFOLIO: info.portfolio,
        FieldRole.LINKEDIN: info.linkedin,
        # The personal summary doubles as cover letter text
        FieldRole.COVER_LETTER: info.summary,
        FieldRole.SUMMARY: info.summary,
    }
    return values.get(role, "") or ""


def plan_autofill(assignment: RoleAssignment, profile: Profile) -> List[FillAction]:
    """
    Returns one FillAction per assigned role that has a value, in role
    priority order. Roles without a profile value are skipped.
    """
    if isinstance(profile, dict) or profile is None:
        profile = Profile.from_dict(profile)

    actions = []
    for role, descriptor in assignment.items():
        value = role_value(role, profile)
        if not value:
            logger.debug(f"    > No profile value for {role.value}, skipping")
            continue
        actions.append(FillAction(role=role, control_ref=descriptor.control_ref, value=value))

    logger.info(f"Planned {len(actions)} field fills")
    return actions
