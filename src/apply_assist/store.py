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
JSON-file persistence for the user's Profile.

The engines never touch the store; the CLI loads a Profile from it, hands
the Profile to an engine, and writes back any history entry afterwards.
"""

import json
import logging
import uuid
from dataclasses import fields, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from apply_assist import config
from apply_assist.models import Education, PersonalInfo, Profile, Project, Settings, WorkExperience

logger = logging.getLogger(__name__)

MAX_HISTORY = 50


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


def _field_names(cls) -> set:
    return {f.name for f in fields(cls)}


class ProfileStore:
    """
    Reads and writes a Profile as JSON (camelCase keys).

    Every mutating call loads the current file, applies the change and
    saves, so two stores pointed at the same path see each other's writes.
    """
    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path) if path else config.profile_path()

    # --- Core ---

    def get(self) -> Profile:
        """Loads the profile, or an empty default when the file is missing or unreadable."""
        if not self.path.exists():
            return Profile()
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load profile from {self.path}: {e}")
            return Profile()
        if not isinstance(data, dict):
            logger.warning(f"Ignoring profile file {self.path}: expected a JSON object")
            return Profile()
        return Profile.from_dict(data)

    def set(self, profile: Profile) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(profile.to_dict(), f, indent=2, ensure_ascii=False)
        logger.debug(f"Saved profile to {self.path}")

    def update(self, **changes) -> Profile:
        """Merges personal info fields (snake_case) into the stored profile."""
        profile = self.get()
        known = _field_names(PersonalInfo)
        unknown = set(changes) - known
        if unknown:
            logger.warning(f"Ignoring unknown personal info fields: {', '.join(sorted(unknown))}")
        profile.personal_info = replace(
            profile.personal_info, **{k: v for k, v in changes.items() if k in known}
        )
        self.set(profile)
        return profile

    update_personal_info = update

    # --- List sections ---

    def _add(self, section: str, item) -> str:
        profile = self.get()
        item = replace(item, id=item.id or _new_id())
        getattr(profile, section).append(item)
        self.set(profile)
        return item.id

    def _update(self, section: str, item_id: str, changes: Dict[str, Any]) -> bool:
        profile = self.get()
        items = getattr(profile, section)
        for index, item in enumerate(items):
            if item.id == item_id:
                known = _field_names(type(item)) - {"id"}
                items[index] = replace(item, **{k: v for k, v in changes.items() if k in known})
                self.set(profile)
                return True
        logger.warning(f"No {section} entry with id {item_id}")
        return False

    def _delete(self, section: str, item_id: str) -> bool:
        profile = self.get()
        items = getattr(profile, section)
        remaining = [item for item in items if item.id != item_id]
        if len(remaining) == len(items):
            return False
        setattr(profile, section, remaining)
        self.set(profile)
        return True

    def add_work_experience(self, experience: Union[WorkExperience, dict]) -> str:
        if isinstance(experience, dict):
            experience = WorkExperience.from_dict(experience)
        return self._add("work_experience", experience)

    def update_work_experience(self, item_id: str, **changes) -> bool:
        return self._update("work_experience", item_id, changes)

    def delete_work_experience(self, item_id: str) -> bool:
        return self._delete("work_experience", item_id)

    def add_education(self, education: Union[Education, dict]) -> str:
        if isinstance(education, dict):
            education = Education.from_dict(education)
        return self._add("education", education)

    def update_education(self, item_id: str, **changes) -> bool:
        return self._update("education", item_id, changes)

    def delete_education(self, item_id: str) -> bool:
        return self._delete("education", item_id)

    def add_project(self, project: Union[Project, dict]) -> str:
        if isinstance(project, dict):
            project = Project.from_dict(project)
        return self._add("projects", project)

    def update_project(self, item_id: str, **changes) -> bool:
        return self._update("projects", item_id, changes)

    def delete_project(self, item_id: str) -> bool:
        return self._delete("projects", item_id)

    def update_skills(self, skills: List[str]) -> None:
        profile = self.get()
        profile.skills = [str(s) for s in skills]
        self.set(profile)

    def save_resume_text(self, text: str) -> None:
        profile = self.get()
        profile.resume_text = text or ""
        self.set(profile)

    # --- Application history ---

    def add_application(self, url: str = "", job_title: str = "", source: str = "",
                        job_description: str = "", status: str = "") -> Dict[str, Any]:
        """Prepends a history entry; only the newest MAX_HISTORY are kept."""
        profile = self.get()
        entry = {
            "id": _new_id(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "url": url,
            "jobTitle": job_title,
            "source": source,
        }
        if job_description:
            entry["jobDescription"] = job_description
        if status:
            entry["status"] = status

        profile.application_history = [entry] + profile.application_history[:MAX_HISTORY - 1]
        self.set(profile)
        return entry

    def clear_history(self) -> None:
        profile = self.get()
        profile.application_history = []
        self.set(profile)

    # --- Settings ---

    def update_settings(self, **changes) -> Settings:
        profile = self.get()
        known = _field_names(Settings)
        profile.settings = replace(
            profile.settings, **{k: bool(v) for k, v in changes.items() if k in known}
        )
        self.set(profile)
        return profile.settings

    # --- Import / export ---

    def export_json(self) -> str:
        return json.dumps(self.get().to_dict(), indent=2, ensure_ascii=False)

    def import_json(self, text: str) -> bool:
        try:
            data = json.loads(text)
        except (TypeError, json.JSONDecodeError) as e:
            logger.error(f"Failed to import data: {e}")
            return False
        if not isinstance(data, dict):
            logger.error("Failed to import data: expected a JSON object")
            return False
        self.set(Profile.from_dict(data))
        return True

    def clear(self) -> None:
        self.set(Profile())


def completeness(profile: Optional[Profile]) -> int:
    """
    Percentage score of how filled-in a profile is.

    Personal info is worth 30 (10 per required field, 2 per optional one),
    work experience 25, education 20, skills 15 and projects 10.
    """
    profile = profile or Profile()
    info = profile.personal_info
    score = 0.0

    for value in (info.first_name, info.last_name, info.email):
        if value:
            score += 10
    for value in (info.phone, info.location, info.portfolio, info.linkedin, info.summary):
        if value:
            score += 2

    score += min(len(profile.work_experience) * 8, 25)
    score += min(len(profile.education) * 10, 20)
    score += min(len(profile.skills) * 1.5, 15)
    score += min(len(profile.projects) * 5, 10)

    return int(score + 0.5)
