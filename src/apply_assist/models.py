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
Data models for the Apply Assist engines and profile store.
"""

import logging
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)


class FieldKind(str, Enum):
    """Kind of interactive form control."""
    TEXT = "text"
    EMAIL = "email"
    TEL = "tel"
    URL = "url"
    SELECT = "select"
    TEXTAREA = "textarea"
    HIDDEN = "hidden"
    OTHER = "other"


class FieldRole(str, Enum):
    """Semantic role of a form control. Declaration order is classifier priority."""
    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"
    FULL_NAME = "fullName"
    EMAIL = "email"
    PHONE = "phone"
    LOCATION = "location"
    PORTFOLIO = "portfolio"
    LINKEDIN = "linkedin"
    COVER_LETTER = "coverLetter"
    SUMMARY = "summary"


class SuggestionTarget(str, Enum):
    """Field types the suggestion generator knows how to fill."""
    COVER_LETTER = "coverLetter"
    WHY_INTERESTED = "whyInterested"
    STRENGTHS = "strengths"
    EXPERIENCE = "experience"
    SKILLS = "skills"
    SUMMARY = "summary"


@dataclass(frozen=True)
class FieldDescriptor:
    """Normalized representation of one form control."""
    control_ref: Any
    control_kind: FieldKind
    signature_text: str


class RoleAssignment:
    """
    Mapping of FieldRole to at most one FieldDescriptor.
    A role, once assigned, cannot be reassigned.
    """
    def __init__(self):
        self._roles: Dict[FieldRole, FieldDescriptor] = {}

    def assign(self, role: FieldRole, descriptor: FieldDescriptor) -> bool:
        if role in self._roles:
            return False
        self._roles[role] = descriptor
        return True

    def get(self, role: FieldRole) -> Optional[FieldDescriptor]:
        return self._roles.get(role)

    def __contains__(self, role) -> bool:
        return role in self._roles

    def __getitem__(self, role: FieldRole) -> FieldDescriptor:
        return self._roles[role]

    def __len__(self) -> int:
        return len(self._roles)

    def __iter__(self) -> Iterator[FieldRole]:
        # Priority order, not assignment order
        return (role for role in FieldRole if role in self._roles)

    def items(self):
        return [(role, self._roles[role]) for role in self]

    def as_dict(self) -> Dict[str, Any]:
        """Role value -> caller's control reference."""
        return {role.value: self._roles[role].control_ref for role in self}

    def __eq__(self, other) -> bool:
        if not isinstance(other, RoleAssignment):
            return NotImplemented
        return self._roles == other._roles

    def __repr__(self) -> str:
        return f"RoleAssignment({self.as_dict()!r})"


@dataclass(frozen=True)
class TextBlock:
    """One text-bearing page element, in document order."""
    text: str
    class_names: str = ""
    tag: str = ""
    element_id: str = ""
    attributes: Dict[str, str] = field(default_factory=dict, hash=False, compare=True)
    selector_tag: Optional[str] = None


@dataclass(frozen=True)
class ExtractionResult:
    """The extracted job description, or an empty result."""
    text: str = ""
    source_selector: Optional[str] = None
    site_family: Optional[str] = None

    def __bool__(self) -> bool:
        return bool(self.text)

    @classmethod
    def empty(cls) -> "ExtractionResult":
        return cls()


@dataclass(frozen=True)
class Suggestion:
    """One labeled candidate text for a target field."""
    text: str
    label: str
    category: str


def _mapping(data: Any, name: str) -> Dict[str, Any]:
    """A JSON object, or {} for a missing or wrongly-typed value."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring {name}: expected an object, got {type(data).__name__}")
        return {}
    return data


def _items(data: Dict[str, Any], key: str) -> List[Any]:
    """A JSON array, or [] for a missing or wrongly-typed value."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        logger.warning(f"Ignoring {key}: expected a list, got {type(value).__name__}")
        return []
    return value


def _text(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    return str(value)


@dataclass
class PersonalInfo:
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    portfolio: str = ""
    linkedin: str = ""
    summary: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PersonalInfo":
        data = _mapping(data, cls.__name__)
        return cls(
            first_name=_text(data, "firstName"),
            last_name=_text(data, "lastName"),
            email=_text(data, "email"),
            phone=_text(data, "phone"),
            location=_text(data, "location"),
            portfolio=_text(data, "portfolio"),
            linkedin=_text(data, "linkedin"),
            summary=_text(data, "summary"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "location": self.location,
            "portfolio": self.portfolio,
            "linkedin": self.linkedin,
            "summary": self.summary,
        }


@dataclass
class WorkExperience:
    """A single role. Dates are "YYYY-MM" strings."""
    job_title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current_job: bool = False
    description: str = ""
    id: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "WorkExperience":
        data = _mapping(data, cls.__name__)
        return cls(
            job_title=_text(data, "jobTitle"),
            company=_text(data, "company"),
            location=_text(data, "location"),
            start_date=_text(data, "startDate"),
            end_date=_text(data, "endDate"),
            current_job=bool(data.get("currentJob", False)),
            description=_text(data, "description"),
            id=_text(data, "id"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "jobTitle": self.job_title,
            "company": self.company,
            "location": self.location,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "currentJob": self.current_job,
            "description": self.description,
        }


@dataclass
class Education:
    degree: str = ""
    field_of_study: str = ""
    institution: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    gpa: str = ""
    id: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Education":
        data = _mapping(data, cls.__name__)
        return cls(
            degree=_text(data, "degree"),
            field_of_study=_text(data, "field"),
            institution=_text(data, "institution"),
            location=_text(data, "location"),
            start_date=_text(data, "startDate"),
            end_date=_text(data, "endDate"),
            gpa=_text(data, "gpa"),
            id=_text(data, "id"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "degree": self.degree,
            "field": self.field_of_study,
            "institution": self.institution,
            "location": self.location,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "gpa": self.gpa,
        }


@dataclass
class Project:
    name: str = ""
    description: str = ""
    technologies: str = ""
    link: str = ""
    id: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Project":
        data = _mapping(data, cls.__name__)
        return cls(
            name=_text(data, "name"),
            description=_text(data, "description"),
            technologies=_text(data, "technologies"),
            link=_text(data, "link"),
            id=_text(data, "id"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Settings:
    auto_extract: bool = True
    show_suggestions: bool = True
    save_job_descriptions: bool = True

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Settings":
        data = _mapping(data, cls.__name__)
        return cls(
            auto_extract=bool(data.get("autoExtract", True)),
            show_suggestions=bool(data.get("showSuggestions", True)),
            save_job_descriptions=bool(data.get("saveJobDescriptions", True)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "autoExtract": self.auto_extract,
            "showSuggestions": self.show_suggestions,
            "saveJobDescriptions": self.save_job_descriptions,
        }


@dataclass
class Profile:
    """
    The user's structured application data.
    The engines only read it; the store owns history and settings.
    """
    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    work_experience: List[WorkExperience] = field(default_factory=list)  # Most recent first
    education: List[Education] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)
    resume_text: str = ""
    application_history: List[Dict[str, Any]] = field(default_factory=list)
    settings: Settings = field(default_factory=Settings)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Profile":
        """
        Builds a Profile from the camelCase JSON shape.
        Missing, null or wrongly-typed sections become empty defaults;
        partial profiles are normal.
        """
        data = _mapping(data, cls.__name__)
        return cls(
            personal_info=PersonalInfo.from_dict(data.get("personalInfo")),
            work_experience=[WorkExperience.from_dict(e) for e in _items(data, "workExperience") if isinstance(e, dict)],
            education=[Education.from_dict(e) for e in _items(data, "education") if isinstance(e, dict)],
            skills=[str(s) for s in _items(data, "skills") if s is not None],
            projects=[Project.from_dict(p) for p in _items(data, "projects") if isinstance(p, dict)],
            resume_text=_text(data, "resumeText"),
            application_history=[h for h in _items(data, "applicationHistory") if isinstance(h, dict)],
            settings=Settings.from_dict(data.get("settings")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "personalInfo": self.personal_info.to_dict(),
            "workExperience": [e.to_dict() for e in self.work_experience],
            "education": [e.to_dict() for e in self.education],
            "skills": list(self.skills),
            "projects": [p.to_dict() for p in self.projects],
            "resumeText": self.resume_text,
            "applicationHistory": list(self.application_history),
            "settings": self.settings.to_dict(),
        }


@dataclass(frozen=True)
class FillAction:
    """A value to write into a classified control."""
    role: FieldRole
    control_ref: Any
    value: str
