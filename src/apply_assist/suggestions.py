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
Templated application text built from a Profile.

Nothing here is ranked or learned: each target field type has a fixed list
of templates, filled in from the profile and a few derived facts (years of
experience, role durations, achievement snippets).
"""

import logging
import re
from datetime import date
from typing import List, Optional, Tuple, Union

from apply_assist.models import Profile, Suggestion, SuggestionTarget, WorkExperience

logger = logging.getLogger(__name__)

TECHNICAL_KEYWORDS = [
    'javascript', 'python', 'java', 'react', 'node', 'sql', 'aws', 'docker',
    'git', 'api', 'css', 'html', 'typescript', 'angular', 'vue', 'mongodb',
    'programming', 'coding', 'development', 'software', 'database',
]

GENERIC_STRENGTHS = [
    ('Excellent problem-solving and analytical abilities', 'Problem Solving'),
    ('Strong communication and collaboration skills', 'Communication'),
    ('Proven track record of delivering high-quality results', 'Results-Driven'),
    ('Quick learner with adaptability to new technologies', 'Adaptability'),
    ('Detail-oriented with strong organizational skills', 'Organization'),
]

_SENTENCE_SPLIT = re.compile(r'[.!?]')


def parse_month(value: str) -> Optional[Tuple[int, int]]:
    """Parses "YYYY-MM" (or a longer ISO date) into (year, month)."""
    match = re.match(r'^\s*(\d{4})-(\d{1,2})', value or '')
    if not match:
        return None
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        return None
    return year, month


def months_between(start: str, end: str = "", is_current: bool = False, today: Optional[date] = None) -> int:
    """
    Whole months from start to end (or today for a current role).
    Unparseable dates and reversed ranges count as zero.
    """
    today = today or date.today()
    start_ym = parse_month(start)
    end_ym = (today.year, today.month) if is_current else parse_month(end)

    if start_ym is None or end_ym is None:
        logger.warning(f"Cannot compute duration for dates {start!r} - {end!r}")
        return 0

    months = (end_ym[0] - start_ym[0]) * 12 + (end_ym[1] - start_ym[1])
    if months < 0:
        logger.warning(f"End date {end!r} is before start date {start!r}")
        return 0
    return months


def years_of_experience(experience: List[WorkExperience], today: Optional[date] = None) -> int:
    """Total months across all roles, floored to whole years."""
    total_months = sum(
        months_between(exp.start_date, exp.end_date, exp.current_job, today)
        for exp in experience
    )
    return total_months // 12


def _plural(value: int, unit: str) -> str:
    return f"{value} {unit}{'' if value == 1 else 's'}"


def format_duration(months: int) -> str:
    """14 -> "1y 2m", 12 -> "1 year", 5 -> "5 months"."""
    years, remaining = divmod(max(months, 0), 12)
    if years > 0 and remaining > 0:
        return f"{years}y {remaining}m"
    if years > 0:
        return _plural(years, 'year')
    return _plural(remaining, 'month')


def calculate_duration(exp: WorkExperience, today: Optional[date] = None) -> str:
    return format_duration(months_between(exp.start_date, exp.end_date, exp.current_job, today))


def extract_achievement(description: str) -> str:
    """First sentence longer than 20 characters, else the first 100 characters."""
    description = description or ''
    sentences = [s for s in _SENTENCE_SPLIT.split(description) if len(s.strip()) > 20]
    if sentences:
        return sentences[0].strip()
    return description[:100]


def is_technical_skill(skill: str) -> bool:
    skill = (skill or '').lower()
    return any(keyword in skill for keyword in TECHNICAL_KEYWORDS)


class SuggestionGenerator:
    """
    Builds labeled suggestions for one profile.

    Derived facts are computed against `today`, which defaults to the
    current date; pass a fixed date for reproducible output.
    """
    def __init__(self, profile: Union[Profile, dict, None], today: Optional[date] = None):
        if isinstance(profile, dict) or profile is None:
            profile = Profile.from_dict(profile)
        self.profile = profile
        self.today = today or date.today()

        self.builders = {
            SuggestionTarget.COVER_LETTER: self.cover_letter,
            SuggestionTarget.WHY_INTERESTED: self.why_interested,
            SuggestionTarget.STRENGTHS: self.strengths,
            SuggestionTarget.EXPERIENCE: self.experience_summary,
            SuggestionTarget.SKILLS: self.skills_list,
            SuggestionTarget.SUMMARY: self.professional_summary,
        }

    # --- Shared facts ---

    @property
    def skills(self) -> List[str]:
        return [s for s in self.profile.skills if s and s.strip()]

    @property
    def experience(self) -> List[WorkExperience]:
        return self.profile.work_experience

    @property
    def latest_job(self) -> Optional[WorkExperience]:
        return self.experience[0] if self.experience else None

    def years_of_experience(self) -> int:
        return years_of_experience(self.experience, self.today)

    def top_skills(self, count: int = 5) -> str:
        return ', '.join(self.skills[:count])

    def generate(self, target: Union[SuggestionTarget, str], job_description: Optional[str] = None) -> List[Suggestion]:
        """
        Returns the suggestions for a target field type, in template order.
        Unknown targets yield an empty list.
        """
        try:
            target = SuggestionTarget(target)
        except ValueError:
            logger.debug(f"No suggestion templates for field type {target!r}")
            return []

        suggestions = [
            Suggestion(text=text, label=label, category=target.value)
            for text, label in self.builders[target]()
        ]
        logger.debug(f"Generated {len(suggestions)} suggestions for {target.value}")
        return suggestions

    # --- Templates ---

    def cover_letter(self):
        skills = self.top_skills()
        latest = self.latest_job
        suggestions = []

        if latest:
            expertise = f" and expertise in {skills}" if skills else ""
            suggestions.append((
                f"I am writing to express my strong interest in this position. "
                f"With {_plural(self.years_of_experience(), 'year')} of experience in {latest.job_title}{expertise}, "
                f"I am confident in my ability to contribute meaningfully to your team.",
                'Professional Opening',
            ))

        if latest and latest.description.strip():
            suggestions.append((
                f"In my current role as {latest.job_title} at {latest.company}, "
                f"I have successfully {extract_achievement(latest.description)}. "
                f"This experience has equipped me with the skills necessary to excel in this position.",
                'Experience Highlight',
            ))

        if skills:
            suggestions.append((
                f"My technical expertise includes {skills}, which aligns well with the requirements of this role. "
                f"I am passionate about leveraging these skills to drive innovation and deliver exceptional results.",
                'Skills Match',
            ))

        suggestions.append((
            "I would welcome the opportunity to discuss how my background and skills would benefit your organization. "
            "Thank you for considering my application. I look forward to speaking with you soon.",
            'Professional Closing',
        ))
        return suggestions

    def why_interested(self):
        latest = self.latest_job
        suggestions = [(
            "This role perfectly aligns with my career goals and professional experience. "
            "I'm particularly excited about the opportunity to apply my skills in a challenging and innovative environment.",
            'Career Alignment',
        )]

        if latest:
            suggestions.append((
                f"Having worked as a {latest.job_title}, I have developed a deep passion for this field. "
                f"This position offers the perfect next step in my career journey, allowing me to leverage "
                f"my experience while continuing to grow professionally.",
                'Career Progression',
            ))

        suggestions.append((
            "I'm impressed by your company's commitment to innovation and excellence. "
            "The opportunity to contribute to your team's success while working on impactful projects "
            "is exactly what I'm looking for in my next role.",
            'Company Interest',
        ))

        if len(self.skills) > 2:
            suggestions.append((
                f"This position is a perfect match for my skill set, particularly in {self.top_skills(3)}. "
                f"I'm eager to bring my expertise to your team and contribute to achieving your organizational goals.",
                'Skills Match',
            ))
        return suggestions

    def strengths(self):
        suggestions = []
        if self.skills:
            suggestions.append((f"Strong technical proficiency in {self.top_skills(3)}", 'Technical Skills'))
        if self.latest_job:
            suggestions.append((
                f"{self.years_of_experience()}+ years of proven experience in {self.latest_job.job_title}",
                'Experience',
            ))
        suggestions.extend(GENERIC_STRENGTHS)
        return suggestions

    def experience_summary(self):
        suggestions = []
        for index, exp in enumerate(self.experience[:3]):
            text = f"{exp.job_title} at {exp.company} ({calculate_duration(exp, self.today)})"
            if exp.description.strip():
                text += f" - {extract_achievement(exp.description)}"
            suggestions.append((text, f"Experience {index + 1}"))

        if self.experience:
            count = len(self.experience)
            suggestions.append((
                f"{_plural(self.years_of_experience(), 'year')} of professional experience across "
                f"{count} role{'s' if count > 1 else ''}, specializing in {self.experience[0].job_title}.",
                'Experience Summary',
            ))
        return suggestions

    def skills_list(self):
        skills = self.skills
        if not skills:
            return []

        suggestions = [
            (', '.join(skills), 'All Skills (Comma-separated)'),
            ('\n'.join(f"• {s}" for s in skills), 'All Skills (Bullet points)'),
        ]

        if len(skills) > 5:
            suggestions.append((self.top_skills(5), 'Top 5 Skills'))

        technical = [s for s in skills if is_technical_skill(s)]
        soft = [s for s in skills if not is_technical_skill(s)]
        if technical and soft:
            suggestions.append((
                f"Technical: {', '.join(technical)}\nSoft Skills: {', '.join(soft)}",
                'Categorized Skills',
            ))
        return suggestions

    def professional_summary(self):
        name = self.profile.personal_info.full_name.strip()
        latest = self.latest_job
        skills = self.top_skills()
        years = self.years_of_experience()
        suggestions = []

        if latest and years > 0:
            expertise = f" in {skills}" if skills else ""
            opener = f"{name} is an experienced" if name else "An experienced"
            suggestions.append((
                f"{opener} {latest.job_title} with {years}+ years of expertise{expertise}. "
                f"Proven track record of delivering innovative solutions and driving results in fast-paced environments.",
                'Professional Summary',
            ))
            expertise_sentence = f" Expertise in {skills}." if skills else ""
            suggestions.append((
                f"Accomplished professional with {_plural(years, 'year')} of experience in {latest.job_title}.{expertise_sentence} "
                f"Known for strong problem-solving abilities and commitment to excellence.",
                'Concise Summary',
            ))

        if len(self.experience) >= 2:
            companies = ', '.join(e.company for e in self.experience[:3])
            specialty = f" Specialized in {skills} with" if skills else " Brings"
            suggestions.append((
                f"Results-driven professional with extensive experience at leading organizations including {companies}."
                f"{specialty} a strong focus on innovation and continuous improvement.",
                'Career Highlight',
            ))
        return suggestions


def generate_suggestions(profile: Union[Profile, dict, None], field_type: Union[SuggestionTarget, str],
                         job_description: Optional[str] = None, today: Optional[date] = None) -> List[Suggestion]:
    """Convenience wrapper: SuggestionGenerator(profile).generate(field_type)."""
    return SuggestionGenerator(profile, today=today).generate(field_type, job_description)


generate = generate_suggestions
