#!/usr/bin/env python3
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
Sample Profile
Writes a placeholder profile to fill in, then prints how complete it is.

    python scripts/sample_profile.py [path/to/profile.json]
"""

import os
import sys

sys.path.append(os.path.join(os.path.dirname(os.path.abspath(__file__)), '..', 'src'))

from apply_assist.models import Education, Project, WorkExperience  # noqa: E402
from apply_assist.store import ProfileStore, completeness  # noqa: E402


def create_profile(path=None):
    store = ProfileStore(path)

    store.update(
        first_name='[First Name]',
        last_name='[Last Name]',
        email='[you@example.com]',
        phone='[Phone Number]',
        location='[City, Country]',
        linkedin='linkedin.com/in/[username]',
        summary='[Insert your professional summary here. Describe your experience and what you bring to the table.]',
    )

    # Latest job first
    store.add_work_experience(WorkExperience(
        job_title='[Job Title]',
        company='[LATEST COMPANY]',
        location='[Location]',
        start_date='2021-01',
        current_job=True,
        description='[Brief summary of your role and impact.] [Achievement with a measurable result.]',
    ))
    store.add_work_experience(WorkExperience(
        job_title='[Previous Job Title]',
        company='[PREVIOUS COMPANY]',
        start_date='2017-06',
        end_date='2020-12',
        description='[Description of responsibilities and key achievements.]',
    ))

    store.add_education(Education(degree='[Degree]', field_of_study='[Field]', institution='[University]'))
    store.add_project(Project(name='[Project]', technologies='Python, SQL', link='github.com/[username]'))
    store.update_skills(['Python', 'SQL', 'Docker', 'Communication', 'Leadership'])

    print(f"Profile written to {store.path} ({completeness(store.get())}% complete)")


if __name__ == "__main__":
    create_profile(sys.argv[1] if len(sys.argv) > 1 else None)
