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

import json
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from apply_assist.models import PersonalInfo, Profile, WorkExperience
from apply_assist.store import MAX_HISTORY, ProfileStore, completeness


class TestProfileStore(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.path = os.path.join(self.test_dir, "nested", "profile.json")
        self.store = ProfileStore(self.path)

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_missing_file_gives_defaults(self):
        profile = self.store.get()
        self.assertEqual(profile, Profile())
        self.assertTrue(profile.settings.auto_extract)

    def test_corrupt_file_gives_defaults(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w") as f:
            f.write("{not json")
        with self.assertLogs("apply_assist.store", level="WARNING"):
            self.assertEqual(self.store.get(), Profile())

    def test_set_and_get(self):
        profile = Profile(personal_info=PersonalInfo(first_name="Ada"), skills=["Python"])
        self.store.set(profile)
        self.assertEqual(self.store.get(), profile)

        with open(self.path) as f:
            data = json.load(f)
        self.assertEqual(data["personalInfo"]["firstName"], "Ada")

    def test_update_personal_info(self):
        self.store.update(first_name="Ada", email="ada@example.com")
        with self.assertLogs("apply_assist.store", level="WARNING"):
            self.store.update(last_name="Lovelace", shoe_size="9")
        info = self.store.get().personal_info
        self.assertEqual((info.first_name, info.last_name, info.email), ("Ada", "Lovelace", "ada@example.com"))

    def test_work_experience_crud(self):
        exp_id = self.store.add_work_experience(WorkExperience(job_title="Dev", company="Acme"))
        other_id = self.store.add_work_experience({"jobTitle": "Intern", "company": "Initech"})
        self.assertNotEqual(exp_id, other_id)

        self.assertTrue(self.store.update_work_experience(exp_id, job_title="Senior Dev", id="hijack"))
        titles = [e.job_title for e in self.store.get().work_experience]
        self.assertEqual(titles, ["Senior Dev", "Intern"])
        self.assertEqual(self.store.get().work_experience[0].id, exp_id)

        self.assertTrue(self.store.delete_work_experience(exp_id))
        self.assertFalse(self.store.delete_work_experience(exp_id))
        self.assertEqual([e.id for e in self.store.get().work_experience], [other_id])

    def test_education_and_projects(self):
        edu_id = self.store.add_education({"degree": "BSc", "field": "CS", "institution": "Uni"})
        proj_id = self.store.add_project({"name": "Engine", "technologies": "Python"})
        self.assertTrue(self.store.update_education(edu_id, gpa="4.0"))
        self.assertTrue(self.store.update_project(proj_id, link="https://example.com"))

        with self.assertLogs("apply_assist.store", level="WARNING"):
            self.assertFalse(self.store.update_project("missing", link="x"))

        profile = self.store.get()
        self.assertEqual(profile.education[0].field_of_study, "CS")
        self.assertEqual(profile.education[0].gpa, "4.0")
        self.assertEqual(profile.projects[0].link, "https://example.com")

        self.assertTrue(self.store.delete_education(edu_id))
        self.assertTrue(self.store.delete_project(proj_id))
        self.assertEqual(self.store.get().education, [])

    def test_skills_and_resume_text(self):
        self.store.update_skills(["Python", "SQL"])
        self.store.save_resume_text("CV text")
        profile = self.store.get()
        self.assertEqual(profile.skills, ["Python", "SQL"])
        self.assertEqual(profile.resume_text, "CV text")

    def test_application_history_is_capped_newest_first(self):
        for i in range(MAX_HISTORY + 5):
            self.store.add_application(url=f"https://jobs.example.com/{i}", job_title=f"Job {i}", source="auto_filled")

        history = self.store.get().application_history
        self.assertEqual(len(history), MAX_HISTORY)
        self.assertEqual(history[0]["jobTitle"], f"Job {MAX_HISTORY + 4}")
        self.assertIn("timestamp", history[0])
        self.assertNotIn("jobDescription", history[0])

        self.store.clear_history()
        self.assertEqual(self.store.get().application_history, [])

    def test_settings(self):
        settings = self.store.update_settings(auto_extract=False, bogus=True)
        self.assertFalse(settings.auto_extract)
        self.assertTrue(self.store.get().settings.show_suggestions)

    def test_export_import_round_trip(self):
        self.store.update(first_name="Ada")
        exported = self.store.export_json()

        other = ProfileStore(os.path.join(self.test_dir, "other.json"))
        self.assertTrue(other.import_json(exported))
        self.assertEqual(other.get(), self.store.get())

    def test_import_rejects_bad_json(self):
        with self.assertLogs("apply_assist.store", level="ERROR"):
            self.assertFalse(self.store.import_json("nope"))
        with self.assertLogs("apply_assist.store", level="ERROR"):
            self.assertFalse(self.store.import_json("[1, 2]"))

    def test_import_tolerates_wrongly_typed_sections(self):
        data = json.dumps({"personalInfo": "x", "skills": "Python", "settings": 3, "resumeText": "CV"})
        with self.assertLogs("apply_assist.models", level="WARNING"):
            self.assertTrue(self.store.import_json(data))

        profile = self.store.get()
        self.assertEqual(profile.personal_info, PersonalInfo())
        self.assertEqual(profile.skills, [])
        self.assertTrue(profile.settings.auto_extract)
        self.assertEqual(profile.resume_text, "CV")

    def test_clear(self):
        self.store.update(first_name="Ada")
        self.store.clear()
        self.assertEqual(self.store.get(), Profile())

    def test_default_path_uses_home(self):
        with patch.dict(os.environ, {"APPLY_ASSIST_HOME": self.test_dir}):
            store = ProfileStore()
        self.assertEqual(str(store.path), os.path.join(self.test_dir, "profile.json"))


class TestCompleteness(unittest.TestCase):

    def test_empty(self):
        self.assertEqual(completeness(Profile()), 0)
        self.assertEqual(completeness(None), 0)

    def test_partial(self):
        profile = Profile(
            personal_info=PersonalInfo(first_name="Ada", last_name="L", email="a@b.c", phone="1"),
            work_experience=[WorkExperience()],
            skills=["a", "b", "c"],
        )
        # 30 + 2 + 8 + 4.5 = 44.5
        self.assertEqual(completeness(profile), 45)

    def test_caps(self):
        profile = Profile(
            personal_info=PersonalInfo("a", "b", "c", "d", "e", "f", "g", "h"),
            work_experience=[WorkExperience()] * 10,
            skills=["s"] * 40,
        )
        # 40 + 25 + 15
        self.assertEqual(completeness(profile), 80)


if __name__ == '__main__':
    unittest.main()
