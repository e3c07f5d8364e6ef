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
Writes a cover letter as an MS Word (DOCX) document.
"""

import logging
from datetime import date
from typing import List, Optional

from docx import Document
from docx.shared import Pt

from apply_assist.models import Profile

logger = logging.getLogger(__name__)


class CoverLetterWriter:
    """
    Renders profile details and letter paragraphs into a DOCX file.
    An optional template supplies styles; its body content is discarded.
    """
    def __init__(self, template_path: str = None):
        self.template_used = False

        if template_path:
            try:
                logger.info(f"Loading template: {template_path}")
                self.document = Document(template_path)
                self.template_used = True
                self._clear_body_content()
            except Exception as e:
                # python-docx raises a mix of IO, zip and XML errors for bad templates
                logger.error(f"Error loading template: {e}. Falling back to default.")
                self.document = Document()
                self._setup_styles()
        else:
            self.document = Document()
            self._setup_styles()

    def _setup_styles(self):
        style = self.document.styles['Normal']
        style.font.name = 'Calibri'
        style.font.size = Pt(11)

    def _clear_body_content(self):
        """Removes template paragraphs and tables, keeping the section properties."""
        body = self.document.element.body
        for element in list(body):
            if element.tag.endswith('}p') or element.tag.endswith('}tbl'):
                body.remove(element)

    def contact_line(self, profile: Profile) -> str:
        info = profile.personal_info
        parts = [info.location, info.phone, info.email, info.linkedin, info.portfolio]
        return " | ".join(p for p in parts if p)

    def write(self, profile: Profile, paragraphs: List[str], output_filename: str,
              today: Optional[date] = None) -> str:
        """
        Builds the letter and saves it.

        Args:
            profile: Source of the name, headline and contact details.
            paragraphs: Letter body, one entry per paragraph.
            output_filename: Destination .docx path.

        Returns:
            str: The path written.
        """
        doc = self.document
        name = profile.personal_info.full_name.strip()
        today = today or date.today()

        # --- HEADER ---
        if name:
            p = doc.add_paragraph(name)
            try:
                p.style = 'Title'
            except KeyError:
                logger.warning("Template has no 'Title' style, using Normal for the name")

        if profile.work_experience and profile.work_experience[0].job_title:
            headline = doc.add_paragraph()
            headline.add_run(profile.work_experience[0].job_title).bold = True

        contact = self.contact_line(profile)
        if contact:
            doc.add_paragraph(contact)

        doc.add_paragraph()  # Spacer

        # --- DATE ---
        doc.add_paragraph(today.strftime("%B %d, %Y"))
        doc.add_paragraph()

        # --- BODY ---
        doc.add_paragraph("Dear Hiring Manager,")
        for paragraph in paragraphs:
            for line in paragraph.split('\n'):
                if line.strip():
                    doc.add_paragraph(line.strip())

        doc.add_paragraph()
        doc.add_paragraph("Sincerely,")
        if name:
            doc.add_paragraph(name)

        doc.save(output_filename)
        logger.info(f"Cover Letter generated successfully: {output_filename}")
        return output_filename
