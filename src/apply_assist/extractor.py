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
Finds the job description on a job-posting page.

Two tiers:
  1. Known job-board selectors (LinkedIn, Indeed, Greenhouse, Lever, Workday,
     then generic ones). Every family is probed on every call since the page
     does not reliably tell us which board rendered it.
  2. The longest block on the page that is not navigation, header or footer.
"""

import logging
import re
from typing import Iterable, List, Optional

from apply_assist.models import ExtractionResult, TextBlock

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 200

SITE_SELECTORS = {
    'linkedin': [
        '.description__text',
        '.show-more-less-html__markup',
        '.jobs-description__content',
        '.jobs-box__html-content',
    ],
    'indeed': [
        '.jobDescriptionText',
        '#jobDescriptionText',
        '.jobsearch-jobDescriptionText',
    ],
    'greenhouse': [
        '#content',
        '.body-text',
        '.job-post-content',
    ],
    'lever': [
        '.section-wrapper',
        '.section.page-centered',
    ],
    'workday': [
        '[data-automation-id="jobPostingDescription"]',
    ],
    'generic': [
        '.job-description',
        '#job-description',
        '[class*="description"]',
        '[class*="jobDescription"]',
        '[class*="job-details"]',
    ],
}

EXCLUDED_CLASS_HINTS = ['nav', 'footer', 'header']

JOB_SITE_PATTERNS = [
    re.compile(r'linkedin\.com/jobs'),
    re.compile(r'indeed\.com/viewjob'),
    re.compile(r'glassdoor\.com/job'),
    re.compile(r'greenhouse\.io'),
    re.compile(r'lever\.co'),
    re.compile(r'myworkdayjobs\.com'),
    re.compile(r'jobs\.'),
    re.compile(r'careers\.'),
    re.compile(r'apply\.'),
]

TITLE_PATTERNS = [
    re.compile(r'(.*?) - (?:LinkedIn|Indeed|Glassdoor)'),
    re.compile(r'(.*?) \|'),
    re.compile(r'(.*?) at .*? \|'),
]

_TAG_RE = re.compile(r'^([a-zA-Z][\w-]*)?(.*)$')
_PART_RE = re.compile(r'\.([\w-]+)|#([\w-]+)|\[([\w-]+)(\*?=)"([^"]*)"\]')


class Selector:
    """
    A single compound CSS selector, matched against TextBlock metadata.

    Supports a tag name, classes (`.a.b`), an id (`#x`), and attribute
    equality / substring tests (`[k="v"]`, `[k*="v"]`). That is all the
    job-board table needs.
    """
    def __init__(self, source: str):
        self.source = source
        tag, rest = _TAG_RE.match(source.strip()).groups()
        self.tag = tag.lower() if tag else None
        self.classes = []
        self.element_id = None
        self.attributes = []  # (name, op, value)

        for cls, el_id, attr, op, value in _PART_RE.findall(rest):
            if cls:
                self.classes.append(cls)
            elif el_id:
                self.element_id = el_id
            elif attr:
                self.attributes.append((attr, op, value))

    def _attribute(self, block: TextBlock, name: str) -> Optional[str]:
        if name == 'class':
            return block.class_names
        if name == 'id':
            return block.element_id
        return (block.attributes or {}).get(name)

    def matches(self, block: TextBlock) -> bool:
        if block.selector_tag is not None and block.selector_tag == self.source:
            return True

        if self.tag and (block.tag or '').lower() != self.tag:
            return False

        if self.classes:
            block_classes = (block.class_names or '').split()
            if not all(c in block_classes for c in self.classes):
                return False

        if self.element_id is not None and block.element_id != self.element_id:
            return False

        for name, op, value in self.attributes:
            actual = self._attribute(block, name)
            if actual is None:
                return False
            if op == '=' and actual != value:
                return False
            if op == '*=' and value not in actual:
                return False

        return True

    def __repr__(self):
        return f"Selector({self.source!r})"


_COMPILED = [
    (family, [Selector(s) for s in selectors])
    for family, selectors in SITE_SELECTORS.items()
]


def clean_text(text: str) -> str:
    """Collapses whitespace runs to one space, newline runs to one newline, and trims."""
    text = re.sub(r'\s+', ' ', text or '')
    text = re.sub(r'\n+', '\n', text)
    return text.strip()


def _qualifies(text: str) -> bool:
    # Rendered length, surrounding whitespace included; the fallback tier trims
    return len(text or '') > MIN_DESCRIPTION_LENGTH


def _is_chrome(block: TextBlock) -> bool:
    class_names = (block.class_names or '').lower()
    return any(hint in class_names for hint in EXCLUDED_CLASS_HINTS)


def _valid_blocks(blocks) -> List[TextBlock]:
    valid = []
    for index, block in enumerate(blocks or []):
        if not isinstance(block, TextBlock) or not isinstance(block.text, str):
            logger.warning(f"Skipping malformed text block at position {index}: {block!r}")
            continue
        valid.append(block)
    return valid


def extract(blocks: Iterable[TextBlock]) -> ExtractionResult:
    """
    Returns the block most likely to be the job description.

    Args:
        blocks: Text-bearing page elements in document order.

    Returns:
        ExtractionResult: Cleaned text plus the selector that found it, or
        an empty result when nothing exceeds the minimum length.
    """
    blocks = _valid_blocks(blocks)

    # 1. Known job-board selectors
    for family, selectors in _COMPILED:
        for selector in selectors:
            for block in blocks:
                if selector.matches(block) and _qualifies(block.text):
                    logger.info(f"Found job description with {family} selector: {selector.source}")
                    return ExtractionResult(
                        text=clean_text(block.text),
                        source_selector=selector.source,
                        site_family=family,
                    )

    logger.info("No specific job description found, trying fallback...")

    # 2. Largest non-navigation block
    largest = ''
    for block in blocks:
        text = block.text.strip()
        if len(text) > len(largest) and len(text) > MIN_DESCRIPTION_LENGTH:
            if not _is_chrome(block):
                largest = text

    if not largest:
        logger.info("No job description found on page")
        return ExtractionResult.empty()

    return ExtractionResult(text=clean_text(largest))


extract_description = extract


def extract_job_title(page_title: str) -> str:
    """
    Derives a job title from a browser page title such as
    "Senior Engineer - LinkedIn" or "Senior Engineer | Acme Careers".
    """
    if not page_title:
        return 'Unknown Position'

    for pattern in TITLE_PATTERNS:
        match = pattern.search(page_title)
        if match:
            return match.group(1).strip()

    return page_title


def is_job_posting_url(url: str) -> bool:
    if not url:
        return False
    return any(pattern.search(url) for pattern in JOB_SITE_PATTERNS)
