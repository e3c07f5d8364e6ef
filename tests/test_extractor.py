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

import unittest

from apply_assist.extractor import (
    Selector,
    clean_text,
    extract,
    extract_description,
    extract_job_title,
    is_job_posting_url,
)
from apply_assist.models import ExtractionResult, TextBlock


def text_of(length, char="a"):
    return char * length


class TestSelector(unittest.TestCase):

    def test_class_selector(self):
        s = Selector(".description__text")
        self.assertTrue(s.matches(TextBlock("x", class_names="foo description__text")))
        self.assertFalse(s.matches(TextBlock("x", class_names="description__text-other")))

    def test_compound_class_selector(self):
        s = Selector(".section.page-centered")
        self.assertTrue(s.matches(TextBlock("x", class_names="page-centered section")))
        self.assertFalse(s.matches(TextBlock("x", class_names="section")))

    def test_id_selector(self):
        s = Selector("#content")
        self.assertTrue(s.matches(TextBlock("x", element_id="content")))
        self.assertFalse(s.matches(TextBlock("x", class_names="content")))

    def test_attribute_selectors(self):
        exact = Selector('[data-automation-id="jobPostingDescription"]')
        self.assertTrue(exact.matches(TextBlock("x", attributes={"data-automation-id": "jobPostingDescription"})))
        self.assertFalse(exact.matches(TextBlock("x", attributes={"data-automation-id": "other"})))
        self.assertFalse(exact.matches(TextBlock("x")))

        contains = Selector('[class*="description"]')
        self.assertTrue(contains.matches(TextBlock("x", class_names="job-description-wrapper")))
        self.assertFalse(contains.matches(TextBlock("x", class_names="summary")))

    def test_tag_selector(self):
        s = Selector("article")
        self.assertTrue(s.matches(TextBlock("x", tag="ARTICLE")))
        self.assertFalse(s.matches(TextBlock("x", tag="div")))

    def test_selector_tag_shortcut(self):
        s = Selector(".jobs-box__html-content")
        self.assertTrue(s.matches(TextBlock("x", selector_tag=".jobs-box__html-content")))


class TestExtract(unittest.TestCase):

    def test_threshold_is_exclusive(self):
        result = extract([TextBlock(text_of(199), class_names="description__text")])
        self.assertFalse(result)
        self.assertEqual(result, ExtractionResult.empty())

        result = extract([TextBlock(text_of(200), class_names="description__text")])
        self.assertFalse(result)

        result = extract([TextBlock(text_of(201), class_names="description__text")])
        self.assertEqual(result.text, text_of(201))
        self.assertEqual(result.source_selector, ".description__text")
        self.assertEqual(result.site_family, "linkedin")

    def test_site_tier_counts_rendered_whitespace(self):
        result = extract([TextBlock(text_of(199) + "\n\n", class_names="description__text")])
        self.assertEqual(result.text, text_of(199))
        self.assertEqual(result.source_selector, ".description__text")

        # The fallback tier trims before measuring
        self.assertFalse(extract([TextBlock(text_of(199) + "\n\n", tag="div")]))

    def test_site_tier_beats_longer_fallback(self):
        blocks = [
            TextBlock(text_of(1000, "b"), tag="div"),
            TextBlock(text_of(250), class_names="jobDescriptionText", tag="div"),
        ]
        result = extract(blocks)
        self.assertEqual(result.text, text_of(250))
        self.assertEqual(result.source_selector, ".jobDescriptionText")
        self.assertEqual(result.site_family, "indeed")

    def test_family_table_order_not_document_order(self):
        blocks = [
            TextBlock(text_of(300, "g"), class_names="job-description"),
            TextBlock(text_of(300, "w"), attributes={"data-automation-id": "jobPostingDescription"}),
        ]
        result = extract(blocks)
        self.assertEqual(result.site_family, "workday")
        self.assertEqual(result.text, text_of(300, "w"))

    def test_selector_order_within_family(self):
        blocks = [
            TextBlock(text_of(300, "x"), class_names="job-post-content"),
            TextBlock(text_of(300, "y"), element_id="content"),
        ]
        result = extract(blocks)
        self.assertEqual(result.source_selector, "#content")

    def test_short_selector_match_falls_through_to_next_block(self):
        blocks = [
            TextBlock("Short teaser", class_names="description__text"),
            TextBlock(text_of(300), class_names="description__text"),
        ]
        self.assertEqual(extract(blocks).text, text_of(300))

    def test_fallback_picks_longest(self):
        blocks = [
            TextBlock(text_of(300, "a"), tag="div"),
            TextBlock(text_of(500, "b"), tag="section"),
            TextBlock(text_of(400, "c"), tag="article"),
        ]
        result = extract(blocks)
        self.assertEqual(result.text, text_of(500, "b"))
        self.assertIsNone(result.source_selector)
        self.assertIsNone(result.site_family)

    def test_fallback_skips_navigation_chrome(self):
        blocks = [
            TextBlock(text_of(900, "n"), class_names="TopNavBar"),
            TextBlock(text_of(800, "f"), class_names="site-footer"),
            TextBlock(text_of(700, "h"), class_names="page-HEADER"),
            TextBlock(text_of(300, "m"), class_names="main"),
        ]
        self.assertEqual(extract(blocks).text, text_of(300, "m"))

    def test_fallback_ties_keep_first(self):
        blocks = [
            TextBlock(text_of(300, "a")),
            TextBlock(text_of(300, "b")),
        ]
        self.assertEqual(extract(blocks).text, text_of(300, "a"))

    def test_nothing_long_enough(self):
        blocks = [TextBlock("Apply now"), TextBlock(text_of(150), class_names="job-description")]
        self.assertEqual(extract(blocks), ExtractionResult.empty())
        self.assertEqual(extract([]), ExtractionResult.empty())
        self.assertEqual(extract(None), ExtractionResult.empty())

    def test_result_is_cleaned(self):
        body = "About the role\n\n\n   We build   things.\t" + text_of(250)
        result = extract([TextBlock("  " + body + "  \n", class_names="job-description")])
        self.assertEqual(result.text, "About the role We build things. " + text_of(250))

    def test_malformed_blocks_are_skipped(self):
        with self.assertLogs("apply_assist.extractor", level="WARNING"):
            result = extract([{"text": text_of(300)}, TextBlock(text_of(300), class_names="body-text")])
        self.assertEqual(result.source_selector, ".body-text")

    def test_idempotent(self):
        blocks = [TextBlock(text_of(300), tag="div"), TextBlock(text_of(250), class_names="body-text")]
        self.assertEqual(extract(blocks), extract(blocks))

    def test_alias(self):
        self.assertIs(extract_description, extract)


class TestHelpers(unittest.TestCase):

    def test_clean_text(self):
        self.assertEqual(clean_text("  a \n\n b\t\tc  "), "a b c")
        self.assertEqual(clean_text(""), "")

    def test_extract_job_title(self):
        self.assertEqual(extract_job_title("Senior Engineer - LinkedIn"), "Senior Engineer")
        self.assertEqual(extract_job_title("Data Analyst | Acme Careers"), "Data Analyst")
        self.assertEqual(extract_job_title("Product Manager"), "Product Manager")
        self.assertEqual(extract_job_title(""), "Unknown Position")

    def test_is_job_posting_url(self):
        self.assertTrue(is_job_posting_url("https://www.linkedin.com/jobs/view/123"))
        self.assertTrue(is_job_posting_url("https://boards.greenhouse.io/acme/jobs/1"))
        self.assertTrue(is_job_posting_url("https://careers.example.com/posting/9"))
        self.assertFalse(is_job_posting_url("https://example.com/blog"))
        self.assertFalse(is_job_posting_url(""))


if __name__ == '__main__':
    unittest.main()
