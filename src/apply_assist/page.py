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
Turns raw HTML into the plain data the engines consume.

The classifier and extractor never look at a page themselves. This module
parses the markup with BeautifulSoup and produces FieldDescriptors (one per
fillable control) and TextBlocks (one per block-level element).
"""

import logging
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from apply_assist.models import FieldDescriptor, FieldKind, TextBlock

logger = logging.getLogger(__name__)

CONTROL_TAGS = ["input", "textarea", "select"]
BLOCK_TAGS = {"div", "section", "article", "main"}

# Inputs that never hold free text
NON_TEXT_INPUT_TYPES = {"submit", "button", "reset", "image", "checkbox", "radio", "file"}

_INPUT_KINDS = {
    "text": FieldKind.TEXT,
    "email": FieldKind.EMAIL,
    "tel": FieldKind.TEL,
    "url": FieldKind.URL,
    "hidden": FieldKind.HIDDEN,
}


def build_signature(name: str = "", element_id: str = "", placeholder: str = "",
                    label: str = "", aria_label: str = "") -> str:
    """
    Concatenates the identifying texts of a control into one lower-cased string.
    Missing parts are treated as empty strings.
    """
    parts = [name, element_id, placeholder, label, aria_label]
    return " ".join((p or "").lower() for p in parts)


def field_kind(tag: str, input_type: Optional[str] = None) -> FieldKind:
    """Maps an element tag and its type attribute to a FieldKind."""
    tag = (tag or "").lower()
    if tag == "textarea":
        return FieldKind.TEXTAREA
    if tag == "select":
        return FieldKind.SELECT
    if tag != "input":
        return FieldKind.OTHER
    input_type = (input_type or "text").strip().lower() or "text"
    return _INPUT_KINDS.get(input_type, FieldKind.OTHER)


def build_descriptor(control_ref: Any, tag: str, input_type: Optional[str] = None,
                     name: str = "", element_id: str = "", placeholder: str = "",
                     label: str = "", aria_label: str = "") -> FieldDescriptor:
    return FieldDescriptor(
        control_ref=control_ref,
        control_kind=field_kind(tag, input_type),
        signature_text=build_signature(name, element_id, placeholder, label, aria_label),
    )


def _label_for(soup: BeautifulSoup, el) -> str:
    """Finds the label text by `for` attribute, then by an enclosing <label>."""
    el_id = el.get("id")
    if el_id:
        label = soup.find("label", attrs={"for": el_id})
        if label:
            return label.get_text()

    parent = el.find_parent("label")
    if parent:
        return parent.get_text()
    return ""


def _control_ref(el) -> str:
    if el.get("id"):
        return f"#{el['id']}"
    if el.get("name"):
        return f"[name='{el['name']}']"
    position = len(el.find_previous_siblings(el.name)) + 1
    return f"{el.name}:nth-of-type({position})"


def descriptors_from_html(html: str) -> List[FieldDescriptor]:
    """
    Builds one FieldDescriptor per fillable control, in document order.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    descriptors = []

    for el in soup.find_all(CONTROL_TAGS):
        input_type = el.get("type")
        if el.name == "input" and (input_type or "").lower() in NON_TEXT_INPUT_TYPES:
            continue

        descriptors.append(build_descriptor(
            control_ref=_control_ref(el),
            tag=el.name,
            input_type=input_type,
            name=el.get("name", ""),
            element_id=el.get("id", ""),
            placeholder=el.get("placeholder", ""),
            label=_label_for(soup, el),
            aria_label=el.get("aria-label", ""),
        ))

    logger.debug(f"Found {len(descriptors)} form controls")
    return descriptors


def _attributes(el) -> Dict[str, str]:
    attrs = {}
    for key, value in el.attrs.items():
        # bs4 returns multi-valued attributes (class, rel) as lists
        attrs[key] = " ".join(value) if isinstance(value, list) else str(value)
    return attrs


def blocks_from_html(html: str) -> List[TextBlock]:
    """
    Builds TextBlocks for block-level elements and data-automation-id
    containers, in document order. Scripts and styles are dropped first.
    """
    soup = BeautifulSoup(html or "", "html.parser")

    for script in soup(["script", "style", "noscript"]):
        script.decompose()

    blocks = []
    for el in soup.find_all(True):
        if el.name not in BLOCK_TAGS and not el.has_attr("data-automation-id"):
            continue
        attrs = _attributes(el)
        blocks.append(TextBlock(
            text=el.get_text(separator="\n"),
            class_names=attrs.get("class", ""),
            tag=el.name,
            element_id=attrs.get("id", ""),
            attributes=attrs,
        ))

    logger.debug(f"Found {len(blocks)} text blocks")
    return blocks


def page_title(html: str) -> str:
    soup = BeautifulSoup(html or "", "html.parser")
    if soup.title and soup.title.string:
        return soup.title.string.strip()
    return ""
