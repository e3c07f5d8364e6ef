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
Reads page HTML and plain text from local files or URLs for the CLI.
"""

import logging

import requests

from apply_assist.config import USER_AGENT, get_ca_bundle

logger = logging.getLogger(__name__)


def fetch_html(url: str) -> str:
    """
    Fetches the raw HTML of a page. Returns "" on any failure.
    """
    try:
        headers = {'User-Agent': USER_AGENT}
        response = requests.get(url, headers=headers, timeout=10, verify=get_ca_bundle())
        response.raise_for_status()
        return response.text
    except requests.exceptions.RequestException as e:
        logger.error(f"Failed to fetch {url}: {e}")
        return ""


def read_file(file_path: str) -> str:
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading {file_path}: {e}")
        return ""


def read_source(source: str) -> str:
    """
    Reads HTML or text from a URL (http/https) or a local file path.
    """
    if not source:
        return ""
    if source.startswith(("http://", "https://")):
        logger.info(f"Fetching page: {source}")
        return fetch_html(source)
    return read_file(source)
