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
Runtime configuration, read from the environment at call time.

APPLY_ASSIST_HOME (default ./user_content) holds profile.json and logs/.
Outbound HTTPS verifies against the --ca-bundle path if given, else the
first of CA_BUNDLE_ENV_VARS that is set, else the system trust store.
"""

import os
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_HOME = "user_content"
PROFILE_FILENAME = "profile.json"
LOG_FILENAME = "apply_assist.log"

# Checked in order after the CLI override
CA_BUNDLE_ENV_VARS = ("REQUESTS_CA_BUNDLE", "CURL_CA_BUNDLE", "SSL_CERT_FILE")

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36"
)

# Set by the CLI --ca-bundle flag
_ca_bundle_override: str | None = None


def home_dir() -> Path:
    return Path(os.environ.get("APPLY_ASSIST_HOME") or DEFAULT_HOME)


def profile_path() -> Path:
    return home_dir() / PROFILE_FILENAME


def log_dir() -> Path:
    return home_dir() / "logs"


def set_ca_bundle_override(path: str | None) -> None:
    global _ca_bundle_override
    _ca_bundle_override = path
    logger.info(f"CA bundle override set to: {path}")


def get_ca_bundle() -> str | bool:
    """The `verify` argument for requests: a bundle path, or True for system defaults."""
    candidates = [("--ca-bundle", _ca_bundle_override)]
    candidates += [(var, os.environ.get(var)) for var in CA_BUNDLE_ENV_VARS]

    for source, path in candidates:
        if path:
            logger.debug(f"Verifying HTTPS with {path} (from {source})")
            return path
    return True
