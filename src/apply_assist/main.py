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
Main entry point for the Apply Assist CLI.
"""

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from apply_assist import config
from apply_assist.autofill import plan_autofill
from apply_assist.classifier import HiddenPolicy, classify
from apply_assist.extractor import extract, extract_job_title
from apply_assist.ingest import read_file, read_source
from apply_assist.letter import CoverLetterWriter
from apply_assist.models import SuggestionTarget
from apply_assist.page import blocks_from_html, descriptors_from_html, page_title
from apply_assist.store import ProfileStore, completeness
from apply_assist.suggestions import generate_suggestions

logger = logging.getLogger(__name__)

console = Console()


def setup_logging(verbosity: int, quiet: bool = False):
    """
    Configures logging:
    - File: <home>/logs/apply_assist.log (DEBUG)
    - Console: Default=WARNING, -q=ERROR, -v=INFO, -vv=DEBUG
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    try:
        log_dir = config.log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / config.LOG_FILENAME)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        root.addHandler(file_handler)
    except OSError as e:
        sys.stderr.write(f"Cannot open log file: {e}\n")

    if quiet:
        level = logging.ERROR
    elif verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    console_handler = RichHandler(console=Console(stderr=True), show_path=False)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    root.addHandler(console_handler)

    if verbosity < 3:
        logging.getLogger("urllib3").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Job application form assistant")
    parser.add_argument("--store", help="Path to the profile JSON (default: $APPLY_ASSIST_HOME/profile.json)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase output verbosity (-v=INFO, -vv=DEBUG)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only show errors")
    parser.add_argument("--ca-bundle", help="Path to a custom CA certificate bundle for HTTPS verification")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("classify", help="Classify the form fields on a page")
    p.add_argument("source", help="URL or HTML file")
    p.add_argument("--uniform-hidden", action="store_true", help="Never assign hidden inputs to any role")
    p.add_argument("--fill", action="store_true", help="Also show the values that would be filled in")

    p = sub.add_parser("extract", help="Extract the job description from a page")
    p.add_argument("source", help="URL or HTML file")
    p.add_argument("--save", action="store_true", help="Save the description to application history")

    p = sub.add_parser("suggest", help="Suggest text for a form field")
    p.add_argument("target", choices=[t.value for t in SuggestionTarget])
    p.add_argument("--jd", help="Job description text file")

    p = sub.add_parser("cover-letter", help="Write a DOCX cover letter")
    p.add_argument("output", help="Output .docx filename")
    p.add_argument("--template", help="DOCX template to take styles from")
    p.add_argument("--jd", help="Job description text file")

    p = sub.add_parser("profile", help="Show, import or export the stored profile")
    p.add_argument("action", choices=["show", "export", "import", "clear"])
    p.add_argument("file", nargs="?", help="JSON file for import/export")

    return parser


def cmd_classify(args, store: ProfileStore) -> int:
    html = read_source(args.source)
    if not html:
        logger.error(f"Could not read page: {args.source}")
        return 1

    policy = HiddenPolicy.UNIFORM if args.uniform_hidden else HiddenPolicy.COMPATIBLE
    assignment = classify(descriptors_from_html(html), hidden_policy=policy)

    table = Table(title="Classified fields")
    table.add_column("Role")
    table.add_column("Control")
    table.add_column("Kind")
    for role, descriptor in assignment.items():
        table.add_row(role.value, str(descriptor.control_ref), descriptor.control_kind.value)
    console.print(table)

    if args.fill:
        actions = plan_autofill(assignment, store.get())
        fill_table = Table(title="Autofill plan")
        fill_table.add_column("Control")
        fill_table.add_column("Value")
        for action in actions:
            fill_table.add_row(str(action.control_ref), action.value)
        console.print(fill_table)

    return 0


def cmd_extract(args, store: ProfileStore) -> int:
    html = read_source(args.source)
    if not html:
        logger.error(f"Could not read page: {args.source}")
        return 1

    result = extract(blocks_from_html(html))
    if not result:
        logger.error("No job description found on this page")
        return 1

    title = extract_job_title(page_title(html))
    source = result.source_selector or "largest block"
    console.print(Panel(result.text, title=title, subtitle=source))

    if args.save:
        profile = store.get()
        if profile.settings.save_job_descriptions:
            store.add_application(
                url=args.source,
                job_title=title,
                source="manual_extraction",
                job_description=result.text,
            )
            logger.info("Job description saved to application history")
        else:
            logger.warning("Saving job descriptions is disabled in settings")
    return 0


def _read_jd(path: str) -> str:
    return read_file(path) if path else ""


def cmd_suggest(args, store: ProfileStore) -> int:
    suggestions = generate_suggestions(store.get(), args.target, _read_jd(args.jd))
    if not suggestions:
        logger.warning("No suggestions: add work experience and skills to your profile first")
        return 1

    for suggestion in suggestions:
        console.print(Panel(suggestion.text, title=suggestion.label))
    return 0


def cmd_cover_letter(args, store: ProfileStore) -> int:
    profile = store.get()
    suggestions = generate_suggestions(profile, SuggestionTarget.COVER_LETTER, _read_jd(args.jd))
    writer = CoverLetterWriter(template_path=args.template)
    writer.write(profile, [s.text for s in suggestions], args.output)
    console.print(f"Cover letter written to {args.output}")
    return 0


def cmd_profile(args, store: ProfileStore) -> int:
    if args.action == "show":
        profile = store.get()
        info = profile.personal_info
        table = Table(title=f"Profile ({completeness(profile)}% complete)", show_header=False)
        table.add_row("Name", info.full_name.strip())
        table.add_row("Email", info.email)
        table.add_row("Phone", info.phone)
        table.add_row("Location", info.location)
        table.add_row("Experience", str(len(profile.work_experience)))
        table.add_row("Education", str(len(profile.education)))
        table.add_row("Skills", ", ".join(profile.skills))
        table.add_row("Applications", str(len(profile.application_history)))
        console.print(table)
        return 0

    if args.action == "export":
        data = store.export_json()
        if args.file:
            with open(args.file, 'w', encoding='utf-8') as f:
                f.write(data)
            logger.info(f"Exported profile to {args.file}")
        else:
            console.print_json(data)
        return 0

    if args.action == "import":
        if not args.file:
            logger.error("import needs a JSON file")
            return 1
        text = read_file(args.file)
        if not text or not store.import_json(text):
            return 1
        logger.info(f"Imported profile from {args.file}")
        return 0

    store.clear()
    logger.info("Profile cleared")
    return 0


COMMANDS = {
    "classify": cmd_classify,
    "extract": cmd_extract,
    "suggest": cmd_suggest,
    "cover-letter": cmd_cover_letter,
    "profile": cmd_profile,
}


def main(argv=None):
    try:
        sys.exit(_main_cli(argv))
    except KeyboardInterrupt:
        sys.stderr.write("\n\033[31m[-] Cancelled by user\033[0m\n")
        sys.exit(130)


def _main_cli(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, quiet=args.quiet)

    if args.ca_bundle:
        config.set_ca_bundle_override(args.ca_bundle)

    store = ProfileStore(args.store)
    return COMMANDS[args.command](args, store)


if __name__ == "__main__":
    main()
