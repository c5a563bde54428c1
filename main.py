"""CLI / CI-step entrypoint for the NGI publications list generator."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import uuid
from pathlib import Path

from dotenv import load_dotenv

from github_commit import commit_files
from models import PipelineOptions, PipelineResult
from publications import get_publications

DEFAULT_HTML_PATH = "publications.html"
DEFAULT_JSON_PATH = "publications.json"
DEFAULT_COMMIT_MESSAGE = "Update publications"


def get_input(name: str, default: str = "") -> str:
    """Read an action input (``INPUT_<NAME>`` as set by the Actions runner)."""
    value = os.getenv(f"INPUT_{name.replace(' ', '_').upper()}", "").strip()
    return value or default


def _int_input(name: str, default: int) -> int:
    raw = get_input(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logging.warning("Input %s=%r is not an integer, using default %s", name, raw, default)
        return default


def load_options() -> PipelineOptions:
    """Build pipeline options from the action inputs in the environment."""
    return PipelineOptions(
        download_limit=_int_input("download-limit", 50),
        num=_int_input("num-publications", 5),
        title=get_input("show-title") != "false",
        footer=get_input("show-footer") != "false",
        randomise=get_input("randomise") != "false",
        max_collabs=_int_input("max-collabs", -1),
        tech_dev_is_collab=get_input("tech-dev-is-collab") != "false",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags; defaults come from the action inputs."""
    parser = argparse.ArgumentParser(description="Render the NGI publications list from publications.scilifelab.se")
    parser.add_argument(
        "--commit",
        action=argparse.BooleanOptionalAction,
        default=get_input("commit") == "true",
        help="Commit the HTML and JSON artifacts to the repository's default branch",
    )
    parser.add_argument("--commit-message", default=get_input("commit-message", DEFAULT_COMMIT_MESSAGE))
    parser.add_argument("--html-path", default=get_input("html-path", DEFAULT_HTML_PATH))
    parser.add_argument("--json-path", default=get_input("json-path", DEFAULT_JSON_PATH))
    parser.add_argument(
        "--write-files",
        action="store_true",
        help="Also write the artifacts to --html-path/--json-path on local disk",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Run the pipeline and log the outputs, without writing or committing anything",
    )
    return parser.parse_args(argv)


def set_output(name: str, value: str) -> None:
    """Expose a step output through the ``GITHUB_OUTPUT`` file."""
    output_path = os.getenv("GITHUB_OUTPUT")
    if not output_path:
        logging.info("Output %s (%s chars)", name, len(value))
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with open(output_path, "a", encoding="utf-8") as fh:
        fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


def _annotate(level: str, message: str) -> None:
    """Print a workflow command annotation (``::warning::`` / ``::error::``)."""
    escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    print(f"::{level}::{escaped}")


def _write_artifacts(result: PipelineResult, html_path: str, json_path: str) -> None:
    for path, content in ((html_path, result.html), (json_path, result.json)):
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        logging.info("Wrote %s", target)


def run(args: argparse.Namespace, options: PipelineOptions) -> int:
    """Run one pipeline cycle; returns the process exit status."""
    logging.info("Fetching up to %s publications per facility...", options.download_limit)
    result = get_publications(options)

    set_output("html", result.html)
    set_output("json", result.json)
    set_output("warnings", "\n".join(result.warnings))
    set_output("html-path", args.html_path)
    set_output("json-path", args.json_path)

    if result.warnings:
        joined = "\n".join(result.warnings)
        logging.warning("Warnings occurred:\n%s", joined)
        _annotate("warning", f"Warnings occurred:\n{joined}")

    if args.dry_run:
        logging.info("[dry-run] Would write %s and %s", args.html_path, args.json_path)
        return 0

    try:
        if args.write_files:
            _write_artifacts(result, args.html_path, args.json_path)

        if args.commit:
            token = os.getenv("GITHUB_TOKEN")
            if not token:
                raise RuntimeError("GITHUB_TOKEN is required when commit is enabled")
            repository = os.getenv("GITHUB_REPOSITORY", "")
            if "/" not in repository:
                raise RuntimeError("GITHUB_REPOSITORY is not set")

            commit_files(
                token,
                repository,
                args.commit_message,
                {args.html_path: result.html, args.json_path: result.json},
            )
            logging.info("Successfully committed files to %s", repository)
    except Exception as exc:
        logging.error("%s", exc)
        _annotate("error", str(exc))
        return 1

    return 0


def main(argv: list[str] | None = None) -> None:
    """Initialize config and execute the pipeline."""
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    args = parse_args(argv)
    options = load_options()
    sys.exit(run(args, options))


if __name__ == "__main__":
    main()
