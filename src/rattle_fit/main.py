#!/usr/bin/env python
"""
Command line entry point for the resume fit engine.

Usage:
    rattle-fit settings resume.json --level 3
    rattle-fit plan resume.json --template modern --level 2
    rattle-fit constrain resume.json --level 4 --content
    rattle-fit fit resume.json --max-pages 2
    rattle-fit stats resume.json
    rattle-fit profiles
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, List, Optional

from dotenv import load_dotenv

from rattle_fit.config import FitConfigError, available_profiles, load_fit_policy
from rattle_fit.content_constraints import apply_resume_constraints, get_constraint_stats
from rattle_fit.fit_constraints import apply_fit_constraints
from rattle_fit.fit_loop import DEFAULT_MAX_PAGES, fit_resume
from rattle_fit.fit_settings import FitPolicy, apply_compression_step, get_initial_fit_settings
from rattle_fit.json_loaders import load_resume
from rattle_fit.layout_estimate import LETTER_HEIGHT_IN, page_height_px
from rattle_fit.logger import get_logger, init_logger
from rattle_fit.paths import LOG_DIR, ensure_dirs, resolve_input_path
from rattle_fit.render_plan import DEFAULT_TEMPLATE_ID, create_render_plan
from rattle_fit.utils import write_json

load_dotenv()

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rattle-fit",
        description="Fit resume content to a fixed page layout.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Settings after three compression steps
  rattle-fit settings resume.json --level 3

  # Run the measure/compress loop with the built-in height estimator
  rattle-fit fit resume.json --output output/fitted.json
        """
    )
    parser.add_argument("--policy-file", default=None, help="Fit policy YAML (default: packaged fit_policies.yaml)")
    parser.add_argument("--profile", default=None, help="Policy profile name (default: the file's default_profile)")
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "WARNING"), help="Logging level")
    parser.add_argument("--log-file", action="store_true", help=f"Also write a detailed log under {LOG_DIR}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_resume_command(name: str, help_text: str) -> argparse.ArgumentParser:
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("resume", help="Path to resume JSON")
        sub.add_argument("--output", default=None, help="Write JSON here instead of stdout")
        return sub

    settings = add_resume_command("settings", "Show fit settings at a compression level")
    settings.add_argument("--level", type=int, default=0, help="Compression level")

    plan = add_resume_command("plan", "Build the paginated render plan")
    plan.add_argument("--template", default=DEFAULT_TEMPLATE_ID, help="Template id")
    plan.add_argument("--level", type=int, default=0, help="Compression level")

    constrain = add_resume_command("constrain", "Cut resume content down to a compression level")
    constrain.add_argument("--level", type=int, default=0, help="Compression level")
    constrain.add_argument("--content", action="store_true", help="Apply content constraints (filler, dedupe) first")

    fit = add_resume_command("fit", "Run the fit loop with the layout estimator")
    fit.add_argument("--template", default=DEFAULT_TEMPLATE_ID, help="Template id")
    fit.add_argument("--page-height-in", type=float, default=LETTER_HEIGHT_IN, help="Page height in inches")
    fit.add_argument("--max-pages", type=int, default=DEFAULT_MAX_PAGES, help="Pages the loop may grow to")

    add_resume_command("stats", "Show content statistics")

    subparsers.add_parser("profiles", help="List fit policy profiles")
    return parser


def _run_resume_command(args: argparse.Namespace, policy: FitPolicy) -> Any:
    resume = load_resume(resolve_input_path(args.resume))

    if args.command == "settings":
        settings = apply_compression_step(get_initial_fit_settings(resume, policy), args.level, policy)
        return settings.to_dict()

    if args.command == "plan":
        return create_render_plan(resume, args.template, args.level, policy).to_dict()

    if args.command == "constrain":
        if args.content:
            resume = apply_resume_constraints(resume)
        settings = apply_compression_step(get_initial_fit_settings(resume, policy), args.level, policy)
        return apply_fit_constraints(resume, settings).to_dict()

    if args.command == "fit":
        outcome = fit_resume(
            resume,
            page_height=page_height_px(1, args.page_height_in),
            template_id=args.template,
            policy=policy,
            max_pages=args.max_pages,
        )
        return outcome.to_dict()

    return get_constraint_stats(resume).model_dump()


def _emit(result: Any, output: Optional[str]) -> None:
    if output:
        path = write_json(Path(output), result)
        logger.info(f"Wrote {path}")
    else:
        print(json.dumps(result, indent=2, ensure_ascii=False))


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.log_file:
        ensure_dirs()
        init_logger(LOG_DIR, args.log_level, log_to_file=True)
    else:
        init_logger(log_level=args.log_level)

    try:
        if args.command == "profiles":
            _emit(available_profiles(args.policy_file), None)
            return 0

        policy = load_fit_policy(args.policy_file, args.profile)

        resume_path = resolve_input_path(args.resume)
        if not resume_path.exists():
            logger.error(f"Resume not found: {resume_path}")
            return 1

        _emit(_run_resume_command(args, policy), args.output)
        return 0
    except FitConfigError as e:
        logger.error(str(e))
        return 1
    except ValueError as e:
        # resolve_input_path rejects directories
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
