"""
Main entry point: collect Ruby sources, extract feature trees, report them.
"""

import sys
import os
import argparse
from typing import List, Optional

# Load environment variables from .env file (if exists)
from dotenv import load_dotenv

load_dotenv()

from core.utils import debug, error, info
from core.context import ProjectContext
from reporter import OutputMode, report_features
from cli.helpers import validate_environment, collect_source_files
from cli.debug import dump_ast_impl, check_parser_impl


def main(
    input_path: str,
    dump_ast: bool = False,
    check_parser: bool = False,
    output_mode: OutputMode = OutputMode.SHORT,
    output_dir: Optional[str] = None,
    only_public: bool = False,
    strict: bool = False,
) -> int:
    """Main entry point for extraction."""
    validate_environment()

    source_files = collect_source_files(input_path)
    if not source_files:
        error(f"No source files found at: {input_path}")
        return 1

    if check_parser:
        return check_parser_impl(source_files)

    if dump_ast:
        dump_ast_impl(source_files)

    if len(source_files) > 1:
        info(f"Extracting features from {len(source_files)} files")

    ctx = ProjectContext(source_files)

    from features.runner import FeatureRunner

    debug("Extracting feature trees...")
    FeatureRunner().run(ctx)

    output_file = None
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
        project_name = os.path.basename(os.path.normpath(input_path))
        ext = ".json" if output_mode == OutputMode.JSON else ".txt"
        output_path = os.path.join(output_dir, f"FEATURES-{project_name}{ext}")
        output_file = open(output_path, "w", encoding="utf-8")
        info(f"Writing results to: {output_path}")

    try:
        report_features(ctx, output_mode, output_file, only_public=only_public)
    finally:
        if output_file:
            output_file.close()

    if ctx.failed_files:
        error(f"{len(ctx.failed_files)} file(s) could not be processed")
        return 1
    if strict and ctx.diagnostics:
        error(f"{len(ctx.diagnostics)} declaration(s) could not be extracted")
        return 1
    return 0


def cli(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Extract class and method feature trees from Ruby code")
    parser.add_argument("input_path", help="Input Ruby source file or directory")
    parser.add_argument("-da", "--dump-ast", action="store_true", help="Dump tree-sitter AST and syntax tree")
    parser.add_argument(
        "-cp", "--check-parser", action="store_true", help="Check parser: validate all files parse correctly"
    )
    parser.add_argument("-o", "--output", choices=["short", "json"], default="short", help="Output format")
    parser.add_argument("-O", "--output-dir", metavar="DIR", help="Save results to a file in DIR")
    parser.add_argument("--public-only", action="store_true", help="Omit protected and private methods")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any declaration could not be extracted",
    )
    args = parser.parse_args(argv)

    sys.exit(
        main(
            args.input_path,
            dump_ast=args.dump_ast,
            check_parser=args.check_parser,
            output_mode=OutputMode(args.output),
            output_dir=args.output_dir,
            only_public=args.public_only,
            strict=args.strict,
        )
    )


if __name__ == "__main__":
    cli()
