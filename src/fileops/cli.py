# src/fileops/cli.py
import sys
import argparse
import json
import logging
from pathlib import Path

# Module imports
from fileops.config import DEFAULT_MAX_DEPTH
from fileops.core.bulk import BulkOperation
from fileops.core.refactor import REFACTOR_TYPES
from fileops.core.tree import generate_project_tree
from fileops.engine import FileOperationsEngine
from fileops.errors import FileOpsError


def _split_csv(raw):
    if not raw:
        return None
    return [item.strip() for item in raw.split(",") if item.strip()]


def create_arg_parser():
    parser = argparse.ArgumentParser(
        prog="fileops",
        description="Browse, search, rewrite and reorganise the files of a project.",
    )
    parser.add_argument("--home", type=str, default=None, help="Data root (default: $FILEOPS_HOME or ~/.fileops)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log progress (-vv for debug)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("tree", help="Show the project's file tree")
    p.add_argument("project")
    p.add_argument("-d", "--depth", type=int, default=DEFAULT_MAX_DEPTH, help="Maximum depth")
    p.add_argument("--json", action="store_true", help="Print the tree as JSON")

    p = sub.add_parser("search", help="Search file contents")
    p.add_argument("project")
    p.add_argument("query")
    p.add_argument("--regex", action="store_true")
    p.add_argument("--case-sensitive", action="store_true")
    p.add_argument("--whole-word", action="store_true")
    p.add_argument("--exclude-gitignore", action="store_true", help="Skip .git, node_modules, dist and build")
    p.add_argument("--hidden", action="store_true", help="Include dot-files and dot-directories")
    p.add_argument("-t", "--types", type=str, default=None, help="Comma-separated categories, e.g. code,text")
    p.add_argument("-e", "--extensions", type=str, default=None, help="Comma-separated file extensions")

    p = sub.add_parser("replace", help="Replace text in files (originals are backed up)")
    p.add_argument("project")
    p.add_argument("search")
    p.add_argument("replacement")
    p.add_argument("files", nargs="*", help="Project-relative files")
    p.add_argument("--all", dest="replace_all", action="store_true", help="Every text file in the project")
    p.add_argument("--regex", action="store_true")
    p.add_argument("--case-sensitive", action="store_true")
    p.add_argument("--whole-word", action="store_true")

    p = sub.add_parser("bulk", help="Apply one action to many files")
    p.add_argument("project")
    p.add_argument("operation", choices=[op.value for op in BulkOperation])
    p.add_argument("files", nargs="+")
    p.add_argument("--pattern", type=str, default=None, help="Rename: regex applied to the file name")
    p.add_argument("--replacement", type=str, default=None, help="Rename: replacement text")

    p = sub.add_parser("compare", help="Line diff of two files")
    p.add_argument("project")
    p.add_argument("left")
    p.add_argument("right")

    p = sub.add_parser("refactor", help="Textual refactorings")
    p.add_argument("project")
    p.add_argument("type", choices=REFACTOR_TYPES)
    p.add_argument("files", nargs="+")
    p.add_argument("--old", dest="old_name", required=True)
    p.add_argument("--new", dest="new_name", required=True)

    p = sub.add_parser("history", help="Show or clear the operation history")
    p.add_argument("project")
    p.add_argument("--clear", action="store_true")

    sub.add_parser("types", help="List file categories and bulk operations")
    return parser


def _match_options(args) -> dict:
    return {
        "regex": args.regex,
        "caseSensitive": args.case_sensitive,
        "wholeWord": args.whole_word,
        "excludeGitignore": getattr(args, "exclude_gitignore", False),
        "includeHidden": getattr(args, "hidden", False),
    }


def run_command(engine: FileOperationsEngine, args) -> str:
    """Runs one sub-command and returns what should be printed."""
    if args.command == "tree":
        tree = engine.get_tree(args.project, args.depth)
        if args.json:
            return json.dumps(tree.to_dict(), indent=2)
        return generate_project_tree(tree).rstrip("\n")

    if args.command == "search":
        result = engine.search(
            args.project, args.query, _match_options(args), _split_csv(args.types), _split_csv(args.extensions)
        ).to_dict()
    elif args.command == "replace":
        if not args.replace_all and not args.files:
            raise FileOpsError("Give files to process or --all")
        result = engine.replace(
            args.project, args.search, args.replacement, _match_options(args), args.replace_all, args.files
        ).to_dict()
    elif args.command == "bulk":
        options = {"pattern": args.pattern, "replacement": args.replacement}
        result = engine.bulk(args.project, args.operation, args.files, options).to_dict()
    elif args.command == "compare":
        result = engine.compare(args.project, args.left, args.right).to_dict()
    elif args.command == "refactor":
        result = engine.refactor(args.project, args.type, args.files, args.old_name, args.new_name).to_dict()
    elif args.command == "history":
        if args.clear:
            engine.clear_history(args.project)
            result = {"message": "Operation history cleared"}
        else:
            result = {"history": engine.get_history(args.project)}
    else:
        result = engine.supported_types()
    return json.dumps(result, indent=2, ensure_ascii=False)


def main(argv=None):
    try:
        # 1. Setup
        parser = create_arg_parser()
        args = parser.parse_args(argv)

        level = logging.WARNING
        if args.verbose == 1:
            level = logging.INFO
        elif args.verbose > 1:
            level = logging.DEBUG
        logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)

        # 2. Run
        engine = FileOperationsEngine.from_home(Path(args.home).expanduser() if args.home else None)
        print(run_command(engine, args))

    except FileOpsError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)

    except OSError as e:
        print(f"An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
