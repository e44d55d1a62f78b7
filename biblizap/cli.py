"""Command-line interface handlers."""

import argparse
import json
from pathlib import Path
from typing import Optional, Sequence

from biblizap.config import Settings
from biblizap.console import ConsoleUI, configure_logging
from biblizap.engine.columns import UnknownColumnError, column_keys
from biblizap.engine.filters import AbsentFieldPolicy
from biblizap.engine.paginator import PaginationError
from biblizap.engine.view import ResultsView, create_view
from biblizap.exporters.service import ExportError, ExportFormat
from biblizap.models.record import RecordFormatError, parse_records

# Header clicks needed to reach each direction from the unsorted state.
_SORT_CLICKS = {"asc": 1, "desc": 2}


class BibliZapCLI:
    """CLI application for browsing and exporting a saved search result."""

    def __init__(self, settings: Optional[Settings] = None, ui: Optional[ConsoleUI] = None):
        """Initialize CLI with settings.

        Args:
            settings: Application settings (loads from disk if not provided)
            ui: Console output (a default Rich console if not provided)
        """
        self.settings = settings or Settings.load()
        self.ui = ui or ConsoleUI()

    def load_view(self, path: Path, policy: Optional[str] = None) -> ResultsView:
        """Read a search result file into a fresh results view.

        Raises:
            RecordFormatError: If the file is not a valid result document.
            OSError: If the file cannot be read.
        """
        with open(path, "r", encoding="utf-8") as f:
            try:
                document = json.load(f)
            except json.JSONDecodeError as e:
                raise RecordFormatError(f"{path} is not valid JSON: {e}") from e

        view = create_view(self.settings)
        if policy:
            view.set_policy(AbsentFieldPolicy(policy))
        view.load(parse_records(document))
        return view

    def cmd_show(
        self,
        path: Path,
        search: str = "",
        filters: Sequence[str] = (),
        sort: Optional[str] = None,
        page: int = 1,
        page_size: Optional[int] = None,
        policy: Optional[str] = None,
        select: Sequence[str] = (),
    ) -> None:
        """Display one page of the result file.

        Args:
            path: JSON file holding the search result
            search: Global search text
            filters: ``column=text`` column filters
            sort: ``column`` or ``column:asc|desc``
            page: 1-based page number
            page_size: Articles per page
            policy: Absent-field policy override
            select: DOIs to mark as selected
        """
        view = self.load_view(path, policy)

        if sort:
            column, _, direction = sort.partition(":")
            for _ in range(_SORT_CLICKS[direction or "asc"]):
                view.column_sort_click(column)
        if search:
            view.global_filter_input(search)
        for column, text in (_split_filter(f) for f in filters):
            view.column_filter_input(column, text)
        for doi in select:
            view.selection_toggle(doi, True)
        if page_size is not None:
            view.page_size_select(page_size)
        if page < 1:
            raise PaginationError(f"Page must be 1 or greater, got {page}")
        if page > 1:
            view.page_select(page - 1)

        self.ui.display_results(view.snapshot())

    def cmd_export(
        self,
        path: Path,
        fmt: ExportFormat,
        select: Sequence[str] = (),
        out_dir: Optional[Path] = None,
    ) -> Path:
        """Export the whole result file, or only the selected DOIs.

        Returns:
            Path to the written file
        """
        view = self.load_view(path)
        for doi in select:
            view.selection_toggle(doi, True)

        missing = [doi for doi in select if view.store.find(doi) is None]
        if missing:
            self.ui.warning(f"Not in the result set: {', '.join(missing)}")

        result = view.export_click(fmt)
        filepath = view.exporter.save(result, out_dir or self.settings.export_dir)
        self.ui.exported(result.count, filepath)
        return filepath


def _split_filter(value: str) -> tuple[str, str]:
    column, sep, text = value.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"Filter must look like column=text, got {value!r}")
    return column.strip(), text


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="biblizap",
        description="Browse, filter and export BibliZap search results",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: from settings.yaml)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # show command
    show_parser = subparsers.add_parser("show", help="Display a page of results")
    show_parser.add_argument("file", type=Path, help="Search result JSON file")
    show_parser.add_argument("--search", default="", help="Search all fields")
    show_parser.add_argument(
        "--filter",
        action="append",
        default=[],
        dest="filters",
        metavar="COLUMN=TEXT",
        help=f"Column filter, repeatable. Columns: {', '.join(column_keys())}",
    )
    show_parser.add_argument(
        "--sort",
        default=None,
        metavar="COLUMN[:asc|desc]",
        help="Sort by a column (default direction: asc)",
    )
    show_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    show_parser.add_argument("--page-size", type=int, default=None, help="Articles per page")
    show_parser.add_argument(
        "--policy",
        choices=[p.value for p in AbsentFieldPolicy],
        default=None,
        help="How column filters treat missing fields",
    )
    show_parser.add_argument(
        "--select",
        action="append",
        default=[],
        metavar="DOI",
        help="Mark a DOI as selected, repeatable",
    )

    # export command
    export_parser = subparsers.add_parser("export", help="Export results to a file")
    export_parser.add_argument("file", type=Path, help="Search result JSON file")
    export_parser.add_argument(
        "--format",
        default="xlsx",
        choices=["xlsx", "ris", "bib", "bibtex"],
        dest="fmt",
        help="Output format (default: xlsx)",
    )
    export_parser.add_argument(
        "--select",
        action="append",
        default=[],
        metavar="DOI",
        help="Export only these DOIs, repeatable (default: everything)",
    )
    export_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output directory (default: settings export_dir)",
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Process exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    cli = BibliZapCLI()
    configure_logging(args.log_level or cli.settings.log_level)

    try:
        if args.command == "show":
            if args.sort:
                direction = args.sort.partition(":")[2]
                if direction and direction not in _SORT_CLICKS:
                    parser.error(f"Sort direction must be asc or desc, got {direction!r}")
            cli.cmd_show(
                args.file,
                search=args.search,
                filters=args.filters,
                sort=args.sort,
                page=args.page,
                page_size=args.page_size,
                policy=args.policy,
                select=args.select,
            )
        elif args.command == "export":
            cli.cmd_export(
                args.file,
                ExportFormat.parse(args.fmt),
                select=args.select,
                out_dir=args.out,
            )
    except (OSError, RecordFormatError, ExportError) as e:
        cli.ui.error(str(e))
        return 1
    except UnknownColumnError as e:
        cli.ui.error(f"Unknown column: {e.args[0]}")
        return 2
    except (PaginationError, ValueError, argparse.ArgumentTypeError) as e:
        cli.ui.error(str(e))
        return 2
    return 0
