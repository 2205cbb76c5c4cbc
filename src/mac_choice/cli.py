from __future__ import annotations

import argparse
import logging
import random
import re
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .address import assemble
from .config import Settings
from .errors import InterfaceNotSupplied, MacChoiceError, TooManyParameters
from .interfaces import (
    BACKENDS,
    CommandApplier,
    InterfaceApplier,
    change_address,
    current_hwaddr,
    validate_interface,
)
from .oui import OUILookup, RegistrySource, load_registry, resolve_registry
from .selector import Pager, RichPager, select_from_registry, select_interactive, select_matching
from .survey import load_survey

log = logging.getLogger(__name__)

USAGE_WORD = re.compile(r"^-?-?(usage|help)$")

EXIT_ABORTED = 130
EXIT_UNEXPECTED = 10


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="macchanger-choice",
        usage="%(prog)s [options] interface [ option | search_string ]",
        description="Assign an interface a random mac address with a real, assigned vendor prefix.",
        epilog=(
            "interface      eg. wlan0, eth0\n"
            "option         currently, just 'ouilist'\n"
            "search_string  eg. tablet, lAptOp, Lenovo, mac"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    p.add_argument("words", nargs="*", metavar="interface [ option | search_string ]")
    p.add_argument("-h", "--help", action="store_true", help="Show this message and exit")

    p.add_argument("--survey", help="Survey data file (default ./mac_address_survey.output)")
    p.add_argument("--oui-list", help="Bundled oui list (default ./OUI.list)")
    p.add_argument(
        "--system-oui-list",
        help="System oui list, preferred unless the bundled one is larger "
        "(default /usr/share/macchanger/OUI.list)",
    )
    p.add_argument(
        "--backend",
        choices=list(BACKENDS),
        help="How to set the address: macchanger (default) or iproute2",
    )
    p.add_argument("--dry-run", action="store_true", help="Print the new address but don't apply it")
    p.add_argument("--seed", type=int, help="Seed the random generator (reproducible picks)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def cmd_choose(
    args: argparse.Namespace,
    console: Console,
    settings: Settings,
    *,
    applier: InterfaceApplier | None = None,
    pager: Pager | None = None,
    rng: random.Random | None = None,
    interfaces: list[str] | None = None,
    lookup: OUILookup | None = None,
) -> int:
    words: list[str] = args.words

    if not words or len(words) > 2:
        console.print(build_parser().format_usage().rstrip(), markup=False)
        raise TooManyParameters(len(words))

    interface = words[0]
    if len(words) == 1 and interface == settings.keyword:
        console.print(build_parser().format_usage().rstrip(), markup=False)
        raise InterfaceNotSupplied()

    validate_interface(interface, interfaces)

    rng = rng or random.Random(args.seed)

    if len(words) == 1:
        records = load_survey(settings.survey)
        selection = select_interactive(records, pager or RichPager(console))
    elif words[1] == settings.keyword:
        choice = resolve_registry(settings.registry_paths)
        if choice.source is RegistrySource.FALLBACK and choice.other_line_count is not None:
            console.print(
                "[yellow]NOTE![/yellow] The bundled copy of the oui list seems to be more\n"
                f"       comprehensive than {escape(str(settings.system_oui_list))}\n"
                f"       ({choice.line_count:,} vs. {choice.other_line_count:,} entries). "
                "We will use ours.\n"
                "       You may want to consider updating the system copy.\n"
            )
        records = load_registry(choice.path)
        selection = select_from_registry(records, rng)
        console.print(f"selected: {escape(selection.description)}")
    else:
        records = load_survey(settings.survey)
        selection = select_matching(records, interface, words[1], rng)
        console.print(f"selected: {escape(selection.description)}")

    address = str(assemble(selection.oui, rng))
    console.print(f"new mac string will be: [bold]{address}[/bold]")

    vendor = (lookup or OUILookup()).manufacturer(address)
    if vendor:
        console.print(f"[dim]Registered to:[/dim] {escape(vendor)}")

    if args.dry_run:
        console.print(f"[dim]Dry run:[/dim] {interface} was not changed")
        return 0

    current = current_hwaddr(interface)
    if current:
        console.print(f"[dim]Current:[/dim] {current}")

    change_address(applier or CommandApplier(settings.backend), interface, address)
    console.print(f"{interface} now uses [bold]{address}[/bold]")
    return 0


def run(argv: list[str] | None = None, console: Console | None = None, **collaborators) -> int:
    """
    Parse `argv`, do one selection and return the exit code.
    `collaborators` are passed through to cmd_choose (applier, pager, rng,
    interfaces, lookup).
    """
    argv = sys.argv[1:] if argv is None else argv
    console = console or Console()
    parser = build_parser()

    if argv and USAGE_WORD.match(argv[0]):
        console.print(parser.format_help(), markup=False)
        return 0

    # unknown dash words ("-T210") are search strings, not options
    args, extra = parser.parse_known_args(argv)
    args.words = args.words + extra
    if args.help:
        console.print(parser.format_help(), markup=False)
        return 0

    setup_logging(args.verbose)
    settings = Settings.from_env().with_overrides(
        survey=args.survey,
        system_oui_list=args.system_oui_list,
        oui_list=args.oui_list,
        backend=args.backend,
    )

    try:
        return cmd_choose(args, console, settings, **collaborators)
    except MacChoiceError as e:
        console.print(f"[red]error:[/red] {escape(str(e))}")
        return e.exit_code
    except (KeyboardInterrupt, EOFError):
        console.print("\n[red]aborted[/red], mac address was not changed")
        return EXIT_ABORTED
    except Exception as e:
        log.debug("unexpected failure", exc_info=True)
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return EXIT_UNEXPECTED


def main() -> None:
    raise SystemExit(run())
