"""
Contact dashboard client: live terminal view plus one-shot mutations.
Run: python -m dashboard [watch|list|show|add|update|delete] (from repo root, with .env or env vars set).
"""
import argparse
import asyncio
import logging
import sys

from contactdash.application import (
    Accepted,
    ConnectionFailed,
    ContactFetched,
    ContactsFetched,
    Dashboard,
    Rejected,
)
from contactdash.application.mount_points import ADD_CONTACT_FORM, SUBMIT_BUTTON
from contactdash.config import Settings, load_dotenv_files, load_settings
from contactdash.infrastructure import (
    HttpContactApi,
    Page,
    build_dashboard_page,
    mount_contacts_table,
)
from contactdash.infrastructure.console import build_view, console, contacts_table, run_live

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Contact dashboard client")
    parser.add_argument("-c", "--config-file", help="YAML config file")
    parser.add_argument("--base-url", help="Contact API base URL")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")
    sub = parser.add_subparsers(dest="command")

    watch = sub.add_parser("watch", help="Live dashboard (default)")
    watch.add_argument("--ticks", type=int, help="Stop each poll loop after N ticks")
    watch.add_argument("--contact-interval", type=float, help="Seconds between contact polls")
    watch.add_argument("--time-interval", type=float, help="Seconds between server time polls")

    sub.add_parser("list", help="List contacts with their ids")

    show = sub.add_parser("show", help="Show one contact")
    show.add_argument("id")

    for name, help_text in (("add", "Add a contact"), ("update", "Update a contact")):
        p = sub.add_parser(name, help=help_text)
        if name == "update":
            p.add_argument("id")
        p.add_argument("--first-name", required=True)
        p.add_argument("--last-name", required=True)
        p.add_argument("--email", required=True)

    delete = sub.add_parser("delete", help="Delete a contact")
    delete.add_argument("id")
    return parser


def _settings(args: argparse.Namespace) -> Settings:
    return load_settings(
        args.config_file,
        overrides={
            "base_url": args.base_url,
            "log_level": args.log_level,
            "contact_interval": getattr(args, "contact_interval", None),
            "time_interval": getattr(args, "time_interval", None),
        },
    )


def _new_dashboard(api: HttpContactApi, settings: Settings) -> tuple[Dashboard, Page]:
    page = build_dashboard_page()
    dashboard = Dashboard(
        api,
        page,
        contact_interval=settings.contact_interval,
        time_interval=settings.time_interval,
        mount_contacts_table=mount_contacts_table,
    )
    return dashboard, page


def _print_failure(result: Rejected | ConnectionFailed) -> None:
    message = result.error if isinstance(result, Rejected) else result.reason
    console.print(f"[red]Error:[/red] {message}")


def _form_data(args: argparse.Namespace) -> dict[str, str]:
    return {"firstName": args.first_name, "lastName": args.last_name, "email": args.email}


async def run_command(args: argparse.Namespace, settings: Settings) -> int:
    command = args.command or "watch"
    async with HttpContactApi(settings.base_url, timeout=settings.request_timeout) as api:
        if command == "watch":
            dashboard, page = _new_dashboard(api, settings)
            await run_live(dashboard, page, max_ticks=getattr(args, "ticks", None))
            return 0

        if command == "list":
            result = await api.list_contacts()
            if not isinstance(result, ContactsFetched):
                _print_failure(result)
                return 1
            console.print(contacts_table(result.contacts))
            return 0

        if command == "show":
            result = await api.get_contact(args.id)
            if not isinstance(result, ContactFetched):
                _print_failure(result)
                return 1
            console.print(contacts_table([result.contact]))
            return 0

        if command == "update":
            result = await api.update_contact(args.id, _form_data(args))
            if not isinstance(result, Accepted):
                _print_failure(result)
                return 1
            console.print(f"Contact {args.id} updated")
            return 0

        dashboard, page = _new_dashboard(api, settings)
        await dashboard.refresh_contacts()
        if command == "add":
            form = page.get_element_by_id(ADD_CONTACT_FORM)
            for name, value in _form_data(args).items():
                form.set_value(name, value)
            dashboard.prep_form()
            result = await page.get_element_by_id(SUBMIT_BUTTON).click()
        else:
            result = await dashboard.gateway.delete_contact(args.id)
            if isinstance(result, Accepted):
                console.print(f"Contact {args.id} deleted")
            else:
                _print_failure(result)
        console.print(build_view(page))
        return 0 if isinstance(result, Accepted) else 1


def main(argv: list[str] | None = None) -> int:
    load_dotenv_files()
    args = build_parser().parse_args(argv)
    try:
        settings = _settings(args)
    except ValueError as e:
        logger.error("error: %s", e)
        return 2
    logging.getLogger().setLevel(settings.log_level)
    try:
        return asyncio.run(run_command(args, settings))
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped by user.[/yellow]")
        return 0


if __name__ == "__main__":
    sys.exit(main())
