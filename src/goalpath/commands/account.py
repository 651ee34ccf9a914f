"""Account commands: sign up or sign in from the terminal."""

import click
import questionary

from ..auth.credentials import AuthMethod
from ..services.app_session import AppSession
from .base import async_command, echo_info, echo_toasts, ensure_configured


async def prompt_credentials(
    method: str | None, identifier: str | None, password: str | None
) -> tuple[AuthMethod, str, str]:
    """Ask for whatever was not given on the command line."""
    if method is None:
        method = await questionary.select(
            "Sign in with",
            choices=[
                questionary.Choice("Email address", AuthMethod.EMAIL),
                questionary.Choice("Phone number", AuthMethod.PHONE),
            ],
        ).ask_async()
    method = AuthMethod(method)

    if identifier is None:
        label = "Email" if method is AuthMethod.EMAIL else "Phone number"
        identifier = await questionary.text(f"{label}:").ask_async()
    if password is None:
        password = await questionary.password("Password:").ask_async()

    return method, identifier or "", password or ""


async def open_session(ctx: click.Context) -> AppSession:
    from ..clients.supabase import SupabaseBackend

    settings = ensure_configured(ctx)
    backend = await SupabaseBackend.connect(settings.supabase_url, settings.supabase_key)
    app_session = AppSession(backend)
    await app_session.start()
    return app_session


def report_landing(app_session: AppSession) -> None:
    """Say which page the browser would land on next."""
    target = app_session.context.take_redirect() or app_session.context.current_route
    echo_info(f"Next page: {target}")
    if app_session.state.profile_complete is False:
        click.echo("Your profile is incomplete. Finish it in the web app.")


@click.command()
@click.option("--method", type=click.Choice([m.value for m in AuthMethod]), help="Identifier type")
@click.option("--identifier", help="Email address or phone number")
@click.option("--password", help="Password (prompted when omitted)")
@click.pass_context
@async_command
async def signup(ctx, method: str | None, identifier: str | None, password: str | None):
    """Create a new account.

    Phone numbers are registered under a placeholder email address, with the
    number kept as the account's username.
    """
    method, identifier, password = await prompt_credentials(method, identifier, password)
    app_session = await open_session(ctx)
    try:
        user = await app_session.sign_up(identifier, password, method)
        echo_toasts(app_session.context.drain_toasts())
        if user is None:
            ctx.exit(1)
        report_landing(app_session)
    finally:
        await app_session.dispose()


@click.command()
@click.option("--method", type=click.Choice([m.value for m in AuthMethod]), help="Identifier type")
@click.option("--identifier", help="Email address or phone number")
@click.option("--password", help="Password (prompted when omitted)")
@click.pass_context
@async_command
async def signin(ctx, method: str | None, identifier: str | None, password: str | None):
    """Sign in and check whether the profile still needs completing."""
    method, identifier, password = await prompt_credentials(method, identifier, password)
    app_session = await open_session(ctx)
    try:
        signed_in = await app_session.sign_in(identifier, password, method)
        echo_toasts(app_session.context.drain_toasts())
        if not signed_in:
            ctx.exit(1)
        report_landing(app_session)
    finally:
        await app_session.dispose()
