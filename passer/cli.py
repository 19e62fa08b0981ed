"""Passer CLI - Main Entry Point.

Commands:
    parse    - Check a Controller@action string and show its target
    inspect  - Show which controller/action parameters get auto-resolved
    dispatch - Dispatch a single route and render the result to stdout
"""

import logging
import sys
from typing import Optional, Tuple

import click

from . import __version__
from .app import App
from .config import ConfigLoader, DispatchConfig
from .controller import ControllerLocator, ConventionParser
from .di import constructor_parameters, method_parameters
from .faults import Fault, InvalidConventionFault
from .renderers import JSONRenderer, PlainTextRenderer
from .routing import StaticRouteResolver


_CHECK = click.style("✓", fg="green")
_CROSS = click.style("✗", fg="red")


def _fail(message: str) -> None:
    click.echo(f"{_CROSS} {message}", err=True)
    sys.exit(1)


def _dispatch_config(ctx: click.Context, root: Optional[str], package: Optional[str]) -> DispatchConfig:
    """Load layered config; config faults end the command like any other fault."""
    overrides = {}
    if root:
        overrides["root_namespace"] = root
    if package:
        overrides["controllers_package"] = package

    try:
        loader = ConfigLoader.load(
            paths=list(ctx.obj["config_paths"]),
            env_file=ctx.obj["env_file"],
            overrides={"dispatch": overrides} if overrides else None,
        )
        return loader.dispatch_config()
    except Fault as e:
        _fail(str(e))


@click.group()
@click.version_option(version=__version__, prog_name="passer")
@click.option("--verbose", "-v", is_flag=True, help="Log dispatch steps to stderr")
@click.option("--config", "config_paths", multiple=True, help="JSON/YAML config file (glob allowed)")
@click.option("--env-file", type=click.Path(dir_okay=False), default=None, help=".env file with PASSER_* keys")
@click.option("--path", "extra_paths", multiple=True, type=click.Path(file_okay=False),
              help="Directory prepended to sys.path before importing controllers")
@click.pass_context
def cli(ctx, verbose: bool, config_paths: Tuple[str, ...], env_file: Optional[str], extra_paths: Tuple[str, ...]):
    """Controller@action dispatch tooling.

    \b
    Quick start:
      passer parse "Admin\\UserController@show"
      passer inspect "Admin\\UserController@show" --package app.controllers
      passer dispatch "HomeController@index" -p name=world
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_paths"] = config_paths
    ctx.obj["env_file"] = env_file

    for path in reversed(extra_paths):
        if path not in sys.path:
            sys.path.insert(0, path)

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command("parse")
@click.argument("subject")
@click.option("--root", default=None, help="Controller root namespace (default: App\\Controllers)")
@click.pass_context
def parse_cmd(ctx, subject: str, root: Optional[str]):
    """Validate SUBJECT against the Controller@action grammar."""
    config = _dispatch_config(ctx, root, None)
    parsed = ConventionParser(root_namespace=config.root_namespace).parse(subject)
    if parsed is None:
        _fail(str(InvalidConventionFault(subject)))

    click.echo(f"{_CHECK} {subject}")
    click.echo(f"  controller: {parsed.fqn}")
    click.echo(f"  action:     {parsed.action}")


@cli.command("inspect")
@click.argument("subject")
@click.option("--root", default=None, help="Controller root namespace")
@click.option("--package", default=None, help="Python package holding controllers")
@click.pass_context
def inspect_cmd(ctx, subject: str, root: Optional[str], package: Optional[str]):
    """List constructor and action parameters of SUBJECT's controller."""
    config = _dispatch_config(ctx, root, package)
    locator = ControllerLocator(config.root_namespace, package=config.controllers_package)
    parser = ConventionParser(config.root_namespace, locator=locator)

    try:
        target = parser.resolve(subject)
        sections = [
            ("__init__", constructor_parameters(target.controller_class)),
            (target.action, method_parameters(target.controller_class, target.action)),
        ]
    except Fault as e:
        _fail(str(e))

    click.echo(click.style(target.fqn, bold=True))
    for title, specs in sections:
        click.echo(f"  {title}:")
        if not specs:
            click.echo("    (no parameters)")
        for spec in specs:
            source = click.style("injected", fg="green") if spec.is_injectable else "request"
            default = f" = {spec.default!r}" if spec.has_default else ""
            click.echo(f"    {spec.name}: {spec.type_name}{default}  [{source}]")


@cli.command("dispatch")
@click.argument("subject")
@click.option("--param", "-p", "params", multiple=True, help="Route param as key=value (repeatable)")
@click.option("--root", default=None, help="Controller root namespace")
@click.option("--package", default=None, help="Python package holding controllers")
@click.option("--format", "fmt", type=click.Choice(["json", "text"]), default="json", show_default=True)
@click.pass_context
def dispatch_cmd(ctx, subject: str, params: Tuple[str, ...], root: Optional[str],
                 package: Optional[str], fmt: str):
    """Dispatch SUBJECT once and write the rendered result to stdout."""
    route_params = {}
    for item in params:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got '{item}'", param_hint="--param")
        route_params[key] = value

    renderer = JSONRenderer(sys.stdout) if fmt == "json" else PlainTextRenderer(sys.stdout)
    app = App(
        StaticRouteResolver(subject, route_params),
        renderer,
        config=_dispatch_config(ctx, root, package),
    )

    try:
        app.dispatch()
    except Fault as e:
        _fail(str(e))
    click.echo()


def main():
    """Entry point for `passer` command."""
    cli(obj={})


if __name__ == "__main__":
    main()
