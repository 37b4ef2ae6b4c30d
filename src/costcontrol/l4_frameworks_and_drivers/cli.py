"""CLI entry point for costcontrol."""

from __future__ import annotations

import asyncio
import sys
from typing import Any, NoReturn

import click
import yaml

from costcontrol import __version__


def _dump(data: Any) -> str:
    from pydantic_core import to_jsonable_python  # noqa: PLC0415 -- deferred: not needed for --help

    text = yaml.safe_dump(to_jsonable_python(data), sort_keys=False, allow_unicode=True)
    if text.endswith('\n...\n'):  # scalar document end marker
        text = text[:-4]
    return text.rstrip('\n')


def _fail(message: str) -> NoReturn:
    click.echo(f'Error: {message}', err=True)
    sys.exit(1)


@click.group()
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Path to YAML config file.',
)
@click.option(
    '-d',
    '--data-dir',
    default=None,
    type=click.Path(file_okay=False),
    help='Directory holding stored settings and the sync file.',
)
@click.option('--debug-log', is_flag=True, help='Write a debug log into the data directory.')
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx: click.Context, config_path, data_dir, debug_log):
    """costcontrol -- operator configuration and per-SIM settings."""
    from costcontrol.l3_interface_adapters.gateways.yaml_config_loader import (  # noqa: PLC0415 -- deferred: yaml stack not loaded on --help
        YamlConfigLoader,
    )
    from costcontrol.l4_frameworks_and_drivers.config import build_app_config  # noqa: PLC0415 -- deferred: not needed for --help
    from costcontrol.l4_frameworks_and_drivers.container import DependencyContainer  # noqa: PLC0415 -- deferred: not needed for --help

    try:
        raw = YamlConfigLoader().load_raw(config_path, data_dir=data_dir)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))
    config = build_app_config(raw)

    container = DependencyContainer(config)
    if debug_log:
        from costcontrol.l4_frameworks_and_drivers.logging_setup import setup_file_logging  # noqa: PLC0415 -- deferred: opt-in

        setup_file_logging(container.data_dir)
    ctx.obj = container


@cli.command()
@click.pass_obj
def show(container):
    """Print the operator configuration, application mode and settings."""
    manager = container.manager
    state = asyncio.run(manager.request_all())
    if state is None:
        _fail('No network info for the data SIM; set sim.mcc and sim.mnc in the config file.')
    click.echo(
        _dump(
            {
                'iccid': state.icc_id,
                'mode': manager.get_application_mode(),
                'configuration': state.configuration.model_dump(),
                'settings': state.settings.model_dump(by_alias=True),
            }
        )
    )


@cli.command()
@click.pass_obj
def mode(container):
    """Print the application mode."""
    manager = container.manager
    state = asyncio.run(manager.request_all())
    if state is None:
        _fail('No network info for the data SIM; set sim.mcc and sim.mnc in the config file.')
    click.echo(manager.get_application_mode())


@cli.command()
@click.argument('name')
@click.pass_obj
def get(container, name):
    """Print the value of setting NAME."""
    from costcontrol.l1_entities.errors import UnknownSettingError  # noqa: PLC0415 -- deferred: not needed for --help

    manager = container.manager

    async def _run():
        identity = await container.identity_resolver.get_active_identity()
        await manager.request_settings(identity.icc_id)
        return manager.option(name)

    try:
        value = asyncio.run(_run())
    except UnknownSettingError:
        _fail(f'Unknown setting: {name}')
    click.echo(_dump(value))


@cli.command(name='set')
@click.argument('name')
@click.argument('value')
@click.pass_obj
def set_(container, name, value):
    """Set setting NAME to VALUE (parsed as YAML) and notify other processes."""
    from pydantic import ValidationError  # noqa: PLC0415 -- deferred: not needed for --help

    from costcontrol.l1_entities.errors import UnknownSettingError  # noqa: PLC0415 -- deferred: not needed for --help

    manager = container.manager
    parsed = yaml.safe_load(value)
    changes: list[tuple[Any, Any]] = []

    def _record(new_value, old_value, _name, _settings):
        changes.append((old_value, new_value))

    async def _run():
        identity = await container.identity_resolver.get_active_identity()
        await manager.request_settings(identity.icc_id)
        manager.observe(name, _record, skip_initial_call=True)
        await manager.set_option({name: parsed})

    try:
        asyncio.run(_run())
    except UnknownSettingError:
        _fail(f'Unknown setting: {name}')
    except ValidationError as e:
        _fail(f'Invalid value for {name}: {e.errors()[0]["msg"]}')

    for old_value, new_value in changes:
        click.echo(f'{name}: {_dump(old_value)} -> {_dump(new_value)}')


@cli.command()
@click.option('-i', '--interval', default=None, type=float, help='Polling interval in seconds.')
@click.pass_obj
def watch(container, interval):
    """Print settings changes made by other processes until interrupted."""
    from costcontrol.l1_entities.settings import SETTING_NAMES  # noqa: PLC0415 -- deferred: not needed for --help

    manager = container.manager
    poll_interval = interval if interval is not None else container.config.sync.poll_interval

    def _print_change(new_value, old_value, name, _settings):
        click.echo(f'{name}: {_dump(old_value)} -> {_dump(new_value)}')

    async def _run():
        identity = await container.identity_resolver.get_active_identity()
        await manager.request_settings(identity.icc_id)
        for name in sorted(SETTING_NAMES):
            manager.observe(name, _print_change, skip_initial_call=True)
        click.echo(f'Watching {container.sync_channel.path} (Ctrl+C to stop)', err=True)
        await container.sync_channel.watch(poll_interval)

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        pass
