import click
import logging
import traceback
import yaml
from pathlib import Path

from . import constants
from .builder import (
    boot_image_config,
    collect_make_vars,
    default_bootclasspath,
    format_make_vars,
    system_server_classpath,
    variant_registry,
)
from .datacls import ArchType, BuildContext, NativeBridge, OsType, Target
from .utils import setup_logger, parse_module_levels
from .exceptions import (
    DexpreoptError,
    ConfigurationError,
    DefinitionError,
    SetupError,
)
from . import __version__

ARCH_CHOICES = [arch.value for arch in ArchType]


def setup_logging(debug: bool, log_levels: str = None, log_file: str = None):
    """Setup logger with debug and module-level configuration"""
    module_levels = parse_module_levels(log_levels) if log_levels else None
    setup_logger(debug=debug, module_levels=module_levels, log_file=log_file)


def make_context(config_file: str, device: str, out_dir: str, archs: tuple, native_bridge_archs: tuple) -> BuildContext:
    """Build a BuildContext from command line values"""
    targets = [Target(os=OsType.ANDROID, arch=ArchType(arch)) for arch in archs]
    targets += [
        Target(os=OsType.ANDROID, arch=ArchType(arch), native_bridge=NativeBridge.ENABLED)
        for arch in native_bridge_archs
    ]
    config_path = str(Path(config_file).resolve()) if config_file else None
    logging.debug(f"Build context: device '{device}', out '{out_dir}', targets {[str(t) for t in targets]}")
    return BuildContext(
        device_name=device,
        out_dir=out_dir,
        targets={OsType.ANDROID: targets},
        dexpreopt_global_config=config_path,
    )


def context_options(func):
    """Options shared by every command that resolves a build context"""
    func = click.option('-n', '--native-bridge-arch', 'native_bridge_archs', multiple=True,
                        type=click.Choice(ARCH_CHOICES), help='Architecture supported through native bridge')(func)
    func = click.option('-a', '--arch', 'archs', multiple=True, type=click.Choice(ARCH_CHOICES),
                        help='Device architecture, primary first (repeatable)')(func)
    func = click.option('-o', '--out-dir', default=constants.DEFAULT_OUT_DIR, show_default=True,
                        help='Build output directory')(func)
    func = click.option('-d', '--device', default=constants.DEFAULT_DEVICE_NAME, show_default=True,
                        help='Device name used in output paths')(func)
    func = click.argument('config_file', required=False, type=click.Path(dir_okay=False))(func)
    return func


def handle_errors(func):
    """Decorator to handle common exceptions"""
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ConfigurationError as e:
            _report("Configuration error", e)
        except DefinitionError as e:
            _report("Definition error", e)
        except SetupError as e:
            _report("Setup error", e)
        except DexpreoptError as e:
            _report("An unexpected application error occurred", e)
    return wrapper


def _report(prefix: str, error: Exception):
    logging.error(f"{prefix}: {error}")
    ctx = click.get_current_context()
    if ctx.obj.get('debug'):
        traceback.print_exc()
    raise click.Abort()


@handle_errors
def do_makevars(ctx: BuildContext):
    """Print the exported make variables"""
    click.echo(format_make_vars(collect_make_vars(ctx)), nl=False)


@handle_errors
def do_image(ctx: BuildContext, variant: str):
    """Print one resolved boot image variant as YAML"""
    image = boot_image_config(ctx, variant)
    click.echo(yaml.safe_dump(image.model_dump(mode="json"), sort_keys=False), nl=False)


@handle_errors
def do_classpath(ctx: BuildContext, system_server: bool):
    """Print a classpath, one location per line"""
    locations = system_server_classpath(ctx) if system_server else default_bootclasspath(ctx)
    for location in locations:
        click.echo(location)


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('-l', '--log-levels', help="Comma-separated per-module log levels (e.g., 'img=DEBUG,conf=INFO')")
@click.option('-f', '--log-file', help='Path to log file')
@click.version_option(version=__version__, prog_name='dexpreopt')
@click.pass_context
def cli(ctx, debug, log_levels, log_file):
    """dexpreopt - Resolve boot image and classpath configuration

    \b
    Examples:
      dexpreopt makevars dexpreopt.config -a arm64 -a arm
      dexpreopt image dexpreopt.config -v art -a arm64
      dexpreopt classpath dexpreopt.config --system-server
    """
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug
    setup_logging(debug, log_levels, log_file)


@cli.command()
@context_options
@click.pass_context
def makevars(ctx, config_file, device, out_dir, archs, native_bridge_archs):
    """Print PRODUCT_BOOTCLASSPATH and the other exported variables"""
    do_makevars(make_context(config_file, device, out_dir, archs, native_bridge_archs))


@cli.command()
@context_options
@click.option('-v', '--variant', default='boot', show_default=True,
              type=click.Choice(variant_registry.names()), help='Boot image variant')
@click.pass_context
def image(ctx, config_file, device, out_dir, archs, native_bridge_archs, variant):
    """Print a resolved boot image variant

    \b
    Examples:
      dexpreopt image dexpreopt.config              Default system image variant
      dexpreopt image dexpreopt.config -v apex      JIT-zygote experiment variant
    """
    do_image(make_context(config_file, device, out_dir, archs, native_bridge_archs), variant)


@cli.command()
@context_options
@click.option('-s', '--system-server', is_flag=True, help='Print the system server classpath instead')
@click.pass_context
def classpath(ctx, config_file, device, out_dir, archs, native_bridge_archs, system_server):
    """Print the default bootclasspath"""
    do_classpath(make_context(config_file, device, out_dir, archs, native_bridge_archs), system_server)


def main():
    cli(obj={})
