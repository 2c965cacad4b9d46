# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import logging
import sys
from pathlib import Path

import click

from irforge.constants import CLI_NAME, PACKAGE_NAME, ExitCode
from irforge.errors import IrforgeError

from .context import ApplicationContext
from .utils import console

logger = logging.getLogger(__name__)


def _version_callback(ctx, param, value):
    if not value or ctx.resilient_parsing:
        return
    import importlib.metadata
    version = importlib.metadata.version(PACKAGE_NAME)
    console.print(f"[bold]{CLI_NAME}[/bold], version {version}")
    ctx.exit()


class LazyGroup(click.Group):
    def __init__(self, *args, lazy_commands=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.lazy_commands = lazy_commands or {}

    def list_commands(self, ctx):
        lazy_names = set(self.lazy_commands.keys())
        manual_names = set(super().list_commands(ctx))
        return sorted(lazy_names | manual_names)

    def get_command(self, ctx, name):
        if name in self.lazy_commands:
            from importlib import import_module
            module_path, attr_name = self.lazy_commands[name]
            module = import_module(module_path)
            return getattr(module, attr_name)

        return super().get_command(ctx, name)


def create_cli() -> click.Group:
    from irforge.cli.commands import COMMAND_MAP

    @click.pass_context
    def callback(
        ctx: click.Context,
        config: Path | None,
        log_level: str | None,
        bin_dir: str | None,
        codegen_tool: Path | None,
        benchmark_tool: Path | None,
    ) -> None:
        ctx.obj = ApplicationContext.from_cli_args(
            config_file=config,
            log_level=log_level,
            overrides={
                "bin_dir": bin_dir,
                "codegen_tool": codegen_tool,
                "benchmark_codegen_tool": benchmark_tool,
            },
        )

    cli = LazyGroup(
        name=CLI_NAME,
        callback=callback,
        context_settings={"help_option_names": ["-h", "--help"]},
        lazy_commands=COMMAND_MAP,
    )

    cli.params.append(click.Option(
        ["-c", "--config"],
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Override project configuration file (default: nearest irforge.yaml)"
    ))
    cli.params.append(click.Option(
        ["-l", "--log-level"],
        type=click.Choice(["quiet", "normal", "verbose", "debug"]),
        default=None,
        metavar="LEVEL",
        help="Set log verbosity (quiet|normal|verbose|debug)"
    ))
    cli.params.append(click.Option(
        ["--bin-dir"],
        type=str,
        help="Output root generated artifacts are declared under"
    ))
    cli.params.append(click.Option(
        ["--codegen-tool"],
        type=click.Path(path_type=Path),
        help="Path to the codegen executable"
    ))
    cli.params.append(click.Option(
        ["--benchmark-tool"],
        type=click.Path(path_type=Path),
        help="Path to the codegen benchmarking executable"
    ))
    cli.params.append(click.Option(
        ["--version"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_version_callback,
        help="Show the version and exit."
    ))

    cli.help = """irforge - Plan hardware codegen build actions.

\b
COMMANDS:
  irforge plan SRC -o FILE.sv           Show the codegen action for one IR file
  irforge benchmark SRC -o FILE.sv      Generate the benchmark script as well
  irforge build TARGETS.yaml            Analyze every target in a targets file

\b
Use --help with any command for detailed options."""

    return cli


def main() -> None:
    """Run the CLI with consistent error handling."""
    try:
        cli = create_cli()
        cli(standalone_mode=False)
    except click.exceptions.Exit as e:
        sys.exit(e.exit_code)
    except click.ClickException as e:
        e.show()
        sys.exit(ExitCode.USAGE)
    except (KeyboardInterrupt, click.exceptions.Abort):
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(ExitCode.INTERRUPTED)
    except IrforgeError as e:
        console.print(e.format_for_console())
        sys.exit(e.exit_code)
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        logger.exception("Unexpected error in %s CLI", CLI_NAME)
        sys.exit(ExitCode.SOFTWARE)


if __name__ == "__main__":
    main()
