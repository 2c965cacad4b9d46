# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click
from pydantic import ValidationError

from irforge.build.actions import materialize
from irforge.errors import ConfigurationError

from ..formatters import ActionFormatter, target_to_dict
from ..utils import console, success, validation_details

if TYPE_CHECKING:
    from ..context import ApplicationContext


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("targets_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--write", "write_dir", type=click.Path(file_okay=False, path_type=Path),
              help="Write generated scripts below this directory")
@click.option("--json", "as_json", is_flag=True, help="Print the analyzed targets as JSON")
@click.pass_obj
def build(app: "ApplicationContext", targets_file: Path, write_dir: Path | None, as_json: bool) -> None:
    """TARGETS_FILE: YAML file listing ir_verilog and benchmark_verilog targets.

    Analyzes every target and prints the actions it registers.
    """
    from irforge.rules import analyze_targets, load_targets

    try:
        package, targets = load_targets(targets_file)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid targets in {targets_file}", details=validation_details(e)) from e

    analyzed = analyze_targets(
        targets,
        app.toolchain(),
        package=package,
        bin_dir=app.get_effective_config().bin_dir,
    )

    if as_json:
        payload = [target_to_dict(t, ctx.actions.registered) for t, ctx in analyzed.values()]
        click.echo(json.dumps(payload, indent=2))
    else:
        formatter = ActionFormatter(console)
        for target, ctx in analyzed.values():
            formatter.show(target, ctx.actions.registered)

    if write_dir is not None:
        for _, ctx in analyzed.values():
            for path in materialize(ctx.actions.registered, write_dir):
                if not as_json:
                    success(f"Wrote {path}")
