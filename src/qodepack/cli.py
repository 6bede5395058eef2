#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""qodepack command-line interface entrypoint."""

from __future__ import annotations

import os
import sys

from attrs import evolve
import click
from provide.foundation import CLIContext, TelemetryConfig, get_hub
from provide.foundation.utils import get_version

from qodepack.commands.init import init_command
from qodepack.commands.package import pack_command
from qodepack.commands.patch import patch_command
from qodepack.config import QodePackRuntimeConfig

# Set up Windows Unicode support early
if sys.platform == "win32":
    # Ensure UTF-8 encoding for Windows console
    if not os.environ.get("PYTHONIOENCODING"):
        os.environ["PYTHONIOENCODING"] = "utf-8"
    if not os.environ.get("PYTHONUTF8"):
        os.environ["PYTHONUTF8"] = "1"

__version__ = get_version("qodepack", caller_file=__file__)


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(
    __version__,
    "-V",
    "--version",
    prog_name="qodepack",
    message="%(prog)s version %(version)s",
)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Package NodeGUI applications into redistributable Windows folders.

    Configure logging via environment variables:
    - QODEPACK_LOG_LEVEL: Set log level for qodepack (trace, debug, info, warning, error)
    - QODEPACK_SETUP_LOG_LEVEL: Control Foundation's initialization logs
    - PROVIDE_LOG_FILE: Write logs to file

    Qt and qode locations:
    - QT_INSTALL_DIR: Qt installation to deploy (default: the miniqt download)
    - QODEPACK_QODE_PATH: qode binary (default: node_modules/@nodegui/qode)
    """
    ctx.ensure_object(dict)

    runtime_config = QodePackRuntimeConfig.from_env()
    cli_ctx = CLIContext.from_env()
    base_telemetry = TelemetryConfig.from_env()

    telemetry_config = evolve(
        base_telemetry,
        service_name="qodepack",
        logging=evolve(
            base_telemetry.logging,
            default_level=runtime_config.log_level,  # type: ignore[arg-type]
        ),
    )

    hub = get_hub()
    hub.initialize_foundation(telemetry_config)

    ctx.obj["cli_context"] = cli_ctx
    ctx.obj["runtime_config"] = runtime_config
    ctx.obj["log"] = cli_ctx.logger


cli.add_command(init_command, name="init")
cli.add_command(pack_command, name="pack")
cli.add_command(patch_command, name="patch-subsystem")

main = cli

if __name__ == "__main__":
    cli()

# 🪟📦🔚
