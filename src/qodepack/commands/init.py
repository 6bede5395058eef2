#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Project initialization command for the qodepack CLI."""

from __future__ import annotations

import click
from provide.foundation.console import perr, pout

from qodepack.console import get_command_logger
from qodepack.exceptions import QodePackError
from qodepack.package import init_project

# Get structured logger for this command
log = get_command_logger("init")


@click.command("init")
@click.argument("app_name")
@click.pass_context
def init_command(ctx: click.Context, app_name: str) -> None:
    """Create the deploy/win32 template for APP_NAME."""
    log.debug("Initializing project", app_name=app_name)

    runtime_config = (ctx.obj or {}).get("runtime_config")

    try:
        app_dir = init_project(app_name, runtime_config=runtime_config)
    except (QodePackError, OSError) as e:
        log.error("Init failed", error=str(e), app_name=app_name)
        perr(f"❌ Init failed: {e}")
        raise click.Abort() from e

    pout(f"✅ Initialized '{app_name}' in {app_dir}")


# 🪟📦🔚
