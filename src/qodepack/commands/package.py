#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Packaging command for the qodepack CLI."""

from __future__ import annotations

from pathlib import Path

import click
from provide.foundation.console import perr, pout

from qodepack.console import get_command_logger
from qodepack.exceptions import QodePackError
from qodepack.package import pack_project

# Get structured logger for this command
log = get_command_logger("pack")


@click.command("pack")
@click.argument(
    "dist_path",
    type=click.Path(exists=True, file_okay=False, resolve_path=True, path_type=Path),
)
@click.pass_context
def pack_command(ctx: click.Context, dist_path: Path) -> None:
    """Package the application bundle in DIST_PATH for Windows."""
    log.debug("Packing application", dist_path=str(dist_path))

    runtime_config = (ctx.obj or {}).get("runtime_config")

    try:
        build_dir = pack_project(dist_path, runtime_config=runtime_config)
    except (QodePackError, OSError) as e:
        log.error("Pack failed", error=str(e), dist_path=str(dist_path))
        perr(f"❌ Pack failed: {e}")
        raise click.Abort() from e

    log.info("Pack completed", build_dir=str(build_dir))
    pout(f"✅ Packaged application: {build_dir}")


# 🪟📦🔚
