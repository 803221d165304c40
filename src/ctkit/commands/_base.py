"""Click command class adding an eager ``--examples`` flag.

``--help`` stays short; ``ctkit check --examples`` prints sample
invocations and exits.
"""

from __future__ import annotations

from typing import Any

import click


class CtkitCommand(click.Command):
    """Command that accepts ``examples=`` and exposes them via ``--examples``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or self.examples is None:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)
