"""Click base classes with an ``--examples`` flag.

``--help`` stays short; ``--examples`` prints the command's usage
examples and exits.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Expose an eager ``--examples`` option when ``examples`` text is set."""

    examples: str | None = None

    def get_params(self, ctx: click.Context) -> list[click.Parameter]:
        params: list[click.Parameter] = list(super().get_params(ctx))  # type: ignore[misc]
        if self.examples:
            # After the declared params, ahead of --help.
            params.insert(
                len(self.params),  # type: ignore[attr-defined]
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._print_examples,
                    help="Show usage examples and exit.",
                ),
            )
        return params

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class AssetCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples


class AssetGroup(_ExamplesMixin, click.Group):
    """Root group; ``@group.command`` builds :class:`AssetCommand` instances."""

    command_class = AssetCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
