"""bitplanner command-line interface."""

import logging
import sys
from typing import Any

import rich_click as click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from bitplanner.examples import ExampleInfo
from bitplanner.heuristic import HeuristicType
from bitplanner.search import DEFAULT_TIMEOUT, HillClimbing

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="bitplanner")
def main() -> None:
    """bitplanner: hill-climbing search over bit-encoded planning problems."""
    pass


@main.group(invoke_without_command=True)
@click.pass_context
def example(ctx: click.Context) -> None:
    """Solve one of the bundled example problems."""
    if ctx.invoked_subcommand is None:
        from bitplanner.examples import EXAMPLES

        click.echo("Available examples:\n")
        for name, info in EXAMPLES.items():
            click.echo(f"  {name:24} {info['description']}")
        click.echo("\nRun an example with: bitplanner example <name>")


def _solve(name: str, info: ExampleInfo, heuristic: str, timeout: float,
           verbose: bool, **kwargs: Any) -> None:
    _configure_logging(verbose)
    problem = info["build"](**kwargs)
    console.print(f"[bold]{name}[/bold]: {problem.proposition_count} propositions, "
                  f"{len(problem.operators)} operators")

    strategy = HillClimbing(timeout=timeout, heuristic=HeuristicType(heuristic))
    node = strategy.solve_node(problem)
    plan = strategy.extract_plan(node, problem)
    if plan is None:
        console.print(f"[red]No plan found ({strategy.outcome.value}) "
                      f"after {strategy.searching_time} ms.[/red]")
        sys.exit(1)

    table = Table(title=f"Plan for {name}")
    table.add_column("Step", justify="right")
    table.add_column("Action")
    table.add_column("Cost", justify="right")
    for step, op in enumerate(plan):
        table.add_row(str(step), op.name, f"{op.cost:g}")
    console.print(table)
    console.print(f"[green]Plan found[/green]: depth {node.depth}, cost {plan.cost():g}, "
                  f"{strategy.expanded_nodes} expanded nodes, {strategy.searching_time} ms")


def _make_example_command(name: str, info: ExampleInfo) -> None:
    """Create and register a click command for an example."""

    @example.command(name, help=info["description"])
    @click.option("--heuristic", type=click.Choice([h.value for h in HeuristicType]),
                  default=HeuristicType.FAST_FORWARD.value, show_default=True,
                  help="Relaxation heuristic guiding the search")
    @click.option("--timeout", type=float, default=DEFAULT_TIMEOUT, show_default=True,
                  help="Search timeout in seconds")
    @click.option("-v", "--verbose", is_flag=True, default=False,
                  help="Log every search round")
    def _run(heuristic: str, timeout: float, verbose: bool, **kwargs: Any) -> None:
        _solve(name, info, heuristic, timeout, verbose, **kwargs)

    # Add example-specific options dynamically
    for opt in reversed(info.get("options", [])):
        option_name = opt["name"]
        param_name = opt.get("param_name", option_name.lstrip("-").replace("-", "_"))
        extra_kwargs: dict[str, Any] = {}
        if "type" in opt:
            extra_kwargs["type"] = opt["type"]
        _run = click.option(option_name, param_name, default=opt.get("default"), show_default=True,
                            help=opt.get("help", ""), **extra_kwargs)(_run)


# Register each example as a subcommand of `example`
def _register_examples() -> None:
    from bitplanner.examples import EXAMPLES

    for name, info in EXAMPLES.items():
        _make_example_command(name, info)


_register_examples()


if __name__ == "__main__":
    main()
