#!filepath: rewardpool/cli.py
from typing import Optional

import typer
from pydantic import ValidationError
from rich import print
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rewardpool import __version__
from rewardpool.config.app_config import AppConfig
from rewardpool.utils.errors import UserInputError
from rewardpool.utils.logger import init_logging, logs

app = typer.Typer(help="Reward Pool accrual CLI")
console = Console()


@app.command()
def version():
    print(f"v{__version__}")


@app.command("show-config")
def show_config(path: Optional[str] = typer.Option(None, help="YAML config path")):
    """
    Print the pool config and the emission schedule it derives (starting now).
    """
    from rewardpool.core.time import SystemClock

    try:
        cfg = AppConfig.load(path)
    except (FileNotFoundError, ValidationError) as e:
        print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    schedule = cfg.pool.schedule(start_time=SystemClock().now())

    table = Table(title="Pool")
    table.add_column("field")
    table.add_column("value", justify="right")
    table.add_row("staking_token", cfg.pool.staking_token)
    table.add_row("reward_token", cfg.pool.reward_token)
    table.add_row("total_reward", str(cfg.pool.total_reward))
    table.add_row("duration", str(cfg.pool.duration))
    table.add_row("reward_rate", str(schedule.reward_rate))
    table.add_row("start_time", str(schedule.start_time))
    table.add_row("end_time", str(schedule.end_time))
    console.print(table)


@app.command()
def simulate(
    scenario: str,
    continue_on_error: bool = typer.Option(False, help="record rejected steps instead of aborting"),
    config: Optional[str] = typer.Option(None, help="YAML config path for logging"),
):
    """
    Replay a scenario YAML on a manual clock and print the outcome.
    """
    from rewardpool.simulation.runner import ScenarioRunner
    from rewardpool.simulation.scenario import Scenario
    from rewardpool.utils.errors import RewardPoolError

    if config is not None:
        try:
            init_logging(AppConfig.load(config).log)
        except (FileNotFoundError, ValidationError) as e:
            print(f"[red]{escape(str(e))}[/red]")
            raise typer.Exit(code=1)

    try:
        sc = Scenario.load(scenario)
        result = ScenarioRunner(sc, continue_on_error=continue_on_error).run()
    except (UserInputError, RewardPoolError) as e:
        print(f"[red]{type(e).__name__}: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    print(f"[green]Scenario {result.name}[/green]")

    steps = Table(title="Steps")
    for col in ("step", "at", "op", "actor", "amount", "total_contributed", "actor_earned", "error"):
        steps.add_column(col)
    for row in result.steps.itertuples(index=False):
        steps.add_row(
            str(row.step), str(row.at), row.op, str(row.actor or ""), str(row.amount),
            str(row.total_contributed),
            "" if row.actor_earned is None else str(row.actor_earned),
            escape(row.error or ""),
        )
    console.print(steps)

    people = Table(title="Participants")
    for col in ("participant", "contributed", "earned", "claimed"):
        people.add_column(col)
    for pid, row in result.participants.iterrows():
        people.add_row(pid, str(row["contributed"]), str(row["earned"]), str(row["claimed"]))
    console.print(people)

    summary = Table(title="Summary")
    summary.add_column("metric")
    summary.add_column("value", justify="right")
    for name, value in result.summary.items():
        summary.add_row(name, str(value))
    console.print(summary)

    logs.info(f"[CLI] simulate {scenario} done")


if __name__ == "__main__":
    app()

# python -m rewardpool.cli simulate scenarios/gap.yml --continue-on-error
