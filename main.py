import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from engine.config import GENERATOR_CONFIG_FILE, GeneratorConfig
from engine.error_handler import GeneratorError, log_error
from engine.generator import generate
from engine.options import GenerationOptions, clamp_count
from settings import DEFAULT_COUNT, RANDOMIZE
from systems.describe import categories, describe_piety, full_name, short_descriptor
from telemetry.logger import telemetry
from world.loader import DEFAULT_DATA_FILE, load_reference_data
from world.reference import ReferenceData
from world.validation import validate_reference_data

app = typer.Typer(
    help="npcgen - random characters for the world of Eberron",
    context_settings={"help_option_names": ["--help", "-h"]},
)
console = Console()


def _load(data_file: Path, validate: bool = True) -> ReferenceData:
    try:
        return load_reference_data(data_file, validate=validate)
    except GeneratorError as e:
        log_error(e, "load_reference_data")
        console.print(f"[bold red]Error:[/bold red] {e.user_message}")
        raise typer.Exit(code=1)


def _affiliation(character) -> str:
    parts = []
    if character.mark:
        parts.append(f"Mark of {character.mark}")
    if character.house:
        parts.append(f"House {character.house}")
    if character.noble:
        parts.append("noble")
    return ", ".join(parts)


def render_characters(characters, data: ReferenceData, config: GeneratorConfig) -> Table:
    table = Table(title=f"{len(characters)} character(s)", show_lines=True)
    table.add_column("Name", style="bold")
    table.add_column("Description")
    table.add_column("Lifestyle")
    table.add_column("Faith")
    table.add_column("Affiliation")
    table.add_column("Traits")

    for character in characters:
        traits = character.traits
        trait_lines = [
            traits.personality,
            traits.ideal.display() if traits.ideal else None,
            traits.bond,
            traits.flaw,
        ]
        table.add_row(
            escape(full_name(character)) or "[dim]unnamed[/dim]",
            short_descriptor(character),
            character.lifestyle or "",
            describe_piety(character, data, config.piety),
            _affiliation(character),
            escape("\n".join(line for line in trait_lines if line)),
        )
    return table


def character_json(character, data: ReferenceData) -> dict:
    row = character.to_dict()
    row["full_name"] = full_name(character)
    row["descriptor"] = short_descriptor(character)
    row["categories"] = [c.to_wikitext() for c in categories(character, data)]
    return row


@app.command("generate")
def generate_command(
    area: str = typer.Argument(..., help="Demographic area, e.g. Sharn"),
    data_file: Path = typer.Option(DEFAULT_DATA_FILE, "--data", "-d", help="Reference data JSON file"),
    race: Optional[List[str]] = typer.Option(None, "--race", "-r", help="Acceptable race (repeatable)"),
    culture: Optional[List[str]] = typer.Option(None, "--culture", "-c", help="Acceptable culture (repeatable)"),
    religion: Optional[List[str]] = typer.Option(None, "--religion", help="Acceptable religion (repeatable)"),
    alignment: Optional[List[str]] = typer.Option(None, "--alignment", "-a", help="Acceptable alignment code (repeatable)"),
    gender: Optional[List[str]] = typer.Option(None, "--gender", "-g", help="Acceptable gender (repeatable)"),
    lifestyle: Optional[str] = typer.Option(None, "--lifestyle", "-l", help="Anchor lifestyle: Poor, Middle or Rich"),
    mark: str = typer.Option(RANDOMIZE, "--mark", help="Dragonmark to force, 'random' or 'none'"),
    house: str = typer.Option(RANDOMIZE, "--house", help="House to force, 'random' or 'none'"),
    num: int = typer.Option(DEFAULT_COUNT, "--num", "-n", help="How many characters"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed for reproducible output"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
    config_file: Optional[Path] = typer.Option(None, "--config", help="Generator config JSON file"),
    telemetry_file: Optional[Path] = typer.Option(None, "--telemetry", help="Append telemetry events (JSONL) here"),
):
    """Generate random characters for an area."""
    config = GeneratorConfig.load(config_file)
    data = _load(data_file)

    if telemetry_file is not None:
        telemetry.init(telemetry_file)

    options = GenerationOptions(
        race=race or [],
        culture=culture or [],
        religion=religion or [],
        alignment=alignment or [],
        gender=gender or [],
        lifestyle=lifestyle,
        mark=mark,
        house=house,
        num=clamp_count(num, config.max_count),
    )
    try:
        characters = generate(data, area, options, seed=seed, config=config)
    finally:
        telemetry.close()

    if as_json:
        typer.echo(json.dumps([character_json(c, data) for c in characters], indent=2, ensure_ascii=False))
        return
    if area not in data.areas:
        console.print(f"[yellow]Unknown area {area!r}; characters have no race or culture.[/yellow]")
    console.print(render_characters(characters, data, config))


@app.command()
def areas(
    data_file: Path = typer.Option(DEFAULT_DATA_FILE, "--data", "-d", help="Reference data JSON file"),
):
    """List the demographic areas in the reference data."""
    data = _load(data_file)
    table = Table(title="Areas")
    table.add_column("Area", style="bold")
    table.add_column("Population", justify="right")
    table.add_column("Demographics")
    for name, area in sorted(data.areas.items()):
        population = f"{area.population:,}" if area.population else ""
        kind = f"{len(area.rows)} rows" if area.is_flat else f"{len(area.by_race)} races"
        table.add_row(name, population, kind)
    console.print(table)


@app.command()
def validate(
    data_file: Path = typer.Option(DEFAULT_DATA_FILE, "--data", "-d", help="Reference data JSON file"),
):
    """Check reference data for broken references."""
    data = _load(data_file, validate=False)
    problems = validate_reference_data(data)
    if not problems:
        console.print("[bold green]Reference data is valid.[/bold green]")
        return

    for section, errors in problems.items():
        console.print(f"[bold]{section}[/bold]")
        for error in errors:
            console.print(f"  [red]-[/red] {escape(error)}")
    raise typer.Exit(code=1)


@app.command("init-config")
def init_config(
    path: Path = typer.Argument(GENERATOR_CONFIG_FILE, help="Where to write the config file"),
):
    """Write the default generator configuration."""
    try:
        written = GeneratorConfig().save(path)
    except GeneratorError as e:
        log_error(e, "init_config")
        console.print(f"[bold red]Error:[/bold red] {e.user_message}")
        raise typer.Exit(code=1)
    console.print(f"[bold green]Wrote default config:[/bold green] {written}")


if __name__ == "__main__":
    app()
