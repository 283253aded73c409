"""
Command-Line Interface

CLI using rich for colored output, progress indicators, and
formatted results. Entry points for users and scripts.
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .analyzer import ScreenshotAnalyzer
from .config import configure_logging, load_config
from .errors import UploadRejectedError
from .models import AnalysisResult
from .normalizer import normalize
from .providers import get_provider


console = Console()

SECTIONS = (
    ("🧭 UX Insights", "ux_insights", "cyan"),
    ("🎨 Visual Design", "visual_design", "magenta"),
    ("✅ Best Practices", "best_practices", "green"),
)


@click.command()
@click.argument('image', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '--prompt',
    default=None,
    help='Instruction sent with the screenshot. Defaults to a general UX review.'
)
@click.option(
    '--provider',
    default=None,
    type=click.Choice(['openrouter', 'openai', 'anthropic', 'local'], case_sensitive=False),
    help='Vision provider to use. Defaults to VISION_PROVIDER from .env'
)
@click.option(
    '--model',
    default=None,
    help='Model name overriding the configured one for the provider'
)
@click.option(
    '--output',
    default='rich',
    type=click.Choice(['rich', 'json'], case_sensitive=False),
    help='Output format: rich (colored terminal) or json'
)
@click.option(
    '--rerun',
    default=0,
    type=click.IntRange(min=0),
    help='Re-issue the analysis this many times and keep the last result'
)
@click.option(
    '--env-file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Path to .env file (defaults to ./.env)'
)
@click.option(
    '--log-level',
    default=None,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    help='Logging level. Defaults to LOG_LEVEL from .env'
)
@click.option(
    '--debug',
    is_flag=True,
    default=False,
    help='Print a traceback when the analysis fails'
)
@click.version_option(version=__version__)
def main(
    image: Path,
    prompt: Optional[str],
    provider: Optional[str],
    model: Optional[str],
    output: str,
    rerun: int,
    env_file: Optional[str],
    log_level: Optional[str],
    debug: bool
):
    """
    Screenshot Analyzer - AI UX Feedback

    Send a screenshot to a vision model and get UX insights, visual
    design feedback and best practices.

    Examples:

      # Basic usage (uses .env config)
      screenshot-analyzer screenshot.png

      # Different provider and model
      screenshot-analyzer screenshot.png --provider openai --model gpt-4o

      # JSON output for scripts
      screenshot-analyzer screenshot.png --output json
    """
    try:
        config = load_config(Path(env_file) if env_file else None)
        configure_logging(log_level or config.log_level)

        provider_name = (provider or config.vision_provider).lower()

        result = asyncio.run(_run_analysis(
            image=image,
            prompt=prompt,
            provider_name=provider_name,
            model=model,
            config=config,
            rerun=rerun
        ))

        if output == 'json':
            _output_json(result)
        else:
            _output_rich(result, provider_name, image)

    except KeyboardInterrupt:
        console.print("\n[yellow]⚠️  Interrupted by user[/yellow]")
        sys.exit(130)
    except UploadRejectedError as e:
        console.print(f"[red]❌ {escape(e.outcome.message or str(e))}[/red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]❌ Error: {escape(str(e))}[/red]")
        if debug:
            console.print_exception()
        sys.exit(1)


@click.command()
@click.argument('reply', type=click.File('r', encoding='utf-8'), default='-')
@click.option(
    '--output',
    default='json',
    type=click.Choice(['rich', 'json'], case_sensitive=False),
    help='Output format: rich (colored terminal) or json'
)
@click.version_option(version=__version__)
def normalize_main(reply, output: str):
    """
    Normalize a saved vision model reply without calling any provider.

    Reads REPLY (a file, or stdin when omitted) and prints the
    structured result.
    """
    result = normalize(reply.read())

    if output == 'json':
        _output_json(result)
    else:
        _output_rich(result, None, None)


async def _run_analysis(
    image: Path,
    prompt: Optional[str],
    provider_name: str,
    model: Optional[str],
    config,
    rerun: int
) -> AnalysisResult:
    """Run the analysis workflow with progress indicators"""

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True
    ) as progress:

        task = progress.add_task("[cyan]Initializing vision provider...", total=None)
        vision_provider = get_provider(provider_name, config, model=model)

        if not vision_provider.is_available():
            raise RuntimeError(f"Provider '{provider_name}' is not available")

        analyzer = ScreenshotAnalyzer(vision_provider)

        progress.update(task, description="[cyan]Analyzing screenshot with vision model...")
        result = await analyzer.analyze(image, prompt)

        for attempt in range(1, rerun + 1):
            progress.update(task, description=f"[cyan]Re-running analysis ({attempt}/{rerun})...")
            result = await analyzer.rerun()

        progress.update(task, description="[green]✓ Analysis complete", completed=True)

    return result


def _output_rich(result: AnalysisResult, provider_name: Optional[str], image: Optional[Path]):
    """Output result in rich formatted terminal output"""

    console.print()
    header = "[bold]Screenshot Analysis[/bold]"
    if provider_name:
        header += f"\nProvider: {provider_name}"
    console.print(Panel.fit(header, border_style="cyan"))

    for title, field, color in SECTIONS:
        items = getattr(result, field)
        console.print(f"\n[bold {color}]{title} ({len(items)})[/bold {color}]")
        if not items:
            console.print("  [dim]No feedback[/dim]")
        for i, item in enumerate(items, 1):
            console.print(f"  {i}. {escape(item)}")

    if result.annotations:
        console.print(f"\n[bold]📍 Annotations ({len(result.annotations)})[/bold]")
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("X", justify="right")
        table.add_column("Y", justify="right")
        table.add_column("Width", justify="right")
        table.add_column("Height", justify="right")
        table.add_column("Note", style="cyan")
        for annotation in result.annotations:
            table.add_row(
                f"{annotation.x:g}",
                f"{annotation.y:g}",
                f"{annotation.width:g}",
                f"{annotation.height:g}",
                escape(annotation.text)
            )
        console.print(table)

    if image is not None:
        console.print(f"\n[dim]📸 Screenshot: {escape(str(image))}[/dim]")
    console.print()


def _output_json(result: AnalysisResult):
    """Output result as JSON using the reply field names"""
    click.echo(json.dumps(result.to_wire(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
