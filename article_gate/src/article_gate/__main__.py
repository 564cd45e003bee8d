"""
Command-line interface for the YMYL Article Gate.

Usage:
    python -m article_gate serve                      # Start the HTTP server
    python -m article_gate outline "TOPIC"            # Generate an outline
    python -m article_gate article request.json       # Run a request through the gate
    python -m article_gate check article.html -k a -k b -k c   # Check an existing article
    python -m article_gate check-source URL [URL...]  # Test URLs against the allow-list
    python -m article_gate config                     # Show current configuration
"""

import asyncio
import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from .checks import ClaimScanner, StructuralChecker, count_words
from .config import get_settings
from .logging_conf import setup_logging, get_logger
from .gate import ArticleGate, GateState
from .generation import GenerationClient, GenerationError
from .models import ArticleRequest, GateVerdict, GeneratedArticle
from .patterns import get_pattern_set
from .server import run_server
from .source_policy import is_allowed_source

console = Console()
logger = get_logger(__name__)


def print_verdict(verdict: GateVerdict, title: str = "Gate Verdict"):
    """Render a verdict as a rich table."""
    table = Table(title=title)
    table.add_column("Kind", style="cyan")
    table.add_column("Detail")

    for reason in verdict.reasons:
        table.add_row("reason", reason)
    for claim in verdict.claims_needing_citations:
        table.add_row("claim", claim)

    if verdict.reasons or verdict.claims_needing_citations:
        console.print(table)

    if verdict.blocked:
        console.print("[bold red]BLOCKED - do not publish[/bold red]")
    else:
        console.print("[bold green]ACCEPTED[/bold green]")


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(debug: bool):
    """YMYL Article Gate CLI."""
    settings = get_settings()
    level = "DEBUG" if debug else settings.log_level
    setup_logging(level=level, json_output=settings.log_json)


@cli.command()
@click.option("--host", default="0.0.0.0", help="Host to bind to")
@click.option("--port", "-p", type=int, help="Port to bind to")
def serve(host: str, port: int):
    """Start the HTTP server."""
    console.print(Panel("[bold blue]Starting Server[/bold blue]"))

    settings = get_settings()
    port = port or settings.port

    console.print(f"Host: {host}")
    console.print(f"Port: {port}")
    console.print()

    run_server(host=host, port=port)


@cli.command()
@click.argument("topic")
@click.option("--language", "-l", help="Outline language")
def outline(topic: str, language: str):
    """Generate an SEO outline for TOPIC."""
    language = language or get_settings().default_language

    try:
        result = asyncio.run(GenerationClient().generate_outline(topic, language))
    except GenerationError as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise click.Abort()

    console.print(result)


@cli.command()
@click.argument("request_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", type=click.Path(), help="Write the full response JSON here")
def article(request_file: str, output: str):
    """
    Run an article request (JSON file) through the gate.

    Examples:
      python -m article_gate article request.json
      python -m article_gate article request.json -o response.json
    """
    data = json.loads(Path(request_file).read_text(encoding="utf-8"))
    request = ArticleRequest.model_validate(data)

    console.print(Panel(f"[bold cyan]Gating article[/bold cyan]\n{request.topic or ''}"))

    try:
        outcome = asyncio.run(ArticleGate(GenerationClient()).evaluate(request))
    except GenerationError as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise click.Abort()

    console.print(f"State: {outcome.state.value}")
    if outcome.state != GateState.BLOCKED_PRE:
        words = count_words(outcome.response.article.article_html_content)
        console.print(f"Title: {outcome.response.article.article_title}")
        console.print(f"Words: {words}")

    print_verdict(outcome.response.gate)

    if output:
        Path(output).write_text(
            json.dumps(outcome.response.to_dict(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        console.print(f"[green]Response written to {output}[/green]")


@cli.command()
@click.argument("html_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--keyword", "-k", "keywords", multiple=True, help="Secondary keyword (repeatable)")
@click.option("--language", "-l", help="Article language (selects pattern set)")
def check(html_file: str, keywords: tuple, language: str):
    """Run the post-generation checks on an existing HTML article."""
    settings = get_settings()
    html = Path(html_file).read_text(encoding="utf-8")
    patterns = get_pattern_set(language or settings.default_language)

    article_obj = GeneratedArticle(
        article_title=Path(html_file).stem,
        article_html_content=html,
        secondary_keywords=list(keywords),
    )

    structural = StructuralChecker(
        patterns,
        min_words=settings.min_word_count,
        min_secondary_keywords=settings.min_secondary_keywords,
    )
    verdict = (
        GateVerdict()
        .merged(structural.check(article_obj))
        .merged(ClaimScanner(patterns).scan(html))
        .finalized()
    )

    console.print(f"Words: {count_words(html)} (min {settings.min_word_count})")
    console.print(f"Pattern set: {patterns.name}")
    print_verdict(verdict)


@cli.command("check-source")
@click.argument("urls", nargs=-1, required=True)
def check_source(urls: tuple):
    """Check URLs against the source allow-list."""
    table = Table(title="Source Allow-list")
    table.add_column("URL", style="cyan")
    table.add_column("Allowed")

    for url in urls:
        allowed = "[green]Yes[/green]" if is_allowed_source(url) else "[red]No[/red]"
        table.add_row(url, allowed)

    console.print(table)


@cli.command()
def config():
    """Show current configuration (excluding secrets)."""
    settings = get_settings()

    console.print(Panel("[bold blue]Current Configuration[/bold blue]"))

    console.print("\n[cyan]Gate:[/cyan]")
    console.print(f"  min_word_count:         {settings.min_word_count}")
    console.print(f"  min_secondary_keywords: {settings.min_secondary_keywords}")
    console.print(f"  sources:                {settings.min_sources}-{settings.max_sources}")

    console.print("\n[cyan]Generation:[/cyan]")
    console.print(f"  model:             {settings.openai_model}")
    console.print(f"  timeout:           {settings.openai_timeout}")
    console.print(f"  target_word_count: {settings.target_word_count}")
    console.print(f"  default_language:  {settings.default_language}")
    console.print(f"  api_key_set:       {bool(settings.openai_api_key)}")

    console.print("\n[cyan]Server:[/cyan]")
    console.print(f"  port:           {settings.port}")
    console.print(f"  cors_origins:   {settings.cors_origins}")
    console.print(f"  max_body_bytes: {settings.max_body_bytes}")
    console.print(f"  serverless:     {settings.is_serverless}")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
