"""CLI entry point for vframes.

Usage:
    vframes extract clip.mp4 --fps 2        # Extract 2 frames per second
    vframes extract clip.mp4 --mode dense   # Extract at 30 frames per second
    vframes plan --duration 3 --fps 1       # Show planned timestamps only
    vframes probe clip.mp4                  # Show video metadata
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from vframes.core.config import ExtractorConfig, load_config
from vframes.core.contracts import SamplingMode
from vframes.core.logging import setup_logging

app = typer.Typer(name="vframes", help="Extract still frames from a video in batches")
console = Console()

DEFAULT_CONFIG = Path("configs/extractor.yaml")


def _load_config(config: Path) -> ExtractorConfig:
    if config.exists():
        return load_config(config)
    return ExtractorConfig()


@app.command()
def extract(
    video: str = typer.Argument(..., help="Video path or file:// URI"),
    mode: SamplingMode = typer.Option(SamplingMode.RATE, help="Sampling mode"),
    fps: float = typer.Option(None, help="Frames per second (rate mode)"),
    duration: float = typer.Option(None, help="Duration in seconds (probed when omitted)"),
    base_dir: Path = typer.Option(None, help="Parent directory for the output folder"),
    batch_size: int = typer.Option(None, help="Timestamps per decoder call"),
    quality: float = typer.Option(None, help="Image quality in (0, 1]"),
    config: Path = typer.Option(DEFAULT_CONFIG, help="Extractor config path"),
) -> None:
    """Extract frames into a new folder and report the outcome."""
    from vframes.core.capabilities import LocalStorage
    from vframes.core.contracts import ExtractionRequest
    from vframes.core.errors import ProbeError
    from vframes.core.namespace import OutputNamespace
    from vframes.core.orchestrator import BatchExtractor
    from vframes.decoders.opencv_decoder import OpenCVFrameDecoder
    from vframes.utils.video_probe import probe_video

    cfg = _load_config(config)
    setup_logging(cfg.log_level)

    if duration is None:
        try:
            duration = probe_video(video).duration_seconds
        except ProbeError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)

    try:
        request = ExtractionRequest(
            video_reference=video,
            duration_seconds=duration,
            sampling_mode=mode,
            rate=fps if fps is not None else cfg.default_rate,
        )
        storage = LocalStorage()
        extractor = BatchExtractor(
            decoder=OpenCVFrameDecoder(storage=storage, output_format=cfg.output_format),
            storage=storage,
            batch_size=batch_size if batch_size is not None else cfg.batch_size,
            quality=quality if quality is not None else cfg.quality,
        )
    except (ValidationError, ValueError) as e:
        console.print(f"[red]Invalid settings:[/red] {e}")
        raise typer.Exit(1)

    namespace = OutputNamespace(storage, base_dir or cfg.base_dir)
    console.print(f"[green]Extracting frames from {video}[/green]")
    outcome = asyncio.run(
        extractor.run(request, namespace, on_progress=lambda msg: console.print(f"[dim]{msg}[/dim]"))
    )

    if not outcome.succeeded:
        console.print(f"[red]Extraction failed:[/red] {outcome.error_message}")
        raise typer.Exit(1)
    console.print(
        f"[green]Extracted {outcome.extracted_count} / {outcome.planned_count} frames to:[/green] "
        f"{outcome.output_directory}"
    )
    if outcome.failed_batches:
        console.print(f"[yellow]{outcome.failed_batches} batch(es) failed; see log[/yellow]")


@app.command()
def plan(
    duration: float = typer.Option(..., help="Duration in seconds"),
    mode: SamplingMode = typer.Option(SamplingMode.RATE, help="Sampling mode"),
    fps: float = typer.Option(1.0, help="Frames per second (rate mode)"),
    batch_size: int = typer.Option(10, help="Timestamps per decoder call"),
) -> None:
    """Show the timestamps and batches an extraction would use."""
    from vframes.core.orchestrator import make_batches
    from vframes.core.planner import plan_timestamps

    try:
        timestamps = plan_timestamps(duration, mode, fps)
        batches = make_batches(timestamps, batch_size)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Plan: {len(timestamps)} frames in {len(batches)} batches")
    table.add_column("Batch", style="dim")
    table.add_column("Frames", style="yellow")
    table.add_column("Timestamps (ms)", style="cyan")
    for i, batch in enumerate(batches, 1):
        table.add_row(str(i), str(len(batch)), ", ".join(str(ts) for ts in batch))
    console.print(table)


@app.command()
def probe(video: str = typer.Argument(..., help="Video path or file:// URI")) -> None:
    """Show video metadata."""
    from vframes.core.errors import ProbeError
    from vframes.utils.video_probe import probe_video

    try:
        info = probe_video(video)
    except ProbeError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(info.model_dump_json(indent=2))


@app.command()
def folder_name(video: str = typer.Argument(..., help="Video path or file:// URI")) -> None:
    """Show the sanitized output folder base name for a video."""
    from vframes.core.namespace import folder_name_for

    console.print(folder_name_for(video))


if __name__ == "__main__":
    app()
