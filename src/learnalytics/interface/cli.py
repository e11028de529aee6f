"""Learnalytics CLI — analytics commands over JSON attempt histories."""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Any

import typer

from learnalytics.application.config import resolve_config

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="learnalytics: Learner analytics over quiz attempt histories.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

config_app = typer.Typer(help="Manage learnalytics configuration.")
app.add_typer(config_app, name="config")


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for learnalytics."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    level = logging.DEBUG if verbose else resolve_config().log_level
    logging.getLogger("learnalytics").setLevel(level)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        typer.secho(f"File not found: {path}", fg="red", err=True)
        raise typer.Exit(1) from None
    except json.JSONDecodeError as e:
        typer.secho(f"Invalid JSON in {path}: {e}", fg="red", err=True)
        raise typer.Exit(1) from None


def _load_history(path: Path):
    from learnalytics.application.history import HistoryError, parse_attempts

    try:
        return parse_attempts(_read_json(path))
    except HistoryError as e:
        typer.secho(f"Invalid attempt history in {path}: {e}", fg="red", err=True)
        raise typer.Exit(1) from None


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2))


HistoryArg = Annotated[
    Path, typer.Argument(help="JSON array of attempts, ascending by timestamp.")
]


# ---------------------------------------------------------------------------
# Analytics commands
# ---------------------------------------------------------------------------


@app.command()
def due(
    history: HistoryArg,
    now: Annotated[
        int | None, typer.Option(help="Evaluation time (epoch seconds). Defaults to now.")
    ] = None,
):
    """List topics [bold green]due[/bold green] for spaced-repetition review."""
    from learnalytics.application.analytics import due_reviews

    config = resolve_config({"now_epoch": now})
    attempts = _load_history(history)
    _echo_json([r.to_dict() for r in due_reviews(attempts, now=config.now_epoch)])


@app.command()
def recommend(
    history: HistoryArg,
    explain: Annotated[
        bool, typer.Option("--explain", help="Include the weight computed for every topic.")
    ] = False,
):
    """Recommend the next topic to study."""
    from learnalytics.application.analytics import recommend as recommend_topic
    from learnalytics.application.analytics import topic_weights

    attempts = _load_history(history)
    result = recommend_topic(attempts).to_dict()
    if explain:
        result["weights"] = {t: round(w, 2) for t, w in topic_weights(attempts).items()}
    _echo_json(result)


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Text to match against topic names.")],
    topics: Annotated[
        list[str] | None, typer.Argument(help="Candidate topics. Omit to use --history.")
    ] = None,
    history: Annotated[
        Path | None, typer.Option(help="Take candidate topics from an attempt history.")
    ] = None,
    max_distance: Annotated[
        int | None, typer.Option(help="Largest edit distance to keep.")
    ] = None,
):
    """Fuzzy-search topic names."""
    from learnalytics.application.analytics import search_topics

    config = resolve_config({"match_max_distance": max_distance})
    candidates = list(topics or [])
    if history is not None:
        # Distinct topics, first-seen order
        candidates.extend(dict.fromkeys(a.topic for a in _load_history(history)))

    matches = search_topics(query, candidates, max_distance=config.match_max_distance)
    _echo_json([m.to_dict() for m in matches])


@app.command()
def stats(history: HistoryArg):
    """Aggregate totals and average score over an attempt history."""
    from learnalytics.application.analytics import aggregate_attempts

    _echo_json(aggregate_attempts(_load_history(history)).to_dict())


@app.command()
def queue(
    operation: Annotated[str, typer.Argument(help="enqueue, dequeue or remove.")],
    topic: Annotated[str | None, typer.Argument(help="Topic to enqueue or remove.")] = None,
    file: Annotated[
        Path | None, typer.Option("--file", "-f", help="JSON array holding the current queue.")
    ] = None,
    in_place: Annotated[
        bool, typer.Option("--in-place", help="Write the new queue back to --file.")
    ] = False,
):
    """Apply one operation to a study queue and print the result."""
    from learnalytics.application.analytics import apply_queue_operation

    current: list[str] = []
    if file is not None and file.exists():
        current = _read_json(file)
        if not isinstance(current, list):
            typer.secho(f"Queue file {file} must hold a JSON array.", fg="red", err=True)
            raise typer.Exit(1)

    config = resolve_config()
    new_queue = apply_queue_operation(current, operation, topic, capacity=config.queue_capacity)

    if in_place:
        if file is None:
            typer.secho("--in-place requires --file.", fg="red", err=True)
            raise typer.Exit(2)
        file.write_text(json.dumps(new_queue, indent=2), encoding="utf-8")
        logger.info(f"Wrote {len(new_queue)} topics to {file}")

    _echo_json(new_queue)


@app.command()
def server(
    host: Annotated[str | None, typer.Option(help="Bind address.")] = None,
    port: Annotated[int | None, typer.Option(help="Port to listen on.")] = None,
    reload: Annotated[bool, typer.Option("--reload", help="Auto-reload on code changes.")] = False,
):
    """Start the analytics HTTP server."""
    import uvicorn

    config = resolve_config({"host": host, "port": port})
    uvicorn.run("learnalytics.server:app", host=config.host, port=config.port, reload=reload)


# ---------------------------------------------------------------------------
# Config commands
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display the resolved configuration as JSON."""
    config = resolve_config()
    _echo_json(config.model_dump(mode="json"))


if __name__ == "__main__":
    app()
