"""Command line interface for fileman."""

from __future__ import annotations

import difflib
import logging
from pathlib import Path
from typing import Any

import click
import yaml
from click.core import ParameterSource
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax

from fileman.clustering import DBSCANEngine
from fileman.config import ConfigError, ConfigManager, FilemanConfig, resolve_with_precedence
from fileman.ingestion import DirectoryLister, FeatureExtractor, ListingError
from fileman.organization import MaterializationError, SymlinkMaterializer
from fileman.pipeline import ClusterError, ClusterPipeline, ClusterRunResult
from fileman.tagging import TagError, TagManager, XattrTagStore

console = Console()


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    details: Any | None = None,
    original: Exception | None = None,
) -> None:
    """Emit a standardized error and terminate the command appropriately.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        details: Optional structured details to include in the payload.
        original: Original exception for chaining when not using JSON.

    Raises:
        SystemExit: When emitting JSON output to terminate the command.
        click.ClickException: For non-JSON flows to surface the error.
    """

    if json_output:
        payload: dict[str, Any] = {"error": {"code": code, "message": message}}
        if details is not None:
            payload["error"]["details"] = details
        console.print_json(data=payload)
        raise SystemExit(1)

    if isinstance(original, click.ClickException):
        raise original

    raise click.ClickException(message) from original


def _emit_message(message: Any, *, mode: str, quiet: bool, summary_only: bool) -> None:
    """Print output unless quiet/summary settings suppress ``mode``.

    Args:
        message: Renderable or string to emit.
        mode: Output mode identifier (`detail`, `summary`, `warning`, or `error`).
        quiet: Whether quiet mode is active.
        summary_only: Whether only summary lines should be emitted.
    """

    if quiet and mode != "error":
        return
    if summary_only and mode not in {"summary", "warning", "error"}:
        return
    console.print(message)


def _format_summary_line(command: str, root: Path | str, metrics: dict[str, Any]) -> str:
    parts = ", ".join(f"{key}={value}" for key, value in metrics.items())
    return f"[green]{command} summary for {escape(str(root))}: {parts}.[/green]"


def _configure_logging(level: str) -> None:
    """Route library logging through rich on stderr at the configured level."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _assign_nested(target: dict[str, Any], path: list[str], value: Any) -> None:
    """Assign a nested value within a dictionary for a dotted path.

    Raises:
        ConfigError: If a non-mapping value is encountered along the path.
    """

    node = target
    for segment in path[:-1]:
        existing = node.setdefault(segment, {})
        if not isinstance(existing, dict):
            raise ConfigError(
                f"Cannot assign into '{segment}' because it is not a mapping in the config file."
            )
        node = existing
    node[path[-1]] = value


def _run_payload(result: ClusterRunResult, prefix: str) -> dict[str, Any]:
    return {
        "context": {
            "input_path": result.input_root.as_posix(),
            "target_path": result.target_root.as_posix(),
            "tag_prefix": prefix,
            "dry_run": result.dry_run,
        },
        "counts": {
            "listed": result.listed,
            "clusters": len(result.clusters.clusters),
            "clustered": result.clusters.clustered_count,
            "noise": len(result.clusters.noise),
            "skipped": len(result.skipped),
            "links": len(result.links),
            "tags_pruned": result.tags_pruned,
            "tags_applied": result.tags_applied,
        },
        "clusters": {
            label: [path.as_posix() for path in paths]
            for label, paths in result.clusters.labelled(prefix).items()
        },
        "noise": [path.as_posix() for path in result.clusters.noise],
        "errors": list(result.errors),
        "elapsed_ms": result.elapsed_ms,
    }


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="fileman")
def cli() -> None:
    """fileman groups files into folders of symlinks by creation time."""


@cli.command()
@click.option(
    "-i",
    "--input-path",
    required=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="The directory to scan (not recursed).",
)
@click.option(
    "-o",
    "--target-path",
    required=True,
    type=click.Path(path_type=Path),
    help="Output directory with links grouped into cluster folders; replaced on every run.",
)
@click.option(
    "-t",
    "--time-interval-sec",
    type=float,
    help="Seconds between two files to cluster them together  [default: 600.0]",
)
@click.option(
    "-c",
    "--min-cluster-size",
    type=click.IntRange(min=0),
    help="Minimum count of files needed to define a cluster  [default: 3]",
)
@click.option(
    "-p",
    "--tag-prefix",
    type=str,
    help="Prefix for tags and output folders; tagging is disabled when empty  [default: cluster]",
)
@click.option("--dry-run", is_flag=True, help="Compute clusters without writing links or tags.")
@click.option("--json", "json_output", is_flag=True, help="Emit JSON describing the clusters.")
@click.option("--summary", "summary_mode", is_flag=True, help="Only emit summary lines.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
@click.pass_context
def cluster(
    ctx: click.Context,
    input_path: Path,
    target_path: Path,
    time_interval_sec: float | None,
    min_cluster_size: int | None,
    tag_prefix: str | None,
    dry_run: bool,
    json_output: bool,
    summary_mode: bool,
    quiet: bool,
) -> None:
    """Cluster the files in INPUT_PATH by creation time and link them under TARGET_PATH.

    Clustering is a subcommand: run `fileman cluster -i DIR -o DIR`, not
    `fileman -i DIR -o DIR`.

    Args:
        ctx: Click context used for parameter source inspection.
        input_path: Directory whose immediate entries are clustered.
        target_path: Output directory for cluster folders.
        time_interval_sec: Clustering radius override in seconds.
        min_cluster_size: Minimum cluster size override.
        tag_prefix: Folder and tag prefix override.
        dry_run: If True, skip filesystem mutations.
        json_output: If True, emit a JSON payload instead of text.
        summary_mode: When True, limit output to summary lines and warnings.
        quiet: When True, suppress non-error CLI output entirely.
    """

    try:
        overrides: dict[str, Any] = {}
        if time_interval_sec is not None:
            overrides["clustering.time_interval_sec"] = time_interval_sec
        if min_cluster_size is not None:
            overrides["clustering.min_cluster_size"] = min_cluster_size
        if tag_prefix is not None:
            overrides["output.tag_prefix"] = tag_prefix

        config = ConfigManager().load(cli_overrides=overrides)
        _configure_logging(config.logging.level)

        explicit_quiet = ctx.get_parameter_source("quiet") == ParameterSource.COMMANDLINE
        explicit_summary = ctx.get_parameter_source("summary_mode") == ParameterSource.COMMANDLINE
        quiet_enabled = quiet if explicit_quiet else config.cli.quiet_default
        summary_only = summary_mode if explicit_summary else config.cli.summary_default

        if json_output:
            if explicit_quiet and quiet_enabled:
                raise click.ClickException("--json cannot be combined with --quiet.")
            if explicit_summary and summary_only:
                raise click.ClickException("--json cannot be combined with --summary.")
            quiet_enabled = False
            summary_only = False

        if quiet_enabled and summary_only:
            raise click.ClickException(
                "Quiet and summary modes cannot both be enabled. Adjust CLI defaults or flags."
            )

        prefix = config.output.tag_prefix
        tag_manager = TagManager(XattrTagStore(), prefix) if prefix else None
        pipeline = ClusterPipeline(
            lister=DirectoryLister(),
            extractor=FeatureExtractor(),
            engine=DBSCANEngine(
                epsilon=config.clustering.time_interval_sec,
                min_points=config.clustering.min_cluster_size,
            ),
            materializer=SymlinkMaterializer(),
            prefix=prefix,
            tag_manager=tag_manager,
        )
        result = pipeline.run(input_path, target_path, dry_run=dry_run)
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_output, original=exc)
    except ClusterError as exc:
        _handle_cli_error(str(exc), code="cluster_error", json_output=json_output, original=exc)
    except ListingError as exc:
        _handle_cli_error(str(exc), code="listing_error", json_output=json_output, original=exc)
    except MaterializationError as exc:
        _handle_cli_error(
            str(exc), code="materialization_error", json_output=json_output, original=exc
        )
    except TagError as exc:
        _handle_cli_error(str(exc), code="tag_error", json_output=json_output, original=exc)
    except click.ClickException as exc:
        _handle_cli_error(str(exc), code="cli_error", json_output=json_output, original=exc)
    except Exception as exc:
        _handle_cli_error(
            f"Unexpected error while clustering files: {exc}",
            code="internal_error",
            json_output=json_output,
            details={"exception": type(exc).__name__},
            original=exc,
        )

    if json_output:
        console.print_json(data=_run_payload(result, prefix))
        return

    for error in result.errors:
        _emit_message(
            f"[yellow]{escape(error)}[/yellow]",
            mode="warning",
            quiet=quiet_enabled,
            summary_only=summary_only,
        )

    verb = "Would link" if dry_run else "Linked"
    for label, paths in result.clusters.labelled(prefix).items():
        _emit_message(
            f"[cyan]{verb} {len(paths)} file(s) into {escape(label)}[/cyan]",
            mode="detail",
            quiet=quiet_enabled,
            summary_only=summary_only,
        )
        for path in paths:
            _emit_message(
                f"  - {escape(path.name)}",
                mode="detail",
                quiet=quiet_enabled,
                summary_only=summary_only,
            )

    _emit_message(
        _format_summary_line(
            "Cluster",
            result.target_root,
            {
                "listed": result.listed,
                "clusters": len(result.clusters.clusters),
                "clustered": result.clusters.clustered_count,
                "noise": len(result.clusters.noise),
                "skipped": len(result.skipped),
                "tags": result.tags_applied,
            },
        ),
        mode="summary",
        quiet=quiet_enabled,
        summary_only=summary_only,
    )
    _emit_message(
        f"Finished in {result.elapsed_ms} ms",
        mode="summary",
        quiet=quiet_enabled,
        summary_only=summary_only,
    )


@cli.group()
def config() -> None:
    """Manage fileman configuration files and overrides."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules.

    Raises:
        click.ClickException: If configuration cannot be loaded.
    """
    try:
        loaded = ConfigManager().load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(loaded.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="Value to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value expressed as a dotted KEY.

    Args:
        key: Dotted path such as ``clustering.time_interval_sec``.
        value: YAML-literal value to write into the configuration file.

    Raises:
        click.ClickException: If parsing, assignment, or validation fails.
    """
    manager = ConfigManager()
    try:
        manager.ensure_exists()
        before = manager.read_text().splitlines()
        segments = [segment.strip() for segment in key.split(".") if segment.strip()]
        if not segments:
            raise click.ClickException(
                "KEY must specify a dotted path such as 'clustering.time_interval_sec'."
            )
        try:
            parsed_value = yaml.safe_load(value)
        except yaml.YAMLError as exc:
            raise click.ClickException(f"Unable to parse value: {exc}") from exc

        file_data = manager.load_file_overrides()
        _assign_nested(file_data, segments, parsed_value)
        resolve_with_precedence(defaults=FilemanConfig(), file_overrides=file_data)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(file_data)
    diff = list(
        difflib.unified_diff(
            before,
            manager.read_text().splitlines(),
            fromfile="config.yaml (before)",
            tofile="config.yaml (after)",
            lineterm="",
        )
    )
    console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    console.print(f"[green]Updated {'.'.join(segments)}.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
