import json
import logging

import click

from .pipeline import PruneConfig, PruneError, PruneGenerator, UnresolvedPolicy, UnresolvedReferenceError


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True), help="JSON pruning configuration")
@click.option("--hidden-prefix", default=None, type=str, help="Member name prefix marking hidden members (default: _)")
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Fail when a reference to a non-exported type has no public substitute",
)
@click.option("--format", "format_output", is_flag=True, default=False, help="Run prettier on the output")
@click.option("--no-generation-comment", is_flag=True, default=False, help="Do not add the generation comment header")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log pipeline progress")
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def prune_dts(config, hidden_prefix, strict, format_output, no_generation_comment, verbose, path, output):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if config is not None:
        with open(config) as f:
            config = PruneConfig.from_dict(json.load(f))
    else:
        config = PruneConfig()

    # CLI flags override the config file
    if hidden_prefix is not None:
        config.hidden_prefix = hidden_prefix
    if strict:
        config.unresolved_policy = UnresolvedPolicy.ERROR
    if format_output:
        config.formatter.enabled = True
    if no_generation_comment:
        config.add_generation_comment = False

    generator = PruneGenerator(config)
    try:
        diagnostics = generator.write(path, output)
    except UnresolvedReferenceError as e:
        for diagnostic in e.diagnostics:
            click.echo(str(diagnostic), err=True)
        raise click.ClickException(str(e)) from e
    except (PruneError, FileExistsError) as e:
        raise click.ClickException(str(e)) from e

    for diagnostic in diagnostics:
        click.echo(str(diagnostic), err=True)
