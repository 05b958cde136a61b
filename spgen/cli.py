"""
Command-line interface.

Turns options into a GenerationConfig, runs the generator and prints the
batch. Every option can also come from an SPGEN_* environment variable,
e.g. SPGEN_LENGTH=40 or SPGEN_LOG_LEVEL=DEBUG.
"""

from __future__ import annotations

import json
import logging
import os

import click
from click.core import ParameterSource

from . import __version__
from .charset import build_pool
from .config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_CONFIG,
    MAX_LENGTH,
    MIN_LENGTH,
    GenerationConfig,
    clamp_length,
)
from .entropy import entropy_label, estimate_entropy_bits
from .generator import generate_batch
from .logging_config import setup_logging
from .random_source import RandomSource, SystemRandomSource

logger = logging.getLogger(__name__)

EMPTY_POOL_MESSAGE = "Select at least one character type or provide custom symbols."

SYMBOLS_ENVVAR = "SPGEN_SYMBOLS"


def _resolve_symbols(ctx: click.Context, param: click.Parameter, value: str) -> str:
    # click skips empty environment values; SPGEN_SYMBOLS="" means no symbols.
    source = ctx.get_parameter_source(param.name)
    if source is ParameterSource.DEFAULT and os.environ.get(SYMBOLS_ENVVAR) == "":
        return ""
    return value


def _make_source(name: str) -> RandomSource:
    if name == "quantum":
        # qiskit is slow to import; only pay for it when asked.
        from .quantum_engine import QuantumRandomSource

        return QuantumRandomSource()
    return SystemRandomSource()


@click.command(context_settings={"auto_envvar_prefix": "SPGEN"})
@click.version_option(version=__version__, prog_name="spgen")
@click.option(
    "--length", "-l",
    type=int,
    default=DEFAULT_CONFIG.length,
    show_default=True,
    help=f"Password length ({MIN_LENGTH}-{MAX_LENGTH}).",
)
@click.option("--numbers/--no-numbers", default=DEFAULT_CONFIG.include_numbers)
@click.option("--lowercase/--no-lowercase", default=DEFAULT_CONFIG.include_lowercase)
@click.option("--uppercase/--no-uppercase", default=DEFAULT_CONFIG.include_uppercase)
@click.option(
    "--begin-with-letter/--no-begin-with-letter",
    default=DEFAULT_CONFIG.begin_with_letter,
    help="Force the first character to be a letter.",
)
@click.option(
    "--exclude-similar/--allow-similar",
    default=DEFAULT_CONFIG.exclude_similar,
    help="Drop look-alike characters (0 O 1 l I | `).",
)
@click.option(
    "--no-duplicates/--allow-duplicates",
    default=DEFAULT_CONFIG.no_duplicates,
    help="Use every character at most once.",
)
@click.option(
    "--remove-sequential/--allow-sequential",
    default=DEFAULT_CONFIG.remove_sequential,
    help="Avoid runs like abc, cba, 123, 321.",
)
@click.option(
    "--symbols",
    default=DEFAULT_CONFIG.custom_symbols,
    envvar=SYMBOLS_ENVVAR,
    callback=_resolve_symbols,
    show_default=True,
    help='Custom symbols, always included. Pass "" for none.',
)
@click.option(
    "--count", "-n",
    type=click.IntRange(min=1),
    default=DEFAULT_BATCH_SIZE,
    show_default=True,
    help="How many passwords to generate.",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=1,
    help="Generate the batch on this many threads.",
)
@click.option(
    "--source",
    type=click.Choice(["system", "quantum"]),
    default="system",
    show_default=True,
    help="Random source: OS CSPRNG or quantum-seeded simulator.",
)
@click.option("--show-strength", is_flag=True, help="Print an entropy estimate per password.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.option("--log-level", default="WARNING", hidden=True)
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, hidden=True)
@click.pass_context
def cli(
    ctx: click.Context,
    length: int,
    numbers: bool,
    lowercase: bool,
    uppercase: bool,
    begin_with_letter: bool,
    exclude_similar: bool,
    no_duplicates: bool,
    remove_sequential: bool,
    symbols: str,
    count: int,
    workers: int,
    source: str,
    show_strength: bool,
    as_json: bool,
    verbose: bool,
    debug: bool,
    log_level: str,
    log_file: str | None,
) -> None:
    """Secure Password Generator: random passwords under structural rules."""
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    else:
        level = log_level
    setup_logging(level=level, log_file=log_file, quiet_third_party=not debug)

    clamped = clamp_length(length)
    if clamped != length:
        click.echo(
            f"Length {length} is outside {MIN_LENGTH}-{MAX_LENGTH}; using {clamped}.",
            err=True,
        )

    config = GenerationConfig(
        length=clamped,
        include_numbers=numbers,
        include_lowercase=lowercase,
        include_uppercase=uppercase,
        begin_with_letter=begin_with_letter,
        exclude_similar=exclude_similar,
        no_duplicates=no_duplicates,
        remove_sequential=remove_sequential,
        custom_symbols=symbols,
    )

    pool_size = len(build_pool(config))
    if pool_size == 0:
        click.echo(EMPTY_POOL_MESSAGE, err=True)
        ctx.exit(1)

    logger.info("source=%s pool=%d length=%d count=%d", source, pool_size, clamped, count)
    passwords = generate_batch(config, count, source=_make_source(source), workers=workers)

    short = [p for p in passwords if len(p) < clamped]
    if short:
        click.echo(
            f"Note: {len(short)} of {len(passwords)} passwords are shorter than "
            f"{clamped} characters; the selected rules cannot be met with "
            f"{pool_size} available characters.",
            err=True,
        )

    if as_json:
        rows = []
        for password in passwords:
            bits = estimate_entropy_bits(password, pool_size)
            rows.append({
                "password": password,
                "length": len(password),
                "entropy_bits": round(bits, 1),
                "strength": entropy_label(bits),
                "satisfied": len(password) == clamped,
            })
        click.echo(json.dumps(rows, indent=2))
        return

    for password in passwords:
        if show_strength:
            bits = estimate_entropy_bits(password, pool_size)
            click.echo(f"{password}  ({entropy_label(bits)}, ~{bits:.1f} bits)")
        else:
            click.echo(password)


def main() -> None:
    """
    Entry point for `python -m spgen`, `run_spgen.py` and the console script.
    """
    cli()
