"""
flatmerkle CLI - build trees and produce or check proofs from the shell.

Hashes are 0x-prefixed hex. Trees and proofs are read and written as the
JSON documents defined in flatmerkle.core.serialization.
"""

import json
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from flatmerkle.core.config import load_config
from flatmerkle.core.errors import MerkleError
from flatmerkle.core.serialization import (
    dump_document,
    load_document,
    multiproof_from_document,
    multiproof_to_document,
    proof_to_document,
    tree_to_document,
)
from flatmerkle.core.tree import (
    build_tree,
    get_multiproof,
    get_proof,
    is_valid_tree,
    process_multiproof,
    process_proof,
    render_tree,
)
from flatmerkle.crypto import NODE_HASHES, bytes_to_hex, get_node_hash, hex_to_bytes
from flatmerkle.utils.logger import get_logger, setup_logging

logger = get_logger("cli")


def _read_document(kind: str, path: str):
    try:
        return load_document(kind, Path(path).read_text())
    except ValidationError as e:
        raise click.ClickException(f"Invalid {kind} document {path}: {e}")


def _parse_hex(value: str, name: str) -> bytes:
    if not isinstance(value, str):
        raise click.BadParameter(f"{value!r} is not a hex string", param_hint=name)
    try:
        return hex_to_bytes(value)
    except ValueError:
        raise click.BadParameter(f"{value!r} is not hex", param_hint=name)


class MerkleCommand(click.Command):
    """Turns MerkleError into a clean CLI failure."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except MerkleError as e:
            logger.debug(f"{e.kind}: {e}")
            raise click.ClickException(f"{e.kind}: {e}")


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--config", "config_path", default=None, help="Path to a dotenv config file")
@click.option(
    "--hash",
    "hash_algorithm",
    type=click.Choice(sorted(NODE_HASHES), case_sensitive=False),
    default=None,
    help="Node hash (defaults to config, then sha256)",
)
@click.version_option(version="0.1.0")
@click.pass_context
def cli(ctx, debug, config_path, hash_algorithm):
    """Flat-array Merkle trees, proofs and multiproofs"""
    config = load_config(config_path)

    level = logging.DEBUG if debug else getattr(logging, config.log_level)
    setup_logging(
        level=level,
        log_dir=str(config.log_dir) if config.log_dir else None,
        log_to_file=config.log_to_file,
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["hash_algorithm"] = (hash_algorithm or config.hash_algorithm).lower()
    # an explicit --hash beats the algorithm recorded in proof documents
    ctx.obj["hash_override"] = hash_algorithm.lower() if hash_algorithm else None


# =============================================================================
# Tree Commands
# =============================================================================


@cli.command("build", cls=MerkleCommand)
@click.argument("leaves", nargs=-1)
@click.option("--file", "leaves_file", type=click.Path(exists=True), help="JSON list of hex leaves")
@click.pass_context
def build(ctx, leaves, leaves_file):
    """Build a tree from hex leaves"""
    values = list(leaves)
    if leaves_file:
        try:
            data = json.loads(Path(leaves_file).read_text())
        except json.JSONDecodeError as e:
            raise click.ClickException(f"Leaves file {leaves_file} is not valid JSON: {e}")
        if not isinstance(data, list):
            raise click.ClickException("Leaves file must contain a JSON list")
        values.extend(data)

    hash_algorithm = ctx.obj["hash_algorithm"]
    tree = build_tree(
        [_parse_hex(v, f"leaf[{i}]") for i, v in enumerate(values)],
        get_node_hash(hash_algorithm),
    )
    logger.debug(f"Built tree with {len(values)} leaves, root {bytes_to_hex(tree[0])}")
    click.echo(dump_document(tree_to_document(tree, hash_algorithm)))


@cli.command("validate", cls=MerkleCommand)
@click.argument("tree_file", type=click.Path(exists=True))
@click.pass_context
def validate(ctx, tree_file):
    """Check that every internal node matches its children"""
    document = _read_document("tree", tree_file)
    valid = is_valid_tree(document.to_tree(), get_node_hash(document.hash_algorithm))
    click.echo("valid" if valid else "invalid")
    if not valid:
        ctx.exit(1)


@cli.command("render", cls=MerkleCommand)
@click.argument("tree_file", type=click.Path(exists=True))
def render(tree_file):
    """Print the tree structure"""
    document = _read_document("tree", tree_file)
    click.echo(render_tree(document.to_tree()))


# =============================================================================
# Proof Commands
# =============================================================================


@cli.command("proof", cls=MerkleCommand)
@click.argument("tree_file", type=click.Path(exists=True))
@click.argument("index", type=int)
def proof(tree_file, index):
    """Produce the sibling path of the leaf at tree INDEX"""
    document = _read_document("tree", tree_file)
    tree = document.to_tree()
    siblings = get_proof(tree, index)
    click.echo(dump_document(
        proof_to_document(tree[index], siblings, tree[0], document.hash_algorithm)
    ))


@cli.command("verify", cls=MerkleCommand)
@click.argument("proof_file", type=click.Path(exists=True))
@click.option("--root", default=None, help="Expected root; exit 1 on mismatch")
@click.pass_context
def verify(ctx, proof_file, root):
    """Recompute the root from a proof document

    Uses the document's hash algorithm unless --hash is given.
    """
    document = _read_document("proof", proof_file)
    computed = process_proof(
        hex_to_bytes(document.leaf),
        document.proof_bytes(),
        get_node_hash(ctx.obj["hash_override"] or document.hash_algorithm),
    )
    click.echo(bytes_to_hex(computed))
    _check_root(ctx, computed, root or document.root)


@cli.command("multiproof", cls=MerkleCommand)
@click.argument("tree_file", type=click.Path(exists=True))
@click.argument("indices", nargs=-1, type=int)
def multiproof(tree_file, indices):
    """Produce a multiproof for the leaves at tree INDICES"""
    document = _read_document("tree", tree_file)
    tree = document.to_tree()
    mp = get_multiproof(tree, indices)
    click.echo(dump_document(
        multiproof_to_document(mp, tree[0], document.hash_algorithm)
    ))


@cli.command("verify-multi", cls=MerkleCommand)
@click.argument("multiproof_file", type=click.Path(exists=True))
@click.option("--root", default=None, help="Expected root; exit 1 on mismatch")
@click.pass_context
def verify_multi(ctx, multiproof_file, root):
    """Recompute the root from a multiproof document

    Uses the document's hash algorithm unless --hash is given.
    """
    document = _read_document("multiproof", multiproof_file)
    computed = process_multiproof(
        multiproof_from_document(document),
        get_node_hash(ctx.obj["hash_override"] or document.hash_algorithm),
    )
    click.echo(bytes_to_hex(computed))
    _check_root(ctx, computed, root or document.root)


def _check_root(ctx, computed: bytes, expected) -> None:
    if expected is None:
        return
    if computed != _parse_hex(expected, "root"):
        click.echo(f"root mismatch: expected {expected}", err=True)
        ctx.exit(1)


# =============================================================================
# Benchmark Command
# =============================================================================


@cli.command("bench")
@click.option("--size", "sizes", multiple=True, type=int, help="Leaf count (repeatable)")
@click.pass_context
def bench(ctx, sizes):
    """Benchmark construction and proofs"""
    from flatmerkle.utils.benchmark import run_all_benchmarks

    config = ctx.obj["config"]
    run_all_benchmarks(
        sizes or config.benchmark_sizes,
        ctx.obj["hash_algorithm"],
        echo=click.echo,
    )


def main():
    cli(obj={})


if __name__ == "__main__":
    sys.exit(main())
