"""Command line entry-point for coreference annotation and mention canonicalization."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, TextIO

import click

from .core.links import get_links
from .document.annotation import Document
from .document.io import document_from_json, document_to_json
from .errors import ConfigurationError, DocumentFormatError
from .pipeline.coref import CorefAnnotator
from .utils.config import ConfigManager, CorefAlgorithm, CorefConfig, Language
from .utils.logging import setup_logging

logger = logging.getLogger("coref_annotator.cli")


def _read_document(raw: str, from_text: bool, spacy_model: str) -> Document:
    """Parse raw CLI input into a Document."""
    if from_text:
        # spaCy is only needed for raw text input
        from .document.spacy_adapter import document_from_spacy, load_spacy_pipeline

        try:
            nlp = load_spacy_pipeline(spacy_model)
        except ConfigurationError as e:
            raise click.ClickException(str(e)) from e
        return document_from_spacy(nlp(raw))

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Input is not valid JSON: {e}") from e
    try:
        return document_from_json(data)
    except DocumentFormatError as e:
        raise click.ClickException(str(e)) from e


@click.command()
@click.option("--input", "-i", type=click.File("r"), default="-", help="Document file path (defaults to stdin)")
@click.option("--output", "-o", type=click.File("w"), default="-", help="Output destination (defaults to stdout)")
@click.option("--config", "-c", "config_path", type=click.Path(path_type=Path), default=None, help="YAML configuration file")
@click.option("--algorithm", type=click.Choice([a.value for a in CorefAlgorithm]), default=None, help="Override coref.algorithm")
@click.option("--language", type=click.Choice([lang.value for lang in Language]), default=None, help="Override coref.language")
@click.option("--from-text", is_flag=True, help="Treat input as raw text and annotate it with spaCy first")
@click.option("--spacy-model", default=None, help="spaCy model used with --from-text")
@click.option("--links", "include_links", is_flag=True, help="Include ordered mention-pair links per chain")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def main(
    input: TextIO,
    output: TextIO,
    config_path: Optional[Path],
    algorithm: Optional[str],
    language: Optional[str],
    from_text: bool,
    spacy_model: Optional[str],
    include_links: bool,
    verbose: bool,
) -> None:
    """Add coreference chains to a document and canonicalize its entity mentions."""

    manager = ConfigManager(config_path)
    setup_logging(level=manager.get("logging.level"), verbose=verbose)
    if algorithm:
        manager.set("coref.algorithm", algorithm)
    if language:
        manager.set("coref.language", language)

    try:
        annotator = CorefAnnotator(CorefConfig.from_manager(manager))
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    raw = input.read()
    if not raw.strip():
        raise click.ClickException("No input document supplied")

    document = _read_document(raw, from_text, spacy_model or manager.get("spacy.model"))
    annotator.annotate(document)

    if verbose:
        resolved = sum(1 for m in document.entity_mentions if m.canonical_entity_mention_index is not None)
        logger.info(f"Canonicalized {resolved} of {len(document.entity_mentions)} entity mentions")

    output_data = document_to_json(document)
    if include_links:
        output_data["links"] = [
            [list(first), list(second)] for first, second in get_links(document.coref_chains or {})
        ]
    json.dump(output_data, output, indent=2)
    output.write("\n")


if __name__ == "__main__":  # pragma: no cover
    main()
