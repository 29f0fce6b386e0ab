"""Flatten coreference chains into ordered mention-pair links."""

from __future__ import annotations

from typing import Mapping

from ..document.annotation import CorefChain

Position = tuple[int, int]


def get_links(chains: Mapping[int, CorefChain]) -> list[tuple[Position, Position]]:
    """
    Return ``(m1.position, m2.position)`` for every pair of mentions in the
    same chain where ``m1`` comes strictly before ``m2`` in textual order.
    """
    links: list[tuple[Position, Position]] = []
    for chain in chains.values():
        mentions = chain.mentions_in_textual_order()
        for first in mentions:
            for second in mentions:
                if CorefChain.compare(first, second) == -1:
                    links.append((first.position, second.position))
    return links
