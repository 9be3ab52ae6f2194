"""Chain resolution — group loose segments into continuous chains.

Endpoints closer than the matching distance are treated as one vertex. A
chain follows vertices shared by exactly two segment ends; any other vertex
(a dead end or a junction) terminates it.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field

import numpy as np
from scipy.spatial import cKDTree

from framestitch.kernel.config import KernelConfig
from framestitch.kernel.geometry import Point
from framestitch.kernel.model import Model, Route, originate, walk_paths
from framestitch.kernel.paths import Arc, PathSegment

logger = logging.getLogger(__name__)


@dataclass
class ChainLink:
    route: Route
    segment: PathSegment
    reversed: bool = False

    @property
    def start(self) -> Point:
        a, b = self.segment.endpoints
        return b if self.reversed else a

    @property
    def end(self) -> Point:
        a, b = self.segment.endpoints
        return a if self.reversed else b

    def points(self, arc_max_angle: float = 5.0) -> list[Point]:
        pts = self.segment.sample(arc_max_angle)
        return pts[::-1] if self.reversed else pts


@dataclass
class Chain:
    links: list[ChainLink] = field(default_factory=list)
    endless: bool = False

    @property
    def path_length(self) -> float:
        return sum(link.segment.length for link in self.links)

    def points(self, arc_max_angle: float = 5.0) -> list[Point]:
        """Vertices along the chain, shared vertices listed once."""
        result: list[Point] = []
        for link in self.links:
            pts = link.points(arc_max_angle)
            result.extend(pts if not result else pts[1:])
        return result


def _union_find_root(parent: list[int], x: int) -> int:
    while parent[x] != x:
        parent[x] = parent[parent[x]]
        x = parent[x]
    return x


def _union_find_merge(parent: list[int], rank: list[int], a: int, b: int) -> None:
    ra, rb = _union_find_root(parent, a), _union_find_root(parent, b)
    if ra == rb:
        return
    if rank[ra] < rank[rb]:
        ra, rb = rb, ra
    parent[rb] = ra
    if rank[ra] == rank[rb]:
        rank[ra] += 1


def find_chains(model: Model, point_matching_distance: float) -> list[Chain]:
    """Find all chains in a model.

    The model is not modified; links hold absolute-coordinate copies of the
    segments together with the route they came from.
    """
    flat = originate(model.clone())
    chains: list[Chain] = []
    routes: list[Route] = []
    segments: list[PathSegment] = []
    for walked in walk_paths(flat):
        seg = walked.segment
        if isinstance(seg, Arc) and seg.is_circle:
            chains.append(Chain([ChainLink(walked.route, seg)], endless=True))
            continue
        routes.append(walked.route)
        segments.append(seg)

    n = len(segments)
    if n == 0:
        return chains

    # Endpoint 2i is segment i's start, 2i+1 its end
    endpoints = np.array([p for seg in segments for p in seg.endpoints], dtype=np.float64)
    parent = list(range(2 * n))
    rank = [0] * (2 * n)
    for i, j in cKDTree(endpoints).query_pairs(r=point_matching_distance):
        _union_find_merge(parent, rank, i, j)
    vertex = [_union_find_root(parent, i) for i in range(2 * n)]

    ends_at: dict[int, list[int]] = {}
    for idx, v in enumerate(vertex):
        ends_at.setdefault(v, []).append(idx)

    visited = [False] * n

    def walk(entry: int) -> Chain:
        chain = Chain()
        current = entry
        while True:
            seg_idx = current // 2
            visited[seg_idx] = True
            chain.links.append(ChainLink(routes[seg_idx], segments[seg_idx], reversed=current % 2 == 1))
            exit_end = current ^ 1
            at_vertex = ends_at[vertex[exit_end]]
            if vertex[exit_end] == vertex[entry]:
                chain.endless = len(at_vertex) == 2
                return chain
            if len(at_vertex) != 2:
                return chain
            following = at_vertex[0] if at_vertex[1] == exit_end else at_vertex[1]
            if visited[following // 2]:
                return chain
            current = following

    # Open chains start at dead ends and junctions
    for seg_idx in range(n):
        for entry in (2 * seg_idx, 2 * seg_idx + 1):
            if not visited[seg_idx] and len(ends_at[vertex[entry]]) != 2:
                chains.append(walk(entry))

    # Whatever is left lies on closed loops
    for seg_idx in range(n):
        if not visited[seg_idx]:
            chains.append(walk(2 * seg_idx))

    logger.debug("Found %d chains in %d segments", len(chains), n)
    return chains


def chain_to_model(chain: Chain) -> Model:
    """Flat model of the chain's segments keyed "0".."n-1"."""
    return Model(paths={str(i): copy.deepcopy(link.segment) for i, link in enumerate(chain.links)})


def cleanup_via_chains(model: Model, config: KernelConfig | None = None) -> Model:
    """Rebuild a model from its chains, dropping short artifact chains.

    Surviving chains become children named ``chain_<index>``.
    """
    config = config or KernelConfig()
    result = Model()
    chains = find_chains(model, config.cleanup_chain_distance)
    for index, chain in enumerate(chains):
        if chain.path_length < config.min_chain_length or len(chain.links) < config.min_chain_links:
            logger.debug(
                "Dropping chain %d (%d links, length %.3f)",
                index, len(chain.links), chain.path_length,
            )
            continue
        result.models[f"chain_{index}"] = chain_to_model(chain)
    return result
