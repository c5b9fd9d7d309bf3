"""Community detection and modularity on weighted undirected networks.

All algorithms take a symmetric, non-negative weight matrix with a zero
diagonal and return a membership vector (community id per node, ids
numbered 0..k-1 in order of first appearance).
"""

from collections import defaultdict

import networkx as nx
import numpy as np

from ..logging_config import get_logger

logger = get_logger(__name__)


def relabel(membership) -> np.ndarray:
    """Renumber community ids to 0..k-1 in order of first appearance."""
    mapping: dict = {}
    out = np.empty(len(membership), dtype=int)
    for i, label in enumerate(membership):
        if label not in mapping:
            mapping[label] = len(mapping)
        out[i] = mapping[label]
    return out


def compute_modularity(weights: np.ndarray, membership) -> float:
    """Compute modularity Q = sum_c [L_c/m - (sigma_c/2m)^2].

    Where:
      L_c = total weight of edges within community c
      sigma_c = sum of weighted degrees of nodes in community c
      m = total edge weight (each undirected edge counted once)
    """
    w = np.asarray(weights, dtype=float)
    membership = np.asarray(membership)
    m = float(np.triu(w, k=1).sum())
    if m == 0:
        return 0.0

    degree = w.sum(axis=1)
    same = membership[:, None] == membership[None, :]
    e_in = float(np.triu(w * same, k=1).sum())

    sigma: dict = defaultdict(float)
    for node, deg in enumerate(degree):
        sigma[membership[node]] += deg

    four_m_sq = 4.0 * m * m
    null_term = sum(s * s for s in sigma.values()) / four_m_sq
    return e_in / m - null_term


# ── Louvain ─────────────────────────────────────────────────────────


def _phase1_local_moving(
    nodes: list[int],
    edge_weights: dict[tuple[int, int], float],
    degree: dict[int, float],
    m: float,
    max_passes: int = 20,
) -> tuple[dict[int, int], bool]:
    """Phase 1 of Louvain: greedily move nodes to maximize modularity.

    Each node is moved to the neighboring community that yields the
    largest positive modularity gain.  Iterates until no more moves
    improve modularity or *max_passes* is reached.

    Args:
        nodes: Sorted list of node identifiers in the current graph.
        edge_weights: Canonical (min,max) -> weight; (c, c) entries are
            self-loops carrying the internal weight of a coarsened node.
        degree: Weighted degree per node (sum(degrees) = 2*m).
        m: Total edge weight.
        max_passes: Safety limit on iteration count.

    Returns:
        (node_comm, improved) where *node_comm* maps each node to its
        community id and *improved* is True if any node was moved.
    """
    two_m = 2.0 * m

    node_comm: dict[int, int] = {n: i for i, n in enumerate(nodes)}
    sigma_tot: dict[int, float] = {i: degree.get(n, 0) for i, n in enumerate(nodes)}

    # Self-loops move with their node and never enter the gain
    neighbors: dict[int, dict[int, float]] = defaultdict(lambda: defaultdict(float))
    for (a, b), w in edge_weights.items():
        if a == b:
            continue
        neighbors[a][b] += w
        neighbors[b][a] += w

    any_moved = False
    for _pass in range(max_passes):
        moved = False
        for node in nodes:
            current_comm = node_comm[node]
            ki = degree.get(node, 0)

            comm_edge_weights: dict[int, float] = defaultdict(float)
            for neighbor, w in neighbors[node].items():
                comm_edge_weights[node_comm[neighbor]] += w

            ki_in_current = comm_edge_weights.get(current_comm, 0.0)

            sigma_current = sigma_tot.get(current_comm, 0) - ki
            remove_cost = ki_in_current / two_m - (sigma_current * ki) / (two_m * two_m)

            best_comm = current_comm
            best_gain = 0.0

            for comm_id, ki_in_target in sorted(comm_edge_weights.items()):
                if comm_id == current_comm:
                    continue

                sigma_target = sigma_tot.get(comm_id, 0)
                add_gain = ki_in_target / two_m - (sigma_target * ki) / (two_m * two_m)
                net_gain = add_gain - remove_cost

                if net_gain > best_gain + 1e-12:
                    best_gain = net_gain
                    best_comm = comm_id

            if best_comm != current_comm:
                sigma_tot[current_comm] = sigma_tot.get(current_comm, 0) - ki
                sigma_tot[best_comm] = sigma_tot.get(best_comm, 0) + ki

                node_comm[node] = best_comm
                moved = True
                any_moved = True

        if not moved:
            break

    return node_comm, any_moved


def _coarsen_graph(
    edge_weights: dict[tuple[int, int], float],
    degree: dict[int, float],
    node_comm: dict[int, int],
) -> tuple[dict[tuple[int, int], float], dict[int, float], list[int], dict[int, set[int]]]:
    """Phase 2 of Louvain: collapse communities into super-nodes.

    Each community becomes a single super-node named by its community
    id.  Edge weights between communities are summed; weight inside a
    community becomes a (c, c) self-loop.

    Returns:
        (new_edge_weights, new_degree, new_nodes, super_members)
        where super_members maps super-node -> set of member nodes.
    """
    communities: dict[int, set[int]] = defaultdict(set)
    for node, comm in node_comm.items():
        communities[comm].add(node)

    new_edge_weights: dict[tuple[int, int], float] = defaultdict(float)
    for (a, b), w in edge_weights.items():
        ca = node_comm[a]
        cb = node_comm[b]
        new_edge_weights[(min(ca, cb), max(ca, cb))] += w

    new_degree: dict[int, float] = {
        cid: sum(degree.get(n, 0) for n in members) for cid, members in communities.items()
    }

    return dict(new_edge_weights), new_degree, sorted(communities), dict(communities)


def louvain(weights: np.ndarray, max_passes: int = 20, max_coarsen: int = 10) -> np.ndarray:
    """Louvain community detection (Phase 1 + Phase 2).

    Two-phase algorithm:
      Phase 1, local moving: greedily move nodes to maximize modularity.
      Phase 2, coarsening: collapse communities into super-nodes.

    Repeats both phases until no further improvement is possible. Nodes
    are visited in index order, so results are deterministic for a given
    matrix (but not guaranteed to match other Louvain implementations).
    """
    w = np.asarray(weights, dtype=float)
    n = w.shape[0]
    if n == 0:
        return np.empty(0, dtype=int)

    nodes = list(range(n))
    edge_weights: dict[tuple[int, int], float] = {}
    rows, cols = np.nonzero(np.triu(w, k=1))
    for a, b in zip(rows.tolist(), cols.tolist()):
        edge_weights[(a, b)] = float(w[a, b])
    degree: dict[int, float] = {i: float(d) for i, d in enumerate(w.sum(axis=1))}

    m = sum(edge_weights.values())
    if m == 0:
        return np.arange(n)

    original_members: dict[int, set[int]] = {i: {i} for i in nodes}
    node_comm: dict[int, int] = {i: i for i in nodes}

    for level in range(max_coarsen):
        node_comm, improved = _phase1_local_moving(
            nodes, edge_weights, degree, m, max_passes=max_passes
        )
        logger.debug("Louvain level %d: %d nodes, improved=%s", level, len(nodes), improved)

        if not improved:
            break

        if len(set(node_comm.values())) == len(nodes):
            break

        new_edge_weights, new_degree, new_nodes, super_members = _coarsen_graph(
            edge_weights, degree, node_comm
        )

        if len(new_nodes) == len(nodes):
            break

        new_original_members: dict[int, set[int]] = {}
        for super_node, level_members in super_members.items():
            orig: set[int] = set()
            for level_node in level_members:
                orig.update(original_members[level_node])
            new_original_members[super_node] = orig

        original_members = new_original_members
        edge_weights = new_edge_weights
        degree = new_degree
        nodes = new_nodes
        node_comm = {node: node for node in nodes}

    membership = np.empty(n, dtype=int)
    for node, comm_id in node_comm.items():
        for orig_node in original_members[node]:
            membership[orig_node] = comm_id

    return relabel(membership)


# ── Walktrap ────────────────────────────────────────────────────────


def walktrap(weights: np.ndarray, steps: int = 4) -> np.ndarray:
    """Walktrap community detection (Pons & Latapy, 2005).

    Nodes are compared through the distribution of a random walk of
    length *steps* started from them:

        r_ij = || D^(-1/2) (P^t_i. - P^t_j.) ||

    Adjacent communities are merged greedily by the smallest increase in
    mean squared distance, Δσ = |C1||C2| / (|C1|+|C2|) · r² / n. The
    dendrogram is cut where modularity on the original weights peaks.
    Every node carries a self-loop so walks can stay put, as in the
    reference algorithm.
    """
    w = np.asarray(weights, dtype=float)
    n = w.shape[0]
    if n == 0:
        return np.empty(0, dtype=int)

    positive = w[w > 0]
    loop_weight = float(positive.mean()) if positive.size else 1.0
    walk = w + np.eye(n) * loop_weight
    degree = walk.sum(axis=1)

    transition = walk / degree[:, None]
    profile = np.linalg.matrix_power(transition, steps) / np.sqrt(degree)[None, :]

    vectors: dict[int, np.ndarray] = {i: profile[i].copy() for i in range(n)}
    sizes: dict[int, int] = {i: 1 for i in range(n)}
    membership = np.arange(n)
    linked: dict[int, set[int]] = {i: set(np.flatnonzero(w[i] > 0).tolist()) for i in range(n)}

    best_membership = membership.copy()
    best_q = compute_modularity(w, membership)
    next_id = n

    while True:
        best_pair = None
        best_delta = np.inf
        for c1 in sorted(linked):
            for c2 in sorted(linked[c1]):
                if c2 <= c1:
                    continue
                r2 = float(np.sum((vectors[c1] - vectors[c2]) ** 2))
                delta = sizes[c1] * sizes[c2] / (sizes[c1] + sizes[c2]) * r2 / n
                if delta < best_delta:
                    best_delta = delta
                    best_pair = (c1, c2)

        if best_pair is None:
            break

        c1, c2 = best_pair
        total = sizes[c1] + sizes[c2]
        vectors[next_id] = (sizes[c1] * vectors.pop(c1) + sizes[c2] * vectors.pop(c2)) / total
        sizes[next_id] = total
        del sizes[c1], sizes[c2]

        neighbours = (linked.pop(c1) | linked.pop(c2)) - {c1, c2}
        for other in neighbours:
            linked[other] -= {c1, c2}
            linked[other].add(next_id)
        linked[next_id] = neighbours

        membership = np.where((membership == c1) | (membership == c2), next_id, membership)
        next_id += 1

        q = compute_modularity(w, membership)
        if q > best_q + 1e-12:
            best_q = q
            best_membership = membership.copy()

    return relabel(best_membership)


# ── Fast greedy ─────────────────────────────────────────────────────


def fast_greedy(weights: np.ndarray) -> np.ndarray:
    """Greedy agglomerative modularity optimisation (Clauset-Newman-Moore)."""
    w = np.asarray(weights, dtype=float)
    n = w.shape[0]
    graph = nx.Graph()
    graph.add_nodes_from(range(n))
    rows, cols = np.nonzero(np.triu(w, k=1))
    for a, b in zip(rows.tolist(), cols.tolist()):
        graph.add_edge(a, b, weight=float(w[a, b]))

    communities = nx.algorithms.community.greedy_modularity_communities(graph, weight="weight")

    membership = np.empty(n, dtype=int)
    for cid, members in enumerate(communities):
        for node in members:
            membership[node] = cid
    return relabel(membership)
