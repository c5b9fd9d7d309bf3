"""Data models for interaction networks and their partitions.

An interaction network is held as a dense N x N weight matrix. Inputs are
small (tens to low hundreds of nodes), so every algorithm here works on
the matrix directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

import numpy as np
import pandas as pd

from ..exceptions import InputError, InvalidNetworkError, MissingColumnsError


@dataclass(frozen=True, eq=False)
class InteractionNetwork:
    """Immutable weighted graph over labelled nodes.

    ``weights[i, j] > 0`` means an interaction from node i to node j. For
    undirected networks the matrix is read symmetrically: an edge exists
    between i and j when either entry is positive, with weight
    ``max(weights[i, j], weights[j, i])``. The diagonal is ignored.
    """

    weights: np.ndarray
    labels: tuple[str, ...]
    directed: bool = False

    @classmethod
    def from_matrix(
        cls,
        matrix: Any,
        labels: Optional[Sequence[Any]] = None,
        directed: bool = False,
    ) -> "InteractionNetwork":
        """Build a network from an adjacency/weight matrix.

        Accepts anything ``numpy.asarray`` understands, including a
        ``pandas.DataFrame`` (whose index supplies the labels when none
        are given).

        Raises:
            InvalidNetworkError: If the matrix is not square, finite and
                non-negative.
        """
        if labels is None and isinstance(matrix, pd.DataFrame):
            labels = [str(v) for v in matrix.index]

        try:
            arr = np.array(matrix, dtype=float)
        except (TypeError, ValueError) as e:
            raise InvalidNetworkError(f"matrix is not numeric ({e})")

        if arr.size == 0:
            arr = arr.reshape(0, 0)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise InvalidNetworkError("matrix must be square", shape=arr.shape)
        if not np.all(np.isfinite(arr)):
            raise InvalidNetworkError("matrix contains non-finite values", shape=arr.shape)
        if np.any(arr < 0):
            raise InvalidNetworkError("matrix contains negative weights", shape=arr.shape)

        n = arr.shape[0]
        if labels is None:
            labels = [str(i + 1) for i in range(n)]
        if len(labels) != n:
            raise InvalidNetworkError(
                f"expected {n} labels, got {len(labels)}", shape=arr.shape
            )

        np.fill_diagonal(arr, 0.0)
        arr.setflags(write=False)
        return cls(weights=arr, labels=tuple(str(v) for v in labels), directed=directed)

    @classmethod
    def from_edges(cls, edges: Any, directed: bool = False) -> "InteractionNetwork":
        """Build a network from an edge list with ``from``/``to`` columns.

        An optional ``weight`` column is honoured; repeated pairs have
        their weights summed. Nodes are ordered by first appearance in
        ``from`` followed by ``to``.
        """
        table = pd.DataFrame(edges)
        missing = [c for c in ("from", "to") if c not in table.columns]
        if missing:
            raise MissingColumnsError("edge_list", missing, ["from", "to"])

        sources = table["from"].astype(str).to_numpy()
        targets = table["to"].astype(str).to_numpy()
        if "weight" in table.columns:
            weights = table["weight"].to_numpy(dtype=float)
        else:
            weights = np.ones(len(table))

        labels = list(pd.unique(np.concatenate([sources, targets])))
        index = {label: i for i, label in enumerate(labels)}

        matrix = np.zeros((len(labels), len(labels)))
        for src, tgt, w in zip(sources, targets, weights):
            if w < 0 or not np.isfinite(w):
                raise InputError(f"Edge {src}->{tgt} has invalid weight {w}")
            matrix[index[src], index[tgt]] += w
        if not directed:
            matrix = matrix + matrix.T

        return cls.from_matrix(matrix, labels=labels, directed=directed)

    @property
    def n_nodes(self) -> int:
        return int(self.weights.shape[0])

    @property
    def undirected_weights(self) -> np.ndarray:
        """Symmetric weight matrix, ``max(w_ij, w_ji)`` per pair."""
        return np.maximum(self.weights, self.weights.T)

    @property
    def adjacency(self) -> np.ndarray:
        """Boolean adjacency; symmetric unless the network is directed."""
        if self.directed:
            return self.weights > 0
        return self.undirected_weights > 0

    @property
    def n_edges(self) -> int:
        adj = self.adjacency
        if self.directed:
            return int(adj.sum())
        return int(np.triu(adj, k=1).sum())

    def degree(self) -> np.ndarray:
        """Number of incident edges per node (in + out when directed)."""
        adj = self.adjacency.astype(int)
        if self.directed:
            return adj.sum(axis=0) + adj.sum(axis=1)
        return adj.sum(axis=1)


@dataclass
class Partition:
    """A community assignment for every node plus its modularity."""

    membership: np.ndarray
    modularity: float
    method: str

    @property
    def n_communities(self) -> int:
        return int(np.unique(self.membership).size)

    def sizes(self) -> np.ndarray:
        """Community sizes ordered by community id."""
        _, counts = np.unique(self.membership, return_counts=True)
        return counts
